"""
discovery_sdk.tier3_platform.metadata
───────────────────────────────────────
Adds platform identity entries to an instance's registry metadata.
"""
from __future__ import annotations

from collections.abc import Mapping

from discovery_sdk.tier3_platform.environment import PlatformIdentity

INSTANCE_ID = "instanceId"
CF_APP_GUID = "cfAppGuid"
CF_INSTANCE_INDEX = "cfInstanceIndex"
ZONE = "zone"
UNKNOWN_ZONE = "unknown"


def enrich_metadata(metadata: Mapping[str, str], platform: PlatformIdentity) -> dict[str, str]:
    """
    Return a new mapping: every entry of ``metadata`` plus the reserved
    platform keys, which overwrite any existing value. Zone is always set,
    to ``UNKNOWN_ZONE`` when the platform does not report one. The GUID
    entries are left out when the platform has no GUID to report.
    """
    enriched = dict(metadata)
    if platform.instance_guid:
        enriched[INSTANCE_ID] = platform.instance_guid
    app_guid = platform.application_id or platform.instance_guid
    if app_guid:
        enriched[CF_APP_GUID] = app_guid
    enriched[CF_INSTANCE_INDEX] = str(platform.instance_index)
    enriched[ZONE] = platform.metadata.get(ZONE) or UNKNOWN_ZONE
    return enriched


__all__ = [
    "INSTANCE_ID",
    "CF_APP_GUID",
    "CF_INSTANCE_INDEX",
    "ZONE",
    "UNKNOWN_ZONE",
    "enrich_metadata",
]
