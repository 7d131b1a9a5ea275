"""
discovery_sdk.tier3_platform.environment
──────────────────────────────────────────
Platform identity and service bindings, read from the environment the
managed platform injects:

  VCAP_APPLICATION   — application name, routes, instance/app GUIDs
  VCAP_SERVICES      — bound services, keyed by service label
  CF_INSTANCE_GUID   — fallback for the instance GUID
  CF_INSTANCE_INDEX  — fallback for the instance index

Absence of VCAP_APPLICATION means the process is not on the platform and
``read_platform_identity`` returns None.
"""
from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from discovery_sdk.tier0_core.errors import ConfigurationError
from discovery_sdk.tier3_platform.bindings import ServiceBinding


# ── Domain model ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlatformIdentity:
    """What the platform says about this application instance."""
    application_name: str
    routable_uris: tuple[str, ...] = field(default_factory=tuple)
    instance_guid: str | None = None
    instance_index: int = 0
    application_id: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def primary_uri(self) -> str | None:
        return self.routable_uris[0] if self.routable_uris else None


# ── Readers ──────────────────────────────────────────────────────────────────

_METADATA_KEYS = ("space_name", "space_id", "organization_name", "application_version")


def _load_json(environ: Mapping[str, str], key: str) -> Any:
    raw = environ.get(key)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            "malformed_platform_environment",
            f"{key} is not valid JSON.",
            detail=f"{key}: {exc}",
        ) from exc


def _as_index(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        index = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            "malformed_platform_environment",
            "Instance index is not an integer.",
            detail=f"instance index: {value!r}",
        ) from exc
    if index < 0:
        raise ConfigurationError(
            "malformed_platform_environment",
            "Instance index is negative.",
            detail=f"instance index: {index}",
        )
    return index


def read_platform_identity(environ: Mapping[str, str] | None = None) -> PlatformIdentity | None:
    """Return the platform identity, or None when not running on the platform."""
    env = os.environ if environ is None else environ
    app = _load_json(env, "VCAP_APPLICATION")
    if not isinstance(app, Mapping):
        return None

    uris = app.get("application_uris") or app.get("uris") or []
    index = app.get("instance_index")
    if index is None:
        index = env.get("CF_INSTANCE_INDEX")

    return PlatformIdentity(
        application_name=app.get("application_name") or app.get("name") or "",
        routable_uris=tuple(str(u) for u in uris),
        instance_guid=app.get("instance_id") or env.get("CF_INSTANCE_GUID") or None,
        instance_index=_as_index(index),
        application_id=app.get("application_id"),
        metadata={
            key: str(app[key]) for key in _METADATA_KEYS if app.get(key) is not None
        },
    )


def read_service_bindings(environ: Mapping[str, str] | None = None) -> list[ServiceBinding]:
    """Flatten VCAP_SERVICES into bindings, in document order."""
    env = os.environ if environ is None else environ
    services = _load_json(env, "VCAP_SERVICES")
    if not isinstance(services, Mapping):
        return []

    bindings: list[ServiceBinding] = []
    for label, entries in services.items():
        for entry in entries or []:
            bindings.append(
                ServiceBinding(
                    name=entry.get("name") or label,
                    label=entry.get("label") or label,
                    tags=tuple(entry.get("tags") or ()),
                    plan=entry.get("plan"),
                    credentials=dict(entry.get("credentials") or {}),
                )
            )
    return bindings


__all__ = ["PlatformIdentity", "read_platform_identity", "read_service_bindings"]
