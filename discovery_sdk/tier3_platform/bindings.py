"""
discovery_sdk.tier3_platform.bindings
───────────────────────────────────────
Service binding selection. Given the bound services the platform hands the
application, pick the one that represents the service registry.

A binding qualifies when its label equals the registry tag, when the tag is
one of its tags, or when it carries the registry service label. The first
qualifying binding in the provided order wins.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from discovery_sdk.tier0_core.logging import get_logger

log = get_logger(__name__)

REGISTRY_TAG = "eureka"
REGISTRY_SERVICE_LABEL = "p-service-registry"


# ── Domain model ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ServiceBinding:
    """One bound backing service, as the platform describes it."""
    name: str
    label: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    plan: str | None = None
    credentials: dict[str, Any] = field(default_factory=dict)

    def matches(self, tag: str) -> bool:
        wanted = tag.lower()
        if self.label and self.label.lower() in (wanted, REGISTRY_SERVICE_LABEL):
            return True
        return any(t.lower() == wanted for t in self.tags)


@dataclass(frozen=True)
class ServiceBindingInfo:
    """Connection details of the registry binding."""
    uri: str
    client_id: str | None = None
    client_secret: str | None = None
    access_token_uri: str | None = None

    @property
    def has_oauth_credentials(self) -> bool:
        return bool(self.client_id)

    @classmethod
    def from_binding(cls, binding: ServiceBinding) -> ServiceBindingInfo | None:
        creds = binding.credentials
        uri = creds.get("uri")
        if not uri:
            return None
        return cls(
            uri=str(uri),
            client_id=creds.get("client_id"),
            client_secret=creds.get("client_secret"),
            access_token_uri=creds.get("access_token_uri"),
        )


# ── Selection ─────────────────────────────────────────────────────────────────

def select_binding(
    bindings: Iterable[ServiceBinding],
    tag: str = REGISTRY_TAG,
) -> ServiceBindingInfo | None:
    """
    Return the registry binding, or None when nothing qualifies.

    Usage:
        info = select_binding(read_service_bindings())
        if info is not None:
            ...
    """
    for binding in bindings:
        if not binding.matches(tag):
            continue
        info = ServiceBindingInfo.from_binding(binding)
        if info is None:
            log.warning("registry.binding.skipped", binding=binding.name, reason="no uri")
            continue
        log.debug("registry.binding.selected", binding=binding.name, uri=info.uri)
        return info
    return None


__all__ = [
    "REGISTRY_TAG",
    "REGISTRY_SERVICE_LABEL",
    "ServiceBinding",
    "ServiceBindingInfo",
    "select_binding",
]
