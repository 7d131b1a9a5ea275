"""
discovery_sdk.tier3_platform.instance_identity
────────────────────────────────────────────────
Derives the host, ports and instance id an instance advertises to the
registry, for one of two registration methods:

  hostname — advertise the configured host and ports; the instance id is
             ``<hostname>:<instance guid>``.
  route    — advertise the first platform route on the standard web ports
             (TLS terminates at the platform router); the instance id is
             ``<route>:<instance guid>``.

Only platform identity and static instance settings are consulted.
"""
from __future__ import annotations

from dataclasses import dataclass

from discovery_sdk.tier0_core.errors import ConfigurationError
from discovery_sdk.tier0_core.options import RegistrationMethod
from discovery_sdk.tier3_platform.environment import PlatformIdentity

ROUTE_NON_SECURE_PORT = 80
ROUTE_SECURE_PORT = 443


@dataclass(frozen=True)
class InstanceIdentity:
    host_name: str
    non_secure_port: int
    secure_port: int
    instance_id: str | None


def _instance_id(host: str, platform: PlatformIdentity, fallback: str | None) -> str | None:
    if not platform.instance_guid:
        return fallback
    return f"{host}:{platform.instance_guid}"


def compose_identity(
    method: RegistrationMethod | str | None,
    platform: PlatformIdentity,
    host_name: str,
    non_secure_port: int,
    secure_port: int,
    instance_id: str | None = None,
) -> InstanceIdentity:
    """
    Compose the advertised identity. ``instance_id`` is the statically
    configured id, kept when the platform supplies no instance GUID.

    Raises ConfigurationError for route registration when the platform
    reports no route. Hostname registration never fails.
    """
    method = RegistrationMethod.parse(method)

    if method is RegistrationMethod.ROUTE:
        route = platform.primary_uri
        if not route:
            raise ConfigurationError(
                "no_routable_uri",
                "Route registration requires at least one application route.",
                application=platform.application_name,
            )
        return InstanceIdentity(
            host_name=route,
            non_secure_port=ROUTE_NON_SECURE_PORT,
            secure_port=ROUTE_SECURE_PORT,
            instance_id=_instance_id(route, platform, instance_id),
        )

    return InstanceIdentity(
        host_name=host_name,
        non_secure_port=non_secure_port,
        secure_port=secure_port,
        instance_id=_instance_id(host_name, platform, instance_id),
    )


__all__ = ["InstanceIdentity", "compose_identity", "ROUTE_NON_SECURE_PORT", "ROUTE_SECURE_PORT"]
