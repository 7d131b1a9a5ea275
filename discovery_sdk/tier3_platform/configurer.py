"""
discovery_sdk.tier3_platform.configurer
─────────────────────────────────────────
Resolves the final registry client and instance options from three sources:

  1. static options bound from local configuration (the base),
  2. the registry service binding, if one is bound,
  3. the platform identity, if running on the managed platform.

Precedence:
  - a binding always supplies the registry URL (``<uri>/eureka/``) and, when
    it carries them, the OAuth client credentials;
  - an explicitly configured app name beats the platform application name;
  - host, ports and instance id follow the registration method (see
    instance_identity); metadata gains the platform entries (see metadata).

Every function here is pure: inputs are never mutated, fresh option values
are returned, and the same inputs always give equal outputs.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from discovery_sdk.tier0_core.config import (
    DISCOVERY_CONFIGURATION_PREFIX,
    Configuration,
    get_settings,
)
from discovery_sdk.tier0_core.logging import get_logger
from discovery_sdk.tier0_core.options import ClientOptions, InstanceOptions, RegistrationMethod
from discovery_sdk.tier1_runtime.validate import bind_section
from discovery_sdk.tier3_platform.bindings import ServiceBindingInfo, select_binding
from discovery_sdk.tier3_platform.environment import (
    PlatformIdentity,
    read_platform_identity,
    read_service_bindings,
)
from discovery_sdk.tier3_platform.instance_identity import compose_identity
from discovery_sdk.tier3_platform.metadata import enrich_metadata

log = get_logger(__name__)

EUREKA_URI_SUFFIX = "/eureka/"


@dataclass(frozen=True)
class ResolvedOptions:
    client: ClientOptions
    instance: InstanceOptions


# ── Client options ────────────────────────────────────────────────────────────

def resolve_client_options(
    config: Configuration,
    binding: ServiceBindingInfo | None,
    options: ClientOptions,
) -> ClientOptions:
    """Apply the registry binding, if any, on top of the static client options."""
    if binding is None:
        return options

    update: dict[str, object] = {"service_url": binding.uri + EUREKA_URI_SUFFIX}
    if binding.has_oauth_credentials:
        update["client_id"] = binding.client_id
        update["client_secret"] = binding.client_secret
        update["access_token_uri"] = binding.access_token_uri

    resolved = options.model_copy(update=update)
    log.info(
        "registry.binding.applied",
        service_url=resolved.service_url,
        client_id=resolved.client_id,
        client_secret=resolved.client_secret,
    )
    return resolved


# ── Instance options ──────────────────────────────────────────────────────────

def registration_method(config: Configuration, options: InstanceOptions) -> RegistrationMethod:
    """
    The instance's own setting wins; otherwise
    ``spring:cloud:discovery:registrationMethod``; otherwise hostname.
    """
    if options.registration_method is not None:
        return options.registration_method
    configured = config.get(f"{DISCOVERY_CONFIGURATION_PREFIX}:registrationMethod")
    return RegistrationMethod.parse(configured)


def resolve_instance_options(
    config: Configuration,
    binding: ServiceBindingInfo | None,
    platform: PlatformIdentity | None,
    options: InstanceOptions,
) -> InstanceOptions:
    """Apply platform identity, if any, on top of the static instance options."""
    if platform is None:
        return options

    method = registration_method(config, options)
    identity = compose_identity(
        method,
        platform,
        options.host_name,
        options.non_secure_port,
        options.secure_port,
        instance_id=options.instance_id,
    )
    log.debug(
        "instance.identity.composed",
        method=method.value,
        host_name=identity.host_name,
        instance_id=identity.instance_id,
    )

    return options.model_copy(
        update={
            "app_name": options.app_name or platform.application_name,
            "registration_method": method,
            "host_name": identity.host_name,
            "non_secure_port": identity.non_secure_port,
            "secure_port": identity.secure_port,
            "instance_id": identity.instance_id,
            "metadata_map": MappingProxyType(enrich_metadata(options.metadata_map, platform)),
        }
    )


# ── One-call entry point ──────────────────────────────────────────────────────

def configure(
    config: Configuration,
    environ: Mapping[str, str] | None = None,
) -> ResolvedOptions:
    """
    Bind static options from ``config``, read the platform environment and
    return fully resolved client and instance options.

    Usage:
        resolved = configure(Configuration(app_settings))
        client = RegistryClient(resolved.client, resolved.instance)
    """
    settings = get_settings()
    env = os.environ if environ is None else environ

    client = bind_section(config, settings.client_prefix, ClientOptions)
    instance = bind_section(config, settings.instance_prefix, InstanceOptions)

    platform = read_platform_identity(env)
    binding = select_binding(read_service_bindings(env), settings.registry_tag)
    if platform is None:
        log.debug("platform.identity.absent")

    return ResolvedOptions(
        client=resolve_client_options(config, binding, client),
        instance=resolve_instance_options(config, binding, platform, instance),
    )


__all__ = [
    "EUREKA_URI_SUFFIX",
    "ResolvedOptions",
    "resolve_client_options",
    "resolve_instance_options",
    "registration_method",
    "configure",
]
