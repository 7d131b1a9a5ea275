"""
discovery_sdk
─────────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from discovery_sdk.tier0_core.logging import get_logger
from discovery_sdk.tier0_core.errors import (
    DiscoveryError,
    ConfigurationError,
    ValidationError,
)
from discovery_sdk.tier0_core.config import (
    Configuration,
    DiscoverySettings,
    get_settings,
)
from discovery_sdk.tier0_core.options import (
    ClientOptions,
    InstanceOptions,
    RegistrationMethod,
)

from discovery_sdk.tier1_runtime.validate import bind_section

from discovery_sdk.tier3_platform.bindings import (
    ServiceBinding,
    ServiceBindingInfo,
    select_binding,
)
from discovery_sdk.tier3_platform.environment import (
    PlatformIdentity,
    read_platform_identity,
    read_service_bindings,
)
from discovery_sdk.tier3_platform.instance_identity import InstanceIdentity, compose_identity
from discovery_sdk.tier3_platform.metadata import enrich_metadata
from discovery_sdk.tier3_platform.configurer import (
    ResolvedOptions,
    configure,
    resolve_client_options,
    resolve_instance_options,
)

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "DiscoveryError", "ConfigurationError", "ValidationError",
    # config
    "Configuration", "DiscoverySettings", "get_settings",
    # options
    "ClientOptions", "InstanceOptions", "RegistrationMethod",
    # binding
    "bind_section",
    # service bindings
    "ServiceBinding", "ServiceBindingInfo", "select_binding",
    # platform
    "PlatformIdentity", "read_platform_identity", "read_service_bindings",
    # identity & metadata
    "InstanceIdentity", "compose_identity", "enrich_metadata",
    # resolution
    "ResolvedOptions", "configure", "resolve_client_options", "resolve_instance_options",
]
