"""
discovery_sdk.tier0_core.options
─────────────────────────────────
Typed, immutable registry options. ``ClientOptions`` describes how to talk to
the registry; ``InstanceOptions`` describes what this instance registers.

Both bind from configuration sections whose keys are matched
case-insensitively against either the field name or the camelCase
configuration key (``serviceUrl``, ``vipAddress``, ``metadataMap`` ...).
Resolution never mutates these models; it returns copies. The metadata map
is a read-only view, so resolved options never alias a caller's dict.
"""
from __future__ import annotations

import socket
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

DEFAULT_SERVICE_URL = "http://localhost:8761/eureka/"
DEFAULT_NON_SECURE_PORT = 80
DEFAULT_SECURE_PORT = 443

# Never bound from configuration; a service binding is their only source.
_BINDING_ONLY_FIELDS = frozenset({"client_id", "client_secret", "access_token_uri"})


class RegistrationMethod(str, Enum):
    """How an instance advertises its host and port on the managed platform."""

    ROUTE = "route"
    HOSTNAME = "hostname"

    @classmethod
    def parse(cls, value: str | RegistrationMethod | None) -> RegistrationMethod:
        """Case-insensitive match; anything unrecognised means HOSTNAME."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == cls.ROUTE.value:
            return cls.ROUTE
        return cls.HOSTNAME


class _BoundOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def _key_lookup(cls) -> dict[str, str]:
        lookup: dict[str, str] = {}
        for name, info in cls.model_fields.items():
            lookup[name.lower()] = name
            if info.alias:
                lookup[info.alias.lower()] = name
        return lookup

    @classmethod
    def _prepare(cls, data: Mapping[str, Any]) -> Mapping[str, Any]:
        return data

    @model_validator(mode="before")
    @classmethod
    def _match_keys(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = cls._prepare(data)
        lookup = cls._key_lookup()
        matched: dict[str, Any] = {}
        for key, value in data.items():
            name = lookup.get(str(key).lower())
            if name is not None:
                matched[name] = value
        return matched


class ClientOptions(_BoundOptions):
    """Registry client settings, bound from ``eureka:client``."""

    # ── eurekaServer sub-section ──────────────────────────────────────────────
    proxy_host: str | None = Field(default=None, alias="proxyHost")
    proxy_port: int = Field(default=0, alias="proxyPort")
    proxy_user_name: str | None = Field(default=None, alias="proxyUserName")
    proxy_password: str | None = Field(default=None, alias="proxyPassword")
    should_gzip_content: bool = Field(default=True, alias="shouldGZipContent")
    server_connect_timeout_seconds: int = Field(default=5, alias="connectTimeoutSeconds")

    # ── Fetch / register behaviour ────────────────────────────────────────────
    allow_redirects: bool = Field(default=False, alias="allowRedirects")
    should_disable_delta: bool = Field(default=False, alias="shouldDisableDelta")
    should_filter_only_up_instances: bool = Field(
        default=True, alias="shouldFilterOnlyUpInstances"
    )
    should_fetch_registry: bool = Field(default=True, alias="shouldFetchRegistry")
    registry_refresh_single_vip_address: str | None = Field(
        default=None, alias="registryRefreshSingleVipAddress"
    )
    should_on_demand_update_status_change: bool = Field(
        default=True, alias="shouldOnDemandUpdateStatusChange"
    )
    should_register_with_eureka: bool = Field(default=True, alias="shouldRegisterWithEureka")
    registry_fetch_interval_seconds: int = Field(default=30, alias="registryFetchIntervalSeconds")
    instance_info_replication_interval_seconds: int = Field(
        default=30, alias="instanceInfoReplicationIntervalSeconds"
    )
    service_url: str = Field(default=DEFAULT_SERVICE_URL, alias="serviceUrl")

    # ── OAuth (only ever sourced from a service binding) ──────────────────────
    client_id: str | None = None
    client_secret: str | None = None
    access_token_uri: str | None = None

    @classmethod
    def _key_lookup(cls) -> dict[str, str]:
        lookup = super()._key_lookup()
        return {key: name for key, name in lookup.items() if name not in _BINDING_ONLY_FIELDS}

    @classmethod
    def _prepare(cls, data: Mapping[str, Any]) -> Mapping[str, Any]:
        # eurekaServer:* keys live directly on the client options
        flat: dict[str, Any] = {}
        for key, value in data.items():
            if str(key).lower() == "eurekaserver" and isinstance(value, Mapping):
                flat.update(value)
            else:
                flat[key] = value
        return flat

    @property
    def service_urls(self) -> list[str]:
        """All configured registry URLs, in order."""
        return [url.strip() for url in self.service_url.split(",") if url.strip()]


class InstanceOptions(_BoundOptions):
    """Instance registration settings, bound from ``eureka:instance``."""

    instance_id: str | None = Field(default=None, alias="instanceId")
    app_name: str | None = Field(default=None, alias="appName")
    app_group_name: str | None = Field(default=None, alias="appGroup")
    instance_enabled_on_init: bool = Field(default=False, alias="instanceEnabledOnInit")
    host_name: str = Field(default_factory=socket.gethostname, alias="hostname")

    non_secure_port: int = Field(default=DEFAULT_NON_SECURE_PORT, alias="port")
    non_secure_port_enabled: bool = Field(default=True, alias="nonSecurePortEnabled")
    secure_port: int = Field(default=DEFAULT_SECURE_PORT, alias="securePort")
    secure_port_enabled: bool = Field(default=False, alias="securePortEnabled")

    lease_expiration_duration_seconds: int = Field(
        default=90, alias="leaseExpirationDurationInSeconds"
    )
    lease_renewal_interval_seconds: int = Field(
        default=30, alias="leaseRenewalIntervalInSeconds"
    )

    virtual_host_name: str | None = Field(default=None, alias="vipAddress")
    secure_virtual_host_name: str | None = Field(default=None, alias="secureVipAddress")
    asg_name: str | None = Field(default=None, alias="asgName")

    status_page_url_path: str = Field(default="/Status", alias="statusPageUrlPath")
    status_page_url: str | None = Field(default=None, alias="statusPageUrl")
    home_page_url_path: str = Field(default="/", alias="homePageUrlPath")
    home_page_url: str | None = Field(default=None, alias="homePageUrl")
    health_check_url_path: str = Field(default="/healthcheck", alias="healthCheckUrlPath")
    health_check_url: str | None = Field(default=None, alias="healthCheckUrl")
    secure_health_check_url: str | None = Field(default=None, alias="secureHealthCheckUrl")

    metadata_map: Mapping[str, str] = Field(
        default_factory=dict, alias="metadataMap", validate_default=True
    )
    registration_method: RegistrationMethod | None = Field(
        default=None, alias="registrationMethod"
    )

    @field_validator("registration_method", mode="before")
    @classmethod
    def _parse_method(cls, v: Any) -> RegistrationMethod | None:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return RegistrationMethod.parse(v)

    @field_validator("metadata_map", mode="before")
    @classmethod
    def _stringify_metadata(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return {str(key): str(value) for key, value in v.items()}
        return v

    @field_validator("metadata_map")
    @classmethod
    def _freeze_metadata(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @field_serializer("metadata_map")
    def _dump_metadata(self, v: Mapping[str, str]) -> dict[str, str]:
        return dict(v)


__all__ = [
    "DEFAULT_SERVICE_URL",
    "RegistrationMethod",
    "ClientOptions",
    "InstanceOptions",
]
