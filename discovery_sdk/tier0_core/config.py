"""
discovery_sdk.tier0_core.config
────────────────────────────────
Two layers of configuration:

- ``DiscoverySettings``: typed SDK settings layered .env → environment
  variables (log level/format, registry tag, configuration namespace).
- ``Configuration``: a read-only, case-insensitive view over an already
  parsed application configuration tree. Sections are addressed with
  ``:`` or ``.`` separated keys, e.g. ``eureka:client`` or
  ``spring.cloud.discovery``.

Minimal stack: pydantic-settings + python-dotenv
"""
from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DISCOVERY_CONFIGURATION_PREFIX = "spring:cloud:discovery"


class DiscoverySettings(BaseSettings):
    """
    SDK-level settings. All env vars are prefixed with DISCOVERY_.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="DISCOVERY_LOG_LEVEL")
    log_format: str = Field(default="json", alias="DISCOVERY_LOG_FORMAT")

    # ── Registry binding ──────────────────────────────────────────────────────
    registry_tag: str = Field(default="eureka", alias="DISCOVERY_REGISTRY_TAG")
    config_namespace: str = Field(default="eureka", alias="DISCOVERY_CONFIG_NAMESPACE")

    @field_validator("log_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()

    @property
    def client_prefix(self) -> str:
        return f"{self.config_namespace}:client"

    @property
    def instance_prefix(self) -> str:
        return f"{self.config_namespace}:instance"


@lru_cache(maxsize=1)
def get_settings() -> DiscoverySettings:
    """
    Return the singleton SDK settings. Cached after first call.
    Call _reset_settings() in tests to pick up new env vars.
    """
    return DiscoverySettings()


def _reset_settings() -> None:
    """For tests — clear the settings cache."""
    get_settings.cache_clear()


# ── Hierarchical configuration view ───────────────────────────────────────────

_SEPARATORS = re.compile(r"[:.]")


def _split_key(key: str) -> list[str]:
    return [part for part in _SEPARATORS.split(key) if part]


def _child(node: Any, name: str) -> Any:
    if not isinstance(node, Mapping):
        return None
    if name in node:
        return node[name]
    lowered = name.lower()
    for key, value in node.items():
        if str(key).lower() == lowered:
            return value
    return None


class Configuration:
    """
    Case-insensitive view over a nested mapping.

    Usage:
        config = Configuration({"eureka": {"client": {"serviceUrl": "..."}}})
        config.get("eureka:client:serviceUrl")
        config.get_section("eureka.client").to_dict()
    """

    def __init__(self, data: Mapping[str, Any] | None = None, path: str = "") -> None:
        self._data: Mapping[str, Any] = data if data is not None else {}
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in _split_key(key):
            node = _child(node, part)
            if node is None:
                return None
        return node

    def get(self, key: str, default: Any = None) -> Any:
        """Return the scalar at ``key``, or ``default`` when missing or a section."""
        value = self._lookup(key)
        if value is None or isinstance(value, Mapping):
            return default
        return value

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def get_section(self, key: str) -> Configuration:
        """Return the sub-tree at ``key``; an empty section when missing."""
        value = self._lookup(key)
        path = ":".join(filter(None, [self._path, *_split_key(key)]))
        if not isinstance(value, Mapping):
            return Configuration({}, path)
        return Configuration(value, path)

    def exists(self) -> bool:
        return bool(self._data)

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of this section, safe to hand to a binder."""
        return copy.deepcopy(dict(self._data))

    def __repr__(self) -> str:
        return f"Configuration(path={self._path!r}, keys={list(self._data)!r})"


__all__ = [
    "DISCOVERY_CONFIGURATION_PREFIX",
    "DiscoverySettings",
    "get_settings",
    "Configuration",
]
