"""
discovery_sdk.tier0_core.errors
────────────────────────────────
Error taxonomy for registration option resolution. Every error carries a
stable machine-readable code, a message safe to show an operator, and an
internal detail string.

Resolution itself is total over valid inputs; these errors surface only when
upstream data breaks its contract (unreadable platform descriptors, a route
registration with no route, a configuration section that cannot be bound).
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class DiscoveryError(Exception):
    """
    Base class for all SDK errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface in startup output
    - detail: internal context
    """

    code: str = "discovery_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Registry configuration could not be resolved.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class ConfigurationError(DiscoveryError):
    """Inputs are present but cannot produce a coherent registration."""
    code = "configuration_error"


class ValidationError(DiscoveryError):
    """A configuration section failed to bind into an options model."""
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


__all__ = ["DiscoveryError", "ConfigurationError", "ValidationError"]
