"""
discovery_sdk.tier1_runtime.validate
──────────────────────────────────────
Binding of configuration sections into typed option models via Pydantic v2.
Raises the SDK ValidationError (not raw Pydantic errors) so startup failures
always name the offending configuration keys.
"""
from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from discovery_sdk.tier0_core.config import Configuration
from discovery_sdk.tier0_core.errors import ValidationError

T = TypeVar("T", bound=BaseModel)


def validate_input(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a Pydantic model.
    Raises discovery_sdk ValidationError (not Pydantic's) on failure.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ValidationError(
            code="validation_error",
            user_message=f"Configuration could not be bound to {model.__name__}.",
            fields=fields,
        ) from exc


def bind_section(config: Configuration, key: str, model: Type[T]) -> T:
    """
    Bind the configuration section at ``key`` into ``model``. A missing
    section binds to the model's defaults.

    Usage:
        client = bind_section(config, "eureka:client", ClientOptions)
    """
    section = config.get_section(key)
    try:
        return validate_input(model, section.to_dict())
    except ValidationError as exc:
        exc.metadata["section"] = section.path
        raise


__all__ = ["validate_input", "bind_section"]
