# src/jsonds/plugins/config_base.py
"""Base classes for typed plugin configurations.

This module provides base classes that plugins inherit from to get:
- Strict validation (reject unknown fields)
- Factory methods with clear error messages
- Common validation patterns (path handling, etc.)

Example usage:
    class JSONLSinkConfig(PathConfig):
        encoding: str = "utf-8"

    cfg = JSONLSinkConfig.from_dict(config)
    path = cfg.path  # Direct access, fails fast if missing
"""

from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ValidationError, field_validator


class PluginConfigError(Exception):
    """Raised when plugin configuration is invalid."""


class PluginConfig(BaseModel):
    """Base class for typed plugin configurations.

    All plugin configs should inherit from this class.
    """

    model_config = {"extra": "forbid"}

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create config from dict with clear error on validation failure.

        Raises:
            PluginConfigError: If configuration is invalid.
        """
        try:
            return cls(**config)
        except ValidationError as e:
            raise PluginConfigError(
                f"Invalid configuration for {cls.__name__}: {e}"
            ) from e


class PathConfig(PluginConfig):
    """Base for configs that include file paths."""

    path: str

    @field_validator("path")
    @classmethod
    def validate_path_not_empty(cls, v: str) -> str:
        """Validate that path is not empty or whitespace-only."""
        if not v or not v.strip():
            raise ValueError("path cannot be empty")
        return v

    def resolved_path(self) -> Path:
        """The configured path with a leading ~ expanded."""
        return Path(self.path).expanduser()
