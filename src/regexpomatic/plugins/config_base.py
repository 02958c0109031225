# src/regexpomatic/plugins/config_base.py
"""Base class for typed plugin configurations.

Plugin configs inherit from PluginConfig to get:
- Strict validation (reject unknown fields)
- Immutability after construction
- A factory method that turns pydantic errors into InvalidConfigError

Example usage:
    class RuleConfig(PluginConfig):
        parse: list[str]
        tags: dict[str, str] = {}

    cfg = RuleConfig.from_dict(raw)  # raises PluginConfigError on bad input
"""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ValidationError

from regexpomatic.contracts.errors import InvalidConfigError


class PluginConfigError(InvalidConfigError):
    """Raised when plugin configuration fails schema validation."""

    pass


class PluginConfig(BaseModel):
    """Base class for typed plugin configurations."""

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> Self:
        """Create config from a mapping with a clear error on validation failure.

        Args:
            config: Mapping of configuration values.

        Returns:
            Validated configuration instance.

        Raises:
            PluginConfigError: If configuration is invalid.
        """
        if not isinstance(config, Mapping):
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: config must be a mapping, got {type(config).__name__}.")

        try:
            return cls.model_validate(dict(config))
        except ValidationError as e:
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e
