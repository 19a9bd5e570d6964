"""Engine settings with file and environment overrides.

Settings can come from three sources, applied in order so that later
sources win:

1. Built-in defaults
2. A YAML or JSON file (top level, or under a ``settings`` section)
3. Environment variables prefixed with ``DATAKNOBS_VALIDATION_``

Example:
    ```yaml
    settings:
      rescope: force
      warn_on_scope_mismatch: false
    ```

    ```bash
    export DATAKNOBS_VALIDATION_RESCOPE=preserve
    ```
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DATAKNOBS_VALIDATION_"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class RescopePolicy(str, Enum):
    """How a builder attributes sub-results that are already field-scoped.

    PRESERVE keeps whatever field names the sub-result used, even when they
    differ from the builder's property name. FORCE files every message of the
    sub-result under the builder's property name.

    Unscoped sub-results are rescoped under the property name in both modes.
    """

    PRESERVE = "preserve"
    FORCE = "force"

    @classmethod
    def parse(cls, value: Union[str, RescopePolicy]) -> RescopePolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid rescope policy: {value}",
                context={"value": value, "allowed": [p.value for p in cls]}
            ) from e


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Invalid boolean for '{key}': {value}",
        context={"key": key, "value": value}
    )


@dataclass(frozen=True)
class ValidationSettings:
    """Engine-wide defaults.

    Attributes:
        rescope: Policy used by builders created without an explicit one
        warn_on_scope_mismatch: Log a warning when a builder entry reports
            errors under field names other than its own property name
    """

    rescope: RescopePolicy = RescopePolicy.PRESERVE
    warn_on_scope_mismatch: bool = True

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "rescope", RescopePolicy.parse(self.rescope))
        object.__setattr__(
            self,
            "warn_on_scope_mismatch",
            _parse_bool("warn_on_scope_mismatch", self.warn_on_scope_mismatch),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: ValidationSettings | None = None) -> ValidationSettings:
        """Create settings from a dictionary.

        Args:
            data: Settings values, either flat or under a ``settings`` key
            base: Settings to override; defaults are used when None

        Returns:
            ValidationSettings instance

        Raises:
            ConfigurationError: If the dictionary holds unknown keys
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings must be a mapping, got {type(data).__name__}"
            )
        if "settings" in data and isinstance(data["settings"], dict):
            data = data["settings"]

        allowed = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ConfigurationError(
                f"Unknown settings: {', '.join(unknown)}",
                context={"unknown": unknown, "allowed": sorted(allowed)}
            )

        return (base or cls()).with_overrides(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path], base: ValidationSettings | None = None) -> ValidationSettings:
        """Load settings from a YAML or JSON file.

        Args:
            path: Path to a .yaml, .yml or .json file
            base: Settings to override; defaults are used when None

        Returns:
            ValidationSettings instance

        Raises:
            ConfigurationError: If the file is missing, unsupported or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(
                f"Settings file not found: {path}",
                context={"path": str(path)}
            )

        suffix = path.suffix.lower()
        with open(path) as f:
            try:
                if suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(f)
                elif suffix == ".json":
                    data = json.load(f)
                else:
                    raise ConfigurationError(
                        f"Unsupported settings file format: {suffix}",
                        context={"path": str(path)}
                    )
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise ConfigurationError(
                    f"Failed to parse settings file {path}: {e}",
                    context={"path": str(path)}
                ) from e

        if not data:
            return base or cls()
        return cls.from_dict(data, base=base)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, base: ValidationSettings | None = None) -> ValidationSettings:
        """Apply environment variable overrides.

        ``<PREFIX><FIELD>`` overrides the field of the same (lowercased) name,
        e.g. ``DATAKNOBS_VALIDATION_RESCOPE=force``.

        Args:
            prefix: Environment variable prefix
            base: Settings to override; defaults are used when None

        Returns:
            ValidationSettings instance
        """
        overrides = {}
        for f in fields(cls):
            env_var = f"{prefix}{f.name.upper()}"
            if env_var in os.environ:
                overrides[f.name] = os.environ[env_var]
        return (base or cls()).with_overrides(**overrides)

    def with_overrides(self, **changes: Any) -> ValidationSettings:
        """Return a copy with the given fields replaced."""
        if not changes:
            return self
        return replace(self, **changes)


def load_settings(path: Union[str, Path, None] = None, env_prefix: str = ENV_PREFIX) -> ValidationSettings:
    """Compose defaults, an optional settings file and environment overrides.

    Args:
        path: Optional YAML or JSON settings file
        env_prefix: Environment variable prefix

    Returns:
        ValidationSettings instance
    """
    settings = ValidationSettings()
    sources = ["defaults"]

    if path is not None:
        settings = ValidationSettings.from_file(path, base=settings)
        sources.append(str(path))

    env_settings = ValidationSettings.from_env(env_prefix, base=settings)
    if env_settings != settings:
        sources.append("environment")

    logger.info(f"Loaded validation settings from {', '.join(sources)}")
    return env_settings
