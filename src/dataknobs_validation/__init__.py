"""Composable validation engine.

This package evaluates declared rules against values and objects and reports
every failure in one structured result:
- ``Validator``: ordered rule chain for one value, optionally field-scoped
- ``ValidationResult``: validity flag, flat error list and per-field errors
- ``merge``/``merge_all``: order-preserving combination of results
- ``ValidationBuilder``: per-property validations merged into one report
- ``catalog``: ready-made validators for common field types
"""

from .builder import ValidationBuilder, force_rescope, read_property, rescope
from .exceptions import ConfigurationError, InvalidArgumentError, ValidationEngineError
from .result import ValidationResult, format_field_error, merge, merge_all
from .settings import RescopePolicy, ValidationSettings, load_settings
from .validator import ValidationRule, Validator

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Result types
    "ValidationResult",
    "format_field_error",
    "merge",
    "merge_all",
    # Rule chains
    "ValidationRule",
    "Validator",
    # Composition
    "ValidationBuilder",
    "RescopePolicy",
    "rescope",
    "force_rescope",
    "read_property",
    # Settings
    "ValidationSettings",
    "load_settings",
    # Exceptions
    "ValidationEngineError",
    "InvalidArgumentError",
    "ConfigurationError",
]
