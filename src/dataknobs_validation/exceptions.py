"""Exception hierarchy for the validation engine.

Validation failures are never raised: they are reported inside a
``ValidationResult``. The exceptions here signal misuse of the engine
itself (programming or configuration faults) and are meant to fail fast.

Example:
    ```python
    from dataknobs_validation.exceptions import InvalidArgumentError

    raise InvalidArgumentError(
        "results cannot be None",
        context={"operation": "merge_all"}
    )
    ```
"""

from typing import Any, Dict


class ValidationEngineError(Exception):
    """Base exception for all validation engine faults.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (both are supported)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class InvalidArgumentError(ValidationEngineError, ValueError):
    """Raised when the engine is called with arguments it cannot accept.

    Common scenarios include:
    - ``merge_all`` invoked with ``None`` instead of an iterable
    - An empty property name registered on a builder
    - Contradictory bounds passed to a catalog factory

    Example:
        ```python
        raise InvalidArgumentError(
            "min_length cannot be greater than max_length",
            context={"min_length": 10, "max_length": 5}
        )
        ```
    """

    pass


class ConfigurationError(ValidationEngineError):
    """Raised when validation settings are invalid or cannot be loaded.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown settings key",
            context={"key": "rescop", "allowed": ["rescope"]}
        )
        ```
    """

    pass
