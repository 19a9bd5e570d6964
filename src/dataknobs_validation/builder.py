"""Object-level composition of per-property validations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar, Union

from .exceptions import InvalidArgumentError
from .result import ValidationResult, merge
from .settings import RescopePolicy, ValidationSettings
from .validator import Validator

logger = logging.getLogger(__name__)

T = TypeVar("T")

PropertyValidation = Callable[[T], ValidationResult]


def read_property(entity: Any, property_name: str) -> Any:
    """Read a property from a mapping by key, or from any other object by attribute.

    A key missing from a mapping reads as None, so optional entries reach
    the validator as absent values. A missing attribute raises
    ``AttributeError``, since objects declare their properties.
    """
    if isinstance(entity, Mapping):
        return entity.get(property_name)
    return getattr(entity, property_name)


class ValidationBuilder(Generic[T]):
    """Validate an object by running one validation per property.

    Validations run in the order their properties were registered, and their
    results are merged into one report in that order. A property whose
    validation reports only unscoped errors has those errors filed under the
    property name, so every failing property surfaces under its own key.

    Example:
        ```python
        builder = (
            ValidationBuilder[User]()
            .add_validation("Email", lambda u: email_validator().validate(u.email))
            .add_validator("Age", range_validator(18, 120), lambda u: u.age)
        )
        result = builder.validate(user)
        ```
    """

    def __init__(
        self,
        rescope: Union[RescopePolicy, str, None] = None,
        settings: ValidationSettings | None = None,
    ):
        """Initialize an empty builder.

        Args:
            rescope: How pre-scoped sub-results are attributed. Defaults to
                the policy from ``settings``.
            settings: Engine settings; read from the environment when None
        """
        self.settings = settings or ValidationSettings.from_env()
        self.rescope = RescopePolicy.parse(rescope) if rescope is not None else self.settings.rescope
        self._validations: dict[str, PropertyValidation[T]] = {}

    def add_validation(self, property_name: str, validation: PropertyValidation[T]) -> ValidationBuilder[T]:
        """Register the validation for a property (fluent API).

        Registering a property twice replaces its validation but keeps its
        original position.

        Args:
            property_name: Key the property's errors are reported under
            validation: Callable taking the entity and returning a result

        Returns:
            Self for chaining

        Raises:
            InvalidArgumentError: If the name is empty or validation is not callable
        """
        if not property_name:
            raise InvalidArgumentError("property_name cannot be empty")
        if not callable(validation):
            raise InvalidArgumentError(
                f"Validation for '{property_name}' must be callable, "
                f"got {type(validation).__name__}",
                context={"property_name": property_name}
            )

        if property_name in self._validations:
            logger.warning(f"Replacing validation for property '{property_name}'")
        self._validations[property_name] = validation
        return self

    def add_validator(
        self,
        property_name: str,
        validator: Validator[Any],
        accessor: Callable[[T], Any] | None = None,
    ) -> ValidationBuilder[T]:
        """Register a validator applied to one property value (fluent API).

        Args:
            property_name: Key the property's errors are reported under
            validator: Validator for the property value
            accessor: Extracts the value from the entity. Defaults to reading
                ``property_name`` as a mapping key or attribute: a missing
                key validates None, a missing attribute raises
                ``AttributeError`` from ``validate``.

        Returns:
            Self for chaining
        """
        get_value = accessor or (lambda entity: read_property(entity, property_name))
        return self.add_validation(
            property_name, lambda entity: validator.validate(get_value(entity))
        )

    @property
    def property_names(self) -> list[str]:
        return list(self._validations)

    def __len__(self) -> int:
        return len(self._validations)

    def validate(self, entity: T) -> ValidationResult:
        """Run every registered validation and merge the results.

        Args:
            entity: Object to validate

        Returns:
            ValidationResult valid only if every property result is valid
        """
        result = ValidationResult.success()

        for property_name, validation in self._validations.items():
            property_result = self._scope(property_name, validation(entity))
            result = merge(result, property_result)

        return result

    def _scope(self, property_name: str, property_result: ValidationResult) -> ValidationResult:
        """Attribute a property's result to the property name where required."""
        if not property_result.errors:
            return property_result

        if not property_result.field_errors:
            logger.debug(
                f"Rescoping {len(property_result.errors)} unscoped errors under '{property_name}'"
            )
            return rescope(property_result, property_name)

        foreign = [name for name in property_result.field_errors if name != property_name]
        if not foreign:
            if property_result.unscoped_errors and self.rescope is RescopePolicy.FORCE:
                return force_rescope(property_result, property_name)
            return property_result

        if self.rescope is RescopePolicy.FORCE:
            return force_rescope(property_result, property_name)

        if self.settings.warn_on_scope_mismatch:
            logger.warning(
                f"Validation for property '{property_name}' reported errors under "
                f"{', '.join(repr(name) for name in foreign)}; keeping those keys"
            )
        return property_result


def rescope(result: ValidationResult, field_name: str) -> ValidationResult:
    """File every message in ``result.errors`` under ``field_name``.

    Args:
        result: Result whose messages are all unscoped
        field_name: Field to attribute the messages to

    Returns:
        New ValidationResult with the same validity flag
    """
    rescoped = ValidationResult(is_valid=result.is_valid)
    for message in result.errors:
        rescoped.add_field_error(field_name, message)
    return rescoped


def force_rescope(result: ValidationResult, field_name: str) -> ValidationResult:
    """File every message of ``result`` under ``field_name``.

    Field-scoped messages come first in key order, followed by unscoped ones.

    Args:
        result: Result to re-key
        field_name: Field to attribute the messages to

    Returns:
        New ValidationResult with the same validity flag
    """
    rescoped = ValidationResult(is_valid=result.is_valid)
    for messages in result.field_errors.values():
        for message in messages:
            rescoped.add_field_error(field_name, message)
    for message in result.unscoped_errors:
        rescoped.add_field_error(field_name, message)
    return rescoped
