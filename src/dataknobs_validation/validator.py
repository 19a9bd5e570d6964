"""Rule chains evaluated against a single value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .result import ValidationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationRule(Generic[T]):
    """A predicate over a value plus the message reported when it fails."""

    predicate: Callable[[T], bool]
    message: str

    def evaluate(self, value: T) -> bool:
        """Return True when the value satisfies the predicate."""
        return bool(self.predicate(value))


class Validator(Generic[T]):
    """Ordered chain of rules for one value, optionally scoped to a field.

    Every rule is evaluated on every call, in the order it was added, so a
    single call reports all failures at once. Rules therefore need to be safe
    on any value the type allows: the usual pattern is to pass blank or
    missing values and leave absence to a dedicated "required" rule.

    When ``field_name`` is set, failures are recorded as field errors under
    that name; otherwise they are recorded as unscoped errors.

    Example:
        ```python
        age = (
            Validator[int]("Age")
            .add_rule(lambda v: v >= 0, "Age cannot be negative")
            .add_rule(lambda v: v <= 120, "Age cannot exceed 120")
        )
        age.validate(130).field_errors  # {"Age": ["Age cannot exceed 120"]}
        ```
    """

    def __init__(self, field_name: str | None = None):
        """Initialize an empty rule chain.

        Args:
            field_name: Field that failures are attributed to. None or an
                empty string leaves failures unscoped.
        """
        self.field_name = field_name or None
        self._rules: list[ValidationRule[T]] = []

    def add_rule(self, predicate: Callable[[T], bool], message: str) -> Validator[T]:
        """Append a rule to the chain (fluent API).

        Args:
            predicate: Returns True when the value is acceptable
            message: Message reported when the predicate returns False

        Returns:
            Self for chaining
        """
        self._rules.append(ValidationRule(predicate, message))
        return self

    @property
    def rules(self) -> tuple[ValidationRule[T], ...]:
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def for_field(self, field_name: str | None) -> Validator[T]:
        """Copy this validator with the same rules under another field name.

        Args:
            field_name: Field name for the copy, or None for an unscoped copy

        Returns:
            New Validator; this one is left unchanged
        """
        scoped: Validator[T] = Validator(field_name)
        scoped._rules = list(self._rules)
        return scoped

    def validate(self, value: T) -> ValidationResult:
        """Evaluate every rule against a value.

        Exceptions raised by a predicate are not caught: a predicate that
        cannot handle a value is a defect, not a validation failure.

        Args:
            value: Value to validate

        Returns:
            Fresh ValidationResult holding one message per failed rule
        """
        result = ValidationResult.success()

        for rule in self._rules:
            if rule.evaluate(value):
                continue
            result.is_valid = False
            if self.field_name:
                result.add_field_error(self.field_name, rule.message)
            else:
                result.errors.append(rule.message)

        if not result.is_valid:
            logger.debug(
                f"Validator for {self.field_name or '<unscoped>'} failed "
                f"{len(result.errors)} of {len(self._rules)} rules"
            )

        return result

    def __call__(self, value: T) -> ValidationResult:
        return self.validate(value)

    def __repr__(self) -> str:
        return f"Validator(field_name={self.field_name!r}, rules={len(self._rules)})"
