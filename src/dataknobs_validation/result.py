"""Validation result type and its merge algebra.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence


FIELD_ERROR_FORMAT = "{field}: {message}"


def format_field_error(field_name: str, message: str) -> str:
    """Render a field-scoped message the way it appears in the flat error list."""
    return FIELD_ERROR_FORMAT.format(field=field_name, message=message)


@dataclass
class ValidationResult:
    """Structured outcome of validating a value or an object.

    ``is_valid`` is an explicit flag owned by whoever produces the result.
    Adding an error does not flip it; producers that record a failure are
    expected to set it to False themselves (``Validator`` and
    ``ValidationBuilder`` do). Merging derives the flag as the AND of the
    inputs' flags, independent of their error counts.

    Every failure message is kept in ``errors`` in evaluation order. Messages
    attributed to a named field are also kept in ``field_errors`` under that
    name, and appear in ``errors`` formatted as ``"<field>: <message>"``.
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    field_errors: dict[str, list[str]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.is_valid

    def add_error(self, message: str | None) -> ValidationResult:
        """Append an unscoped error message.

        Blank messages (None, empty or whitespace only) are ignored.

        Args:
            message: Error message to add

        Returns:
            Self for chaining
        """
        if message is not None and message.strip():
            self.errors.append(message)
        return self

    def add_field_error(self, field_name: str, message: str) -> ValidationResult:
        """Append an error message attributed to a field.

        The message is stored under ``field_name`` and its formatted form is
        appended to ``errors``. New field names are added after existing ones.

        Args:
            field_name: Name of the field the message belongs to
            message: Error message to add

        Returns:
            Self for chaining
        """
        self.field_errors.setdefault(field_name, []).append(message)
        self.errors.append(format_field_error(field_name, message))
        return self

    def get_field_errors(self, field_name: str) -> Sequence[str]:
        """Get the messages recorded for a field.

        Args:
            field_name: Field name

        Returns:
            A read-only copy of the field's messages, empty for an unknown field
        """
        return tuple(self.field_errors.get(field_name, ()))

    def get_first_field_error(self, field_name: str) -> str | None:
        """Get the first message recorded for a field, if any."""
        messages = self.field_errors.get(field_name)
        return messages[0] if messages else None

    def to_error_dictionary(self) -> Mapping[str, tuple[str, ...]]:
        """Snapshot field errors for presentation layers.

        Returns:
            Read-only mapping of field name to a tuple of its messages. Later
            changes to this result are not reflected in the snapshot.
        """
        return MappingProxyType(
            {name: tuple(messages) for name, messages in self.field_errors.items()}
        )

    @property
    def unscoped_errors(self) -> list[str]:
        """Entries of ``errors`` that are not the formatted form of a field error."""
        pending = Counter(
            format_field_error(name, message)
            for name, messages in self.field_errors.items()
            for message in messages
        )
        unscoped = []
        for error in self.errors:
            if pending[error] > 0:
                pending[error] -= 1
            else:
                unscoped.append(error)
        return unscoped

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Combine this result with another one (see ``merge``)."""
        return merge(self, other)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for serialization."""
        return {
            "valid": self.is_valid,
            "errors": list(self.errors),
            "field_errors": {
                name: list(messages) for name, messages in self.field_errors.items()
            },
        }

    @classmethod
    def success(cls) -> ValidationResult:
        """Create an empty, valid result."""
        return cls(is_valid=True)

    @classmethod
    def failure(
        cls,
        errors: Iterable[str] | None = None,
        field_errors: Mapping[str, Iterable[str]] | None = None,
    ) -> ValidationResult:
        """Create an invalid result populated through the mutators.

        Args:
            errors: Unscoped messages, added first
            field_errors: Field name to messages, added after the unscoped ones

        Returns:
            Failed ValidationResult
        """
        result = cls(is_valid=False)
        for message in errors or ():
            result.add_error(message)
        for field_name, messages in (field_errors or {}).items():
            for message in messages:
                result.add_field_error(field_name, message)
        return result


def merge(first: ValidationResult, second: ValidationResult) -> ValidationResult:
    """Combine two results into a new one, preserving order.

    The merged result is valid only when both inputs are. Errors of ``first``
    come before errors of ``second``. Field errors start from ``first``'s
    mapping; ``second``'s messages are appended to keys that already exist,
    and keys new to ``first`` are added after all of its keys.

    Neither input is modified.

    Args:
        first: Result whose messages come first
        second: Result whose messages come second

    Returns:
        New ValidationResult with combined state
    """
    field_errors = {name: list(messages) for name, messages in first.field_errors.items()}
    for name, messages in second.field_errors.items():
        field_errors.setdefault(name, []).extend(messages)

    return ValidationResult(
        is_valid=first.is_valid and second.is_valid,
        errors=first.errors + second.errors,
        field_errors=field_errors,
    )


def merge_all(results: Iterable[ValidationResult] | None) -> ValidationResult:
    """Left-fold ``merge`` over results, starting from an empty valid result.

    Args:
        results: Results to combine; may be empty

    Returns:
        The combined ValidationResult

    Raises:
        InvalidArgumentError: If ``results`` is None or holds something other
            than a ValidationResult
    """
    if results is None:
        raise InvalidArgumentError(
            "results cannot be None",
            context={"operation": "merge_all"}
        )

    merged = ValidationResult.success()
    for index, result in enumerate(results):
        if not isinstance(result, ValidationResult):
            raise InvalidArgumentError(
                f"Expected ValidationResult at position {index}, got {type(result).__name__}",
                context={"operation": "merge_all", "index": index}
            )
        merged = merge(merged, result)

    return merged
