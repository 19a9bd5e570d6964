"""Pre-built validators for common field types.

Each factory returns a plain ``Validator`` assembled through ``add_rule``,
so the results can be extended with more rules or reused under another
field name via ``Validator.for_field``.

Apart from the explicit "required" rules, every rule passes on blank or
missing input. A field that is both empty and malformed therefore reports a
single "is required" message rather than one message per rule.

Example:
    ```python
    from dataknobs_validation.catalog import email_validator, password_validator

    email_validator().validate("not-an-email").errors
    # ['Email: Invalid email format']

    password_validator().validate("weak").field_errors["Password"]
    # ['Password must be at least 8 characters long',
    #  'Password must contain at least one uppercase letter',
    #  'Password must contain at least one number',
    #  'Password must contain at least one special character']
    ```
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from re import Pattern as RegexPattern
from typing import Any, Union
from urllib.parse import urlparse

from .exceptions import InvalidArgumentError
from .validator import Validator

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
NAME_PATTERN = re.compile(r"[a-zA-Z\s\-']+")
DIGITS_PATTERN = re.compile(r"[0-9]+")
ZIP_CODE_PATTERN = re.compile(r"[0-9]{5}(-[0-9]{4})?")
ALPHANUMERIC_PATTERN = re.compile(r"[a-zA-Z0-9]+")
IPV4_OCTET = r"(25[0-5]|2[0-4][0-9]|1[0-9]{2}|[1-9]?[0-9])"
IPV4_PATTERN = re.compile(rf"({IPV4_OCTET}\.){{3}}{IPV4_OCTET}")
USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_\-]+")
POSTAL_CODE_PATTERN = re.compile(r"[A-Za-z][0-9][A-Za-z][ \-]?[0-9][A-Za-z][0-9]")
HEX_COLOR_PATTERN = re.compile(r"#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

CARD_SEPARATORS = re.compile(r"[\s\-]")
CARD_MIN_DIGITS = 13
CARD_MAX_DIGITS = 19

Number = Union[int, float, Decimal]


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def _matches(pattern: RegexPattern[str]):
    """Rule predicate: blank passes, otherwise the whole value must match."""
    return lambda value: is_blank(value) or pattern.fullmatch(value) is not None


def _contains(pattern: str):
    return lambda value: is_blank(value) or re.search(pattern, value) is not None


def _check_lengths(min_length: int | None, max_length: int | None) -> None:
    if min_length is not None and min_length < 0:
        raise InvalidArgumentError(f"min_length cannot be negative: {min_length}")
    if max_length is not None and max_length < 0:
        raise InvalidArgumentError(f"max_length cannot be negative: {max_length}")
    if min_length is not None and max_length is not None and min_length > max_length:
        raise InvalidArgumentError(
            f"min_length ({min_length}) cannot be greater than max_length ({max_length})",
            context={"min_length": min_length, "max_length": max_length}
        )


def _check_bounds(min_value: Any, max_value: Any) -> None:
    if min_value is not None and max_value is not None and min_value > max_value:
        raise InvalidArgumentError(
            f"min ({min_value}) cannot be greater than max ({max_value})",
            context={"min": min_value, "max": max_value}
        )


def _add_length_rules(
    validator: Validator[str],
    label: str,
    min_length: int | None,
    max_length: int | None,
) -> Validator[str]:
    if min_length:
        validator.add_rule(
            lambda value: is_blank(value) or len(value) >= min_length,
            f"{label} must be at least {min_length} characters long",
        )
    if max_length is not None:
        validator.add_rule(
            lambda value: is_blank(value) or len(value) <= max_length,
            f"{label} cannot exceed {max_length} characters",
        )
    return validator


def required_validator(field_name: str = "Value") -> Validator[str]:
    """Value must be present and not blank."""
    return Validator[str](field_name).add_rule(
        lambda value: not is_blank(value), f"{field_name} is required"
    )


def length_validator(
    min_length: int = 0,
    max_length: int | None = None,
    field_name: str = "Value",
) -> Validator[str]:
    """String length must be within bounds.

    A positive ``min_length`` also makes the value required.

    Args:
        min_length: Minimum length (inclusive)
        max_length: Maximum length (inclusive), or None for no limit
        field_name: Field that failures are attributed to

    Returns:
        Validator for strings
    """
    _check_lengths(min_length, max_length)
    validator: Validator[str] = Validator(field_name)
    if min_length > 0:
        validator.add_rule(lambda value: not is_blank(value), f"{field_name} is required")
    return _add_length_rules(validator, field_name, min_length, max_length)


def regex_validator(
    pattern: Union[str, RegexPattern[str]],
    error_message: str,
    field_name: str = "Value",
) -> Validator[str]:
    """Value must contain a match for ``pattern``; blank values pass.

    Use anchors in the pattern to require a match of the whole value.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return Validator[str](field_name).add_rule(
        lambda value: is_blank(value) or regex.search(value) is not None, error_message
    )


def range_validator(
    min_value: Any = None,
    max_value: Any = None,
    field_name: str = "Value",
) -> Validator[Any]:
    """Comparable value must be within inclusive bounds; None passes.

    Args:
        min_value: Minimum value, or None for no lower bound
        max_value: Maximum value, or None for no upper bound
        field_name: Field that failures are attributed to

    Returns:
        Validator for any comparable type
    """
    _check_bounds(min_value, max_value)
    validator: Validator[Any] = Validator(field_name)
    if min_value is not None:
        validator.add_rule(
            lambda value: value is None or value >= min_value,
            f"{field_name} must be at least {min_value}",
        )
    if max_value is not None:
        validator.add_rule(
            lambda value: value is None or value <= max_value,
            f"{field_name} cannot exceed {max_value}",
        )
    return validator


def email_validator(field_name: str = "Email") -> Validator[str]:
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "Email is required")
        .add_rule(_matches(EMAIL_PATTERN), "Invalid email format")
    )


def name_validator(
    min_length: int = 2,
    max_length: int = 50,
    field_name: str = "Name",
) -> Validator[str]:
    """Personal name: letters, spaces, hyphens and apostrophes."""
    _check_lengths(min_length, max_length)
    validator = Validator[str](field_name).add_rule(
        lambda value: not is_blank(value), "Name is required"
    )
    _add_length_rules(validator, "Name", min_length, max_length)
    return validator.add_rule(
        _matches(NAME_PATTERN),
        "Name can only contain letters, spaces, hyphens, and apostrophes",
    )


def phone_validator(required_length: int = 10, field_name: str = "Phone") -> Validator[str]:
    """Phone number made only of digits, with an exact length."""
    if required_length <= 0:
        raise InvalidArgumentError(f"required_length must be positive: {required_length}")
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "Phone number is required")
        .add_rule(_matches(DIGITS_PATTERN), "Phone number can only contain digits")
        .add_rule(
            lambda value: is_blank(value) or len(value) == required_length,
            f"Phone number must be exactly {required_length} digits",
        )
    )


def password_validator(field_name: str = "Password") -> Validator[str]:
    """Password of at least 8 characters mixing case, digits and symbols."""
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "Password is required")
        .add_rule(
            lambda value: is_blank(value) or len(value) >= 8,
            "Password must be at least 8 characters long",
        )
        .add_rule(_contains("[A-Z]"), "Password must contain at least one uppercase letter")
        .add_rule(_contains("[a-z]"), "Password must contain at least one lowercase letter")
        .add_rule(_contains("[0-9]"), "Password must contain at least one number")
        .add_rule(_contains("[^a-zA-Z0-9]"), "Password must contain at least one special character")
    )


def _is_absolute_url(value: str) -> bool:
    parsed = urlparse(value.strip())
    return bool(parsed.scheme and parsed.netloc)


def url_validator(field_name: str = "URL") -> Validator[str]:
    """Absolute URL with a scheme and a network location."""
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "URL is required")
        .add_rule(lambda value: is_blank(value) or _is_absolute_url(value), "Invalid URL format")
    )


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def date_validator(
    min_date: Union[date, datetime, None] = None,
    max_date: Union[date, datetime, None] = None,
    field_name: str = "Date",
) -> Validator[Union[date, datetime]]:
    """Date must fall within inclusive bounds; None passes.

    Dates and datetimes can be mixed: a plain date counts as midnight.
    """
    _check_bounds(
        _as_datetime(min_date) if min_date is not None else None,
        _as_datetime(max_date) if max_date is not None else None,
    )
    validator: Validator[Union[date, datetime]] = Validator(field_name)
    if min_date is not None:
        lower = _as_datetime(min_date)
        validator.add_rule(
            lambda value: value is None or _as_datetime(value) >= lower,
            f"Date must be on or after {min_date:%m/%d/%Y}",
        )
    if max_date is not None:
        upper = _as_datetime(max_date)
        validator.add_rule(
            lambda value: value is None or _as_datetime(value) <= upper,
            f"Date must be on or before {max_date:%m/%d/%Y}",
        )
    return validator


def _as_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest float repr, so 99.99 stays 99.99
    return Decimal(str(value))


def _amount_check(check: Callable[[Decimal], bool]) -> Callable[[Number | None], bool]:
    """Wrap an amount comparison so None and NaN pass it.

    NaN cannot be ordered, so it is left to the finiteness rule.
    """
    def predicate(value: Number | None) -> bool:
        if value is None:
            return True
        amount = _as_decimal(value)
        return amount.is_nan() or check(amount)
    return predicate


def _has_cents_precision(amount: Decimal) -> bool:
    if not amount.is_finite():
        return True
    _, digits, exponent = amount.as_tuple()
    if exponent >= -2:
        return True
    # digits past the second decimal place must all be zero
    return not any(digits[exponent + 2:])


def format_currency(value: Number) -> str:
    """Render an amount as dollars, e.g. ``$1,000.00``."""
    amount = _as_decimal(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def currency_validator(
    min_value: Number | None = None,
    max_value: Number | None = None,
    field_name: str = "Amount",
) -> Validator[Number]:
    """Finite, non-negative monetary amount with at most two decimal places; None passes."""
    _check_bounds(min_value, max_value)
    validator = (
        Validator[Number](field_name)
        .add_rule(
            lambda value: value is None or _as_decimal(value).is_finite(),
            "Amount must be a finite number",
        )
        .add_rule(_amount_check(lambda amount: amount >= 0), "Amount cannot be negative")
        .add_rule(
            _amount_check(_has_cents_precision),
            "Amount cannot have more than 2 decimal places",
        )
    )
    if min_value is not None:
        lower = _as_decimal(min_value)
        validator.add_rule(
            _amount_check(lambda amount: amount >= lower),
            f"Amount must be at least {format_currency(min_value)}",
        )
    if max_value is not None:
        upper = _as_decimal(max_value)
        validator.add_rule(
            _amount_check(lambda amount: amount <= upper),
            f"Amount cannot exceed {format_currency(max_value)}",
        )
    return validator


def zip_code_validator(field_name: str = "ZipCode") -> Validator[str]:
    """US ZIP code: ``12345`` or ``12345-6789``."""
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "ZIP code is required")
        .add_rule(_matches(ZIP_CODE_PATTERN), "ZIP code must be in the format 12345 or 12345-6789")
    )


def alphanumeric_validator(
    min_length: int = 1,
    max_length: int = 50,
    field_name: str = "Value",
) -> Validator[str]:
    """Letters and digits only, within length bounds."""
    _check_lengths(min_length, max_length)
    validator = (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), f"{field_name} is required")
        .add_rule(
            _matches(ALPHANUMERIC_PATTERN),
            f"{field_name} can only contain letters and numbers",
        )
    )
    return _add_length_rules(validator, field_name, min_length, max_length)


def ip_address_validator(field_name: str = "IPAddress") -> Validator[str]:
    """Dotted-quad IPv4 address with octets between 0 and 255."""
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "IP address is required")
        .add_rule(_matches(IPV4_PATTERN), "Invalid IP address format")
    )


def username_validator(
    min_length: int = 3,
    max_length: int = 20,
    field_name: str = "Username",
) -> Validator[str]:
    """Username starting with a letter, then letters, digits, underscores or hyphens."""
    _check_lengths(min_length, max_length)
    validator = (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "Username is required")
        .add_rule(
            lambda value: is_blank(value) or value[0].isascii() and value[0].isalpha(),
            "Username must start with a letter",
        )
        .add_rule(
            _matches(USERNAME_PATTERN),
            "Username can only contain letters, numbers, underscores, and hyphens",
        )
    )
    return _add_length_rules(validator, "Username", min_length, max_length)


def luhn_checksum(number: str) -> bool:
    """Check a digit string against the Luhn (mod 10) algorithm.

    Args:
        number: Digits only, no separators

    Returns:
        True if the checksum is valid; False for empty or non-digit input
    """
    if not number or DIGITS_PATTERN.fullmatch(number) is None:
        return False

    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def _card_digits(value: str) -> str:
    return CARD_SEPARATORS.sub("", value)


def _card_checksum_ok(value: str) -> bool:
    digits = _card_digits(value)
    # Non-digit input is reported by the format rule
    if DIGITS_PATTERN.fullmatch(digits) is None:
        return True
    return luhn_checksum(digits)


def credit_card_validator(field_name: str = "CreditCard") -> Validator[str]:
    """Card number of 13 to 19 digits passing the Luhn check.

    Spaces and hyphens between digit groups are ignored.
    """
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "Credit card number is required")
        .add_rule(
            lambda value: is_blank(value) or DIGITS_PATTERN.fullmatch(_card_digits(value)) is not None,
            "Credit card number can only contain digits, spaces, and hyphens",
        )
        .add_rule(
            lambda value: is_blank(value)
            or CARD_MIN_DIGITS <= len(_card_digits(value)) <= CARD_MAX_DIGITS,
            f"Credit card number must be between {CARD_MIN_DIGITS} and {CARD_MAX_DIGITS} digits",
        )
        .add_rule(
            lambda value: is_blank(value) or _card_checksum_ok(value),
            "Invalid credit card number",
        )
    )


def postal_code_validator(field_name: str = "PostalCode") -> Validator[str]:
    """Canadian postal code such as ``K1A 0B1``, ``K1A0B1`` or ``K1A-0B1``."""
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "Postal code is required")
        .add_rule(_matches(POSTAL_CODE_PATTERN), "Postal code must be in the format A1A 1A1")
    )


def hex_color_validator(field_name: str = "Color") -> Validator[str]:
    """Hex color in ``#RGB`` or ``#RRGGBB`` form."""
    return (
        Validator[str](field_name)
        .add_rule(lambda value: not is_blank(value), "Color is required")
        .add_rule(_matches(HEX_COLOR_PATTERN), "Color must be a hex value such as #FFF or #FFFFFF")
    )
