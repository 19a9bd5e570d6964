"""
Tests for the pre-built validator catalog.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from dataknobs_validation import InvalidArgumentError, Validator
from dataknobs_validation.catalog import (
    alphanumeric_validator,
    credit_card_validator,
    currency_validator,
    date_validator,
    email_validator,
    format_currency,
    hex_color_validator,
    ip_address_validator,
    is_blank,
    length_validator,
    luhn_checksum,
    name_validator,
    password_validator,
    phone_validator,
    postal_code_validator,
    range_validator,
    regex_validator,
    required_validator,
    url_validator,
    username_validator,
    zip_code_validator,
)


class TestStringValidators:
    """Test validators for free-form string fields."""

    @pytest.mark.parametrize("email,expected", [
        ("test@example.com", True),
        ("user@domain.co.uk", True),
        ("invalid", False),
        ("@example.com", False),
        ("", False),
    ])
    def test_email(self, email, expected):
        assert email_validator().validate(email).is_valid is expected

    def test_email_blank_reports_only_required(self):
        result = email_validator().validate("")
        assert result.field_errors == {"Email": ["Email is required"]}

    @pytest.mark.parametrize("name,expected", [
        ("John", True),
        ("Mary-Jane", True),
        ("O'Brien", True),
        ("", False),
        ("J", False),
        ("John123", False),
    ])
    def test_name(self, name, expected):
        assert name_validator().validate(name).is_valid is expected

    @pytest.mark.parametrize("phone,expected", [
        ("1234567890", True),
        ("123456789", False),
        ("12345678901", False),
        ("12345abcde", False),
        ("", False),
    ])
    def test_phone(self, phone, expected):
        assert phone_validator(required_length=10).validate(phone).is_valid is expected

    @pytest.mark.parametrize("password,expected", [
        ("Password1!", True),
        ("Pass1!", False),
        ("password1!", False),
        ("PASSWORD1!", False),
        ("Password!", False),
        ("Password1", False),
        ("", False),
    ])
    def test_password(self, password, expected):
        assert password_validator().validate(password).is_valid is expected

    def test_password_reports_every_failure(self):
        result = password_validator().validate("weak")
        assert result.field_errors["Password"] == [
            "Password must be at least 8 characters long",
            "Password must contain at least one uppercase letter",
            "Password must contain at least one number",
            "Password must contain at least one special character",
        ]

    @pytest.mark.parametrize("url,expected", [
        ("https://example.com", True),
        ("http://test.org", True),
        ("ftp://files.test.com", True),
        ("not-a-url", False),
        ("", False),
    ])
    def test_url(self, url, expected):
        assert url_validator().validate(url).is_valid is expected

    @pytest.mark.parametrize("value,expected", [
        ("test", True),
        ("", False),
        ("   ", False),
        (None, False),
    ])
    def test_required(self, value, expected):
        assert required_validator().validate(value).is_valid is expected

    def test_required_message_uses_field_name(self):
        result = required_validator("Title").validate("")
        assert result.field_errors == {"Title": ["Title is required"]}

    @pytest.mark.parametrize("value,expected", [
        ("abc", True),
        ("ab", False),
        ("abcdefghijk", False),
        ("", False),
    ])
    def test_length(self, value, expected):
        assert length_validator(min_length=3, max_length=10).validate(value).is_valid is expected

    def test_length_without_minimum_allows_blank(self):
        assert length_validator(max_length=3).validate("").is_valid is True

    @pytest.mark.parametrize("value,expected", [
        ("123", True),
        ("abc", False),
        ("", True),
    ])
    def test_regex(self, value, expected):
        validator = regex_validator(r"^\d{3}$", "Must match pattern")
        assert validator.validate(value).is_valid is expected

    def test_regex_message(self):
        result = regex_validator(r"^\d+$", "Digits only", field_name="Code").validate("x")
        assert result.field_errors == {"Code": ["Digits only"]}


class TestFormatValidators:
    """Test validators for structured identifiers."""

    @pytest.mark.parametrize("zip_code,expected", [
        ("12345", True),
        ("12345-6789", True),
        ("1234", False),
        ("123456", False),
        ("12345-678", False),
        ("abcde", False),
        ("", False),
    ])
    def test_zip_code(self, zip_code, expected):
        assert zip_code_validator().validate(zip_code).is_valid is expected

    @pytest.mark.parametrize("value,expected", [
        ("abc123", True),
        ("Test123", True),
        ("abc-123", False),
        ("abc 123", False),
        ("abc@123", False),
        ("", False),
    ])
    def test_alphanumeric(self, value, expected):
        assert alphanumeric_validator().validate(value).is_valid is expected

    def test_alphanumeric_custom_length(self):
        validator = alphanumeric_validator(min_length=5, max_length=10)
        assert validator.validate("abc").is_valid is False
        assert validator.validate("abcde").is_valid is True
        assert validator.validate("abcdefghijk").is_valid is False

    @pytest.mark.parametrize("ip,expected", [
        ("192.168.1.1", True),
        ("10.0.0.1", True),
        ("255.255.255.255", True),
        ("256.1.1.1", False),
        ("192.168", False),
        ("abc.def.ghi.jkl", False),
        ("", False),
    ])
    def test_ip_address(self, ip, expected):
        assert ip_address_validator().validate(ip).is_valid is expected

    @pytest.mark.parametrize("username,expected", [
        ("john_doe", True),
        ("user123", True),
        ("test-user", True),
        ("a_b_c", True),
        ("123user", False),
        ("_user", False),
        ("us", False),
        ("user@test", False),
        ("", False),
    ])
    def test_username(self, username, expected):
        assert username_validator().validate(username).is_valid is expected

    def test_username_custom_length(self):
        validator = username_validator(min_length=5, max_length=15)
        assert validator.validate("user").is_valid is False
        assert validator.validate("username").is_valid is True
        assert validator.validate("verylongusername").is_valid is False

    @pytest.mark.parametrize("card,expected", [
        ("4532015112830366", True),
        ("6011111111111117", True),
        ("5425233430109903", True),
        ("4532 0151 1283 0366", True),
        ("4532-0151-1283-0366", True),
        ("4532015112830367", False),
        ("123", False),
        ("12345678901234567890", False),
        ("", False),
    ])
    def test_credit_card(self, card, expected):
        assert credit_card_validator().validate(card).is_valid is expected

    def test_credit_card_letters_skip_checksum_message(self):
        result = credit_card_validator().validate("4532abcd12830366")
        assert "Invalid credit card number" not in result.field_errors["CreditCard"]
        assert (
            "Credit card number can only contain digits, spaces, and hyphens"
            in result.field_errors["CreditCard"]
        )

    @pytest.mark.parametrize("postal_code,expected", [
        ("K1A 0B1", True),
        ("M5W1E6", True),
        ("K1A-0B1", True),
        ("k1a 0b1", True),
        ("12345", False),
        ("ABCDEF", False),
        ("", False),
    ])
    def test_postal_code(self, postal_code, expected):
        assert postal_code_validator().validate(postal_code).is_valid is expected

    @pytest.mark.parametrize("color,expected", [
        ("#FF0000", True),
        ("#00FF00", True),
        ("#00f", True),
        ("#ABC", True),
        ("FF0000", False),
        ("#GG0000", False),
        ("#12345", False),
        ("", False),
    ])
    def test_hex_color(self, color, expected):
        assert hex_color_validator().validate(color).is_valid is expected


class TestLuhn:
    """Test the Luhn checksum helper."""

    @pytest.mark.parametrize("number,expected", [
        ("4532015112830366", True),
        ("79927398713", True),
        ("79927398710", False),
        ("0", True),
        ("", False),
        ("4532 0151", False),
        ("abc", False),
    ])
    def test_luhn_checksum(self, number, expected):
        assert luhn_checksum(number) is expected


class TestRangeValidators:
    """Test validators for ordered values."""

    @pytest.mark.parametrize("value,expected", [
        (5, True),
        (1, True),
        (10, True),
        (0, False),
        (11, False),
    ])
    def test_range(self, value, expected):
        assert range_validator(min_value=1, max_value=10).validate(value).is_valid is expected

    def test_range_none_passes(self):
        assert range_validator(1, 10).validate(None).is_valid is True

    def test_range_messages(self):
        validator = range_validator(1, 10, field_name="Quantity")
        assert validator.validate(0).field_errors == {"Quantity": ["Quantity must be at least 1"]}
        assert validator.validate(11).field_errors == {"Quantity": ["Quantity cannot exceed 10"]}

    def test_range_without_bounds_has_no_rules(self):
        assert len(range_validator()) == 0

    def test_date_within_range(self):
        validator = date_validator(date(2000, 1, 1), date(2025, 12, 31))
        assert validator.validate(date(2020, 6, 15)).is_valid is True

    def test_date_outside_range(self):
        validator = date_validator(date(2000, 1, 1), date(2025, 12, 31))

        result = validator.validate(date(1990, 6, 15))
        assert result.is_valid is False
        assert result.field_errors == {"Date": ["Date must be on or after 01/01/2000"]}

    def test_date_accepts_datetimes(self):
        validator = date_validator(max_date=date(2025, 12, 31))
        assert validator.validate(datetime(2025, 12, 31, 0, 0)).is_valid is True
        assert validator.validate(datetime(2026, 1, 1, 12, 30)).is_valid is False

    @pytest.mark.parametrize("value,expected", [
        (100.50, True),
        (0, True),
        (99.99, True),
        (-1, False),
        (100.999, False),
        (Decimal("12.34"), True),
        (Decimal("12.345"), False),
        (Decimal("12.3400"), True),
        (Decimal("1E+3"), True),
        (float("nan"), False),
        (Decimal("NaN"), False),
        (float("inf"), False),
    ])
    def test_currency(self, value, expected):
        validator = currency_validator(min_value=0, max_value=1000)
        assert validator.validate(value).is_valid is expected

    @pytest.mark.parametrize("value", [float("nan"), Decimal("NaN"), Decimal("sNaN")])
    def test_currency_not_a_number(self, value):
        validator = currency_validator(min_value=10, max_value=1000)
        result = validator.validate(value)
        assert result.field_errors == {"Amount": ["Amount must be a finite number"]}

    def test_currency_negative_infinity(self):
        result = currency_validator().validate(Decimal("-Infinity"))
        assert result.get_field_errors("Amount") == (
            "Amount must be a finite number",
            "Amount cannot be negative",
        )

    @pytest.mark.parametrize("value", [Decimal("1E+30"), 10**40, Decimal("123456789012345678901234567890.10")])
    def test_currency_large_amounts(self, value):
        assert currency_validator().validate(value).is_valid is True

    def test_currency_many_fractional_digits(self):
        result = currency_validator().validate(Decimal("123456789012345678901234567890.001"))
        assert result.get_field_errors("Amount") == ("Amount cannot have more than 2 decimal places",)

    def test_currency_messages(self):
        validator = currency_validator(min_value=10, max_value=1000, field_name="Salary")
        assert validator.validate(5000).field_errors == {"Salary": ["Amount cannot exceed $1,000.00"]}
        assert validator.validate(5).field_errors == {"Salary": ["Amount must be at least $10.00"]}

    def test_format_currency(self):
        assert format_currency(1000000) == "$1,000,000.00"
        assert format_currency(Decimal("-5.5")) == "-$5.50"


class TestFactoryArguments:
    """Test factories reject contradictory arguments."""

    @pytest.mark.parametrize("factory,kwargs", [
        (length_validator, {"min_length": 5, "max_length": 2}),
        (length_validator, {"min_length": -1}),
        (name_validator, {"min_length": 10, "max_length": 5}),
        (alphanumeric_validator, {"max_length": -3}),
        (username_validator, {"min_length": 30}),
        (range_validator, {"min_value": 10, "max_value": 1}),
        (currency_validator, {"min_value": 100, "max_value": 1}),
        (date_validator, {"min_date": date(2020, 1, 1), "max_date": date(2019, 1, 1)}),
        (phone_validator, {"required_length": 0}),
    ])
    def test_invalid_arguments(self, factory, kwargs):
        with pytest.raises(InvalidArgumentError):
            factory(**kwargs)


class TestCatalogContract:
    """Test catalog entries are ordinary validators."""

    def test_factories_return_validators(self):
        assert isinstance(email_validator(), Validator)
        assert email_validator().field_name == "Email"
        assert email_validator("Work").field_name == "Work"

    def test_catalog_validator_is_extensible(self):
        validator = email_validator().add_rule(
            lambda v: is_blank(v) or v.endswith("@example.com"), "Must be a company address"
        )
        result = validator.validate("a@b.com")
        assert result.field_errors == {"Email": ["Must be a company address"]}

    @pytest.mark.parametrize("value,expected", [
        (None, True),
        ("", True),
        ("  ", True),
        ("x", False),
        (0, False),
    ])
    def test_is_blank(self, value, expected):
        assert is_blank(value) is expected
