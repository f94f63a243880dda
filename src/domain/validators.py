"""
Field rules for SWIFT bank data.

The patterns are compiled once and shared read-only, so every function here
is safe to call concurrently. Each validator returns the normalized value or
raises FieldValidationError naming the field, the raw value and the reason.
"""

import re

from domain.exceptions import FieldValidationError

# 4-letter institution + 2-letter country + 2 location + optional 3 branch
SWIFT_CODE_PATTERN = re.compile(r"^[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?$")
COUNTRY_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")

SWIFT_CODE_BASE_LENGTH = 8
HEADQUARTERS_SUFFIX = "XXX"

MAX_SWIFT_CODE_LENGTH = 15
MAX_BANK_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 200
MAX_COUNTRY_NAME_LENGTH = 100


def normalize_code(value: str | None) -> str:
    """Trim and uppercase a code-like value (SWIFT or country code)."""
    return (value or "").strip().upper()


def validate_swift_code(value: str | None) -> str:
    """
    Validate a SWIFT/BIC code.

    Rules, in order: non-empty, BIC pattern, length <= 15.

    Returns:
        The uppercased code

    Raises:
        FieldValidationError: If any rule fails
    """
    code = normalize_code(value)
    if not code:
        raise FieldValidationError("swift_code", value, "cannot be empty")
    if not SWIFT_CODE_PATTERN.match(code):
        raise FieldValidationError("swift_code", value, "does not match BIC format")
    if len(code) > MAX_SWIFT_CODE_LENGTH:
        raise FieldValidationError("swift_code", value, "exceeds maximum length")
    return code


def validate_country_iso_code(value: str | None) -> str:
    """
    Validate an ISO 3166-1 alpha-2 country code.

    Returns:
        The uppercased country code

    Raises:
        FieldValidationError: If empty or not two letters
    """
    code = normalize_code(value)
    if not code:
        raise FieldValidationError("country_iso_code", value, "cannot be empty")
    if not COUNTRY_CODE_PATTERN.match(code):
        raise FieldValidationError("country_iso_code", value, "does not match ISO2 format")
    return code


def validate_text(
    field: str,
    value: str | None,
    max_length: int,
    required: bool = True,
) -> str:
    """
    Validate a descriptive text field.

    Args:
        field: Field name used in the error
        value: Raw value
        max_length: Maximum length in characters
        required: Whether an empty value is rejected

    Returns:
        The whitespace-trimmed value
    """
    text = (value or "").strip()
    if required and not text:
        raise FieldValidationError(field, value, "cannot be empty")
    if len(text) > max_length:
        raise FieldValidationError(field, value, "exceeds maximum length")
    return text


def validate_bank_name(value: str | None) -> str:
    return validate_text("bank_name", value, MAX_BANK_NAME_LENGTH)


def validate_address(value: str | None, required: bool = True) -> str:
    return validate_text("address", value, MAX_ADDRESS_LENGTH, required=required)


def validate_country_name(value: str | None, required: bool = True) -> str:
    return validate_text("country_name", value, MAX_COUNTRY_NAME_LENGTH, required=required)
