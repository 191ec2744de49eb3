"""Shared validators for request schemas.

This module provides common validation utilities used across the
request models:
- Form value cleaning (surrounding quotes)
- 24-hour HH:MM time parsing
- E-mail format checking
- International phone number normalization
"""

import json
import re
from typing import Any

import phonenumbers

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")

PHONE_ERROR = (
    "Please enter a valid international phone number "
    "(include country code, e.g. +1, +44, +962)"
)


def clean_form_value(value: Any) -> Any:
    """Strip one leading and one trailing quote character from form strings.

    Multipart clients frequently JSON-encode scalar values, so ``'"Rock"'``
    arrives where ``"Rock"`` was meant. Non-string values pass through.
    """
    if isinstance(value, str):
        return _SURROUNDING_QUOTES.sub("", value).strip()
    return value


def check_length(
    value: str,
    label: str,
    min_length: int | None = None,
    max_length: int | None = None,
) -> str:
    """Enforce a character-count range with a readable message.

    Raises:
        ValueError: If the value is outside the range
    """
    size = len(value)
    if min_length is not None and max_length is not None:
        if not min_length <= size <= max_length:
            raise ValueError(f"{label} must be between {min_length} and {max_length} characters")
    elif max_length is not None and size > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    elif min_length is not None and size < min_length:
        raise ValueError(f"{label} must be at least {min_length} characters long")
    return value


def normalize_time(value: str) -> str:
    """Validate a 24-hour time and return it zero-padded as HH:MM.

    Raises:
        ValueError: If the value is not a valid HH:MM time
    """
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format (24-hour)")
    hours, minutes = value.split(":")
    return f"{int(hours):02d}:{minutes}"


def time_to_minutes(value: str) -> int:
    """Convert an HH:MM string to minutes after midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def validate_email_format(value: str) -> str:
    """Check an e-mail against the address pattern and lower-case it.

    Raises:
        ValueError: If the address does not match
    """
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please enter a valid email")
    return value


def normalize_phone_number(value: str) -> str:
    """Parse an international phone number and format it as E.164.

    Raises:
        ValueError: If the number cannot be parsed or is not valid
    """
    try:
        parsed = phonenumbers.parse(value.strip(), None)
    except phonenumbers.NumberParseException as e:
        raise ValueError(PHONE_ERROR) from e
    if not phonenumbers.is_valid_number(parsed):
        raise ValueError(PHONE_ERROR)
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def parse_json_field(value: Any, field_name: str) -> Any:
    """Decode a JSON-encoded form field, passing already decoded values through.

    Raises:
        ValueError: If a string value is not valid JSON
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid {field_name} format") from e


def parse_string_list(value: Any) -> list[str]:
    """Accept a JSON array string, a list, or a single value as a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            decoded = parse_json_field(stripped, "list")
            return [str(item).strip() for item in decoded]
        return [clean_form_value(stripped)] if stripped else []
    if isinstance(value, list | tuple):
        items: list[str] = []
        for item in value:
            items.extend(parse_string_list(item))
        return items
    return [str(value)]


__all__ = [
    "EMAIL_PATTERN",
    "PHONE_ERROR",
    "TIME_PATTERN",
    "check_length",
    "clean_form_value",
    "normalize_phone_number",
    "normalize_time",
    "parse_json_field",
    "parse_string_list",
    "time_to_minutes",
    "validate_email_format",
]
