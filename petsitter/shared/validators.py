"""Shared validation utilities"""

import re
from datetime import date, datetime
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$|^24:00$")
DAY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Normalize an international phone number to E.164-ish form.

    Keeps a leading "+" and strips spaces, dashes, dots and parentheses.

    Raises:
        ValueError: If the number has too few or too many digits
    """
    if not phone:
        return phone

    stripped = phone.strip()
    has_plus = stripped.startswith("+")
    digits = re.sub(r"\D", "", stripped)

    if len(digits) < 6 or len(digits) > 15:
        raise ValueError("Phone number must contain between 6 and 15 digits")

    return f"+{digits}" if has_plus else digits


def validate_time_hhmm(value: str) -> str:
    """
    Validate a 24h clock time in HH:MM format ("24:00" marks end of day).

    Raises:
        ValueError: If the value is not HH:MM
    """
    if not isinstance(value, str) or not TIME_PATTERN.match(value.strip()):
        raise ValueError("Time must be in HH:MM format")
    return value.strip()


def parse_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD date. Full ISO datetimes are accepted and truncated to the day.

    Raises:
        ValueError: If the value is not a valid ISO date
    """
    if not value or not isinstance(value, str):
        raise ValueError("Date is required")

    raw = value.strip()
    try:
        if len(raw) == 10:
            return date.fromisoformat(raw)
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError("Invalid date format. Expected YYYY-MM-DD") from None


def parse_iso_day(value: Optional[str]) -> date:
    """Parse a strict YYYY-MM-DD date (query parameters). Times are rejected."""
    raw = (value or "").strip()
    if not DAY_PATTERN.fullmatch(raw):
        raise ValueError("Invalid date format. Expected YYYY-MM-DD")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValueError("Invalid date format. Expected YYYY-MM-DD") from None
