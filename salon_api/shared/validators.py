"""Shared validation utilities"""

import re
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """
    Validate a 24-hour time-of-day string.

    Args:
        value: Time string in HH:MM format

    Returns:
        The same string

    Raises:
        ValueError: If the value is not a valid HH:MM time
    """
    if value is None:
        return value

    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format (00:00 - 23:59)")
    return value


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number to E.164 format.

    Local Sri Lankan numbers (0XXXXXXXXX) are rewritten with the +94 prefix;
    anything else must already carry a country code.

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    has_plus = phone.strip().startswith("+")
    digits = re.sub(r"\D", "", phone)

    if not has_plus and digits.startswith("0") and len(digits) == 10:
        return f"+94{digits[1:]}"

    if len(digits) < 8 or len(digits) > 15:
        raise ValueError("Phone number must contain between 8 and 15 digits")

    return f"+{digits}"


def validate_rating(value: Optional[int]) -> Optional[int]:
    """Validate a 1-5 star rating"""
    if value is None:
        return value
    if value < 1 or value > 5:
        raise ValueError("Rating must be between 1 and 5")
    return value


def validate_weekly_hours(hours: Optional[dict]) -> Optional[dict]:
    """
    Validate a working-hours map keyed by weekday.

    Expected shape: {"monday": {"open": "09:00", "close": "18:00", "closed": false}, ...}
    """
    if hours is None:
        return hours

    weekdays = {"monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"}
    for day, entry in hours.items():
        if day.lower() not in weekdays:
            raise ValueError(f"Unknown weekday in working hours: {day}")
        if not isinstance(entry, dict):
            raise ValueError(f"Working hours for {day} must be an object")
        if entry.get("closed"):
            continue
        open_time = validate_time_of_day(entry.get("open"))
        close_time = validate_time_of_day(entry.get("close"))
        if not open_time or not close_time:
            raise ValueError(f"Working hours for {day} need both open and close times")
        if close_time <= open_time:
            raise ValueError(f"Closing time must be after opening time on {day}")

    return {day.lower(): entry for day, entry in hours.items()}
