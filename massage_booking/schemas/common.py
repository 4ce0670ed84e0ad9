"""Shared field parsing for request schemas"""
from datetime import datetime, time
from typing import Any, Optional


def parse_clock_time(value: Any) -> Any:
    """
    Accept "14:30", "14:30:00" and 12-hour "02:30 PM" forms.
    Anything else is passed through for pydantic to reject.
    """
    if not isinstance(value, str):
        return value

    text = value.strip().upper()
    for fmt in ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return value


def check_clock_time(value: Optional[time]) -> Optional[time]:
    """
    Times are wall-clock minutes in the business timezone, so an offset
    or a seconds part is rejected rather than stored.
    """
    if value is None:
        return value
    if value.tzinfo is not None:
        raise ValueError("time must not carry a UTC offset")
    if value.second or value.microsecond:
        raise ValueError("time must be a whole minute")
    return value


def format_clock_time(value: time) -> str:
    return value.strftime("%H:%M")
