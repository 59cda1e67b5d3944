"""Date parsing utilities for milestone dates."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta, weekday, MO, TU, WE, TH, FR, SA, SU

_WEEKDAYS: dict[str, weekday] = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

_DAYS_AGO = re.compile(r"^(\d+) days? ago$")


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "Jan 15 2024", "15 January 2024"
    - "today", "yesterday", "tomorrow"
    - "3 days ago"
    - "last friday" (the most recent Friday before today)

    Args:
        date_str: Date string
        today: Reference date for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in fixed:
        return fixed[text]

    match = _DAYS_AGO.match(text)
    if match:
        return today - timedelta(days=int(match.group(1)))

    if text.startswith("last ") and text[5:] in _WEEKDAYS:
        return today + relativedelta(days=-1, weekday=_WEEKDAYS[text[5:]](-1))

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
