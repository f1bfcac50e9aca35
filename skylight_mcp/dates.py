"""Date and time helpers for turning user phrasing into Skylight's formats."""

import re
from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from typing import Optional
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
TIME_24H_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
TIME_12H_RE = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)


def _current_date(timezone: Optional[str] = None) -> date:
    """Today's date in the given IANA timezone (UTC when none is given)."""
    tz = ZoneInfo(timezone) if timezone else dt_timezone.utc
    return datetime.now(tz).date()


def get_today_date(timezone: Optional[str] = None) -> str:
    return _current_date(timezone).isoformat()


def get_date_offset(days: int, timezone: Optional[str] = None) -> str:
    return (_current_date(timezone) + timedelta(days=days)).isoformat()


def add_days(date_str: str, days: int) -> str:
    """Shift an ISO date by ``days``. Non-ISO input is returned unchanged."""
    try:
        return (date.fromisoformat(date_str) + timedelta(days=days)).isoformat()
    except ValueError:
        return date_str


def _weekday_index(word: str) -> Optional[int]:
    """Monday=0 for a full weekday name or an abbreviation of at least three letters."""
    if len(word) < 3:
        return None
    return next((i for i, name in enumerate(WEEKDAYS) if name.startswith(word)), None)


def parse_date(value: str, timezone: Optional[str] = None) -> str:
    """Convert user date phrasing to YYYY-MM-DD.

    Accepts "today", "tomorrow", "yesterday", weekday names or abbreviations
    (the next occurrence strictly after today), YYYY-MM-DD, M/D/YYYY and anything
    dateutil understands. Unparseable input is returned unchanged so the
    API can interpret or reject it itself.
    """
    text = value.strip()
    lower = text.lower()

    if lower == "today":
        return get_today_date(timezone)
    if lower == "tomorrow":
        return get_date_offset(1, timezone)
    if lower == "yesterday":
        return get_date_offset(-1, timezone)

    weekday = _weekday_index(lower)
    if weekday is not None:
        today = _current_date(timezone)
        days_until = (weekday - today.weekday()) % 7 or 7
        return (today + timedelta(days=days_until)).isoformat()

    if ISO_DATE_RE.match(text):
        return text

    us_match = US_DATE_RE.match(text)
    if us_match:
        month, day, year = us_match.groups()
        return f"{year}-{int(month):02d}-{int(day):02d}"

    try:
        default = datetime.combine(_current_date(timezone), time())
        return date_parser.parse(text, default=default).date().isoformat()
    except (ValueError, OverflowError):
        return value


def parse_time(value: str) -> str:
    """Convert "2:30 PM" style times to 24-hour HH:MM; other input passes through."""
    text = value.strip()

    match = TIME_24H_RE.match(text)
    if match:
        hours, minutes = match.groups()
        return f"{int(hours):02d}:{minutes}"

    match = TIME_12H_RE.match(text)
    if match:
        hours, minutes, period = match.groups()
        h = int(hours)
        if period.upper() == "PM" and h != 12:
            h += 12
        elif period.upper() == "AM" and h == 12:
            h = 0
        return f"{h:02d}:{minutes}"

    return text


def format_date_for_display(date_str: Optional[str]) -> str:
    """'2025-06-15' -> 'Sun, Jun 15'."""
    if not date_str:
        return "N/A"
    try:
        parsed = date.fromisoformat(date_str[:10])
    except ValueError:
        return date_str
    return f"{parsed:%a}, {parsed:%b} {parsed.day}"
