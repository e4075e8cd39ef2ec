from __future__ import annotations

import re
from datetime import date, timedelta

from app.domain.entities.working_hours import WorkingHours

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$")
_ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_NUMERIC_DATE_PATTERN = re.compile(r"^(\d{1,2})[/-](\d{1,2})(?:[/-](\d{4}))?$")
_MONTH_NAME_PATTERN = re.compile(r"^([a-z]+)\.?\s+(\d{1,2})(?:,?\s*(\d{4}))?$")


def parse_time_24h(text: str) -> str | None:
    """Parse '2pm', '9:30 am' or '14:30' into 'HH:MM'. Returns None if unparseable."""
    normalized = text.strip().lower()
    match = _TIME_PATTERN.match(normalized)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    am_pm = match.group(3)

    if am_pm == "am" and hour == 12:
        hour = 0
    elif am_pm == "pm" and hour != 12:
        hour += 12

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return f"{hour:02d}:{minute:02d}"


def normalize_date(text: str, reference_date: date | None = None) -> str | None:
    """Parse a date expression into 'YYYY-MM-DD'. Returns None if unparseable."""
    if reference_date is None:
        reference_date = date.today()

    normalized = text.strip().lower()

    if normalized == "today":
        return reference_date.isoformat()

    if normalized in ("tomorrow", "tmrw"):
        return (reference_date + timedelta(days=1)).isoformat()

    match = _ISO_DATE_PATTERN.match(normalized)
    if match:
        return _safe_iso(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    match = _NUMERIC_DATE_PATTERN.match(normalized)
    if match:
        year = int(match.group(3)) if match.group(3) else reference_date.year
        return _safe_iso(year, int(match.group(1)), int(match.group(2)))

    match = _MONTH_NAME_PATTERN.match(normalized)
    if match:
        month = resolve_month(match.group(1))
        if month is None:
            return None
        year = int(match.group(3)) if match.group(3) else reference_date.year
        return _safe_iso(year, month, int(match.group(2)))

    return None


def resolve_month(token: str) -> int | None:
    """Match a month token by prefix. Ambiguous prefixes ('ma', 'ju') resolve to None."""
    candidates = [i + 1 for i, name in enumerate(MONTH_NAMES) if name.startswith(token)]
    if len(candidates) != 1:
        return None
    return candidates[0]


def _safe_iso(year: int, month: int, day: int) -> str | None:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def to_minutes(time_24h: str) -> int:
    hour, minute = time_24h.split(":")
    return int(hour) * 60 + int(minute)


def add_minutes(time_24h: str, minutes: int) -> str:
    """Add minutes to 'HH:MM', wrapping around midnight."""
    total = (to_minutes(time_24h) + minutes) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def get_end_time(start: str, duration_minutes: int) -> str:
    return add_minutes(start, duration_minutes)


def crosses_midnight(start: str, duration_minutes: int) -> bool:
    return to_minutes(start) + duration_minutes > MINUTES_PER_DAY


def weekday_of(date_iso: str) -> int:
    """Weekday with Sunday as 0, matching WorkingHours.days_open."""
    return date.fromisoformat(date_iso).isoweekday() % 7


def is_open_on(date_iso: str, hours: WorkingHours) -> bool:
    return weekday_of(date_iso) in hours.days_open


def is_within_working_hours(date_iso: str, start: str, end: str, hours: WorkingHours) -> bool:
    # zero-padded HH:MM strings compare correctly as text
    if not is_open_on(date_iso, hours):
        return False
    if start < hours.open:
        return False
    if end > hours.close:
        return False
    return True
