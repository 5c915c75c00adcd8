"""Time-of-day and weekday helpers for availability matching"""

from datetime import datetime

# Legacy records number days the way the old scheduler did: 0 = Sunday
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

MORNING_END_HOUR = 12
AFTERNOON_END_HOUR = 17


def day_name(moment: datetime) -> str:
    """Weekday name of a datetime, e.g. 'Monday'"""
    # datetime.weekday() is 0 = Monday
    return DAY_NAMES[(moment.weekday() + 1) % 7]


def normalize_day_name(day: str | int | None) -> str | None:
    """
    Normalize a day-of-week value to its capitalized name.
    Accepts names in any case, 3-letter abbreviations and legacy integers
    (0 = Sunday .. 6 = Saturday). Returns None when the value is not a day.
    """
    if day is None or isinstance(day, bool):
        return None

    if isinstance(day, int):
        return DAY_NAMES[day] if 0 <= day < 7 else None

    cleaned = day.strip().lower()
    if cleaned.isdigit():
        return normalize_day_name(int(cleaned))

    for name in DAY_NAMES:
        if cleaned in (name.lower(), name[:3].lower()):
            return name
    return None


def is_weekend(moment: datetime) -> bool:
    return moment.weekday() >= 5


def time_to_minutes(value: str) -> int:
    """Convert an 'HH:MM' (or 'HH:MM:SS') string to minutes since midnight"""
    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time value: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time value: {value!r}")
    return hours * 60 + minutes


def format_time(moment: datetime) -> str:
    """Format a datetime as 'HH:MM'"""
    return moment.strftime("%H:%M")


def get_time_slot(moment: datetime) -> str:
    """Bucket a datetime into morning, afternoon or evening"""
    if moment.hour < MORNING_END_HOUR:
        return "morning"
    if moment.hour < AFTERNOON_END_HOUR:
        return "afternoon"
    return "evening"


def calculate_time_overlap(start1: str, end1: str, start2: str, end2: str) -> float:
    """
    Percentage of the second period (start2-end2) covered by the first.

    All values are 'HH:MM' strings. Returns 0 when the periods do not
    intersect and never more than 100.
    """
    start1_minutes = time_to_minutes(start1)
    end1_minutes = time_to_minutes(end1)
    start2_minutes = time_to_minutes(start2)
    end2_minutes = time_to_minutes(end2)

    overlap_start = max(start1_minutes, start2_minutes)
    overlap_end = min(end1_minutes, end2_minutes)

    if overlap_start >= overlap_end:
        return 0.0

    overlap_duration = overlap_end - overlap_start
    period_duration = end2_minutes - start2_minutes

    return min(100.0, overlap_duration / period_duration * 100)
