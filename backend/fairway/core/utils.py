"""
Date and time helpers.

Trip data stores wall-clock values ("2026-02-27", "2026-02-27T14:30:00",
"14:30:00") that mean local time at the destination. Everything here reads
those strings literally and never converts through UTC, so a date can't
slip to the previous day.
"""
from typing import Optional, Union
from datetime import date, datetime, time


def parse_local_date(value: Union[str, date, datetime]) -> date:
    """Parse "YYYY-MM-DD" (optionally followed by a time part) as a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    date_part = value.strip().replace(" ", "T").split("T")[0]
    try:
        year, month, day = (int(p) for p in date_part.split("-"))
        return date(year, month, day)
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}")


def parse_local_time(value: Union[str, time]) -> time:
    """Parse "HH:MM" or "HH:MM:SS" as a wall-clock time."""
    if isinstance(value, time):
        return value
    parts = value.strip().split(":")
    try:
        if len(parts) not in (2, 3):
            raise ValueError
        hours, minutes = int(parts[0]), int(parts[1])
        seconds = int(parts[2][:2]) if len(parts) == 3 else 0
        return time(hours, minutes, seconds)
    except ValueError:
        raise ValueError(f"Invalid time: {value!r}")


def parse_local_datetime(value: Union[str, datetime]) -> datetime:
    """
    Parse "YYYY-MM-DDTHH:MM[:SS]" as a naive local datetime.
    Any trailing UTC marker or offset is ignored rather than applied.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    normalized = value.strip().replace(" ", "T")
    if "T" not in normalized:
        return datetime.combine(parse_local_date(normalized), time(0, 0))
    date_part, time_part = normalized.split("T", 1)
    time_part = time_part.rstrip("Zz").split("+")[0]
    if time_part.count("-"):
        time_part = time_part.split("-")[0]
    return datetime.combine(parse_local_date(date_part), parse_local_time(time_part[:8]))


def combine_local(day: Union[str, date], clock: Union[str, time]) -> datetime:
    """Join a calendar date and an "HH:MM" time into one naive datetime."""
    return datetime.combine(parse_local_date(day), parse_local_time(clock))


def _month_day(d: date) -> str:
    return f"{d:%b} {d.day}"


def format_trip_dates(start: Optional[Union[str, date]], end: Optional[Union[str, date]]) -> str:
    """
    Format a trip's date range.

    Same year: "Feb 27 – Mar 9, 2026". Different years:
    "Dec 28, 2025 – Jan 4, 2026". Empty when either end is missing.
    """
    if not start or not end:
        return ""
    s = parse_local_date(start)
    e = parse_local_date(end)
    if s.year == e.year:
        return f"{_month_day(s)} – {_month_day(e)}, {s.year}"
    return f"{_month_day(s)}, {s.year} – {_month_day(e)}, {e.year}"


def format_single_date(value: Optional[Union[str, date]]) -> str:
    """Friendly single date, e.g. "Fri, Feb 27"."""
    if not value:
        return ""
    d = parse_local_date(value)
    return f"{d:%a}, {_month_day(d)}"


def format_time(value: Optional[Union[str, time, datetime]]) -> str:
    """Format a time or timestamp as "2:30 PM"."""
    if not value:
        return ""
    if isinstance(value, datetime):
        clock = value.time()
    elif isinstance(value, time):
        clock = value
    elif "T" in value or " " in value.strip():
        clock = parse_local_datetime(value).time()
    else:
        clock = parse_local_time(value)
    hour = clock.hour % 12 or 12
    suffix = "AM" if clock.hour < 12 else "PM"
    return f"{hour}:{clock.minute:02d} {suffix}"
