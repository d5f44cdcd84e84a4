"""Date utilities for indospend.

Pure functions for calendar-day boundaries and date parsing.
"""

from datetime import datetime, time

import pandas as pd


def to_local(moment: datetime) -> datetime:
    """Express a timestamp in the local time zone.

    Naive timestamps are already local and are returned unchanged.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone()


def start_of_day(moment: datetime) -> datetime:
    """Get the start of the local calendar day containing a timestamp.

    Args:
        moment: Any timestamp, naive (local) or timezone-aware.

    Returns:
        Midnight of the same local day, keeping the timestamp's tzinfo style.
    """
    local = to_local(moment)
    return datetime.combine(local.date(), time.min, tzinfo=local.tzinfo)


def parse_user_date(value: str) -> datetime:
    """Parse a user-supplied date or datetime.

    Args:
        value: Date string (YYYY-MM-DD, DD/MM/YYYY, "2025-01-15 13:45", etc.).

    Returns:
        Naive local datetime.

    Raises:
        ValueError: If the string cannot be parsed as a date.
    """
    try:
        parsed = pd.to_datetime(value, dayfirst=True)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Invalid date '{value}': {e}") from e

    if pd.isna(parsed):
        raise ValueError(f"Invalid date '{value}'")

    moment = parsed.to_pydatetime()
    if moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return moment


def format_day(moment: datetime) -> str:
    """Format a day for chart axes (e.g. "15 Jan")."""
    return moment.strftime("%d %b")
