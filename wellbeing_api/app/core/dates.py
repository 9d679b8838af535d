"""
Date normalisation helpers shared by the mood and perception services.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from .exceptions import ValidationError


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def parse_calendar_date(value: Optional[str]) -> date:
    """Turn a client supplied ISO date/datetime string into a calendar date.

    An empty value means "today" (UTC).  Datetimes carrying an offset
    are converted to UTC before the time part is dropped, so
    ``2024-05-06T23:30:00-05:00`` is stored as ``2024-05-07``.

    Raises
    ------
    ValidationError
        If the value is not an ISO 8601 date or datetime.
    """
    if not value:
        return today_utc()
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid date: {value}") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def week_start(day: date) -> date:
    """Return the Monday of the week ``day`` falls in.

    With Monday=1 .. Sunday=7, Sundays go back 6 days and every other
    day goes back ``weekday - 1`` days.
    """
    weekday = day.isoweekday()
    offset = 6 if weekday == 7 else weekday - 1
    return day - timedelta(days=offset)
