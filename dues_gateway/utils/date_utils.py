"""Date manipulation utilities"""

import calendar
import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any

from dues_gateway.domain.exceptions import InvalidDateError

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?$")
_COMPACT_DATE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def start_of_day(value: date | datetime) -> date:
    """Strip the time-of-day component"""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def end_of_month(day: date) -> date:
    """Last calendar day of the month containing `day`"""
    return day.replace(day=days_in_month(day.year, day.month))


def next_day(day: date) -> date:
    return day + timedelta(days=1)


def to_iso(day: date) -> str:
    return day.isoformat()


def parse_date_strict(value: Any) -> date:
    """
    Parse a join/cutoff date from any of the shapes the member registry stores.

    Accepted:
    - date / datetime objects
    - "YYYY-MM-DD", optionally followed by a "T" or space and a time (ignored)
    - "YYYYMMDD"
    - epoch milliseconds (int or float), read as a UTC date

    Raises:
        InvalidDateError: value is missing or cannot be read as a calendar date
    """
    if isinstance(value, (date, datetime)):
        return start_of_day(value)

    # bool is an int subclass; a flag is never a timestamp
    if isinstance(value, bool) or value is None:
        raise InvalidDateError(f"Missing or non-date value: {value!r}")

    if isinstance(value, (int, float)):
        # registry rows use 0 for "never set"
        if not value:
            raise InvalidDateError("Zero timestamp")
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidDateError(f"Timestamp out of range: {value!r}") from e

    if isinstance(value, str):
        text = value.strip()
        match = _ISO_DATE.match(text) or _COMPACT_DATE.match(text)
        if match:
            year, month, day = (int(part) for part in match.groups())
            try:
                return date(year, month, day)
            except ValueError as e:
                raise InvalidDateError(f"Not a calendar date: {value!r}") from e

    raise InvalidDateError(f"Unrecognised date format: {value!r}")


def coerce_date(value: Any, fallback: date) -> date:
    """Lenient variant of parse_date_strict: unreadable input becomes `fallback`"""
    try:
        return parse_date_strict(value)
    except InvalidDateError as e:
        logger.debug("Date fallback applied", extra={"reason": str(e), "fallback": to_iso(fallback)})
        return fallback
