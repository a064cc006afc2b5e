# File: utils/dt_utils.py
"""Date and time utilities for ScreenTime.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.
   Uses standard library: datetime, zoneinfo, dateutil.

Every calendar decision (date keys, weekend bucket, rollover comparison)
goes through dt_date_key() so all of them agree on one civil calendar.

Functions:
    - as_utc: Convert a datetime to UTC
    - as_local: Convert a datetime to the canonical timezone
    - dt_date_key: Canonical date key for an instant
    - dt_parse_date: Parse a canonical date key
    - dt_previous_date_key: Calendar-correct previous day
    - dt_is_weekend: Weekend bucket for a date key
    - dt_to_utc: Parse an ISO timestamp to UTC
    - dt_elapsed_seconds: Whole seconds between two instants
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
import math
from zoneinfo import ZoneInfo

# Third-party date utilities (no HA dependency)
from dateutil.relativedelta import relativedelta

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Calendar constants (utils never import const.py)
# ==============================================================================

CANONICAL_TIME_ZONE = "Asia/Tokyo"

# Saturday and Sunday (date.weekday() numbering)
WEEKEND_WEEKDAYS = frozenset({5, 6})

# Canonical civil calendar; never follows the host or HA timezone
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo(CANONICAL_TIME_ZONE)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to already be in UTC, which is how every
    timestamp in storage is written.

    Args:
        dt_obj: Datetime object

    Returns:
        Datetime in UTC timezone
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to the canonical timezone.

    Args:
        dt_obj: Datetime object (naive values are treated as UTC)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in the canonical timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return as_utc(dt_obj).astimezone(tz_info)


# ==============================================================================
# Date Keys
# ==============================================================================


def dt_date_key(now: datetime, tz: ZoneInfo | None = None) -> str:
    """Return the canonical date key (YYYY-MM-DD) for an instant.

    The key does not depend on the timezone the instant is expressed in:
    2026-01-18T16:00:00+00:00 and 2026-01-19T01:00:00+09:00 give the same key.

    Args:
        now: Instant to resolve
        tz: Optional calendar override (tests only)

    Returns:
        ISO date string, lexicographically sortable in calendar order.

    Example:
        "2026-01-19"
    """
    return as_local(now, tz).date().isoformat()


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a canonical date key into a `datetime.date`.

    Args:
        date_str: Date key to parse, or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        _LOGGER.debug("DEBUG: Unparsable date key '%s'", date_str)
        return None


def dt_previous_date_key(date_key: str) -> str | None:
    """Return the key of the calendar day before `date_key`.

    Calendar arithmetic (not a fixed 86400 second offset), so month and
    year boundaries and DST changes are handled.

    Examples:
        dt_previous_date_key("2026-03-01") → "2026-02-28"
        dt_previous_date_key("2026-01-01") → "2025-12-31"
    """
    parsed = dt_parse_date(date_key)
    if parsed is None:
        return None
    return (parsed - relativedelta(days=1)).isoformat()


def dt_is_weekend(date_key: str) -> bool:
    """Return True when the date key falls on Saturday or Sunday."""
    parsed = dt_parse_date(date_key)
    if parsed is None:
        return False
    return parsed.weekday() in WEEKEND_WEEKDAYS


# ==============================================================================
# Timestamps
# ==============================================================================


def dt_to_utc(dt_str: str | None) -> datetime | None:
    """Parse an ISO timestamp string and convert to UTC.

    Args:
        dt_str: Datetime string to parse, or None

    Returns:
        UTC-aware datetime object, or None if parsing fails.
    """
    if not dt_str or not isinstance(dt_str, str):
        return None

    try:
        return as_utc(datetime.fromisoformat(dt_str))
    except ValueError:
        _LOGGER.debug("DEBUG: Unparsable timestamp '%s'", dt_str)
        return None


def dt_elapsed_seconds(start: datetime, end: datetime) -> int:
    """Return whole seconds elapsed from `start` to `end` (floored).

    Negative when `end` precedes `start`; callers treat that as no time
    passing.
    """
    return math.floor((as_utc(end) - as_utc(start)).total_seconds())
