"""Settings and daily record builders.

This module is the SINGLE SOURCE OF TRUTH for:
- Settings field defaults and bounds
- Daily record structure
- Normalization of anything read back from storage

Nothing here raises on bad input. Out-of-range values are clamped,
malformed values are replaced with their defaults, and daily records that
break a timer invariant are repaired into a valid state.

Consumers:
- daily_record_controller.py (settings reads, settings updates)
- engines/rollover_engine.py (fresh and loaded records)
- storage_manager.py (records map loading)
"""

from __future__ import annotations

import math
import re
from typing import Any

from . import const
from .type_defs import ChecklistState, DailyRecord, ScreenTimeSettings
from .utils.dt_utils import dt_to_utc
from .utils.math_utils import coerce_bounded_int

_PIN_RE = re.compile(const.PARENT_PIN_PATTERN)

_MINUTE_DEFAULTS: dict[str, int] = {
    const.DATA_SETTINGS_FULL_COMPLETION_MINUTES: const.DEFAULT_FULL_COMPLETION_MINUTES,
    const.DATA_SETTINGS_FALLBACK_MINUTES: const.DEFAULT_FALLBACK_MINUTES,
    const.DATA_SETTINGS_FULL_COMPLETION_MINUTES_WEEKEND: const.DEFAULT_FULL_COMPLETION_MINUTES_WEEKEND,
    const.DATA_SETTINGS_FALLBACK_MINUTES_WEEKEND: const.DEFAULT_FALLBACK_MINUTES_WEEKEND,
}


# ==============================================================================
# SETTINGS
# ==============================================================================


def default_settings() -> ScreenTimeSettings:
    """Return a fresh settings dict populated with every default."""
    return {
        const.DATA_SETTINGS_CARRY_OVER_ENABLED: const.DEFAULT_CARRY_OVER_ENABLED,
        const.DATA_SETTINGS_PARENT_PIN: const.DEFAULT_PARENT_PIN,
        const.DATA_SETTINGS_ALARM_TONE: const.DEFAULT_ALARM_TONE,
        const.DATA_SETTINGS_ALARM_VOLUME: const.DEFAULT_ALARM_VOLUME,
        const.DATA_SETTINGS_FULL_COMPLETION_MINUTES: const.DEFAULT_FULL_COMPLETION_MINUTES,
        const.DATA_SETTINGS_FALLBACK_MINUTES: const.DEFAULT_FALLBACK_MINUTES,
        const.DATA_SETTINGS_FULL_COMPLETION_MINUTES_WEEKEND: const.DEFAULT_FULL_COMPLETION_MINUTES_WEEKEND,
        const.DATA_SETTINGS_FALLBACK_MINUTES_WEEKEND: const.DEFAULT_FALLBACK_MINUTES_WEEKEND,
    }  # type: ignore[return-value]


def build_settings(raw: Any) -> ScreenTimeSettings:
    """Normalize a raw settings payload into valid settings.

    Applied on every read. Each field is handled independently, so one bad
    value never discards the others:
    - carry_over_enabled: must be a bool
    - parent_pin: must be exactly four digits
    - alarm_tone: "chime" or else "beep"
    - alarm_volume: rounded and clamped to [0, 100]
    - allowance minutes: rounded and clamped to [1, 180]

    Args:
        raw: Whatever storage returned (dict, None, or garbage)

    Returns:
        Complete ScreenTimeSettings within documented bounds.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            const.LOGGER.warning(
                "WARNING: Settings payload is %s, not a dict. Using defaults",
                type(raw).__name__,
            )
        return default_settings()

    settings = default_settings()

    carry_over = raw.get(const.DATA_SETTINGS_CARRY_OVER_ENABLED)
    if isinstance(carry_over, bool):
        settings[const.DATA_SETTINGS_CARRY_OVER_ENABLED] = carry_over

    pin = raw.get(const.DATA_SETTINGS_PARENT_PIN)
    if is_valid_pin(pin):
        settings[const.DATA_SETTINGS_PARENT_PIN] = pin

    if raw.get(const.DATA_SETTINGS_ALARM_TONE) == const.ALARM_TONE_CHIME:
        settings[const.DATA_SETTINGS_ALARM_TONE] = const.ALARM_TONE_CHIME

    settings[const.DATA_SETTINGS_ALARM_VOLUME] = coerce_bounded_int(
        raw.get(const.DATA_SETTINGS_ALARM_VOLUME),
        const.MIN_ALARM_VOLUME,
        const.MAX_ALARM_VOLUME,
        const.DEFAULT_ALARM_VOLUME,
    )

    for key, default in _MINUTE_DEFAULTS.items():
        settings[key] = coerce_bounded_int(  # type: ignore[literal-required]
            raw.get(key),
            const.MIN_ALLOWANCE_MINUTES,
            const.MAX_ALLOWANCE_MINUTES,
            default,
        )

    return settings


def is_valid_pin(candidate: Any) -> bool:
    """Return True when `candidate` is exactly four ASCII digits."""
    return isinstance(candidate, str) and _PIN_RE.fullmatch(candidate) is not None


# ==============================================================================
# DAILY RECORDS
# ==============================================================================


def build_checklist(raw: Any = None) -> ChecklistState:
    """Build a complete checklist, all items False unless `raw` says True.

    Unknown keys in `raw` are dropped; the item set is closed.
    """
    source = raw if isinstance(raw, dict) else {}
    return {item: source.get(item) is True for item in const.CHECK_ITEMS}  # type: ignore[return-value]


def build_daily_record(date_key: str, carry_in_seconds: int = 0) -> DailyRecord:
    """Build a never-started record for `date_key`."""
    return {
        const.DATA_RECORD_DATE: date_key,
        const.DATA_RECORD_CHECKS: build_checklist(),
        const.DATA_RECORD_CARRY_IN_SECONDS: max(0, carry_in_seconds),
        const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES: None,
        const.DATA_RECORD_REMAINING_SECONDS: None,
        const.DATA_RECORD_IS_RUNNING: False,
        const.DATA_RECORD_IS_ALARMING: False,
        const.DATA_RECORD_ANCHOR: None,
    }  # type: ignore[return-value]


def _optional_non_negative_int(value: Any) -> int | None:
    """Return value as a non-negative int, or None when not a number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return max(0, int(value))


def normalize_daily_record(raw: Any, date_key: str) -> DailyRecord:
    """Coerce a stored record into a valid DailyRecord.

    Field types are coerced and the timer invariants are enforced:
    - running requires a parseable anchor and a non-null remaining
    - remaining == 0 means not running
    - alarming means not running

    Args:
        raw: Stored record (may be partial or malformed)
        date_key: Key the record is stored under (authoritative)

    Returns:
        A new, valid DailyRecord. The input is never mutated.
    """
    source: dict[str, Any] = raw if isinstance(raw, dict) else {}

    remaining = _optional_non_negative_int(
        source.get(const.DATA_RECORD_REMAINING_SECONDS)
    )
    locked = _optional_non_negative_int(
        source.get(const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES)
    )
    anchor = source.get(const.DATA_RECORD_ANCHOR)
    if not isinstance(anchor, str) or dt_to_utc(anchor) is None:
        anchor = None

    running = bool(source.get(const.DATA_RECORD_IS_RUNNING))
    alarming = bool(source.get(const.DATA_RECORD_IS_ALARMING))

    if running and (anchor is None or remaining is None or remaining == 0 or alarming):
        const.LOGGER.warning(
            "WARNING: Record %s was running in an inconsistent timer state. "
            "Stopping countdown",
            date_key,
        )
        running = False
    if not running:
        anchor = None

    record = build_daily_record(
        date_key,
        _optional_non_negative_int(source.get(const.DATA_RECORD_CARRY_IN_SECONDS))
        or const.DEFAULT_ZERO,
    )
    record[const.DATA_RECORD_CHECKS] = build_checklist(
        source.get(const.DATA_RECORD_CHECKS)
    )
    record[const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES] = locked
    record[const.DATA_RECORD_REMAINING_SECONDS] = remaining
    record[const.DATA_RECORD_IS_RUNNING] = running
    record[const.DATA_RECORD_IS_ALARMING] = alarming
    record[const.DATA_RECORD_ANCHOR] = anchor
    return record
