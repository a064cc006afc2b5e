"""Rollover Engine - Pure logic for daily record lifecycle.

This engine provides stateless, pure Python functions for:
- Reusing or materializing the record for a date key
- Carry-over of unused seconds from the immediately preceding day
- Explicit "reset today" reconstruction

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
It reads through the RecordStore port but never writes; persisting the
returned record is the caller's job. The prior day's record is never
mutated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..data_builders import build_daily_record, normalize_daily_record
from ..utils.dt_utils import dt_previous_date_key

if TYPE_CHECKING:
    from ..type_defs import DailyRecord, RecordsMap, RecordStore, ScreenTimeSettings


class RolloverEngine:
    """Pure logic engine for creating and reusing daily records.

    All methods are static - no instance state.
    """

    @staticmethod
    def build_record(date_key: str, carry_in_seconds: int = 0) -> DailyRecord:
        """Build a fresh, never-started record for `date_key`."""
        return build_daily_record(date_key, carry_in_seconds)

    @staticmethod
    def carry_in_for(
        date_key: str, records: RecordsMap, settings: ScreenTimeSettings
    ) -> int:
        """Return the carry-in seconds a new record for `date_key` receives.

        Only the immediately preceding calendar day is consulted, and only
        when carry-over is enabled and that day has unused seconds left.

        Args:
            date_key: Canonical key of the day being created
            records: Full records map
            settings: Normalized settings

        Returns:
            Seconds to carry in (0 when nothing carries)
        """
        if not settings[const.DATA_SETTINGS_CARRY_OVER_ENABLED]:
            return const.DEFAULT_ZERO

        previous_key = dt_previous_date_key(date_key)
        if previous_key is None:
            return const.DEFAULT_ZERO

        previous = records.get(previous_key)
        if previous is None:
            return const.DEFAULT_ZERO

        remaining = normalize_daily_record(previous, previous_key)[
            const.DATA_RECORD_REMAINING_SECONDS
        ]
        return remaining if remaining else const.DEFAULT_ZERO

    @staticmethod
    def record_for(
        date_key: str, store: RecordStore, settings: ScreenTimeSettings
    ) -> DailyRecord:
        """Return the record for `date_key`, creating it if absent.

        An existing record is returned normalized (alarming coerced to a
        bool, broken timer invariants repaired) but otherwise unchanged. A
        missing record is created with carry-over applied.

        Args:
            date_key: Canonical key of the requested day
            store: Storage port (read only here)
            settings: Normalized settings

        Returns:
            The DailyRecord for `date_key`
        """
        records = store.read_records()
        existing = records.get(date_key)
        if existing is not None:
            return normalize_daily_record(existing, date_key)

        carry_in = RolloverEngine.carry_in_for(date_key, records, settings)
        const.LOGGER.info(
            "INFO: Creating daily record for %s (carry-in %s seconds)",
            date_key,
            carry_in,
        )
        return RolloverEngine.build_record(date_key, carry_in)

    @staticmethod
    def reset(
        date_key: str, store: RecordStore, settings: ScreenTimeSettings
    ) -> DailyRecord:
        """Rebuild the record for `date_key` as if none had existed.

        Checklist cleared, timer fields nulled, carry-in recomputed from the
        prior day under current settings.
        """
        records = store.read_records()
        if date_key in records:
            const.LOGGER.info("INFO: Discarding record for %s on reset", date_key)
        carry_in = RolloverEngine.carry_in_for(date_key, records, settings)
        return RolloverEngine.build_record(date_key, carry_in)
