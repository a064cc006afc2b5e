# File: daily_record_controller.py
"""Orchestrates commands against today's daily record.

The controller mediates checklist edits, countdown commands and rollover
checks. It consults the engines for every decision and writes each changed
record straight through the RecordStore port (read all, replace one entry,
write all).

ARCHITECTURE: Pure Python, NO Home Assistant dependencies. The only state
held here is the in-flight record for "today"; settings are re-read and
normalized from the store on every access. Scheduling (1 s tick, 30 s
rollover check) is the caller's job - see coordinator.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import const
from .data_builders import build_settings
from .engines import AllocationEngine, CountdownEngine, RolloverEngine
from .utils.dt_utils import dt_date_key, dt_is_weekend

if TYPE_CHECKING:
    from datetime import datetime

    from .type_defs import DailyRecord, RecordStore, ScreenTimeSettings


class DailyRecordController:
    """Command surface over today's DailyRecord.

    Commands that are not valid in the current state (toggling while
    running, starting with nothing left, pausing when stopped) return the
    unchanged record. Use can_start()/is_running to tell accepted commands
    from ignored ones.
    """

    def __init__(self, store: RecordStore, now: datetime) -> None:
        """Initialize the controller and load today's record.

        Args:
            store: Storage port holding settings and the records map
            now: Current instant, used to resolve today's date key
        """
        self._store = store
        self._record: DailyRecord = self.load(now)

    # -------------------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------------------

    @property
    def record(self) -> DailyRecord:
        """Return the in-flight record for today."""
        return self._record

    @property
    def settings(self) -> ScreenTimeSettings:
        """Return normalized settings, re-read from the store."""
        return build_settings(self._store.read_settings())

    @property
    def is_running(self) -> bool:
        """Return True while the countdown is running."""
        return self._record[const.DATA_RECORD_IS_RUNNING]

    @property
    def is_alarming(self) -> bool:
        """Return True while the expiry alarm is active."""
        return self._record[const.DATA_RECORD_IS_ALARMING]

    def is_weekend(self) -> bool:
        """Return True when today's record falls on a weekend."""
        return dt_is_weekend(self._record[const.DATA_RECORD_DATE])

    def current_allocation(self) -> int:
        """Return the allowance the checklist earns right now."""
        return AllocationEngine.compute(
            self._record[const.DATA_RECORD_CHECKS], self.settings, self.is_weekend()
        )

    def granted_minutes(self) -> int:
        """Return the locked allocation, or the current one when unlocked."""
        locked = self._record[const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES]
        return self.current_allocation() if locked is None else locked

    def fallback_minutes(self) -> int:
        """Return the fallback allowance for today's bucket."""
        return AllocationEngine.bucket_minutes(self.settings, self.is_weekend())[1]

    def effective_remaining(self) -> int:
        """Return the seconds the countdown has (or would start with)."""
        return CountdownEngine.effective_remaining(
            self._record, self.granted_minutes()
        )

    def can_start(self) -> bool:
        """Return True when start() would be accepted."""
        return CountdownEngine.can_start(self._record, self.granted_minutes())

    def requires_confirmation(self) -> bool:
        """Return True when starting now would only grant the fallback.

        Confirmation itself is presentation policy; callers gate start() on
        this predicate.
        """
        return not AllocationEngine.is_complete(self._record[const.DATA_RECORD_CHECKS])

    def verify_pin(self, candidate: str) -> bool:
        """Compare `candidate` with the parent PIN."""
        return candidate == self.settings[const.DATA_SETTINGS_PARENT_PIN]

    # -------------------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------------------

    def load(self, now: datetime) -> DailyRecord:
        """Resolve today's record (reusing or creating it) and persist it."""
        record = RolloverEngine.record_for(dt_date_key(now), self._store, self.settings)
        self._persist(record)
        self._record = record
        return record

    def check_rollover(self, now: datetime) -> DailyRecord:
        """Switch to a new record when the canonical date has changed.

        Intended to run periodically so a session left open across midnight
        corrects itself. The outgoing record is persisted first so carry-over
        sees its final remaining value.
        """
        today_key = dt_date_key(now)
        if today_key == self._record[const.DATA_RECORD_DATE]:
            return self._record

        const.LOGGER.info(
            "INFO: Date changed from %s to %s. Rolling over",
            self._record[const.DATA_RECORD_DATE],
            today_key,
        )
        self._persist(self._record)
        record = RolloverEngine.record_for(today_key, self._store, self.settings)
        self._persist(record)
        self._record = record
        return record

    def reset_today(self, now: datetime) -> DailyRecord:
        """Rebuild today's record from scratch and persist it."""
        today_key = dt_date_key(now)
        record = RolloverEngine.reset(today_key, self._store, self.settings)
        self._persist(record)
        self._record = record
        const.LOGGER.info("INFO: Daily record for %s reset", today_key)
        return record

    # -------------------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------------------

    def toggle_check(self, item: str) -> DailyRecord:
        """Flip a checklist item. Ignored while the countdown is running."""
        if item not in const.CHECK_ITEMS:
            const.LOGGER.warning("WARNING: Unknown checklist item '%s' ignored", item)
            return self._record
        if self.is_running:
            const.LOGGER.debug(
                "DEBUG: Toggle of '%s' ignored while countdown is running", item
            )
            return self._record

        checks = dict(self._record[const.DATA_RECORD_CHECKS])
        checks[item] = not checks[item]
        return self._apply({**self._record, const.DATA_RECORD_CHECKS: checks})  # type: ignore[arg-type]

    def start(self, now: datetime) -> DailyRecord:
        """Start or resume the countdown."""
        return self._apply(
            CountdownEngine.start(self._record, self.granted_minutes(), now)
        )

    def pause(self, now: datetime) -> DailyRecord:
        """Pause the countdown."""
        return self._apply(CountdownEngine.pause(self._record, now))

    def finish(self) -> DailyRecord:
        """End the countdown now and dismiss any alarm."""
        return self._apply(
            CountdownEngine.finish(self._record, self.granted_minutes())
        )

    def tick(self, now: datetime) -> DailyRecord:
        """Account for elapsed wall-clock time."""
        return self._apply(CountdownEngine.tick(self._record, now))

    def update_settings(self, changes: dict[str, Any]) -> ScreenTimeSettings:
        """Merge `changes` into the stored settings and write them back.

        Values pass through build_settings(), so out-of-range numbers are
        clamped and malformed values fall back to defaults.
        """
        merged = {**self.settings, **changes}
        settings = build_settings(merged)
        self._store.write_settings(settings)
        const.LOGGER.info(
            "INFO: Settings updated: %s",
            sorted(key for key in changes if key != const.DATA_SETTINGS_PARENT_PIN),
        )
        return settings

    # -------------------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------------------

    def _apply(self, record: DailyRecord) -> DailyRecord:
        """Adopt `record` as today's record, persisting only on change."""
        if record is self._record or record == self._record:
            return self._record
        self._persist(record)
        self._record = record
        return record

    def _persist(self, record: DailyRecord) -> None:
        """Write one record through the port as a whole-map replace."""
        records = dict(self._store.read_records())
        records[record[const.DATA_RECORD_DATE]] = record
        self._store.write_records(records)
