"""Countdown Engine - Pure logic for the running/paused/expired timer.

This engine provides stateless, pure Python functions for:
- Start/resume with one-time allocation locking
- Drift-free ticking from a wall-clock anchor
- Pause (clamps, never alarms) and finish (forced end, clears alarm)

Elapsed time is always measured from the anchor, the instant the remaining
value was last exact. A tick advances the anchor by the whole seconds it
consumed instead of moving it to "now", so the sub-second remainder carries
into the next tick. Delayed, coalesced or skipped ticks (and process
suspension) therefore never lose or double-count time.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods. Each returns a new record; inputs are
never mutated. Commands that are invalid in the current state return the
record unchanged instead of raising.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import as_utc, dt_elapsed_seconds, dt_to_utc

if TYPE_CHECKING:
    from datetime import datetime

    from ..type_defs import DailyRecord


class CountdownEngine:
    """Pure logic engine for countdown state transitions.

    All methods are static - no instance state. `now` is always passed in
    explicitly so tests can drive the engine with a synthetic clock.
    """

    # =========================================================================
    # QUERIES
    # =========================================================================

    @staticmethod
    def effective_remaining(record: DailyRecord, allocation_minutes: int) -> int:
        """Return the seconds the countdown would run for if started now.

        The stored remaining value once the day has started, otherwise the
        allocation plus any carried-in seconds.
        """
        remaining = record[const.DATA_RECORD_REMAINING_SECONDS]
        if remaining is not None:
            return remaining
        return (
            allocation_minutes * const.SECONDS_PER_MINUTE
            + record[const.DATA_RECORD_CARRY_IN_SECONDS]
        )

    @staticmethod
    def can_start(record: DailyRecord, allocation_minutes: int) -> bool:
        """Return True when start() would be accepted."""
        if record[const.DATA_RECORD_IS_RUNNING]:
            return False
        return CountdownEngine.effective_remaining(record, allocation_minutes) > 0

    @staticmethod
    def _elapsed_since_anchor(record: DailyRecord, now: datetime) -> int | None:
        """Return whole seconds since the anchor, or None without an anchor."""
        anchor = dt_to_utc(record[const.DATA_RECORD_ANCHOR])
        if anchor is None:
            return None
        return dt_elapsed_seconds(anchor, now)

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    @staticmethod
    def start(
        record: DailyRecord, allocation_minutes: int, now: datetime
    ) -> DailyRecord:
        """Start or resume the countdown.

        The allocation passed in is frozen into locked_allocation_minutes the
        first time the day starts; later starts keep the locked value.

        Args:
            record: Current record
            allocation_minutes: Locked allocation, or the current one if unlocked
            now: Current instant

        Returns:
            Running record, or the unchanged record when already running or
            nothing is left to count down.
        """
        if not CountdownEngine.can_start(record, allocation_minutes):
            const.LOGGER.debug(
                "DEBUG: Start ignored for %s (running=%s)",
                record[const.DATA_RECORD_DATE],
                record[const.DATA_RECORD_IS_RUNNING],
            )
            return record

        locked = record[const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES]
        return {
            **record,
            const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES: (
                allocation_minutes if locked is None else locked
            ),
            const.DATA_RECORD_REMAINING_SECONDS: CountdownEngine.effective_remaining(
                record, allocation_minutes
            ),
            const.DATA_RECORD_IS_RUNNING: True,
            const.DATA_RECORD_IS_ALARMING: False,
            const.DATA_RECORD_ANCHOR: as_utc(now).isoformat(),
        }  # type: ignore[return-value]

    @staticmethod
    def tick(record: DailyRecord, now: datetime) -> DailyRecord:
        """Account for wall-clock time passed since the anchor.

        Reaching zero expires the countdown into the alarming state.
        Non-positive elapsed time (clock skew, back-dated ticks) is ignored.
        """
        if not record[const.DATA_RECORD_IS_RUNNING]:
            return record

        remaining = record[const.DATA_RECORD_REMAINING_SECONDS]
        elapsed = CountdownEngine._elapsed_since_anchor(record, now)
        if remaining is None or elapsed is None or elapsed <= 0:
            return record

        next_remaining = max(0, remaining - elapsed)
        if next_remaining > 0:
            anchor = dt_to_utc(record[const.DATA_RECORD_ANCHOR])
            return {
                **record,
                const.DATA_RECORD_REMAINING_SECONDS: next_remaining,
                const.DATA_RECORD_ANCHOR: (
                    anchor + timedelta(seconds=elapsed)  # type: ignore[operator]
                ).isoformat(),
            }  # type: ignore[return-value]

        const.LOGGER.info(
            "INFO: Countdown expired for %s", record[const.DATA_RECORD_DATE]
        )
        return {
            **record,
            const.DATA_RECORD_REMAINING_SECONDS: 0,
            const.DATA_RECORD_IS_RUNNING: False,
            const.DATA_RECORD_IS_ALARMING: True,
            const.DATA_RECORD_ANCHOR: None,
        }  # type: ignore[return-value]

    @staticmethod
    def pause(record: DailyRecord, now: datetime) -> DailyRecord:
        """Stop the countdown, keeping whatever time is left.

        Pausing never raises the alarm, even when the elapsed time has used
        up the remaining seconds: reaching zero here is a stop, not an expiry.
        """
        if not record[const.DATA_RECORD_IS_RUNNING]:
            return record

        remaining = record[const.DATA_RECORD_REMAINING_SECONDS] or 0
        elapsed = CountdownEngine._elapsed_since_anchor(record, now) or 0
        return {
            **record,
            const.DATA_RECORD_REMAINING_SECONDS: max(0, remaining - max(0, elapsed)),
            const.DATA_RECORD_IS_RUNNING: False,
            const.DATA_RECORD_IS_ALARMING: False,
            const.DATA_RECORD_ANCHOR: None,
        }  # type: ignore[return-value]

    @staticmethod
    def finish(record: DailyRecord, allocation_minutes: int) -> DailyRecord:
        """End the day's countdown now and dismiss any alarm.

        A day that is finished without ever starting still locks the
        allocation it would have earned.
        """
        locked = record[const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES]
        return {
            **record,
            const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES: (
                allocation_minutes if locked is None else locked
            ),
            const.DATA_RECORD_REMAINING_SECONDS: 0,
            const.DATA_RECORD_IS_RUNNING: False,
            const.DATA_RECORD_IS_ALARMING: False,
            const.DATA_RECORD_ANCHOR: None,
        }  # type: ignore[return-value]
