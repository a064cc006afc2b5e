"""Type definitions for ScreenTime data structures.

TypedDicts describe the flat, JSON-compatible structures persisted in
storage. Keys mirror the DATA_* constants in const.py.

IMPORTANT: This file must NOT import from coordinator.py or any module that
imports coordinator, to avoid circular dependencies.
Only import from typing (type machinery).

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime normalization of loaded
data lives in data_builders.py.
"""

from typing import Any, Literal, Protocol, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

DateKey = str  # Canonical calendar date "2026-01-18"
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
CheckItem = Literal["preparation", "homework", "bedtime", "departure"]
AlarmTone = Literal["beep", "chime"]


# =============================================================================
# Configuration
# =============================================================================


class ScreenTimeSettings(TypedDict):
    """Process-wide allowance settings.

    Always produced by data_builders.build_settings(), which guarantees the
    documented bounds (minutes in [1, 180], volume in [0, 100], 4-digit PIN).
    """

    carry_over_enabled: bool
    parent_pin: str
    alarm_tone: AlarmTone
    alarm_volume: int
    full_completion_minutes: int
    fallback_minutes: int
    full_completion_minutes_weekend: int
    fallback_minutes_weekend: int


# =============================================================================
# Daily Record
# =============================================================================


class ChecklistState(TypedDict):
    """The closed set of four daily checklist items."""

    preparation: bool
    homework: bool
    bedtime: bool
    departure: bool


class DailyRecord(TypedDict):
    """One calendar day's allowance and countdown state.

    Created by: RolloverEngine.record_for() / RolloverEngine.reset()
    Transformed by: CountdownEngine, DailyRecordController
    Stored in: storage["records"][date]
    """

    date: DateKey
    checks: ChecklistState
    carry_in_seconds: int  # Fixed at creation
    locked_allocation_minutes: int | None  # None until first start/finish
    remaining_seconds: int | None  # None means never started
    is_running: bool
    is_alarming: bool
    anchor: ISODatetime | None  # Only set while running


RecordsMap = dict[DateKey, DailyRecord]


# =============================================================================
# Storage Port
# =============================================================================


class RecordStore(Protocol):
    """Whole-value storage port consumed by the core.

    The core never performs keyed writes: it reads the full records map,
    replaces one entry and writes the full map back. Concurrent writers
    are not synchronized (last writer wins).
    """

    def read_records(self) -> RecordsMap:
        """Return every stored daily record keyed by date."""

    def write_records(self, records: RecordsMap) -> None:
        """Replace the whole records map."""

    def read_settings(self) -> dict[str, Any]:
        """Return the raw (unnormalized) settings payload."""

    def write_settings(self, settings: ScreenTimeSettings) -> None:
        """Replace the settings record."""


# =============================================================================
# Event Payload Types (Manager Communication)
# =============================================================================


class AlarmChangedEvent(TypedDict):
    """Payload for SIGNAL_SUFFIX_ALARM_CHANGED."""

    alarming: bool
    tone: AlarmTone
    volume: int
