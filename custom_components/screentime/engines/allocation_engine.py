"""Allocation Engine - Pure logic for the earned daily allowance.

This engine provides stateless, pure Python functions for:
- Picking the weekday or weekend allowance bucket
- Granting full-completion or fallback minutes from checklist state

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import ChecklistState, ScreenTimeSettings


class AllocationEngine:
    """Pure logic engine for allowance minutes.

    All methods are static - no instance state. Settings are expected to
    come from data_builders.build_settings(), so every returned value is
    already within [MIN_ALLOWANCE_MINUTES, MAX_ALLOWANCE_MINUTES].
    """

    @staticmethod
    def is_complete(checks: ChecklistState) -> bool:
        """Return True when every checklist item is done."""
        return all(checks.get(item) is True for item in const.CHECK_ITEMS)

    @staticmethod
    def bucket_minutes(
        settings: ScreenTimeSettings, is_weekend: bool
    ) -> tuple[int, int]:
        """Return (full_completion, fallback) minutes for the day's bucket.

        Args:
            settings: Normalized settings
            is_weekend: Whether the date key falls on Saturday/Sunday

        Returns:
            Tuple of full-completion minutes and fallback minutes
        """
        if is_weekend:
            return (
                settings[const.DATA_SETTINGS_FULL_COMPLETION_MINUTES_WEEKEND],
                settings[const.DATA_SETTINGS_FALLBACK_MINUTES_WEEKEND],
            )
        return (
            settings[const.DATA_SETTINGS_FULL_COMPLETION_MINUTES],
            settings[const.DATA_SETTINGS_FALLBACK_MINUTES],
        )

    @staticmethod
    def compute(
        checks: ChecklistState, settings: ScreenTimeSettings, is_weekend: bool
    ) -> int:
        """Compute the allowance in minutes.

        Full-completion minutes if and only if all four items are checked,
        otherwise the fallback minutes, both taken from the applicable
        weekday/weekend bucket.

        Args:
            checks: Checklist state (closed set of four items)
            settings: Normalized settings
            is_weekend: Whether the day is a weekend day

        Returns:
            Allowance minutes
        """
        full, fallback = AllocationEngine.bucket_minutes(settings, is_weekend)
        return full if AllocationEngine.is_complete(checks) else fallback
