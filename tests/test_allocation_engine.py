"""Tests for AllocationEngine - pure logic, no HA fixtures needed."""

from __future__ import annotations

from itertools import product

import pytest

from custom_components.screentime import const
from custom_components.screentime.data_builders import build_checklist, build_settings
from custom_components.screentime.engines.allocation_engine import AllocationEngine

SETTINGS = build_settings(
    {
        const.DATA_SETTINGS_FULL_COMPLETION_MINUTES: 60,
        const.DATA_SETTINGS_FALLBACK_MINUTES: 20,
        const.DATA_SETTINGS_FULL_COMPLETION_MINUTES_WEEKEND: 90,
        const.DATA_SETTINGS_FALLBACK_MINUTES_WEEKEND: 30,
    }
)

ALL_DONE = build_checklist({item: True for item in const.CHECK_ITEMS})


class TestCompute:
    """Full-completion vs fallback minutes."""

    def test_weekday_all_checked_gets_full(self) -> None:
        assert AllocationEngine.compute(ALL_DONE, SETTINGS, False) == 60

    def test_weekend_all_checked_gets_full(self) -> None:
        assert AllocationEngine.compute(ALL_DONE, SETTINGS, True) == 90

    def test_weekday_nothing_checked_gets_fallback(self) -> None:
        assert AllocationEngine.compute(build_checklist(), SETTINGS, False) == 20

    def test_weekend_nothing_checked_gets_fallback(self) -> None:
        assert AllocationEngine.compute(build_checklist(), SETTINGS, True) == 30

    @pytest.mark.parametrize("is_weekend", [False, True])
    def test_every_checklist_combination(self, is_weekend: bool) -> None:
        """Full minutes iff all four items are true, for every combination."""
        full, fallback = AllocationEngine.bucket_minutes(SETTINGS, is_weekend)
        for values in product([False, True], repeat=len(const.CHECK_ITEMS)):
            checks = build_checklist(dict(zip(const.CHECK_ITEMS, values)))
            expected = full if all(values) else fallback
            assert AllocationEngine.compute(checks, SETTINGS, is_weekend) == expected

    def test_result_always_within_bounds(self) -> None:
        """Clamped settings mean compute never leaves [1, 180]."""
        extreme = build_settings(
            {key: value for key, value in zip(const.SETTINGS_MINUTE_KEYS, (0, -5, 999, 180.4))}
        )
        for checks in (ALL_DONE, build_checklist()):
            for is_weekend in (False, True):
                minutes = AllocationEngine.compute(checks, extreme, is_weekend)
                assert (
                    const.MIN_ALLOWANCE_MINUTES
                    <= minutes
                    <= const.MAX_ALLOWANCE_MINUTES
                )


class TestIsComplete:
    """Checklist completeness."""

    def test_three_of_four_is_incomplete(self) -> None:
        checks = dict(ALL_DONE)
        checks[const.CHECK_ITEM_DEPARTURE] = False
        assert not AllocationEngine.is_complete(checks)  # type: ignore[arg-type]

    def test_missing_item_is_incomplete(self) -> None:
        checks = {item: True for item in const.CHECK_ITEMS[:3]}
        assert not AllocationEngine.is_complete(checks)  # type: ignore[arg-type]

    def test_all_items_complete(self) -> None:
        assert AllocationEngine.is_complete(ALL_DONE)
