"""Tests for ScreenTime services."""

# pylint: disable=redefined-outer-name
# pylint: disable=unused-argument  # Some fixtures needed for setup only

from datetime import timedelta
from typing import Any

import pytest
import voluptuous as vol
from freezegun.api import FrozenDateTimeFactory
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_fire_time_changed,
)

from custom_components.screentime import const
from custom_components.screentime.coordinator import ScreenTimeCoordinator
from custom_components.screentime.helpers.auth_helpers import (
    require_screentime_coordinator,
)


def _coordinator(hass: HomeAssistant, entry: MockConfigEntry) -> ScreenTimeCoordinator:
    return hass.data[const.DOMAIN][entry.entry_id][const.COORDINATOR]


async def _call(hass: HomeAssistant, service: str, data: dict[str, Any] | None = None) -> None:
    await hass.services.async_call(const.DOMAIN, service, data or {}, blocking=True)
    await hass.async_block_till_done()


async def _check_all(hass: HomeAssistant) -> None:
    for item in const.CHECK_ITEMS:
        await _call(hass, const.SERVICE_TOGGLE_CHECK, {const.FIELD_ITEM: item})


# =============================================================================
# CHECKLIST
# =============================================================================


async def test_toggle_check(hass: HomeAssistant, init_integration: MockConfigEntry) -> None:
    """toggle_check flips one item and publishes the record."""
    await _call(hass, const.SERVICE_TOGGLE_CHECK, {const.FIELD_ITEM: const.CHECK_ITEM_HOMEWORK})

    checks = _coordinator(hass, init_integration).data[const.DATA_RECORD_CHECKS]
    assert checks[const.CHECK_ITEM_HOMEWORK] is True
    assert checks[const.CHECK_ITEM_BEDTIME] is False


async def test_toggle_unknown_item_rejected(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Only the four checklist items are accepted."""
    with pytest.raises(vol.Invalid):
        await _call(hass, const.SERVICE_TOGGLE_CHECK, {const.FIELD_ITEM: "dishes"})


# =============================================================================
# COUNTDOWN
# =============================================================================


async def test_start_incomplete_requires_confirmation(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Starting on the fallback allowance needs skip_confirmation."""
    with pytest.raises(HomeAssistantError, match="15 minutes"):
        await _call(hass, const.SERVICE_START_TIMER)

    record = _coordinator(hass, init_integration).data
    assert record[const.DATA_RECORD_REMAINING_SECONDS] is None
    assert not record[const.DATA_RECORD_IS_RUNNING]


async def test_start_with_skip_confirmation_grants_fallback(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Confirmed start locks the fallback allowance."""
    await _call(hass, const.SERVICE_START_TIMER, {const.FIELD_SKIP_CONFIRMATION: True})

    record = _coordinator(hass, init_integration).data
    assert record[const.DATA_RECORD_IS_RUNNING]
    assert record[const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES] == 15
    assert record[const.DATA_RECORD_REMAINING_SECONDS] == 15 * 60


async def test_complete_checklist_starts_without_confirmation(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """A full checklist earns the full allowance."""
    await _check_all(hass)
    await _call(hass, const.SERVICE_START_TIMER)

    record = _coordinator(hass, init_integration).data
    assert record[const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES] == 45
    assert record[const.DATA_RECORD_REMAINING_SECONDS] == 45 * 60


async def test_tick_pause_and_resume(
    hass: HomeAssistant,
    freezer: FrozenDateTimeFactory,
    init_integration: MockConfigEntry,
) -> None:
    """Timer ticks count down; pause keeps the rest; resume asks again."""
    coordinator = _coordinator(hass, init_integration)
    await _call(hass, const.SERVICE_START_TIMER, {const.FIELD_SKIP_CONFIRMATION: True})

    for _ in range(10):
        freezer.tick(timedelta(seconds=1))
        async_fire_time_changed(hass)
        await hass.async_block_till_done()

    assert coordinator.data[const.DATA_RECORD_REMAINING_SECONDS] == 15 * 60 - 10

    await _call(hass, const.SERVICE_PAUSE_TIMER)
    assert not coordinator.data[const.DATA_RECORD_IS_RUNNING]

    freezer.tick(timedelta(minutes=5))
    async_fire_time_changed(hass)
    await hass.async_block_till_done()
    assert coordinator.data[const.DATA_RECORD_REMAINING_SECONDS] == 15 * 60 - 10

    # Checklist still incomplete, so resuming needs confirmation too
    with pytest.raises(HomeAssistantError, match="15 minutes"):
        await _call(hass, const.SERVICE_START_TIMER)
    assert not coordinator.data[const.DATA_RECORD_IS_RUNNING]

    await _call(hass, const.SERVICE_START_TIMER, {const.FIELD_SKIP_CONFIRMATION: True})
    assert coordinator.data[const.DATA_RECORD_IS_RUNNING]
    assert coordinator.data[const.DATA_RECORD_REMAINING_SECONDS] == 15 * 60 - 10


async def test_start_while_running_is_ignored_without_confirmation(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """A repeated start is a silent no-op rather than a confirmation prompt."""
    await _call(hass, const.SERVICE_START_TIMER, {const.FIELD_SKIP_CONFIRMATION: True})
    await _call(hass, const.SERVICE_START_TIMER)

    record = _coordinator(hass, init_integration).data
    assert record[const.DATA_RECORD_IS_RUNNING]
    assert record[const.DATA_RECORD_REMAINING_SECONDS] == 15 * 60


async def test_toggle_ignored_while_running(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """The checklist is frozen during an active countdown."""
    await _call(hass, const.SERVICE_START_TIMER, {const.FIELD_SKIP_CONFIRMATION: True})
    await _call(hass, const.SERVICE_TOGGLE_CHECK, {const.FIELD_ITEM: const.CHECK_ITEM_HOMEWORK})

    checks = _coordinator(hass, init_integration).data[const.DATA_RECORD_CHECKS]
    assert checks[const.CHECK_ITEM_HOMEWORK] is False


async def test_finish_timer(hass: HomeAssistant, init_integration: MockConfigEntry) -> None:
    """finish_timer ends the day's countdown."""
    await _call(hass, const.SERVICE_START_TIMER, {const.FIELD_SKIP_CONFIRMATION: True})
    await _call(hass, const.SERVICE_FINISH_TIMER)

    record = _coordinator(hass, init_integration).data
    assert record[const.DATA_RECORD_REMAINING_SECONDS] == 0
    assert not record[const.DATA_RECORD_IS_RUNNING]
    assert not record[const.DATA_RECORD_IS_ALARMING]


# =============================================================================
# PARENT ACTIONS
# =============================================================================


async def test_reset_today_requires_pin(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """A wrong PIN is rejected and changes nothing."""
    await _call(hass, const.SERVICE_START_TIMER, {const.FIELD_SKIP_CONFIRMATION: True})

    with pytest.raises(HomeAssistantError, match=const.ERROR_INVALID_PIN):
        await _call(hass, const.SERVICE_RESET_TODAY, {const.FIELD_PIN: "0000"})

    assert _coordinator(hass, init_integration).data[const.DATA_RECORD_IS_RUNNING]


async def test_reset_today(hass: HomeAssistant, init_integration: MockConfigEntry) -> None:
    """The correct PIN rebuilds today's record."""
    await _check_all(hass)
    await _call(hass, const.SERVICE_START_TIMER)
    await _call(hass, const.SERVICE_RESET_TODAY, {const.FIELD_PIN: const.DEFAULT_PARENT_PIN})

    record = _coordinator(hass, init_integration).data
    assert record[const.DATA_RECORD_REMAINING_SECONDS] is None
    assert record[const.DATA_RECORD_LOCKED_ALLOCATION_MINUTES] is None
    assert not record[const.DATA_RECORD_IS_RUNNING]
    assert not any(record[const.DATA_RECORD_CHECKS].values())


async def test_update_settings(hass: HomeAssistant, init_integration: MockConfigEntry) -> None:
    """Settings change after PIN check; a new PIN replaces the old one."""
    await _call(
        hass,
        const.SERVICE_UPDATE_SETTINGS,
        {
            const.FIELD_PIN: const.DEFAULT_PARENT_PIN,
            const.FIELD_NEW_PIN: "8642",
            const.DATA_SETTINGS_FALLBACK_MINUTES: 25,
            const.DATA_SETTINGS_ALARM_TONE: const.ALARM_TONE_CHIME,
            const.DATA_SETTINGS_CARRY_OVER_ENABLED: True,
        },
    )

    coordinator = _coordinator(hass, init_integration)
    settings = coordinator.settings
    assert settings[const.DATA_SETTINGS_PARENT_PIN] == "8642"
    assert settings[const.DATA_SETTINGS_FALLBACK_MINUTES] == 25
    assert settings[const.DATA_SETTINGS_ALARM_TONE] == const.ALARM_TONE_CHIME
    assert settings[const.DATA_SETTINGS_CARRY_OVER_ENABLED] is True
    assert coordinator.controller.current_allocation() == 25

    with pytest.raises(HomeAssistantError, match=const.ERROR_INVALID_PIN):
        await _call(
            hass,
            const.SERVICE_UPDATE_SETTINGS,
            {const.FIELD_PIN: const.DEFAULT_PARENT_PIN, const.DATA_SETTINGS_ALARM_VOLUME: 10},
        )
    assert coordinator.settings[const.DATA_SETTINGS_ALARM_VOLUME] == const.DEFAULT_ALARM_VOLUME


@pytest.mark.parametrize(
    "data",
    [
        {const.DATA_SETTINGS_ALARM_VOLUME: 150},
        {const.DATA_SETTINGS_FALLBACK_MINUTES: 0},
        {const.DATA_SETTINGS_ALARM_TONE: "siren"},
        {const.FIELD_NEW_PIN: "12345"},
        {const.FIELD_NEW_PIN: "9999\n"},
        {const.FIELD_NEW_PIN: "\u0669\u0669\u0669\u0669"},
    ],
)
async def test_update_settings_out_of_range_rejected(
    hass: HomeAssistant, init_integration: MockConfigEntry, data: dict[str, Any]
) -> None:
    """Service calls are validated before reaching the controller."""
    with pytest.raises(vol.Invalid):
        await _call(
            hass,
            const.SERVICE_UPDATE_SETTINGS,
            {const.FIELD_PIN: const.DEFAULT_PARENT_PIN, **data},
        )

    settings = _coordinator(hass, init_integration).settings
    assert settings[const.DATA_SETTINGS_PARENT_PIN] == const.DEFAULT_PARENT_PIN


async def test_missing_entry_raises(hass: HomeAssistant) -> None:
    """Coordinator lookup fails loudly when nothing is loaded."""
    with pytest.raises(HomeAssistantError, match=const.MSG_NO_ENTRY_FOUND):
        require_screentime_coordinator(hass)
