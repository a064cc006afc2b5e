"""Tests for ScreenTime diagnostics.

Diagnostics export the stored settings and records with the parent PIN
redacted.
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures shadow names
# pylint: disable=unused-argument  # Some fixtures needed for setup only

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.screentime import const
from custom_components.screentime.diagnostics import (
    async_get_config_entry_diagnostics,
)
from tests.helpers import load_storage_scenario


@pytest.mark.parametrize(
    "mock_storage_data", [load_storage_scenario("scenario_carry_over.yaml")]
)
async def test_config_entry_diagnostics_redacts_pin(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """The parent PIN never leaves the system."""
    result = await async_get_config_entry_diagnostics(hass, init_integration)

    settings = result[const.DATA_SETTINGS]
    assert settings[const.DATA_SETTINGS_PARENT_PIN] == "**REDACTED**"
    assert settings[const.DATA_SETTINGS_CARRY_OVER_ENABLED] is True
    assert "2468" not in str(result)


@pytest.mark.parametrize(
    "mock_storage_data", [load_storage_scenario("scenario_carry_over.yaml")]
)
async def test_config_entry_diagnostics_includes_records(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Every stored record plus today's in-flight record is exported."""
    result = await async_get_config_entry_diagnostics(hass, init_integration)

    assert set(result[const.DATA_RECORDS]) == {"2026-01-18", "2026-01-19"}
    today = result[const.DIAGNOSTICS_TODAY]
    assert today[const.DATA_RECORD_DATE] == "2026-01-19"
    assert today[const.DATA_RECORD_CARRY_IN_SECONDS] == 600
