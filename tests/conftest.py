"""Shared fixtures for ScreenTime tests."""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import patch

import pytest
from freezegun.api import FrozenDateTimeFactory
from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.screentime.const import (
    DATA_RECORDS,
    DATA_SETTINGS,
    DOMAIN,
    SCREENTIME_TITLE,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name

# 12:00 Monday 2026-01-19 in the canonical calendar
FROZEN_NOW = "2026-01-19T03:00:00+00:00"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title=SCREENTIME_TITLE,
        data={},
        entry_id="test_entry_id",
        unique_id="test_unique_id",
    )


@pytest.fixture
def mock_storage_data() -> dict[str, Any]:
    """Return mock storage data structure (empty settings, no records)."""
    return {
        DATA_SETTINGS: {},
        DATA_RECORDS: {},
    }


@pytest.fixture
def frozen_time(freezer: FrozenDateTimeFactory) -> FrozenDateTimeFactory:
    """Freeze the clock at FROZEN_NOW."""
    freezer.move_to(FROZEN_NOW)
    return freezer


@pytest.fixture
async def init_integration(
    frozen_time: FrozenDateTimeFactory,  # pylint: disable=redefined-outer-name
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
    mock_storage_data: dict[str, Any],  # pylint: disable=redefined-outer-name
) -> AsyncGenerator[MockConfigEntry]:
    """Set up the ScreenTime integration at FROZEN_NOW with mocked storage.

    The entry is unloaded at teardown so no interval listener outlives the
    test.
    """
    mock_config_entry.add_to_hass(hass)

    # Mock the Store's async_load to return our test data
    with patch(
        "homeassistant.helpers.storage.Store.async_load",
        return_value=mock_storage_data,
    ):
        assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
        await hass.async_block_till_done()

    yield mock_config_entry

    if mock_config_entry.state is ConfigEntryState.LOADED:
        assert await hass.config_entries.async_unload(mock_config_entry.entry_id)
        await hass.async_block_till_done()
