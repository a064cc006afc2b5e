# File: __init__.py
"""Initialization file for the ScreenTime integration.

Handles setting up the integration: loading the stored settings and daily
records, preparing the coordinator and the alarm manager, registering
services and starting the countdown/rollover timers.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization for the daily record.
- Storage management for persistent data handling.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .coordinator import ScreenTimeCoordinator
from .managers import AlarmManager
from .services import async_setup_services, async_unload_services
from .storage_manager import ScreenTimeStorageManager


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for ScreenTime entry: %s", entry.entry_id)

    # Initialize the storage manager to handle persistent data.
    storage_manager = ScreenTimeStorageManager(hass, const.STORAGE_KEY)
    await storage_manager.async_initialize()

    # Create the coordinator; this resolves today's record immediately.
    coordinator = ScreenTimeCoordinator(hass, entry, storage_manager)

    # The alarm manager must be listening before the first refresh so a
    # record stored as alarming resumes its alarm.
    alarm_manager = AlarmManager(hass, coordinator)
    await alarm_manager.async_setup()

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise ConfigEntryNotReady from e

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: storage_manager,
        const.ALARM_MANAGER: alarm_manager,
    }

    async_setup_services(hass)

    coordinator.async_start_timers()

    const.LOGGER.info("INFO: ScreenTime setup complete for entry: %s", entry.entry_id)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading ScreenTime entry: %s", entry.entry_id)

    entry_data = hass.data.get(const.DOMAIN, {}).pop(entry.entry_id, None)
    if entry_data is not None:
        storage_manager: ScreenTimeStorageManager = entry_data[const.STORAGE_MANAGER]
        await storage_manager.async_save()

    if not hass.data.get(const.DOMAIN):
        await async_unload_services(hass)

    return True


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry."""
    const.LOGGER.info("INFO: Removing ScreenTime entry: %s", entry.entry_id)

    # The entry is already unloaded here, so use a fresh manager for the file.
    storage_manager = ScreenTimeStorageManager(hass, const.STORAGE_KEY)
    await storage_manager.async_delete_storage()

    const.LOGGER.info("INFO: ScreenTime entry data cleared: %s", entry.entry_id)
