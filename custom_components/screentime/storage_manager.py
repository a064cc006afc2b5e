# File: storage_manager.py
"""Handles persistent data storage for the ScreenTime integration.

Uses Home Assistant's Storage helper to save and load the settings record
and the per-date daily records, ensuring the state is preserved across
restarts. Implements the RecordStore port consumed by the controller.
"""

from __future__ import annotations

from typing import Any

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.storage import Store

from . import const
from .type_defs import RecordsMap, ScreenTimeSettings


class ScreenTimeStorageManager:
    """Manages loading, saving, and accessing data from Home Assistant's storage.

    Reads are served from an in-memory cache. Writes replace a whole section
    of the cache and schedule a delayed, best-effort save; nothing here
    raises to the caller.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the storage manager.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: dict[str, Any] = self._get_default_structure()

    @staticmethod
    def _get_default_structure() -> dict[str, Any]:
        """Return the canonical empty data structure.

        Settings start empty; data_builders.build_settings() fills in
        defaults on every read.
        """
        return {
            const.DATA_SETTINGS: {},
            const.DATA_RECORDS: {},
        }

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        Missing or malformed data is replaced with the default structure
        rather than propagated.
        """
        const.LOGGER.debug("DEBUG: ScreenTimeStorageManager: Loading data from storage")
        existing_data = await self._store.async_load()

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = self._get_default_structure()
            return

        if not isinstance(existing_data, dict):
            const.LOGGER.warning(
                "WARNING: Stored data is %s, not a dict. Starting from defaults",
                type(existing_data).__name__,
            )
            self._data = self._get_default_structure()
            return

        settings = existing_data.get(const.DATA_SETTINGS)
        if not isinstance(settings, dict):
            if settings is not None:
                const.LOGGER.warning(
                    "WARNING: Stored settings are malformed. Using defaults"
                )
            settings = {}

        records = existing_data.get(const.DATA_RECORDS)
        if not isinstance(records, dict):
            if records is not None:
                const.LOGGER.warning(
                    "WARNING: Stored records are malformed. Starting with an empty map"
                )
            records = {}

        valid_records = {
            key: value
            for key, value in records.items()
            if isinstance(key, str) and isinstance(value, dict)
        }
        if len(valid_records) != len(records):
            const.LOGGER.warning(
                "WARNING: Dropped %s malformed daily record(s)",
                len(records) - len(valid_records),
            )

        self._data = {
            const.DATA_SETTINGS: settings,
            const.DATA_RECORDS: valid_records,
        }
        const.LOGGER.debug(
            "DEBUG: Loaded existing data from storage: %s records",
            len(valid_records),
        )

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    # -------------------------------------------------------------------------------------
    # RecordStore port
    # -------------------------------------------------------------------------------------

    def read_records(self) -> RecordsMap:
        """Return a shallow copy of the records map."""
        return dict(self._data[const.DATA_RECORDS])

    def write_records(self, records: RecordsMap) -> None:
        """Replace the whole records map and schedule a save."""
        self._data[const.DATA_RECORDS] = dict(records)
        self._async_schedule_save()

    def read_settings(self) -> dict[str, Any]:
        """Return the raw settings payload."""
        return dict(self._data[const.DATA_SETTINGS])

    def write_settings(self, settings: ScreenTimeSettings) -> None:
        """Replace the settings record and schedule a save."""
        self._data[const.DATA_SETTINGS] = dict(settings)
        self._async_schedule_save()

    # -------------------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------------------

    @callback
    def _async_schedule_save(self) -> None:
        """Schedule a delayed write of the whole data structure."""
        self._store.async_delay_save(lambda: self._data, const.STORAGE_SAVE_DELAY)

    async def async_save(self) -> None:
        """Save the current data structure to storage immediately.

        Also cancels any pending delayed save.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
        """
        try:
            await self._store.async_save(self._data)
            const.LOGGER.debug("DEBUG: Data saved successfully to storage")
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s. "
                "Data contains types that cannot be converted to JSON",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s. "
                "Data structure may be corrupted",
                err,
            )

    async def async_delete_storage(self) -> None:
        """Delete the storage file completely from disk."""
        self._data = self._get_default_structure()
        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
