# File: coordinator.py
"""Coordinator for the ScreenTime integration.

Hosts the DailyRecordController on the Home Assistant event loop and drives
it on a schedule: a 1 second countdown tick and a 30 second rollover check.
Every command publishes the new record to listeners and emits an
instance-scoped alarm signal whenever the alarming flag flips.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.dispatcher import async_dispatcher_send
from homeassistant.helpers.event import async_track_time_interval
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from . import const
from .daily_record_controller import DailyRecordController
from .helpers.event_helpers import get_event_signal
from .storage_manager import ScreenTimeStorageManager
from .type_defs import AlarmChangedEvent, DailyRecord, ScreenTimeSettings


class ScreenTimeCoordinator(DataUpdateCoordinator[DailyRecord]):
    """Coordinator for ScreenTime integration.

    `data` is always today's DailyRecord. The coordinator itself polls
    nothing (update_interval=None); the countdown tick and rollover check
    are explicit time-interval listeners started by async_start_timers().
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        storage_manager: ScreenTimeStorageManager,
    ) -> None:
        """Initialize the ScreenTimeCoordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=None,
        )
        self.config_entry = config_entry
        self.storage_manager = storage_manager
        self.controller = DailyRecordController(storage_manager, dt_util.utcnow())
        self._alarm_published = False

    # -------------------------------------------------------------------------------------
    # Refresh and Scheduling
    # -------------------------------------------------------------------------------------

    async def _async_update_data(self) -> DailyRecord:
        """Bring today's record up to date (rollover, then elapsed time)."""
        now = dt_util.utcnow()
        self.controller.check_rollover(now)
        record = self.controller.tick(now)
        self._async_sync_alarm(record)
        return record

    @callback
    def async_start_timers(self) -> None:
        """Register the tick and rollover listeners for this entry."""
        self.config_entry.async_on_unload(
            async_track_time_interval(
                self.hass, self._async_handle_tick, const.TICK_INTERVAL
            )
        )
        self.config_entry.async_on_unload(
            async_track_time_interval(
                self.hass,
                self._async_handle_rollover_check,
                const.ROLLOVER_CHECK_INTERVAL,
            )
        )
        const.LOGGER.debug(
            "DEBUG: Timers started (tick=%s, rollover=%s)",
            const.TICK_INTERVAL,
            const.ROLLOVER_CHECK_INTERVAL,
        )

    @callback
    def _async_handle_tick(self, _now: datetime) -> None:
        """Advance the countdown by elapsed wall-clock time."""
        if not self.controller.is_running:
            return
        self._async_publish(self.controller.tick(dt_util.utcnow()))

    @callback
    def _async_handle_rollover_check(self, _now: datetime) -> None:
        """Switch records when the canonical date changes."""
        self._async_publish(self.controller.check_rollover(dt_util.utcnow()))

    # -------------------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------------------

    @property
    def settings(self) -> ScreenTimeSettings:
        """Return normalized settings."""
        return self.controller.settings

    @callback
    def async_toggle_check(self, item: str) -> DailyRecord:
        """Flip a checklist item (ignored while running)."""
        return self._async_publish(self.controller.toggle_check(item))

    @callback
    def async_start_timer(self) -> DailyRecord:
        """Start or resume the countdown."""
        if not self.controller.can_start():
            const.LOGGER.debug(
                "DEBUG: Start ignored: running=%s, remaining=%s",
                self.controller.is_running,
                self.controller.effective_remaining(),
            )
        return self._async_publish(self.controller.start(dt_util.utcnow()))

    @callback
    def async_pause_timer(self) -> DailyRecord:
        """Pause the countdown."""
        return self._async_publish(self.controller.pause(dt_util.utcnow()))

    @callback
    def async_finish_timer(self) -> DailyRecord:
        """End the countdown and dismiss the alarm."""
        return self._async_publish(self.controller.finish())

    @callback
    def async_reset_today(self) -> DailyRecord:
        """Rebuild today's record from scratch."""
        return self._async_publish(self.controller.reset_today(dt_util.utcnow()))

    @callback
    def async_update_settings(self, changes: dict[str, Any]) -> ScreenTimeSettings:
        """Merge and persist settings changes."""
        settings = self.controller.update_settings(changes)
        self.async_update_listeners()
        return settings

    # -------------------------------------------------------------------------------------
    # Publishing
    # -------------------------------------------------------------------------------------

    @callback
    def _async_publish(self, record: DailyRecord) -> DailyRecord:
        """Push the record to listeners and follow the alarming flag."""
        if record is not self.data:
            self.async_set_updated_data(record)
        self._async_sync_alarm(record)
        return record

    @callback
    def _async_sync_alarm(self, record: DailyRecord) -> None:
        """Emit SIGNAL_SUFFIX_ALARM_CHANGED on every alarming flip."""
        alarming = record[const.DATA_RECORD_IS_ALARMING]
        if alarming == self._alarm_published:
            return
        self._alarm_published = alarming

        settings = self.controller.settings
        payload: AlarmChangedEvent = {
            const.SIGNAL_DATA_ALARMING: alarming,
            const.SIGNAL_DATA_TONE: settings[const.DATA_SETTINGS_ALARM_TONE],
            const.SIGNAL_DATA_VOLUME: settings[const.DATA_SETTINGS_ALARM_VOLUME],
        }
        async_dispatcher_send(
            self.hass,
            get_event_signal(
                self.config_entry.entry_id, const.SIGNAL_SUFFIX_ALARM_CHANGED
            ),
            payload,
        )
