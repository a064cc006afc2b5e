"""Alarm Manager - Drives the repeating expiry alarm.

Listens for SIGNAL_SUFFIX_ALARM_CHANGED. On the rising edge it triggers the
sound once and schedules a repeat every ALARM_REPEAT_INTERVAL; on the
falling edge (finish or a fresh start) it cancels the repeat. The only
state held here is the repeat handle and the tone/volume captured when the
episode began.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from homeassistant.core import CALLBACK_TYPE, callback
from homeassistant.helpers.event import async_track_time_interval

from .. import const
from ..helpers.event_helpers import async_fire_alarm_sound
from .base_manager import BaseManager

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from homeassistant.core import HomeAssistant

    from ..coordinator import ScreenTimeCoordinator
    from ..type_defs import AlarmChangedEvent


class AlarmManager(BaseManager):
    """Repeats the alarm sound while the daily record is alarming."""

    def __init__(
        self,
        hass: HomeAssistant,
        coordinator: ScreenTimeCoordinator,
        sound_trigger: Callable[[str, int], None] | None = None,
    ) -> None:
        """Initialize the alarm manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator
            sound_trigger: trigger(tone, volume) collaborator; defaults to
                firing EVENT_ALARM_TRIGGERED on the bus
        """
        super().__init__(hass, coordinator)
        self._sound_trigger = sound_trigger or partial(
            async_fire_alarm_sound, hass, self.entry_id
        )
        self._unsub_repeat: CALLBACK_TYPE | None = None
        self._tone: str = const.DEFAULT_ALARM_TONE
        self._volume: int = const.DEFAULT_ALARM_VOLUME

    async def async_setup(self) -> None:
        """Subscribe to alarm changes and cancel the repeat on unload."""
        self.listen(const.SIGNAL_SUFFIX_ALARM_CHANGED, self._on_alarm_changed)
        self.coordinator.config_entry.async_on_unload(self.async_stop)

    @property
    def is_active(self) -> bool:
        """Return True while a repeat is scheduled."""
        return self._unsub_repeat is not None

    @callback
    def _on_alarm_changed(self, payload: AlarmChangedEvent) -> None:
        """Follow the record's alarming flag."""
        if payload[const.SIGNAL_DATA_ALARMING]:
            self.async_start(
                payload[const.SIGNAL_DATA_TONE], payload[const.SIGNAL_DATA_VOLUME]
            )
        else:
            self.async_stop()

    @callback
    def async_start(self, tone: str, volume: int) -> None:
        """Begin an alarm episode: sound now, then repeat on the interval."""
        if self._unsub_repeat is not None:
            return

        self._tone = tone
        self._volume = volume
        const.LOGGER.info(
            "INFO: Alarm started (tone=%s, volume=%s)", self._tone, self._volume
        )
        self._trigger()
        self._unsub_repeat = async_track_time_interval(
            self.hass, self._async_repeat, const.ALARM_REPEAT_INTERVAL
        )

    @callback
    def async_stop(self) -> None:
        """End the alarm episode and cancel the repeat handle."""
        if self._unsub_repeat is None:
            return
        self._unsub_repeat()
        self._unsub_repeat = None
        const.LOGGER.info("INFO: Alarm stopped")

    @callback
    def _async_repeat(self, _now: datetime) -> None:
        """Repeat the sound while the episode lasts."""
        self._trigger()

    def _trigger(self) -> None:
        """Invoke the sound collaborator; failures never stop the alarm."""
        try:
            self._sound_trigger(self._tone, self._volume)
        except Exception as err:  # pylint: disable=broad-exception-caught
            const.LOGGER.error("ERROR: Alarm sound trigger failed: %s", err)
