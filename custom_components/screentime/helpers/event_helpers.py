# File: helpers/event_helpers.py
"""Event helper functions for ScreenTime.

Instance-scoped dispatcher signals (manager communication) and the bus
event that serves as the default alarm sound trigger.

All functions here require a `hass` object or build names for HA's
dispatcher.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.core import callback

from .. import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant


# ==============================================================================
# Event Signal Helpers (Manager Communication)
# ==============================================================================


def get_event_signal(entry_id: str, suffix: str) -> str:
    """Build instance-scoped event signal name for dispatcher.

    Each config entry gets its own signal namespace, so managers can
    emit/listen without cross-talk between instances.

    Format: 'screentime_{entry_id}_{suffix}'

    Args:
        entry_id: ConfigEntry.entry_id from coordinator
        suffix: Signal suffix constant from const.py (e.g., SIGNAL_SUFFIX_ALARM_CHANGED)

    Returns:
        Fully qualified signal name scoped to this integration instance

    Example:
        >>> get_event_signal("abc123", const.SIGNAL_SUFFIX_ALARM_CHANGED)
        'screentime_abc123_alarm_changed'
    """
    return f"{const.DOMAIN}_{entry_id}_{suffix}"


# ==============================================================================
# Alarm Sound Trigger
# ==============================================================================


@callback
def async_fire_alarm_sound(
    hass: HomeAssistant, entry_id: str, tone: str, volume: int
) -> None:
    """Fire the alarm sound event on the Home Assistant bus.

    Fire-and-forget. Automations listening for EVENT_ALARM_TRIGGERED turn
    it into audio (media player, chime, speaker); with no listener the event
    is simply dropped, which covers installs without audio capability.
    """
    hass.bus.async_fire(
        const.EVENT_ALARM_TRIGGERED,
        {
            const.EVENT_DATA_ENTRY_ID: entry_id,
            const.EVENT_DATA_TONE: tone,
            const.EVENT_DATA_VOLUME: volume,
        },
    )
    const.LOGGER.debug(
        "DEBUG: Alarm sound triggered (tone=%s, volume=%s)", tone, volume
    )
