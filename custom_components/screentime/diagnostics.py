"""Diagnostics support for ScreenTime integration.

Exports the stored settings and daily records for troubleshooting, with
the parent PIN redacted.
"""

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import ScreenTimeCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry.

    Returns the raw storage data (same shape as the screentime_data file)
    plus today's in-flight record.
    """
    coordinator: ScreenTimeCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    return async_redact_data(
        {
            **coordinator.storage_manager.data,
            const.DIAGNOSTICS_TODAY: coordinator.controller.record,
        },
        const.DIAGNOSTICS_REDACT_KEYS,
    )
