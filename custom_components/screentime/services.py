# File: services.py
"""Defines custom services for the ScreenTime integration.

These services are the command surface for dashboards, scripts and
automations: checklist edits, countdown control, and PIN-gated parent
actions (reset today, update settings).
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .data_builders import is_valid_pin
from .helpers.auth_helpers import require_parent_pin, require_screentime_coordinator

# --- Service Schemas ---
TOGGLE_CHECK_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_ITEM): vol.In(const.CHECK_ITEMS),
    }
)

START_TIMER_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_SKIP_CONFIRMATION, default=False): cv.boolean,
    }
)

EMPTY_SCHEMA = vol.Schema({})

RESET_TODAY_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_PIN): cv.string,
    }
)


def _parent_pin(value: Any) -> str:
    """Validate a new parent PIN with the same rule the settings loader uses."""
    if not is_valid_pin(value):
        raise vol.Invalid(const.ERROR_INVALID_PIN_FORMAT)
    return value


_MINUTES = vol.All(
    vol.Coerce(int),
    vol.Range(min=const.MIN_ALLOWANCE_MINUTES, max=const.MAX_ALLOWANCE_MINUTES),
)

UPDATE_SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_PIN): cv.string,
        vol.Optional(const.FIELD_NEW_PIN): _parent_pin,
        vol.Optional(const.DATA_SETTINGS_CARRY_OVER_ENABLED): cv.boolean,
        vol.Optional(const.DATA_SETTINGS_ALARM_TONE): vol.In(const.ALARM_TONES),
        vol.Optional(const.DATA_SETTINGS_ALARM_VOLUME): vol.All(
            vol.Coerce(int),
            vol.Range(min=const.MIN_ALARM_VOLUME, max=const.MAX_ALARM_VOLUME),
        ),
        vol.Optional(const.DATA_SETTINGS_FULL_COMPLETION_MINUTES): _MINUTES,
        vol.Optional(const.DATA_SETTINGS_FALLBACK_MINUTES): _MINUTES,
        vol.Optional(const.DATA_SETTINGS_FULL_COMPLETION_MINUTES_WEEKEND): _MINUTES,
        vol.Optional(const.DATA_SETTINGS_FALLBACK_MINUTES_WEEKEND): _MINUTES,
    }
)


def async_setup_services(hass: HomeAssistant) -> None:
    """Register ScreenTime services."""

    async def handle_toggle_check(call: ServiceCall) -> None:
        """Handle flipping a checklist item."""
        coordinator = require_screentime_coordinator(hass)
        item = call.data[const.FIELD_ITEM]
        coordinator.async_toggle_check(item)
        const.LOGGER.info("INFO: Checklist item '%s' toggle requested", item)

    async def handle_start_timer(call: ServiceCall) -> None:
        """Handle starting or resuming the countdown."""
        coordinator = require_screentime_coordinator(hass)
        controller = coordinator.controller

        if (
            controller.requires_confirmation()
            and controller.can_start()
            and not call.data[const.FIELD_SKIP_CONFIRMATION]
        ):
            raise HomeAssistantError(
                const.ERROR_CONFIRMATION_REQUIRED.format(controller.fallback_minutes())
            )

        coordinator.async_start_timer()

    async def handle_pause_timer(call: ServiceCall) -> None:
        """Handle pausing the countdown."""
        coordinator = require_screentime_coordinator(hass)
        coordinator.async_pause_timer()

    async def handle_finish_timer(call: ServiceCall) -> None:
        """Handle ending the countdown (also dismisses the alarm)."""
        coordinator = require_screentime_coordinator(hass)
        coordinator.async_finish_timer()

    async def handle_reset_today(call: ServiceCall) -> None:
        """Handle the parent's reset of today's record."""
        coordinator = require_screentime_coordinator(hass)
        require_parent_pin(coordinator, call.data[const.FIELD_PIN])
        coordinator.async_reset_today()

    async def handle_update_settings(call: ServiceCall) -> None:
        """Handle the parent's settings changes."""
        coordinator = require_screentime_coordinator(hass)
        require_parent_pin(coordinator, call.data[const.FIELD_PIN])

        changes = {
            key: value
            for key, value in call.data.items()
            if key not in (const.FIELD_PIN, const.FIELD_NEW_PIN)
        }
        if const.FIELD_NEW_PIN in call.data:
            changes[const.DATA_SETTINGS_PARENT_PIN] = call.data[const.FIELD_NEW_PIN]

        coordinator.async_update_settings(changes)

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_TOGGLE_CHECK,
        handle_toggle_check,
        schema=TOGGLE_CHECK_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_START_TIMER,
        handle_start_timer,
        schema=START_TIMER_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_PAUSE_TIMER,
        handle_pause_timer,
        schema=EMPTY_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_FINISH_TIMER,
        handle_finish_timer,
        schema=EMPTY_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RESET_TODAY,
        handle_reset_today,
        schema=RESET_TODAY_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_SETTINGS,
        handle_update_settings,
        schema=UPDATE_SETTINGS_SCHEMA,
    )

    const.LOGGER.debug("DEBUG: ScreenTime services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister ScreenTime services when unloading the integration."""
    for service in const.SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.debug("DEBUG: ScreenTime services have been unregistered")
