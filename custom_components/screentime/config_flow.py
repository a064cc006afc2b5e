# File: config_flow.py
"""Config flow for the ScreenTime integration.

A single confirmation step. Allowance settings and the parent PIN live in
storage and are changed through the update_settings service, so the entry
itself carries no data.
"""

from typing import Any, Optional

import voluptuous as vol
from homeassistant import config_entries

from . import const

# pylint: disable=abstract-method


class ScreenTimeConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for ScreenTime (one instance per Home Assistant)."""

    VERSION = 1

    async def async_step_user(self, user_input: Optional[dict[str, Any]] = None):
        """Confirm creation of the single ScreenTime entry."""
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        if user_input is not None:
            return self.async_create_entry(title=const.SCREENTIME_TITLE, data={})

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER, data_schema=vol.Schema({})
        )
