# File: helpers/auth_helpers.py
"""Authorization helper functions for ScreenTime.

Coordinator lookup for service handlers and the parent PIN gate. The PIN
is a plain 4-digit string compare; there is no other authentication.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.exceptions import HomeAssistantError

from .. import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import ScreenTimeCoordinator


# ==============================================================================
# Coordinator Access
# ==============================================================================


def get_screentime_coordinator(
    hass: HomeAssistant,
) -> ScreenTimeCoordinator | None:
    """Retrieve the coordinator of the first loaded ScreenTime entry.

    Args:
        hass: HomeAssistant instance

    Returns:
        ScreenTimeCoordinator if found, None otherwise
    """
    for entry_data in hass.data.get(const.DOMAIN, {}).values():
        coordinator = entry_data.get(const.COORDINATOR)
        if coordinator is not None:
            return coordinator
    return None


def require_screentime_coordinator(hass: HomeAssistant) -> ScreenTimeCoordinator:
    """Return the coordinator or raise a user-facing error.

    Raises:
        HomeAssistantError: No ScreenTime entry is loaded
    """
    coordinator = get_screentime_coordinator(hass)
    if coordinator is None:
        const.LOGGER.warning("WARNING: %s", const.MSG_NO_ENTRY_FOUND)
        raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)
    return coordinator


# ==============================================================================
# Parent PIN
# ==============================================================================


def require_parent_pin(coordinator: ScreenTimeCoordinator, pin: str) -> None:
    """Raise unless `pin` matches the stored parent PIN.

    Raises:
        HomeAssistantError: PIN does not match
    """
    if not coordinator.controller.verify_pin(pin):
        const.LOGGER.warning("WARNING: Rejected parent action: invalid PIN")
        raise HomeAssistantError(const.ERROR_INVALID_PIN)
