"""Base manager class for ScreenTime managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.dispatcher import async_dispatcher_connect

from .. import const
from ..helpers.event_helpers import get_event_signal

if TYPE_CHECKING:
    from collections.abc import Callable

    from homeassistant.core import HomeAssistant

    from ..coordinator import ScreenTimeCoordinator


class BaseManager(ABC):
    """Base class for ScreenTime managers with scoped event support.

    Provides:
    - Instance-scoped event listening (listen)
    - Automatic cleanup via coordinator's config_entry.async_on_unload

    Subclasses must implement:
    - async_setup(): Subscribe to events, initialize state
    """

    def __init__(self, hass: HomeAssistant, coordinator: ScreenTimeCoordinator) -> None:
        """Initialize manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator managing this integration instance
        """
        self.hass = hass
        self.coordinator = coordinator
        self.entry_id = coordinator.config_entry.entry_id

    def listen(self, suffix: str, callback: Callable[..., Any]) -> None:
        """Subscribe to instance-scoped event with automatic cleanup.

        The subscription is removed when the config entry is unloaded.

        Args:
            suffix: Signal suffix constant to listen for
            callback: Function called when event fires (receives payload dict as arg)
        """
        signal = get_event_signal(self.entry_id, suffix)
        unsub = async_dispatcher_connect(self.hass, signal, callback)
        self.coordinator.config_entry.async_on_unload(unsub)
        const.LOGGER.debug(
            "Manager %s listening to event '%s' for instance %s",
            self.__class__.__name__,
            suffix,
            self.entry_id,
        )

    @abstractmethod
    async def async_setup(self) -> None:
        """Set up the manager (subscribe to events, initialize state).

        Called once during integration setup.
        """
