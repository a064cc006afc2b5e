# File: helpers/__init__.py
"""Home Assistant-bound helper functions for ScreenTime.

This module contains functions that REQUIRE Home Assistant dependencies.

NOTE: Functions that need `hass` object belong here, NOT in utils/.

Submodules:
    - event_helpers: Instance-scoped dispatcher signals, alarm bus events
    - auth_helpers: Coordinator lookup and parent PIN checks

Usage:
    from .helpers.event_helpers import get_event_signal
    from .helpers import auth_helpers
"""

from . import auth_helpers, event_helpers

__all__ = [
    "auth_helpers",
    "event_helpers",
]
