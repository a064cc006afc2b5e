"""Manager modules for ScreenTime integration.

Managers are stateful, event-aware and bound to Home Assistant. They react
to signals emitted by the coordinator.
"""

from .alarm_manager import AlarmManager
from .base_manager import BaseManager

__all__ = [
    "AlarmManager",
    "BaseManager",
]
