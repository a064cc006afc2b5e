"""Engine modules for ScreenTime integration.

Contains specialized computation engines:
- allocation_engine: Earned allowance from checklist and weekday/weekend bucket
- rollover_engine: Daily record creation, carry-over and reset
- countdown_engine: Anchor-based countdown state machine
"""

# Use relative imports within package to avoid mypy module resolution issues
from .allocation_engine import AllocationEngine
from .countdown_engine import CountdownEngine
from .rollover_engine import RolloverEngine

__all__ = [
    "AllocationEngine",
    "CountdownEngine",
    "RolloverEngine",
]
