# File: utils/math_utils.py
"""Math and calculation utilities for ScreenTime.

Pure Python math functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.

Functions:
    - round_half_up: Round to the nearest integer, halves rounded up
    - clamp: Bound a value to an inclusive range
    - coerce_bounded_int: Normalize a loosely typed number into a bounded int
"""

from __future__ import annotations

import math
from typing import Any


def round_half_up(value: float) -> int:
    """Round a number to the nearest integer with halves rounded up.

    Python's round() uses banker's rounding (round(2.5) == 2); stored
    minute and volume values expect 2.5 → 3.

    Examples:
        round_half_up(2.5) → 3
        round_half_up(2.4) → 2
        round_half_up(-2.5) → -2
    """
    return math.floor(value + 0.5)


def clamp(value: int, minimum: int, maximum: int) -> int:
    """Bound a value to the inclusive range [minimum, maximum]."""
    return max(minimum, min(maximum, value))


def coerce_bounded_int(
    value: Any, minimum: int, maximum: int, default: int
) -> int:
    """Normalize a loosely typed number into a bounded integer.

    Numbers are rounded half-up and clamped. Anything else (strings, None,
    booleans, NaN, infinities) yields `default`.

    Args:
        value: Raw value from storage or a service call
        minimum: Inclusive lower bound
        maximum: Inclusive upper bound
        default: Substitute for non-numeric or non-finite input

    Returns:
        An int within [minimum, maximum], or `default`.

    Examples:
        coerce_bounded_int(200, 1, 180, 45) → 180
        coerce_bounded_int(0.6, 1, 180, 45) → 1
        coerce_bounded_int("30", 1, 180, 45) → 45
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    return clamp(round_half_up(value), minimum, maximum)
