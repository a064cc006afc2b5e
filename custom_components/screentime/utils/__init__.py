# File: utils/__init__.py
"""Pure Python utilities for ScreenTime.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed in this module.

Submodules:
    - dt_utils: Canonical date keys, calendar arithmetic, elapsed seconds
    - math_utils: Rounding and clamping for settings normalization

Usage:
    from . import dt_utils
    from .math_utils import coerce_bounded_int
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
