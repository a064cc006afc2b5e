"""Test helpers for ScreenTime tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        FakeRecordStore, SoundRecorder,
        load_storage_scenario,
    )

See individual modules for full documentation:
- fakes.py: In-memory RecordStore and sound trigger
- setup.py: YAML storage scenarios for integration tests
"""

from tests.helpers.fakes import FakeRecordStore, SoundRecorder
from tests.helpers.setup import load_storage_scenario

__all__ = [
    "FakeRecordStore",
    "SoundRecorder",
    "load_storage_scenario",
]
