"""Scenario loading for ScreenTime integration tests.

Scenarios live in tests/scenarios/*.yaml and describe the raw storage
payload (settings plus records map) the integration finds at startup.

Example:
    @pytest.fixture
    def mock_storage_data():
        return load_storage_scenario("scenario_running.yaml")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from custom_components.screentime import const

SCENARIO_DIR = Path(__file__).parent.parent / "scenarios"


def load_storage_scenario(name: str | Path) -> dict[str, Any]:
    """Load a storage scenario from YAML.

    Args:
        name: File name under tests/scenarios, or an absolute path

    Returns:
        Storage payload with both top-level sections present

    Raises:
        FileNotFoundError: Scenario file does not exist
    """
    path = Path(name)
    if not path.is_absolute():
        path = SCENARIO_DIR / path

    if not path.exists():
        raise FileNotFoundError(f"Scenario YAML not found: {path}")

    with open(path, encoding="utf-8") as f:
        yaml_data = yaml.safe_load(f) or {}

    return {
        const.DATA_SETTINGS: yaml_data.get(const.DATA_SETTINGS) or {},
        const.DATA_RECORDS: yaml_data.get(const.DATA_RECORDS) or {},
    }
