"""Shared test fixtures for habit engine tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary settings root with a settings.yaml."""
    root = tmp_path / "habits"
    root.mkdir(parents=True)

    settings = {
        "daysToShow": 7,
        "reverseOrder": False,
        "enableStreakFreezes": True,
        "maxFreezeDays": 2,
        "defaultColor": "#4CAF50",
        "timezone": "UTC",
    }
    (root / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    os.environ["HABIT_TRACKER_ROOT"] = str(root)
    os.environ.pop("HABIT_TRACKER_USERNAME", None)
    os.environ.pop("HABIT_TRACKER_PASSWORD", None)
    yield root
    if "HABIT_TRACKER_ROOT" in os.environ:
        del os.environ["HABIT_TRACKER_ROOT"]
