# tests/box_stats/conftest.py
"""Pytest configuration and shared fixtures for box_stats tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure boxcalc package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def linear_axes():
    """(x_axis, y_axis) pair of linear axes."""
    from boxcalc.box_stats.axis import LinearAxis
    return LinearAxis(), LinearAxis()


@pytest.fixture
def category_x_axes():
    """Category x axis with a linear value axis."""
    from boxcalc.box_stats.axis import CategoryAxis, LinearAxis
    return CategoryAxis(), LinearAxis()
