"""Shared fixtures for the plotting tests."""

from pathlib import Path

import pytest


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write CSV text into tmp_path and return its path."""

    def _write(text: str, name: str = "data.csv") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def usage_csv(write_csv):
    """Small valid usage table with three users."""
    return write_csv(
        "metric_1,metric_2,user\n"
        "1.5,20.0,3\n"
        "2.0,35.5,1\n"
        "10.0,4.2,2\n"
        "3.3,8.0,1\n"
        "7.1,12.9,3\n"
    )
