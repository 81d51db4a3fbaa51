"""Integration test fixtures and configuration."""

import sys
from pathlib import Path

import pytest

from export_builder.config import Settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs real processor processes)",
    )


@pytest.fixture
def processor_command() -> list[str]:
    """Command of the bundled processor."""
    return [sys.executable, "-m", "export_builder.processor"]


@pytest.fixture
def settings(tmp_path: Path, processor_command: list[str]) -> Settings:
    """Settings polling quickly with scratch directories under tmp_path."""
    settings = Settings.model_validate({"export": {"scratch_base": str(tmp_path / "scratch")}})
    settings.scheduler.poll_interval = 0.02
    settings.processor.command = processor_command
    return settings
