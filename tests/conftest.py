"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from export_builder.exceptions import SpawnError


class FakeHandle:
    """ProcessHandle finishing on demand or after a number of polls."""

    def __init__(self, finish_on_poll: int | None = None, returncode: int = 0):
        self.finish_on_poll = finish_on_poll
        self.polls = 0
        self.finished = False
        self._returncode = returncode

    @property
    def returncode(self) -> int | None:
        return self._returncode if self.finished else None

    def finish(self) -> None:
        self.finished = True

    def is_running(self) -> bool:
        self.polls += 1
        if self.finish_on_poll is not None and self.polls >= self.finish_on_poll:
            self.finished = True
        return not self.finished


class FakeTimer:
    """Repeating timer fired by hand."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self.cancel_count = 0

    def fire(self) -> None:
        self.callback()

    def cancel(self) -> None:
        self.cancel_count += 1


class FakeHost:
    """SchedulerHost recording every interaction."""

    def __init__(self):
        self.timers: list[FakeTimer] = []
        self.keepalive = False
        self.keepalive_history: list[bool] = []
        self.removed: list[Path] = []
        self.remove_error: OSError | None = None
        self.commands: list[list[str]] = []
        self.handles: list[FakeHandle] = []
        self.finish_plan: list[int | None] = []
        self.failing_sources: set[str] = set()

    @property
    def timer(self) -> FakeTimer:
        return self.timers[-1]

    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    def set_keepalive(self, keep_alive: bool) -> None:
        self.keepalive = keep_alive
        self.keepalive_history.append(keep_alive)

    def remove_directory(self, path: Path) -> None:
        self.removed.append(path)
        if self.remove_error is not None:
            raise self.remove_error

    def spawn_process(self, command: Sequence[str]) -> FakeHandle:
        command = list(command)
        self.commands.append(command)
        if command[-2] in self.failing_sources:
            raise SpawnError(f"cannot launch {command[0]}")
        plan = self.finish_plan.pop(0) if self.finish_plan else None
        handle = FakeHandle(finish_on_poll=plan)
        self.handles.append(handle)
        return handle


class RecordingReporter:
    """StatusReporter keeping every displayed message."""

    def __init__(self):
        self.calls: list[tuple[str, float]] = []

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.calls]

    def display(self, message: str, timeout: float = 5.0) -> None:
        self.calls.append((message, timeout))


@pytest.fixture
def fake_host() -> FakeHost:
    """Provide a scheduler host driven by hand."""
    return FakeHost()


@pytest.fixture
def reporter() -> RecordingReporter:
    """Provide a reporter recording status messages."""
    return RecordingReporter()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a git project holding a document with two artifacts."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    (root / "assets" / "icons").mkdir(parents=True)

    design = root / "design"
    (design / "art").mkdir(parents=True)
    (design / "art" / "save.png").write_bytes(b"\x89PNG save")
    (design / "art" / "open.svg").write_text("<svg>open</svg>")

    (design / "icons.yaml").write_text(
        """
name: Icons
settings:
  output_path: assets/icons
artifacts:
  - id: SAVE-1
    name: toolbar/save
    source: art/save.png
    formats:
      - format: png
      - format: png
        suffix: "@2x"
  - id: OPEN-2
    name: toolbar/open
    source: art/open.svg
    formats:
      - format: svg
  - id: HIDDEN-3
    name: scratch
    source: art/open.svg
"""
    )
    return root


@pytest.fixture
def document_path(project_dir: Path) -> Path:
    """Path of the sample document inside the sample project."""
    return project_dir / "design" / "icons.yaml"


@pytest.fixture
def sample_config(tmp_path: Path) -> Path:
    """Create a sample configuration file."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        """
version: "1.0"

scheduler:
  poll_interval: 0.05

export:
  use_id_for_name: false
"""
    )
    return config_file
