"""External processor processes.

A spawned processor is only observed through ``is_running()``; exit status
is logged but never changes how a batch is counted.
"""

import subprocess
import sys
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from export_builder.exceptions import SpawnError
from export_builder.utils import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ProcessHandle(Protocol):
    """Something that can report whether it is still running."""

    def is_running(self) -> bool:
        """Whether the process has not finished yet."""
        ...


class PopenHandle:
    """ProcessHandle backed by ``subprocess.Popen``."""

    def __init__(self, process: subprocess.Popen):
        self._process = process
        self._exit_logged = False

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def returncode(self) -> int | None:
        """Exit status once finished, None while running."""
        return self._process.returncode

    def is_running(self) -> bool:
        returncode = self._process.poll()
        if returncode is None:
            return True
        if not self._exit_logged:
            self._exit_logged = True
            if returncode:
                logger.warning(f"Processor exited with status {returncode}: {self!r}")
            else:
                logger.debug(f"Processor finished: {self!r}")
        return False

    def __repr__(self) -> str:
        return f"PopenHandle(pid={self.pid}, returncode={self.returncode})"


def default_processor_command() -> list[str]:
    """Command of the processor bundled with this package."""
    return [sys.executable, "-m", "export_builder.processor"]


def spawn_process(command: Sequence[str]) -> PopenHandle:
    """Launch a processor without waiting for it.

    Args:
        command: Executable followed by its arguments.

    Returns:
        Handle to the running process.

    Raises:
        SpawnError: If the process could not be launched.
    """
    args = [str(arg) for arg in command]
    try:
        process = subprocess.Popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise SpawnError(
            f"Failed to launch processor: {e}",
            details={"command": args},
        ) from e

    logger.debug(f"Spawned processor pid={process.pid}: {' '.join(args)}")
    return PopenHandle(process)
