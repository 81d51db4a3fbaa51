"""Short-lived status messages shown to the user."""

from typing import Protocol

import click

from export_builder.utils import get_logger

logger = get_logger(__name__)


class StatusReporter(Protocol):
    """Displays a transient status message."""

    def display(self, message: str, timeout: float = 5.0) -> None: ...


class ConsoleStatusReporter:
    """StatusReporter writing a single status line to the terminal.

    On a terminal each message replaces the previous one in place; otherwise
    every message is written on its own line. Display never raises.
    """

    def __init__(self, enabled: bool = True, transient: bool | None = None):
        """Initialize reporter.

        Args:
            enabled: Show messages at all (disabled reporters are no-ops).
            transient: Overwrite the previous message in place
                (default: only when stdout is a terminal).
        """
        self.enabled = enabled
        self.transient = transient
        self._line_open = False

    def display(self, message: str, timeout: float = 5.0) -> None:
        if not self.enabled or not message:
            return

        logger.debug(f"{message} (timeout={timeout}s)")
        try:
            if self._is_transient():
                # color=True keeps the clear-line sequence when stdout is not a tty.
                click.echo(f"\r\x1b[2K{message}", nl=False, color=True)
                self._line_open = True
            else:
                click.echo(message)
        except Exception as e:
            logger.debug(f"Failed to display status message: {e}")

    def finish(self) -> None:
        """Terminate an in-place status line."""
        if not self._line_open:
            return
        self._line_open = False
        try:
            click.echo("")
        except Exception as e:
            logger.debug(f"Failed to terminate status line: {e}")

    def _is_transient(self) -> bool:
        if self.transient is not None:
            return self.transient
        return click.get_text_stream("stdout").isatty()
