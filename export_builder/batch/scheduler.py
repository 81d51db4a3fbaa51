"""Batch scheduler for external processor runs.

Launches one processor per job and polls the processes on a repeating timer
until all of them have exited, reporting progress on every tick. When the
batch drains, the scratch directory is removed, the final message shown and
the timer cancelled so that a new batch may start.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path

from export_builder.batch.host import CancellableTimer, SchedulerHost
from export_builder.batch.process import ProcessHandle, default_processor_command
from export_builder.batch.progress import DONE_MESSAGE, format_progress
from export_builder.batch.state import SchedulerState
from export_builder.batch.status import StatusReporter
from export_builder.config import SchedulerSettings
from export_builder.exceptions import SpawnError
from export_builder.models import Job
from export_builder.utils import get_logger

logger = get_logger(__name__)


class BatchScheduler:
    """Drives one batch of processor runs at a time without blocking."""

    def __init__(
        self,
        host: SchedulerHost,
        reporter: StatusReporter,
        processor_command: Sequence[str] | None = None,
        settings: SchedulerSettings | None = None,
    ):
        """Initialize scheduler.

        Args:
            host: Timer, keepalive, process and filesystem services.
            reporter: Status message display.
            processor_command: Processor executable and leading arguments; the
                source and output paths of each job are appended.
            settings: Scheduler settings.
        """
        self.host = host
        self.reporter = reporter
        self.processor_command = (
            list(processor_command) if processor_command else default_processor_command()
        )
        self.settings = settings or SchedulerSettings()
        self.state = SchedulerState()
        self.last_state: SchedulerState | None = None
        self._timer: CancellableTimer | None = None
        self._ticking = False

    @property
    def is_busy(self) -> bool:
        """Whether a batch is running."""
        return self._timer is not None

    def start(self, jobs: Iterable[Job], scratch_dir: Path | None = None) -> bool:
        """Start a batch.

        Does nothing while another batch is running or when ``jobs`` is
        empty. A job whose processor cannot be launched counts as done.

        Args:
            jobs: Jobs to run, one processor each.
            scratch_dir: Directory removed once the batch has drained.

        Returns:
            True if the batch was started.
        """
        if self.is_busy:
            logger.debug("A batch is already running, ignoring start request")
            return False

        jobs = list(jobs)
        if not jobs:
            logger.debug("No jobs to run, ignoring start request")
            return False

        handles: list[ProcessHandle] = []
        failed = 0
        for job in jobs:
            try:
                handles.append(self.host.spawn_process([*self.processor_command, *job.to_args()]))
            except SpawnError as e:
                logger.error(f"Counting {job.source_path.name} as done: {e}")
                failed += 1

        self.state = SchedulerState(
            active_jobs=handles,
            done_count=failed,
            total_count=len(jobs),
            scratch_dir=scratch_dir,
        )
        logger.info(f"Started batch of {len(jobs)} jobs ({failed} failed to launch)")

        self.tick()
        return True

    def tick(self) -> None:
        """Poll the running processes once and report progress."""
        if self._ticking:
            logger.warning("Skipping re-entrant tick")
            return

        self._ticking = True
        try:
            self._tick()
        finally:
            self._ticking = False

    def _tick(self) -> None:
        state = self.state
        if state.total_count == 0:
            return

        if self._timer is None:
            # Keepalive follows the timer; a failed arm leaves both unset.
            self._timer = self.host.schedule_repeating(self.settings.poll_interval, self.tick)
            self.host.set_keepalive(True)

        still_running: list[ProcessHandle] = []
        for handle in state.active_jobs:
            if handle.is_running():
                still_running.append(handle)
            else:
                state.done_count += 1
        state.active_jobs = still_running

        if state.is_drained:
            self._drain()
            return

        self.reporter.display(
            format_progress(state.done_count, state.total_count, state.tick_index),
            self.settings.progress_timeout,
        )
        state.tick_index += 1

    def _drain(self) -> None:
        state = self.state

        if state.scratch_dir is not None:
            try:
                self.host.remove_directory(state.scratch_dir)
            except OSError as e:
                logger.debug(f"Ignoring scratch directory cleanup failure: {e}")
            state.scratch_dir = None

        self.reporter.display(DONE_MESSAGE, self.settings.done_timeout)
        logger.info(f"Batch finished: {state.done_count}/{state.total_count} jobs")

        self.host.set_keepalive(False)
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

        self.last_state = state
        self.state = SchedulerState()
