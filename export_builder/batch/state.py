"""In-memory state of the running batch."""

from dataclasses import dataclass, field
from pathlib import Path

from export_builder.batch.process import ProcessHandle
from export_builder.batch.progress import progress_percent


@dataclass
class SchedulerState:
    """Bookkeeping of one batch, from start until drain."""

    active_jobs: list[ProcessHandle] = field(default_factory=list)
    done_count: int = 0
    total_count: int = 0
    scratch_dir: Path | None = None
    tick_index: int = 0

    @property
    def pending(self) -> int:
        """Number of jobs not observed finished yet."""
        return self.total_count - self.done_count

    @property
    def percent(self) -> int:
        return progress_percent(self.done_count, self.total_count)

    @property
    def is_drained(self) -> bool:
        """Whether every job of the batch has finished."""
        return self.done_count >= self.total_count
