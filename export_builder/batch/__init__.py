"""Batch scheduling module.

This module launches external processors for a batch of jobs and polls
them to completion on a repeating timer.
"""

from export_builder.batch.host import CancellableTimer, EventLoopHost, RepeatingTimer, SchedulerHost
from export_builder.batch.process import (
    PopenHandle,
    ProcessHandle,
    default_processor_command,
    spawn_process,
)
from export_builder.batch.progress import CLOCK_FRAMES, DONE_MESSAGE, format_progress
from export_builder.batch.scheduler import BatchScheduler
from export_builder.batch.state import SchedulerState
from export_builder.batch.status import ConsoleStatusReporter, StatusReporter

__all__ = [
    # Scheduler
    "BatchScheduler",
    "SchedulerState",
    # Host
    "SchedulerHost",
    "CancellableTimer",
    "EventLoopHost",
    "RepeatingTimer",
    # Processes
    "ProcessHandle",
    "PopenHandle",
    "spawn_process",
    "default_processor_command",
    # Status
    "StatusReporter",
    "ConsoleStatusReporter",
    "CLOCK_FRAMES",
    "DONE_MESSAGE",
    "format_progress",
]
