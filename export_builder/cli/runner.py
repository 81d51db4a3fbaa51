"""CLI runner module for executing builds.

This module connects the CLI commands with the export pipeline and the
batch scheduler. Every failure before a batch starts is reported as a short
status message and ends the build early.
"""

from enum import Enum
from pathlib import Path

from export_builder.batch import BatchScheduler, ConsoleStatusReporter, EventLoopHost, StatusReporter
from export_builder.config import Settings
from export_builder.exceptions import (
    DocumentError,
    OutputPathError,
    ProjectRootError,
    ScratchDirectoryError,
)
from export_builder.export import Document, ExportPipeline, locate_output_dir
from export_builder.utils.logger import get_logger

logger = get_logger(__name__)


class BuildOutcome(str, Enum):
    """How a build request ended."""

    STARTED = "started"
    NOTHING_TO_DO = "nothing_to_do"
    BUSY = "busy"
    FAILED = "failed"


class BuildRunner:
    """Runner for build operations."""

    def __init__(
        self,
        settings: Settings,
        scheduler: BatchScheduler,
        reporter: StatusReporter,
        pipeline: ExportPipeline | None = None,
    ):
        """Initialize build runner.

        Args:
            settings: Application settings
            scheduler: Scheduler running the processors
            reporter: Status message display
            pipeline: Export pipeline (default: built from settings)
        """
        self.settings = settings
        self.scheduler = scheduler
        self.reporter = reporter
        self.pipeline = pipeline or ExportPipeline(
            scratch_base=settings.get_scratch_base(),
            use_id_for_name=settings.export.use_id_for_name,
        )

    def _show(self, message: str) -> None:
        self.reporter.display(message, self.settings.scheduler.progress_timeout)

    def build(self, document_path: Path) -> BuildOutcome:
        """Build a document into its project's output directory.

        Args:
            document_path: Path of the document manifest

        Returns:
            How the build request ended
        """
        try:
            document = Document.load(document_path)
            output_dir = locate_output_dir(
                document.path, document.output_path, self.settings.project.marker
            )
            return self.build_document(document, output_dir)

        except (ProjectRootError, OutputPathError) as e:
            logger.warning(f"Cannot build {document_path}: {e}")
            self._show(f"Error: {e.message}")
            return BuildOutcome.FAILED
        except DocumentError as e:
            logger.error(f"Failed to load document {document_path}: {e}")
            self._show(f"Error: {e.message}")
            return BuildOutcome.FAILED
        except Exception as e:
            logger.exception(f"Build failed: {e}")
            self._show(f"Internal Error: {e}")
            return BuildOutcome.FAILED

    def build_document(self, document: Document, output_dir: Path) -> BuildOutcome:
        """Export a document and start processing its artifacts.

        Args:
            document: Loaded document
            output_dir: Existing output directory

        Returns:
            How the build request ended
        """
        # Checked before exporting so a rejected batch leaves no scratch directory.
        if self.scheduler.is_busy:
            logger.debug("Build already running")
            return BuildOutcome.BUSY

        try:
            batch = self.pipeline.prepare(document, output_dir)
        except ScratchDirectoryError as e:
            logger.error(str(e))
            self._show("Error: Could not make temporary directory")
            return BuildOutcome.FAILED

        if batch.is_empty:
            return BuildOutcome.NOTHING_TO_DO

        if not self.scheduler.start(batch.jobs, batch.scratch_dir):
            return BuildOutcome.BUSY

        logger.info(f"Building {len(batch.jobs)} artifacts of {document.name} into {output_dir}")
        return BuildOutcome.STARTED


def edit_output_path(
    document_path: Path,
    new_value: str | None,
    reporter: StatusReporter,
    timeout: float = 5.0,
) -> bool:
    """Change a document's output path.

    Args:
        document_path: Path of the document manifest
        new_value: New output path, None when the edit was cancelled
        reporter: Status message display
        timeout: Display timeout of the resulting message

    Returns:
        True if the document was updated
    """
    if new_value is None:
        return False

    try:
        document = Document.load(document_path)
        document.set_output_path(new_value)
    except DocumentError as e:
        logger.error(f"Failed to update output path: {e}")
        reporter.display(f"Error: {e.message}", timeout)
        return False

    reporter.display(f'Output path updated to "{new_value}"', timeout)
    return True


async def run_build(settings: Settings, document_path: Path, quiet: bool = False) -> BuildOutcome:
    """Build a document and wait until all of its processors have exited.

    Args:
        settings: Application settings
        document_path: Path of the document manifest
        quiet: Suppress status messages

    Returns:
        How the build request ended
    """
    host = EventLoopHost()
    reporter = ConsoleStatusReporter(enabled=not quiet)
    scheduler = BatchScheduler(
        host=host,
        reporter=reporter,
        processor_command=settings.processor.command,
        settings=settings.scheduler,
    )
    runner = BuildRunner(settings, scheduler, reporter)

    outcome = runner.build(document_path)
    await host.wait_until_idle()
    reporter.finish()
    return outcome
