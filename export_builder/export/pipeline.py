"""Export pipeline materializing the jobs of a build."""

import shutil
import uuid
from pathlib import Path

from export_builder.exceptions import ScratchDirectoryError
from export_builder.export.document import Document
from export_builder.models import ExportBatch, Job
from export_builder.utils import get_logger

logger = get_logger(__name__)


class ExportPipeline:
    """Exports a document's artifacts into a fresh scratch directory."""

    def __init__(self, scratch_base: Path, use_id_for_name: bool = True):
        """Initialize pipeline.

        Args:
            scratch_base: Parent of the per-batch scratch directories.
            use_id_for_name: Name exported files after artifact ids.
        """
        self.scratch_base = Path(scratch_base)
        self.use_id_for_name = use_id_for_name

    def prepare(self, document: Document, output_dir: Path) -> ExportBatch:
        """Export every artifact and build one job per exported file.

        Nothing is created when the document has no export requests.

        Raises:
            ScratchDirectoryError: If the scratch directory cannot be created.
            DocumentError: If an artifact cannot be exported.
        """
        requests = document.export_requests(self.use_id_for_name)
        if not requests:
            logger.info(f"Nothing to export in {document.name}")
            return ExportBatch()

        scratch_dir = self._create_scratch_dir()

        jobs = []
        try:
            for request in requests:
                tmp_file = scratch_dir / request.filename
                document.save_artifact(request, tmp_file)
                jobs.append(Job(source_path=tmp_file, output_path=output_dir))
        except Exception:
            shutil.rmtree(scratch_dir, ignore_errors=True)
            raise

        logger.info(f"Exported {len(jobs)} files from {document.name} to {scratch_dir}")
        return ExportBatch(jobs=jobs, scratch_dir=scratch_dir)

    def _create_scratch_dir(self) -> Path:
        scratch_dir = self.scratch_base / str(uuid.uuid4()).upper()
        try:
            scratch_dir.mkdir(parents=True)
        except OSError as e:
            raise ScratchDirectoryError(
                f"Could not make temporary directory: {e}",
                {"path": str(scratch_dir)},
            ) from e
        return scratch_dir
