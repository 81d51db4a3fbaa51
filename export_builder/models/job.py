"""Job models for export batches."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Job(BaseModel):
    """One artifact to run through the external processor."""

    model_config = ConfigDict(frozen=True)

    source_path: Path = Field(description="Temporary exported file read by the processor")
    output_path: Path = Field(description="Destination handed to the processor")

    def to_args(self) -> list[str]:
        """Arguments passed to the processor, in order."""
        return [str(self.source_path), str(self.output_path)]


class ExportRequest(BaseModel):
    """Single (artifact, format) pair to export from a document."""

    model_config = ConfigDict(frozen=True)

    artifact_id: str = Field(description="Identifier of the exported artifact")
    name: str = Field(description="File stem of the exported file")
    format: str = Field(description="File extension of the exported file")
    source: Path = Field(description="Absolute path of the artifact content")

    @property
    def filename(self) -> str:
        """File name of the exported file."""
        return f"{self.name}.{self.format}"


class ExportBatch(BaseModel):
    """Jobs materialized for one build, with the scratch directory holding them."""

    jobs: list[Job] = Field(default_factory=list)
    scratch_dir: Path | None = Field(
        default=None,
        description="Directory to remove once every job has finished",
    )

    @property
    def is_empty(self) -> bool:
        """Whether there is nothing to process."""
        return not self.jobs
