"""Configuration settings models using Pydantic."""

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class SchedulerSettings(BaseModel):
    """Batch scheduler configuration."""

    poll_interval: float = Field(
        default=0.1,
        gt=0.0,
        description="Seconds between two polls of the running processors",
    )
    progress_timeout: float = Field(
        default=5.0,
        gt=0.0,
        description="Display timeout of progress messages in seconds",
    )
    done_timeout: float = Field(
        default=2.0,
        gt=0.0,
        description="Display timeout of the final message in seconds",
    )


class ProcessorSettings(BaseModel):
    """External processor configuration."""

    command: list[str] = Field(
        default_factory=list,
        description="Processor command; source and output paths are appended (empty = bundled)",
    )


class ExportSettings(BaseModel):
    """Artifact export configuration."""

    use_id_for_name: bool = Field(
        default=True,
        description="Name exported files after the artifact id instead of its name",
    )
    scratch_base: str | None = Field(
        default=None,
        description="Parent directory of per-batch scratch directories (None = system temp)",
    )


class ProjectSettings(BaseModel):
    """Project root discovery configuration."""

    marker: str = Field(
        default=".git",
        min_length=1,
        description="Directory name marking the project root",
    )

    @field_validator("marker")
    @classmethod
    def validate_marker(cls, v: str) -> str:
        """Marker must be a single path component."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Project marker must be a directory name, got: {v}")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )
    file: str | None = Field(
        default=None,
        description="Log file path",
    )
    rotation: str = Field(
        default="10 MB",
        description="Log rotation size",
    )
    retention: str = Field(
        default="7 days",
        description="Log retention period",
    )
    compression: bool = Field(
        default=True,
        description="Whether to compress old logs",
    )
    console_format: str | None = Field(
        default=None,
        description="Console log format (None = built-in format)",
    )


class Settings(BaseModel):
    """Main configuration settings."""

    version: str = Field(
        default="1.0",
        description="Configuration version",
    )
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    processor: ProcessorSettings = Field(default_factory=ProcessorSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    project: ProjectSettings = Field(default_factory=ProjectSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate configuration version."""
        supported_versions = ["1.0"]
        if v not in supported_versions:
            raise ValueError(f"Unsupported config version: {v}. Supported: {supported_versions}")
        return v

    def get_scratch_base(self) -> Path:
        """Get the parent directory of scratch directories as Path."""
        if self.export.scratch_base:
            return Path(self.export.scratch_base)
        return Path(tempfile.gettempdir())
