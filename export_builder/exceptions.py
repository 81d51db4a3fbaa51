"""Exception classes for export_builder."""

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class ExportBuilderError(Exception):
    """Base exception class for export_builder."""

    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ExportBuilderError):
    """Configuration related errors."""

    severity = ErrorSeverity.FATAL


class DocumentError(ExportBuilderError):
    """Document manifest loading or saving errors."""

    severity = ErrorSeverity.ERROR


class ProjectRootError(ExportBuilderError):
    """Document is not inside a project."""

    severity = ErrorSeverity.WARNING


class OutputPathError(ExportBuilderError):
    """Output path is missing or not a directory."""

    severity = ErrorSeverity.WARNING


class ScratchDirectoryError(ExportBuilderError):
    """Scratch directory could not be created."""

    severity = ErrorSeverity.ERROR


class SchedulerError(ExportBuilderError):
    """Batch scheduler errors."""

    severity = ErrorSeverity.ERROR


class SpawnError(SchedulerError):
    """External processor could not be launched."""

    severity = ErrorSeverity.WARNING
