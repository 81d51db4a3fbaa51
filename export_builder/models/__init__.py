"""Data models module."""

from export_builder.models.job import ExportBatch, ExportRequest, Job

__all__ = [
    "Job",
    "ExportRequest",
    "ExportBatch",
]
