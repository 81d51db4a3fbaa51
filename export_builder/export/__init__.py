"""Document export module."""

from export_builder.export.document import Artifact, Document, DocumentDefinition, ExportFormat
from export_builder.export.pipeline import ExportPipeline
from export_builder.export.project import find_project_root, locate_output_dir, resolve_output_dir

__all__ = [
    "Document",
    "DocumentDefinition",
    "Artifact",
    "ExportFormat",
    "ExportPipeline",
    "find_project_root",
    "locate_output_dir",
    "resolve_output_dir",
]
