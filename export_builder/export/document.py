"""Document manifests.

A document is a YAML file listing the artifacts to export, each with one or
more export formats, plus per-document settings:

    name: Icons
    settings:
      output_path: assets/icons
    artifacts:
      - id: 3F2A9C
        name: toolbar/save
        source: art/save.png
        formats:
          - format: png
          - format: png
            suffix: "@2x"
"""

import shutil
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from export_builder.exceptions import DocumentError
from export_builder.models import ExportRequest
from export_builder.utils import get_logger

logger = get_logger(__name__)


class ExportFormat(BaseModel):
    """One export format of an artifact."""

    format: str = Field(default="png", description="File extension of the export")
    suffix: str = Field(default="", description="Appended to the file stem")

    @field_validator("format")
    @classmethod
    def normalize_format(cls, v: str) -> str:
        """Strip a leading dot and lowercase the extension."""
        v = v.strip().lstrip(".").lower()
        if not v:
            raise ValueError("Export format must not be empty")
        return v


class Artifact(BaseModel):
    """Exportable artifact of a document."""

    id: str = Field(description="Stable artifact identifier")
    name: str = Field(description="Human readable artifact name")
    source: str = Field(description="Artifact content path (relative to the document)")
    formats: list[ExportFormat] = Field(
        default_factory=list,
        description="Export formats (no formats = not exportable)",
    )


class DocumentSettings(BaseModel):
    """Settings stored with the document."""

    model_config = ConfigDict(extra="allow")

    output_path: str | None = Field(
        default=None,
        description="Output directory relative to the project root",
    )


class DocumentDefinition(BaseModel):
    """Document manifest file definition."""

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(default=None, description="Document name")
    settings: DocumentSettings = Field(default_factory=DocumentSettings)
    artifacts: list[Artifact] = Field(default_factory=list)


class Document:
    """A loaded document manifest.

    ``raw`` holds the mapping as read from the file; saving writes it back
    with only the settings this tool edits changed.
    """

    def __init__(
        self,
        path: Path,
        definition: DocumentDefinition,
        raw: dict[str, Any] | None = None,
    ):
        self.path = path
        self.definition = definition
        self.raw = raw if raw is not None else {}

    @classmethod
    def load(cls, path: str | Path) -> "Document":
        """Load a document manifest.

        Raises:
            DocumentError: If the file cannot be read or is invalid.
        """
        path = Path(path).resolve()
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise DocumentError(f"Failed to read document: {e}", {"path": str(path)}) from None
        except yaml.YAMLError as e:
            raise DocumentError(f"Invalid YAML: {e}", {"path": str(path)}) from None

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DocumentError("Document must contain a mapping", {"path": str(path)})

        try:
            definition = DocumentDefinition(**data)
        except ValidationError as e:
            errors = []
            for err in e.errors():
                loc = ".".join(str(loc) for loc in err["loc"])
                errors.append(f"{loc}: {err['msg']}")
            raise DocumentError(
                f"Validation failed: {'; '.join(errors)}", {"path": str(path)}
            ) from None

        return cls(path, definition, data)

    @property
    def name(self) -> str:
        return self.definition.name or self.path.stem

    @property
    def output_path(self) -> str | None:
        """Configured output directory, relative to the project root."""
        return self.definition.settings.output_path

    def set_output_path(self, value: str) -> None:
        """Change the output directory and save the document."""
        self.definition.settings.output_path = value
        settings = self.raw.get("settings")
        if not isinstance(settings, dict):
            settings = self.raw["settings"] = {}
        settings["output_path"] = value
        self.save()

    def save(self) -> None:
        """Write the manifest back to its file.

        Keys and values are written as loaded; YAML comments are not kept.

        Raises:
            DocumentError: If the file cannot be written.
        """
        try:
            self.path.write_text(
                yaml.safe_dump(self.raw, sort_keys=False, allow_unicode=True),
                encoding="utf-8",
            )
        except OSError as e:
            raise DocumentError(f"Failed to save document: {e}", {"path": str(self.path)}) from None
        logger.debug(f"Saved document: {self.path}")

    def export_requests(self, use_id_for_name: bool = True) -> list[ExportRequest]:
        """List one export request per (artifact, format) pair.

        Args:
            use_id_for_name: Name files after artifact ids rather than names.
        """
        requests = []
        for artifact in self.definition.artifacts:
            stem = artifact.id if use_id_for_name else artifact.name.replace("/", "_")
            for export_format in artifact.formats:
                requests.append(
                    ExportRequest(
                        artifact_id=artifact.id,
                        name=f"{stem}{export_format.suffix}",
                        format=export_format.format,
                        source=self.path.parent / artifact.source,
                    )
                )
        return requests

    def save_artifact(self, request: ExportRequest, destination: Path) -> None:
        """Write the exported artifact to ``destination``.

        Raises:
            DocumentError: If the artifact content cannot be copied.
        """
        try:
            shutil.copyfile(request.source, destination)
        except OSError as e:
            raise DocumentError(
                f"Failed to export artifact {request.artifact_id}: {e}",
                {"source": str(request.source)},
            ) from None
