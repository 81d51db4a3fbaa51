"""Tests for document manifests."""

from pathlib import Path

import pytest
import yaml

from export_builder.exceptions import DocumentError
from export_builder.export import Document
from export_builder.export.document import ExportFormat


class TestLoad:
    """Tests for Document.load."""

    def test_load(self, document_path: Path):
        """Manifest fields are loaded."""
        document = Document.load(document_path)

        assert document.name == "Icons"
        assert document.path == document_path.resolve()
        assert document.output_path == "assets/icons"
        assert len(document.definition.artifacts) == 3

    def test_name_defaults_to_file_stem(self, tmp_path: Path):
        """Unnamed documents are named after their file."""
        path = tmp_path / "banners.yaml"
        path.write_text("artifacts: []\n")
        assert Document.load(path).name == "banners"

    def test_empty_file(self, tmp_path: Path):
        """An empty manifest is an empty document."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        document = Document.load(path)

        assert document.output_path is None
        assert document.export_requests() == []

    def test_missing_file(self, tmp_path: Path):
        """Missing files raise DocumentError."""
        with pytest.raises(DocumentError, match="Failed to read document"):
            Document.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        """Malformed YAML raises DocumentError."""
        path = tmp_path / "bad.yaml"
        path.write_text("artifacts: [unclosed\n")
        with pytest.raises(DocumentError, match="Invalid YAML"):
            Document.load(path)

    def test_not_a_mapping(self, tmp_path: Path):
        """Top level must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(DocumentError, match="mapping"):
            Document.load(path)

    def test_validation_errors_are_aggregated(self, tmp_path: Path):
        """Every invalid field is reported."""
        path = tmp_path / "invalid.yaml"
        path.write_text(
            """
artifacts:
  - name: no id
    source: a.png
  - id: X
    name: bad format
    source: b.png
    formats:
      - format: "."
"""
        )
        with pytest.raises(DocumentError) as exc_info:
            Document.load(path)

        message = exc_info.value.message
        assert "artifacts.0.id" in message
        assert "artifacts.1.formats.0.format" in message


class TestExportFormat:
    """Tests for ExportFormat."""

    def test_normalized(self):
        """Formats lose their leading dot and are lowercased."""
        assert ExportFormat(format=".PNG").format == "png"

    def test_defaults(self):
        """Default export is a plain png."""
        export_format = ExportFormat()
        assert export_format.format == "png"
        assert export_format.suffix == ""


class TestExportRequests:
    """Tests for Document.export_requests."""

    def test_one_request_per_format(self, document_path: Path):
        """Artifacts without formats are skipped."""
        requests = Document.load(document_path).export_requests()

        assert [r.filename for r in requests] == ["SAVE-1.png", "SAVE-1@2x.png", "OPEN-2.svg"]
        assert requests[0].source == document_path.resolve().parent / "art" / "save.png"
        assert requests[2].artifact_id == "OPEN-2"

    def test_names_instead_of_ids(self, document_path: Path):
        """Names are flattened into file stems."""
        requests = Document.load(document_path).export_requests(use_id_for_name=False)

        assert [r.filename for r in requests] == [
            "toolbar_save.png",
            "toolbar_save@2x.png",
            "toolbar_open.svg",
        ]


class TestSaveArtifact:
    """Tests for Document.save_artifact."""

    def test_copies_content(self, document_path: Path, tmp_path: Path):
        """Artifact content is written to the destination."""
        document = Document.load(document_path)
        request = document.export_requests()[0]
        destination = tmp_path / request.filename

        document.save_artifact(request, destination)
        assert destination.read_bytes() == b"\x89PNG save"

    def test_missing_source(self, document_path: Path, tmp_path: Path):
        """Missing artifact content raises DocumentError."""
        document = Document.load(document_path)
        request = document.export_requests()[0]
        request.source.unlink()

        with pytest.raises(DocumentError, match="SAVE-1"):
            document.save_artifact(request, tmp_path / "out.png")


class TestOutputPath:
    """Tests for the output path setting."""

    def test_set_output_path_persists(self, document_path: Path):
        """The new output path is saved in the manifest."""
        document = Document.load(document_path)
        document.set_output_path("build/icons")

        reloaded = Document.load(document_path)
        assert reloaded.output_path == "build/icons"
        assert len(reloaded.definition.artifacts) == 3

    def test_unknown_keys_survive_save(self, tmp_path: Path):
        """Keys this tool does not know are kept."""
        path = tmp_path / "doc.yaml"
        path.write_text("owner: design-team\nsettings:\n  theme: dark\nartifacts: []\n")

        Document.load(path).set_output_path("out")

        data = yaml.safe_load(path.read_text())
        assert data["owner"] == "design-team"
        assert data["settings"] == {"output_path": "out", "theme": "dark"}

    def test_untouched_values_are_written_as_loaded(self, tmp_path: Path):
        """Only the output path changes; defaults and raw values are not written."""
        path = tmp_path / "doc.yaml"
        path.write_text(
            "artifacts:\n"
            "  - id: A\n"
            "    name: a\n"
            "    source: a.png\n"
            "    formats:\n"
            "      - format: PNG\n"
        )

        Document.load(path).set_output_path("out")

        data = yaml.safe_load(path.read_text())
        assert data == {
            "artifacts": [
                {"id": "A", "name": "a", "source": "a.png", "formats": [{"format": "PNG"}]}
            ],
            "settings": {"output_path": "out"},
        }
        assert Document.load(path).export_requests()[0].format == "png"
