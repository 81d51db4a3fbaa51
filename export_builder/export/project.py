"""Project root discovery and output directory resolution."""

from pathlib import Path

from export_builder.exceptions import OutputPathError, ProjectRootError


def find_project_root(document_path: str | Path, marker: str = ".git") -> Path | None:
    """Find the closest directory above a document containing ``marker``.

    Args:
        document_path: Path of the document file.
        marker: Name of the directory marking a project root.

    Returns:
        The project root, or None when no ancestor contains the marker.
    """
    start = Path(document_path).resolve().parent
    for directory in (start, *start.parents):
        if (directory / marker).is_dir():
            return directory
    return None


def resolve_output_dir(root: Path, output_path: str) -> Path:
    """Join a document's output path onto the project root.

    Absolute output paths are taken relative to the root as well.
    """
    relative = Path(output_path)
    if relative.anchor:
        relative = relative.relative_to(relative.anchor)
    return root / relative


def locate_output_dir(
    document_path: str | Path,
    output_path: str | None,
    marker: str = ".git",
) -> Path:
    """Find the existing output directory of a document.

    Args:
        document_path: Path of the document file.
        output_path: The document's output path setting.
        marker: Name of the directory marking a project root.

    Returns:
        The output directory inside the project root.

    Raises:
        ProjectRootError: If the document is not inside a project.
        OutputPathError: If the output path is unset or not a directory.
    """
    root = find_project_root(document_path, marker)
    if root is None:
        if marker == ".git":
            raise ProjectRootError("Document is not in a git repository")
        raise ProjectRootError(f'Document is not in a project (no "{marker}" directory found)')

    if not output_path:
        raise OutputPathError("Output path not specified")

    output_dir = resolve_output_dir(root, output_path)
    if not output_dir.is_dir():
        raise OutputPathError(f'"{output_dir}" is not a directory', {"root": str(root)})
    return output_dir
