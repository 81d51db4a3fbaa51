"""CLI commands for export_builder."""

import asyncio
from pathlib import Path

import click

from export_builder import __version__
from export_builder.cli.validators import validate_config_file, validate_document_file

# Context settings for better help formatting
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
}

DOCUMENT_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


class AliasedGroup(click.Group):
    """Click group with command aliases support."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        aliases = {
            "b": "build",
            "o": "set-output",
            "s": "show",
        }
        cmd_name = aliases.get(cmd_name, cmd_name)
        return super().get_command(ctx, cmd_name)


def _get_settings(ctx: click.Context):
    """Get settings from context or load defaults."""
    from export_builder.config import load_config
    from export_builder.exceptions import ConfigurationError

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from None


@click.group(cls=AliasedGroup, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
    callback=validate_config_file,
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress status messages",
)
@click.version_option(version=__version__, prog_name="export_builder")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Export Builder - batch export of document artifacts

    Exports the artifacts of a document manifest and runs each of them
    through an external processor, showing progress until all are done.

    \b
    Examples:
        # Set where a document's artifacts go (relative to the git root)
        export-builder set-output icons.yaml --value assets/icons

        # Build a document
        export-builder build icons.yaml
    """
    ctx.ensure_object(dict)

    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    from export_builder.utils.logger import configure_from_settings

    settings = _get_settings(ctx)
    ctx.obj["settings"] = settings
    configure_from_settings(settings, log_level="DEBUG" if verbose else None)


@cli.command()
@click.argument("document", type=DOCUMENT_PATH, callback=validate_document_file)
@click.pass_context
def build(ctx: click.Context, document: Path) -> None:
    """Export a document and process all of its artifacts.

    \b
    Examples:
        export-builder build icons.yaml
        export-builder -c config.yaml build icons.yaml
    """
    from export_builder.cli.runner import BuildOutcome, run_build

    outcome = asyncio.run(
        run_build(
            settings=ctx.obj["settings"],
            document_path=document,
            quiet=ctx.obj.get("quiet", False),
        )
    )

    if outcome is BuildOutcome.FAILED:
        ctx.exit(1)


@cli.command("set-output")
@click.argument("document", type=DOCUMENT_PATH, callback=validate_document_file)
@click.option(
    "--value",
    type=str,
    default=None,
    help="New output path (prompted for when omitted)",
)
@click.pass_context
def set_output(ctx: click.Context, document: Path, value: str | None) -> None:
    """Edit the output path of a document.

    The output path is relative to the project root and stored in the
    document itself.
    """
    from export_builder.batch import ConsoleStatusReporter
    from export_builder.cli.runner import edit_output_path
    from export_builder.exceptions import DocumentError
    from export_builder.export import Document

    settings = ctx.obj["settings"]

    if value is None:
        try:
            current = Document.load(document).output_path
        except DocumentError as e:
            raise click.ClickException(str(e)) from None
        try:
            value = click.prompt("Edit Output Path", default=current or "", show_default=bool(current))
        except click.Abort:
            value = None

    reporter = ConsoleStatusReporter(enabled=not ctx.obj.get("quiet", False), transient=False)
    if value is not None and not edit_output_path(
        document, value, reporter, settings.scheduler.progress_timeout
    ):
        ctx.exit(1)


@cli.command()
@click.argument("document", type=DOCUMENT_PATH, callback=validate_document_file)
@click.pass_context
def show(ctx: click.Context, document: Path) -> None:
    """Show what a build of a document would export."""
    from export_builder.exceptions import DocumentError
    from export_builder.export import Document, find_project_root, resolve_output_dir

    settings = ctx.obj["settings"]

    try:
        doc = Document.load(document)
    except DocumentError as e:
        raise click.ClickException(str(e)) from None

    root = find_project_root(doc.path, settings.project.marker)
    click.echo(click.style(f"Document: {doc.name}", bold=True))
    click.echo(f"  Project root: {root or '(not found)'}")
    click.echo(f"  Output path: {doc.output_path or '(not set)'}")
    if root is not None and doc.output_path:
        click.echo(f"  Output directory: {resolve_output_dir(root, doc.output_path)}")

    requests = doc.export_requests(settings.export.use_id_for_name)
    click.echo(f"\nExports ({len(requests)}):")
    for request in requests:
        click.echo(f"  - {request.filename}  <- {request.source}")
