"""Bundled artifact processor.

Invoked once per exported file as ``python -m export_builder.processor
SOURCE OUTPUT``. Copies SOURCE into the OUTPUT directory, or to OUTPUT itself
when it is not an existing directory.
"""

import shutil
import sys
from pathlib import Path

import click


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output", type=click.Path(path_type=Path))
def main(source: Path, output: Path) -> None:
    """Copy an exported artifact to its output location."""
    destination = output / source.name if output.is_dir() else output
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        shutil.copyfile(source, destination)
    except OSError as e:
        click.echo(f"Failed to copy {source} to {destination}: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
