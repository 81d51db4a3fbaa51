"""Entry point for running export_builder as a module."""

from export_builder.cli import cli

if __name__ == "__main__":
    cli()
