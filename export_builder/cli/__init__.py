"""Command line interface for export_builder."""

from export_builder.cli.commands import cli

__all__ = ["cli"]
