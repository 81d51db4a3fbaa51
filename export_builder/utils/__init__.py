"""Utility modules for export_builder."""

from export_builder.utils.logger import configure_from_settings, get_logger, setup_logger

__all__ = [
    "setup_logger",
    "get_logger",
    "configure_from_settings",
]
