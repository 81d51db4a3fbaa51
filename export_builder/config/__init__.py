"""Configuration management module."""

from export_builder.config.loader import get_settings, load_config, reset_settings
from export_builder.config.settings import (
    ExportSettings,
    LoggingSettings,
    ProcessorSettings,
    ProjectSettings,
    SchedulerSettings,
    Settings,
)

__all__ = [
    "Settings",
    "SchedulerSettings",
    "ProcessorSettings",
    "ExportSettings",
    "ProjectSettings",
    "LoggingSettings",
    "load_config",
    "get_settings",
    "reset_settings",
]
