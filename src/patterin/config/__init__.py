"""Configuration management for patterin.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Tolerances for the boolean pipeline
- OffsetConfig: Outline offset settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- PatterinSettings: Main application settings
"""

from patterin.config.settings import (
    GeometryConfig,
    LoggingConfig,
    OffsetConfig,
    PatterinSettings,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "GeometryConfig",
    "LoggingConfig",
    "OffsetConfig",
    "PatterinSettings",
    "ProcessingConfig",
    "get_default_settings",
]
