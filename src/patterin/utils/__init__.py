"""Utility functions for patterin.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics tracking
"""

from patterin.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
