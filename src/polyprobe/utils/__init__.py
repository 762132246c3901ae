"""Utility functions for polyprobe.

This module provides utility functions including:

- Logging setup and configuration
- Batch processing statistics
"""

from polyprobe.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
