"""Utility functions for isoliner.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics and progress reporting helpers
"""

from isoliner.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
