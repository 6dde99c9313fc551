"""Utility functions for stlimport."""

from stlimport.utils.io import read_file
from stlimport.utils.logging import (
    setup_logging,
    get_logger,
    log_performance,
    StructuredLogger,
)

__all__ = [
    "read_file",
    "setup_logging",
    "get_logger",
    "log_performance",
    "StructuredLogger",
]
