"""
Utilities package for avrogeneric.

Exports shared helpers for logging and profiling. Keep this package free of
decoding logic.
"""

from avrogeneric.utils.logging import configure_logging, get_logger
from avrogeneric.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
