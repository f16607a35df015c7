"""Utility modules for notemark.

Provides:
- logger: get_logger for logging
"""

from notemark.utils.logger import get_logger

__all__ = [
    "get_logger",
]
