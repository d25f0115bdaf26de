"""Utility modules for lexgen.

Provides:
- logger: get_logger for logging
"""

from lexgen.utils.logger import get_logger

__all__ = ["get_logger"]
