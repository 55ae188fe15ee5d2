"""Utility modules for markgen.

Provides:
- logger: get_logger for logging
"""

from markgen.utils.logger import get_logger

__all__ = ["get_logger"]
