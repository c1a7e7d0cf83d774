"""Utility modules for toks.

Provides:
- logger: get_logger for logging
"""

from toks.utils.logger import get_logger

__all__ = ["get_logger"]
