"""
Logging module for devrunner.
This module provides the root logger setup shared by the console entry point.
"""

from .setup import setup_logging, level_from_name

__all__ = ["setup_logging", "level_from_name"]
