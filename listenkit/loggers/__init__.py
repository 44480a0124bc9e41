"""
Logging module for listenkit.
Provides customized logging functionality.
"""

from .base import Logger

__all__ = ["Logger"]
