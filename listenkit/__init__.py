"""
listenkit

Unified import layer for the listenkit package.
"""

from listenkit.core.environment import HostEnvironment
from listenkit.core.events import (
    Evented,
    PausableSignal,
    destroy,
    initialize_runtime,
    listen,
    pausable,
    publish,
)
from listenkit.core.types import LegacyEvent

__all__ = [
    "Evented",
    "HostEnvironment",
    "LegacyEvent",
    "PausableSignal",
    "destroy",
    "initialize_runtime",
    "listen",
    "pausable",
    "publish",
]
