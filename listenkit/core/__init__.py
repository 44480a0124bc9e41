"""
Framework Core

Internal listenkit components.
"""

# Advice primitive
from .aspect import AdviceHandle, after, around, before

# Host environment
from .environment import HostEnvironment, has

# Event system
from .events import (
    Evented,
    ListenRuntime,
    get_runtime,
    initialize_runtime,
    reset_runtime,
)

__all__ = [
    "AdviceHandle",
    "after",
    "around",
    "before",
    "HostEnvironment",
    "has",
    "Evented",
    "ListenRuntime",
    "get_runtime",
    "initialize_runtime",
    "reset_runtime",
]
