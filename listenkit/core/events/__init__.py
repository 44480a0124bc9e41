"""
Event System

Subscription, dispatch and lifecycle components.
"""

from .evented import Evented, PubSubHub
from .handles import Signal, PausableSignal
from .subscribe import listen, pausable, destroy, publish, hub
from .normalizer import EventNormalizer
from .runtime import ListenRuntime, get_runtime, initialize_runtime, reset_runtime
from .teardown import TeardownChain

__all__ = [
    "Evented",
    "PubSubHub",
    "Signal",
    "PausableSignal",
    "listen",
    "pausable",
    "destroy",
    "publish",
    "hub",
    "EventNormalizer",
    "ListenRuntime",
    "get_runtime",
    "initialize_runtime",
    "reset_runtime",
    "TeardownChain",
]
