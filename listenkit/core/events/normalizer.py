"""
Event normalization for hosts without a native listener API.

Legacy hosts deliver events with their own field names (``src_element``,
``offset_x``, ``from_element``...) and without ``stop_propagation`` or
``prevent_default``. ``EventNormalizer.normalize`` rewrites such an event in
place so listeners always see the canonical shape:

    target, current_target, related_target, layer_x, layer_y,
    char_code, key_code, key_char, char_or_code,
    stop_propagation(), prevent_default()
"""

from __future__ import annotations
import types
from typing import Any

from listenkit.core.aspect import AdviceHandle, after
from listenkit.core.types.event_types import Listener
from listenkit.loggers import Logger

# keypress quirks
CTRL_ENTER = 10
ENTER = 13
ESCAPE = 27
CTRL_BREAK = 3
LOWER_C = 99

_logger = Logger("EventNormalizer", "normalizer")


def stop_propagation(event: Any) -> None:
    event.cancel_bubble = True


def prevent_default(event: Any) -> Any:
    # Clearing key_code is the only way to stop ctrl-combinations bound to
    # menu accelerators; bubbled_key_code keeps the value for upstream code.
    event.bubbled_key_code = getattr(event, "key_code", None)
    if getattr(event, "ctrl_key", False):
        try:
            event.key_code = 0
            return 0
        except (AttributeError, TypeError):
            _logger.debug(
                f"key_code is read-only on {type(event).__name__}", exc_info=True
            )
    event.return_value = False
    return None


def is_host_event(event: Any) -> bool:
    """Host events name their type and accept new attributes."""
    return isinstance(getattr(event, "type", None), str) and hasattr(event, "__dict__")


def set_key_char(event: Any) -> None:
    char_code = getattr(event, "char_code", 0)
    event.key_char = chr(char_code) if char_code else ""
    event.char_or_code = event.key_char or getattr(event, "key_code", None)


class EventNormalizer:
    """
    Rewrites legacy events into the canonical shape.

    Normalization is idempotent: an event that already carries a ``target``
    is returned untouched.
    """

    def __init__(self, window: Any = None, log_level: str = "warning"):
        self.window = window
        self.events_normalized = 0
        self.logger = Logger("EventNormalizer", "normalizer", log_level)

    def current_event(self, sender: Any = None) -> Any:
        """The event the sender's window is currently dispatching, if any."""
        window = None
        if sender is not None:
            document = (
                getattr(sender, "owner_document", None)
                or getattr(sender, "document", None)
                or sender
            )
            window = getattr(document, "parent_window", None)
        window = window or self.window
        return getattr(window, "event", None)

    def normalize(self, event: Any, sender: Any = None) -> Any:
        if event is None:
            event = self.current_event(sender)
        if not is_host_event(event):
            # Custom payloads (dicts, strings, data objects) pass through as-is
            return event
        if getattr(event, "target", None):
            return event

        src_element = getattr(event, "src_element", None)
        event.target = src_element
        event.current_target = sender or src_element
        event.layer_x = getattr(event, "offset_x", None)
        event.layer_y = getattr(event, "offset_y", None)

        event_type = getattr(event, "type", None)
        if event_type == "mouseover":
            event.related_target = getattr(event, "from_element", None)
        if event_type == "mouseout":
            event.related_target = getattr(event, "to_element", None)

        if not callable(getattr(event, "stop_propagation", None)):
            event.stop_propagation = types.MethodType(stop_propagation, event)
            event.prevent_default = types.MethodType(prevent_default, event)

        if event_type == "keypress":
            self._normalize_key(event)

        self.events_normalized += 1
        self.logger.debug(f"Normalized {event_type} event")
        return event

    def _normalize_key(self, event: Any) -> None:
        if hasattr(event, "char_code"):
            code = event.char_code
        else:
            code = getattr(event, "key_code", 0)
        if code == CTRL_ENTER:
            # CTRL-ENTER arrives as CTRL-ASCII(10)
            code = 0
            event.key_code = ENTER
        elif code in (ENTER, ESCAPE):
            code = 0  # not printable
        elif code == CTRL_BREAK:
            code = LOWER_C
        event.char_code = code
        set_key_char(event)

    def fix_listener(
        self, target: Any, method_name: str, listener: Listener
    ) -> AdviceHandle:
        """Intercept ``method_name`` so ``listener`` receives normalized events."""

        def fixed(event=None, *args, **kwargs):
            return listener(self.normalize(event, target), *args, **kwargs)

        return after(target, method_name, fixed, True)
