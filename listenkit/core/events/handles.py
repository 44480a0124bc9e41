from typing import Any, Optional

from listenkit.core.types.event_types import Handle, Listener


class Signal:
    """Handle for a listener registered through a target's native listener API."""

    def __init__(self, target: Any, type: str, listener: Listener):
        self.target = target
        self.type = type
        self.listener = listener
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self.target.remove_event_listener(self.type, self.listener, False)


class PausableSignal:
    """
    Handle whose delivery can be suspended without unsubscribing.

    ``paused`` is read by the gate wrapped around the listener, so the
    underlying subscription keeps its position relative to other listeners.
    """

    def __init__(self, handle: Optional[Handle] = None):
        self.handle = handle
        self.paused = False

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def cancel(self) -> None:
        if self.handle is not None:
            self.handle.cancel()
