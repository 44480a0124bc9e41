"""
Evented capability

Mix ``Evented`` into any class to give its instances ``on()`` and ``emit()``:

    class Dialog(Evented):
        ...

    dialog = Dialog()
    handle = dialog.on("open", lambda event: print(event["name"]))
    dialog.emit("open", {"name": "settings"})
    handle.cancel()

Dispatch goes through the conventional ``on<type>`` attribute, so a class may
also define ``onopen`` directly; subscriptions are advice layered on it.
"""

from typing import Any, Callable, Union

from listenkit.core.events.runtime import get_runtime
from listenkit.core.types.event_types import (
    Handle,
    Listener,
    SubscriptionStrategy,
    get_slot,
)

ExtensionEvent = Callable[[Any, Listener], Handle]


class Evented:
    """Mixin exposing ``on`` and ``emit``; also callable unbound on any object."""

    def on(
        self,
        type: Union[str, ExtensionEvent],
        listener: Listener,
        dont_fix: bool = False,
    ) -> Handle:
        if callable(type):
            # Extension event, e.g. a composite gesture built from other events
            get_runtime().record(SubscriptionStrategy.FACTORY)
            return type(self, listener)
        return get_runtime().subscribe(self, type, listener, dont_fix)

    def emit(self, type: str, event: Any = None) -> None:
        handler = get_slot(self, type)
        if handler:
            handler(event)


class PubSubHub(Evented):
    """Implicit target for topic subscriptions."""

    publish = Evented.emit
