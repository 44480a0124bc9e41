"""
Free subscription functions.

    listen(node, "click", on_click)        # subscribe on a target
    listen("some/topic", on_message)       # subscribe to a topic
    publish("some/topic", {"id": 1})       # deliver to topic subscribers
    pausable(node, "keypress", on_key)     # handle with pause()/resume()
    destroy(node, on_destroyed)            # node teardown notification

Every call returns a handle whose ``cancel()`` detaches the listener.
"""

from typing import Any, Optional, Union

from listenkit.core.events.evented import Evented, ExtensionEvent, PubSubHub
from listenkit.core.events.handles import PausableSignal
from listenkit.core.events.runtime import get_runtime
from listenkit.core.types.event_types import Handle, Listener, SubscriptionStrategy

hub = PubSubHub()


def listen(
    target: Any,
    type: Union[str, ExtensionEvent, Listener],
    listener: Optional[Listener] = None,
    dont_fix: bool = False,
) -> Handle:
    """
    Subscribe ``listener`` to ``type`` events on ``target``.

    Call shapes:
        listen(target, type, listener)  subscribe on a target
        listen(topic, listener)         subscribe on the pub/sub hub
        obj.listen(type, listener)      when installed as a method, the
                                        receiver is the target
    """
    if listener is None:
        return listen(hub, target, type)
    if callable(getattr(target, "on", None)):
        # The target manages its own listeners
        get_runtime().record(SubscriptionStrategy.DELEGATE)
        return target.on(type, listener)
    return Evented.on(target, type, listener, dont_fix)


def pausable(
    target: Any,
    type: Union[str, ExtensionEvent],
    listener: Listener,
    dont_fix: bool = False,
) -> PausableSignal:
    """Like ``listen`` but the handle can suspend delivery without unsubscribing."""
    signal = PausableSignal()

    def gate(*args, **kwargs):
        if not signal.paused:
            return listener(*args, **kwargs)
        return None

    signal.handle = listen(target, type, gate, dont_fix)
    return signal


def destroy(node: Any, listener: Listener) -> Handle:
    """Subscribe to ``node`` being destroyed."""
    return get_runtime().destroy(node, listener)


def publish(topic: str, event: Any = None) -> None:
    """Deliver ``event`` to every subscriber of ``topic``."""
    hub.publish(topic, event)
