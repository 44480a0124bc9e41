from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, runtime_checkable


Listener = Callable[..., Any]


class SubscriptionStrategy(str, Enum):
    """How a subscription was delivered to its target."""

    NATIVE = "native"
    LEGACY = "legacy"
    INTERCEPT = "intercept"
    DELEGATE = "delegate"
    FACTORY = "factory"


class EnvironmentFeature(str, Enum):
    """Host features probed once when the runtime is created."""

    DOM_ADD_EVENT_LISTENER = "dom-addeventlistener"
    CONFIG_ALLOW_LEAKS = "config-allow-leaks"
    JSCRIPT = "jscript"


@runtime_checkable
class Handle(Protocol):
    """Cancelable result of any subscription"""

    def cancel(self) -> None: ...


@runtime_checkable
class EventListenerTarget(Protocol):
    """Target with a native listener registry"""

    def add_event_listener(
        self, type: str, listener: Listener, use_capture: bool = False
    ) -> None: ...

    def remove_event_listener(
        self, type: str, listener: Listener, use_capture: bool = False
    ) -> None: ...


@runtime_checkable
class NodeTree(Protocol):
    """Node able to enumerate its descendants in document order"""

    def get_elements_by_tag_name(self, name: str) -> List[Any]: ...


class LegacyEvent:
    """
    Attribute bag for raw events delivered by legacy hosts.

    Only the fields a host actually sets exist on the instance, so capability
    probes such as ``hasattr(event, "char_code")`` behave as they would on a
    host event object.
    """

    def __init__(self, type: str, **fields: Any):
        self.type = type
        for name, value in fields.items():
            setattr(self, name, value)

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={value!r}"
            for name, value in vars(self).items()
            if name != "type" and not callable(value)
        )
        return f"LegacyEvent({self.type!r}, {fields})"


def slot_name(type: str) -> str:
    """Conventional handler attribute for an event type, e.g. ``onclick``."""
    return "on" + type


def get_slot(target: Any, type: str) -> Optional[Callable[..., Any]]:
    return getattr(target, slot_name(type), None)
