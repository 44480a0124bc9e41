from .event_types import (
    Listener,
    SubscriptionStrategy,
    EnvironmentFeature,
    Handle,
    EventListenerTarget,
    NodeTree,
    LegacyEvent,
    slot_name,
    get_slot,
)

__all__ = [
    "Listener",
    "SubscriptionStrategy",
    "EnvironmentFeature",
    "Handle",
    "EventListenerTarget",
    "NodeTree",
    "LegacyEvent",
    "slot_name",
    "get_slot",
]
