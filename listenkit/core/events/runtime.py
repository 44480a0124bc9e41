"""
Subscription runtime

Resolves a subscription request against a target's capabilities and delivers
it through one of the available strategies:

- native:    the target's own ``add_event_listener``/``remove_event_listener``
- legacy:    a host node with ``attach_event``; the ``on<type>`` slot is
             intercepted, events are normalized and the node is registered
             with the teardown chain
- intercept: any other object; the ``on<type>`` slot is intercepted

Whether normalization and teardown are active is decided once, when the
runtime is created, from the host environment.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from listenkit.config.settings import Settings, get_settings
from listenkit.core.aspect import after
from listenkit.core.environment import HostEnvironment, has, needs_leak_teardown
from listenkit.core.events.handles import Signal
from listenkit.core.events.normalizer import EventNormalizer
from listenkit.core.events.teardown import MARKER_SLOT, TeardownChain
from listenkit.core.types.event_types import (
    EnvironmentFeature,
    EventListenerTarget,
    Handle,
    Listener,
    SubscriptionStrategy,
    slot_name,
)
from listenkit.loggers import Logger


class ListenRuntime:
    """
    Process-wide subscription strategy.

    Holds the optional event normalizer and teardown chain selected for the
    host environment, and performs the per-call capability probing.
    """

    def __init__(
        self,
        environment: Optional[HostEnvironment] = None,
        settings: Optional[Settings] = None,
    ):
        self.environment = environment or HostEnvironment()
        self.settings = settings or get_settings()
        self.logger = Logger("ListenRuntime", "listen", self.settings.log_level)

        self.normalizer: Optional[EventNormalizer] = None
        if not has(
            EnvironmentFeature.DOM_ADD_EVENT_LISTENER, self.environment, self.settings
        ):
            self.normalizer = EventNormalizer(
                self.environment.window, self.settings.log_level
            )

        self.teardown: Optional[TeardownChain] = None
        if needs_leak_teardown(self.environment, self.settings):
            self.teardown = TeardownChain(self.settings.log_level)

        self._stats: Dict[str, Any] = {
            "subscriptions": 0,
            "by_strategy": {strategy.value: 0 for strategy in SubscriptionStrategy},
        }

        self.unload_handle: Optional[Handle] = None
        if self.teardown is not None and self.environment.window is not None:
            self.unload_handle = self.subscribe(
                self.environment.window, "unload", self._on_unload
            )
        elif self.teardown is not None:
            self.logger.warning(
                "No window configured; handler teardown only runs when called"
            )

        self.logger.info(
            f"Runtime ready (normalizer={'on' if self.normalizer else 'off'}, "
            f"teardown={'on' if self.teardown else 'off'})"
        )

    def _on_unload(self, event: Any = None) -> None:
        if self.teardown is not None and self.environment.document is not None:
            self.teardown.run(self.environment.document)

    # === Capability probing ===

    def resolve_strategy(self, target: Any) -> SubscriptionStrategy:
        if isinstance(target, EventListenerTarget):
            return SubscriptionStrategy.NATIVE
        if getattr(target, "attach_event", None) is not None:
            return SubscriptionStrategy.LEGACY
        return SubscriptionStrategy.INTERCEPT

    def record(self, strategy: SubscriptionStrategy) -> None:
        # A delegated call is counted again by the target's own subscription
        if strategy != SubscriptionStrategy.DELEGATE:
            self._stats["subscriptions"] += 1
        self._stats["by_strategy"][strategy.value] += 1

    # === Delivery ===

    def subscribe(
        self, target: Any, type: str, listener: Listener, dont_fix: bool = False
    ) -> Handle:
        """Attach ``listener`` to ``type`` events of ``target``."""
        strategy = self.resolve_strategy(target)
        self.record(strategy)
        self.logger.debug(
            f"Subscribing to '{type}' on {type_name(target)} via {strategy.value}"
        )

        if strategy == SubscriptionStrategy.NATIVE:
            target.add_event_listener(type, listener, False)
            return Signal(target, type, listener)

        if strategy == SubscriptionStrategy.LEGACY:
            if self.teardown is not None:
                self.teardown.register(target, type)
            # The page slot carries teardown calls, not host events
            fix = not dont_fix and slot_name(type) != MARKER_SLOT
            if self.normalizer is not None and fix:
                return self.normalizer.fix_listener(target, slot_name(type), listener)

        return after(target, slot_name(type), listener, True)

    def destroy(self, node: Any, listener: Listener) -> Handle:
        """Subscribe to ``node`` being destroyed."""
        if self.teardown is not None:
            # Routed through subscribe so the marker set by the teardown chain
            # stays the innermost handler
            return self.subscribe(node, "page", listener)
        return after(node, MARKER_SLOT, listener, True)

    def retire(self, successor: Optional["ListenRuntime"] = None) -> None:
        """Detach from the host so ``successor`` can take over."""
        if self.unload_handle is not None:
            self.unload_handle.cancel()
        if self.teardown is not None:
            self.teardown.retire(successor.teardown if successor else None)

    # === Statistics ===

    def get_stats(self) -> Dict[str, Any]:
        return {
            **self._stats,
            "by_strategy": dict(self._stats["by_strategy"]),
            "events_normalized": (
                self.normalizer.events_normalized if self.normalizer else 0
            ),
            "teardown_passes": self.teardown.passes if self.teardown else 0,
            "used_events": sorted(self.teardown.used_events) if self.teardown else [],
        }


def type_name(target: Any) -> str:
    return type(target).__name__


# Global runtime instance
_runtime: Optional[ListenRuntime] = None


def get_runtime() -> ListenRuntime:
    """Get the process runtime, creating a default one on first use"""
    global _runtime
    if _runtime is None:
        _runtime = ListenRuntime()
    return _runtime


def initialize_runtime(
    environment: Optional[HostEnvironment] = None,
    settings: Optional[Settings] = None,
) -> ListenRuntime:
    """Select the subscription strategy for the given host environment"""
    global _runtime
    runtime = ListenRuntime(environment, settings)
    if _runtime is not None:
        _runtime.retire(runtime)
    _runtime = runtime
    return _runtime


def reset_runtime() -> None:
    """Discard the process runtime (useful for testing)"""
    global _runtime
    if _runtime is not None:
        _runtime.retire()
    _runtime = None
