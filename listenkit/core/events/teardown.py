"""
Handler teardown for hosts whose collector cannot reclaim reference cycles
between host nodes and script callables.

Every legacy node that receives a handler through its ``on<type>`` slot is
marked with an ``onpage`` cleanup callable and the event type is recorded.
When the host is unloaded (or a subtree destroyed) a single pass walks the
tree from the root and nulls out every recorded slot, which breaks the cycles
without keeping a permanent reference into them.
"""

from __future__ import annotations
from typing import Any, List, Optional, Set

from listenkit.core.types.event_types import NodeTree, slot_name
from listenkit.loggers import Logger

MARKER_SLOT = slot_name("page")


class NodeCleanup:
    """Bound cleanup callable stored in a node's marker slot."""

    def __init__(self, chain: "TeardownChain", node: Any):
        self.chain = chain
        self.node = node

    def __call__(self, used_slots: Optional[List[str]] = None) -> None:
        chain = self.chain.current()
        if chain is not None:
            chain.cleanup(self.node)


class TeardownChain:
    """
    Two-state pass over a node tree.

    Armed: no pass is running; calling ``cleanup`` on a node starts a pass
    rooted there. Propagating: the used slot list exists and each node's
    marker only clears that node.
    """

    def __init__(self, log_level: str = "warning"):
        self.used_events: Set[str] = set()
        self._used_slots: Optional[List[str]] = None
        self.passes = 0
        self.successor: Optional[TeardownChain] = None
        self.retired = False
        self.logger = Logger("TeardownChain", "teardown", log_level)

    @property
    def propagating(self) -> bool:
        return self._used_slots is not None

    def register(self, node: Any, type: str) -> None:
        """Mark ``node`` as carrying handlers and record ``type`` as used."""
        marker = getattr(node, MARKER_SLOT, None)
        stale = isinstance(marker, NodeCleanup) and marker.chain is not self
        if not marker or stale:
            setattr(node, MARKER_SLOT, NodeCleanup(self, node))
        self.used_events.add(type)

    def retire(self, successor: Optional["TeardownChain"] = None) -> None:
        """
        Hand every node marked by this chain over to ``successor``.

        Markers already on nodes keep pointing here; they forward to the live
        chain, or do nothing when there is none.
        """
        self.retired = True
        self.successor = successor
        if successor is not None:
            successor.used_events |= self.used_events

    def current(self) -> Optional["TeardownChain"]:
        chain: Optional[TeardownChain] = self
        while chain is not None and chain.retired:
            chain = chain.successor
        return chain

    def cleanup(self, node: Any) -> None:
        if self._used_slots is not None:
            self._clear_slots(node, self._used_slots)
        else:
            self.run(node)

    def run(self, root: Any) -> None:
        """
        Clear every used handler slot under and on ``root``.

        A root that is not a ``NodeTree`` has no descendants to visit.
        """
        self._used_slots = [slot_name(type) for type in sorted(self.used_events)]
        try:
            children = []
            if isinstance(root, NodeTree):
                children = list(root.get_elements_by_tag_name("*"))
            # Reverse document order: descendants before their ancestors
            for element in reversed(children):
                marker = getattr(element, MARKER_SLOT, None)
                if marker:
                    marker(self._used_slots)
            self._clear_slots(root, self._used_slots)
            if getattr(root, MARKER_SLOT, None):
                setattr(root, MARKER_SLOT, None)
            self.passes += 1
            self.logger.info(
                f"Cleared {len(self._used_slots)} handler slot(s) across "
                f"{len(children) + 1} node(s)"
            )
        finally:
            self._used_slots = None

    @staticmethod
    def _clear_slots(node: Any, slots: List[str]) -> None:
        for slot in slots:
            if getattr(node, slot, None):
                setattr(node, slot, None)
