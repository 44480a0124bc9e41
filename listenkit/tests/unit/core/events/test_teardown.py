"""
Tests for the handler teardown chain and destroy notifications.
"""

import pytest
from unittest.mock import Mock, patch

from listenkit.config.settings import Settings
from listenkit.core.environment import HostEnvironment
from listenkit.core.events import destroy, listen
from listenkit.core.events.runtime import initialize_runtime
from listenkit.core.events.teardown import NodeCleanup, TeardownChain
from listenkit.loggers import Logger
from listenkit.tests.mocks import LegacyNode


@pytest.fixture
def tree(legacy_document):
    """document > a > b > c"""
    a = legacy_document.append_child(LegacyNode("a", legacy_document))
    b = a.append_child(LegacyNode("b", legacy_document))
    c = b.append_child(LegacyNode("c", legacy_document))
    return a, b, c


@pytest.mark.legacy
class TestUnloadTeardown:
    def test_runtime_arms_chain_and_subscribes_to_unload(
        self, legacy_runtime, legacy_window
    ):
        assert legacy_runtime.teardown is not None
        assert legacy_runtime.unload_handle is not None
        assert callable(legacy_window.onunload)

    def test_teardown_without_window_warns(self, legacy_document):
        environment = HostEnvironment(
            document=legacy_document, script_engine_version=5.6
        )

        with patch.object(Logger, "warning") as warning:
            runtime = initialize_runtime(environment, Settings())

        assert runtime.teardown is not None
        assert runtime.unload_handle is None
        warning.assert_called_once()

    def test_unload_clears_click_slots(self, legacy_runtime, legacy_window, tree):
        for node in tree:
            listen(node, "click", Mock())

        legacy_window.unload()

        assert [node.onclick for node in tree] == [None, None, None]
        assert legacy_runtime.get_stats()["teardown_passes"] == 1

    def test_unload_only_clears_used_slots(self, legacy_runtime, legacy_window, tree):
        a, _, _ = tree
        listen(a, "click", Mock())
        a.ondraw = Mock()

        legacy_window.unload()

        assert a.onclick is None
        assert isinstance(a.ondraw, Mock)

    def test_nodes_marked_on_subscription(self, legacy_runtime, tree):
        a, b, _ = tree
        listen(b, "keypress", Mock())

        assert isinstance(b.onpage, NodeCleanup)
        assert getattr(a, "onpage", None) is None
        assert "keypress" in legacy_runtime.teardown.used_events

    def test_resubscribe_after_teardown(self, legacy_runtime, legacy_window, tree):
        a, _, _ = tree
        listen(a, "click", Mock())
        legacy_window.unload()
        listener = Mock()

        listen(a, "click", listener)
        a.fire("click", None)

        listener.assert_called_once()
        assert legacy_runtime.teardown.propagating is False

    def test_second_pass_runs_again(self, legacy_runtime, legacy_window, tree):
        a, _, c = tree
        listen(a, "click", Mock())
        legacy_window.unload()
        listen(c, "click", Mock())

        legacy_window.unload()

        assert c.onclick is None
        assert legacy_runtime.teardown.passes == 2

    def test_root_marker_cleared(self, legacy_runtime, legacy_document, legacy_window):
        listen(legacy_document, "click", Mock())

        legacy_window.unload()

        assert legacy_document.onclick is None
        assert legacy_document.onpage is None


@pytest.mark.legacy
class TestDestroy:
    def test_destroy_listener_fires_on_subtree_teardown(self, legacy_runtime, tree):
        a, b, c = tree
        listen(c, "click", Mock())
        on_destroyed = Mock()
        destroy(b, on_destroyed)

        legacy_runtime.teardown.run(a)

        on_destroyed.assert_called_once()
        assert c.onclick is None
        assert "page" in legacy_runtime.teardown.used_events

    def test_destroying_a_node_clears_its_descendants(self, legacy_runtime, tree):
        a, b, c = tree
        listen(a, "click", Mock())
        listen(c, "click", Mock())

        a.onpage()

        assert a.onclick is None
        assert c.onclick is None

    def test_destroy_without_teardown_is_plain_advice(self):
        node = LegacyNode()
        on_destroyed = Mock()

        handle = destroy(node, on_destroyed)
        node.onpage()

        on_destroyed.assert_called_once_with()
        handle.cancel()

    def test_allow_leaks_disables_chain(self, legacy_window, legacy_document):
        environment = HostEnvironment(
            window=legacy_window,
            document=legacy_document,
            script_engine_version=5.6,
        )

        runtime = initialize_runtime(environment, Settings(allow_leaks=True))

        assert runtime.teardown is None
        assert runtime.normalizer is not None
        assert getattr(legacy_window, "onunload", None) is None


class TestTeardownChain:
    def test_state_resets_after_failed_pass(self):
        chain = TeardownChain()
        broken = Mock()
        broken.get_elements_by_tag_name.side_effect = RuntimeError("tree gone")

        with pytest.raises(RuntimeError):
            chain.run(broken)

        assert chain.propagating is False

    def test_descendants_visited_in_reverse_document_order(self):
        chain = TeardownChain()
        root = LegacyNode("root")
        first = root.append_child(LegacyNode("first"))
        second = root.append_child(LegacyNode("second"))
        visited = []
        first.onpage = lambda slots: visited.append("first")
        second.onpage = lambda slots: visited.append("second")

        chain.run(root)

        assert visited == ["second", "first"]

    def test_register_keeps_existing_marker(self):
        chain = TeardownChain()
        node = LegacyNode()
        marker = Mock()
        node.onpage = marker

        chain.register(node, "click")

        assert node.onpage is marker

    def test_register_replaces_marker_of_another_chain(self):
        old, new = TeardownChain(), TeardownChain()
        node = LegacyNode()
        old.register(node, "click")

        new.register(node, "click")

        assert node.onpage.chain is new

    def test_root_without_descendants_clears_itself(self):
        chain = TeardownChain()
        node = Mock(spec=["onclick"])
        chain.used_events.add("click")

        chain.run(node)

        assert node.onclick is None
        assert chain.passes == 1

    def test_retired_marker_does_nothing_without_successor(self):
        chain = TeardownChain()
        node = LegacyNode()
        chain.register(node, "click")
        node.onclick = Mock()
        chain.retire()

        node.onpage()

        assert isinstance(node.onclick, Mock)
        assert chain.passes == 0


@pytest.mark.legacy
class TestRuntimeReplacement:
    def test_new_runtime_takes_over_existing_markers(
        self, legacy_runtime, legacy_window, tree
    ):
        a, _, c = tree
        listen(a, "click", Mock())
        old_chain = legacy_runtime.teardown

        runtime = initialize_runtime(legacy_runtime.environment, Settings())
        listen(c, "keypress", Mock())
        legacy_window.unload()

        assert a.onclick is None
        assert c.onkeypress is None
        assert old_chain.passes == 0
        assert runtime.teardown.passes == 1

    def test_old_unload_subscription_is_cancelled(self, legacy_runtime, legacy_window):
        old_chain = legacy_runtime.teardown

        initialize_runtime(legacy_runtime.environment, Settings())
        legacy_window.unload()

        assert old_chain.passes == 0
        assert legacy_runtime.unload_handle.cancelled is True
