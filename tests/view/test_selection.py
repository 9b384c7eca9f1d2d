"""
Interaction Controller Tests

Selection state machine: IDLE, NODE_SELECTED, EDGE_SELECTED.
"""

import pytest

from alertgraph.contracts.network import NodeType
from alertgraph.core.visibility import filter_visible
from alertview.interaction.selection import (
    IDLE, EdgeClicked, InteractionController, InteractionState, NodeClicked,
    PopupClosed, SelectionPhase, edge_popup, node_popup, reduce, revalidate,
)

from ..fixtures import T1, build, make_edge, make_node


@pytest.fixture
def model():
    nodes = [
        make_node("ps", names=("powershell.exe", "pwsh")),
        make_node("cmd"),
        make_node("sock", node_type=NodeType.SOCKET, rank=1),
        make_node("tmp", node_type=NodeType.FILE, rank=1, transparent=True),
    ]
    edges = [
        make_edge("ps", "sock", alname="A-17"),
        make_edge("cmd", "sock", time=T1),
        make_edge("ps", "tmp", transparent=True),
    ]
    return build(nodes, edges)


@pytest.fixture
def visible(model):
    return filter_visible(model, show_transparent=False)


class TestTransitions:

    def test_node_click_selects_node(self, visible):
        state = reduce(IDLE, NodeClicked(("ps",)), visible)

        assert state.phase is SelectionPhase.NODE_SELECTED
        assert state.node.id == "ps"
        assert state.edge is None

    def test_edge_click_selects_edge(self, visible):
        state = reduce(IDLE, EdgeClicked(("ps-sock",)), visible)

        assert state.phase is SelectionPhase.EDGE_SELECTED
        assert state.edge.key == "ps-sock"
        assert state.node is None

    def test_switch_directly_between_kinds(self, visible):
        state = reduce(IDLE, NodeClicked(("ps",)), visible)
        state = reduce(state, EdgeClicked(("ps-sock",)), visible)

        assert state.phase is SelectionPhase.EDGE_SELECTED
        assert state.node is None

        state = reduce(state, NodeClicked(("cmd",)), visible)
        assert state.phase is SelectionPhase.NODE_SELECTED
        assert state.edge is None

    def test_only_first_id_counts(self, visible):
        state = reduce(IDLE, NodeClicked(("cmd", "ps")), visible)
        assert state.node.id == "cmd"

    def test_empty_selection_keeps_state(self, visible):
        selected = reduce(IDLE, NodeClicked(("ps",)), visible)

        assert reduce(selected, NodeClicked(()), visible) == selected
        assert reduce(selected, EdgeClicked(()), visible) == selected

    def test_popup_closed(self, visible):
        selected = reduce(IDLE, EdgeClicked(("ps-sock",)), visible)
        assert reduce(selected, PopupClosed(), visible) == IDLE
        assert reduce(IDLE, PopupClosed(), visible) == IDLE

    def test_same_click_is_idempotent(self, visible):
        once = reduce(IDLE, NodeClicked(("ps",)), visible)
        twice = reduce(once, NodeClicked(("ps",)), visible)
        assert once == twice

    def test_stale_node_resolves_to_idle(self, visible):
        selected = reduce(IDLE, NodeClicked(("ps",)), visible)
        assert reduce(selected, NodeClicked(("tmp",)), visible) == IDLE
        assert reduce(selected, NodeClicked(("nope",)), visible) == IDLE

    def test_stale_edge_resolves_to_idle(self, visible):
        assert reduce(IDLE, EdgeClicked(("ps-tmp",)), visible) == IDLE
        assert reduce(IDLE, EdgeClicked(("sock-ps",)), visible) == IDLE

    def test_hidden_edge_selectable_when_shown(self, model):
        shown = filter_visible(model, show_transparent=True)
        state = reduce(IDLE, EdgeClicked(("ps-tmp",)), shown)
        assert state.phase is SelectionPhase.EDGE_SELECTED

    def test_unknown_event(self, visible):
        with pytest.raises(TypeError):
            reduce(IDLE, "click", visible)

    def test_model_not_mutated(self, model, visible):
        nodes, edges = model.nodes, model.edges
        reduce(IDLE, NodeClicked(("ps",)), visible)
        assert model.nodes == nodes and model.edges == edges


class TestPopups:

    def test_node_popup_needs_names(self, visible):
        with_names = reduce(IDLE, NodeClicked(("ps",)), visible)
        without = reduce(IDLE, NodeClicked(("cmd",)), visible)

        popup = node_popup(with_names)
        assert popup.names == ("powershell.exe", "pwsh")
        assert popup.heading == "Names:"
        assert node_popup(without) is None

    def test_edge_popup_needs_alname(self, visible):
        with_alert = reduce(IDLE, EdgeClicked(("ps-sock",)), visible)
        without = reduce(IDLE, EdgeClicked(("cmd-sock",)), visible)

        assert edge_popup(with_alert).text == "Alert: A-17"
        assert edge_popup(without) is None

    def test_at_most_one_popup(self, visible):
        for event in (NodeClicked(("ps",)), EdgeClicked(("ps-sock",)), PopupClosed()):
            state = reduce(IDLE, event, visible)
            assert node_popup(state) is None or edge_popup(state) is None

    def test_idle_has_no_popup(self):
        assert node_popup(IDLE) is None
        assert edge_popup(IDLE) is None


class TestRevalidate:

    def test_hidden_selection_dropped(self, model):
        shown = filter_visible(model, True)
        hidden = filter_visible(model, False)
        state = reduce(IDLE, NodeClicked(("tmp",)), shown)

        assert revalidate(state, hidden) == IDLE

    def test_visible_selection_kept(self, model, visible):
        state = InteractionState.with_edge(model.edge("ps-sock"))
        assert revalidate(state, visible) is state


class TestController:

    def test_dispatch_and_history(self, visible):
        controller = InteractionController(history_size=2)
        controller.dispatch(NodeClicked(("ps",)), visible)
        controller.dispatch(EdgeClicked(("ps-sock",)), visible)
        controller.dispatch(PopupClosed(), visible)

        assert controller.state == IDLE
        assert [phase for _, phase in controller.history] == [
            SelectionPhase.EDGE_SELECTED, SelectionPhase.IDLE,
        ]

    def test_reset(self, visible):
        controller = InteractionController()
        controller.dispatch(NodeClicked(("ps",)), visible)
        controller.reset()

        assert controller.state == IDLE
        assert controller.history == ()
        assert controller.node_popup() is None


class TestCollidingEdgeIds:

    def test_click_resolves_renamed_edge(self):
        nodes = [make_node("a"), make_node("b-c", rank=1), make_node("a-b"), make_node("c", rank=1)]
        edges = [make_edge("a", "b-c"), make_edge("a-b", "c", time=T1, alname="A-5")]
        visible = filter_visible(build(nodes, edges), False)

        state = reduce(IDLE, EdgeClicked(("a-b-c#2",)), visible)

        assert (state.edge.source, state.edge.target) == ("a-b", "c")
        assert edge_popup(state).edge_id == "a-b-c#2"
        assert revalidate(state, visible) is state
