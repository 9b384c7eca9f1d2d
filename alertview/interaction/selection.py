"""
Interaction Contracts

Responsibility:
Selection state for node/edge inspection, driven by pointer events.

STATES:
=======
IDLE -> NODE_SELECTED | EDGE_SELECTED on a click naming a visible entity
NODE_SELECTED <-> EDGE_SELECTED directly on the opposite click type
any -> IDLE on PopupClosed, or on a click naming an entity that is
not currently visible

INVARIANTS:
===========
1. At most one of (node, edge) is selected
2. reduce() is pure and never touches the model
3. Popup visibility is derived from the selection, not stored
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional, Tuple, Union
import logging

from alertgraph.contracts.network import Edge, Node
from alertgraph.core.visibility import VisibleGraph
from ..presentation.viewmodels import EdgePopupViewModel, NodePopupViewModel

logger = logging.getLogger(__name__)


class SelectionPhase(Enum):
    IDLE = "idle"
    NODE_SELECTED = "node_selected"
    EDGE_SELECTED = "edge_selected"


# =============================================================================
# EVENTS
# =============================================================================

@dataclass(frozen=True)
class NodeClicked:
    """Node selection reported by the rendering surface; only the first id counts."""
    node_ids: Tuple[str, ...]


@dataclass(frozen=True)
class EdgeClicked:
    """Edge selection reported by the rendering surface; ids are 'source-target'."""
    edge_ids: Tuple[str, ...]


@dataclass(frozen=True)
class PopupClosed:
    pass


InteractionEvent = Union[NodeClicked, EdgeClicked, PopupClosed]


# =============================================================================
# STATE
# =============================================================================

@dataclass(frozen=True)
class InteractionState:
    phase: SelectionPhase = SelectionPhase.IDLE
    node: Optional[Node] = None
    edge: Optional[Edge] = None
    edge_id: Optional[str] = None

    @classmethod
    def idle(cls) -> InteractionState:
        return cls()

    @classmethod
    def with_node(cls, node: Node) -> InteractionState:
        return cls(phase=SelectionPhase.NODE_SELECTED, node=node)

    @classmethod
    def with_edge(cls, edge: Edge, edge_id: Optional[str] = None) -> InteractionState:
        return cls(phase=SelectionPhase.EDGE_SELECTED, edge=edge, edge_id=edge_id or edge.key)


IDLE = InteractionState.idle()


def reduce(state: InteractionState, event: InteractionEvent, visible: VisibleGraph) -> InteractionState:
    """(state, event) -> state'. Stale ids resolve to IDLE."""
    if isinstance(event, PopupClosed):
        return IDLE

    if isinstance(event, NodeClicked):
        if not event.node_ids:
            return state
        positioned = visible.node(event.node_ids[0])
        if positioned is None:
            logger.debug("Node click on %r outside the visible set", event.node_ids[0])
            return IDLE
        return InteractionState.with_node(positioned.node)

    if isinstance(event, EdgeClicked):
        if not event.edge_ids:
            return state
        edge = visible.edge(event.edge_ids[0])
        if edge is None:
            logger.debug("Edge click on %r outside the visible set", event.edge_ids[0])
            return IDLE
        return InteractionState.with_edge(edge, event.edge_ids[0])

    raise TypeError(f"Unknown interaction event: {event!r}")


def revalidate(state: InteractionState, visible: VisibleGraph) -> InteractionState:
    """Drop a selection whose entity is no longer visible."""
    if state.node is not None and visible.node(state.node.id) is None:
        return IDLE
    if state.edge is not None and visible.edge(state.edge_id) is not state.edge:
        return IDLE
    return state


# =============================================================================
# POPUPS
# =============================================================================

def node_popup(state: InteractionState) -> Optional[NodePopupViewModel]:
    if state.node is None or not state.node.names:
        return None
    return NodePopupViewModel(node_id=state.node.id, names=state.node.names)


def edge_popup(state: InteractionState) -> Optional[EdgePopupViewModel]:
    if state.edge is None or not state.edge.alname:
        return None
    return EdgePopupViewModel(edge_id=state.edge_id, alname=state.edge.alname)


class InteractionController:
    """
    Single writer for selection state.

    Wraps reduce(); keeps a short history of transitions for debugging.
    """

    def __init__(self, history_size: int = 50):
        self._state = IDLE
        self._history: Deque[Tuple[InteractionEvent, SelectionPhase]] = deque(maxlen=history_size)

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def history(self) -> Tuple[Tuple[InteractionEvent, SelectionPhase], ...]:
        return tuple(self._history)

    def dispatch(self, event: InteractionEvent, visible: VisibleGraph) -> InteractionState:
        self._state = reduce(self._state, event, visible)
        self._history.append((event, self._state.phase))
        return self._state

    def revalidate(self, visible: VisibleGraph) -> InteractionState:
        self._state = revalidate(self._state, visible)
        return self._state

    def reset(self) -> None:
        self._state = IDLE
        self._history.clear()

    def node_popup(self) -> Optional[NodePopupViewModel]:
        return node_popup(self._state)

    def edge_popup(self) -> Optional[EdgePopupViewModel]:
        return edge_popup(self._state)
