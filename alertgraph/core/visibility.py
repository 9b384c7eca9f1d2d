"""
Visibility Filter
=================

Derives the visible subset of a positioned model.

RULES:
======
- show_transparent=True: everything is visible, isolated nodes included
- show_transparent=False: an edge is visible iff it is not transparent;
  a node is visible iff it touches at least one visible edge

Filtering never deletes anything from the model; toggling back and
forth always yields the same sets.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from ..contracts.network import Edge, PositionedNode
from .layout import AlertGraphModel
from .topology import EdgeIndex


@dataclass(frozen=True)
class VisibleGraph:
    """The visible slice of an AlertGraphModel."""
    nodes: Tuple[PositionedNode, ...]
    edges: Tuple[Edge, ...]
    show_transparent: bool
    edge_index: EdgeIndex = field(compare=False, repr=False)
    _by_id: Dict[str, PositionedNode] = field(
        init=False, compare=False, repr=False, default_factory=dict
    )

    def __post_init__(self):
        object.__setattr__(self, '_by_id', {pn.id: pn for pn in self.nodes})

    @property
    def node_ids(self) -> FrozenSet[str]:
        return frozenset(self._by_id)

    @property
    def edge_keys(self) -> FrozenSet[str]:
        return frozenset(self.edge_index)

    def node(self, node_id: str) -> Optional[PositionedNode]:
        return self._by_id.get(node_id)

    def edge(self, edge_id: str) -> Optional[Edge]:
        return self.edge_index.get(edge_id)

    def edge_id(self, edge: Edge) -> Optional[str]:
        return self.edge_index.id_of(edge)

    @classmethod
    def empty(cls, show_transparent: bool = False) -> VisibleGraph:
        return cls(nodes=(), edges=(), show_transparent=show_transparent, edge_index=EdgeIndex(()))


def filter_visible(model: AlertGraphModel, show_transparent: bool) -> VisibleGraph:
    """Pure function of (model, flag)."""
    if show_transparent:
        return VisibleGraph(
            nodes=model.nodes,
            edges=model.edges,
            show_transparent=True,
            edge_index=model.edge_index,
        )

    edges = tuple(e for e in model.edges if not e.transparent)
    endpoints = {e.source for e in edges} | {e.target for e in edges}
    return VisibleGraph(
        nodes=tuple(pn for pn in model.nodes if pn.id in endpoints),
        edges=edges,
        show_transparent=False,
        edge_index=model.edge_index.restricted(lambda e: not e.transparent),
    )
