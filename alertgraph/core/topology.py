"""
Topology Helpers
================

Structural views over an alert graph, backed by NetworkX.

ALLOWED:
- Incident-edge counting (layout ordering heuristic)
- Pair-keyed edge lookup
- Structural metrics (counts, weak components)

The graph here is a read-only derivative of the validated network;
nothing in this module changes node or edge records.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple
import networkx as nx

from ..contracts.network import Edge, Node


@dataclass(frozen=True)
class GraphMetrics:
    """Immutable structural metrics for an alert graph."""
    node_count: int
    edge_count: int
    transparent_edge_count: int
    component_count: int


def build_incidence_graph(nodes: Iterable[Node], edges: Iterable[Edge]) -> nx.MultiDiGraph:
    """
    Directed multigraph of every edge, transparent ones included.

    Parallel edges are kept so that degree reflects the raw edge list.
    """
    graph = nx.MultiDiGraph()
    for node in nodes:
        graph.add_node(node.id)
    for edge in edges:
        graph.add_edge(edge.source, edge.target, transparent=edge.transparent)
    return graph


def incident_degree(graph: nx.MultiDiGraph, node_id: str) -> int:
    """Number of edges touching `node_id`; a self-loop counts once."""
    if node_id not in graph:
        return 0
    return graph.degree(node_id) - graph.number_of_edges(node_id, node_id)


def compute_metrics(graph: nx.MultiDiGraph) -> GraphMetrics:
    transparent = sum(1 for _, _, data in graph.edges(data=True) if data.get('transparent'))
    components = nx.number_weakly_connected_components(graph) if len(graph) else 0
    return GraphMetrics(
        node_count=graph.number_of_nodes(),
        edge_count=graph.number_of_edges(),
        transparent_edge_count=transparent,
        component_count=components,
    )


Pair = Tuple[str, str]


class EdgeIndex:
    """
    Lookup of edges by ordered (source, target) pair.

    At most one edge per pair is indexed: when the raw data repeats a
    pair, the last edge wins and its id is reported in `duplicates`.

    Each pair also gets a surface id, normally `source-target`. Distinct
    pairs can join to the same string (`a`->`b-c` and `a-b`->`c`); the
    later pair then gets `source-target#n` and is reported in
    `collisions`. Ids assigned by a parent index are kept by the indexes
    `restricted()` derives from it.
    """

    def __init__(self, edges: Iterable[Edge], ids: Optional[Dict[Pair, str]] = None):
        self._ordered: Tuple[Edge, ...] = tuple(edges)
        self._by_pair: Dict[Pair, Edge] = {}
        self._ids: Dict[Pair, str] = {}
        self._pairs: Dict[str, Pair] = {}
        duplicates: List[str] = []
        collisions: List[str] = []

        for edge in self._ordered:
            pair = (edge.source, edge.target)
            if pair in self._by_pair:
                if self._ids[pair] not in duplicates:
                    duplicates.append(self._ids[pair])
            else:
                edge_id = ids[pair] if ids is not None and pair in ids else self._assign_id(edge)
                if edge_id != edge.key:
                    collisions.append(edge_id)
                self._ids[pair] = edge_id
                self._pairs[edge_id] = pair
            self._by_pair[pair] = edge

        self._duplicates: Tuple[str, ...] = tuple(duplicates)
        self._collisions: Tuple[str, ...] = tuple(collisions)

    def _assign_id(self, edge: Edge) -> str:
        edge_id = edge.key
        suffix = 2
        while edge_id in self._pairs:
            edge_id = f"{edge.key}#{suffix}"
            suffix += 1
        return edge_id

    def get(self, edge_id: str) -> Optional[Edge]:
        pair = self._pairs.get(edge_id)
        return self._by_pair[pair] if pair is not None else None

    def get_pair(self, source: str, target: str) -> Optional[Edge]:
        return self._by_pair.get((source, target))

    def id_of(self, edge: Edge) -> Optional[str]:
        return self._ids.get((edge.source, edge.target))

    def is_indexed(self, edge: Edge) -> bool:
        """True if `edge` is the one its pair resolves to."""
        return self._by_pair.get((edge.source, edge.target)) is edge

    def ordered(self) -> Tuple[Edge, ...]:
        """Edges in their original input order, repeats included."""
        return self._ordered

    def restricted(self, keep: Callable[[Edge], bool]) -> EdgeIndex:
        return EdgeIndex((e for e in self._ordered if keep(e)), ids=self._ids)

    @property
    def duplicates(self) -> Tuple[str, ...]:
        return self._duplicates

    @property
    def collisions(self) -> Tuple[str, ...]:
        return self._collisions

    def __contains__(self, edge_id: object) -> bool:
        return edge_id in self._pairs

    def __len__(self) -> int:
        return len(self._by_pair)

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)
