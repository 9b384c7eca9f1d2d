"""
Graph Model Builder
===================

Deterministic rank-based placement of an alert graph.

ALGORITHM:
==========
1. Sort edges chronologically (stable; injected time parser)
2. Bucket nodes into layers by rank (anything unusable -> layer 0)
3. Order each layer by ascending incident-edge count
4. x = rank * H; y spreads the layer vertically around 0

GUARANTEES:
===========
1. Total: every input node receives exactly one position
2. Distinct layer index -> distinct y within a layer
3. Distinct rank -> distinct x
4. Same input -> same output (no randomness, no physics)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from ..contracts.network import Edge, NetworkPayload, Node, Position, PositionedNode
from ..normalization.validator import coerce_rank
from ..temporal.timeparse import (
    TimeParser, UnparseableTime, chronological_key, parse_timestamp,
)
from .topology import (
    EdgeIndex, GraphMetrics, build_incidence_graph, compute_metrics, incident_degree,
)

logger = logging.getLogger(__name__)

RANK_SPACING = 200.0
LAYER_SPACING = 100.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Spacing for the static layout.

    centered=True places node i of n at (i - (n - 1) / 2) * V, so a
    single-node layer sits on y=0. centered=False keeps the legacy
    i * V - n * V / 2 offset.
    """
    rank_spacing: float = RANK_SPACING
    layer_spacing: float = LAYER_SPACING
    centered: bool = True

    def __post_init__(self):
        if self.rank_spacing <= 0 or self.layer_spacing <= 0:
            raise ValueError("Layout spacing must be positive")

    def y_for(self, index: int, layer_size: int) -> float:
        if self.centered:
            return (index - (layer_size - 1) / 2) * self.layer_spacing
        return index * self.layer_spacing - (layer_size * self.layer_spacing) / 2

    def x_for(self, rank: int) -> float:
        return rank * self.rank_spacing


@dataclass(frozen=True)
class AlertGraphModel:
    """
    Positioned model for one alert.

    Immutable; rebuilt from scratch for every alert id.
    """
    nodes: Tuple[PositionedNode, ...]
    edges: Tuple[Edge, ...]
    layers: Tuple[Tuple[int, Tuple[str, ...]], ...]
    edge_index: EdgeIndex = field(compare=False, repr=False)
    metrics: GraphMetrics = field(compare=False)
    unparseable_time_keys: Tuple[str, ...] = field(default_factory=tuple)
    _by_id: Dict[str, PositionedNode] = field(
        init=False, compare=False, repr=False, default_factory=dict
    )

    def __post_init__(self):
        object.__setattr__(self, '_by_id', {pn.id: pn for pn in self.nodes})

    def node(self, node_id: str) -> Optional[PositionedNode]:
        return self._by_id.get(node_id)

    def position_of(self, node_id: str) -> Optional[Position]:
        positioned = self._by_id.get(node_id)
        return positioned.position if positioned else None

    def edge(self, edge_id: str) -> Optional[Edge]:
        return self.edge_index.get(edge_id)

    def edge_id(self, edge: Edge) -> Optional[str]:
        return self.edge_index.id_of(edge)

    @property
    def duplicate_edge_keys(self) -> Tuple[str, ...]:
        return self.edge_index.duplicates

    @property
    def edge_id_collisions(self) -> Tuple[str, ...]:
        return self.edge_index.collisions

    @property
    def has_transparent_elements(self) -> bool:
        return (
            any(pn.node.transparent for pn in self.nodes)
            or any(e.transparent for e in self.edges)
        )

    @classmethod
    def empty(cls) -> AlertGraphModel:
        return cls(
            nodes=(), edges=(), layers=(),
            edge_index=EdgeIndex(()),
            metrics=GraphMetrics(0, 0, 0, 0),
        )


class GraphModelBuilder:
    """
    Converts validated nodes and edges into an AlertGraphModel.

    Runs synchronously to completion; holds no state between builds.
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        time_parser: TimeParser = parse_timestamp,
    ):
        self._config = config or LayoutConfig()
        self._parse_time = time_parser

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def build_from_payload(self, payload: NetworkPayload) -> AlertGraphModel:
        return self.build(payload.nodes, payload.edges)

    def build(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> AlertGraphModel:
        nodes = tuple(nodes)
        edges = tuple(edges)

        sorted_edges, unparseable = self.sort_chronologically(edges)

        graph = build_incidence_graph(nodes, edges)
        layers = self._partition(nodes)

        positions: Dict[str, Position] = {}
        layer_order: List[Tuple[int, Tuple[str, ...]]] = []
        for rank in sorted(layers):
            members = sorted(layers[rank], key=lambda n: incident_degree(graph, n.id))
            size = len(members)
            for index, node in enumerate(members):
                positions[node.id] = Position(
                    x=self._config.x_for(rank),
                    y=self._config.y_for(index, size),
                )
            layer_order.append((rank, tuple(n.id for n in members)))

        model = AlertGraphModel(
            nodes=tuple(PositionedNode(node=n, position=positions[n.id]) for n in nodes),
            edges=sorted_edges,
            layers=tuple(layer_order),
            edge_index=EdgeIndex(edges),
            metrics=compute_metrics(graph),
            unparseable_time_keys=unparseable,
        )

        for key in model.duplicate_edge_keys:
            logger.warning("Duplicate edge key %s; last edge wins in lookups", key)
        for edge_id in model.edge_id_collisions:
            logger.warning("Distinct edge pairs share an id; renamed one to %s", edge_id)
        logger.debug(
            "Built layout: %d nodes in %d layers, %d edges",
            len(model.nodes), len(model.layers), len(model.edges),
        )
        return model

    def sort_chronologically(self, edges: Iterable[Edge]) -> Tuple[Tuple[Edge, ...], Tuple[str, ...]]:
        """
        Stable ascending sort by parsed time.

        Returns the ordered edges and the keys of edges whose time could
        not be parsed (those sort last, in input order).
        """
        edges = tuple(edges)
        parsed = [self._parse_time(e.time) for e in edges]
        order = sorted(range(len(edges)), key=lambda i: chronological_key(parsed[i], i))
        unparseable = tuple(
            edges[i].key for i in range(len(edges)) if isinstance(parsed[i], UnparseableTime)
        )
        if unparseable:
            logger.debug("%d edge(s) with unparseable time sorted last", len(unparseable))
        return tuple(edges[i] for i in order), unparseable

    def _partition(self, nodes: Iterable[Node]) -> Dict[int, List[Node]]:
        """Bucket every node by rank; the bucketing is total."""
        layers: Dict[int, List[Node]] = {}
        for node in nodes:
            layers.setdefault(coerce_rank(node.rank), []).append(node)
        return layers
