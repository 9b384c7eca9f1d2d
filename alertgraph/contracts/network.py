"""
Alert Network Contracts

Immutable data structures describing one alert's entity graph.

SHAPES:
=======
- Node: a process, file or socket observed during the alert
- Edge: a timestamped action between two nodes
- Position: derived layout coordinates, owned by the layout builder

Node/Edge records are immutable once fetched for an alert id.
A new alert id means a full rebuild, never an incremental update.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple, Union


RawTime = Union[str, int, float, None]


def edge_key(source: str, target: str) -> str:
    """Lookup key for an edge, as reported by the rendering surface."""
    return f"{source}-{target}"


# =============================================================================
# ENUMS
# =============================================================================

class NodeType(Enum):
    """Entity kinds that can appear in an alert graph."""
    PROCESS = "process"
    FILE = "file"
    SOCKET = "socket"


class Severity(Enum):
    """Alert severity, ordered Low < Medium < High < Critical."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def ordinal(self) -> int:
        return _SEVERITY_ORDER[self]


_SEVERITY_ORDER = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


# =============================================================================
# GRAPH ENTITIES
# =============================================================================

@dataclass(frozen=True)
class Node:
    """A validated alert graph node."""
    id: str
    label: str
    type: NodeType
    rank: int = 0
    transparent: bool = False
    names: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Edge:
    """
    A validated alert graph edge.

    Identity for lookup is the ordered pair (source, target).
    `time` is kept exactly as received; ordering goes through an
    injected time parser.
    """
    source: str
    target: str
    label: str = ""
    time: RawTime = None
    transparent: bool = False
    alname: Optional[str] = None

    @property
    def key(self) -> str:
        return edge_key(self.source, self.target)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


@dataclass(frozen=True)
class Position:
    """Layout coordinates. Derived, never supplied externally."""
    x: float
    y: float


@dataclass(frozen=True)
class PositionedNode:
    """A node decorated with its layout position."""
    node: Node
    position: Position

    @property
    def id(self) -> str:
        return self.node.id


# =============================================================================
# ALERT METADATA
# =============================================================================

@dataclass(frozen=True)
class AlertRecord:
    """Alert metadata as served by GET /alert/{alertId}."""
    id: str
    name: str
    description: str
    severity: Severity
    machine: str
    program: str
    occurred_on: str


def by_severity(alerts: Iterable[AlertRecord]) -> Tuple[AlertRecord, ...]:
    """Most severe first; alerts of equal severity keep their order."""
    return tuple(sorted(alerts, key=lambda a: a.severity.ordinal, reverse=True))


# =============================================================================
# BOUNDARY RESULTS
# =============================================================================

@dataclass(frozen=True)
class QuarantinedRecord:
    """A raw record rejected at the validation boundary."""
    kind: str  # "node" | "edge" | "alert" | "payload"
    index: int
    reason: str
    excerpt: str


@dataclass(frozen=True)
class NetworkPayload:
    """Validated network for one alert plus everything that was rejected."""
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    quarantined: Tuple[QuarantinedRecord, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not self.quarantined
