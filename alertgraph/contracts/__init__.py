"""
Contracts Module

Explicit data types shared between the alert graph layers.
All inter-layer communication uses these contracts.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. Failures are values (Error / Result), not exceptions
3. Positions are derived by the layout builder only
"""

from .base import Error, ErrorCode, Result
from .network import (
    AlertRecord, Edge, NetworkPayload, Node, NodeType, Position,
    PositionedNode, QuarantinedRecord, RawTime, Severity, by_severity, edge_key,
)

__all__ = [
    'Error', 'ErrorCode', 'Result',
    'AlertRecord', 'Edge', 'NetworkPayload', 'Node', 'NodeType', 'Position',
    'PositionedNode', 'QuarantinedRecord', 'RawTime', 'Severity', 'by_severity', 'edge_key',
]
