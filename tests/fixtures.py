"""
Test Fixtures

Explicit, hand-written alert networks. No random generation here;
property tests build their own inputs with hypothesis.
"""

from typing import Optional, Sequence

from alertgraph.contracts.network import Edge, Node, NodeType
from alertgraph.core.layout import GraphModelBuilder, LayoutConfig

H = 200.0
V = 100.0

T0 = "2024-03-01T10:00:00Z"
T1 = "2024-03-01T10:00:05Z"
T2 = "2024-03-01T10:01:00Z"
T3 = "2024-03-01T10:02:30Z"


def make_node(
    node_id: str,
    node_type: NodeType = NodeType.PROCESS,
    rank: int = 0,
    label: Optional[str] = None,
    transparent: bool = False,
    names: Sequence[str] = (),
) -> Node:
    return Node(
        id=node_id,
        label=label if label is not None else node_id,
        type=node_type,
        rank=rank,
        transparent=transparent,
        names=tuple(names),
    )


def make_edge(
    source: str,
    target: str,
    time=T0,
    label: str = "",
    transparent: bool = False,
    alname: Optional[str] = None,
) -> Edge:
    return Edge(
        source=source,
        target=target,
        label=label,
        time=time,
        transparent=transparent,
        alname=alname,
    )


def build(nodes, edges, centered: bool = True):
    return GraphModelBuilder(LayoutConfig(rank_spacing=H, layer_spacing=V, centered=centered)).build(nodes, edges)


# =============================================================================
# RAW WIRE FIXTURES (as served by GET /api/network/{alertId})
# =============================================================================

SCENARIO_RAW = {
    "nodes": [
        {"id": "p1", "label": "powershell.exe", "type": "process", "rank": 0},
        {"id": "f1", "label": "C:\\a\\b\\verylongname.exe", "type": "file", "rank": 1},
    ],
    "edges": [
        {"source": "p1", "target": "f1", "label": "write", "time": "t0", "transparent": False},
    ],
}

ALERT_RAW = {
    "id": 7,
    "name": "Suspicious PowerShell",
    "description": "Encoded command spawned by Office",
    "severity": "High",
    "machine": "WS-0042",
    "program": "powershell.exe",
    "occurred_on": "2024-03-01 10:00:00",
}

MIXED_RAW = {
    "nodes": [
        {"id": "winword", "label": "WINWORD.EXE", "type": "process", "rank": 0},
        {"id": "ps", "label": "powershell.exe", "type": "process", "rank": "1",
         "nodes": ["powershell.exe", "pwsh"]},
        {"id": "dll", "label": "C:\\Windows\\System32\\kernel32.dll", "type": "file",
         "rank": 2, "transparent": True},
        {"id": "sock", "label": "10.0.0.5:443", "type": "socket", "rank": 2},
        {"id": "lonely", "label": "orphan.tmp", "type": "file"},
    ],
    "edges": [
        {"source": "ps", "target": "sock", "label": "connect", "time": T2, "alname": "A-17"},
        {"source": "winword", "target": "ps", "label": "spawn", "time": T0},
        {"source": "ps", "target": "dll", "label": "load", "time": T1, "transparent": True},
    ],
}

# GET /api/alert: one malformed record, two alerts sharing a severity
ALERT_LIST_RAW = {
    "alerts": [
        {**ALERT_RAW, "id": 1, "name": "Macro dropped file", "severity": "Low"},
        {**ALERT_RAW, "id": 2, "name": "Credential dump", "severity": "Critical"},
        {**ALERT_RAW, "id": 3, "severity": "bogus"},
        {**ALERT_RAW, "id": 4, "name": "Beacon", "severity": "High"},
        ALERT_RAW,
    ],
}
