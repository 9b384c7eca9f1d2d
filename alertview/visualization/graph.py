"""
Graph Visualization Contracts

Responsibility:
Deterministic transformation of a VisibleGraph into renderable views.
Pure mapping; no side effects, no knowledge of the rendering surface
beyond the attribute names it consumes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from alertgraph.contracts.network import Edge, NodeType, PositionedNode
from alertgraph.core.visibility import VisibleGraph

COMB_FILE = "comb-file"
DIMMED_CLASS = "dimmed"


@dataclass(frozen=True)
class RenderStyle:
    """Palette and sizing for the projection. Values are presentation choices."""
    node_fill: str = "rgb(151, 194, 252)"
    node_fill_transparent: str = "rgba(151, 194, 252, 0.5)"
    node_border: str = "#2B7CE9"
    node_highlight: str = "#D2E5FF"
    node_highlight_transparent: str = "rgba(210, 229, 255, 0.1)"
    opacity: float = 1.0
    transparent_opacity: float = 0.5

    default_size: int = 20
    default_font_size: int = 14
    socket_size: int = 40
    socket_font_size: int = 10
    socket_label_offset: int = -50

    edge_color: str = "#000000"
    edge_color_alert: str = "#ff0000"
    edge_color_alert_transparent: str = "#ff9999"
    edge_color_transparent: str = "#d3d3d3"
    edge_font_size: int = 12

    path_separator: str = "\\"
    ellipsis: str = "..."
    max_label_length: int = 12


DEFAULT_STYLE = RenderStyle()

_SHAPES = {
    NodeType.PROCESS: "circle",
    NodeType.SOCKET: "diamond",
    NodeType.FILE: "box",
}


@dataclass(frozen=True)
class GraphNodeView:
    """Renderable graph node."""
    node_id: str
    x: float
    y: float
    label: str
    title: Optional[str]  # hover text
    shape: str
    size: int
    font_size: int
    font_offset: int
    fill: str
    border: str
    highlight: str
    opacity: float
    css_class: str
    entity_type: str

    def to_vis_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.node_id,
            "label": self.label,
            "x": self.x,
            "y": self.y,
            "shape": self.shape,
            "size": self.size,
            "font": {"size": self.font_size, "vadjust": self.font_offset},
            "color": {
                "background": self.fill,
                "border": self.border,
                "highlight": {"background": self.highlight, "border": self.border},
            },
            "opacity": self.opacity,
            "className": self.css_class,
            "group": self.entity_type,
        }
        if self.title is not None:
            data["title"] = self.title
        return data


@dataclass(frozen=True)
class GraphEdgeView:
    """Renderable graph edge."""
    edge_id: str
    source_id: str
    target_id: str
    label: str
    color: str
    font_size: int
    css_class: str

    def to_vis_dict(self) -> Dict[str, Any]:
        return {
            "id": self.edge_id,
            "from": self.source_id,
            "to": self.target_id,
            "label": self.label,
            "color": self.color,
            "font": {"size": self.font_size, "align": "horizontal", "background": "white", "strokeWidth": 0},
            "className": self.css_class,
        }


@dataclass(frozen=True)
class NetworkGraphView:
    """
    Pre-layouted network graph.
    Layout is stable: positions come straight from the model.
    """
    nodes: Tuple[GraphNodeView, ...]
    edges: Tuple[GraphEdgeView, ...]
    show_transparent: bool
    options: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_vis_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_vis_dict() for n in self.nodes],
            "edges": [e.to_vis_dict() for e in self.edges],
            "options": self.options,
        }


# =============================================================================
# PROJECTION
# =============================================================================

def node_shape(node_type: NodeType) -> str:
    return _SHAPES.get(node_type, "box")


def format_file_path(path: str, style: RenderStyle = DEFAULT_STYLE) -> str:
    """
    Shorten a long file path to its first segment.

    'C:\\a\\b\\verylongname.exe' -> 'C:\\...'. Paths that are short, have a
    single segment, or start with the comb-file sentinel are unchanged.
    """
    parts = path.split(style.path_separator)
    if len(path) > style.max_label_length and len(parts) > 1 and parts[0] != COMB_FILE:
        return f"{parts[0]}{style.path_separator}{style.ellipsis}"
    return path


def node_label(positioned: PositionedNode, style: RenderStyle = DEFAULT_STYLE) -> str:
    node = positioned.node
    if node.type is NodeType.FILE and node.label != COMB_FILE:
        return format_file_path(node.label, style)
    return node.label


def edge_color(edge: Edge, style: RenderStyle = DEFAULT_STYLE) -> str:
    """An alert reference always outranks plain transparency."""
    if edge.alname and edge.transparent:
        return style.edge_color_alert_transparent
    if edge.alname:
        return style.edge_color_alert
    if edge.transparent:
        return style.edge_color_transparent
    return style.edge_color


def _css_class(transparent: bool, show_transparent: bool) -> str:
    return DIMMED_CLASS if transparent and show_transparent else ""


def project_node(
    positioned: PositionedNode,
    show_transparent: bool,
    style: RenderStyle = DEFAULT_STYLE,
) -> GraphNodeView:
    node = positioned.node
    is_socket = node.type is NodeType.SOCKET
    return GraphNodeView(
        node_id=node.id,
        x=positioned.position.x,
        y=positioned.position.y,
        label=node_label(positioned, style),
        title=node.label if node.type is NodeType.FILE else None,
        shape=node_shape(node.type),
        size=style.socket_size if is_socket else style.default_size,
        font_size=style.socket_font_size if is_socket else style.default_font_size,
        font_offset=style.socket_label_offset if is_socket else 0,
        fill=style.node_fill_transparent if node.transparent else style.node_fill,
        border=style.node_border,
        highlight=style.node_highlight_transparent if node.transparent else style.node_highlight,
        opacity=style.transparent_opacity if node.transparent else style.opacity,
        css_class=_css_class(node.transparent, show_transparent),
        entity_type=node.type.value,
    )


def project_edge(
    edge: Edge,
    show_transparent: bool,
    style: RenderStyle = DEFAULT_STYLE,
    edge_id: Optional[str] = None,
) -> GraphEdgeView:
    return GraphEdgeView(
        edge_id=edge_id or edge.key,
        source_id=edge.source,
        target_id=edge.target,
        label=edge.label,
        color=edge_color(edge, style),
        font_size=style.edge_font_size,
        css_class=_css_class(edge.transparent, show_transparent),
    )


def network_options(style: RenderStyle = DEFAULT_STYLE) -> Dict[str, Any]:
    """Rendering-surface options: static layout, physics off."""
    return {
        "autoResize": True,
        "layout": {"hierarchical": False},
        "edges": {
            "color": {"color": style.edge_color, "highlight": style.edge_color_alert, "hover": style.edge_color_alert},
            "arrows": {"to": {"enabled": True, "scaleFactor": 1}},
            "smooth": {"type": "cubicBezier", "roundness": 0.2},
            "font": {"align": "top", "size": style.edge_font_size},
        },
        "nodes": {
            "shape": "dot",
            "size": style.default_size,
            "font": {"size": style.default_font_size, "face": "Arial"},
        },
        "interaction": {
            "dragNodes": True,
            "hover": True,
            "selectConnectedEdges": False,
        },
        "physics": {"enabled": False},
    }


def project_graph(visible: VisibleGraph, style: RenderStyle = DEFAULT_STYLE) -> NetworkGraphView:
    flag = visible.show_transparent
    return NetworkGraphView(
        nodes=tuple(project_node(pn, flag, style) for pn in visible.nodes),
        # one view per pair; a repeated pair renders its indexed (last) edge
        edges=tuple(
            project_edge(e, flag, style, edge_id=visible.edge_id(e))
            for e in visible.edges if visible.edge_index.is_indexed(e)
        ),
        show_transparent=flag,
        options=network_options(style),
    )
