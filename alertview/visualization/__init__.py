from .graph import (
    DEFAULT_STYLE, GraphEdgeView, GraphNodeView, NetworkGraphView, RenderStyle,
    edge_color, format_file_path, network_options, node_label, node_shape,
    project_edge, project_graph, project_node,
)

__all__ = [
    'DEFAULT_STYLE', 'GraphEdgeView', 'GraphNodeView', 'NetworkGraphView', 'RenderStyle',
    'edge_color', 'format_file_path', 'network_options', 'node_label', 'node_shape',
    'project_edge', 'project_graph', 'project_node',
]
