"""
Core Graph Layer

RESPONSIBILITY: Layout model construction and visibility filtering
ALLOWED INPUTS: Validated Node/Edge contracts
OUTPUTS: AlertGraphModel, VisibleGraph

WHAT THIS LAYER MUST NOT DO:
============================
- Fetch data or parse raw JSON
- Decide presentation attributes (shape, color, label text)
- Hold selection state
"""

from .layout import AlertGraphModel, GraphModelBuilder, LayoutConfig
from .topology import EdgeIndex, GraphMetrics
from .visibility import VisibleGraph, filter_visible

__all__ = [
    'AlertGraphModel', 'GraphModelBuilder', 'LayoutConfig',
    'EdgeIndex', 'GraphMetrics',
    'VisibleGraph', 'filter_visible',
]
