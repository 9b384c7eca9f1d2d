from .selection import (
    EdgeClicked, InteractionController, InteractionEvent, InteractionState,
    NodeClicked, PopupClosed, SelectionPhase, edge_popup, node_popup, reduce, revalidate,
)

__all__ = [
    'EdgeClicked', 'InteractionController', 'InteractionEvent', 'InteractionState',
    'NodeClicked', 'PopupClosed', 'SelectionPhase', 'edge_popup', 'node_popup',
    'reduce', 'revalidate',
]
