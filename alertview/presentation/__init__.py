from .viewmodels import (
    AlertDetailsViewModel, EdgePopupViewModel, LoadingStateViewModel,
    NodePopupViewModel, SeverityTagViewModel, TransparencyToggleViewModel,
)

__all__ = [
    'AlertDetailsViewModel', 'EdgePopupViewModel', 'LoadingStateViewModel',
    'NodePopupViewModel', 'SeverityTagViewModel', 'TransparencyToggleViewModel',
]
