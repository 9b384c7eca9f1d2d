"""
Normalization Layer

RESPONSIBILITY: Validate untyped network responses at the system boundary
OUTPUTS: NetworkPayload (nodes, edges, quarantined records), AlertRecord

WHAT THIS LAYER MUST NOT DO:
============================
- Compute layout or visibility
- Raise on malformed input (quarantine instead)
- Propagate missing fields into layout math
"""

from .validator import (
    AlertModel, EdgeRecord, NodeRecord,
    coerce_rank, validate_alert, validate_alert_list, validate_network,
)

__all__ = [
    'AlertModel', 'EdgeRecord', 'NodeRecord',
    'coerce_rank', 'validate_alert', 'validate_alert_list', 'validate_network',
]
