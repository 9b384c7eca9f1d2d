"""
API Mapper
==========

Transforms built models and projected views into JSON-ready dicts.
Exposes the layout as computed; nothing is re-derived here.
"""
from typing import Any, Dict, Sequence

from alertgraph.contracts.network import AlertRecord, NetworkPayload, QuarantinedRecord
from alertgraph.core.layout import AlertGraphModel

from ..presentation.viewmodels import AlertDetailsViewModel
from ..visualization.graph import NetworkGraphView


def map_graph_response(
    alert_id: str,
    model: AlertGraphModel,
    payload: NetworkPayload,
    view: NetworkGraphView,
) -> Dict[str, Any]:
    """Map one alert's projected graph to the /graph response body."""
    vis = view.to_vis_dict()
    return {
        "alert_id": alert_id,
        "show_transparent": view.show_transparent,
        "has_hidden_elements": model.has_transparent_elements,
        "nodes": vis["nodes"],
        "edges": vis["edges"],
        "options": vis["options"],
        "layers": [{"rank": rank, "node_ids": list(ids)} for rank, ids in model.layers],
        "metrics": {
            "node_count": model.metrics.node_count,
            "edge_count": model.metrics.edge_count,
            "transparent_edge_count": model.metrics.transparent_edge_count,
            "component_count": model.metrics.component_count,
        },
        "quarantined": [
            {"kind": q.kind, "index": q.index, "reason": q.reason}
            for q in payload.quarantined
        ],
        "duplicate_edge_keys": list(model.duplicate_edge_keys),
        "edge_id_collisions": list(model.edge_id_collisions),
        "unparseable_time_keys": list(model.unparseable_time_keys),
    }


def map_alert_details(details: AlertDetailsViewModel) -> Dict[str, Any]:
    return {
        "title": details.title,
        "rows": [{"label": label, "value": value} for label, value in details.rows],
        "severity": {
            "label": details.severity_tag.label,
            "css_class": details.severity_tag.css_class,
        },
    }


def map_alert_list(
    alerts: Sequence[AlertRecord],
    quarantined: Sequence[QuarantinedRecord],
) -> Dict[str, Any]:
    """Map validated alerts, already in display order, to the list body."""
    return {
        "alerts": [
            {
                "id": alert.id,
                "name": alert.name,
                "severity": alert.severity.value,
                "machine": alert.machine,
                "occurred_on": alert.occurred_on,
            }
            for alert in alerts
        ],
        "quarantined": [
            {"kind": q.kind, "index": q.index, "reason": q.reason}
            for q in quarantined
        ],
    }
