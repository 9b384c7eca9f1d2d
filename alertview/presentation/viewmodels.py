"""
Presentation Contracts

Responsibility:
Define ViewModel contracts for pure UI components.
Strictly decoupled from fetching, layout and selection logic.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from alertgraph.contracts.network import AlertRecord, Severity

SEVERITY_CLASSES = {
    Severity.LOW: "bg-yellow-300",
    Severity.MEDIUM: "bg-orange-300",
    Severity.HIGH: "bg-red-300",
    Severity.CRITICAL: "bg-purple-300",
}


@dataclass(frozen=True)
class NodePopupViewModel:
    """Detail popup for a node that carries alternate names."""
    node_id: str
    names: Tuple[str, ...]
    heading: str = "Names:"


@dataclass(frozen=True)
class EdgePopupViewModel:
    """Detail popup for an edge cross-referenced to another alert."""
    edge_id: str
    alname: str

    @property
    def text(self) -> str:
        return f"Alert: {self.alname}"


@dataclass(frozen=True)
class SeverityTagViewModel:
    label: str
    css_class: str

    @classmethod
    def for_severity(cls, severity: Severity) -> SeverityTagViewModel:
        return cls(label=severity.value, css_class=SEVERITY_CLASSES[severity])


@dataclass(frozen=True)
class AlertDetailsViewModel:
    """The 'More Info' panel: one row of alert metadata."""
    title: str
    rows: Tuple[Tuple[str, str], ...]
    severity_tag: SeverityTagViewModel

    @classmethod
    def from_alert(cls, alert: AlertRecord) -> AlertDetailsViewModel:
        return cls(
            title=alert.name,
            rows=(
                ("ID", alert.id),
                ("Name", alert.name),
                ("Description", alert.description),
                ("Severity", alert.severity.value),
                ("Machine", alert.machine),
                ("Program", alert.program),
                ("Timestamp", alert.occurred_on),
            ),
            severity_tag=SeverityTagViewModel.for_severity(alert.severity),
        )


@dataclass(frozen=True)
class TransparencyToggleViewModel:
    """Switch for hidden elements; only offered when something is hidden."""
    is_visible: bool
    is_checked: bool
    label: str = "Show Hidden Edges"


@dataclass(frozen=True)
class LoadingStateViewModel:
    """Unified loading / error indicator."""
    message: str
    progress: Optional[float]
    is_blocking: bool
    is_error: bool = False
