"""
Alert Graph Session
===================

Page-level orchestration for inspecting one alert at a time.

FLOW:
=====
alert id -> (metadata fetch || network fetch) -> validate -> build
-> filter -> project; pointer events -> InteractionController

GUARANTEES:
===========
1. A new alert id discards the previous model (full rebuild)
2. Responses for a superseded alert id are discarded, never applied
3. Metadata and network loads fail independently
4. Nothing raises out of apply_*/load; failures become load statuses
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import asyncio
import logging

from alertgraph.contracts.base import Error
from alertgraph.contracts.network import AlertRecord
from alertgraph.core.layout import AlertGraphModel, GraphModelBuilder
from alertgraph.core.visibility import VisibleGraph, filter_visible
from alertgraph.ingestion.client import AlertServiceClient, FetchResult
from alertgraph.normalization.validator import validate_alert, validate_network
from alertgraph.observability import AuditEventType, AuditLog

from .interaction.selection import InteractionController, InteractionEvent, InteractionState
from .presentation.viewmodels import (
    AlertDetailsViewModel, EdgePopupViewModel, LoadingStateViewModel,
    NodePopupViewModel, TransparencyToggleViewModel,
)
from .visualization.graph import DEFAULT_STYLE, NetworkGraphView, RenderStyle, project_graph

logger = logging.getLogger(__name__)


def _describe(error: Error) -> str:
    url = error.context_value("url")
    return f"{error.message} ({url})" if url else error.message


class LoadStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadTicket:
    """Identifies one load request; only the newest ticket may apply results."""
    alert_id: str
    generation: int


class AlertGraphSession:
    """
    Single-writer state holder for the alert inspection page.

    Driven from one event loop or UI queue; not thread-safe.
    """

    def __init__(
        self,
        client: Optional[AlertServiceClient] = None,
        builder: Optional[GraphModelBuilder] = None,
        style: RenderStyle = DEFAULT_STYLE,
        show_transparent: bool = False,
        audit: Optional[AuditLog] = None,
    ):
        self._client = client
        self._builder = builder or GraphModelBuilder()
        self._style = style
        self._audit = audit or AuditLog()
        self._controller = InteractionController()

        self._generation = 0
        self._alert_id: Optional[str] = None
        self._show_transparent = show_transparent

        self._alert: Optional[AlertRecord] = None
        self._alert_status = LoadStatus.IDLE
        self._alert_error: Optional[Error] = None

        self._model = AlertGraphModel.empty()
        self._network_status = LoadStatus.IDLE
        self._network_error: Optional[Error] = None
        self._visible = VisibleGraph.empty(show_transparent)

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def alert_id(self) -> Optional[str]:
        return self._alert_id

    @property
    def alert(self) -> Optional[AlertRecord]:
        return self._alert

    @property
    def model(self) -> AlertGraphModel:
        return self._model

    @property
    def visible(self) -> VisibleGraph:
        return self._visible

    @property
    def show_transparent(self) -> bool:
        return self._show_transparent

    @property
    def alert_status(self) -> LoadStatus:
        return self._alert_status

    @property
    def network_status(self) -> LoadStatus:
        return self._network_status

    @property
    def alert_error(self) -> Optional[Error]:
        return self._alert_error

    @property
    def network_error(self) -> Optional[Error]:
        return self._network_error

    @property
    def selection(self) -> InteractionState:
        return self._controller.state

    @property
    def audit(self) -> AuditLog:
        return self._audit

    # =========================================================================
    # LOADING
    # =========================================================================

    def begin(self, alert_id: str) -> LoadTicket:
        """Start loading a new alert; everything from the previous one is dropped."""
        self._generation += 1
        self._alert_id = alert_id

        self._alert = None
        self._alert_status = LoadStatus.LOADING
        self._alert_error = None

        self._model = AlertGraphModel.empty()
        self._network_status = LoadStatus.LOADING
        self._network_error = None
        self._visible = VisibleGraph.empty(self._show_transparent)
        self._controller.reset()

        self._audit.record(AuditEventType.LOAD_STARTED, alert_id, f"generation={self._generation}")
        return LoadTicket(alert_id=alert_id, generation=self._generation)

    def is_current(self, ticket: LoadTicket) -> bool:
        return ticket.generation == self._generation

    def _discard_if_stale(self, ticket: LoadTicket, what: str) -> bool:
        if self.is_current(ticket):
            return False
        logger.info(
            "Discarding stale %s response for alert %s (current: %s)",
            what, ticket.alert_id, self._alert_id,
        )
        self._audit.record(
            AuditEventType.STALE_RESPONSE_DISCARDED, ticket.alert_id,
            f"{what}; current={self._alert_id}",
        )
        return True

    def apply_alert(self, ticket: LoadTicket, result: FetchResult) -> bool:
        """Apply a metadata response. Returns False if it was stale."""
        if self._discard_if_stale(ticket, "alert"):
            return False

        if not result.success:
            self._fail_alert(result.to_error())
            return True

        validated = validate_alert(result.payload)
        if validated.is_failure:
            self._fail_alert(validated.error)
            return True

        self._alert = validated.value
        self._alert_status = LoadStatus.READY
        return True

    def apply_network(self, ticket: LoadTicket, result: FetchResult) -> bool:
        """Apply a network response. Returns False if it was stale."""
        if self._discard_if_stale(ticket, "network"):
            return False

        if not result.success:
            error = result.to_error()
            self._network_status = LoadStatus.FAILED
            self._network_error = error
            self._audit.record(AuditEventType.FETCH_FAILED, ticket.alert_id, _describe(error))
            return True

        payload = validate_network(result.payload)
        for record in payload.quarantined:
            self._audit.record(
                AuditEventType.RECORD_QUARANTINED, ticket.alert_id,
                f"{record.kind}[{record.index}]: {record.reason}",
            )

        self._set_model(self._builder.build_from_payload(payload))
        self._network_status = LoadStatus.READY
        return True

    def load_model(self, alert_id: str, model: AlertGraphModel) -> None:
        """Install an already-built model (offline rendering, tests)."""
        self.begin(alert_id)
        self._alert_status = LoadStatus.IDLE
        self._set_model(model)
        self._network_status = LoadStatus.READY

    async def load(self, alert_id: str) -> LoadTicket:
        """Fetch metadata and network concurrently; each is applied as it arrives."""
        if self._client is None:
            raise RuntimeError("AlertGraphSession.load() needs an AlertServiceClient")
        ticket = self.begin(alert_id)

        async def load_alert() -> None:
            self.apply_alert(ticket, await self._client.fetch_alert(alert_id))

        async def load_network() -> None:
            self.apply_network(ticket, await self._client.fetch_network(alert_id))

        await asyncio.gather(load_alert(), load_network())
        return ticket

    def _fail_alert(self, error: Error) -> None:
        self._alert_status = LoadStatus.FAILED
        self._alert_error = error
        self._audit.record(AuditEventType.FETCH_FAILED, self._alert_id, _describe(error))

    def _set_model(self, model: AlertGraphModel) -> None:
        self._model = model
        for key in model.duplicate_edge_keys:
            self._audit.record(AuditEventType.DUPLICATE_EDGE_KEY, self._alert_id, key)
        for edge_id in model.edge_id_collisions:
            self._audit.record(AuditEventType.EDGE_ID_COLLISION, self._alert_id, edge_id)
        for key in model.unparseable_time_keys:
            self._audit.record(AuditEventType.UNPARSEABLE_TIME, self._alert_id, key)
        self._audit.record(
            AuditEventType.MODEL_BUILT, self._alert_id,
            f"nodes={len(model.nodes)} edges={len(model.edges)}",
        )
        self._refilter()

    # =========================================================================
    # VISIBILITY & INTERACTION
    # =========================================================================

    def set_show_transparent(self, show_transparent: bool) -> VisibleGraph:
        self._show_transparent = show_transparent
        self._refilter()
        return self._visible

    def toggle_transparent(self) -> VisibleGraph:
        return self.set_show_transparent(not self._show_transparent)

    def _refilter(self) -> None:
        self._visible = filter_visible(self._model, self._show_transparent)
        self._controller.revalidate(self._visible)

    def dispatch(self, event: InteractionEvent) -> InteractionState:
        return self._controller.dispatch(event, self._visible)

    # =========================================================================
    # VIEWS
    # =========================================================================

    def render(self) -> NetworkGraphView:
        return project_graph(self._visible, self._style)

    def node_popup(self) -> Optional[NodePopupViewModel]:
        return self._controller.node_popup()

    def edge_popup(self) -> Optional[EdgePopupViewModel]:
        return self._controller.edge_popup()

    def alert_details(self) -> Optional[AlertDetailsViewModel]:
        if self._alert is None:
            return None
        return AlertDetailsViewModel.from_alert(self._alert)

    def transparency_toggle(self) -> TransparencyToggleViewModel:
        return TransparencyToggleViewModel(
            is_visible=self._model.has_transparent_elements,
            is_checked=self._show_transparent,
        )

    def loading_state(self) -> Optional[LoadingStateViewModel]:
        """
        None once both loads are ready. Failures stay on screen until the
        next alert id; a metadata failure alone does not block the graph.
        """
        if self._network_status is LoadStatus.FAILED:
            return LoadingStateViewModel(
                message=f"Could not load alert network: {self._network_error.message}",
                progress=None,
                is_blocking=True,
                is_error=True,
            )
        if self._alert_status is LoadStatus.FAILED:
            return LoadingStateViewModel(
                message=f"Could not load alert details: {self._alert_error.message}",
                progress=None,
                is_blocking=False,
                is_error=True,
            )
        if LoadStatus.LOADING in (self._alert_status, self._network_status):
            return LoadingStateViewModel(message="Loading...", progress=None, is_blocking=True)
        return None
