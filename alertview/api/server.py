"""
Alert Graph View API
====================

Read-only HTTP surface serving laid-out, projected alert graphs.
Alert data itself is fetched from the upstream alert data service.

Endpoints:
- GET /health
- GET /api/v1/alerts              -> alert list, most severe first
- GET /api/v1/alerts/{alert_id}   -> alert detail panel
- GET /api/v1/graph/{alert_id}    -> positioned, styled nodes and edges

Usage:
    uvicorn alertview.api.server:app --reload
"""
from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from alertgraph.config import AlertGraphConfig
from alertgraph.contracts.network import by_severity
from alertgraph.core.layout import GraphModelBuilder
from alertgraph.core.visibility import filter_visible
from alertgraph.ingestion.client import AlertServiceClient, FetchResult, FetchStatus
from alertgraph.normalization.validator import validate_alert, validate_alert_list, validate_network
from alertgraph.observability import configure_logging

from .. import LOGGER_NAMES
from ..presentation.viewmodels import AlertDetailsViewModel
from ..visualization.graph import project_graph
from .mapper import map_alert_details, map_alert_list, map_graph_response

logger = logging.getLogger(__name__)


# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    config = AlertGraphConfig.from_env()
    for name in LOGGER_NAMES:
        configure_logging(config.log_level, config.log_file, name=name)
    app.state.config = config
    logger.info("Alert graph view API using data service at %s", config.service_url)
    yield
    logger.info("Alert graph view API shutting down")


app = FastAPI(
    title="Alert Graph View API",
    version="0.1.0",
    description="Deterministic layouts for security alert entity graphs",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],  # read-only
    allow_headers=["*"],
)


def get_config(request: Request) -> AlertGraphConfig:
    config = getattr(request.app.state, "config", None)
    if config is None:
        config = AlertGraphConfig.from_env()
        request.app.state.config = config
    return config


def get_client(config: AlertGraphConfig = Depends(get_config)) -> AlertServiceClient:
    return AlertServiceClient(config.service_url, timeout=config.timeout_seconds)


def _raise_for_fetch(result: FetchResult) -> None:
    if result.success:
        return
    if (result.alert_id is not None and result.status is FetchStatus.HTTP_ERROR
            and result.http_status == 404):
        raise HTTPException(status_code=404, detail=f"Unknown alert {result.alert_id}")
    raise HTTPException(
        status_code=502,
        detail={"status": result.status.value, "message": result.error_message},
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check(config: AlertGraphConfig = Depends(get_config)):
    return {"status": "online", "service_url": config.service_url}


@app.get("/api/v1/alerts")
async def list_alerts(client: AlertServiceClient = Depends(get_client)):
    result = await client.fetch_alert_list()
    _raise_for_fetch(result)

    alerts, quarantined = validate_alert_list(result.payload)
    return map_alert_list(by_severity(alerts), quarantined)


@app.get("/api/v1/alerts/{alert_id}")
async def get_alert(alert_id: str, client: AlertServiceClient = Depends(get_client)):
    result = await client.fetch_alert(alert_id)
    _raise_for_fetch(result)

    validated = validate_alert(result.payload)
    if validated.is_failure:
        raise HTTPException(status_code=502, detail={
            "status": "invalid_payload",
            "message": validated.error.message,
        })
    return map_alert_details(AlertDetailsViewModel.from_alert(validated.value))


@app.get("/api/v1/graph/{alert_id}")
async def get_graph(
    alert_id: str,
    show_transparent: bool = False,
    client: AlertServiceClient = Depends(get_client),
    config: AlertGraphConfig = Depends(get_config),
):
    result = await client.fetch_network(alert_id)
    _raise_for_fetch(result)

    payload = validate_network(result.payload)
    model = GraphModelBuilder(config.layout).build_from_payload(payload)
    view = project_graph(filter_visible(model, show_transparent))
    return map_graph_response(alert_id, model, payload, view)
