"""
Configuration
=============

Single configuration object for the alert graph service, with
environment overrides for deployment.

ENVIRONMENT:
============
ALERTGRAPH_SERVICE_URL     base URL of the alert data service
ALERTGRAPH_TIMEOUT         request timeout in seconds
ALERTGRAPH_RANK_SPACING    horizontal spacing between rank layers
ALERTGRAPH_LAYER_SPACING   vertical spacing inside a layer
ALERTGRAPH_LOG_LEVEL       logging level name
ALERTGRAPH_LOG_FILE        optional log file path
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Mapping, Optional
import logging
import os

from .core.layout import LAYER_SPACING, RANK_SPACING, LayoutConfig

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_URL = "http://127.0.0.1:5000"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default
    return value


@dataclass
class AlertGraphConfig:
    """Unified configuration for the alert graph service."""
    service_url: str = DEFAULT_SERVICE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.service_url = self.service_url.rstrip('/')

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> AlertGraphConfig:
        env = os.environ if env is None else env
        return cls(
            service_url=env.get("ALERTGRAPH_SERVICE_URL") or DEFAULT_SERVICE_URL,
            timeout_seconds=_float_env(env, "ALERTGRAPH_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
            layout=LayoutConfig(
                rank_spacing=_float_env(env, "ALERTGRAPH_RANK_SPACING", RANK_SPACING),
                layer_spacing=_float_env(env, "ALERTGRAPH_LAYER_SPACING", LAYER_SPACING),
            ),
            log_level=env.get("ALERTGRAPH_LOG_LEVEL") or "INFO",
            log_file=env.get("ALERTGRAPH_LOG_FILE") or None,
        )
