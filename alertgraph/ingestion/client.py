"""
Alert Data Service Client
=========================

Fetches alert metadata and alert networks over HTTP.

PRINCIPLES:
===========
1. Failed fetches are first-class results, never exceptions
2. No automatic retries; the caller decides what to show
3. Metadata and network requests are independent
4. Responses are returned as raw JSON; validation happens downstream
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote
import logging

import httpx

from ..contracts.base import Error, ErrorCode

logger = logging.getLogger(__name__)


class FetchStatus(Enum):
    """Status of a fetch attempt."""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"
    NETWORK_ERROR = "network_error"


class Endpoint(Enum):
    ALERT = "alert"
    NETWORK = "network"
    ALERT_LIST = "alert_list"


_ERROR_CODES = {
    FetchStatus.TIMEOUT: ErrorCode.SERVICE_TIMEOUT,
    FetchStatus.HTTP_ERROR: ErrorCode.SERVICE_HTTP_ERROR,
    FetchStatus.PARSE_ERROR: ErrorCode.RESPONSE_NOT_JSON,
    FetchStatus.NETWORK_ERROR: ErrorCode.SERVICE_UNREACHABLE,
}


@dataclass(frozen=True)
class FetchResult:
    """
    Result of a fetch attempt (success or failure).

    Failed fetches are FIRST-CLASS outputs, not exceptions.
    """
    endpoint: Endpoint
    alert_id: Optional[str]
    url: str
    attempted_at: datetime
    completed_at: datetime
    status: FetchStatus

    # On success
    payload: Any = None

    # On failure
    error_message: Optional[str] = None
    http_status: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.status == FetchStatus.SUCCESS

    @property
    def duration_ms(self) -> float:
        return (self.completed_at - self.attempted_at).total_seconds() * 1000

    def to_error(self) -> Optional[Error]:
        if self.success:
            return None
        return Error.create(
            _ERROR_CODES[self.status],
            self.error_message or self.status.value,
            endpoint=self.endpoint.value,
            url=self.url,
        )


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AlertServiceClient:
    """
    Client for the alert data service.

    Endpoints:
    - GET /alert/{alertId}        -> alert metadata
    - GET /api/network/{alertId}  -> {nodes, edges}
    - GET /api/alert              -> {alerts}
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._transport = transport
        self._async_transport = async_transport

    @property
    def base_url(self) -> str:
        return self._base_url

    # =========================================================================
    # ASYNC INTERFACE
    # =========================================================================

    async def fetch_alert(self, alert_id: str) -> FetchResult:
        return await self._get(Endpoint.ALERT, alert_id, f"/alert/{quote(str(alert_id), safe='')}")

    async def fetch_network(self, alert_id: str) -> FetchResult:
        return await self._get(Endpoint.NETWORK, alert_id, f"/api/network/{quote(str(alert_id), safe='')}")

    async def fetch_alert_list(self) -> FetchResult:
        return await self._get(Endpoint.ALERT_LIST, None, "/api/alert")

    async def _get(self, endpoint: Endpoint, alert_id: Optional[str], path: str) -> FetchResult:
        url = f"{self._base_url}{path}"
        attempted_at = _now()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._async_transport) as client:
                response = await client.get(url, follow_redirects=True)
            return self._to_result(endpoint, alert_id, url, attempted_at, response)
        except httpx.TimeoutException:
            return self._failure(endpoint, alert_id, url, attempted_at, FetchStatus.TIMEOUT, "Request timed out")
        except Exception as e:
            return self._failure(endpoint, alert_id, url, attempted_at, FetchStatus.NETWORK_ERROR, str(e))

    # =========================================================================
    # SYNC INTERFACE
    # =========================================================================

    def fetch_alert_sync(self, alert_id: str) -> FetchResult:
        return self._get_sync(Endpoint.ALERT, alert_id, f"/alert/{quote(str(alert_id), safe='')}")

    def fetch_network_sync(self, alert_id: str) -> FetchResult:
        return self._get_sync(Endpoint.NETWORK, alert_id, f"/api/network/{quote(str(alert_id), safe='')}")

    def fetch_alert_list_sync(self) -> FetchResult:
        return self._get_sync(Endpoint.ALERT_LIST, None, "/api/alert")

    def _get_sync(self, endpoint: Endpoint, alert_id: Optional[str], path: str) -> FetchResult:
        url = f"{self._base_url}{path}"
        attempted_at = _now()
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.get(url, follow_redirects=True)
            return self._to_result(endpoint, alert_id, url, attempted_at, response)
        except httpx.TimeoutException:
            return self._failure(endpoint, alert_id, url, attempted_at, FetchStatus.TIMEOUT, "Request timed out")
        except Exception as e:
            return self._failure(endpoint, alert_id, url, attempted_at, FetchStatus.NETWORK_ERROR, str(e))

    # =========================================================================
    # RESULT CONSTRUCTION
    # =========================================================================

    def _to_result(
        self,
        endpoint: Endpoint,
        alert_id: Optional[str],
        url: str,
        attempted_at: datetime,
        response: httpx.Response,
    ) -> FetchResult:
        if response.status_code != 200:
            return self._failure(
                endpoint, alert_id, url, attempted_at, FetchStatus.HTTP_ERROR,
                f"HTTP {response.status_code}", http_status=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as e:
            return self._failure(
                endpoint, alert_id, url, attempted_at, FetchStatus.PARSE_ERROR,
                f"Response is not JSON: {e}", http_status=response.status_code,
            )

        result = FetchResult(
            endpoint=endpoint,
            alert_id=alert_id,
            url=url,
            attempted_at=attempted_at,
            completed_at=_now(),
            status=FetchStatus.SUCCESS,
            payload=payload,
            http_status=response.status_code,
        )
        logger.debug("Fetched %s in %.1f ms", url, result.duration_ms)
        return result

    def _failure(
        self,
        endpoint: Endpoint,
        alert_id: Optional[str],
        url: str,
        attempted_at: datetime,
        status: FetchStatus,
        message: str,
        http_status: Optional[int] = None,
    ) -> FetchResult:
        logger.warning("Fetch %s failed (%s): %s", url, status.value, message)
        return FetchResult(
            endpoint=endpoint,
            alert_id=alert_id,
            url=url,
            attempted_at=attempted_at,
            completed_at=_now(),
            status=status,
            error_message=message,
            http_status=http_status,
        )
