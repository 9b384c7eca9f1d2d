"""
Ingestion Layer

RESPONSIBILITY: Fetch alert metadata and networks from the data service
OUTPUTS: FetchResult (raw JSON payload or explicit failure)

WHAT THIS LAYER MUST NOT DO:
============================
- Validate or interpret payloads
- Retry failed requests
- Raise on transport failures
"""

from .client import AlertServiceClient, Endpoint, FetchResult, FetchStatus

__all__ = ['AlertServiceClient', 'Endpoint', 'FetchResult', 'FetchStatus']
