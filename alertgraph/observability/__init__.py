"""
Observability & Audit Layer

RESPONSIBILITY: Logging setup and an append-only audit trail
ALLOWED INPUTS: Events reported by the other layers
OUTPUTS: Python loggers, AuditEntry records

WHAT THIS LAYER MUST NOT DO:
============================
- Modify system behavior
- Filter or interpret events (only record them)
- Make decisions based on logged data
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Union
import logging


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
ROOT_LOGGER_NAME = "alertgraph"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """
    Install console (and optional file) handlers on the package logger.

    Idempotent: a logger that already has handlers is only re-levelled.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


# =============================================================================
# AUDIT TRAIL
# =============================================================================

class AuditEventType(Enum):
    """Things worth keeping a record of, beyond the log stream."""
    LOAD_STARTED = "load_started"
    FETCH_FAILED = "fetch_failed"
    RECORD_QUARANTINED = "record_quarantined"
    DUPLICATE_EDGE_KEY = "duplicate_edge_key"
    EDGE_ID_COLLISION = "edge_id_collision"
    UNPARSEABLE_TIME = "unparseable_time"
    STALE_RESPONSE_DISCARDED = "stale_response_discarded"
    MODEL_BUILT = "model_built"


@dataclass(frozen=True)
class AuditEntry:
    event_type: AuditEventType
    alert_id: Optional[str]
    detail: str
    timestamp: datetime


class AuditLog:
    """
    Append-only audit collector.

    Entries are never modified or removed; readers get copies.
    """

    def __init__(self, max_entries: int = 1000):
        self._entries: List[AuditEntry] = []
        self._max_entries = max_entries

    def record(
        self,
        event_type: AuditEventType,
        alert_id: Optional[str],
        detail: str = "",
    ) -> AuditEntry:
        entry = AuditEntry(
            event_type=event_type,
            alert_id=alert_id,
            detail=detail,
            timestamp=datetime.now(timezone.utc),
        )
        self._entries.append(entry)
        if len(self._entries) > self._max_entries:
            # oldest first
            del self._entries[0]
        return entry

    def entries(
        self,
        event_type: Optional[AuditEventType] = None,
        alert_id: Optional[str] = None,
    ) -> List[AuditEntry]:
        """Get entries, optionally filtered."""
        entries = self._entries
        if event_type is not None:
            entries = [e for e in entries if e.event_type == event_type]
        if alert_id is not None:
            entries = [e for e in entries if e.alert_id == alert_id]
        return list(entries)

    @property
    def entry_count(self) -> int:
        return len(self._entries)


__all__ = [
    'LOG_FORMAT', 'configure_logging',
    'AuditEventType', 'AuditEntry', 'AuditLog',
]
