"""
Network Boundary Validation
===========================

Converts untyped JSON from the alert data service into Node/Edge contracts.

GUARANTEES:
- Every raw record is either validated or quarantined, never both
- Validation never raises; rejected records are returned with a reason
- A missing or malformed rank becomes 0 (never fatal, never quarantined)
- Duplicate node ids and dangling edges are quarantined, not propagated
"""

from __future__ import annotations
from typing import Any, List, Optional, Sequence, Set, Tuple
import json
import logging
import sys

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator,
)

from ..contracts.base import Error, ErrorCode, Result
from ..contracts.network import (
    AlertRecord, Edge, NetworkPayload, Node, NodeType, QuarantinedRecord, Severity,
)

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 200
MAX_RANK = sys.maxsize


# =============================================================================
# COERCION HELPERS
# =============================================================================

def coerce_rank(value: Any) -> int:
    """
    Map any rank literal onto a layer index.

    Integers, integral floats and integer strings are accepted.
    Everything else (missing, negative, boolean, fractional, text, or
    above MAX_RANK) is 0.
    """
    rank: Optional[int] = None

    if isinstance(value, bool) or value is None:
        rank = None
    elif isinstance(value, int):
        rank = value
    elif isinstance(value, float) and value.is_integer():
        rank = int(value)
    elif isinstance(value, str):
        try:
            rank = int(value.strip())
        except ValueError:
            rank = None

    if rank is None or rank < 0 or rank > MAX_RANK:
        if value is not None:
            logger.debug("Rank %r is not a layer index; using 0", value)
        return 0
    return rank


def _coerce_identifier(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


def _coerce_flag(value: Any) -> Any:
    return False if value is None else value


def _excerpt(raw: Any) -> str:
    try:
        text = json.dumps(raw, default=str, sort_keys=True)
    except (TypeError, ValueError):
        text = repr(raw)
    return text[:EXCERPT_LENGTH]


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    location = ".".join(str(part) for part in err.get('loc', ())) or "record"
    return f"{location}: {err.get('msg', 'invalid')}"


# =============================================================================
# WIRE MODELS
# =============================================================================

class NodeRecord(BaseModel):
    """Wire shape of a node; `nodes` is accepted as an alias for `names`."""
    model_config = ConfigDict(extra='ignore')

    id: str = Field(min_length=1)
    label: Optional[str] = None
    type: NodeType
    rank: int = 0
    transparent: bool = False
    names: Tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices('names', 'nodes')
    )

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _coerce_identifier(value)

    @field_validator('transparent', mode='before')
    @classmethod
    def coerce_transparent(cls, value: Any) -> Any:
        return _coerce_flag(value)

    @field_validator('type', mode='before')
    @classmethod
    def coerce_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator('rank', mode='before')
    @classmethod
    def coerce_rank_literal(cls, value: Any) -> int:
        return coerce_rank(value)

    @field_validator('label', mode='before')
    @classmethod
    def coerce_label(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('names', mode='before')
    @classmethod
    def coerce_names(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)):
            return tuple(str(v) for v in value)
        return value

    def to_contract(self) -> Node:
        return Node(
            id=self.id,
            label=self.label if self.label is not None else self.id,
            type=self.type,
            rank=self.rank,
            transparent=self.transparent,
            names=self.names,
        )


class EdgeRecord(BaseModel):
    """Wire shape of an edge; `time` is kept raw for the injected parser."""
    model_config = ConfigDict(extra='ignore')

    source: str = Field(min_length=1)
    target: str = Field(min_length=1)
    label: str = ""
    time: Any = None
    transparent: bool = False
    alname: Optional[str] = None

    @field_validator('source', 'target', mode='before')
    @classmethod
    def coerce_endpoint(cls, value: Any) -> Any:
        return _coerce_identifier(value)

    @field_validator('transparent', mode='before')
    @classmethod
    def coerce_transparent(cls, value: Any) -> Any:
        return _coerce_flag(value)

    @field_validator('label', mode='before')
    @classmethod
    def coerce_label(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('time', mode='before')
    @classmethod
    def keep_raw_time(cls, value: Any) -> Any:
        if value is None or isinstance(value, (str, int, float)):
            return value
        return str(value)

    @field_validator('alname', mode='before')
    @classmethod
    def coerce_alname(cls, value: Any) -> Any:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def to_contract(self) -> Edge:
        return Edge(
            source=self.source,
            target=self.target,
            label=self.label,
            time=self.time,
            transparent=self.transparent,
            alname=self.alname,
        )


class AlertModel(BaseModel):
    """Wire shape of GET /alert/{alertId}."""
    model_config = ConfigDict(extra='ignore')

    id: str
    name: str = ""
    description: str = ""
    severity: Severity
    machine: str = ""
    program: str = ""
    occurred_on: str = ""

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _coerce_identifier(value)

    @field_validator('name', 'description', 'machine', 'program', 'occurred_on', mode='before')
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if not isinstance(value, str):
            return str(value)
        return value

    def to_contract(self) -> AlertRecord:
        return AlertRecord(
            id=self.id,
            name=self.name,
            description=self.description,
            severity=self.severity,
            machine=self.machine,
            program=self.program,
            occurred_on=self.occurred_on,
        )


# =============================================================================
# VALIDATION ENTRY POINTS
# =============================================================================

def _as_list(raw: Any, key: str, quarantined: List[QuarantinedRecord]) -> Sequence[Any]:
    value = raw.get(key) if isinstance(raw, dict) else None
    if value is None:
        return ()
    if not isinstance(value, list):
        quarantined.append(QuarantinedRecord(
            kind="payload", index=-1,
            reason=f"'{key}' is not a list", excerpt=_excerpt(value),
        ))
        return ()
    return value


def validate_network(raw: Any) -> NetworkPayload:
    """
    Validate a `{nodes: [...], edges: [...]}` response body.

    Returned nodes and edges keep their input order.
    """
    quarantined: List[QuarantinedRecord] = []

    if not isinstance(raw, dict):
        quarantined.append(QuarantinedRecord(
            kind="payload", index=-1,
            reason="network body is not an object", excerpt=_excerpt(raw),
        ))
        return NetworkPayload(nodes=(), edges=(), quarantined=tuple(quarantined))

    nodes: List[Node] = []
    seen_ids: Set[str] = set()
    for index, record in enumerate(_as_list(raw, 'nodes', quarantined)):
        try:
            node = NodeRecord.model_validate(record).to_contract()
        except ValidationError as e:
            quarantined.append(QuarantinedRecord(
                kind="node", index=index, reason=_first_error(e), excerpt=_excerpt(record),
            ))
            continue
        if node.id in seen_ids:
            quarantined.append(QuarantinedRecord(
                kind="node", index=index,
                reason=f"duplicate node id '{node.id}'", excerpt=_excerpt(record),
            ))
            continue
        seen_ids.add(node.id)
        nodes.append(node)

    edges: List[Edge] = []
    for index, record in enumerate(_as_list(raw, 'edges', quarantined)):
        try:
            edge = EdgeRecord.model_validate(record).to_contract()
        except ValidationError as e:
            quarantined.append(QuarantinedRecord(
                kind="edge", index=index, reason=_first_error(e), excerpt=_excerpt(record),
            ))
            continue
        missing = [end for end in (edge.source, edge.target) if end not in seen_ids]
        if missing:
            quarantined.append(QuarantinedRecord(
                kind="edge", index=index,
                reason=f"unknown endpoint '{missing[0]}'", excerpt=_excerpt(record),
            ))
            continue
        edges.append(edge)

    for q in quarantined:
        logger.warning("Quarantined %s #%d: %s", q.kind, q.index, q.reason)

    return NetworkPayload(nodes=tuple(nodes), edges=tuple(edges), quarantined=tuple(quarantined))


def validate_alert(raw: Any) -> Result:
    """Validate alert metadata. Result.value is an AlertRecord on success."""
    if not isinstance(raw, dict):
        return Result.failure(Error.create(
            ErrorCode.MALFORMED_ALERT, "alert body is not an object",
        ))
    try:
        return Result.success(AlertModel.model_validate(raw).to_contract())
    except ValidationError as e:
        severity_failed = any(err.get('loc', ())[:1] == ('severity',) for err in e.errors())
        code = ErrorCode.UNKNOWN_SEVERITY if severity_failed else ErrorCode.MALFORMED_ALERT
        return Result.failure(Error.create(code, _first_error(e), alert_id=str(raw.get('id', ''))))


def validate_alert_list(raw: Any) -> Tuple[Tuple[AlertRecord, ...], Tuple[QuarantinedRecord, ...]]:
    """Validate a `{alerts: [...]}` body; malformed alerts are quarantined."""
    quarantined: List[QuarantinedRecord] = []
    alerts: List[AlertRecord] = []
    for index, record in enumerate(_as_list(raw, 'alerts', quarantined)):
        result = validate_alert(record)
        if result.is_success:
            alerts.append(result.value)
        else:
            quarantined.append(QuarantinedRecord(
                kind="alert", index=index, reason=result.error.message, excerpt=_excerpt(record),
            ))

    for q in quarantined:
        logger.warning("Quarantined %s #%d: %s", q.kind, q.index, q.reason)

    return tuple(alerts), tuple(quarantined)
