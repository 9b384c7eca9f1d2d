"""
Edge Time Parsing
=================

Injectable timestamp parsing for chronological edge ordering.

GUARANTEES:
- Never depends on the ambient locale or local timezone
- Naive timestamps are interpreted as UTC
- Every raw value maps to either ParsedTime or UnparseableTime
- chronological_key() is a total order over both kinds
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Tuple, Union

from ..contracts.network import RawTime


@dataclass(frozen=True)
class ParsedTime:
    value: datetime


@dataclass(frozen=True)
class UnparseableTime:
    raw: RawTime
    reason: str


TimeParseResult = Union[ParsedTime, UnparseableTime]
TimeParser = Callable[[RawTime], TimeParseResult]


def parse_timestamp(raw: RawTime) -> TimeParseResult:
    """
    Default parser.

    Accepts ISO-8601 strings (a trailing 'Z' and a space separator are
    both allowed) and numbers as epoch seconds.
    """
    if raw is None:
        return UnparseableTime(raw, "missing")

    # bool is an int subclass and never a timestamp
    if isinstance(raw, bool):
        return UnparseableTime(raw, "boolean is not a timestamp")

    if isinstance(raw, (int, float)):
        try:
            return ParsedTime(datetime.fromtimestamp(raw, tz=timezone.utc))
        except (OverflowError, OSError, ValueError) as e:
            return UnparseableTime(raw, f"epoch out of range: {e}")

    if not isinstance(raw, str):
        return UnparseableTime(raw, f"unsupported type {type(raw).__name__}")

    text = raw.strip()
    if not text:
        return UnparseableTime(raw, "empty")

    if text[-1] in ('Z', 'z'):
        text = text[:-1] + '+00:00'

    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return UnparseableTime(raw, "not ISO-8601")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return ParsedTime(dt)


def chronological_key(parsed: TimeParseResult, index: int) -> Tuple[int, float, int]:
    """
    Sort key: parseable times ascending, then unparseable ones.
    Ties (and all unparseable values) keep input order via `index`.
    """
    if isinstance(parsed, ParsedTime):
        return (0, parsed.value.timestamp(), index)
    return (1, 0.0, index)
