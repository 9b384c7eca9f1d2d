"""
Temporal Layer

Explicit, injectable time handling for edge ordering.
"""

from .timeparse import (
    ParsedTime, UnparseableTime, TimeParseResult, TimeParser,
    parse_timestamp, chronological_key,
)

__all__ = [
    'ParsedTime', 'UnparseableTime', 'TimeParseResult', 'TimeParser',
    'parse_timestamp', 'chronological_key',
]
