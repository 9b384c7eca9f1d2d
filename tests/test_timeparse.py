"""
Edge Time Parsing Tests

Parsing must not depend on the local timezone; every input maps to
ParsedTime or UnparseableTime.
"""

from datetime import datetime, timezone

import pytest

from alertgraph.temporal.timeparse import (
    ParsedTime, UnparseableTime, chronological_key, parse_timestamp,
)


class TestParseTimestamp:

    def test_iso_with_z(self):
        parsed = parse_timestamp("2024-03-01T10:00:00Z")
        assert parsed == ParsedTime(datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc))

    def test_naive_is_utc(self):
        parsed = parse_timestamp("2024-03-01 10:00:00")
        assert parsed.value.tzinfo is timezone.utc
        assert parsed.value.hour == 10

    def test_offset_preserved_as_instant(self):
        a = parse_timestamp("2024-03-01T12:00:00+02:00")
        b = parse_timestamp("2024-03-01T10:00:00Z")
        assert a.value == b.value

    def test_epoch_seconds(self):
        parsed = parse_timestamp(0)
        assert parsed.value == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", [None, "", "   ", "t0", "yesterday", True])
    def test_unparseable(self, raw):
        assert isinstance(parse_timestamp(raw), UnparseableTime)

    def test_reason_is_recorded(self):
        assert parse_timestamp(None).reason == "missing"


class TestChronologicalKey:

    def test_parsed_before_unparseable(self):
        late = parse_timestamp("2099-01-01T00:00:00Z")
        bad = parse_timestamp("nope")
        assert chronological_key(late, 5) < chronological_key(bad, 0)

    def test_unparseable_keep_index_order(self):
        bad = parse_timestamp("nope")
        assert chronological_key(bad, 1) < chronological_key(bad, 2)
