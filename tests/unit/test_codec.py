# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the persisted record codec."""

from __future__ import annotations

import json

import pytest

from simple_on_disk_cache.cache import codec
from simple_on_disk_cache.core.exceptions import CorruptRecordError


class TestEncode:
    def test_json_value_is_stored_parsed(self) -> None:
        value = json.dumps({"name": "atlantis", "galaxy": "pegasus", "code": 821})
        record = json.loads(codec.encode(value, 1000))
        assert record["deserialized_for_observability"] is True
        assert record["serialization"] == "spaced"
        assert record["value"] == {"name": "atlantis", "galaxy": "pegasus", "code": 821}
        assert record["expires_at_ms"] == 1000

    def test_compact_json_value_is_stored_parsed(self) -> None:
        value = json.dumps(
            {"name": "atlantis", "galaxy": "pegasus", "code": 821}, separators=(",", ":")
        )
        record = json.loads(codec.encode(value, None))
        assert record["deserialized_for_observability"] is True
        assert record["serialization"] == "compact"
        assert record["value"] == {"name": "atlantis", "galaxy": "pegasus", "code": 821}
        assert codec.decode(codec.encode(value, None)).resolved_value() == value

    def test_compact_json_keeps_non_ascii(self) -> None:
        value = '{"city":"Zürich"}'
        record = json.loads(codec.encode(value, None))
        assert record["serialization"] == "compact"
        assert record["value"] == {"city": "Zürich"}

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", "[1, NaN]"])
    def test_non_finite_numbers_are_stored_raw(self, value: str) -> None:
        raw = codec.encode(value, None)
        record = json.loads(raw, parse_constant=lambda token: pytest.fail(f"bare {token}"))
        assert record["deserialized_for_observability"] is False
        assert record["value"] == value
        assert codec.decode(raw).resolved_value() == value

    def test_plain_string_is_stored_raw(self) -> None:
        record = json.loads(codec.encode("not popped", 1000))
        assert record["deserialized_for_observability"] is False
        assert record["value"] == "not popped"

    def test_json_that_would_not_restringify_exactly_is_stored_raw(self) -> None:
        value = '{"a":1,   "b" : 2}'
        record = json.loads(codec.encode(value, None))
        assert record["deserialized_for_observability"] is False
        assert record["value"] == value

    def test_infinite_expiry_is_null(self) -> None:
        assert json.loads(codec.encode("x", None))["expires_at_ms"] is None

    def test_tombstone(self) -> None:
        record = json.loads(codec.encode(None, 0))
        assert record == {
            "expires_at_ms": 0,
            "deserialized_for_observability": False,
            "serialization": None,
            "value": None,
        }

    def test_record_is_indented(self) -> None:
        assert "\n  " in codec.encode("x", 1)


class TestDecode:
    @pytest.mark.parametrize(
        "value",
        [
            "42",
            "3",
            "not popped",
            "",
            "null",
            "true",
            '"quoted"',
            json.dumps({"nested": {"list": [1, 2.5, None, "ü"]}}),
            json.dumps([1, 2, 3]),
            '{"a":1}',
            "1e5",
            "  42  ",
            "{broken json",
        ],
    )
    def test_round_trip_returns_exact_string(self, value: str) -> None:
        entry = codec.decode(codec.encode(value, 5))
        assert entry.resolved_value() == value

    def test_tombstone_resolves_to_none(self) -> None:
        entry = codec.decode(codec.encode(None, 0))
        assert entry.is_tombstone() is True
        assert entry.resolved_value() is None

    def test_null_string_is_not_a_tombstone(self) -> None:
        entry = codec.decode(codec.encode("null", None))
        assert entry.is_tombstone() is False

    def test_expiry(self) -> None:
        entry = codec.decode(codec.encode("x", 1000))
        assert entry.is_expired(999) is False
        assert entry.is_expired(1000) is False
        assert entry.is_expired(1001) is True

    def test_never_expires(self) -> None:
        entry = codec.decode(codec.encode("x", None))
        assert entry.is_expired(10**15) is False

    @pytest.mark.parametrize(
        "raw",
        ["", "not json", "[]", '{"value": "x"}', '{"expires_at_ms": "soon", "value": "x"}'],
    )
    def test_corrupt_record_raises(self, raw: str) -> None:
        with pytest.raises(CorruptRecordError):
            codec.decode(raw)

    def test_non_string_raw_value_is_corrupt(self) -> None:
        raw = json.dumps(
            {"expires_at_ms": None, "deserialized_for_observability": False, "value": 5}
        )
        entry = codec.decode(raw)
        with pytest.raises(CorruptRecordError):
            entry.resolved_value()
