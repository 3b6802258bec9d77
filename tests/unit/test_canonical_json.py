"""
Module 01 - Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization.
These tests ensure deterministic serialization across runs, which object
leaves (MerkleProver.prove_object) and proof JSON depend on.
"""

import json
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest
from pydantic import BaseModel, ConfigDict

from dynamerkle.schemas import (
    CanonicalizationException,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
    loads_canonical,
)


# =============================================================================
# Test Fixtures
# =============================================================================


class SampleEnum(str, Enum):
    """Sample enum for testing."""
    OPTION_A = "option_a"
    OPTION_B = "option_b"


class SampleModel(BaseModel):
    """Sample Pydantic model for testing."""
    model_config = ConfigDict(extra="forbid")

    name: str
    value: int
    optional_field: str | None = None


# =============================================================================
# Datetime Formatting
# =============================================================================


class TestFormatDatetime:
    """Tests for format_datetime_canonical()."""

    def test_naive_treated_as_utc(self):
        dt = datetime(2026, 1, 27, 21, 35, 0)

        assert format_datetime_canonical(dt) == "2026-01-27T21:35:00Z"

    def test_offset_converted_to_utc(self):
        dt = datetime(2026, 1, 27, 16, 35, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert format_datetime_canonical(dt) == "2026-01-27T21:35:00Z"

    def test_microseconds_kept(self):
        dt = datetime(2026, 1, 27, 21, 35, 0, 123456, tzinfo=timezone.utc)

        assert format_datetime_canonical(dt) == "2026-01-27T21:35:00.123456Z"


# =============================================================================
# Value Canonicalization
# =============================================================================


class TestCanonicalizeValue:
    """Tests for canonicalize_value()."""

    def test_primitives_unchanged(self):
        assert canonicalize_value(True) is True
        assert canonicalize_value(7) == 7
        assert canonicalize_value(1.5) == 1.5
        assert canonicalize_value("text") == "text"
        assert canonicalize_value(None) is None

    def test_enum_uses_value(self):
        assert canonicalize_value(SampleEnum.OPTION_B) == "option_b"

    def test_bytes_as_hex(self):
        assert canonicalize_value(b"\x01\xff") == "0x01ff"
        assert canonicalize_value(bytearray(b"\x00")) == "0x00"

    def test_none_dict_values_dropped(self):
        assert canonicalize_value({"a": 1, "b": None}) == {"a": 1}

    def test_none_list_items_kept(self):
        assert canonicalize_value([1, None]) == [1, None]

    def test_tuple_becomes_list(self):
        assert canonicalize_value((1, 2)) == [1, 2]

    def test_model_excludes_none(self):
        model = SampleModel(name="x", value=1)

        assert canonicalize_value(model) == {"name": "x", "value": 1}

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_float_rejected(self, value):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value(value)

        assert exc_info.value.code == "CANONICALIZATION_ERROR"

    def test_unsupported_type_reports_path(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value({"outer": [1, {1, 2}]})

        assert exc_info.value.details["path"] == "outer[1]"
        assert exc_info.value.details["type"] == "set"


# =============================================================================
# Canonical Dumps
# =============================================================================


class TestDumpsCanonical:
    """Tests for dumps_canonical()."""

    def test_sorted_keys_no_whitespace(self):
        assert dumps_canonical({"b": 2, "a": 1}) == '{"a":1,"b":2}'

    def test_nested_keys_sorted(self):
        assert dumps_canonical({"z": {"y": 1, "x": 2}}) == '{"z":{"x":2,"y":1}}'

    def test_key_order_independent(self):
        first = {"name": "a", "items": [1, 2], "meta": {"k": "v", "j": "w"}}
        second = {"meta": {"j": "w", "k": "v"}, "items": [1, 2], "name": "a"}

        assert dumps_canonical(first) == dumps_canonical(second)

    def test_list_order_preserved(self):
        assert dumps_canonical([3, 1, 2]) == "[3,1,2]"

    def test_unicode_not_escaped(self):
        assert dumps_canonical({"word": "ñandú"}) == '{"word":"ñandú"}'

    def test_datetime_in_object(self):
        dt = datetime(2026, 1, 1, tzinfo=timezone.utc)

        assert dumps_canonical({"at": dt}) == '{"at":"2026-01-01T00:00:00Z"}'

    def test_model_serialized(self):
        model = SampleModel(name="n", value=3, optional_field="o")

        assert dumps_canonical(model) == '{"name":"n","optional_field":"o","value":3}'

    def test_stable_across_runs(self):
        obj = {"k": [1, "two", {"three": 3.0}], "b": b"\xaa"}
        results = [dumps_canonical(obj) for _ in range(10)]

        assert all(r == results[0] for r in results)

    def test_loads_round_trip(self):
        obj = {"a": [1, 2, {"b": "c"}]}

        assert loads_canonical(dumps_canonical(obj)) == obj
        assert json.loads(dumps_canonical(obj)) == obj


class TestCanonicalEquals:
    """Tests for canonical_equals()."""

    def test_equal_despite_key_order(self):
        assert canonical_equals({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_none_field_ignored(self):
        assert canonical_equals({"a": 1, "b": None}, {"a": 1})

    def test_different_values(self):
        assert not canonical_equals({"a": 1}, {"a": 2})

    def test_uncanonicalizable_is_not_equal(self):
        assert not canonical_equals({"a": float("nan")}, {"a": float("nan")})
