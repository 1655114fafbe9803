"""Tests for the scalar coercion table."""

from datetime import timedelta
import math

import pytest

from soupstruct import CoercionError, Kind, UnsupportedType, parse_document
from soupstruct.coerce import coerce, to_duration, to_float, to_int, to_uint
from soupstruct.shape import type_spec


class TestIntegers:

    @pytest.mark.parametrize("text,expected", [
        ("42", 42),
        ("-42", -42),
        ("+7", 7),
        ("", 0),
        (" 12\n", 12),
        ("123456789012345678901234567890", 123456789012345678901234567890),
    ])
    def test_int(self, text, expected):
        assert to_int(text) == expected

    @pytest.mark.parametrize("text", ["two", "4.2", "1_000", "0x10", "12 13", "٣", "   ", "\n"])
    def test_int_failures(self, text):
        with pytest.raises(CoercionError) as exc:
            to_int(text)
        assert exc.value.kind is Kind.INT
        assert exc.value.text == text

    def test_uint(self):
        assert to_uint("42") == 42
        assert to_uint("") == 0

    @pytest.mark.parametrize("text", ["-42", "+42", "-0", "4e2", " "])
    def test_uint_failures(self, text):
        with pytest.raises(CoercionError) as exc:
            to_uint(text)
        assert exc.value.kind is Kind.UINT


class TestFloats:

    @pytest.mark.parametrize("text,expected", [
        ("42.6", 42.6),
        ("-1.5", -1.5),
        (".5", 0.5),
        ("3.", 3.0),
        ("1e3", 1000.0),
        ("2.5E-1", 0.25),
        ("", 0.0),
        ("Inf", math.inf),
        ("-infinity", -math.inf),
    ])
    def test_float(self, text, expected):
        assert to_float(text) == expected

    def test_nan(self):
        assert math.isnan(to_float("NaN"))

    @pytest.mark.parametrize("text", ["abc", "1.2.3", "1_0.5", "e5", ".", "\t", "1e400", "-1e400"])
    def test_float_failures(self, text):
        with pytest.raises(CoercionError):
            to_float(text)


class TestDurations:

    @pytest.mark.parametrize("text,expected", [
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1h30m0s", timedelta(hours=1, minutes=30)),
        ("300ms", timedelta(milliseconds=300)),
        ("-1.5h", -timedelta(hours=1, minutes=30)),
        ("+2s", timedelta(seconds=2)),
        ("1.5s", timedelta(seconds=1, milliseconds=500)),
        ("2m3.25s", timedelta(minutes=2, seconds=3.25)),
        ("10us", timedelta(microseconds=10)),
        ("10µs", timedelta(microseconds=10)),
        ("10μs", timedelta(microseconds=10)),
        ("1500ns", timedelta(microseconds=2)),
        ("0", timedelta(0)),
        (" 45s ", timedelta(seconds=45)),
    ])
    def test_duration(self, text, expected):
        assert to_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "1", "1d", "h", "1h 30m", "1.2.3s", "--1s"])
    def test_duration_failures(self, text):
        with pytest.raises(CoercionError) as exc:
            to_duration(text)
        assert exc.value.kind is Kind.DURATION

    def test_duration_overflow(self):
        with pytest.raises(CoercionError):
            to_duration("99999999999999h")


class TestDispatch:
    """coerce() picks the whole node-set or only its first node."""

    @pytest.fixture
    def nodes(self):
        return parse_document("<p>4</p><p>2</p>").find("p")

    def test_text_uses_all_nodes(self, nodes):
        assert coerce(type_spec(str), nodes) == "42"

    def test_bytes_use_all_nodes(self, nodes):
        assert coerce(type_spec(bytes), nodes) == b"42"

    def test_presence_uses_all_nodes(self, nodes):
        assert coerce(type_spec(bool), nodes) is True

    def test_int_uses_first_node(self, nodes):
        assert coerce(type_spec(int), nodes) == 4

    def test_float_uses_first_node(self, nodes):
        assert coerce(type_spec(float), nodes) == 4.0

    def test_unicode_bytes(self):
        nodes = parse_document("<p>café</p>").find("p")
        assert coerce(type_spec(bytes), nodes) == "café".encode("utf-8")

    def test_unsupported(self, nodes):
        with pytest.raises(UnsupportedType):
            coerce(type_spec(complex), nodes)

    def test_record_kind_has_no_scalar_rule(self, nodes):
        from dataclasses import dataclass

        @dataclass
        class Rec:
            pass

        with pytest.raises(UnsupportedType):
            coerce(type_spec(Rec), nodes)
