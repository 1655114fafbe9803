"""
Scalar coercion table.

Maps a field kind and the text matched by its selector to a typed value.
Text, presence and bytes fields read the concatenated text of every
matched node; numeric and duration fields read only the first node's
text, so a selector that hits several elements still yields one number.
"""

import math
import re
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Callable, Dict

from .errors import CoercionError, UnsupportedType
from .selectors import NodeSet
from .shape import Kind, TypeSpec, Unsigned


_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

_DURATION_TERM_RE = re.compile(r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_RE = re.compile(r"([+-]?)((?:" + _DURATION_TERM_RE.pattern + r")+)")

# microseconds per unit
_UNITS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # U+00B5 micro sign
    "μs": Decimal(1),  # U+03BC greek mu
    "ms": Decimal(1000),
    "s": Decimal(1000000),
    "m": Decimal(60000000),
    "h": Decimal(3600000000),
}


# ─────────────────────────────────────────────────────────────
# Whole node-set kinds
# ─────────────────────────────────────────────────────────────

def to_text(text: str) -> str:
    return text


def to_presence(text: str) -> bool:
    # True when the matched nodes hold any text at all, not when they
    # merely exist or spell "true".
    return text != ""


def to_bytes(text: str) -> bytes:
    return text.encode("utf-8")


# ─────────────────────────────────────────────────────────────
# First node kinds
# ─────────────────────────────────────────────────────────────

def to_int(text: str) -> int:
    if text == "":
        return 0
    s = text.strip()
    if not _INT_RE.fullmatch(s):
        raise CoercionError(Kind.INT, text)
    return int(s)


def to_uint(text: str) -> Unsigned:
    if text == "":
        return Unsigned(0)
    s = text.strip()
    if not _UINT_RE.fullmatch(s):
        raise CoercionError(Kind.UINT, text)
    return Unsigned(int(s))


def to_float(text: str) -> float:
    if text == "":
        return 0.0
    s = text.strip()
    if not _FLOAT_RE.fullmatch(s):
        raise CoercionError(Kind.FLOAT, text)

    value = float(s)
    # out of range, only an explicit inf literal may produce one
    if math.isinf(value) and s.lstrip("+-").lower() not in ("inf", "infinity"):
        raise CoercionError(Kind.FLOAT, text)
    return value


def to_duration(text: str) -> timedelta:
    """
    Parse an elapsed-time quantity such as "1h30m", "2.5s" or "-300ms".

    Empty text is an error, not a zero duration. The bare string "0" is
    the only unitless value accepted.
    """
    s = text.strip()
    if s in ("0", "+0", "-0"):
        return timedelta(0)

    m = _DURATION_RE.fullmatch(s)
    if m is None:
        raise CoercionError(Kind.DURATION, text)

    sign, body = m.group(1), m.group(2)
    total = sum(
        (Decimal(number) * _UNITS[unit] for number, unit in _DURATION_TERM_RE.findall(body)),
        Decimal(0),
    )
    if sign == "-":
        total = -total

    try:
        return timedelta(microseconds=int(total.to_integral_value(ROUND_HALF_EVEN)))
    except OverflowError:
        raise CoercionError(Kind.DURATION, text) from None


# ─────────────────────────────────────────────────────────────
# Dispatch
# ─────────────────────────────────────────────────────────────

WHOLE_TEXT: Dict[Kind, Callable[[str], object]] = {
    Kind.TEXT: to_text,
    Kind.PRESENCE: to_presence,
    Kind.BYTES: to_bytes,
}

FIRST_TEXT: Dict[Kind, Callable[[str], object]] = {
    Kind.INT: to_int,
    Kind.UINT: to_uint,
    Kind.FLOAT: to_float,
    Kind.DURATION: to_duration,
}


def coerce(spec: TypeSpec, nodes: NodeSet):
    """
    Coerce the text of `nodes` into the scalar kind of `spec`.

    Raises CoercionError on unparsable text and UnsupportedType for
    kinds without a rule.
    """
    fn = WHOLE_TEXT.get(spec.kind)
    if fn is not None:
        return fn(nodes.text())

    fn = FIRST_TEXT.get(spec.kind)
    if fn is not None:
        return fn(nodes.first_text())

    raise UnsupportedType(spec.annotation)
