"""
Record shapes: the static field table of a record type.

A record type is a dataclass whose fields carry a CSS selector in their
metadata. The shape of a type is derived once and cached:

    @dataclass
    class Article:
        title: str = selector("h1")
        views: int = selector(".views", default=0)
        tags: List[str] = selector(".tag", default_factory=list)

Only fields that the decoder may assign appear in the table. Fields with
no selector, private fields (leading underscore) and every field of a
frozen dataclass are structurally absent.
"""

import dataclasses
import types
import typing
import weakref
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, List, NewType, Optional, Tuple, Union

from .errors import InvalidTarget


SELECTOR_KEY = "selector"

# Unsigned integer fields. Text with a sign never coerces into one.
Unsigned = NewType("Unsigned", int)


# ─────────────────────────────────────────────────────────────
# Kinds
# ─────────────────────────────────────────────────────────────

class Kind(str, Enum):
    TEXT = "text"
    PRESENCE = "presence"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    DURATION = "duration"
    BYTES = "bytes"
    REPEATED = "repeated"
    RECORD = "record"
    OPTIONAL = "optional"
    UNSUPPORTED = "unsupported"

    def __str__(self) -> str:
        return self.value


_SCALARS = {
    str: Kind.TEXT,
    bool: Kind.PRESENCE,
    int: Kind.INT,
    Unsigned: Kind.UINT,
    float: Kind.FLOAT,
    timedelta: Kind.DURATION,
    bytes: Kind.BYTES,
}


@dataclass(frozen=True)
class TypeSpec:
    """
    Kind of a field plus what it wraps.

    `inner` is set for OPTIONAL (the wrapped type) and REPEATED (the
    element type). `annotation` is the resolved type the spec came from.
    """
    kind: Kind
    annotation: Any
    inner: Optional["TypeSpec"] = None

    def unwrap(self) -> "TypeSpec":
        """Strip every optional layer."""
        spec = self
        while spec.kind is Kind.OPTIONAL:
            spec = spec.inner
        return spec


@dataclass(frozen=True)
class FieldSpec:
    name: str
    selector: str
    type: TypeSpec


@dataclass(frozen=True)
class RecordShape:
    name: str
    fields: Tuple[FieldSpec, ...]

    def __iter__(self):
        return iter(self.fields)

    def __len__(self):
        return len(self.fields)


# ─────────────────────────────────────────────────────────────
# Annotation classification
# ─────────────────────────────────────────────────────────────

def is_record_type(obj: Any) -> bool:
    return isinstance(obj, type) and dataclasses.is_dataclass(obj)


def type_spec(annotation: Any) -> TypeSpec:
    """Classify a resolved type annotation into a TypeSpec."""
    origin = typing.get_origin(annotation)

    if origin is Union or origin is types.UnionType:
        members = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return TypeSpec(Kind.OPTIONAL, annotation, type_spec(members[0]))
        return TypeSpec(Kind.UNSUPPORTED, annotation)

    if origin is list:
        args = typing.get_args(annotation)
        if len(args) != 1:
            return TypeSpec(Kind.UNSUPPORTED, annotation)
        return TypeSpec(Kind.REPEATED, annotation, type_spec(args[0]))

    kind = _SCALARS.get(annotation) if _hashable(annotation) else None
    if kind is not None:
        return TypeSpec(kind, annotation)

    if is_record_type(annotation):
        return TypeSpec(Kind.RECORD, annotation)

    return TypeSpec(Kind.UNSUPPORTED, annotation)


def _hashable(obj: Any) -> bool:
    try:
        hash(obj)
    except TypeError:
        return False
    return True


# ─────────────────────────────────────────────────────────────
# Shapes
# ─────────────────────────────────────────────────────────────

def selector(css: str, **kwargs) -> Any:
    """
    dataclasses.field() that carries a CSS selector.

    Accepts every keyword dataclasses.field() accepts; extra metadata
    is merged with the selector.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[SELECTOR_KEY] = css
    return dataclasses.field(metadata=metadata, **kwargs)


def _assignable(cls: type, f: dataclasses.Field) -> bool:
    if f.name.startswith("_"):
        return False
    return not cls.__dataclass_params__.frozen


# Keyed weakly so classes built at runtime can still be collected.
_SHAPES: "weakref.WeakKeyDictionary[type, RecordShape]" = weakref.WeakKeyDictionary()


def shape_of(cls: type) -> RecordShape:
    """
    Build the field table of a record type, in declaration order.
    The table is built once per class and cached.

    Raises InvalidTarget if cls isn't a dataclass.
    """
    if not is_record_type(cls):
        raise InvalidTarget(cls)

    shape = _SHAPES.get(cls)
    if shape is not None:
        return shape

    hints = typing.get_type_hints(cls)
    specs: List[FieldSpec] = []

    for f in dataclasses.fields(cls):
        css = f.metadata.get(SELECTOR_KEY, "")
        if not css or not _assignable(cls, f):
            continue
        specs.append(FieldSpec(f.name, css, type_spec(hints[f.name])))

    shape = RecordShape(cls.__name__, tuple(specs))
    _SHAPES[cls] = shape
    return shape


# ─────────────────────────────────────────────────────────────
# Zero values
# ─────────────────────────────────────────────────────────────

_ZEROS = {
    Kind.TEXT: "",
    Kind.PRESENCE: False,
    Kind.INT: 0,
    Kind.UINT: Unsigned(0),
    Kind.FLOAT: 0.0,
    Kind.DURATION: timedelta(0),
    Kind.BYTES: b"",
}


def zero_value(spec: TypeSpec) -> Any:
    """Fresh zero value of a kind; OPTIONAL and UNSUPPORTED are None."""
    if spec.kind is Kind.REPEATED:
        return []
    if spec.kind is Kind.RECORD:
        return new_record(spec.annotation)
    return _ZEROS.get(spec.kind)


def new_record(cls: type) -> Any:
    """
    Construct a record, filling fields that have no default with the
    zero value of their kind.
    """
    if not is_record_type(cls):
        raise InvalidTarget(cls)

    hints = typing.get_type_hints(cls)
    kwargs = {}
    late = {}

    for f in dataclasses.fields(cls):
        if f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING:
            continue
        zero = zero_value(type_spec(hints[f.name]))
        if f.init:
            kwargs[f.name] = zero
        else:
            # __init__ never sets these, the instance has no attribute yet
            late[f.name] = zero

    record = cls(**kwargs)
    for name, zero in late.items():
        if not hasattr(record, name):
            object.__setattr__(record, name, zero)
    return record
