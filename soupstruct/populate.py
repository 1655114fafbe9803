"""
Record population: walk a record's shape and fill it from a document.

Each field's selector is resolved against the current context (the
document for top-level fields, the enclosing field's matches for nested
records). The field's kind then decides what happens to the matches:

    RECORD    -> recurse with the matches as the new context
    REPEATED  -> one element per matched node, in document order
    OPTIONAL  -> materialize a zero value, then dispatch on the wrapped kind
    scalars   -> coercion table

The first error stops the walk. Fields already assigned stay assigned.
"""

import logging
from typing import Any

from .coerce import coerce
from .errors import InvalidTarget, PopulateError
from .selectors import NodeSet, as_nodeset
from .shape import Kind, FieldSpec, TypeSpec, is_record_type, new_record, shape_of, zero_value


log = logging.getLogger(__name__)


def populate(target: Any, document) -> Any:
    """
    Fill `target` from `document` and return it.

    target:
        a dataclass instance, populated in place, or a dataclass type, in
        which case a fresh instance is built, populated and returned.
    document:
        a NodeSet (see parse_document) or a bs4 Tag / BeautifulSoup.

    Raises InvalidTarget before touching anything when target is neither.
    """
    if isinstance(target, type):
        if not is_record_type(target):
            raise InvalidTarget(target)
        target = new_record(target)
    elif not is_record_type(type(target)):
        raise InvalidTarget(target)

    populate_record(target, as_nodeset(document))
    return target


def populate_record(record: Any, context: NodeSet) -> None:
    """Populate every selector-bearing field of `record` within `context`."""
    shape = shape_of(type(record))

    for spec in shape:
        try:
            _populate_field(record, spec, context)
        except PopulateError as e:
            log.debug("field failed", extra={
                "record": shape.name,
                "field": spec.name,
                "selector": spec.selector,
                "error_code": type(e).__name__,
            })
            raise


def _populate_field(record: Any, spec: FieldSpec, context: NodeSet) -> None:
    matched = context.find(spec.selector)

    log.debug("resolved field", extra={
        "record": type(record).__name__,
        "field": spec.name,
        "selector": spec.selector,
        "matches": len(matched),
    })

    typ = spec.type
    if typ.kind is Kind.OPTIONAL:
        typ = typ.unwrap()
        setattr(record, spec.name, zero_value(typ))

    value = decode(typ, matched, getattr(record, spec.name, None))
    setattr(record, spec.name, value)


def decode(typ: TypeSpec, nodes: NodeSet, current: Any = None) -> Any:
    """
    Build the value of kind `typ` from `nodes`.

    Records are populated in place when `current` already holds an
    instance of the right type; otherwise a fresh one is made.
    """
    if typ.kind is Kind.OPTIONAL:
        typ = typ.unwrap()
        current = zero_value(typ)

    if typ.kind is Kind.RECORD:
        if not isinstance(current, typ.annotation):
            current = new_record(typ.annotation)
        populate_record(current, nodes)
        return current

    if typ.kind is Kind.REPEATED:
        # built aside so a failing element leaves the field untouched
        return [decode(typ.inner, node) for node in nodes]

    return coerce(typ, nodes)
