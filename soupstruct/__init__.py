"""
soupstruct: decode HTML documents into dataclasses with CSS selectors.

    from dataclasses import dataclass
    from soupstruct import parse_document, populate, selector

    @dataclass
    class Page:
        title: str = selector("h1", default="")

    page = populate(Page, parse_document("<h1>Hello</h1>"))
"""

from .errors import CoercionError, InvalidTarget, PopulateError, UnsupportedType
from .fetch import FetchOptions, fetch, fetch_document, fetch_sync, fetch_text
from .populate import populate
from .selectors import NodeSet, parse_document
from .shape import Kind, RecordShape, Unsigned, selector, shape_of

__all__ = [
    "CoercionError",
    "InvalidTarget",
    "PopulateError",
    "UnsupportedType",
    "FetchOptions",
    "fetch",
    "fetch_document",
    "fetch_sync",
    "fetch_text",
    "populate",
    "NodeSet",
    "parse_document",
    "Kind",
    "RecordShape",
    "Unsigned",
    "selector",
    "shape_of",
]
