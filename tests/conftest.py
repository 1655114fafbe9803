"""Pytest configuration and shared fixtures."""

import logging

import pytest

from soupstruct import parse_document

# Keep test output free of debug records from the populator
logging.disable(logging.CRITICAL)


@pytest.fixture
def doc():
    """Parse an HTML snippet into a document node-set."""
    def _doc(body: str):
        return parse_document(body)
    return _doc


@pytest.fixture
def base_doc(doc):
    return doc("<p>hello</p>")
