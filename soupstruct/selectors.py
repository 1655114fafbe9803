"""
Node-sets over a parsed HTML document.

A NodeSet is the result of evaluating a CSS selector against a context:
an ordered, duplicate-free list of BeautifulSoup tags. Selector matching
itself is done by soupsieve through Tag.select().
"""

from typing import Iterable, Iterator, List

from bs4 import BeautifulSoup, Tag


DEFAULT_PARSER = "lxml"


class NodeSet:
    """
    Ordered set of document nodes.

    The document root (a BeautifulSoup object) is itself a node, so a
    freshly parsed document is a one-node NodeSet.
    """

    def __init__(self, nodes: Iterable[Tag] = ()):
        self.nodes: List[Tag] = list(nodes)

    def find(self, selector: str) -> "NodeSet":
        """
        Descendants of every context node matching `selector`.

        Matches come back in document order without duplicates. A
        malformed selector raises soupsieve.SelectorSyntaxError.
        """
        seen = set()
        found: List[Tag] = []

        # Context nodes are in document order, so a nested context only
        # ever yields matches already collected from its ancestor.
        for node in self.nodes:
            for el in node.select(selector):
                if id(el) not in seen:
                    seen.add(id(el))
                    found.append(el)

        return NodeSet(found)

    def text(self) -> str:
        """Concatenated text of every node; "" when empty."""
        return "".join(node.get_text() for node in self.nodes)

    def first_text(self) -> str:
        """Text of the first node only; "" when empty."""
        if not self.nodes:
            return ""
        return self.nodes[0].get_text()

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator["NodeSet"]:
        for node in self.nodes:
            yield NodeSet([node])

    def __repr__(self):
        names = ", ".join(node.name or "?" for node in self.nodes[:5])
        more = ", ..." if len(self.nodes) > 5 else ""
        return f"NodeSet([{names}{more}])"


def parse_document(html: str, parser: str = DEFAULT_PARSER) -> NodeSet:
    """Parse an HTML string into a one-node NodeSet rooted at the document."""
    return NodeSet([BeautifulSoup(html, parser)])


def as_nodeset(document) -> NodeSet:
    """Accept a NodeSet or any bs4 Tag (including a BeautifulSoup root)."""
    if isinstance(document, NodeSet):
        return document
    if isinstance(document, Tag):
        return NodeSet([document])
    raise TypeError(
        f"document must be a NodeSet or a bs4 Tag, not {type(document).__name__}"
    )
