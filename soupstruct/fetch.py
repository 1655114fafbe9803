"""
Fetch a page over HTTP and decode it into a record.

A thin convenience layer: no retries, and every aiohttp or parser error
reaches the caller as raised.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Optional

from aiohttp import ClientSession, ClientTimeout

from .populate import populate
from .selectors import DEFAULT_PARSER, NodeSet, parse_document


log = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# Options
# ─────────────────────────────────────────────────────────────

@dataclass
class FetchOptions:
    user_agent: str = "soupstruct/0.1 (+https://example.com)"
    total_timeout: float = 30.0     # whole request, seconds
    connect_timeout: float = 10.0
    read_timeout: float = 20.0
    parser: str = DEFAULT_PARSER    # bs4 tree builder


# ─────────────────────────────────────────────────────────────
# HTTP
# ─────────────────────────────────────────────────────────────

@asynccontextmanager
async def session(options: Optional[FetchOptions] = None):
    """aiohttp session configured from FetchOptions."""
    opts = options or FetchOptions()
    timeout = ClientTimeout(
        total=opts.total_timeout,
        connect=opts.connect_timeout,
        sock_read=opts.read_timeout
    )
    async with ClientSession(headers={"User-Agent": opts.user_agent}, timeout=timeout) as s:
        yield s


async def fetch_text(url: str, options: Optional[FetchOptions] = None) -> str:
    """
    GET `url` and return the body as text.

    Responses with status >= 400 raise aiohttp.ClientResponseError.
    """
    log.info("fetching", extra={"url": url})

    async with session(options) as s:
        async with s.get(url, allow_redirects=True) as r:
            r.raise_for_status()
            return await r.text()


async def fetch_document(url: str, options: Optional[FetchOptions] = None) -> NodeSet:
    opts = options or FetchOptions()
    html = await fetch_text(url, opts)
    return parse_document(html, opts.parser)


# ─────────────────────────────────────────────────────────────
# Fetch + populate
# ─────────────────────────────────────────────────────────────

async def fetch(target: Any, url: str, options: Optional[FetchOptions] = None) -> Any:
    """Fetch `url`, parse it and populate `target` (see populate())."""
    document = await fetch_document(url, options)
    return populate(target, document)


def fetch_sync(target: Any, url: str, options: Optional[FetchOptions] = None) -> Any:
    """Blocking fetch() for callers outside an event loop."""
    return asyncio.run(fetch(target, url, options))
