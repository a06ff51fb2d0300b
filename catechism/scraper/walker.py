"""Pagination walker: follows the "Next" chain and fills the index.

``walk`` runs the crawl loop:

    fetch (cache) → parse → extract paragraphs → find "Next" → resolve → repeat

until a page has no "Next" link.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable

from catechism.config import Settings
from catechism.errors import CacheIOFailure
from catechism.index import CatechismIndex
from catechism.scraper.cache import CacheStore
from catechism.scraper.extractor import extract_paragraphs, find_next_link, parse_page
from catechism.scraper.urls import resolve_url

logger = logging.getLogger(__name__)


@dataclass
class PageVisit:
    """What one page contributed to the crawl."""

    url: str
    paragraphs_found: int
    paragraphs_added: int
    next_url: str | None


def walk(
    first_url: str,
    store: CacheStore,
    index: CatechismIndex | None = None,
    on_page: Callable[[PageVisit], None] | None = None,
    resolve: Callable[[str], str] = resolve_url,
) -> CatechismIndex:
    """Crawl from *first_url* until a page has no "Next" link.

    Args:
        first_url: Absolute URL of the first page in the chain.
        store: Cache store used for every page fetch.
        index: Index to fill; a new one is created when omitted.
        on_page: Optional callback invoked once per visited page.
        resolve: Turns a "Next" href into an absolute URL.

    Returns:
        The filled :class:`CatechismIndex`.
    """
    index = CatechismIndex() if index is None else index
    visited: set[str] = set()
    url: str | None = first_url

    while url is not None:
        if url in visited:
            logger.warning("'Next' chain loops back to %s; stopping crawl", url)
            break
        visited.add(url)

        soup = parse_page(store.fetch_cached(url), url)

        found = added = 0
        for number, text in extract_paragraphs(soup):
            found += 1
            if index.insert(number, text):
                added += 1

        href = find_next_link(soup)
        next_url = resolve(href) if href is not None else None
        logger.debug("%s: %d paragraphs (%d new), next=%s", url, found, added, next_url)

        if on_page is not None:
            on_page(PageVisit(url, found, added, next_url))
        url = next_url

    logger.debug("crawl finished: %d pages, %d paragraphs", len(visited), len(index))
    return index


def build_index(
    config: Settings,
    on_page: Callable[[PageVisit], None] | None = None,
) -> CatechismIndex:
    """Resolve the first page from *config*, open the cache, and crawl."""
    first_url = config.first_page_url()
    try:
        config.ensure_cache_dir()
    except OSError as exc:
        raise CacheIOFailure(str(config.cache_dir), exc) from exc

    with CacheStore(config.cache_dir, timeout=config.request_timeout) as store:
        resolve = partial(
            resolve_url, base_url=config.base_url, archive_root=config.archive_root
        )
        index = walk(first_url, store, on_page=on_page, resolve=resolve)
        if store.fetch_count:
            logger.info("fetched %d new page(s) into %s", store.fetch_count, config.cache_dir)
    return index
