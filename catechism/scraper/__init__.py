"""Scraper package — cached fetch, extraction and the "Next" chain walker."""

from catechism.scraper.cache import CacheStore
from catechism.scraper.extractor import extract_paragraphs, find_next_link, parse_page
from catechism.scraper.urls import resolve_url, url_to_filename
from catechism.scraper.walker import PageVisit, build_index, walk

__all__ = [
    "CacheStore",
    "extract_paragraphs",
    "find_next_link",
    "parse_page",
    "resolve_url",
    "url_to_filename",
    "PageVisit",
    "build_index",
    "walk",
]
