"""Paragraph and "Next" link extraction from archive pages."""

from __future__ import annotations

import re
from typing import Iterator

from bs4 import BeautifulSoup

from catechism.errors import ParseFailure
from catechism.scraper.cache import load_response

_LEADING_NUMBER = re.compile(r"^(\d+)", re.ASCII)

NEXT_LABEL = "Next"


def parse_page(raw: bytes, url: str = "<page>") -> BeautifulSoup:
    """Turn a cached response blob into a queryable tree.

    Raises:
        ParseFailure: If the blob is not a valid response or the markup
            cannot be parsed.
    """
    try:
        response = load_response(raw)
    except ParseFailure as exc:
        raise ParseFailure(url, exc.detail) from exc
    try:
        return BeautifulSoup(response.content, "html.parser")
    except Exception as exc:  # noqa: BLE001 - bs4 raises a mix of types
        raise ParseFailure(url, exc) from exc


def extract_number(text: str) -> int | None:
    """Return the integer *text* starts with, or ``None``."""
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return None
    return int(match.group(1))


def extract_paragraphs(soup: BeautifulSoup) -> Iterator[tuple[int, str]]:
    """Yield ``(number, text)`` for every ``<p>`` whose text starts with digits.

    Candidates come out in document order and are not deduplicated; the full
    flattened text of the element, number included, is the paragraph text.
    """
    for p in soup.find_all("p"):
        text = p.get_text()
        number = extract_number(text)
        if number is not None:
            yield number, text


def find_next_link(soup: BeautifulSoup) -> str | None:
    """Return the href of the first anchor labelled exactly ``Next``."""
    for a in soup.find_all("a"):
        if a.get_text() == NEXT_LABEL and a.get("href"):
            return a["href"]
    return None
