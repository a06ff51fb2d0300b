"""Catechism reader — crawl, cache and look up numbered paragraphs."""

from catechism.errors import (
    CacheIOFailure,
    CatechismError,
    FetchFailure,
    MalformedURL,
    ParseFailure,
)
from catechism.index import CatechismIndex
from catechism.models import Paragraph

__all__ = [
    "CatechismIndex",
    "Paragraph",
    "CatechismError",
    "MalformedURL",
    "FetchFailure",
    "CacheIOFailure",
    "ParseFailure",
]
