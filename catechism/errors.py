"""Exception hierarchy for the crawl pipeline.

Every component raises one of these; only the CLI decides to terminate the
process.
"""

from __future__ import annotations


class CatechismError(Exception):
    """Base class for all pipeline failures.

    ``operation`` names what was being attempted and ``value`` the offending
    input (URL, filename, ...), so the CLI can print a one-line diagnostic.
    """

    operation = "error"

    def __init__(self, value: str, detail: str | Exception | None = None) -> None:
        self.value = value
        self.detail = detail
        message = f"{self.operation} {value!r}"
        if detail is not None:
            message += f": {detail}"
        super().__init__(message)


class MalformedURL(CatechismError):
    operation = "malformed url"


class FetchFailure(CatechismError):
    operation = "error getting url"


class CacheIOFailure(CatechismError):
    operation = "cache i/o failed for"


class ParseFailure(CatechismError):
    operation = "could not parse page"
