"""On-disk response cache in front of the HTTP client.

Each page is stored as the complete wire-form response (status line, headers,
blank line, body) in one file named by :func:`url_to_filename`. Entries are
never refreshed; deleting the file is the only way to refetch a page.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import httpx

from catechism.errors import CacheIOFailure, FetchFailure, ParseFailure
from catechism.scraper.urls import resolve_url, url_to_filename

logger = logging.getLogger(__name__)

# httpx hands back a decoded body, so these no longer describe what we store.
_DROPPED_HEADERS = {"content-encoding", "transfer-encoding", "content-length"}


# ---------------------------------------------------------------------------
# Wire format helpers
# ---------------------------------------------------------------------------

def dump_response(response: httpx.Response) -> bytes:
    """Serialise *response* to raw HTTP/1.x bytes."""
    version = response.http_version or "HTTP/1.1"
    if not version.startswith("HTTP/1"):
        version = "HTTP/1.1"
    body = response.content

    lines = [f"{version} {response.status_code} {response.reason_phrase}".rstrip()]
    for name, value in response.headers.multi_items():
        if name.lower() in _DROPPED_HEADERS:
            continue
        lines.append(f"{name}: {value}")
    lines.append(f"Content-Length: {len(body)}")

    head = "\r\n".join(lines).encode("latin-1", errors="replace")
    return head + b"\r\n\r\n" + body


def load_response(raw: bytes) -> httpx.Response:
    """Rebuild an :class:`httpx.Response` from bytes written by :func:`dump_response`.

    Raises:
        ParseFailure: If the status line or header block is malformed.
    """
    head, sep, body = raw.partition(b"\r\n\r\n")
    if not sep:
        raise ParseFailure("<cached response>", "missing header terminator")

    lines = head.decode("latin-1").split("\r\n")
    status = lines[0].split(" ", 2)
    if len(status) < 2 or not status[0].startswith("HTTP/") or not status[1].isdigit():
        raise ParseFailure(lines[0], "bad status line")

    headers: list[tuple[str, str]] = []
    for line in lines[1:]:
        name, colon, value = line.partition(":")
        if not colon:
            raise ParseFailure(line, "bad header line")
        headers.append((name.strip(), value.strip()))

    reason = status[2] if len(status) > 2 else ""
    return httpx.Response(
        int(status[1]),
        headers=headers,
        content=body,
        extensions={
            "http_version": status[0].encode("ascii"),
            "reason_phrase": reason.encode("latin-1"),
        },
    )


# ---------------------------------------------------------------------------
# Cache store
# ---------------------------------------------------------------------------

class CacheStore:
    """Fetch pages once, then serve them from *cache_dir* forever.

    Args:
        cache_dir: Directory holding one file per page. Must exist.
        client: Optional pre-configured :class:`httpx.Client`; one is created
            (and owned) when omitted.
        timeout: Request timeout in seconds for an owned client; ``None``
            waits indefinitely.
    """

    def __init__(
        self,
        cache_dir: Path,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self.fetch_count = 0

    def __enter__(self) -> CacheStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def path_for(self, url: str) -> Path:
        return self.cache_dir / url_to_filename(url)

    def fetch_cached(self, url: str) -> bytes:
        """Return the raw response bytes for *url*, hitting the network only on a miss.

        Raises:
            FetchFailure: The GET failed at the transport level.
            CacheIOFailure: The cache file could not be written or read.
        """
        url = resolve_url(url)
        path = self.path_for(url)

        if path.is_file():
            logger.debug("cache hit %s -> %s", url, path.name)
            try:
                return path.read_bytes()
            except OSError as exc:
                raise CacheIOFailure(str(path), exc) from exc

        logger.debug("cache miss %s, fetching", url)
        raw = dump_response(self._get(url))
        self._write_atomic(path, raw)
        return raw

    def cached_pages(self) -> list[Path]:
        """Every cache entry currently on disk."""
        if not self.cache_dir.is_dir():
            return []
        return sorted(
            p for p in self.cache_dir.iterdir() if p.is_file() and not p.name.startswith(".")
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _get(self, url: str) -> httpx.Response:
        self.fetch_count += 1
        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchFailure(url, exc) from exc
        if response.is_error:
            logger.warning("GET %s returned HTTP %d; caching it as-is", url, response.status_code)
        return response

    def _write_atomic(self, path: Path, data: bytes) -> None:
        """Write *data* to a temp file beside *path*, then rename it into place."""
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=".", suffix=".tmp")
        except OSError as exc:
            raise CacheIOFailure(str(path), exc) from exc

        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise CacheIOFailure(str(path), exc) from exc
