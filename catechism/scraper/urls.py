"""URL resolution and cache-key derivation for archive pages."""

from __future__ import annotations

import os.path
import posixpath
import re
from urllib.parse import urljoin, urlsplit

from catechism.config import settings
from catechism.errors import MalformedURL

# Characters Windows and most shells refuse in filenames
_ILLEGAL_CHARS = re.compile(r'[<>:"|?*\\\x00-\x1f]')


def resolve_url(
    ref: str,
    base_url: str | None = None,
    archive_root: str | None = None,
) -> str:
    """Turn a page link into an absolute archive URL.

    Some "Next" links on the archive are absolute and some are relative, so
    anything starting with ``http`` (any case) is returned untouched. Paths
    already under *archive_root* are kept as they are; other references are
    joined under *archive_root*. Either way ``.`` and ``..`` segments are
    collapsed and the path is put on *base_url*'s host.

    Raises:
        MalformedURL: If the base URL has no scheme or host, or *ref* cannot
            be parsed.
    """
    if ref.lower().startswith("http"):
        return ref

    base_url = settings.base_url if base_url is None else base_url
    archive_root = settings.archive_root if archive_root is None else archive_root

    try:
        base = urlsplit(base_url)
        urlsplit(ref)
    except ValueError as exc:
        raise MalformedURL(ref, exc) from exc
    if not base.scheme or not base.netloc:
        raise MalformedURL(base_url, "base url needs a scheme and host")

    root = "/" + archive_root.strip("/")
    if ref.startswith(root + "/"):
        # Already host-relative under the archive root.
        path = posixpath.normpath(ref)
    else:
        path = posixpath.normpath(posixpath.join(root, ref.lstrip("/")))
    # normpath keeps a leading "//"; the path must stay host-relative.
    path = "/" + path.lstrip("/")
    return urljoin(f"{base.scheme}://{base.netloc}", path)


def url_to_filename(url: str) -> str:
    """Derive a single, filesystem-safe filename from *url*.

    Only the path is kept; ``/`` becomes ``_``, trailing underscores are
    trimmed and illegal characters dropped. The result never contains a path
    separator, so it cannot escape the cache directory.
    """
    try:
        path = urlsplit(url).path
    except ValueError as exc:
        raise MalformedURL(url, exc) from exc

    name = path.replace("/", "_").rstrip("_")
    name = _ILLEGAL_CHARS.sub("", name)
    name = os.path.normpath(name) if name else ""
    if name in ("", ".", ".."):
        return "_"
    return name
