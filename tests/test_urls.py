"""Tests for URL resolution and cache-key derivation."""

from __future__ import annotations

import os

import pytest

from catechism.errors import MalformedURL
from catechism.scraper.urls import resolve_url, url_to_filename

_BASE = "https://www.vatican.va"
_ROOT = "/archive/ENG0015"


def _resolve(ref: str) -> str:
    return resolve_url(ref, base_url=_BASE, archive_root=_ROOT)


# ---------------------------------------------------------------------------
# resolve_url
# ---------------------------------------------------------------------------

class TestResolveUrl:
    def test_path_already_under_archive_root(self) -> None:
        assert _resolve("/archive/ENG0015/_INDEX.HTM") == (
            "https://www.vatican.va/archive/ENG0015/_INDEX.HTM"
        )

    def test_absolute_url_returned_unchanged(self) -> None:
        assert _resolve("https://example.com/x") == "https://example.com/x"

    def test_scheme_prefix_is_case_insensitive(self) -> None:
        assert _resolve("HTTP://EXAMPLE.COM/X") == "HTTP://EXAMPLE.COM/X"

    def test_relative_page_joined_under_archive_root(self) -> None:
        assert _resolve("__P3.HTM") == "https://www.vatican.va/archive/ENG0015/__P3.HTM"

    def test_first_page_with_leading_slash(self) -> None:
        assert _resolve("/__P2.HTM") == "https://www.vatican.va/archive/ENG0015/__P2.HTM"

    def test_dot_segments_collapsed(self) -> None:
        assert _resolve("../ENG0015/__P4.HTM") == (
            "https://www.vatican.va/archive/ENG0015/__P4.HTM"
        )
        assert _resolve("P1/./../__P5.HTM") == (
            "https://www.vatican.va/archive/ENG0015/__P5.HTM"
        )

    def test_base_without_host_raises(self) -> None:
        with pytest.raises(MalformedURL):
            resolve_url("__P3.HTM", base_url="not a url", archive_root=_ROOT)

    def test_unparsable_base_raises(self) -> None:
        with pytest.raises(MalformedURL):
            resolve_url("__P3.HTM", base_url="http://[::1", archive_root=_ROOT)


# ---------------------------------------------------------------------------
# url_to_filename
# ---------------------------------------------------------------------------

class TestUrlToFilename:
    def test_archive_page(self) -> None:
        name = url_to_filename("https://www.vatican.va/archive/ENG0015/__P2.HTM")
        assert name == "_archive_ENG0015___P2.HTM"

    def test_trailing_separator_trimmed(self) -> None:
        assert url_to_filename("https://example.com/a/b/") == "_a_b"

    def test_illegal_characters_removed(self) -> None:
        assert url_to_filename('https://example.com/a<b>:c|d*e"f') == "_abcdef"

    def test_host_only_url_still_has_a_name(self) -> None:
        assert url_to_filename("https://example.com") == "_"

    def test_ignores_scheme_and_host(self) -> None:
        a = url_to_filename("https://www.vatican.va/archive/ENG0015/__P9.HTM")
        b = url_to_filename("http://mirror.example.org/archive/ENG0015/__P9.HTM")
        assert a == b

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/../../etc/passwd",
            "https://example.com/..",
            "https://example.com/./.",
            "https://example.com/a/../../b",
            "https://example.com/a\\..\\b",
            'https://example.com/x<y>:"|*/z',
            "https://example.com/%2e%2e/secret",
        ],
    )
    def test_key_is_a_single_safe_filename(self, url: str) -> None:
        name = url_to_filename(url)
        assert name
        assert "/" not in name
        assert os.sep not in name
        assert name not in (".", "..")
        assert not any(ch in name for ch in '<>:"|?*\\')
