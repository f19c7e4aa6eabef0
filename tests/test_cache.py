"""
Tests for llms_fetch.cache: URL to path mapping, .gitignore, atomic writes, stats.
"""
from pathlib import Path

import pytest

from llms_fetch.cache import count_stats, ensure_gitignore, url_to_path, write_atomic
from llms_fetch.errors import CachePathError

BASE = Path("/cache")


class TestUrlToPath:
    """Tests for url_to_path."""

    def test_directory_style_url_gets_index(self):
        assert url_to_path(BASE, "https://example.com/docs/page") == Path("/cache/example.com/docs/page/index")

    def test_url_with_extension(self):
        assert url_to_path(BASE, "https://example.com/docs/page.md") == Path("/cache/example.com/docs/page.md")

    def test_root_url(self):
        assert url_to_path(BASE, "https://example.com") == Path("/cache/example.com/index")
        assert url_to_path(BASE, "https://example.com/") == Path("/cache/example.com/index")

    def test_trailing_slash_gets_index(self):
        assert url_to_path(BASE, "https://example.com/docs/v1.2/") == Path("/cache/example.com/docs/v1.2/index")

    def test_deep_path(self):
        path = url_to_path(BASE, "https://example.com/docs/api/v1/reference")

        assert path == Path("/cache/example.com/docs/api/v1/reference/index")

    def test_relative_base(self):
        base = Path(".llms-fetch-mcp")
        path = url_to_path(base, "https://developer.mozilla.org/en-US/docs/Web/JavaScript")

        assert path == base / "developer.mozilla.org/en-US/docs/Web/JavaScript/index"

    def test_query_kept_in_file_name(self):
        path = url_to_path(BASE, "https://httpbin.org/get?test=value")

        assert path == Path("/cache/httpbin.org/get/index?test=value")

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://example.com/api?path=../etc/passwd", "path=.._etc_passwd"),
            ("https://example.com/api?name=file:name?test", "name=file_name_test"),
            ("https://example.com/api?path=..\\etc\\passwd", "path=.._etc_passwd"),
        ],
    )
    def test_query_sanitized(self, url, expected):
        path = url_to_path(BASE, url)

        assert path.parent == Path("/cache/example.com/api")
        assert path.name == f"index?{expected}"

    def test_dot_segments_resolved_inside_cache(self):
        assert url_to_path(BASE, "https://example.com/../etc/passwd") == Path("/cache/example.com/etc/passwd/index")
        assert url_to_path(BASE, "https://example.com/a/./b/../c") == Path("/cache/example.com/a/c/index")

    def test_encoded_dot_segments(self):
        path = url_to_path(BASE, "https://example.com/docs/%2e%2e/%2E%2E/passwd")

        assert path == Path("/cache/example.com/passwd/index")

    def test_no_host_raises(self):
        with pytest.raises(CachePathError):
            url_to_path(BASE, "file:///etc/passwd")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            url_to_path(BASE, "not a url")


def test_ensure_gitignore_creates_dir_and_file(tmp_path):
    base = tmp_path / "cache"
    gitignore = ensure_gitignore(base)

    assert gitignore == base / ".gitignore"
    assert gitignore.read_text(encoding="utf-8") == "*\n"


def test_ensure_gitignore_keeps_existing(tmp_path):
    (tmp_path / ".gitignore").write_text("custom\n", encoding="utf-8")
    ensure_gitignore(tmp_path)

    assert (tmp_path / ".gitignore").read_text(encoding="utf-8") == "custom\n"


def test_write_atomic_creates_parents_and_overwrites(tmp_path):
    target = tmp_path / "example.com" / "docs" / "index"
    write_atomic(target, "first")
    write_atomic(target, "second\r\nline")

    assert target.read_bytes() == b"second\r\nline"
    assert [p.name for p in target.parent.iterdir()] == ["index"]


class TestCountStats:
    def test_counts(self):
        assert count_stats("Line 1\nLine 2\nLine 3") == (3, 6, 20)

    def test_empty(self):
        assert count_stats("") == (0, 0, 0)

    def test_trailing_newline_not_an_extra_line(self):
        assert count_stats("a b\nc\n") == (2, 3, 6)

    def test_characters_not_bytes(self):
        assert count_stats("héllo wörld") == (1, 2, 11)
