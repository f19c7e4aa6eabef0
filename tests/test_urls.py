"""
Tests for llms_fetch.urls.get_url_variations.
"""
import pytest

from llms_fetch.urls import get_url_variations


def test_plain_url():
    assert get_url_variations("https://example.com/docs") == [
        "https://example.com/docs",
        "https://example.com/docs.md",
        "https://example.com/docs/index.md",
        "https://example.com/docs/llms.txt",
        "https://example.com/docs/llms-full.txt",
    ]


def test_trailing_slash_is_not_doubled():
    variations = get_url_variations("https://example.com/docs/")

    assert variations[0] == "https://example.com/docs/"
    assert variations[1] == "https://example.com/docs.md"
    assert variations[2] == "https://example.com/docs/index.md"


def test_github_tree():
    assert get_url_variations("https://github.com/user/repo/tree/main/docs") == [
        "https://github.com/user/repo/tree/main/docs",
        "https://raw.githubusercontent.com/user/repo/main/docs/README.md",
        "https://github.com/user/repo/tree/main/docs.md",
        "https://github.com/user/repo/tree/main/docs/README.md",
        "https://github.com/user/repo/tree/main/docs/index.md",
        "https://github.com/user/repo/tree/main/docs/llms.txt",
        "https://github.com/user/repo/tree/main/docs/llms-full.txt",
    ]


def test_github_tree_root():
    variations = get_url_variations("https://github.com/user/repo/tree/main")

    assert variations[1] == "https://raw.githubusercontent.com/user/repo/main/README.md"


def test_github_blob():
    variations = get_url_variations("https://github.com/user/repo/blob/main/src/lib.rs")

    assert len(variations) == 7
    assert variations[0] == "https://github.com/user/repo/blob/main/src/lib.rs"
    assert variations[1] == "https://raw.githubusercontent.com/user/repo/main/src/lib.rs"
    assert variations[2] == "https://github.com/user/repo/blob/main/src/lib.rs.md"
    assert variations[3] == "https://github.com/user/repo/blob/main/src/lib.rs/README.md"


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/docs/readme.md",
        "https://example.com/docs/file.txt",
        "https://example.com/docs/README.MD",
        "https://httpbin.org/get?test=value",
    ],
)
def test_direct_urls_are_fetched_as_is(url):
    assert get_url_variations(url) == [url]


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/user",
        "https://github.com/user/repo",
        "https://github.com",
    ],
)
def test_malformed_github_urls(url):
    variations = get_url_variations(url)

    assert variations[0] == url
    assert not any("raw.githubusercontent.com" in v for v in variations)
    assert f"{url}/README.md" in variations
