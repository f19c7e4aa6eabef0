"""
Pytest configuration and global fixtures.
"""
import httpx
import pytest

from llms_fetch.models import Heading


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point config lookup at an empty temp dir and clear LLMS_FETCH_* env vars."""
    for name in (
        "LLMS_FETCH_CACHE_DIR",
        "LLMS_FETCH_TOC_BUDGET",
        "LLMS_FETCH_TOC_THRESHOLD",
        "LLMS_FETCH_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    config_path = tmp_path / ".llms_fetch.json"
    monkeypatch.setenv("LLMS_FETCH_CONFIG", str(config_path))
    monkeypatch.chdir(tmp_path)
    return config_path


@pytest.fixture
def sample_headings():
    """Three nested headings on consecutive lines."""
    return [
        Heading(level=1, line_number=1, text="# H1"),
        Heading(level=2, line_number=2, text="## H2"),
        Heading(level=3, line_number=3, text="### H3"),
    ]


@pytest.fixture
def nested_doc():
    """A ~12 KB document with H1-H3 sections and body text between headings."""
    body = "Some paragraph text that explains things in detail.\n" * 20
    parts = []
    for i in range(1, 4):
        parts.append(f"# Chapter {i}\n\n{body}\n")
        for j in range(1, 4):
            parts.append(f"## Section {i}.{j}\n\n{body}\n")
            for k in range(1, 3):
                parts.append(f"### Topic {i}.{j}.{k}\n\n{body}\n")
    return "".join(parts)


@pytest.fixture
def make_transport():
    """Build an httpx.MockTransport from a {url: (status, content_type, body)} map; unknown URLs 404."""

    def _make(routes):
        def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(str(request.url))
            if route is None:
                return httpx.Response(404, text="not found")
            if isinstance(route, Exception):
                raise route
            status, content_type, body = route
            return httpx.Response(status, headers={"content-type": content_type}, text=body)

        return httpx.MockTransport(handler)

    return _make
