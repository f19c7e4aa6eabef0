"""Map URLs to cache file paths and write cached documents. Path mapping touches no files."""

import os
import tempfile
from pathlib import Path
from urllib.parse import urlparse

from llms_fetch.errors import CachePathError

GITIGNORE_CONTENT = "*\n"
INDEX_NAME = "index"
# Characters that are unsafe in file names on at least one platform
UNSAFE_QUERY_CHARS = '/\\:*?"<>|'

_DOT_SEGMENTS = {".", "%2e"}
_DOTDOT_SEGMENTS = {"..", ".%2e", "%2e.", "%2e%2e"}


def _resolve_segments(url_path: str) -> list[str]:
    """Apply '.' and '..' segments the way a URL parser does; '..' at the root is dropped."""
    segments: list[str] = []
    for segment in url_path.split("/"):
        lower = segment.lower()
        if lower in _DOTDOT_SEGMENTS:
            if segments:
                segments.pop()
        elif lower in _DOT_SEGMENTS or not segment:
            continue
        else:
            segments.append(segment)
    return segments


def _safe_query(query: str) -> str:
    return query.translate({ord(ch): "_" for ch in UNSAFE_QUERY_CHARS})


def url_to_path(base_dir: Path, url: str) -> Path:
    """
    Cache path for url: <base_dir>/<host>/<path segments>[/index][?<query>].

    "index" is appended when the URL path is empty or its last segment has no extension.
    Raises CachePathError for URLs without a host or paths that would leave base_dir.
    """
    base_dir = Path(base_dir)
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError as e:
        raise CachePathError(f"Invalid URL: {url}") from e
    if not host:
        raise CachePathError(f"No host in URL: {url}")

    path = base_dir / host
    url_path = parsed.path.lstrip("/")
    segments = _resolve_segments(url_path)
    for segment in segments:
        path = path / segment

    last_segment = url_path.rsplit("/", 1)[-1]
    if not segments or not Path(last_segment).suffix:
        path = path / INDEX_NAME

    if parsed.query:
        path = path.with_name(f"{path.name}?{_safe_query(parsed.query)}")

    normalized = Path(os.path.normpath(path))
    if not normalized.is_relative_to(Path(os.path.normpath(base_dir))):
        raise CachePathError(f"Path traversal detected for URL: {url}")
    return path


def ensure_gitignore(base_dir: Path) -> Path:
    """Create base_dir and a .gitignore that ignores everything in it, if missing."""
    base_dir = Path(base_dir)
    gitignore = base_dir / ".gitignore"
    if not gitignore.exists():
        base_dir.mkdir(parents=True, exist_ok=True)
        gitignore.write_text(GITIGNORE_CONTENT, encoding="utf-8")
    return gitignore


def write_atomic(path: Path, content: str) -> None:
    """Write content via a temp file in the same directory, then rename over path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def count_stats(content: str) -> tuple[int, int, int]:
    """(lines, words, characters). A trailing newline does not start a new line."""
    lines = content.count("\n")
    if content and not content.endswith("\n"):
        lines += 1
    return lines, len(content.split()), len(content)
