"""
Public API: fetch a documentation URL into the local cache from code.

    from llms_fetch import fetch_docs
    output = fetch_docs("https://docs.example.com")
    for f in output.files:
        print(f.path, f.toc or "(small document, no ToC)")
"""

import logging
from pathlib import Path

import httpx

from llms_fetch import config as config_module
from llms_fetch.cache import count_stats, ensure_gitignore, url_to_path, write_atomic
from llms_fetch.errors import FetchError
from llms_fetch.fetch import fetch_all
from llms_fetch.html_clean import convert_html
from llms_fetch.models import FetchAttempt, FetchOutput, FileInfo, TocConfig
from llms_fetch.toc import generate_toc
from llms_fetch.urls import get_url_variations

log = logging.getLogger(__name__)


def classify_content(attempt: FetchAttempt) -> str:
    """Content type label for a successful attempt: llms-full, llms, markdown, html-converted or text."""
    url_lower = attempt.url.lower()
    if "/llms-full.txt" in url_lower:
        return "llms-full"
    if "/llms.txt" in url_lower:
        return "llms"
    if attempt.is_markdown:
        return "markdown"
    if attempt.is_html:
        return "html-converted"
    return "text"


def fetch_docs(
    url: str,
    *,
    cache_dir: str | Path | None = None,
    toc_config: TocConfig | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchOutput:
    """
    Fetch url and its variations, cache every usable result as Markdown, return file infos.

    HTML results are dropped when any non-HTML variation succeeded; the rest is converted
    to Markdown. Each file gets a ToC when it is large enough (see llms_fetch.toc).

    Args:
        url: Page or site root to fetch.
        cache_dir: Cache root; default from config (.llms-fetch-mcp).
        toc_config: ToC budget/threshold; default from config.
        timeout: Per-request timeout in seconds; default from config.
        transport: httpx transport override (tests).

    Raises:
        FetchError: no variation could be fetched.
        CachePathError: a fetched URL cannot be mapped into the cache.
    """
    if cache_dir is None or toc_config is None or timeout is None:
        data = config_module.load_config()
        cache_dir = cache_dir if cache_dir is not None else config_module.get_cache_dir(data)
        toc_config = toc_config or config_module.get_toc_config(data)
        timeout = timeout if timeout is not None else config_module.get_timeout(data)
    cache_dir = Path(cache_dir).absolute()

    variations = get_url_variations(url)
    log.info("Fetching %s (%d variations)", url, len(variations))
    attempts = fetch_all(variations, timeout=timeout, transport=transport)

    results = [a for a in attempts if a.ok]
    errors = [a.error for a in attempts if not a.ok and a.error]
    if not results:
        log.warning("All %d variations failed for %s", len(variations), url)
        raise FetchError(url, errors, tried=len(variations))

    ensure_gitignore(cache_dir)
    has_non_html = any(not r.is_html for r in results)

    files: list[FileInfo] = []
    for result in results:
        if has_non_html and result.is_html:
            log.debug("Skipping HTML variation %s", result.url)
            continue
        content_type = classify_content(result)
        if result.is_html and not result.is_markdown:
            content = convert_html(result.content)
        else:
            content = result.content

        file_path = url_to_path(cache_dir, result.url)
        write_atomic(file_path, content)

        lines, words, characters = count_stats(content)
        toc = generate_toc(content, len(content.encode("utf-8")), toc_config)
        log.info("Cached %s -> %s (%s, %d lines)", result.url, file_path, content_type, lines)
        files.append(
            FileInfo(
                path=file_path,
                source_url=result.url,
                content_type=content_type,
                lines=lines,
                words=words,
                characters=characters,
                toc=toc,
            )
        )

    return FetchOutput(url=url, files=files, errors=errors)
