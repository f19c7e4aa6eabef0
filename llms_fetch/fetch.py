"""HTTP fetching of URL variations. All variations for one request are fetched concurrently."""

import asyncio
import logging

import httpx

from llms_fetch import __version__
from llms_fetch.models import FetchAttempt

log = logging.getLogger(__name__)

ACCEPT_HEADER = "text/markdown, text/x-markdown, text/plain, text/html;q=0.5, */*;q=0.1"
USER_AGENT = f"llms-fetch/{__version__}"
DEFAULT_TIMEOUT = 30.0


def detect_content_type(content_type: str) -> tuple[bool, bool]:
    """(is_html, is_markdown) from a Content-Type header value."""
    content_type = content_type.lower()
    is_html = "text/html" in content_type
    is_markdown = "text/markdown" in content_type or "text/x-markdown" in content_type
    return is_html, is_markdown


async def fetch_url(client: httpx.AsyncClient, url: str) -> FetchAttempt:
    """Fetch one URL. Never raises for HTTP or network failures; they are reported in the attempt."""
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        log.debug("Network error for %s: %s", url, e)
        return FetchAttempt(url=url, error=f"{url}: network error")

    if not response.is_success:
        return FetchAttempt(url=url, status=response.status_code, error=f"{url}: HTTP {response.status_code}")

    is_html, is_markdown = detect_content_type(response.headers.get("content-type", ""))
    return FetchAttempt(
        url=url,
        ok=True,
        content=response.text,
        is_html=is_html,
        is_markdown=is_markdown,
        status=response.status_code,
    )


async def fetch_all_async(
    urls: list[str],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[FetchAttempt]:
    """Fetch every URL concurrently; results are in the same order as urls."""
    headers = {"Accept": ACCEPT_HEADER, "User-Agent": USER_AGENT}
    async with httpx.AsyncClient(
        headers=headers,
        timeout=timeout,
        follow_redirects=True,
        transport=transport,
    ) as client:
        return list(await asyncio.gather(*(fetch_url(client, url) for url in urls)))


def fetch_all(
    urls: list[str],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[FetchAttempt]:
    """Blocking wrapper around fetch_all_async."""
    return asyncio.run(fetch_all_async(urls, timeout=timeout, transport=transport))
