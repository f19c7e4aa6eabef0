"""Exceptions raised by the fetch pipeline and cache layer. The ToC engine raises none."""


class LlmsFetchError(Exception):
    """Base class for llms-fetch errors."""


class FetchError(LlmsFetchError):
    """Raised when no URL variation could be fetched. errors holds one line per failed attempt."""

    def __init__(self, url: str, errors: list[str], tried: int = 0):
        self.url = url
        self.errors = list(errors)
        self.tried = tried
        details = "; ".join(self.errors) if self.errors else f"tried {tried} variations"
        super().__init__(f"Failed to fetch content from {url} ({details})")


class CachePathError(LlmsFetchError, ValueError):
    """Raised when a URL cannot be mapped to a path inside the cache directory."""
