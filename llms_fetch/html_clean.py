"""
HTML → Markdown for fetched pages: strip site chrome, keep the main content, convert, tidy.

BeautifulSoup (CSS selectors via soupsieve) does the cleanup, html2text the conversion.
"""

import logging
import re

import html2text
from bs4 import BeautifulSoup

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------
REMOVE_SELECTORS = [
    "script",
    "style",
    "noscript",
    "iframe",
    "nav",
    "[role=banner]",
    "[role=navigation]",
    "[role=contentinfo]",
    "[role=complementary]",
    "[role=search]",
    '[aria-label*="navigation" i]',
    '[aria-label*="breadcrumb" i]',
    '[aria-label*="search" i]',
    ".navigation",
    ".nav",
    ".navbar",
    ".nav-bar",
    ".site-header",
    ".site-footer",
    ".page-header",
    ".page-footer",
    ".breadcrumb",
    ".breadcrumbs",
    "#navigation",
    "#nav",
    "#navbar",
    "#breadcrumb",
    "#breadcrumbs",
]

# First match wins
MAIN_SELECTORS = [
    ".markdown-body",
    "main",
    "[role=main]",
    ".main-content",
    "#main-content",
    "#content",
    ".content",
    ".docs-content",
    ".documentation",
    ".page-content",
]

# ---------------------------------------------------------------------------
# Markdown cleanup patterns
# ---------------------------------------------------------------------------
EMPTY_LINK_BEFORE_BRACKET_RE = re.compile(r"\[\]\([^)]*\)\[")
EMPTY_LINK_RE = re.compile(r"\[\]\([^)]*\)")
ZERO_WIDTH_LABEL_RE = re.compile("\\[[\u200b\u200c\u200d\ufeff]+\\]")
EXCESSIVE_NEWLINES_RE = re.compile(r"\n{3,}")


def _simplify_images(soup: BeautifulSoup) -> None:
    """Drop decorative images; give the rest a usable alt text so they convert to ![alt](src)."""
    for img in soup.find_all("img"):
        alt = img.get("alt") or ""
        src = img.get("src") or ""
        role = img.get("role") or ""
        decorative = role in ("presentation", "none") or (not alt and "icon" in src)
        if decorative or not src:
            img.decompose()
            continue
        img.attrs = {"src": src, "alt": alt or "image"}


def clean_html(html: str) -> str:
    """Remove navigation/boilerplate and return the HTML of the main content area."""
    soup = BeautifulSoup(html, "html.parser")
    for selector in REMOVE_SELECTORS:
        for element in soup.select(selector):
            element.decompose()
    _simplify_images(soup)

    for selector in MAIN_SELECTORS:
        main = soup.select_one(selector)
        if main is not None:
            log.debug("Main content matched %s", selector)
            return str(main)
    body = soup.body
    if body is not None:
        return str(body)
    return str(soup)


def html_to_markdown(html: str) -> str:
    converter = html2text.HTML2Text()
    converter.body_width = 0
    converter.ignore_links = False
    converter.ignore_images = False
    return converter.handle(html)


def clean_markdown(markdown: str) -> str:
    """Remove empty and zero-width link labels and collapse runs of blank lines."""
    result = EMPTY_LINK_BEFORE_BRACKET_RE.sub("[", markdown)
    result = EMPTY_LINK_RE.sub("", result)
    result = ZERO_WIDTH_LABEL_RE.sub("", result)
    return EXCESSIVE_NEWLINES_RE.sub("\n\n", result)


def convert_html(html: str) -> str:
    """Full HTML page → cleaned Markdown."""
    return clean_markdown(html_to_markdown(clean_html(html)))
