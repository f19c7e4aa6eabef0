"""
llms-fetch: fetch documentation pages, cache them as Markdown, and outline large ones.

Use as a library:

    from llms_fetch import generate_toc, TocConfig
    toc = generate_toc(markdown, len(markdown.encode()), TocConfig(toc_budget=2000))

    from llms_fetch import fetch_docs
    output = fetch_docs("https://docs.example.com")

Or run the CLI:

    llms-fetch toc docs/guide.md
    llms-fetch fetch https://docs.example.com
"""

__version__ = "0.1.0"

from llms_fetch.api import fetch_docs
from llms_fetch.models import FetchOutput, FileInfo, Heading, TocConfig
from llms_fetch.toc import extract_headings, generate_toc

__all__ = [
    "generate_toc",
    "extract_headings",
    "fetch_docs",
    "TocConfig",
    "Heading",
    "FetchOutput",
    "FileInfo",
]
