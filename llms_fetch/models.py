"""Data models for ToC generation config, extracted headings and fetch results."""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_TOC_BUDGET = 4000
DEFAULT_FULL_CONTENT_THRESHOLD = 8000


class TocConfig(BaseModel):
    """Options for ToC generation. Both values are byte counts, not token estimates."""

    toc_budget: int = Field(
        default=DEFAULT_TOC_BUDGET,
        ge=0,
        description="Max size in bytes of the rendered ToC",
    )
    full_content_threshold: int = Field(
        default=DEFAULT_FULL_CONTENT_THRESHOLD,
        ge=0,
        description="Documents smaller than this many bytes get no ToC",
    )


class Heading(BaseModel):
    """One heading as it appears in the source Markdown."""

    level: int = Field(ge=1, le=6, description="1..6, from the H1-H6 marker")
    line_number: int = Field(ge=1, description="1-based line of the heading's first character")
    text: str = Field(description="Literal source text, markup included, minus empty anchor links")

    model_config = {"frozen": True}


class FetchAttempt(BaseModel):
    """Outcome of fetching a single URL variation."""

    url: str
    ok: bool = False
    content: str = ""
    is_html: bool = False
    is_markdown: bool = False
    status: int | None = Field(default=None, description="HTTP status when a response arrived")
    error: str | None = Field(default=None, description="One-line failure description")


class FileInfo(BaseModel):
    """A cached document written by the fetch pipeline."""

    path: Path = Field(description="Cache file the content was written to")
    source_url: str = Field(description="URL variation the content came from")
    content_type: str = Field(description="llms-full, llms, markdown, html-converted or text")
    lines: int = Field(default=0)
    words: int = Field(default=0)
    characters: int = Field(default=0)
    toc: str | None = Field(default=None, description="Line-indexed outline when the document is large")

    model_config = {"arbitrary_types_allowed": True}


class FetchOutput(BaseModel):
    """Result of one fetch run."""

    url: str = Field(description="URL the caller asked for")
    files: list[FileInfo] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list, description="Variations that failed")
