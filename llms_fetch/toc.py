"""
Build a compact, line-numbered table of contents from Markdown.

Pipeline:
  1. Gate: documents below full_content_threshold bytes get no ToC (no parsing)
  2. Extract headings in one pass over parser events (llms_fetch.events). Heading
     text is the literal source slice, so emphasis, code spans and real links are
     kept; only links with empty or invisible text (generated anchors) are cut out
  3. Try every depth 1..max_level and keep the deepest rendering within toc_budget
  4. Render "<line>→<heading source>" rows, line numbers right-aligned

Heading text is preserved exactly as written rather than rebuilt from event text,
so a reader can search the document for it verbatim.
"""

import logging
from dataclasses import dataclass, field

from llms_fetch.events import EventKind, iter_events
from llms_fetch.models import Heading, TocConfig

log = logging.getLogger(__name__)

# Characters that make a link label "invisible" (ZWSP, BOM/ZWNBSP, ZWNJ, ZWJ)
INVISIBLE_CHARS = frozenset("\u200b\ufeff\u200c\u200d")

TOC_SEPARATOR = "→"
MIN_LINE_WIDTH = 3


@dataclass
class _LinkState:
    start: int
    text: list[str] = field(default_factory=list)


@dataclass
class _HeadingState:
    level: int
    start: int
    line_number: int
    excluded: list[tuple[int, int]] = field(default_factory=list)
    link: _LinkState | None = None


# ---------------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------------

def _is_invisible(text: str) -> bool:
    """True if text is empty or only whitespace / zero-width characters."""
    return all(ch.isspace() or ch in INVISIBLE_CHARS for ch in text)


def _without_ranges(markdown: str, start: int, end: int, ranges: list[tuple[int, int]]) -> str:
    """markdown[start:end] with the given ranges cut out. Ranges outside the slice are ignored."""
    pieces = []
    cursor = start
    for r_start, r_end in sorted(ranges):
        if r_start < cursor or r_end > end or r_start > r_end:
            log.debug("Skipping exclusion %d..%d outside heading %d..%d", r_start, r_end, start, end)
            continue
        pieces.append(markdown[cursor:r_start])
        cursor = r_end
    pieces.append(markdown[cursor:end])
    return "".join(pieces)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _has_content(text: str) -> bool:
    """False when only the ATX "#" run is left, e.g. "##" after removing an anchor."""
    return bool(text.strip("#").strip())


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_headings(markdown: str) -> list[Heading]:
    """
    Return the document's headings in order, with 1-based line numbers.

    Line numbers count "\\n" only, tracked incrementally between event offsets so the
    whole pass stays linear in document length.
    """
    headings: list[Heading] = []
    current: _HeadingState | None = None
    current_line = 1
    last_pos = 0

    for event, (start, end) in iter_events(markdown):
        if start > last_pos:
            current_line += markdown.count("\n", last_pos, start)
        last_pos = max(last_pos, start)

        kind = event.kind
        if kind is EventKind.HEADING_START:
            current = _HeadingState(level=event.level or 1, start=start, line_number=current_line)
        elif current is None:
            continue
        elif kind is EventKind.LINK_START:
            current.link = _LinkState(start=start)
        elif kind in (EventKind.TEXT, EventKind.CODE):
            if current.link is not None:
                current.link.text.append(event.content)
        elif kind is EventKind.LINK_END:
            link = current.link
            current.link = None
            if link is not None and _is_invisible("".join(link.text)):
                current.excluded.append((link.start, end))
        elif kind is EventKind.HEADING_END:
            # an unclosed link is dropped along with the state
            text = _without_ranges(markdown, current.start, end, current.excluded).strip()
            if _has_content(text):
                level = min(max(current.level, 1), 6)
                headings.append(Heading(level=level, line_number=current.line_number, text=text))
            else:
                log.debug("Dropping empty heading at line %d", current.line_number)
            current = None

    return headings


# ---------------------------------------------------------------------------
# Rendering and level selection
# ---------------------------------------------------------------------------

def render_toc(headings: list[Heading], max_level: int) -> str:
    """Format headings with level <= max_level as right-aligned "line→text" rows."""
    filtered = [h for h in headings if h.level <= max_level]
    if not filtered:
        return ""
    width = max(MIN_LINE_WIDTH, len(str(filtered[-1].line_number)))
    return "\n".join(f"{h.line_number:>{width}}{TOC_SEPARATOR}{h.text}" for h in filtered)


def find_optimal_level(headings: list[Heading], budget: int) -> tuple[int, str] | None:
    """
    Deepest heading level whose rendering fits in budget bytes, with that rendering.

    Every level is tried: rendered size is not assumed to grow with depth, so an
    over-budget level does not end the search.
    """
    if not headings:
        return None
    max_level = max(h.level for h in headings)
    best: tuple[int, str] | None = None
    for level in range(1, max_level + 1):
        rendered = render_toc(headings, level)
        if not rendered:
            continue
        size = _byte_len(rendered)
        if size <= budget:
            best = (level, rendered)
        log.debug("ToC level %d: %d bytes (budget %d)", level, size, budget)
    return best


def generate_toc(markdown: str, total_bytes: int, config: TocConfig | None = None) -> str | None:
    """
    ToC for a large document, or None when the full content should be used instead.

    total_bytes is normally the UTF-8 size of markdown; callers may pass the size of a
    related artifact to gate on that instead.
    """
    config = config or TocConfig()
    if total_bytes < config.full_content_threshold:
        return None
    headings = extract_headings(markdown)
    if not headings:
        log.debug("No headings found; no ToC")
        return None
    selected = find_optimal_level(headings, config.toc_budget)
    if selected is None:
        log.info("No heading level fits the %d byte ToC budget", config.toc_budget)
        return None
    level, rendered = selected
    log.debug("ToC uses levels 1-%d (%d headings total)", level, len(headings))
    return rendered
