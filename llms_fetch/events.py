"""
Markdown event source: (event, (start, end)) pairs for headings and the links inside them.

markdown-it-py does the CommonMark parsing. Block tokens only carry line maps, so:
  1. heading ranges come from a line-start table: first "#" (ATX) or first text character
     (setext) through the end of the last line
  2. inline link ranges come from a wrapped ``link`` rule that records state.pos before
     and after the link, relative to the heading's inline source
  3. each line of the inline source is located on its own heading line (container markers
     such as "> " sit between them) to make those offsets absolute

Offsets are str indices into the caller's original text. The parser never sees
``\\r\\n``; positions are mapped back through the list of collapsed ``\\r`` (bisect).
"""

import bisect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from markdown_it.rules_inline import link as _link_rule

log = logging.getLogger(__name__)

SRC_RANGE_META = "src_range"


class EventKind(Enum):
    HEADING_START = "heading_start"
    HEADING_END = "heading_end"
    LINK_START = "link_start"
    LINK_END = "link_end"
    TEXT = "text"
    CODE = "code"


@dataclass(frozen=True)
class Event:
    """One parser event. level is set on heading events, content on text/code events."""
    kind: EventKind
    level: int | None = None
    content: str = ""


Range = tuple[int, int]


def _tracked_link(state: StateInline, silent: bool) -> bool:
    """CommonMark link rule that also stores the link's source span on its link_open token."""
    start = state.pos
    first = len(state.tokens)
    if not _link_rule(state, silent):
        return False
    if not silent:
        # push() may flush pending text first, so link_open is not always tokens[first]
        for token in state.tokens[first:]:
            if token.type == "link_open":
                token.meta[SRC_RANGE_META] = (start, state.pos)
                break
    return True


def _build_parser() -> MarkdownIt:
    md = MarkdownIt("commonmark").enable(["table", "strikethrough"])
    md.inline.ruler.at("link", _tracked_link)
    return md


# Shared, never mutated after import
_PARSER = _build_parser()


# ---------------------------------------------------------------------------
# Offset helpers
# ---------------------------------------------------------------------------

def _collapse_crlf(text: str) -> tuple[str, list[int]]:
    """Replace \\r\\n with \\n. Returns (text, positions of those \\n in the collapsed text)."""
    if "\r\n" not in text:
        return text, []
    parts = text.split("\r\n")
    marks: list[int] = []
    pos = 0
    for part in parts[:-1]:
        pos += len(part)
        marks.append(pos)
        pos += 1
    return "\n".join(parts), marks


def _to_original(pos: int, marks: list[int]) -> int:
    """Map a collapsed-text index back to the original text."""
    if not marks:
        return pos
    return pos + bisect.bisect_right(marks, pos)


def _to_original_end(pos: int, marks: list[int]) -> int:
    """Like _to_original, for exclusive ends: an end before a collapsed \\n stays before its \\r."""
    if not marks:
        return pos
    return pos + bisect.bisect_left(marks, pos)


def _line_starts(text: str) -> list[int]:
    """Start index of every line."""
    starts = [0]
    pos = text.find("\n")
    while pos != -1:
        starts.append(pos + 1)
        pos = text.find("\n", pos + 1)
    return starts


# ---------------------------------------------------------------------------
# Event stream
# ---------------------------------------------------------------------------

def _locate_lines(content: str, source: str, starts: list[int], first_line: int, search_from: int, end: int) -> list[tuple[int, int]] | None:
    """
    (content offset, source offset) for the start of every line of an inline block.

    Lines of a heading inside a blockquote or list item are not contiguous in the
    source (container markers sit between them), so each one is found on its own
    source line. None when a line cannot be found.
    """
    anchors: list[tuple[int, int]] = []
    cursor = search_from
    offset = 0
    for i, line in enumerate(content.split("\n")):
        line_no = first_line + i
        if line_no < len(starts):
            cursor = max(cursor, starts[line_no])
        pos = source.find(line, cursor, end)
        if pos == -1:
            return None
        anchors.append((offset, pos))
        cursor = pos + len(line)
        offset += len(line) + 1
    return anchors


def _to_source(pos: int, anchors: list[tuple[int, int]]) -> int:
    """Map an offset in the inline content to the collapsed source."""
    i = bisect.bisect_right([a[0] for a in anchors], pos) - 1
    offset, base = anchors[max(i, 0)]
    return base + (pos - offset)


def iter_events(markdown: str) -> Iterator[tuple[Event, Range]]:
    """
    Yield heading events with source ranges, in document order.

    Per heading: HEADING_START, then TEXT / CODE / LINK_START / LINK_END for its inline
    content, then HEADING_END. Text inside a link carries the link's range. Content
    outside headings produces no events.
    """
    source, marks = _collapse_crlf(markdown)
    # the parser rewrites NUL to U+FFFD and a lone \r to \n; doing both first keeps lengths aligned
    source = source.replace("\x00", "\ufffd").replace("\r", "\n")
    tokens = _PARSER.parse(source)
    starts = _line_starts(source)

    for idx, token in enumerate(tokens):
        if token.type != "heading_open" or not token.map:
            continue
        level = int(token.tag[1:])
        first_line, end_line = token.map
        start = starts[first_line] if first_line < len(starts) else len(source)
        end = starts[end_line] if end_line < len(starts) else len(source)
        if end > start and source[end - 1] == "\n":
            end -= 1

        is_atx = token.markup.startswith("#")
        content_from = start
        if is_atx:
            marker = source.find("#", start, end)
            if marker != -1:
                start = marker
                content_from = marker + len(token.markup)

        inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
        if inline is not None and inline.type != "inline":
            inline = None
        anchors = None
        if inline is not None and inline.content:
            anchors = _locate_lines(inline.content, source, starts, first_line, content_from, end)
            if anchors is None:
                log.debug("Inline source not found in heading at %d; link ranges unavailable", start)
            elif not is_atx:
                # setext: the heading starts at its text, after any container markers
                start = anchors[0][1]

        heading_range = (_to_original(start, marks), _to_original_end(end, marks))
        yield Event(EventKind.HEADING_START, level=level), heading_range

        if inline is not None:
            yield from _inline_events(inline, anchors, heading_range, marks)

        yield Event(EventKind.HEADING_END, level=level), heading_range


def _inline_events(inline, anchors: list[tuple[int, int]] | None, heading_range: Range, marks: list[int]) -> Iterator[tuple[Event, Range]]:
    fallback = (heading_range[0], heading_range[0])
    link_range: Range | None = None

    for child in inline.children or []:
        if child.type == "link_open":
            span = child.meta.get(SRC_RANGE_META)
            if anchors and span:
                link_range = (
                    _to_original(_to_source(span[0], anchors), marks),
                    _to_original_end(_to_source(span[1], anchors), marks),
                )
            else:
                link_range = fallback
            yield Event(EventKind.LINK_START), link_range
        elif child.type == "link_close":
            if link_range is not None:
                yield Event(EventKind.LINK_END), link_range
                link_range = None
        elif child.type in ("text", "text_special"):
            yield Event(EventKind.TEXT, content=child.content), link_range or heading_range
        elif child.type == "image":
            # alt text is what a reader sees for the image
            yield Event(EventKind.TEXT, content=child.content), link_range or heading_range
        elif child.type == "code_inline":
            yield Event(EventKind.CODE, content=child.content), link_range or heading_range
