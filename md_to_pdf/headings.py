"""
Heading indexing: anchors for every heading up to a depth, TOC entries for
the ones matching a filter.

The block sequence is a markdown-it token list. A heading is the
``heading_open`` / ``inline`` / ``heading_close`` triple; indexing replaces
each one within ``max_depth`` by a single ``html_block`` token carrying
``<hN id="anchor">text</hN>`` and returns a *new* list, leaving the input
untouched.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Pattern, Sequence, Tuple, Union

from markdown_it.token import Token

LOG = logging.getLogger(__name__)

DEFAULT_TOC_FILTER = "Topic|Summary|Section|Detailed"
DEFAULT_MAX_DEPTH = 4

_NON_WORD_RE = re.compile(r"[^\w]+")


@dataclass(frozen=True)
class TocEntry:
    anchor: str
    level: int
    text: str


@dataclass(frozen=True)
class Heading:
    """A heading found in the token list, with its resolved anchor."""

    index: int  # position of heading_open in the token list
    depth: int
    text: str
    anchor: str


def clean_heading_text(text: str) -> str:
    # textual strip, not markup-aware: every "**" then every "*" goes
    return text.replace("**", "").replace("*", "").strip()


def slugify(text: str) -> str:
    return _NON_WORD_RE.sub("-", text.lower())


def compile_toc_filter(toc_filter: Union[str, Pattern[str], None]) -> Pattern[str]:
    if toc_filter is None:
        toc_filter = DEFAULT_TOC_FILTER
    if isinstance(toc_filter, str):
        return re.compile(toc_filter, re.IGNORECASE)
    return toc_filter


def _unique_anchor(base: str, used: set) -> str:
    anchor, n = base, 0
    while anchor in used:
        n += 1
        anchor = f"{base}-{n}"
    used.add(anchor)
    return anchor


def iter_heading_tokens(tokens: Sequence[Token]) -> Iterator[Tuple[int, int, str]]:
    """Yield ``(index, depth, raw_text)`` for every heading in ``tokens``."""
    for i, tok in enumerate(tokens):
        if tok.type != "heading_open":
            continue
        inline = tokens[i + 1] if i + 1 < len(tokens) else None
        text = inline.content if inline is not None and inline.type == "inline" else ""
        yield i, int(tok.tag[1:]), text


def collect_headings(tokens: Sequence[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> List[Heading]:
    """
    Resolve cleaned text and anchor for each heading with ``depth <= max_depth``.

    Repeated anchors are disambiguated in document order: the first keeps the
    bare slug, later ones get ``-1``, ``-2``, ...
    """
    used: set = set()
    headings = []
    for index, depth, raw in iter_heading_tokens(tokens):
        if depth > max_depth:
            continue
        text = clean_heading_text(raw)
        anchor = _unique_anchor(slugify(text), used)
        headings.append(Heading(index=index, depth=depth, text=text, anchor=anchor))
    return headings


def heading_markup(heading: Heading) -> str:
    return f'<h{heading.depth} id="{heading.anchor}">{heading.text}</h{heading.depth}>'


def anchor_headings(tokens: Sequence[Token], headings: Sequence[Heading]) -> List[Token]:
    """
    Return a copy of ``tokens`` where every heading in ``headings`` is replaced
    by an anchored ``html_block``. TOC membership plays no part here.
    """
    by_index = {h.index: h for h in headings}
    out: List[Token] = []
    i = 0
    while i < len(tokens):
        heading = by_index.get(i)
        if heading is None:
            out.append(tokens[i])
            i += 1
            continue
        opening = tokens[i]
        out.append(Token(
            type="html_block",
            tag="",
            nesting=0,
            map=opening.map,
            level=opening.level,
            block=True,
            content=heading_markup(heading) + "\n",
        ))
        # skip heading_open, inline, heading_close
        i += 3
    return out


def select_toc_entries(headings: Sequence[Heading], toc_filter: Union[str, Pattern[str], None]) -> List[TocEntry]:
    pattern = compile_toc_filter(toc_filter)
    entries = []
    for h in headings:
        if pattern.search(h.text):
            LOG.debug("TOC entry: %s (#%s)", h.text, h.anchor)
            entries.append(TocEntry(anchor=h.anchor, level=h.depth, text=h.text))
        else:
            LOG.debug("Heading not listed: %s", h.text)
    return entries


def index_headings(
    tokens: Sequence[Token],
    toc_filter: Union[str, Pattern[str], None] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Tuple[List[Token], List[TocEntry]]:
    """
    Anchor headings and build the TOC for ``tokens``.

    Returns ``(new_tokens, entries)``. ``tokens`` itself is not modified;
    headings deeper than ``max_depth`` are copied through unchanged.
    """
    headings = collect_headings(tokens, max_depth)
    return anchor_headings(tokens, headings), select_toc_entries(headings, toc_filter)
