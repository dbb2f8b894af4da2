"""Raw markdown clean-up applied before tokenizing."""

import re

# zero-width space / non-joiner / joiner and the byte-order mark
_INVISIBLE_RE = re.compile("[\u200b-\u200d\ufeff]")

# only a bare "&" with a single space on each side; "&&", "a&b" etc. pass through
_SPACED_AMP_RE = re.compile(r"(?<= )&(?= )")

# one leading block delimited by "---" lines, non-greedy, anchored at the very start
_FRONT_MATTER_RE = re.compile(r"\A---\r?\n(?:.*?\r?\n)?---(?:\r?\n|\Z)", re.DOTALL)


def strip_invisible(text: str) -> str:
    return _INVISIBLE_RE.sub("", text)


def escape_spaced_ampersands(text: str) -> str:
    return _SPACED_AMP_RE.sub("&amp;", text)


def strip_front_matter(text: str) -> str:
    return _FRONT_MATTER_RE.sub("", text, count=1)


def sanitize(raw: str) -> str:
    """
    Clean raw markdown in a fixed order:

      1. drop zero-width characters and BOMs (they corrupt anchor slugs)
      2. escape " & " as " &amp; "
      3. remove a leading ``---`` front-matter block, once

    An unterminated front-matter block is left as-is.
    """
    text = strip_invisible(raw)
    text = escape_spaced_ampersands(text)
    return strip_front_matter(text)
