"""Table of Contents HTML fragment."""

import html
from typing import Sequence

from .headings import TocEntry

DEFAULT_TOC_TITLE = "Table of Contents"

# entries deeper than this get the indent class
INDENT_AFTER_LEVEL = 3


def render_toc(entries: Sequence[TocEntry], title: str = DEFAULT_TOC_TITLE) -> str:
    """
    Render ``entries`` as a titled link list followed by a page break.

    An empty ``entries`` still yields the title, an empty list and the break;
    leaving the TOC out altogether is the caller's decision.
    """
    lines = [
        '<div class="toc">',
        f"<h1>{html.escape(title)}</h1>",
        "<ul>",
    ]
    for entry in entries:
        cls = ' class="toc-indent"' if entry.level > INDENT_AFTER_LEVEL else ""
        # entry text is already markup (same string as the anchored heading)
        lines.append(f'  <li{cls}><a href="#{entry.anchor}">{entry.text}</a></li>')
    lines += ["</ul>", "</div>", '<div class="page-break"></div>']
    return "\n".join(lines) + "\n"
