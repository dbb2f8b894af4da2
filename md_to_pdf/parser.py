"""
Markdown tokenizer / renderer.

A parser is built per conversion from a ParserConfig, so two conversions
with different highlighting never share state.
"""

from dataclasses import dataclass
from typing import List, Optional

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from .mermaid import MermaidRenderer

LANG_PREFIX = "hljs language-"

_FORMATTER = HtmlFormatter(nowrap=True)


@dataclass(frozen=True)
class ParserConfig:
    highlight: bool = True
    math: bool = True
    mermaid: Optional[MermaidRenderer] = None


def highlight_code(code: str, lang: str, attrs: str = "") -> str:
    """Pygments-highlight ``code``; unknown or missing languages render as plain text."""
    try:
        lexer = get_lexer_by_name(lang) if lang else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(code, lexer, _FORMATTER)


def _math_source(content: str, options: dict) -> str:
    # keep TeX delimiters so MathJax finds it in the page
    if options.get("display_mode"):
        return escapeHtml(f"\\[{content}\\]")
    return escapeHtml(f"\\({content}\\)")


def _fence_language(token: Token) -> str:
    info = token.info.strip()
    return info.split(maxsplit=1)[0] if info else ""


def build_parser(config: Optional[ParserConfig] = None) -> MarkdownIt:
    config = config or ParserConfig()
    options = {"html": True, "langPrefix": LANG_PREFIX}
    if config.highlight:
        options["highlight"] = highlight_code

    md = MarkdownIt("commonmark", options).enable(["table", "strikethrough"])
    if config.math:
        # allow_digits off: "costs $5 and $10" is prose, not math
        md.use(dollarmath_plugin, allow_digits=False, renderer=_math_source)

    if config.mermaid is not None:
        mermaid = config.mermaid

        def fence(self, tokens, idx, options, env):
            token = tokens[idx]
            if _fence_language(token) == "mermaid":
                return mermaid.render_block(token.content)
            return self.fence(tokens, idx, options, env)

        md.add_render_rule("fence", fence)
    return md


def tokenize(md: MarkdownIt, text: str) -> List[Token]:
    return md.parse(text)


def render_tokens(md: MarkdownIt, tokens: List[Token]) -> str:
    return md.renderer.render(tokens, md.options, {})
