"""Full HTML document assembly."""

from dataclasses import dataclass
from typing import Optional

from .styles import DEFAULT_CSS, HIGHLIGHT_THEME_URL, MATHJAX_CONFIG, MATHJAX_URL


@dataclass(frozen=True)
class StyleBundle:
    """Everything that goes into <head>: stylesheets and script references."""

    default_css: str = DEFAULT_CSS
    custom_css: str = ""
    code_css: str = ""
    highlight_theme_url: str = HIGHLIGHT_THEME_URL
    mathjax_url: str = MATHJAX_URL
    mathjax_config: str = MATHJAX_CONFIG

    @property
    def css(self) -> str:
        return "\n".join(part for part in (self.default_css, self.code_css, self.custom_css) if part)


def assemble_document(toc_html: str, body_html: str, styles: Optional[StyleBundle] = None) -> str:
    """
    Wrap the TOC and body fragments in a complete HTML document.

    Both fragments are trusted, pre-rendered markup and go in verbatim, TOC
    first.
    """
    styles = styles or StyleBundle()
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<link rel="stylesheet" href="{styles.highlight_theme_url}">
<script>
{styles.mathjax_config}
</script>
<script id="MathJax-script" async src="{styles.mathjax_url}"></script>
<style>
{styles.css}
</style>
</head>
<body>
{toc_html}
{body_html}
</body>
</html>
"""
