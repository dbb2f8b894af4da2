"""
Markdown file → PDF conversion.

    convert("notes.md", "notes.pdf", ConversionOptions(format="Letter"))

``convert`` never raises: every failure comes back as a ConversionResult
with ``success=False`` and a message fit for a terminal.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Pattern, Tuple, Union

from .chrome import find_chrome_path
from .document import StyleBundle, assemble_document
from .engines import PAGE_FORMATS, ChromiumEngine, PdfSettings, WeasyPrintEngine
from .headings import DEFAULT_MAX_DEPTH, DEFAULT_TOC_FILTER, TocEntry, compile_toc_filter, index_headings
from .mermaid import KROKI_URL, MermaidRenderer
from .parser import ParserConfig, build_parser, render_tokens, tokenize
from .sanitize import sanitize
from .styles import highlight_css
from .toc import DEFAULT_TOC_TITLE, render_toc

LOG = logging.getLogger(__name__)

ENGINES = ("chromium", "weasyprint")
DEFAULT_MARGIN = "25.4mm"
MERMAID_CACHE_DIRNAME = ".mermaid-cache"


@dataclass(frozen=True)
class ConversionOptions:
    chrome_path: Optional[str] = None
    no_toc: bool = False
    toc_title: str = DEFAULT_TOC_TITLE
    toc_filter: Optional[Union[str, Pattern[str]]] = DEFAULT_TOC_FILTER
    max_depth: int = DEFAULT_MAX_DEPTH
    format: str = "A4"
    landscape: bool = False
    margin_top: str = DEFAULT_MARGIN
    margin_bottom: str = DEFAULT_MARGIN
    margin_left: str = DEFAULT_MARGIN
    margin_right: str = DEFAULT_MARGIN
    engine: str = "chromium"
    custom_css: str = ""
    highlight_style: str = "arduino"
    math: bool = True
    mermaid: bool = False
    kroki_url: str = KROKI_URL
    mermaid_cache: bool = True
    keep_html: bool = False

    def pdf_settings(self) -> PdfSettings:
        return PdfSettings(
            format=normalize_format(self.format),
            landscape=self.landscape,
            margin_top=self.margin_top,
            margin_bottom=self.margin_bottom,
            margin_left=self.margin_left,
            margin_right=self.margin_right,
        )


@dataclass(frozen=True)
class ConversionResult:
    success: bool
    message: str
    output_path: Optional[Path] = None

    @classmethod
    def ok(cls, message: str, output_path: Path) -> "ConversionResult":
        return cls(True, message, output_path)

    @classmethod
    def fail(cls, message: str) -> "ConversionResult":
        return cls(False, message)


def normalize_format(value: str) -> str:
    """Canonical page format name (``"a4"`` → ``"A4"``); ValueError if unknown."""
    for name in PAGE_FORMATS:
        if name.lower() == value.strip().lower():
            return name
    raise ValueError(f"Unknown page format {value!r} (expected one of: {', '.join(PAGE_FORMATS)})")


def validate_options(options: ConversionOptions) -> Optional[str]:
    """Return an error message for unusable options, or None."""
    if options.engine not in ENGINES:
        return f"Unknown engine {options.engine!r} (expected one of: {', '.join(ENGINES)})"
    try:
        normalize_format(options.format)
    except ValueError as exc:
        return str(exc)
    if not 1 <= options.max_depth <= 6:
        return f"TOC depth must be between 1 and 6, got {options.max_depth}"
    try:
        compile_toc_filter(options.toc_filter)
    except re.error as exc:
        return f"Invalid TOC filter {options.toc_filter!r}: {exc}"
    return None


def build_html(
    markdown_text: str,
    options: Optional[ConversionOptions] = None,
    mermaid: Optional[MermaidRenderer] = None,
) -> Tuple[str, List[TocEntry]]:
    """
    Run the text pipeline: sanitize, tokenize, index headings, render.

    Returns the complete HTML document and the TOC entries that were listed
    (also when ``no_toc`` leaves them out of the document).
    """
    options = options or ConversionOptions()
    md = build_parser(ParserConfig(math=options.math, mermaid=mermaid))

    tokens = tokenize(md, sanitize(markdown_text))
    tokens, toc = index_headings(tokens, compile_toc_filter(options.toc_filter), options.max_depth)
    LOG.info("TOC: %d entries", len(toc))
    if not toc and not options.no_toc:
        LOG.warning("No heading matched the TOC filter %r", options.toc_filter)

    body_html = render_tokens(md, tokens)
    toc_html = "" if options.no_toc else render_toc(toc, options.toc_title)
    styles = StyleBundle(custom_css=options.custom_css, code_css=highlight_css(options.highlight_style))
    return assemble_document(toc_html, body_html, styles), toc


def _mermaid_renderer(options: ConversionOptions, input_path: Path) -> Optional[MermaidRenderer]:
    if not options.mermaid:
        return None
    return MermaidRenderer(
        kroki_url=options.kroki_url,
        cache_dir=input_path.parent / MERMAID_CACHE_DIRNAME,
        refresh=not options.mermaid_cache,
    )


def convert(
    input_file: Union[str, Path],
    output_file: Union[str, Path],
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    options = options or ConversionOptions()
    input_path = Path(input_file).resolve()
    output_path = Path(output_file).resolve()

    if not input_path.is_file():
        return ConversionResult.fail(f'Input file not found: "{input_file}"')

    try:
        error = validate_options(options)
        if error:
            return ConversionResult.fail(error)

        if options.engine == "chromium":
            chrome_path = options.chrome_path or find_chrome_path()
            if not chrome_path:
                return ConversionResult.fail(
                    "Chrome/Chromium not found. Please install Chrome or specify path with --chrome-path"
                )
            engine = ChromiumEngine(chrome_path)
        else:
            engine = WeasyPrintEngine(base_url=input_path.parent)

        LOG.info("Reading %s", input_path)
        markdown_text = input_path.read_text(encoding="utf-8")
        full_html, _ = build_html(markdown_text, options, _mermaid_renderer(options, input_path))

        if options.keep_html:
            html_path = output_path.with_suffix(".html")
            html_path.write_text(full_html, encoding="utf-8")
            LOG.info("Debug HTML → %s", html_path)
    except Exception as exc:
        LOG.debug("Conversion failed", exc_info=True)
        return ConversionResult.fail(f"Conversion failed: {exc}")

    try:
        engine.render(full_html, output_path, options.pdf_settings())
    except Exception as exc:
        LOG.debug("PDF generation failed", exc_info=True)
        return ConversionResult.fail(f"PDF generation failed: {exc}")

    return ConversionResult.ok(f'PDF generated successfully: "{output_file}"', output_path)
