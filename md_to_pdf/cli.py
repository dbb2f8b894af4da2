"""
md-to-pdf command line.

Usage:
  md-to-pdf notes.md                      Convert notes.md to notes.pdf
  md-to-pdf notes.md -o output.pdf        Specify output filename
  md-to-pdf notes.md --no-toc             Skip Table of Contents
  md-to-pdf notes.md --format Letter -l   Letter paper, landscape
  md-to-pdf notes.md --engine weasyprint  No Chrome needed (no MathJax)
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .chrome import find_chrome_path
from .converter import DEFAULT_MARGIN, ENGINES, ConversionOptions, convert
from .engines import PAGE_FORMATS
from .headings import DEFAULT_MAX_DEPTH, DEFAULT_TOC_FILTER
from .mermaid import KROKI_URL
from .toc import DEFAULT_TOC_TITLE


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"

    @staticmethod
    def disable():
        """Disable colors for non-TTY environments"""
        for attr in dir(Colors):
            if not attr.startswith("_") and attr.isupper():
                setattr(Colors, attr, "")


def _rule() -> str:
    return f"{Colors.GRAY}{'─' * 50}{Colors.RESET}"


def default_output_path(input_file: str) -> str:
    return re.sub(r"\.md$", "", input_file, flags=re.IGNORECASE) + ".pdf"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="md-to-pdf",
        description="Convert Markdown files to beautifully formatted PDF documents.",
        epilog=f"Supported formats: {', '.join(PAGE_FORMATS)}. "
               "Chrome/Chromium is auto-detected; use --chrome-path if detection fails.",
    )
    p.add_argument("input", help="Input markdown file path")
    p.add_argument("-o", "--output", help="Output PDF file path (default: input with .pdf)")
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--chrome-path", help="Custom Chrome/Chromium executable path")
    p.add_argument("--engine", choices=ENGINES, default="chromium", help="PDF engine (default: chromium)")

    toc = p.add_argument_group("table of contents")
    toc.add_argument("--no-toc", action="store_true", help="Disable Table of Contents generation")
    toc.add_argument("--toc-title", default=DEFAULT_TOC_TITLE, help="Table of Contents title")
    toc.add_argument("--toc-filter", default=DEFAULT_TOC_FILTER, help="Regex selecting TOC headings (case-insensitive)")
    toc.add_argument("--toc-depth", type=int, default=DEFAULT_MAX_DEPTH,
                     help="Deepest heading level that gets an anchor (default: %(default)s)")

    page = p.add_argument_group("page")
    page.add_argument("-f", "--format", default="A4", help="Page format (default: A4)")
    page.add_argument("-l", "--landscape", action="store_true", help="Use landscape orientation")
    page.add_argument("--margin-top", default=DEFAULT_MARGIN, help="Top margin (e.g. 25.4mm)")
    page.add_argument("--margin-bottom", default=DEFAULT_MARGIN, help="Bottom margin")
    page.add_argument("--margin-left", default=DEFAULT_MARGIN, help="Left margin")
    page.add_argument("--margin-right", default=DEFAULT_MARGIN, help="Right margin")

    content = p.add_argument_group("content")
    content.add_argument("--css", action="append", default=[], metavar="FILE", help="Additional CSS file (repeatable)")
    content.add_argument("--highlight-style", default="arduino", help="Pygments style for code blocks")
    content.add_argument("--no-math", action="store_true", help="Leave $...$ to the markdown parser")
    content.add_argument("--mermaid", action="store_true", help="Render ```mermaid blocks via Kroki")
    content.add_argument("--kroki-url", default=KROKI_URL, help="Kroki server (default: %(default)s)")
    content.add_argument("--no-cache", action="store_true", help="Force re-render of Mermaid diagrams")
    content.add_argument("--html", action="store_true", help="Also write the intermediate HTML next to the PDF")

    p.add_argument("--verbose", action="store_true", help="Progress logs")
    p.add_argument("--debug", action="store_true", help="Debug logs")
    return p


def setup_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def options_from_args(args: argparse.Namespace) -> ConversionOptions:
    custom_css = "\n\n".join(Path(f).read_text(encoding="utf-8") for f in args.css)
    return ConversionOptions(
        chrome_path=args.chrome_path,
        no_toc=args.no_toc,
        toc_title=args.toc_title,
        toc_filter=args.toc_filter,
        max_depth=args.toc_depth,
        format=args.format,
        landscape=args.landscape,
        margin_top=args.margin_top,
        margin_bottom=args.margin_bottom,
        margin_left=args.margin_left,
        margin_right=args.margin_right,
        engine=args.engine,
        custom_css=custom_css,
        highlight_style=args.highlight_style,
        math=not args.no_math,
        mermaid=args.mermaid,
        kroki_url=args.kroki_url,
        mermaid_cache=not args.no_cache,
        keep_html=args.html,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not sys.stdout.isatty():
        Colors.disable()
    setup_logging(args.verbose, args.debug)

    output_file = args.output or default_output_path(args.input)

    print(f"{Colors.CYAN}🚀 md-to-pdf v{__version__}{Colors.RESET}")
    print(_rule())

    if args.engine == "chromium":
        chrome_path = args.chrome_path or find_chrome_path()
        if chrome_path:
            print(f"{Colors.GREEN}✓{Colors.RESET} Chrome found: {Colors.GRAY}{chrome_path}{Colors.RESET}")
        else:
            print(f"{Colors.RED}✗{Colors.RESET} Chrome not found")

    landscape = " (landscape)" if args.landscape else ""
    print(f"{Colors.BLUE}→{Colors.RESET} Input:  {args.input}")
    print(f"{Colors.BLUE}→{Colors.RESET} Output: {output_file}")
    print(f"{Colors.BLUE}→{Colors.RESET} Format: {args.format}{landscape}")
    print(f"{Colors.BLUE}→{Colors.RESET} TOC:    {'Disabled' if args.no_toc else 'Enabled'}")
    print(_rule())

    if not Path(args.input).exists():
        print(f"{Colors.RED}✗  File not found: {args.input}{Colors.RESET}")
        return 1

    try:
        options = options_from_args(args)
    except OSError as exc:
        print(f"{Colors.RED}❌ Error: cannot read stylesheet: {exc}{Colors.RESET}")
        return 1

    if options.mermaid and args.no_cache:
        print("🗑  Re-rendering all diagrams")

    print(f"{Colors.YELLOW}⏳ Converting...{Colors.RESET}")
    result = convert(args.input, output_file, options)

    if result.success:
        print(f"{Colors.GREEN}✅ {result.message}{Colors.RESET}")
        return 0
    print(f"{Colors.RED}❌ Error: {result.message}{Colors.RESET}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
