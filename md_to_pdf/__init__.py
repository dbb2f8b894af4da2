"""Markdown → paginated PDF with a filterable Table of Contents."""

__version__ = "1.0.0"

from .converter import ConversionOptions, ConversionResult, build_html, convert
from .headings import TocEntry, index_headings
from .sanitize import sanitize

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "TocEntry",
    "build_html",
    "convert",
    "index_headings",
    "sanitize",
]
