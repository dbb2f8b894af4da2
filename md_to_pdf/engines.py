"""
Paginated output engines.

ChromiumEngine drives a local Chrome/Chromium through Playwright and runs
the page's scripts (MathJax), WeasyPrint lays the page out from CSS alone.
Both write the PDF to a path and release everything they start.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .styles import FOOTER_TEMPLATE, HEADER_TEMPLATE, page_css

LOG = logging.getLogger(__name__)

PAGE_FORMATS = ("Letter", "Legal", "Tabloid", "Ledger", "A0", "A1", "A2", "A3", "A4", "A5", "A6")


@dataclass(frozen=True)
class PdfSettings:
    format: str = "A4"
    landscape: bool = False
    margin_top: str = "25.4mm"
    margin_bottom: str = "25.4mm"
    margin_left: str = "25.4mm"
    margin_right: str = "25.4mm"
    header_template: str = HEADER_TEMPLATE
    footer_template: str = FOOTER_TEMPLATE

    @property
    def margin(self) -> dict:
        return {
            "top": self.margin_top,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
            "right": self.margin_right,
        }


class ChromiumEngine:
    name = "chromium"

    def __init__(self, executable_path: Union[str, Path]):
        self.executable_path = str(executable_path)

    def render(self, html: str, output_path: Path, settings: PdfSettings) -> None:
        from playwright.sync_api import sync_playwright

        LOG.info("Launching %s", self.executable_path)
        with sync_playwright() as pw:
            browser = pw.chromium.launch(executable_path=self.executable_path, headless=True)
            try:
                page = browser.new_page()
                # CDN stylesheet and MathJax must finish loading before printing
                page.set_content(html, wait_until="networkidle")
                page.pdf(
                    path=str(output_path),
                    format=settings.format,
                    landscape=settings.landscape,
                    print_background=True,
                    margin=settings.margin,
                    display_header_footer=True,
                    header_template=settings.header_template,
                    footer_template=settings.footer_template,
                )
            finally:
                browser.close()


class WeasyPrintEngine:
    name = "weasyprint"

    def __init__(self, base_url: Optional[Union[str, Path]] = None):
        self.base_url = str(base_url) if base_url is not None else None

    def render(self, html: str, output_path: Path, settings: PdfSettings) -> None:
        from weasyprint import CSS, HTML

        stylesheet = CSS(string=page_css(
            format=settings.format,
            landscape=settings.landscape,
            margin_top=settings.margin_top,
            margin_right=settings.margin_right,
            margin_bottom=settings.margin_bottom,
            margin_left=settings.margin_left,
        ))
        LOG.info("Rendering with WeasyPrint")
        HTML(string=html, base_url=self.base_url).write_pdf(str(output_path), stylesheets=[stylesheet])
