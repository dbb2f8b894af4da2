import re
from pathlib import Path

import pytest

import md_to_pdf.converter as converter
from md_to_pdf.converter import ConversionOptions, build_html, convert, normalize_format
from md_to_pdf.engines import ChromiumEngine, PdfSettings, WeasyPrintEngine

SAMPLE = "---\ntitle: notes\n---\n### Topic One\n\nSome text.\n\n##### Deep Heading\n\nMore text."


@pytest.fixture
def rendered(monkeypatch):
    """Replace both engines with a recorder that writes a stub PDF."""
    calls = []

    def fake_render(self, html, output_path, settings):
        calls.append({"engine": self, "html": html, "output": output_path, "settings": settings})
        Path(output_path).write_bytes(b"%PDF-1.4 stub")

    monkeypatch.setattr(ChromiumEngine, "render", fake_render)
    monkeypatch.setattr(WeasyPrintEngine, "render", fake_render)
    monkeypatch.setattr(converter, "find_chrome_path", lambda: "/usr/bin/chromium")
    return calls


@pytest.fixture
def notes(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


def test_build_html_end_to_end():
    html, toc = build_html(SAMPLE)

    assert [(e.anchor, e.level, e.text) for e in toc] == [("topic-one", 3, "Topic One")]
    assert '<li><a href="#topic-one">Topic One</a></li>' in html
    assert '<h3 id="topic-one">Topic One</h3>' in html
    assert "<h5>Deep Heading</h5>" in html
    assert "title: notes" not in html
    assert html.index('class="page-break"') < html.index('<h3 id="topic-one">')


def test_build_html_without_toc():
    html, toc = build_html(SAMPLE, ConversionOptions(no_toc=True))
    assert len(toc) == 1
    assert 'class="toc"' not in html
    assert 'class="page-break"' not in html
    assert '<h3 id="topic-one">' in html


def test_build_html_empty_document_keeps_toc_shell():
    html, toc = build_html("Just text.\n")
    assert toc == []
    assert "<h1>Table of Contents</h1>" in html
    assert "<ul>\n</ul>" in html


def test_build_html_custom_title_filter_and_css():
    options = ConversionOptions(toc_title="Contents", toc_filter="intro", custom_css=".x { color: red; }")
    html, toc = build_html("# Intro\n\n# Topic\n", options)
    assert [e.text for e in toc] == ["Intro"]
    assert "<h1>Contents</h1>" in html
    assert ".x { color: red; }" in html


def test_build_html_max_depth():
    html, toc = build_html("# Topic A\n\n## Topic B\n", ConversionOptions(max_depth=1))
    assert [e.text for e in toc] == ["Topic A"]
    assert "<h2>Topic B</h2>" in html


def test_convert_success(rendered, notes, tmp_path):
    out = tmp_path / "notes.pdf"
    result = convert(notes, out, ConversionOptions(format="letter", landscape=True, margin_top="10mm"))

    assert result.success
    assert result.output_path == out.resolve()
    assert result.message == f'PDF generated successfully: "{out}"'
    assert out.read_bytes().startswith(b"%PDF")

    call = rendered[0]
    assert isinstance(call["engine"], ChromiumEngine)
    assert call["engine"].executable_path == "/usr/bin/chromium"
    assert call["settings"] == PdfSettings(format="Letter", landscape=True, margin_top="10mm")
    assert "pageNumber" in call["settings"].footer_template
    assert '<h3 id="topic-one">' in call["html"]


def test_convert_missing_input(rendered, tmp_path):
    result = convert(tmp_path / "nope.md", tmp_path / "nope.pdf")
    assert not result.success
    assert result.message == f'Input file not found: "{tmp_path / "nope.md"}"'
    assert result.output_path is None
    assert rendered == []


def test_convert_without_chrome(rendered, notes, monkeypatch):
    monkeypatch.setattr(converter, "find_chrome_path", lambda: None)
    result = convert(notes, notes.with_suffix(".pdf"))
    assert not result.success
    assert "Chrome/Chromium not found" in result.message
    assert rendered == []


def test_explicit_chrome_path_skips_detection(rendered, notes, monkeypatch):
    def detect():
        raise AssertionError("should not search")

    monkeypatch.setattr(converter, "find_chrome_path", detect)
    result = convert(notes, notes.with_suffix(".pdf"), ConversionOptions(chrome_path="/opt/chrome"))
    assert result.success
    assert rendered[0]["engine"].executable_path == "/opt/chrome"


def test_weasyprint_engine_needs_no_chrome(rendered, notes, monkeypatch):
    monkeypatch.setattr(converter, "find_chrome_path", lambda: None)
    result = convert(notes, notes.with_suffix(".pdf"), ConversionOptions(engine="weasyprint"))
    assert result.success
    engine = rendered[0]["engine"]
    assert isinstance(engine, WeasyPrintEngine)
    assert engine.base_url == str(notes.parent.resolve())


def test_renderer_errors_become_failures(notes, monkeypatch):
    def crash(self, html, output_path, settings):
        raise RuntimeError("browser crashed")

    monkeypatch.setattr(converter, "find_chrome_path", lambda: "/usr/bin/chromium")
    monkeypatch.setattr(ChromiumEngine, "render", crash)
    result = convert(notes, notes.with_suffix(".pdf"))
    assert not result.success
    assert result.message == "PDF generation failed: browser crashed"


def test_unreadable_input_becomes_failure(rendered, tmp_path):
    bad = tmp_path / "bad.md"
    bad.write_bytes(b"\xff\xfe\xfa not utf-8")
    result = convert(bad, tmp_path / "bad.pdf")
    assert not result.success
    assert result.message.startswith("Conversion failed:")


def test_missing_toc_filter_falls_back_to_default(rendered, notes):
    result = convert(notes, notes.with_suffix(".pdf"), ConversionOptions(toc_filter=None))
    assert result.success, result.message
    assert '<li><a href="#topic-one">Topic One</a></li>' in rendered[0]["html"]


def test_compiled_toc_filter_is_accepted(rendered, notes):
    options = ConversionOptions(toc_filter=re.compile("deep", re.IGNORECASE), max_depth=5)
    result = convert(notes, notes.with_suffix(".pdf"), options)
    assert result.success, result.message
    html = rendered[0]["html"]
    assert '<li class="toc-indent"><a href="#deep-heading">Deep Heading</a></li>' in html
    assert 'href="#topic-one"' not in html


@pytest.mark.parametrize(
    "options, fragment",
    [
        (ConversionOptions(format="A9"), "Unknown page format"),
        (ConversionOptions(engine="wkhtmltopdf"), "Unknown engine"),
        (ConversionOptions(toc_filter="(unclosed"), "Invalid TOC filter"),
        (ConversionOptions(max_depth=7), "TOC depth"),
    ],
)
def test_invalid_options_are_rejected(rendered, notes, options, fragment):
    result = convert(notes, notes.with_suffix(".pdf"), options)
    assert not result.success
    assert fragment in result.message
    assert rendered == []


def test_keep_html_writes_debug_copy(rendered, notes, tmp_path):
    out = tmp_path / "notes.pdf"
    convert(notes, out, ConversionOptions(keep_html=True))
    assert (tmp_path / "notes.html").read_text(encoding="utf-8") == rendered[0]["html"]


def test_mermaid_cache_lives_next_to_the_input(rendered, notes, monkeypatch):
    seen = {}

    def fake_render_block(self, code):
        seen["cache_dir"] = self.cache_dir
        seen["refresh"] = self.refresh
        return '<div class="diagram">ok</div>\n'

    monkeypatch.setattr(converter.MermaidRenderer, "render_block", fake_render_block)
    notes.write_text("```mermaid\ngraph TD; A-->B\n```\n", encoding="utf-8")
    result = convert(notes, notes.with_suffix(".pdf"), ConversionOptions(mermaid=True, mermaid_cache=False))

    assert result.success
    assert seen == {"cache_dir": notes.parent.resolve() / ".mermaid-cache", "refresh": True}
    assert '<div class="diagram">ok</div>' in rendered[0]["html"]


def test_normalize_format():
    assert normalize_format(" a4 ") == "A4"
    assert normalize_format("TABLOID") == "Tabloid"
    with pytest.raises(ValueError):
        normalize_format("B5")
