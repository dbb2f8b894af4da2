import base64

import pytest
import requests

from md_to_pdf.mermaid import MermaidRenderer

PNG = b"\x89PNG" + b"0" * 600


class _Response:
    def __init__(self, content=PNG, status=200):
        self.content = content
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")


def test_short_sources_use_get(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        return _Response()

    monkeypatch.setattr(requests, "get", fake_get)
    png = MermaidRenderer(kroki_url="https://kroki.example/").fetch_png("graph TD; A-->B")
    assert png == PNG
    assert calls[0].startswith("https://kroki.example/mermaid/png/")


def test_long_sources_use_post(monkeypatch):
    sent = {}

    def fake_post(url, json, headers, timeout):
        sent.update(url=url, json=json)
        return _Response()

    monkeypatch.setattr(requests, "post", fake_post)
    code = "graph TD;\n" + "A-->B\n" * 500
    MermaidRenderer().fetch_png(code)
    assert sent["url"] == "https://kroki.io/mermaid/png"
    assert sent["json"] == {"diagram_source": code}


def test_rendered_diagram_is_embedded_and_cached(monkeypatch, tmp_path):
    monkeypatch.setattr(requests, "get", lambda url, timeout: _Response())
    renderer = MermaidRenderer(cache_dir=tmp_path / "cache")

    html = renderer.render_block("graph TD; A-->B\n")

    assert html.startswith('<div class="diagram"><img src="data:image/png;base64,')
    assert base64.b64encode(PNG).decode() in html
    assert 'alt="Diagram 1"' in html
    assert len(list((tmp_path / "cache").glob("*.png"))) == 1


def test_cache_hit_skips_the_network(monkeypatch, tmp_path):
    monkeypatch.setattr(requests, "get", lambda url, timeout: _Response())
    MermaidRenderer(cache_dir=tmp_path).render_png("graph LR; X-->Y")

    def offline(*args, **kwargs):
        raise AssertionError("network used")

    monkeypatch.setattr(requests, "get", offline)
    assert MermaidRenderer(cache_dir=tmp_path).render_png("graph LR; X-->Y") == PNG


def test_refresh_ignores_cached_png(monkeypatch, tmp_path):
    monkeypatch.setattr(requests, "get", lambda url, timeout: _Response())
    MermaidRenderer(cache_dir=tmp_path).render_png("graph LR; X-->Y")

    fresh = b"\x89PNG" + b"1" * 600
    monkeypatch.setattr(requests, "get", lambda url, timeout: _Response(content=fresh))
    assert MermaidRenderer(cache_dir=tmp_path, refresh=True).render_png("graph LR; X-->Y") == fresh


@pytest.mark.parametrize("error", [requests.ConnectionError("offline"), requests.HTTPError("400")])
def test_failure_falls_back_to_escaped_code(monkeypatch, error):
    def broken(url, timeout):
        raise error

    monkeypatch.setattr(requests, "get", broken)
    html = MermaidRenderer().render_block("graph TD; A-->B<br>\n")
    assert html == '<div class="diagram-fallback"><pre><code>graph TD; A--&gt;B&lt;br&gt;</code></pre></div>\n'
