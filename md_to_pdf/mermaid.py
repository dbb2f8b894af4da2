"""
Mermaid → PNG via Kroki.io

Diagrams are cached on disk by content hash, so re-running a conversion
does not hit the network for diagrams that did not change.
"""

import base64
import hashlib
import html
import logging
import zlib
from pathlib import Path
from typing import Optional

import requests

LOG = logging.getLogger(__name__)

KROKI_URL = "https://kroki.io"
TIMEOUT = 60
# longer sources go through POST; GET URLs get unwieldy
MAX_GET_SOURCE = 2000
# anything smaller is an error page, not a diagram
MIN_PNG_SIZE = 500


class MermaidRenderer:
    def __init__(
        self,
        kroki_url: str = KROKI_URL,
        cache_dir: Optional[Path] = None,
        refresh: bool = False,
        timeout: float = TIMEOUT,
    ):
        self.kroki_url = kroki_url.rstrip("/")
        self.cache_dir = cache_dir
        # refresh: ignore cached PNGs but still write fresh ones
        self.refresh = refresh
        self.timeout = timeout
        self.count = 0

    def _cache_path(self, code: str) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        key = hashlib.sha256(code.encode("utf-8")).hexdigest()[:16]
        return self.cache_dir / f"{key}.png"

    def fetch_png(self, code: str) -> bytes:
        """Render ``code`` remotely. Raises ``requests.RequestException`` on failure."""
        if len(code) <= MAX_GET_SOURCE:
            enc = base64.urlsafe_b64encode(zlib.compress(code.encode("utf-8"), 9)).decode()
            r = requests.get(f"{self.kroki_url}/mermaid/png/{enc}", timeout=self.timeout)
        else:
            r = requests.post(
                f"{self.kroki_url}/mermaid/png",
                json={"diagram_source": code},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        r.raise_for_status()
        return r.content

    def render_png(self, code: str) -> Optional[bytes]:
        path = self._cache_path(code)
        if path is not None and not self.refresh and path.exists() and path.stat().st_size > MIN_PNG_SIZE:
            LOG.debug("Mermaid cache hit: %s", path.name)
            return path.read_bytes()

        LOG.info("Rendering Mermaid diagram via Kroki (%d chars)", len(code))
        try:
            png = self.fetch_png(code)
        except requests.RequestException as exc:
            LOG.warning("Mermaid rendering failed, using code-block fallback: %s", exc)
            return None

        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(png)
        return png

    def render_block(self, code: str) -> str:
        self.count += 1
        code = code.strip()
        png = self.render_png(code)
        if png:
            b64 = base64.b64encode(png).decode()
            return (f'<div class="diagram">'
                    f'<img src="data:image/png;base64,{b64}" alt="Diagram {self.count}"/>'
                    f"</div>\n")
        return f'<div class="diagram-fallback"><pre><code>{html.escape(code)}</code></pre></div>\n'

