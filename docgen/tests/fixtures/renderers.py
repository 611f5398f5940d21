"""
In-process PdfRenderer implementations for tests.

They satisfy the renderer protocol without launching a browser.
"""

import asyncio
import hashlib
from typing import List

from docgen.app.core.errors import RendererUnavailableError
from docgen.tests.fixtures.pdf_factory import minimal_valid_pdf

SLOW_MARKER = "<!-- slow-render -->"


def html_fingerprint(html: str) -> str:
    return hashlib.sha256(html.encode("utf-8")).hexdigest()


class FakePdfRenderer:
    """
    Returns a minimal PDF whose /Subject is the SHA-256 of the HTML.

    HTML containing SLOW_MARKER sleeps for ``slow_seconds`` first, which
    lets tests force the pipeline timeout for a single template.
    """

    def __init__(self, slow_seconds: float = 30.0) -> None:
        self.slow_seconds = slow_seconds
        self.calls: List[str] = []
        self.released = 0

    async def render_pdf(self, html: str) -> bytes:
        self.calls.append(html)
        try:
            if SLOW_MARKER in html:
                await asyncio.sleep(self.slow_seconds)
            return minimal_valid_pdf(subject=html_fingerprint(html))
        finally:
            self.released += 1


class UnavailableRenderer:
    async def render_pdf(self, html: str) -> bytes:
        raise RendererUnavailableError("Chromium executable not found")
