"""
Document render pipeline.

Two execution modes are supported:

    preview   Jinja2 render → headless PDF conversion → return bytes.
              No document id, no verification artifacts, no persistence.

    final     derive document id → inject verification URL and QR code →
              Jinja2 render → headless PDF conversion → bind id into XMP →
              persist → return bytes and document id.

The document id is derived from the caller payload BEFORE augmentation,
so identical inputs always map to the same id. Regenerating re-renders
and overwrites the stored artifact.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional

import anyio

from docgen.app.core.config import Settings
from docgen.app.core.errors import InvalidRequestError, NotFoundError, RenderError
from docgen.app.registry.catalog import TemplateCatalog
from docgen.app.services.browser import PdfRenderer
from docgen.app.services.identity import derive_document_id
from docgen.app.services.pdf_postprocess import (
    PdfPostProcessError,
    bind_document_metadata,
)
from docgen.app.services.qr import QRCodeError, verification_qr_data_uri
from docgen.app.services.store import DocumentStore
from docgen.app.services.templating import HtmlTemplateRenderer

logger = logging.getLogger(__name__)

RenderMode = Literal["preview", "final"]

# Keys injected into the render context in final mode. They always win
# over caller-supplied keys of the same name.
DOCUMENT_ID_KEY = "document_id"
VERIFICATION_URL_KEY = "verification_url"
QR_CODE_KEY = "qr_code"


@dataclass(frozen=True)
class RenderedHtml:
    html: str
    document_id: Optional[str] = None
    verification_url: Optional[str] = None


@dataclass(frozen=True)
class RenderResult:
    content: bytes
    document_id: Optional[str] = None
    verification_url: Optional[str] = None


class RenderPipeline:
    def __init__(
        self,
        *,
        settings: Settings,
        catalog: TemplateCatalog,
        renderer: PdfRenderer,
        store: DocumentStore,
    ) -> None:
        self.settings = settings
        self.catalog = catalog
        self.renderer = renderer
        self.store = store
        self.templates = HtmlTemplateRenderer(
            catalog.template_dir,
            strict_undefined=settings.strict_undefined,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def verification_url(self, document_id: str) -> str:
        return f"{self.settings.public_base_url}/api/verify/{document_id}"

    def _check_template(self, template_name: Optional[str]) -> str:
        if template_name is None or not template_name.strip():
            raise InvalidRequestError("The 'template' parameter is required.")
        if not self.catalog.exists(template_name):
            raise NotFoundError(f"Template '{template_name}' not found.")
        return template_name

    def _augment(
        self,
        payload: Mapping[str, Any],
        document_id: str,
        verification_url: str,
    ) -> Dict[str, Any]:
        try:
            qr_code = verification_qr_data_uri(verification_url)
        except QRCodeError as exc:
            raise RenderError(str(exc)) from exc

        context = dict(payload)
        context[DOCUMENT_ID_KEY] = document_id
        context[VERIFICATION_URL_KEY] = verification_url
        context[QR_CODE_KEY] = qr_code
        return context

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_html(
        self,
        template_name: Optional[str],
        payload: Mapping[str, Any],
        mode: RenderMode = "final",
    ) -> RenderedHtml:
        """Validate, augment (final mode) and merge into markup."""
        template_name = self._check_template(template_name)

        document_id = None
        verification_url = None
        context: Mapping[str, Any] = payload

        if mode == "final":
            document_id = derive_document_id(payload)
            verification_url = self.verification_url(document_id)
            context = self._augment(payload, document_id, verification_url)

        source = self.catalog.load_source(template_name)
        html = self.templates.render(source, context, template_name=template_name)

        return RenderedHtml(
            html=html,
            document_id=document_id,
            verification_url=verification_url,
        )

    def preview_sample_html(self, template_name: Optional[str]) -> str:
        """Render a template with its own sample document, in preview mode."""
        template_name = self._check_template(template_name)
        sample = self.catalog.load_sample(template_name)
        return self.render_html(template_name, sample, mode="preview").html

    def _finalize(self, rendered: RenderedHtml, content: bytes) -> bytes:
        try:
            content = bind_document_metadata(
                pdf_bytes=content,
                document_id=rendered.document_id,
                verification_url=rendered.verification_url,
            )
        except PdfPostProcessError as exc:
            raise RenderError(str(exc)) from exc

        self.store.save(rendered.document_id, content)
        return content

    async def _convert(self, html: str, template_name: str) -> bytes:
        timeout = self.settings.render_timeout_seconds
        try:
            return await asyncio.wait_for(self.renderer.render_pdf(html), timeout)
        except asyncio.TimeoutError as exc:
            raise RenderError(
                f"PDF conversion of template '{template_name}' "
                f"exceeded {timeout:g}s."
            ) from exc

    async def render(
        self,
        template_name: Optional[str],
        payload: Mapping[str, Any],
        mode: RenderMode = "final",
    ) -> RenderResult:
        """
        Render a template to PDF.

        Raises:
            InvalidRequestError: template name missing or blank.
            NotFoundError: template does not exist.
            RendererUnavailableError: headless browser could not start.
            RenderError: merge, conversion or timeout failure.
        """
        started = time.monotonic()

        # File reads, Jinja2, QR encoding, pikepdf and the store write all
        # block; they run in worker threads so concurrent renders keep going.
        rendered = await anyio.to_thread.run_sync(
            self.render_html, template_name, payload, mode
        )
        content = await self._convert(rendered.html, template_name)

        if mode == "final":
            content = await anyio.to_thread.run_sync(self._finalize, rendered, content)

        logger.info(
            "pdf_generated",
            extra={
                "template": template_name,
                "mode": mode,
                "document_id": rendered.document_id,
                "duration_ms": round((time.monotonic() - started) * 1000),
                "bytes": len(content),
            },
        )

        return RenderResult(
            content=content,
            document_id=rendered.document_id,
            verification_url=rendered.verification_url,
        )
