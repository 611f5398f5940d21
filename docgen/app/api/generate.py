"""
Document generation endpoints.

Clients supply the template name and a JSON payload. Two execution modes
are supported via the ?mode query parameter:

    preview   render → PDF. Nothing is stored and no document id exists.

    final     derive document id → inject verification URL and QR code →
              render → PDF → persist. The id is returned in the
              X-Document-Id response header and the stored artifact is
              retrievable from /api/verify/{document_id}.
"""

import logging
from typing import Annotated, Any, Dict, Literal, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import HTMLResponse, Response

from docgen.app.api.deps import get_pipeline, get_request_id
from docgen.app.services.pipeline import RenderPipeline

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Generation"])

ModeQuery = Annotated[
    Literal["preview", "final"],
    Query(
        description=(
            "Execution mode. 'preview' returns an ephemeral document. "
            "'final' assigns a document id and stores the artifact."
        ),
    ),
]

TemplateQuery = Annotated[
    Optional[str],
    Query(alias="template", description="Template name"),
]


@router.post(
    "/pdf/view",
    summary="Generate a PDF document",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        400: {"description": "Missing template parameter"},
        404: {"description": "Unknown template"},
        503: {"description": "Headless renderer unavailable"},
    },
)
async def generate_pdf(
    pipeline: Annotated[RenderPipeline, Depends(get_pipeline)],
    request_id: Annotated[str, Depends(get_request_id)],
    template_name: TemplateQuery = None,
    mode: ModeQuery = "final",
    payload: Dict[str, Any] = Body(default_factory=dict),
) -> Response:
    logger.info(
        "pdf_requested",
        extra={"request_id": request_id, "template": template_name, "mode": mode},
    )

    result = await pipeline.render(template_name, payload, mode)

    headers = {
        "Content-Disposition": f'inline; filename="{template_name}-{mode}.pdf"',
        "X-Generation-Mode": mode,
    }
    if result.document_id is not None:
        headers["X-Document-Id"] = result.document_id
        headers["X-Verification-Url"] = result.verification_url

    return Response(
        content=result.content,
        media_type="application/pdf",
        headers=headers,
    )


@router.post(
    "/html/view",
    response_class=HTMLResponse,
    summary="Render a template to HTML without PDF conversion",
)
def generate_html(
    pipeline: Annotated[RenderPipeline, Depends(get_pipeline)],
    request_id: Annotated[str, Depends(get_request_id)],
    template_name: TemplateQuery = None,
    mode: ModeQuery = "preview",
    payload: Dict[str, Any] = Body(default_factory=dict),
) -> HTMLResponse:
    """
    Final mode injects the same verification fields as the PDF route but
    does not persist anything; only PDF generation stores documents.
    """
    rendered = pipeline.render_html(template_name, payload, mode)

    logger.info(
        "html_rendered",
        extra={"request_id": request_id, "template": template_name, "mode": mode},
    )

    headers = {"Cache-Control": "no-cache, no-store, must-revalidate"}
    if rendered.document_id is not None:
        headers["X-Document-Id"] = rendered.document_id

    return HTMLResponse(content=rendered.html, headers=headers)
