"""
Template discovery and structure introspection endpoints.

Every call reads the template directory afresh, so newly added or edited
templates are visible without a restart.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from docgen.app.api.deps import get_catalog, get_pipeline, get_request_id
from docgen.app.registry.catalog import TemplateCatalog
from docgen.app.schemas.templates import TemplateListResponse
from docgen.app.services.pipeline import RenderPipeline

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Templates"])


# ---------------------------------------------------------------------------
# GET /templates
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=TemplateListResponse,
    summary="List available document templates",
)
def list_templates(
    catalog: Annotated[TemplateCatalog, Depends(get_catalog)],
    request_id: Annotated[str, Depends(get_request_id)],
) -> TemplateListResponse:
    templates = catalog.list_templates()

    logger.info(
        "templates_listed",
        extra={"request_id": request_id, "count": len(templates)},
    )

    return TemplateListResponse(
        templates=templates,
        count=len(templates),
        request_id=request_id,
    )


# ---------------------------------------------------------------------------
# GET /templates/{name}
# ---------------------------------------------------------------------------


@router.get(
    "/{template_name}",
    summary="Return a template with its inferred variable structure",
)
def get_template(
    template_name: str,
    catalog: Annotated[TemplateCatalog, Depends(get_catalog)],
    request_id: Annotated[str, Depends(get_request_id)],
) -> dict:
    """
    Return the template source together with the structure inferred from
    its sample document (normal variables, conditionals, arrays, loops)
    and a coarse complexity tier.
    """
    detail = catalog.describe(template_name)

    logger.info(
        "template_described",
        extra={
            "request_id": request_id,
            "template": template_name,
            "complexity": detail.complexity.value,
        },
    )

    return {
        "success": True,
        "template": detail.model_dump(mode="json", by_alias=True),
        "requestId": request_id,
    }


# ---------------------------------------------------------------------------
# GET /templates/{name}/preview
# ---------------------------------------------------------------------------


@router.get(
    "/{template_name}/preview",
    response_class=HTMLResponse,
    summary="Render a template with its sample data as HTML",
)
def preview_template(
    template_name: str,
    pipeline: Annotated[RenderPipeline, Depends(get_pipeline)],
    request_id: Annotated[str, Depends(get_request_id)],
) -> HTMLResponse:
    html = pipeline.preview_sample_html(template_name)

    logger.info(
        "template_previewed",
        extra={"request_id": request_id, "template": template_name},
    )

    return HTMLResponse(
        content=html,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
