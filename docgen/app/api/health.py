"""
Liveness, detailed health and readiness probes.

None of these probes launch a browser or render anything.
"""

import os
import sys
import time
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from docgen.app.api.deps import get_catalog, get_settings_state, get_store
from docgen.app.core.config import Settings
from docgen.app.registry.catalog import TemplateCatalog
from docgen.app.services.store import DocumentStore

router = APIRouter(tags=["Monitoring"])

SERVICE_NAME = "docgen-service"


def _base_health(request: Request, settings: Settings) -> dict:
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": request.app.version,
        "environment": settings.environment,
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "runtime": f"python {sys.version.split()[0]}",
    }


@router.get("/health", summary="Liveness probe")
def health(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings_state)],
) -> dict:
    return _base_health(request, settings)


@router.get("/health/detailed", summary="Liveness probe with component status")
def health_detailed(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings_state)],
    catalog: Annotated[TemplateCatalog, Depends(get_catalog)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> dict:
    templates = catalog.list_templates()
    templates_ok = catalog.template_dir.is_dir()

    # The documents directory is created on first save.
    documents_dir = store.documents_dir
    documents_ok = not documents_dir.exists() or os.access(documents_dir, os.W_OK)

    payload = _base_health(request, settings)
    payload["components"] = {
        "templates": {
            "status": "healthy" if templates_ok else "error",
            "available": [t.name for t in templates],
            "count": len(templates),
        },
        "documents": {
            "status": "healthy" if documents_ok else "error",
            "path": str(documents_dir),
        },
    }
    return payload


@router.get("/ready", summary="Readiness probe")
def ready(
    catalog: Annotated[TemplateCatalog, Depends(get_catalog)],
) -> JSONResponse:
    if not (catalog.template_dir.is_dir() and os.access(catalog.template_dir, os.R_OK)):
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "reason": "Templates directory not accessible",
            },
        )
    return JSONResponse(content={"status": "ready"})
