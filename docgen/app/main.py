"""
FastAPI entrypoint for the document engine.

Collaborators (settings, catalog, store, renderer, pipeline) are built
once per application and passed explicitly; nothing in the core reads
module-level globals.
"""

import logging
import time
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from docgen.app.api.deps import REQUEST_ID_HEADER, get_request_id
from docgen.app.api.generate import router as generate_router
from docgen.app.api.health import router as health_router
from docgen.app.api.templates import router as templates_router
from docgen.app.api.verify import router as verify_router
from docgen.app.core.config import Settings, get_settings
from docgen.app.core.errors import DocgenError, InvalidRequestError, NotFoundError
from docgen.app.core.logging import configure_logging
from docgen.app.registry.catalog import TemplateCatalog
from docgen.app.services.browser import PdfRenderer, PlaywrightPdfRenderer
from docgen.app.services.pipeline import RenderPipeline
from docgen.app.services.store import DocumentStore

logger = logging.getLogger("docgen.main")


def get_app_version() -> str:
    try:
        return version("docgen-service")
    except PackageNotFoundError:
        return "1.0.0"


def _error_response(
    request: Request,
    status_code: int,
    kind: str,
    message: str,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    request_id = get_request_id(request)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "kind": kind,
            "message": message,
            "requestId": request_id,
        },
        headers={**(headers or {}), REQUEST_ID_HEADER: request_id},
    )


def create_app(
    settings: Optional[Settings] = None,
    renderer: Optional[PdfRenderer] = None,
) -> FastAPI:
    """
    Application factory.

    ``renderer`` defaults to the Playwright/Chromium renderer; tests pass
    an in-process implementation of the PdfRenderer protocol instead.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        catalog = TemplateCatalog(settings.template_dir)
        store = DocumentStore(settings.documents_dir)

        app.state.settings = settings
        app.state.catalog = catalog
        app.state.store = store
        app.state.pipeline = RenderPipeline(
            settings=settings,
            catalog=catalog,
            renderer=renderer or PlaywrightPdfRenderer(settings),
            store=store,
        )
        app.state.started_at = time.monotonic()

        if not catalog.template_dir.is_dir():
            logger.warning(
                "template_dir_missing",
                extra={"template_dir": str(catalog.template_dir)},
            )

        logger.info(
            "docgen_startup",
            extra={
                "version": app.version,
                "environment": settings.environment,
                "template_dir": str(settings.template_dir),
            },
        )
        yield
        logger.info("docgen_shutdown")

    app = FastAPI(
        title="docgen-service",
        description="Template-driven HTML and PDF document generation",
        version=get_app_version(),
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Document-Id", "X-Verification-Url", REQUEST_ID_HEADER],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = get_request_id(request)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(DocgenError)
    async def docgen_error_handler(request: Request, exc: DocgenError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "request_failed",
            extra={
                "request_id": get_request_id(request),
                "kind": exc.kind,
                "error": exc.message,
                "path": request.url.path,
            },
        )
        return _error_response(request, exc.status_code, exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.warning(
            "request_invalid",
            extra={
                "request_id": get_request_id(request),
                "error": message,
                "path": request.url.path,
            },
        )
        return _error_response(request, 400, InvalidRequestError.kind, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        kind = NotFoundError.kind if exc.status_code == 404 else "HTTPError"
        return _error_response(
            request, exc.status_code, kind, str(exc.detail), headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "request_crashed",
            extra={"request_id": get_request_id(request), "path": request.url.path},
        )
        return _error_response(
            request, 500, "InternalError", "Internal server error. See logs for details."
        )

    app.include_router(health_router, prefix="/api")
    app.include_router(templates_router, prefix="/api/templates")
    app.include_router(generate_router, prefix="/api")
    app.include_router(verify_router, prefix="/api")

    if settings.assets_dir.is_dir():
        app.mount("/assets", StaticFiles(directory=settings.assets_dir), name="assets")

    return app


app = create_app()
