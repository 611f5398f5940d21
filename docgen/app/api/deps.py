"""
Dependency providers.

Collaborators are constructed once in the application lifespan and
stored on ``app.state``; routes receive them through these providers.
"""

import uuid
from typing import Optional

from fastapi import Request

from docgen.app.core.config import Settings
from docgen.app.registry.catalog import TemplateCatalog
from docgen.app.services.pipeline import RenderPipeline
from docgen.app.services.store import DocumentStore

REQUEST_ID_HEADER = "X-Request-ID"


def resolve_request_id(header_value: Optional[str]) -> str:
    """Accept a caller-supplied request id, or generate one."""
    if header_value and len(header_value) <= 128:
        return header_value
    return str(uuid.uuid4())


def get_request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
    return request_id


def get_settings_state(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> TemplateCatalog:
    return request.app.state.catalog


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_pipeline(request: Request) -> RenderPipeline:
    return request.app.state.pipeline
