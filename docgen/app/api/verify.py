"""
Document verification endpoint.

Returns the exact bytes stored for a document id. Only the id is
required; the original payload is not.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from docgen.app.api.deps import get_request_id, get_store
from docgen.app.services.store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Verification"])


@router.get(
    "/verify/{document_id}",
    summary="Retrieve a previously generated document",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Stored PDF"},
        404: {"description": "Unknown document id"},
    },
)
def verify_document(
    document_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    request_id: Annotated[str, Depends(get_request_id)],
) -> Response:
    content = store.retrieve(document_id)

    logger.info(
        "document_verified",
        extra={"request_id": request_id, "document_id": document_id},
    )

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{document_id}.pdf"'},
    )
