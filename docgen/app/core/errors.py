"""
Error taxonomy for the document engine.

Every error raised by the core carries a stable ``kind`` and a
human-readable message. The HTTP layer maps ``kind`` to a status code;
nothing in the core retries on its own.

    InvalidRequest       client-fixable, missing or empty input
    NotFound             unknown template or document id
    RendererUnavailable  headless renderer could not be started
    RenderError          template merge or PDF conversion failed
"""

from typing import Optional


class DocgenError(Exception):
    """Base class for all errors surfaced by the document engine."""

    kind: str = "InternalError"
    status_code: int = 500

    def __init__(self, message: str, *, kind: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class InvalidRequestError(DocgenError):
    """Raised when a required request field is missing or empty."""

    kind = "InvalidRequest"
    status_code = 400


class NotFoundError(DocgenError):
    """Raised for unknown templates and unknown document ids."""

    kind = "NotFound"
    status_code = 404


class RendererUnavailableError(DocgenError):
    """
    Raised when the headless renderer cannot be initialised.

    Indicates an environment or configuration problem (e.g. missing
    browser binary), not a problem with the request.
    """

    kind = "RendererUnavailable"
    status_code = 503


class RenderError(DocgenError):
    """Raised when template merge or PDF conversion fails."""

    kind = "RenderError"
    status_code = 500
