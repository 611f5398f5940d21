"""
Filesystem document store.

Final documents are persisted as ``<documents_dir>/<document_id>.pdf``.
Writes overwrite any existing artifact with the same id; there is no
locking because ids are content digests.
"""

import logging
import os
import tempfile
from pathlib import Path

from docgen.app.core.errors import NotFoundError
from docgen.app.services.identity import is_valid_document_id

logger = logging.getLogger(__name__)


class DocumentStore:
    def __init__(self, documents_dir: Path) -> None:
        self.documents_dir = Path(documents_dir)

    def _path_for(self, document_id: str) -> Path:
        if not is_valid_document_id(document_id):
            raise NotFoundError(f"Document '{document_id}' not found.")
        return self.documents_dir / f"{document_id}.pdf"

    def exists(self, document_id: str) -> bool:
        try:
            return self._path_for(document_id).is_file()
        except NotFoundError:
            return False

    def save(self, document_id: str, content: bytes) -> Path:
        """
        Persist a document, replacing any previous artifact with this id.

        The write goes to a temporary file in the same directory and is
        moved into place, so readers never observe a partial PDF.
        """
        if not is_valid_document_id(document_id):
            raise ValueError(f"Invalid document id: {document_id!r}")

        self.documents_dir.mkdir(parents=True, exist_ok=True)
        target = self.documents_dir / f"{document_id}.pdf"

        fd, tmp_name = tempfile.mkstemp(dir=self.documents_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(
            "document_saved",
            extra={"document_id": document_id, "bytes": len(content)},
        )
        return target

    def retrieve(self, document_id: str) -> bytes:
        """Return the exact stored bytes. Raises NotFoundError."""
        path = self._path_for(document_id)
        if not path.is_file():
            raise NotFoundError(f"Document '{document_id}' not found.")
        return path.read_bytes()
