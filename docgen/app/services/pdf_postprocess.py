"""
PDF post-processing for final documents.

Binds the document id and verification URL into the PDF's XMP metadata
so that a downloaded artifact can be traced back to its stored copy
without parsing visible content.

Trust boundary:
- This module does NOT interpret document content.
- The bound metadata is informational and non-authoritative.
"""

import io

import pikepdf

DOCUMENT_NS = "https://docgen-service.dev/ns/document/1.0/"


class PdfPostProcessError(RuntimeError):
    """Raised when PDF post-processing fails."""


def bind_document_metadata(
    *,
    pdf_bytes: bytes,
    document_id: str,
    verification_url: str,
) -> bytes:
    """
    Return a copy of ``pdf_bytes`` with identity fields in XMP.

    Uses Clark notation for explicit namespace binding.
    """
    if not document_id.strip():
        raise PdfPostProcessError("document_id is empty.")

    try:
        with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
            with pdf.open_metadata() as meta:
                meta[f"{{{DOCUMENT_NS}}}documentId"] = document_id
                meta[f"{{{DOCUMENT_NS}}}verificationUrl"] = verification_url

            out = io.BytesIO()
            pdf.save(out)
            return out.getvalue()

    except pikepdf.PdfError as exc:
        raise PdfPostProcessError(
            f"Failed to bind document metadata into XMP: {exc}"
        ) from exc
