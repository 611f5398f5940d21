import io

import pikepdf

from docgen.app.services.pdf_postprocess import DOCUMENT_NS


# ------------------------------------------------------------------
# Minimal valid PDF
# ------------------------------------------------------------------

def minimal_valid_pdf(subject: str | None = None) -> bytes:
    """
    Produce a one-page, structurally valid PDF.

    ``subject`` is written to the document info dictionary so tests can
    tell which render produced a given artifact.
    """
    buffer = io.BytesIO()
    with pikepdf.new() as pdf:
        pdf.add_blank_page(page_size=(595, 842))
        if subject is not None:
            pdf.docinfo["/Subject"] = subject
        pdf.save(buffer)
    return buffer.getvalue()


def pdf_subject(pdf_bytes: bytes) -> str | None:
    with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
        value = pdf.docinfo.get("/Subject")
        return str(value) if value is not None else None


def bound_document_id(pdf_bytes: bytes) -> str | None:
    """Document id written into XMP by the final-mode post-processing."""
    with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
        meta = pdf.open_metadata()
        return meta.get(f"{{{DOCUMENT_NS}}}documentId")
