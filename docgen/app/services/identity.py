"""
Document identity.

A document id is a short, content-addressed handle: the first
DOCUMENT_ID_LENGTH hex characters of the SHA-256 digest of the caller's
canonical payload. Identical payloads always map to the same id,
independent of key order.

The id is a convenience handle, NOT a uniqueness guarantee. Two distinct
payloads may collide; collisions are neither detected nor resolved and
the later document overwrites the earlier one.
"""

import json
import re
from decimal import Decimal
from typing import Any, Mapping

from docgen.app.utils.hashing import compute_content_digest

DOCUMENT_ID_LENGTH = 12

_DOCUMENT_ID_RE = re.compile(rf"^[0-9a-f]{{{DOCUMENT_ID_LENGTH}}}$")


def _canonical_json_default(obj: Any) -> str:
    if isinstance(obj, Decimal):
        return str(obj)
    raise TypeError(
        f"Object of type {obj.__class__.__name__} is not JSON serializable"
    )


def canonicalize_payload(payload: Mapping[str, Any]) -> bytes:
    return json.dumps(
        payload,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        default=_canonical_json_default,
    ).encode("utf-8")


def derive_document_id(payload: Mapping[str, Any]) -> str:
    """Derive the document id of a caller payload (pre-augmentation)."""
    digest = compute_content_digest(canonicalize_payload(payload))
    return digest[:DOCUMENT_ID_LENGTH]


def is_valid_document_id(document_id: str) -> bool:
    return bool(_DOCUMENT_ID_RE.match(document_id or ""))
