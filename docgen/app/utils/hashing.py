"""
Cryptographic primitives for document identity.

Current scope:
- Deterministic hashing of canonical payload bytes

Explicit non-scope:
- Canonicalization or serialization
- Identifier truncation policy (handled by the identity service)

IMPORTANT DESIGN RULE:
- Canonicalization MUST occur outside this module.
- This module hashes bytes, and bytes only.
"""

import hashlib
from typing import Union


def compute_content_digest(canonical_bytes: Union[bytes, bytearray]) -> str:
    """
    Compute the hex SHA-256 digest of canonical payload bytes.

    Args:
        canonical_bytes:
            Canonical byte representation of a caller payload.

    Returns:
        The full lowercase hex digest (64 characters).
    """
    if not isinstance(canonical_bytes, (bytes, bytearray)):
        raise TypeError(
            "compute_content_digest expects canonical bytes, "
            f"got {type(canonical_bytes).__name__}"
        )

    return hashlib.sha256(canonical_bytes).hexdigest()
