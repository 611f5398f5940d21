from decimal import Decimal

import pytest

from docgen.app.core.errors import NotFoundError
from docgen.app.services.identity import (
    DOCUMENT_ID_LENGTH,
    canonicalize_payload,
    derive_document_id,
    is_valid_document_id,
)
from docgen.app.utils.hashing import compute_content_digest


def test_document_id_is_short_hex():
    document_id = derive_document_id({"name": "Jane"})

    assert len(document_id) == DOCUMENT_ID_LENGTH
    assert is_valid_document_id(document_id)


def test_document_id_ignores_key_order():
    a = {"name": "Jane", "items": [1, 2], "meta": {"x": 1, "y": 2}}
    b = {"meta": {"y": 2, "x": 1}, "items": [1, 2], "name": "Jane"}

    assert derive_document_id(a) == derive_document_id(b)


def test_single_value_change_changes_id():
    assert derive_document_id({"amount": 10}) != derive_document_id({"amount": 11})


def test_canonical_form_is_compact_sorted_utf8():
    assert canonicalize_payload({"b": "ñ", "a": Decimal("1.50")}) == (
        '{"a":"1.50","b":"ñ"}'.encode("utf-8")
    )


def test_digest_rejects_non_bytes():
    with pytest.raises(TypeError):
        compute_content_digest("not bytes")


def test_store_round_trip(store):
    store.save("0123456789ab", b"%PDF-1.7 first")

    assert store.exists("0123456789ab")
    assert store.retrieve("0123456789ab") == b"%PDF-1.7 first"


def test_store_overwrites_existing_document(store):
    store.save("0123456789ab", b"first")
    store.save("0123456789ab", b"second")

    assert store.retrieve("0123456789ab") == b"second"
    assert [p.name for p in store.documents_dir.iterdir()] == ["0123456789ab.pdf"]


def test_store_creates_directory_on_first_save(store):
    assert not store.documents_dir.exists()

    store.save("aaaaaaaaaaaa", b"x")

    assert store.documents_dir.is_dir()


@pytest.mark.parametrize("document_id", ["ffffffffffff", "../etc/passwd", "ABCDEF123456", ""])
def test_store_retrieve_unknown_or_invalid(store, document_id):
    with pytest.raises(NotFoundError):
        store.retrieve(document_id)
    assert not store.exists(document_id)
