from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from docgen.app.core.config import Settings
from docgen.app.main import create_app
from docgen.app.registry.catalog import TemplateCatalog
from docgen.app.services.pipeline import RenderPipeline
from docgen.app.services.store import DocumentStore
from docgen.tests.fixtures.renderers import SLOW_MARKER, FakePdfRenderer


INVOICE_TEMPLATE = """<html><body>
<h1>Invoice {{ number }}</h1>
<p>{{ customer.name }}</p>
{% for line in lines %}<div>{{ line.description }}: {{ line.amount }}</div>{% endfor %}
{% if qr_code %}<img src="{{ qr_code }}"><span id="doc">{{ document_id }}</span>{% endif %}
</body></html>
"""

SLOW_TEMPLATE = SLOW_MARKER + "<html><body>{{ title }}</body></html>"


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    root = tmp_path / "templates"
    root.mkdir()

    (root / "invoice.html.jinja").write_text(INVOICE_TEMPLATE, encoding="utf-8")
    (root / "invoice.json").write_text(
        '{"number": "A-1", "customer": {"name": "Acme"}, '
        '"lines": [{"description": "Freight", "amount": 10}]}',
        encoding="utf-8",
    )

    (root / "memo.html.jinja").write_text(
        "<html><body><h1>{{ title }}</h1></body></html>", encoding="utf-8"
    )

    (root / "slow.html.jinja").write_text(SLOW_TEMPLATE, encoding="utf-8")

    return root


@pytest.fixture
def settings(tmp_path: Path, template_dir: Path) -> Settings:
    return Settings(
        template_dir=template_dir,
        documents_dir=tmp_path / "documents",
        assets_dir=tmp_path / "assets",
        public_base_url="https://docs.example.test/",
        render_timeout_seconds=1.0,
    )


@pytest.fixture
def renderer() -> FakePdfRenderer:
    return FakePdfRenderer()


@pytest.fixture
def catalog(settings: Settings) -> TemplateCatalog:
    return TemplateCatalog(settings.template_dir)


@pytest.fixture
def store(settings: Settings) -> DocumentStore:
    return DocumentStore(settings.documents_dir)


@pytest.fixture
def pipeline(settings, catalog, store, renderer) -> RenderPipeline:
    return RenderPipeline(
        settings=settings,
        catalog=catalog,
        renderer=renderer,
        store=store,
    )


@pytest.fixture
def client(settings, renderer):
    app = create_app(settings=settings, renderer=renderer)
    with TestClient(app) as test_client:
        yield test_client
