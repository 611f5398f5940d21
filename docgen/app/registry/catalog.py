"""
Filesystem template catalog.

Templates live in a single directory as ``<name>.html.jinja``, each
optionally paired with a ``<name>.json`` sample document. The catalog
never caches: every call reads the current directory and file contents,
so template edits take effect on the next request.

Template names are restricted to a conservative character set; a name
that could escape the template directory is simply not present.
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from docgen.app.core.errors import NotFoundError
from docgen.app.schemas.templates import TemplateDescriptor, TemplateDetail
from docgen.app.services.analyzer import analyze_structure
from docgen.app.services.complexity import classify_complexity

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html.jinja"
SAMPLE_SUFFIX = ".json"

_TEMPLATE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")

PLACEHOLDER_SAMPLE: Dict[str, Any] = {
    "title": "Sample document",
    "content": "No sample data is available for this template.",
}


def is_valid_template_name(name: str) -> bool:
    return bool(name) and ".." not in name and bool(_TEMPLATE_NAME_RE.match(name))


def _modified_at(path: Path) -> datetime:
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


class TemplateCatalog:
    """Read-only view over the template directory."""

    def __init__(self, template_dir: Path) -> None:
        self.template_dir = Path(template_dir)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def template_path(self, name: str) -> Optional[Path]:
        if not is_valid_template_name(name):
            return None
        return self.template_dir / f"{name}{TEMPLATE_SUFFIX}"

    def sample_path(self, name: str) -> Optional[Path]:
        if not is_valid_template_name(name):
            return None
        return self.template_dir / f"{name}{SAMPLE_SUFFIX}"

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def exists(self, name: str) -> bool:
        path = self.template_path(name)
        return path is not None and path.is_file()

    def list_templates(self) -> List[TemplateDescriptor]:
        """Enumerate every template, sorted by name."""
        if not self.template_dir.is_dir():
            logger.warning(
                "template_dir_missing",
                extra={"template_dir": str(self.template_dir)},
            )
            return []

        descriptors = []
        for path in self.template_dir.iterdir():
            if not path.is_file() or not path.name.endswith(TEMPLATE_SUFFIX):
                continue

            name = path.name[: -len(TEMPLATE_SUFFIX)]
            if not is_valid_template_name(name):
                continue

            descriptors.append(
                TemplateDescriptor(
                    name=name,
                    file=path.name,
                    has_sample=(self.template_dir / f"{name}{SAMPLE_SUFFIX}").is_file(),
                    size=path.stat().st_size,
                    modified=_modified_at(path),
                )
            )

        return sorted(descriptors, key=lambda d: d.name)

    def load_source(self, name: str) -> str:
        """Read the current template source. Raises NotFoundError."""
        if not self.exists(name):
            raise NotFoundError(f"Template '{name}' not found.")
        return self.template_path(name).read_text(encoding="utf-8")

    def load_sample(self, name: str) -> Dict[str, Any]:
        """
        Return the parsed sample document for a template.

        A missing sample yields PLACEHOLDER_SAMPLE. A sample that exists
        but is not a valid JSON object is logged and replaced by the
        placeholder annotated with an ``error`` field.
        """
        path = self.sample_path(name)
        if path is None or not path.is_file():
            logger.debug("sample_missing", extra={"template": name})
            return dict(PLACEHOLDER_SAMPLE)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning(
                "sample_unreadable",
                extra={"template": name, "error": str(exc)},
            )
            return {**PLACEHOLDER_SAMPLE, "error": f"Invalid sample data: {exc}"}

        if not isinstance(data, dict):
            logger.warning(
                "sample_not_an_object",
                extra={"template": name, "type": type(data).__name__},
            )
            return {
                **PLACEHOLDER_SAMPLE,
                "error": "Invalid sample data: expected a JSON object",
            }

        return data

    def describe(self, name: str) -> TemplateDetail:
        """Template source, metadata, sample and inferred structure."""
        content = self.load_source(name)
        path = self.template_path(name)
        sample = self.load_sample(name)
        report = analyze_structure(sample)

        return TemplateDetail(
            name=name,
            content=content,
            size=path.stat().st_size,
            modified=_modified_at(path),
            sample_data=sample,
            structure=report,
            complexity=classify_complexity(report),
        )
