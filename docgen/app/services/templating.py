"""
HTML template merge (Jinja2).

Template source is always supplied by the caller (read fresh from the
catalog), so no compiled template outlives a single render. The loader
is configured only so that templates may ``{% include %}`` or
``{% extends %}`` siblings in the template directory.

Trust boundary:
- Presentation only. Payload augmentation happens in the pipeline.
- HTML autoescaping is always on.
"""

from pathlib import Path
from typing import Any, Mapping

from jinja2 import (
    ChainableUndefined,
    Environment,
    FileSystemLoader,
    StrictUndefined,
)

from docgen.app.core.errors import RenderError


class HtmlTemplateRenderer:
    def __init__(self, template_dir: Path, *, strict_undefined: bool = False) -> None:
        self.env = Environment(
            loader=FileSystemLoader(Path(template_dir)),
            undefined=StrictUndefined if strict_undefined else ChainableUndefined,
            autoescape=True,
            auto_reload=True,
            cache_size=0,
        )

    def render(self, source: str, context: Mapping[str, Any], *, template_name: str) -> str:
        """Merge ``context`` into ``source``. Raises RenderError."""
        try:
            template = self.env.from_string(source)
            return template.render(dict(context))
        except Exception as exc:
            raise RenderError(
                f"Template '{template_name}' failed to render: {exc}"
            ) from exc
