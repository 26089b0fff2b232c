"""Jinja2 template rendering for pages and directory indexes."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from folio.errors import TemplateRenderError
from folio.models import Frontmatter, PageEntry

#: Bundled theme, used for any template the site does not override.
THEME_DIR = Path(__file__).resolve().parent.parent / "theme"


class TemplateRenderer:
    """Renders template records through a single layout template.

    Templates are looked up in *template_dir* first and then in the bundled
    theme, so a site can override ``page.html`` alone and keep the rest.
    """

    def __init__(self, template_dir: str | Path | None = None, layout: str = "layout.html") -> None:
        search_path = [THEME_DIR]
        if template_dir is not None and Path(template_dir).is_dir():
            search_path.insert(0, Path(template_dir))
        self.layout = layout
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def render(self, name: str, data: dict[str, Any]) -> str:
        try:
            return self.env.get_template(name).render(**data)
        except TemplateError as e:
            raise TemplateRenderError(f"error rendering template {name!r}: {e}") from e

    def render_page(self, frontmatter: Frontmatter, rendered_body: str) -> str:
        return self.render(
            self.layout,
            {
                "frontmatter": frontmatter.model_dump(),
                "index": False,
                "rendered_body": rendered_body,
                "pages": None,
                "title": frontmatter.title,
                "description": frontmatter.description,
            },
        )

    def render_index(self, info: Frontmatter | None, pages: Sequence[PageEntry]) -> str:
        return self.render(
            self.layout,
            {
                "frontmatter": None,
                "index": True,
                "rendered_body": None,
                "pages": [page.model_dump() for page in pages],
                "title": info.title if info else None,
                "description": info.description if info else None,
            },
        )
