"""DocumentCompiler — turns one markdown file into one HTML page."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from folio.compiler.events import create_parser, render, tokenize
from folio.compiler.frontmatter import extract
from folio.compiler.math import MathRenderer, render_math
from folio.compiler.transform import EventTransformer
from folio.config.models import FolioConfig
from folio.errors import FolioError, IoError
from folio.models import FileNode
from folio.output.templates import TemplateRenderer
from folio.output.writer import PageWriter

logger = logging.getLogger(__name__)


class DocumentCompiler:
    """Read, extract, tokenize, transform, render and write a document.

    ``docs/intro.md`` is written to ``<dest_dir>/intro/index.html``.
    """

    def __init__(
        self,
        config: FolioConfig,
        renderer: TemplateRenderer,
        writer: PageWriter,
        math_renderer: MathRenderer = render_math,
    ) -> None:
        self.config = config
        self._renderer = renderer
        self._writer = writer
        self._md = create_parser(config.markdown)
        self._transformer = EventTransformer(math_renderer)

    def render_body(self, body: str) -> str:
        """Render a markdown body to HTML with all rewrite rules applied."""
        env: dict[str, Any] = {}
        events = self._transformer.transform(tokenize(self._md, body, env))
        return render(self._md, events, env)

    def compile(self, source: Path, dest_dir: Path) -> FileNode:
        logger.info("rendering %s", source)
        try:
            raw = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IoError(source, e) from e

        try:
            frontmatter, body = extract(raw, self.config.site.frontmatter_format)
            page = self._renderer.render_page(frontmatter, self.render_body(body))
        except FolioError as e:
            raise e.at(source)

        self._writer.write(dest_dir / source.stem / "index.html", page)
        return FileNode(path=source.as_posix(), frontmatter=frontmatter)
