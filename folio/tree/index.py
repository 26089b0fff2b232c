"""Directory index pages: listing entries, ordering them, rendering them."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from folio.errors import FolioError
from folio.models import DirectoryNode, FileNode, Frontmatter, PageEntry, TreeNode
from folio.output.templates import TemplateRenderer
from folio.output.writer import PageWriter

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "_"


def is_hidden(node: TreeNode) -> bool:
    """Nodes whose last path segment starts with ``_`` are built but not listed."""
    return PurePosixPath(node.path).name.startswith(HIDDEN_PREFIX)


class IndexBuilder:
    """Builds the listing and index page for one directory."""

    def __init__(self, content_root: str | Path, renderer: TemplateRenderer, writer: PageWriter) -> None:
        self.content_root = PurePosixPath(Path(content_root).as_posix())
        self._renderer = renderer
        self._writer = writer

    def relative_path(self, node: TreeNode) -> str:
        """Source path relative to the content root, document suffix dropped."""
        path = PurePosixPath(node.path)
        if isinstance(node, FileNode):
            path = path.with_suffix("")
        try:
            return path.relative_to(self.content_root).as_posix()
        except ValueError:
            return path.as_posix()

    def to_entry(self, node: TreeNode) -> PageEntry:
        if isinstance(node, FileNode):
            return PageEntry(
                relative_path=self.relative_path(node),
                frontmatter=node.frontmatter,
                formatted_date=node.frontmatter.formatted_date(),
                is_directory=False,
            )
        return PageEntry(
            relative_path=self.relative_path(node),
            frontmatter=node.info,
            formatted_date=node.info.formatted_date() if node.info else "",
            is_directory=True,
        )

    def entries(self, contents: Sequence[TreeNode]) -> list[PageEntry]:
        """Visible entries: directories in traversal order, then pages newest first.

        Pages with the same date are ordered by relative path.
        """
        visible = [self.to_entry(node) for node in contents if not is_hidden(node)]
        dirs = [e for e in visible if e.is_directory]
        pages = [e for e in visible if not e.is_directory]
        pages.sort(key=lambda e: e.relative_path)
        pages.sort(key=lambda e: e.frontmatter.date, reverse=True)
        return dirs + pages

    def build_index(self, contents: Sequence[TreeNode], info: Frontmatter | None) -> str:
        return self._renderer.render_index(info, self.entries(contents))

    def write_index(self, node: DirectoryNode, dest_dir: Path) -> Path:
        logger.info("rendering index for %s", node.path)
        try:
            html = self.build_index(node.contents, node.info)
        except FolioError as e:
            raise e.at(node.path)
        return self._writer.write(dest_dir / "index.html", html)
