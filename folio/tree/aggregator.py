"""TreeAggregator — recursive, post-order compilation of a content directory."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from folio.compiler.document import DocumentCompiler
from folio.compiler.frontmatter import parse_structured_file
from folio.config.models import SiteConfig
from folio.errors import IoError
from folio.models import DirectoryNode, Frontmatter, TreeNode
from folio.tree.index import IndexBuilder

logger = logging.getLogger(__name__)


class TreeAggregator:
    """Walks a source directory and mirrors it into a destination directory.

    Each subdirectory is aggregated before its parent's index is written, so a
    parent listing always sees fully populated children.
    """

    def __init__(self, config: SiteConfig, compiler: DocumentCompiler, index_builder: IndexBuilder) -> None:
        self.config = config
        self._compiler = compiler
        self._index_builder = index_builder
        self._extensions = {ext.lower() for ext in config.document_extensions}

    def aggregate(self, source_dir: Path, dest_dir: Path) -> DirectoryNode:
        info: Frontmatter | None = None
        # Only direct documents count; subdirectories do not raise the date.
        last_updated = 0
        contents: list[TreeNode] = []

        for entry in self._entries(source_dir):
            try:
                if entry.is_symlink():
                    continue

                if entry.is_dir():
                    child_dest = dest_dir / entry.name
                    child_dest.mkdir(parents=True, exist_ok=True)
                    contents.append(self.aggregate(entry, child_dest))
                    continue

                if not entry.is_file():
                    continue

                if entry.name == self.config.info_file:
                    info = parse_structured_file(entry)
                    continue

                if entry.suffix.lower() not in self._extensions:
                    continue

                last_updated = max(last_updated, int(entry.stat().st_mtime))
                contents.append(self._compiler.compile(entry, dest_dir))
            except OSError as e:
                raise IoError(entry, e) from e

        if info is not None:
            info = info.model_copy(update={"date": _to_date(last_updated)})

        node = DirectoryNode(path=source_dir.as_posix(), info=info, contents=contents)
        self._index_builder.write_index(node, dest_dir)
        return node

    def _entries(self, source_dir: Path) -> list[Path]:
        try:
            entries = list(source_dir.iterdir())
        except OSError as e:
            raise IoError(source_dir, e) from e
        if self.config.sort_entries:
            entries.sort(key=lambda p: p.name)
        return entries


def _to_date(timestamp: int):
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date()
