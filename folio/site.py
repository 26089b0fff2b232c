"""Full site build: wires the compiler, index builder and aggregator together."""

from __future__ import annotations

import errno
import logging
import time
from pathlib import Path

from folio.compiler.document import DocumentCompiler
from folio.compiler.math import MathRenderer, render_math
from folio.config.models import FolioConfig
from folio.errors import IoError
from folio.models import BuildReport, DirectoryNode, FileNode
from folio.output.templates import TemplateRenderer
from folio.output.writer import PageWriter
from folio.tree.aggregator import TreeAggregator
from folio.tree.index import IndexBuilder

logger = logging.getLogger(__name__)


def build_site(config: FolioConfig, math_renderer: MathRenderer = render_math) -> BuildReport:
    """Rebuild the whole output tree from the content directory."""
    start = time.monotonic()
    site = config.site

    content_root = Path(site.content_dir)
    if not content_root.is_dir():
        raise IoError(content_root, FileNotFoundError(errno.ENOENT, "content directory not found"))

    writer = PageWriter(config.output)
    out_root = writer.prepare(site.static_dir)

    renderer = TemplateRenderer(site.template_dir, layout=site.layout)
    compiler = DocumentCompiler(config, renderer, writer, math_renderer=math_renderer)
    index_builder = IndexBuilder(content_root, renderer, writer)
    aggregator = TreeAggregator(site, compiler, index_builder)

    tree = aggregator.aggregate(content_root, out_root)

    report = BuildReport(
        documents=sum(1 for node in tree.walk() if isinstance(node, FileNode)),
        directories=1 + sum(1 for node in tree.walk() if isinstance(node, DirectoryNode)),
        duration=time.monotonic() - start,
        tree=tree,
    )
    logger.info("Completed rendering in %dms", report.duration * 1000)
    return report
