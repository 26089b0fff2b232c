"""folio - compile a tree of markdown notes into a static HTML site."""

from folio.compiler import DocumentCompiler, EventTransformer, extract, render_math
from folio.config import FolioConfig, load_config
from folio.errors import (
    FolioError,
    IoError,
    MalformedFrontmatter,
    MathRenderError,
    StructuredDataError,
    TemplateRenderError,
)
from folio.models import BuildReport, DirectoryNode, FileNode, Frontmatter, PageEntry
from folio.site import build_site
from folio.tree import IndexBuilder, TreeAggregator

__version__ = "0.1.0"

__all__ = [
    "BuildReport",
    "DirectoryNode",
    "DocumentCompiler",
    "EventTransformer",
    "FileNode",
    "FolioConfig",
    "FolioError",
    "Frontmatter",
    "IndexBuilder",
    "IoError",
    "MalformedFrontmatter",
    "MathRenderError",
    "PageEntry",
    "StructuredDataError",
    "TemplateRenderError",
    "TreeAggregator",
    "build_site",
    "extract",
    "load_config",
    "render_math",
]
