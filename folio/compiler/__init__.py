"""Per-document compilation: frontmatter, event stream, rewrite rules."""

from folio.compiler.document import DocumentCompiler
from folio.compiler.events import Event, EventKind, MathMode, create_parser, render, tokenize
from folio.compiler.frontmatter import extract, parse_structured, split_frontmatter
from folio.compiler.math import render_math
from folio.compiler.transform import ADMONITION_LABELS, EventTransformer, slugify

__all__ = [
    "ADMONITION_LABELS",
    "DocumentCompiler",
    "Event",
    "EventKind",
    "EventTransformer",
    "MathMode",
    "create_parser",
    "extract",
    "parse_structured",
    "render",
    "render_math",
    "slugify",
    "split_frontmatter",
    "tokenize",
]
