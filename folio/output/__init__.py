"""Output subsystem — renders templates and writes the site tree."""

from folio.output.templates import TemplateRenderer
from folio.output.writer import PageWriter

__all__ = [
    "PageWriter",
    "TemplateRenderer",
]
