"""Directory traversal and index pages."""

from folio.tree.aggregator import TreeAggregator
from folio.tree.index import IndexBuilder

__all__ = [
    "IndexBuilder",
    "TreeAggregator",
]
