"""Indexing functionality for qadd."""

from .base import Indexer, IngestSummary
from .indexer import DocumentIndexer, FunctionIndexer, index_document, index_functions

__all__ = [
    "Indexer",
    "IngestSummary",
    "DocumentIndexer",
    "FunctionIndexer",
    "index_document",
    "index_functions",
]
