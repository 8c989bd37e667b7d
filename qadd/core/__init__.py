"""Core functionality for qadd."""

from .models import ANONYMOUS_CLASS, ANONYMOUS_FUNCTION, Chunk, FunctionKind, FunctionRecord, Span
from .text import is_heading, normalize_text
from .chunking import (
    SEPARATORS,
    Chunker,
    ParagraphChunker,
    RecursiveChunker,
    make_chunker,
    segment,
    split_recursive,
)
from .extraction import FunctionExtractor, SourceParseError, extract_functions, get_language_for_file
from .embeddings import Embedder, EmbeddingError, OllamaEmbedder, SentenceTransformersEmbedder, make_embedder

__all__ = [
    "ANONYMOUS_CLASS",
    "ANONYMOUS_FUNCTION",
    "Chunk",
    "FunctionKind",
    "FunctionRecord",
    "Span",
    "is_heading",
    "normalize_text",
    "SEPARATORS",
    "Chunker",
    "ParagraphChunker",
    "RecursiveChunker",
    "make_chunker",
    "segment",
    "split_recursive",
    "FunctionExtractor",
    "SourceParseError",
    "extract_functions",
    "get_language_for_file",
    "Embedder",
    "EmbeddingError",
    "OllamaEmbedder",
    "SentenceTransformersEmbedder",
    "make_embedder",
]
