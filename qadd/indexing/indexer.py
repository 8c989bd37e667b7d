"""Document and source-code indexing logic."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core import (
    Chunk,
    Chunker,
    Embedder,
    FunctionExtractor,
    FunctionRecord,
    make_chunker,
    make_embedder,
    normalize_text,
)
from ..storage import VectorStore, make_vector_store
from ..utils import read_text_file
from .base import Indexer, IngestSummary, utc_timestamp
from .schemas import DocChunkPayload, FunctionPayload, RecursiveChunkPayload

logger = logging.getLogger(__name__)


def code_snippet(code: str, limit: int = 1000) -> str:
    """Truncated code for the payload; the ellipsis is always appended."""
    return code[:limit] + "..."


class DocumentIndexer(Indexer[Chunk]):
    """Indexes a plain-text document as normalized, chunked points."""

    kind = "docs"

    def __init__(self, embedder: Embedder, store: VectorStore, chunker: Chunker,
                 batch_size: int = 64):
        super().__init__(embedder, store, batch_size=batch_size)
        self.chunker = chunker

    def collect(self, path: Path) -> List[Chunk]:
        raw = read_text_file(path)
        chunks = self.chunker.chunk(normalize_text(raw))
        logger.debug(f"Chunked {path.name} with {type(self.chunker).__name__}")
        return chunks

    def item_text(self, item: Chunk) -> str:
        return item.content

    def item_label(self, item: Chunk, position: int) -> str:
        return f"chunk {item.chunk_index}"

    def item_payload(self, item: Chunk, file_name: str) -> Dict[str, Any]:
        fields = dict(
            file=file_name,
            text=item.content,
            section_title=item.section_title,
            section_index=item.section_index,
            chunk_index=item.chunk_index,
            char_count=item.char_count,
            processed_at=utc_timestamp(),
        )
        if item.original_index is not None:
            payload = RecursiveChunkPayload(
                original_index=item.original_index,
                has_overlap=bool(item.has_overlap),
                **fields,
            )
        else:
            payload = DocChunkPayload(**fields)
        return payload.model_dump()


class FunctionIndexer(Indexer[FunctionRecord]):
    """Indexes the functions, methods and arrow closures of a source file."""

    kind = "functions"
    upsert_failures_fatal = False

    def __init__(self, embedder: Embedder, store: VectorStore,
                 extractor: Optional[FunctionExtractor] = None,
                 batch_size: int = 1, snippet_chars: int = 1000):
        super().__init__(embedder, store, batch_size=batch_size)
        self.extractor = extractor or FunctionExtractor()
        self.snippet_chars = snippet_chars

    def collect(self, path: Path) -> List[FunctionRecord]:
        source = read_text_file(path)
        return self.extractor.extract(source, file_path=str(path))

    def item_text(self, item: FunctionRecord) -> str:
        return item.code

    def item_label(self, item: FunctionRecord, position: int) -> str:
        return item.name

    def item_payload(self, item: FunctionRecord, file_name: str) -> Dict[str, Any]:
        return FunctionPayload(
            name=item.name,
            type=item.kind.value,
            class_name=item.enclosing_class,
            file=file_name,
            start_line=item.span.start_line,
            end_line=item.span.end_line,
            start_column=item.span.start_col,
            end_column=item.span.end_col,
            is_static=item.is_static,
            code_snippet=code_snippet(item.code, self.snippet_chars),
            processed_at=utc_timestamp(),
        ).to_payload()


def index_document(path: Path, cfg: Dict, collection_name: str) -> IngestSummary:
    """Chunk, embed and upsert one text document (Wrapper)."""
    chunking = cfg.get("chunking", {})
    chunker = make_chunker(
        chunking.get("strategy", "paragraph"),
        int(chunking.get("target_chars", 1200)),
        int(chunking.get("overlap_chars", 200)),
    )
    indexer = DocumentIndexer(
        make_embedder(cfg),
        make_vector_store(cfg, collection_name=collection_name),
        chunker,
        batch_size=int(chunking.get("batch_size", 64)),
    )
    return indexer.index(Path(path))


def index_functions(path: Path, cfg: Dict, collection_name: str) -> IngestSummary:
    """Extract, embed and upsert the functions of one source file (Wrapper)."""
    code = cfg.get("code", {})
    extractor = FunctionExtractor(
        language=code.get("language"),
        class_context=code.get("class_context", "document"),
    )
    indexer = FunctionIndexer(
        make_embedder(cfg),
        make_vector_store(cfg, collection_name=collection_name),
        extractor,
        batch_size=int(code.get("batch_size", 1)),
        snippet_chars=int(code.get("snippet_chars", 1000)),
    )
    return indexer.index(Path(path))
