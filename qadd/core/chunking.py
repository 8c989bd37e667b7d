"""Text chunking strategies for plain-text documents."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .models import Chunk
from .text import is_heading

logger = logging.getLogger(__name__)

# Separator cascade for the recursive strategy, coarsest first.
# The empty separator means fixed-width character windows.
SEPARATORS: List[str] = ["\n\n", "\n", ". ", "! ", "? ", "; ", ", ", " ", ""]

STRATEGIES = ("paragraph", "recursive")

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")
_SENTENCE_END = re.compile(r"[.!?]+")

# -----------------------------------------------------------------------------
# Interfaces
# -----------------------------------------------------------------------------

class Chunker:
    """Abstract base class for text chunking."""

    def __init__(self, target_chars: int = 1200, overlap_chars: int = 200):
        if target_chars <= 0:
            raise ValueError("target_chars must be a positive integer.")
        if overlap_chars < 0:
            raise ValueError("overlap_chars must be >= 0.")
        self.target_chars = target_chars
        self.overlap_chars = overlap_chars

    def chunk(self, text: str) -> List[Chunk]:
        """Segment normalized text into ordered chunks.

        Args:
            text: Normalized document text

        Returns:
            Chunks with a gapless, 0-based chunk_index sequence
        """
        raise NotImplementedError


# -----------------------------------------------------------------------------
# Paragraph / heading strategy
# -----------------------------------------------------------------------------

def split_paragraphs(text: str, target_chars: int) -> List[str]:
    """Split text into candidate paragraphs.

    Blank lines first; a single resulting paragraph falls back to single
    newlines; fewer than three segments in a long document falls back to
    sentence boundaries. Each fallback replaces the previous split.
    """
    paras = [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]

    if len(paras) == 1:
        logger.debug("No blank lines found, splitting on single newlines")
        paras = [p.strip() for p in text.split("\n") if p.strip()]

    if len(paras) < 3 and len(text) > target_chars * 2:
        logger.debug("Few line breaks found, splitting on sentences")
        paras = [p.strip() for p in _SENTENCE_END.split(text) if p.strip()]

    logger.debug(f"Split into {len(paras)} segments")
    return paras


class ParagraphChunker(Chunker):
    """Packs paragraphs into chunks and tracks the current section heading."""

    def chunk(self, text: str) -> List[Chunk]:
        chunks: List[Chunk] = []
        section_title: Optional[str] = None
        section_index = -1
        buf = ""

        def flush() -> None:
            content = buf.strip()
            if not content:
                return
            chunks.append(
                Chunk(
                    content=content,
                    chunk_index=len(chunks),
                    section_title=section_title,
                    section_index=section_index if section_index >= 0 else None,
                )
            )
            logger.debug(f"Created chunk {len(chunks)} ({len(content)} chars)")

        for para in split_paragraphs(text, self.target_chars):
            if is_heading(para):
                flush()
                buf = ""
                section_title = para
                section_index += 1
                continue

            joined = f"{buf} {para}" if buf else para
            if len(joined) < self.target_chars:
                buf = joined
                continue

            flush()
            if chunks and self.overlap_chars > 0:
                tail = chunks[-1].content[-self.overlap_chars:]
                buf = f"{tail} {para}"
            else:
                buf = para

        flush()
        logger.debug(f"Total chunks created: {len(chunks)}")
        return chunks


# -----------------------------------------------------------------------------
# Recursive separator strategy
# -----------------------------------------------------------------------------

def split_recursive(text: str, separators: List[str], target_chars: int) -> List[str]:
    """Split text into pieces of at most ``target_chars`` characters.

    Pieces are packed greedily at the coarsest separator that occurs in the
    text; only pieces that are still too large on their own descend to the
    next separator. Recursion depth is bounded by ``len(separators)``.

    Args:
        text: Text to split
        separators: Remaining separators, coarsest first
        target_chars: Maximum piece length

    Returns:
        Pieces in document order (not stripped)
    """
    if len(text) <= target_chars:
        return [text]

    if not separators or separators[0] == "":
        return [text[i:i + target_chars] for i in range(0, len(text), target_chars)]

    sep, rest = separators[0], separators[1:]
    parts = text.split(sep)
    if len(parts) == 1:
        return split_recursive(text, rest, target_chars)

    out: List[str] = []
    current = ""
    for part in parts:
        if len(part) > target_chars:
            if current:
                out.append(current)
            # a run of separators alone splits into nothing
            sub = split_recursive(part, rest, target_chars)
            out.extend(sub[:-1])
            current = sub[-1] if sub else ""
            continue

        joined = current + sep + part if current else part
        if len(joined) <= target_chars or not current:
            current = joined
        else:
            out.append(current)
            current = part

    if current:
        out.append(current)
    return out


class RecursiveChunker(Chunker):
    """Cascades through SEPARATORS, then prefixes each chunk with overlap."""

    def __init__(self, target_chars: int = 1200, overlap_chars: int = 200,
                 separators: Optional[List[str]] = None):
        super().__init__(target_chars, overlap_chars)
        self.separators = list(separators) if separators is not None else list(SEPARATORS)

    def chunk(self, text: str) -> List[Chunk]:
        text = text.strip()
        if not text:
            return []

        pieces = [p.strip() for p in split_recursive(text, self.separators, self.target_chars)]
        pieces = [p for p in pieces if p]
        logger.debug(f"Recursive split produced {len(pieces)} pieces")

        chunks: List[Chunk] = []
        for i, piece in enumerate(pieces):
            content = piece
            has_overlap = i > 0 and self.overlap_chars > 0
            if has_overlap:
                tail = chunks[-1].content[-self.overlap_chars:]
                content = f"{tail} {piece}"
            chunks.append(
                Chunk(
                    content=content,
                    chunk_index=i,
                    original_index=i,
                    has_overlap=has_overlap,
                )
            )
        return chunks


def make_chunker(strategy: str = "paragraph", target_chars: int = 1200,
                 overlap_chars: int = 200) -> Chunker:
    """Create a chunker by strategy name ("paragraph" or "recursive")."""
    if strategy == "paragraph":
        return ParagraphChunker(target_chars, overlap_chars)
    if strategy == "recursive":
        return RecursiveChunker(target_chars, overlap_chars)
    raise ValueError(f"Unknown chunking strategy: {strategy!r}")


def segment(text: str, target_chars: int = 1200, overlap_chars: int = 200,
            strategy: str = "paragraph") -> List[Chunk]:
    """Chunk text with the named strategy (Functional Wrapper)."""
    return make_chunker(strategy, target_chars, overlap_chars).chunk(text)
