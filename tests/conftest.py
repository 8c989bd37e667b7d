"""
Pytest configuration and fixtures.

Ensures qadd can be imported from tests and provides in-memory stand-ins
for the embedding service and the vector store.
"""

import sys
from pathlib import Path
from typing import List

import pytest

# Add the repository root to Python path so tests can import qadd
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from qadd.core.embeddings import Embedder, EmbeddingError  # noqa: E402
from qadd.storage.base import Point, VectorStore  # noqa: E402


class FakeEmbedder(Embedder):
    """Deterministic embedder; texts listed in ``fail_on`` raise EmbeddingError."""

    def __init__(self, dimension: int = 4, fail_on=()):
        self.dimension = dimension
        self.fail_on = set(fail_on)
        self.calls: List[str] = []

    def embed_one(self, text: str) -> List[float]:
        self.calls.append(text)
        if text in self.fail_on:
            raise EmbeddingError(f"model rejected {text!r}")
        return [float(len(text))] + [0.5] * (self.dimension - 1)


class FakeStore(VectorStore):
    def __init__(self, collection_name: str = "test-collection"):
        self.collection_name = collection_name
        self.ensured: List[int] = []
        self.batches: List[List[Point]] = []

    def ensure_collection(self, vector_size: int) -> None:
        self.ensured.append(vector_size)

    def upsert(self, points: List[Point]) -> None:
        self.batches.append(list(points))

    @property
    def points(self) -> List[Point]:
        return [p for batch in self.batches for p in batch]


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_store():
    return FakeStore()
