"""Abstract vector storage interface."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class VectorStoreError(RuntimeError):
    """Raised when the vector store rejects a request."""


@dataclasses.dataclass
class Point:
    """An (id, vector, payload) tuple stored in a collection."""

    id: str
    vector: List[float]
    payload: Dict[str, Any]


class VectorStore(ABC):
    """Abstract base class for vector storage backends."""

    collection_name: str

    @abstractmethod
    def ensure_collection(self, vector_size: int) -> None:
        """Create the collection unless it already exists."""
        pass

    @abstractmethod
    def upsert(self, points: List[Point]) -> None:
        """Insert or replace points, waiting for the write to apply."""
        pass
