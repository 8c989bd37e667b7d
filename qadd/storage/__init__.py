"""Vector storage backends (Qdrant only)."""

from .base import Point, VectorStore, VectorStoreError
from .qdrant import QdrantVectorStore, make_vector_store

__all__ = [
    "Point",
    "VectorStore",
    "VectorStoreError",
    "QdrantVectorStore",
    "make_vector_store",
]
