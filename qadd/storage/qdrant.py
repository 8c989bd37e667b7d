"""Qdrant vector database backend."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from qdrant_client import QdrantClient
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse
from qdrant_client.models import Distance, PointStruct, VectorParams

from .base import Point, VectorStore, VectorStoreError

logger = logging.getLogger(__name__)

_CLIENT_ERRORS = (UnexpectedResponse, ResponseHandlingException)


def _error_text(exc: Exception) -> str:
    """Prefer the server's response body as the error message."""
    content = getattr(exc, "content", None)
    if isinstance(content, bytes) and content:
        return content.decode("utf-8", errors="replace")
    return str(exc)


class QdrantVectorStore(VectorStore):

    def __init__(self, url: str = "http://localhost:6333", collection_name: str = None,
                 timeout: Optional[int] = None, client: Optional[QdrantClient] = None):
        if not collection_name:
            raise ValueError("collection_name is required")
        self.url = url
        self.collection_name = collection_name
        if client is None:
            kwargs = {"url": url}
            if timeout is not None:
                kwargs["timeout"] = timeout
            client = QdrantClient(**kwargs)
        self.client = client

    def _get_collection_vector_dim(self) -> Optional[int]:
        collection_info = self.client.get_collection(collection_name=self.collection_name)
        vectors = collection_info.config.params.vectors
        return getattr(vectors, "size", None)

    def ensure_collection(self, vector_size: int) -> None:
        try:
            if self.client.collection_exists(collection_name=self.collection_name):
                existing_dim = self._get_collection_vector_dim()
                if existing_dim is not None and existing_dim != vector_size:
                    raise VectorStoreError(
                        f"Collection '{self.collection_name}' exists with dimension {existing_dim}, "
                        f"but vectors have dimension {vector_size}."
                    )
                logger.debug(f"Collection '{self.collection_name}' exists, skipping creation")
                return

            self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=VectorParams(size=vector_size, distance=Distance.COSINE),
            )
        except _CLIENT_ERRORS as e:
            raise VectorStoreError(_error_text(e)) from e
        logger.info(f"Created collection '{self.collection_name}' (size={vector_size}, distance=Cosine)")

    def upsert(self, points: List[Point]) -> None:
        if not points:
            return
        structs = [PointStruct(id=p.id, vector=p.vector, payload=p.payload) for p in points]
        try:
            self.client.upsert(
                collection_name=self.collection_name,
                points=structs,
                wait=True,
            )
        except _CLIENT_ERRORS as e:
            raise VectorStoreError(
                f"Failed to upsert {len(points)} points into '{self.collection_name}': {_error_text(e)}"
            ) from e
        logger.debug(f"Upserted {len(points)} points into '{self.collection_name}'")


def make_vector_store(cfg: Dict, collection_name: str) -> VectorStore:

    vector_store_cfg = cfg.get("vector_store", {})
    qdrant_cfg = vector_store_cfg.get("qdrant", {})
    url = qdrant_cfg.get("url", "http://localhost:6333")
    timeout = qdrant_cfg.get("timeout")

    return QdrantVectorStore(url=url, collection_name=collection_name, timeout=timeout)
