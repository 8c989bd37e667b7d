"""Embedding clients used by the indexing pipeline."""

from __future__ import annotations

import functools
import logging
from typing import Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class EmbeddingError(RuntimeError):
    """Raised when a single text cannot be embedded."""


@functools.lru_cache(maxsize=1)
def _encoder():
    import tiktoken

    # cl100k_base is compatible with most modern models
    return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str) -> int:
    """Count tokens in text using tiktoken."""
    return len(_encoder().encode(text))


class Embedder:
    """Abstract base class for embedding models."""

    dimension: int

    def embed_one(self, text: str) -> List[float]:
        """Embed a single text into a vector."""
        raise NotImplementedError

    def embed(self, texts: List[str]) -> List[List[float]]:
        """Embed multiple texts into vectors, one request at a time."""
        return [self.embed_one(t) for t in texts]


class OllamaEmbedder(Embedder):
    """Embedder backed by an Ollama server's /api/embeddings endpoint."""

    def __init__(self, base_url: str = "http://localhost:11434",
                 model: str = "inke/Qwen3-Embedding-0.6B:latest",
                 dimension: int = 1024, timeout: float = 60,
                 max_tokens: Optional[int] = None,
                 session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.dimension = dimension
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url}/api/embeddings"

    def embed_one(self, text: str) -> List[float]:
        """Request the embedding for one text.

        Raises:
            EmbeddingError: On transport failure, a non-2xx response (the
                response body becomes the message), or a malformed vector
        """
        if self.max_tokens is not None:
            tokens = count_tokens(text)
            if tokens > self.max_tokens:
                logger.warning(
                    f"Input of {tokens} tokens exceeds max_tokens={self.max_tokens} "
                    f"for model {self.model}; it may be truncated"
                )

        try:
            response = self.session.post(
                self.url,
                json={"model": self.model, "prompt": text},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EmbeddingError(f"Embedding service unreachable at {self.url}: {e}") from e

        if not response.ok:
            raise EmbeddingError(response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise EmbeddingError(f"Could not parse embedding response as JSON: {e}") from e

        vector = data.get("embedding") if isinstance(data, dict) else None
        if not vector:
            raise EmbeddingError(f"Embedding response missing 'embedding' key: {data}")
        if len(vector) != self.dimension:
            raise EmbeddingError(
                f"Embedding has dimension {len(vector)}, expected {self.dimension}"
            )
        return [float(x) for x in vector]


class SentenceTransformersEmbedder(Embedder):
    """Embedder using SentenceTransformers library."""

    def __init__(self, model_name: str) -> None:
        from sentence_transformers import SentenceTransformer  # type: ignore
        self.model = SentenceTransformer(model_name)
        self.dimension = int(self.model.get_sentence_embedding_dimension())

    def embed_one(self, text: str) -> List[float]:
        return self.embed([text])[0]

    def embed(self, texts: List[str]) -> List[List[float]]:
        """Embed texts using SentenceTransformers model."""
        try:
            arr = self.model.encode(texts, normalize_embeddings=True, show_progress_bar=False)
        except Exception as e:
            raise EmbeddingError(str(e)) from e
        return [row.tolist() for row in arr]


def make_embedder(cfg: Dict) -> Embedder:
    """Create embedder from config.

    Args:
        cfg: Configuration dictionary

    Returns:
        Embedder instance

    Raises:
        ConfigError: If backend is invalid or dependencies are missing
    """
    from ..config import ConfigError

    emb_cfg = cfg.get("embedding", {})
    backend = str(emb_cfg.get("backend", "ollama")).strip().lower()

    if backend == "ollama":
        return OllamaEmbedder(
            base_url=emb_cfg.get("ollama_url", "http://localhost:11434"),
            model=emb_cfg.get("model", "inke/Qwen3-Embedding-0.6B:latest"),
            dimension=int(emb_cfg.get("vector_size", 1024)),
            timeout=emb_cfg.get("timeout", 60),
            max_tokens=emb_cfg.get("max_tokens"),
        )

    if backend == "sentence_transformers":
        model_name = emb_cfg.get("sentence_transformers_model", "sentence-transformers/all-MiniLM-L6-v2")
        try:
            return SentenceTransformersEmbedder(model_name)
        except ImportError as e:
            raise ConfigError(
                "sentence-transformers is not installed. "
                "Run: pip install 'qadd[local]'"
            ) from e

    raise ConfigError(f"Invalid embedding.backend: {backend!r}")
