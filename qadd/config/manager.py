"""Configuration management for qadd."""

from __future__ import annotations

import copy
import os
from typing import Any, Dict, Optional


class ConfigError(Exception):
    """Raised when configuration is invalid."""


EMBEDDING_BACKENDS = ("ollama", "sentence_transformers")


DEFAULT_CONFIG: Dict = {
    "vector_store": {
        "backend": "qdrant",
        "qdrant": {
            "url": "http://localhost:6333",
            "timeout": None,
        },
    },
    "embedding": {
        "backend": "ollama",
        "ollama_url": "http://localhost:11434",
        "model": "inke/Qwen3-Embedding-0.6B:latest",
        "vector_size": 1024,
        "timeout": 60,
        # Warn when an input exceeds this many tokens (None disables the check)
        "max_tokens": None,
        "sentence_transformers_model": "sentence-transformers/all-MiniLM-L6-v2",
    },
    "chunking": {
        "strategy": "paragraph",
        "target_chars": 1200,
        "overlap_chars": 200,
        "batch_size": 64,
    },
    "code": {
        "language": None,
        "class_context": "document",
        "batch_size": 1,
        "snippet_chars": 1000,
    },
}

# Environment variable -> (section path, converter)
ENV_OVERRIDES = {
    "QDRANT_URL": (("vector_store", "qdrant", "url"), str),
    "OLLAMA_URL": (("embedding", "ollama_url"), str),
    "QADD_EMBED_MODEL": (("embedding", "model"), str),
    "QADD_VECTOR_SIZE": (("embedding", "vector_size"), int),
    "QADD_EMBED_BACKEND": (("embedding", "backend"), str),
    "QADD_MAX_TOKENS": (("embedding", "max_tokens"), int),
}


def _merge(base: Dict, overrides: Dict) -> Dict:
    """Recursively merge overrides into base, skipping None values."""
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _set_path(cfg: Dict, path, value: Any) -> None:
    node = cfg
    for key in path[:-1]:
        node = node.setdefault(key, {})
    node[path[-1]] = value


def validate_config(config: Dict) -> None:
    """Validate configuration values.

    Raises:
        ConfigError: On the first invalid value
    """
    chunking = config["chunking"]
    if chunking["strategy"] not in ("paragraph", "recursive"):
        raise ConfigError(f"Invalid chunking.strategy: {chunking['strategy']!r}")
    if int(chunking["target_chars"]) <= 0:
        raise ConfigError("chunking.target_chars must be a positive integer")
    if int(chunking["overlap_chars"]) < 0:
        raise ConfigError("chunking.overlap_chars must be >= 0")
    if int(chunking["batch_size"]) < 1:
        raise ConfigError("chunking.batch_size must be >= 1")

    code = config["code"]
    if code["class_context"] not in ("document", "lexical"):
        raise ConfigError(f"Invalid code.class_context: {code['class_context']!r}")
    if int(code["batch_size"]) < 1:
        raise ConfigError("code.batch_size must be >= 1")
    if int(code["snippet_chars"]) < 0:
        raise ConfigError("code.snippet_chars must be >= 0")

    embedding = config["embedding"]
    if embedding["backend"] not in EMBEDDING_BACKENDS:
        raise ConfigError(f"Invalid embedding.backend: {embedding['backend']!r}")
    if int(embedding["vector_size"]) <= 0:
        raise ConfigError("embedding.vector_size must be a positive integer")
    if embedding["max_tokens"] is not None and int(embedding["max_tokens"]) <= 0:
        raise ConfigError("embedding.max_tokens must be a positive integer")
    if config["vector_store"]["backend"] != "qdrant":
        raise ConfigError(f"Invalid vector_store.backend: {config['vector_store']['backend']!r}")


def load_config(overrides: Optional[Dict] = None) -> Dict:
    """Load configuration.

    Starts from DEFAULT_CONFIG, applies environment overrides, then the
    given overrides (typically command-line options).
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Override from environment
    for var, (path, convert) in ENV_OVERRIDES.items():
        raw = os.getenv(var)
        if raw:
            try:
                _set_path(config, path, convert(raw))
            except ValueError as e:
                raise ConfigError(f"Invalid value for {var}: {raw!r}") from e

    if overrides:
        _merge(config, overrides)

    validate_config(config)
    return config
