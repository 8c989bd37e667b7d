"""Indexer Interface."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Generic, List, TypeVar

from ..core.embeddings import Embedder, EmbeddingError
from ..storage.base import Point, VectorStore, VectorStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclasses.dataclass
class IngestSummary:
    """Outcome of one ingestion run."""

    kind: str
    file: str
    collection: str
    succeeded: int
    total: int

    @property
    def skipped(self) -> int:
        return self.total - self.succeeded

    def __str__(self) -> str:
        return f"{self.succeeded}/{self.total}"


def utc_timestamp() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat()


class Indexer(Generic[T]):
    """Abstract base class for the embed -> batch -> upsert pipeline.

    Subclasses produce the items for one file and describe how each item is
    embedded and stored. Items are embedded strictly in order; a failed
    embedding skips that item only. Store failures abort the run unless
    ``upsert_failures_fatal`` is False, in which case the failed batch is
    skipped.
    """

    kind = "items"
    upsert_failures_fatal = True

    def __init__(self, embedder: Embedder, store: VectorStore, batch_size: int = 64):
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.embedder = embedder
        self.store = store
        self.batch_size = batch_size

    def collect(self, path: Path) -> List[T]:
        raise NotImplementedError

    def item_text(self, item: T) -> str:
        raise NotImplementedError

    def item_payload(self, item: T, file_name: str) -> Dict[str, Any]:
        raise NotImplementedError

    def item_label(self, item: T, position: int) -> str:
        return f"item {position}"

    def index(self, path: Path) -> IngestSummary:
        path = Path(path)
        items = self.collect(path)
        logger.info(f"{path.name}: {len(items)} {self.kind} to index")

        self.store.ensure_collection(self.embedder.dimension)

        done = self._embed_and_upsert(items, path.name)
        summary = IngestSummary(
            kind=self.kind,
            file=path.name,
            collection=self.store.collection_name,
            succeeded=done,
            total=len(items),
        )
        logger.info(f"{self.kind}: upserted {summary} into {summary.collection}")
        return summary

    def _embed_and_upsert(self, items: List[T], file_name: str) -> int:
        pending: List[Point] = []
        labels: List[str] = []
        done = 0

        for i, item in enumerate(items):
            try:
                vector = self.embedder.embed_one(self.item_text(item))
            except EmbeddingError as e:
                logger.error(f"Skip {self.item_label(item, i)}: {e}")
            else:
                pending.append(
                    Point(
                        id=str(uuid.uuid4()),
                        vector=vector,
                        payload=self.item_payload(item, file_name),
                    )
                )
                labels.append(self.item_label(item, i))

            is_last = i == len(items) - 1
            if pending and (len(pending) >= self.batch_size or is_last):
                batch, pending = pending, []
                batch_labels, labels = labels, []
                try:
                    self.store.upsert(batch)
                except VectorStoreError as e:
                    if self.upsert_failures_fatal:
                        raise
                    logger.error(f"Skip {', '.join(batch_labels)}: {e}")
                else:
                    done += len(batch)
                    logger.info(f"upserted {len(batch)} (total {done}/{len(items)})")

        return done
