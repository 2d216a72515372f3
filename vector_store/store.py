"""
In-Memory Vector Store - Append-only collection of VectorRecords

Design:
- Records live in an immutable tuple; an append builds a new tuple and
  swaps the reference under a lock, so readers always hold either the
  pre- or the post-append state.
- A batch is validated completely before anything becomes visible:
  uniform dimensionality (with the store's existing dimension) and unique
  record ids.
- ``clear`` is the only way to remove records.

Usage:
    from vector_store import InMemoryVectorStore

    store = InMemoryVectorStore()
    store.append(records)
    snapshot = store.all()
"""

import logging
import threading
from typing import Optional, Sequence

from .exceptions import DimensionMismatchError, DuplicateRecordError
from .models import VectorRecord

logger = logging.getLogger(__name__)


class InMemoryVectorStore:
    """Process-local vector storage with all-or-nothing batch appends."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: tuple[VectorRecord, ...] = ()
        self._ids: frozenset[str] = frozenset()
        self._dimensions: Optional[int] = None

    @property
    def dimensions(self) -> Optional[int]:
        """Dimension shared by every stored embedding (None while empty)."""
        return self._dimensions

    def append(self, records: Sequence[VectorRecord]) -> None:
        """
        Store a batch of records. Either every record is stored or none is.

        Raises:
            DimensionMismatchError: If the batch mixes dimensions or differs
                from the vectors already stored.
            DuplicateRecordError: If a record id is repeated or already stored.
        """
        batch = tuple(records)
        if not batch:
            return

        with self._lock:
            dimensions = self._validate(batch)
            self._records = self._records + batch
            self._ids = self._ids | {record.record_id for record in batch}
            self._dimensions = dimensions

        logger.debug("Appended %d records (total %d)", len(batch), len(self._records))

    def all(self) -> tuple[VectorRecord, ...]:
        """Return a read-only snapshot of all records in insertion order."""
        return self._records

    def count(self) -> int:
        """Return the total number of records in the store."""
        return len(self._records)

    def clear(self) -> None:
        """Remove every record."""
        with self._lock:
            removed = len(self._records)
            self._records = ()
            self._ids = frozenset()
            self._dimensions = None
        logger.info("Cleared vector store (%d records removed)", removed)

    def _validate(self, batch: tuple[VectorRecord, ...]) -> int:
        expected = self._dimensions or batch[0].dimensions
        seen: set[str] = set()
        for record in batch:
            if record.dimensions != expected:
                raise DimensionMismatchError(expected, record.dimensions, record.record_id)
            if record.record_id in self._ids or record.record_id in seen:
                raise DuplicateRecordError(record.record_id)
            seen.add(record.record_id)
        return expected
