import threading
from typing import Optional

from .models import Document


class DocumentRegistry:
    """Documents ingested in this process, keyed by filename."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._documents: dict[str, Document] = {}

    def register(self, document: Document) -> None:
        with self._lock:
            self._documents[document.document_id] = document

    def get(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    def contains(self, document_id: str) -> bool:
        return document_id in self._documents

    def documents(self) -> list[Document]:
        with self._lock:
            return list(self._documents.values())

    def count(self) -> int:
        return len(self._documents)

    def clear(self) -> int:
        with self._lock:
            removed = len(self._documents)
            self._documents = {}
        return removed
