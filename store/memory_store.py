"""
In-process document store for portfolios and trades.

Documents are pydantic models keyed by an opaque hex id. Reads return copies,
so callers never mutate stored state by accident. A lookup for an unknown
id returns None (or False for delete) and the HTTP layer turns that into 404.
"""
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel

from libs.domain_models.portfolio import Portfolio
from libs.domain_models.trade import Trade

T = TypeVar("T", bound=BaseModel)


def new_id() -> str:
    return uuid.uuid4().hex


class DocumentCollection(Generic[T]):

    def __init__(self, model: type[T], touch_field: Optional[str] = None):
        self._model = model
        self._touch_field = touch_field   # timestamp refreshed on every update
        self._docs: dict[str, T] = {}
        self._lock = threading.Lock()

    def insert(self, data: dict[str, Any]) -> T:
        doc = self._model.model_validate({**data, "id": new_id()})
        with self._lock:
            self._docs[doc.id] = doc
        return doc.model_copy(deep=True)

    def all(self, where: Optional[Callable[[T], bool]] = None) -> list[T]:
        with self._lock:
            docs = list(self._docs.values())
        return [d.model_copy(deep=True) for d in docs if where is None or where(d)]

    def get(self, doc_id: str) -> Optional[T]:
        with self._lock:
            doc = self._docs.get(doc_id)
        return doc.model_copy(deep=True) if doc else None

    def update(self, doc_id: str, changes: dict[str, Any]) -> Optional[T]:
        with self._lock:
            current = self._docs.get(doc_id)
            if current is None:
                return None
            merged = {**current.model_dump(), **changes, "id": doc_id}
            if self._touch_field:
                merged[self._touch_field] = datetime.now(timezone.utc)
            doc = self._model.model_validate(merged)
            self._docs[doc_id] = doc
        return doc.model_copy(deep=True)

    def delete(self, doc_id: str) -> bool:
        with self._lock:
            return self._docs.pop(doc_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._docs)


class MemoryStore:
    """Holds every collection the API serves."""

    def __init__(self):
        self.portfolios: DocumentCollection[Portfolio] = DocumentCollection(Portfolio, touch_field="updated_at")
        self.trades: DocumentCollection[Trade] = DocumentCollection(Trade)
