from __future__ import annotations

import threading
from typing import Any, ClassVar, Dict, List, Optional

from apidoc.core.errors import StoreNotBound


class ModelStore:
    """In-process record store, one insertion-ordered list per model class."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: Dict[type, List[Any]] = {}

    def add(self, instance: Any) -> Any:
        with self._lock:
            self._records.setdefault(type(instance), []).append(instance)
        return instance

    def first(self, model: type) -> Optional[Any]:
        with self._lock:
            rows = self._records.get(model) or []
            return rows[0] if rows else None

    def all(self, model: type) -> List[Any]:
        with self._lock:
            return list(self._records.get(model) or [])

    def count(self, model: type) -> int:
        with self._lock:
            return len(self._records.get(model) or [])

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class PersistedModel:
    """
    Mixin marking a model as persistence-backed.

        class User(PersistedModel, BaseModel):
            id: int
            name: str

        User.bind_store(store)
        User.first()
    """

    __store__: ClassVar[Optional[ModelStore]] = None

    @classmethod
    def bind_store(cls, store: Optional[ModelStore]) -> None:
        cls.__store__ = store

    @classmethod
    def _require_store(cls) -> ModelStore:
        if cls.__store__ is None:
            raise StoreNotBound(cls.__name__)
        return cls.__store__

    @classmethod
    def first(cls) -> Optional[Any]:
        return cls._require_store().first(cls)

    def save(self) -> Any:
        return type(self)._require_store().add(self)


def is_persisted_model(model: type) -> bool:
    return isinstance(model, type) and issubclass(model, PersistedModel)
