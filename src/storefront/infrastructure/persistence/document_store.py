"""A small document store: named collections of JSON-compatible dicts.

Every document carries a string ``id``.  Single-document operations are
atomic with respect to each other (they run under the store lock), which
is what makes ``update_one(..., where=...)`` usable as a compare-and-set.

Two backends share the same operations:

* ``MemoryDocumentStore`` keeps collections in process memory and can
  run multi-document transactions (serializable: a transaction holds the
  store lock until it commits or rolls back).
* ``JsonDocumentStore`` keeps one ``<collection>.json`` file per
  collection and has no transactions; callers needing atomicity across
  documents must compensate on failure.
"""

from __future__ import annotations

import copy
import json
import threading
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

Document = dict[str, Any]
Predicate = Callable[[Document], bool]


class DuplicateKeyError(Exception):
    """An insert or update would break a unique index."""

    def __init__(self, collection: str, field: str, value: Any) -> None:
        super().__init__(f"Duplicate key for {collection}.{field}: {value!r}")
        self.collection = collection
        self.field = field
        self.value = value


class Transaction(ABC):

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...


class DocumentStore(ABC):

    supports_transactions: bool = False

    def __init__(self, unique_indexes: Mapping[str, tuple[str, ...]] | None = None) -> None:
        self._unique_indexes = dict(unique_indexes or {})
        self._lock = threading.RLock()

    # --- Storage primitives ---------------------------------------------------

    @abstractmethod
    def _load(self, collection: str) -> dict[str, Document]:
        """Return the collection keyed by document id."""

    @abstractmethod
    def _persist(self, collection: str, docs: dict[str, Document]) -> None:
        """Write the whole collection back."""

    # --- Queries --------------------------------------------------------------

    def find_one(self, collection: str, doc_id: str) -> Document | None:
        with self._lock:
            doc = self._load(collection).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def find(self, collection: str, predicate: Predicate | None = None) -> list[Document]:
        with self._lock:
            docs = self._load(collection).values()
            return [copy.deepcopy(d) for d in docs if predicate is None or predicate(d)]

    # --- Writes ---------------------------------------------------------------

    def insert_one(self, collection: str, doc: Document) -> Document:
        with self._lock:
            docs = self._load(collection)
            new_doc = copy.deepcopy(doc)
            if not new_doc.get("id"):
                new_doc["id"] = uuid.uuid4().hex
            if new_doc["id"] in docs:
                raise DuplicateKeyError(collection, "id", new_doc["id"])
            self._check_unique(collection, docs, new_doc)
            docs[new_doc["id"]] = new_doc
            self._persist(collection, docs)
            return copy.deepcopy(new_doc)

    def replace_one(self, collection: str, doc: Document, upsert: bool = False) -> int:
        with self._lock:
            docs = self._load(collection)
            if doc["id"] not in docs and not upsert:
                return 0
            new_doc = copy.deepcopy(doc)
            self._check_unique(collection, docs, new_doc)
            docs[new_doc["id"]] = new_doc
            self._persist(collection, docs)
            return 1

    def update_one(
        self,
        collection: str,
        doc_id: str,
        *,
        where: Predicate | None = None,
        set_fields: Mapping[str, Any] | None = None,
        inc: Mapping[str, int] | None = None,
    ) -> Document | None:
        """Apply ``set_fields`` and ``inc`` to one document.

        The change applies only if the document exists and ``where`` (when
        given) holds for its current state; the check and the write happen
        under the same lock.  Returns the updated document, or None if
        nothing matched.
        """
        with self._lock:
            docs = self._load(collection)
            current = docs.get(doc_id)
            if current is None or (where is not None and not where(current)):
                return None
            updated = copy.deepcopy(current)
            updated.update(set_fields or {})
            for key, delta in (inc or {}).items():
                updated[key] = updated.get(key, 0) + delta
            self._check_unique(collection, docs, updated)
            docs[doc_id] = updated
            self._persist(collection, docs)
            return copy.deepcopy(updated)

    def delete_one(self, collection: str, doc_id: str) -> int:
        with self._lock:
            docs = self._load(collection)
            if docs.pop(doc_id, None) is None:
                return 0
            self._persist(collection, docs)
            return 1

    # --- Transactions ---------------------------------------------------------

    def begin_transaction(self) -> Transaction:
        raise NotImplementedError(
            f"{type(self).__name__} does not support multi-document transactions"
        )

    # --- Internal helpers -----------------------------------------------------

    def _check_unique(self, collection: str, docs: dict[str, Document], doc: Document) -> None:
        for field in self._unique_indexes.get(collection, ()):
            value = doc.get(field)
            if value is None:
                continue
            for other in docs.values():
                if other["id"] != doc["id"] and other.get(field) == value:
                    raise DuplicateKeyError(collection, field, value)


class MemoryDocumentStore(DocumentStore):

    def __init__(
        self,
        unique_indexes: Mapping[str, tuple[str, ...]] | None = None,
        transactions: bool = True,
    ) -> None:
        super().__init__(unique_indexes)
        self._collections: dict[str, dict[str, Document]] = {}
        self.supports_transactions = transactions

    def _load(self, collection: str) -> dict[str, Document]:
        return self._collections.setdefault(collection, {})

    def _persist(self, collection: str, docs: dict[str, Document]) -> None:
        self._collections[collection] = docs

    def begin_transaction(self) -> Transaction:
        if not self.supports_transactions:
            return super().begin_transaction()
        return _MemoryTransaction(self)


class _MemoryTransaction(Transaction):
    """Holds the store lock from begin to commit/rollback.

    The lock is re-entrant, so the owning thread's own reads and writes
    go through while every other thread waits.
    """

    def __init__(self, store: MemoryDocumentStore) -> None:
        self._store = store
        store._lock.acquire()
        try:
            self._snapshot = copy.deepcopy(store._collections)
        except BaseException:
            store._lock.release()
            raise
        self._open = True

    def commit(self) -> None:
        self._close()

    def rollback(self) -> None:
        if self._open:
            self._store._collections = self._snapshot
        self._close()

    def _close(self) -> None:
        if self._open:
            self._open = False
            self._store._lock.release()


class JsonDocumentStore(DocumentStore):
    """One JSON array per collection under *data_dir*.

    The lock only serializes writers inside this process.
    """

    def __init__(
        self,
        data_dir: Path,
        unique_indexes: Mapping[str, tuple[str, ...]] | None = None,
    ) -> None:
        super().__init__(unique_indexes)
        self._data_dir = Path(data_dir)

    # --- File helpers ---------------------------------------------------------

    def _path(self, collection: str) -> Path:
        return self._data_dir / f"{collection}.json"

    def _load(self, collection: str) -> dict[str, Document]:
        path = self._path(collection)
        if not path.exists():
            return {}
        raw = json.loads(path.read_text(encoding="utf-8"))
        return {doc["id"]: doc for doc in raw}

    def _persist(self, collection: str, docs: dict[str, Document]) -> None:
        path = self._path(collection)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(list(docs.values()), indent=2) + "\n", encoding="utf-8")
        tmp.replace(path)
