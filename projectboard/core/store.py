# projectboard/core/store.py
"""
Key-value storage boundary.

Everything the API persists goes through :class:`KeyValueStore`: plain
get/set/delete, a prefix scan, and an atomic read-modify-write (``update``)
used for every list-valued key (``admin_users``, ``admin_requests``) and for
project edits.
"""
from __future__ import annotations

import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from google.cloud import firestore

Updater = Callable[[Optional[Any]], Any]


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    @abstractmethod
    def get_by_prefix(self, prefix: str) -> List[Any]:
        """Values of every key starting with ``prefix``, in key order."""

    @abstractmethod
    def update(self, key: str, fn: Updater) -> Any:
        """
        Atomically replace the value at ``key`` with ``fn(current)``.

        ``current`` is ``None`` when the key is missing. If ``fn`` raises,
        nothing is written and the exception propagates. ``fn`` must not
        call back into the store.
        """


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local store.

    Writes to a key (``set``, ``delete``, ``update``) hold that key's lock, so
    a delete cannot be undone by an ``update`` that read the value earlier.
    Keys share a fixed pool of locks.
    """

    LOCK_STRIPES = 64

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._data_lock = threading.Lock()
        self._key_locks = [threading.Lock() for _ in range(self.LOCK_STRIPES)]

    def _lock_for(self, key: str) -> threading.Lock:
        return self._key_locks[hash(key) % len(self._key_locks)]

    def _write(self, key: str, value: Any) -> None:
        with self._data_lock:
            self._data[key] = copy.deepcopy(value)

    def get(self, key: str) -> Optional[Any]:
        with self._data_lock:
            return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._lock_for(key):
            self._write(key, value)

    def delete(self, key: str) -> None:
        with self._lock_for(key):
            with self._data_lock:
                self._data.pop(key, None)

    def get_by_prefix(self, prefix: str) -> List[Any]:
        with self._data_lock:
            return [
                copy.deepcopy(self._data[k])
                for k in sorted(self._data)
                if k.startswith(prefix)
            ]

    def update(self, key: str, fn: Updater) -> Any:
        with self._lock_for(key):
            new_value = fn(self.get(key))
            self._write(key, new_value)
            return copy.deepcopy(new_value)


class FirestoreKeyValueStore(KeyValueStore):
    """
    One Firestore document per key inside a single collection.

    Documents look like ``{"key": <key>, "value": <value>}``; the document id
    is the key itself.
    """

    def __init__(self, db: firestore.Client, collection: str = "kv_store"):
        self._db = db
        self._col = db.collection(collection)

    def get(self, key: str) -> Optional[Any]:
        snap = self._col.document(key).get()
        if not snap.exists:
            return None
        return (snap.to_dict() or {}).get("value")

    def set(self, key: str, value: Any) -> None:
        self._col.document(key).set({"key": key, "value": value})

    def delete(self, key: str) -> None:
        self._col.document(key).delete()

    def get_by_prefix(self, prefix: str) -> List[Any]:
        q = (self._col
               .where("key", ">=", prefix)
               .where("key", "<", prefix + "\uf8ff")
               .order_by("key"))
        return [(d.to_dict() or {}).get("value") for d in q.stream()]

    def update(self, key: str, fn: Updater) -> Any:
        ref = self._col.document(key)

        @firestore.transactional
        def _apply(transaction):
            snap = ref.get(transaction=transaction)
            current = (snap.to_dict() or {}).get("value") if snap.exists else None
            new_value = fn(current)
            transaction.set(ref, {"key": key, "value": new_value})
            return new_value

        return _apply(self._db.transaction())
