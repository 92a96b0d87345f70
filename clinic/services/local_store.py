"""
Client-local key-value persistence for offline pages.

Three named collections (``records``, ``appointments``, ``inventory``)
are exposed through one small interface: :meth:`ObjectStore.put_item`,
:meth:`ObjectStore.get_all` and :meth:`ObjectStore.delete_item`.  Every
stored value is a JSON object carrying its own ``id``.

Two backends implement it:

* :class:`StructuredStore` keeps one SQLite table per collection keyed by
  ``id``.  This is the preferred engine.
* :class:`FallbackStore` keeps a flat JSON array per collection under the
  key ``nabha-health-db:<collection>`` in a single JSON file, the way a
  browser keeps ``localStorage``.

:func:`open_store` picks the backend once, by capability check, and the
rest of the code only ever sees the interface.  Backend failures surface
as :class:`StoreError`; the fallback does not hide failed writes.
"""
from __future__ import annotations

import json
import logging
import os
import random
import sqlite3
import string
import threading
import time
from contextlib import closing
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from django.conf import settings

logger = logging.getLogger(__name__)

STORE_NAME = 'nabha-health-db'
COLLECTIONS = ('records', 'appointments', 'inventory')

_BASE36 = string.digits + string.ascii_lowercase


class StoreError(Exception):
    """A local store operation failed."""


def _base36(n: int) -> str:
    if n == 0:
        return '0'
    out = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_BASE36[rem])
    return ''.join(reversed(out))


def uid(prefix: str = 'id') -> str:
    """``<prefix>_<7 random base-36 chars>_<base-36 epoch millis>``.

    Unique enough for a single writer; not a sequence.
    """
    fragment = ''.join(random.choices(_BASE36, k=7))
    return f'{prefix}_{fragment}_{_base36(int(time.time() * 1000))}'


class ObjectStore:
    """Interface shared by the backends."""

    backend = 'abstract'

    def put_item(self, collection: str, value: dict) -> None:
        raise NotImplementedError

    def get_all(self, collection: str) -> list[dict]:
        raise NotImplementedError

    def delete_item(self, collection: str, item_id: str) -> None:
        raise NotImplementedError

    @staticmethod
    def _check_collection(collection: str) -> None:
        if collection not in COLLECTIONS:
            raise StoreError(f'unknown collection {collection!r}')

    @staticmethod
    def _item_id(value: Any) -> str:
        if not isinstance(value, dict) or not value.get('id'):
            raise StoreError('stored values must be objects with an "id"')
        return str(value['id'])


class StructuredStore(ObjectStore):
    """SQLite backed store, one table per collection."""

    backend = 'structured'
    filename = f'{STORE_NAME}.sqlite3'

    def __init__(self, directory: Path):
        self.path = Path(directory) / self.filename
        self._init_schema()

    @classmethod
    def available(cls, directory: Path) -> bool:
        try:
            Path(directory).mkdir(parents=True, exist_ok=True)
            cls(directory)
        except (OSError, sqlite3.Error, StoreError) as exc:
            logger.warning('Structured store unavailable in %s: %s', directory, exc)
            return False
        return True

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path, timeout=5)

    def _init_schema(self) -> None:
        try:
            with closing(self._connect()) as conn, conn:
                for name in COLLECTIONS:
                    conn.execute(
                        f'CREATE TABLE IF NOT EXISTS "{name}" (id TEXT PRIMARY KEY, value TEXT NOT NULL)'
                    )
        except sqlite3.Error as exc:
            raise StoreError(f'cannot open {self.path}: {exc}') from exc

    def put_item(self, collection: str, value: dict) -> None:
        self._check_collection(collection)
        item_id = self._item_id(value)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    f'INSERT OR REPLACE INTO "{collection}" (id, value) VALUES (?, ?)',
                    (item_id, json.dumps(value)),
                )
        except sqlite3.Error as exc:
            raise StoreError(f'put into {collection} failed: {exc}') from exc

    def get_all(self, collection: str) -> list[dict]:
        self._check_collection(collection)
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(f'SELECT value FROM "{collection}" ORDER BY id').fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f'read of {collection} failed: {exc}') from exc
        return [json.loads(value) for (value,) in rows]

    def delete_item(self, collection: str, item_id: str) -> None:
        self._check_collection(collection)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(f'DELETE FROM "{collection}" WHERE id = ?', (str(item_id),))
        except sqlite3.Error as exc:
            raise StoreError(f'delete from {collection} failed: {exc}') from exc


class FallbackStore(ObjectStore):
    """Flat JSON arrays per collection, all kept in one key/value file."""

    backend = 'fallback'
    filename = 'localStorage.json'

    def __init__(self, directory: Path):
        self.path = Path(directory) / self.filename
        self._lock = threading.Lock()

    @staticmethod
    def key(collection: str) -> str:
        return f'{STORE_NAME}:{collection}'

    def _read_storage(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StoreError(f'cannot read {self.path}: {exc}') from exc
        try:
            storage = json.loads(raw)
        except ValueError:
            logger.warning('Discarding unreadable local storage file %s', self.path)
            return {}
        return storage if isinstance(storage, dict) else {}

    def _read_all(self, storage: dict[str, str], collection: str) -> list[dict]:
        raw = storage.get(self.key(collection))
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError:
            logger.warning('Discarding unreadable %s entry', self.key(collection))
            return []
        return items if isinstance(items, list) else []

    def _write_all(self, storage: dict[str, str], collection: str, items: list[dict]) -> None:
        storage[self.key(collection)] = json.dumps(items)
        tmp = self.path.with_suffix('.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(storage), encoding='utf-8')
            os.replace(tmp, self.path)
        except OSError as exc:
            raise StoreError(f'write of {self.key(collection)} failed: {exc}') from exc

    def put_item(self, collection: str, value: dict) -> None:
        self._check_collection(collection)
        item_id = self._item_id(value)
        with self._lock:
            storage = self._read_storage()
            items = self._read_all(storage, collection)
            for idx, existing in enumerate(items):
                if str(existing.get('id')) == item_id:
                    items[idx] = value
                    break
            else:
                items.append(value)
            self._write_all(storage, collection, items)

    def get_all(self, collection: str) -> list[dict]:
        self._check_collection(collection)
        with self._lock:
            return self._read_all(self._read_storage(), collection)

    def delete_item(self, collection: str, item_id: str) -> None:
        self._check_collection(collection)
        with self._lock:
            storage = self._read_storage()
            items = self._read_all(storage, collection)
            kept = [x for x in items if str(x.get('id')) != str(item_id)]
            if len(kept) != len(items):
                self._write_all(storage, collection, kept)


def open_store(backend: str = 'auto', directory: Optional[Path] = None) -> ObjectStore:
    """Choose and open a backend.

    ``backend`` is ``auto``, ``structured`` or ``fallback``.  ``auto``
    prefers the structured store and falls back when it cannot be opened.
    """
    directory = Path(directory or settings.LOCAL_STORE_DIR)
    if backend == 'fallback':
        store: ObjectStore = FallbackStore(directory)
    elif backend == 'structured':
        directory.mkdir(parents=True, exist_ok=True)
        store = StructuredStore(directory)
    elif backend == 'auto':
        if StructuredStore.available(directory):
            store = StructuredStore(directory)
        else:
            store = FallbackStore(directory)
    else:
        raise StoreError(f'unknown local store backend {backend!r}')
    logger.info('Local store: %s backend in %s', store.backend, directory)
    return store


@lru_cache(maxsize=1)
def get_store() -> ObjectStore:
    """Process-wide store configured from settings."""
    return open_store(settings.LOCAL_STORE_BACKEND, settings.LOCAL_STORE_DIR)
