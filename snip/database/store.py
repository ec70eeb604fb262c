from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, Mapping

from .locks import ReadWriteLock


class EntityKind(str, Enum):
    """Entity kinds held by the store. Each has its own ID namespace."""

    SNIPPET = "snippet"
    CATEGORY = "category"
    TAG = "tag"


class Store:
    """Single in-memory source of truth shared by all repositories.

    Holds one ID -> entity mapping per kind plus the per-kind counters for the
    next ID to hand out. Everything is guarded by one read/write lock for the
    whole store; the accessors below assume the caller already holds it.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._tables: Dict[EntityKind, Dict[int, Any]] = {kind: {} for kind in EntityKind}
        self._counters: Dict[EntityKind, int] = {kind: 1 for kind in EntityKind}

    @contextmanager
    def read_locked(self) -> Iterator["Store"]:
        with self._lock.read_locked():
            yield self

    @contextmanager
    def write_locked(self) -> Iterator["Store"]:
        with self._lock.write_locked():
            yield self

    def table(self, kind: EntityKind) -> Dict[int, Any]:
        return self._tables[kind]

    def next_id(self, kind: EntityKind) -> int:
        """Hand out the next ID for `kind`. Caller must hold the write lock.

        The counter always advances, so an ID is never handed out twice even
        if the operation that asked for it does not go through.
        """
        new_id = self._counters[kind]
        self._counters[kind] = new_id + 1
        return new_id

    def peek_next_id(self, kind: EntityKind) -> int:
        return self._counters[kind]

    def counters(self) -> Dict[EntityKind, int]:
        return dict(self._counters)

    def replace_all(self, tables: Mapping[EntityKind, Dict[int, Any]], counters: Mapping[EntityKind, int]) -> None:
        """Swap in a complete new state. Caller must hold the write lock."""
        self._tables = {kind: dict(tables.get(kind) or {}) for kind in EntityKind}
        self._counters = {kind: max(int(counters.get(kind) or 1), 1) for kind in EntityKind}

    def reset(self) -> None:
        self.replace_all({}, {})
