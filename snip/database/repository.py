from __future__ import annotations

from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, TypeVar

from snip.domain.entities.category import Category
from snip.domain.entities.named import NamedEntity
from snip.domain.entities.snippet import Snippet, unique_tag_ids
from snip.domain.entities.tag import Tag
from snip.domain.interfaces.repository_interface import (
    ICategoryRepository,
    ISnippetRepository,
    ITagRepository,
)

from . import search as _search
from .errors import DuplicateNameError, NotFoundError
from .store import EntityKind, Store


class Entity(Protocol):
    id: int

    def clone(self) -> Any:
        ...


E = TypeVar("E", bound=Entity)
N = TypeVar("N", bound=NamedEntity)


class Repository(Generic[E]):
    """Generic CRUD façade over one entity kind of a shared Store.

    Every call holds the store lock for its whole duration and hands back
    clones, so callers can never reach the stored objects. Methods raise
    instead of logging.
    """

    def __init__(self, store: Store, kind: EntityKind) -> None:
        self._store = store
        self._kind = kind

    @property
    def kind(self) -> EntityKind:
        return self._kind

    def list(self) -> List[E]:
        with self._store.read_locked() as store:
            table = store.table(self._kind)
            return [table[k].clone() for k in sorted(table)]

    def find_by_id(self, entity_id: int) -> E:
        with self._store.read_locked() as store:
            entity = store.table(self._kind).get(entity_id)
            if entity is None:
                raise NotFoundError(self._kind.value, entity_id)
            return entity.clone()

    def create(self, entity: E) -> None:
        """Insert a copy of `entity` under a fresh ID and set that ID on `entity`.

        Any ID already on `entity` is ignored.
        """
        stored = self._prepare(entity.clone())
        with self._store.write_locked() as store:
            table = store.table(self._kind)
            self._check_conflicts(table, stored, exclude_id=None)
            new_id = store.next_id(self._kind)
            stored.id = new_id
            table[new_id] = stored
            entity.id = new_id

    def update(self, entity: E) -> None:
        """Replace the stored entity with a copy of `entity` (no field merge)."""
        stored = self._prepare(entity.clone())
        with self._store.write_locked() as store:
            table = store.table(self._kind)
            if stored.id not in table:
                raise NotFoundError(self._kind.value, stored.id)
            self._check_conflicts(table, stored, exclude_id=stored.id)
            table[stored.id] = stored

    def delete(self, entity_id: int) -> None:
        with self._store.write_locked() as store:
            table = store.table(self._kind)
            if entity_id not in table:
                raise NotFoundError(self._kind.value, entity_id)
            del table[entity_id]

    def count(self) -> int:
        with self._store.read_locked() as store:
            return len(store.table(self._kind))

    # ---------- Helpers for subclasses ----------
    def _select(self, pick: Callable[[List[E]], Optional[List[E]]]) -> Optional[List[E]]:
        """Run `pick` over the stored entities (ascending ID) under the read lock and clone the result."""
        with self._store.read_locked() as store:
            table = store.table(self._kind)
            picked = pick([table[k] for k in sorted(table)])
            if picked is None:
                return None
            return [e.clone() for e in picked]

    def _prepare(self, stored: E) -> E:
        """Normalize the copy about to be stored. Runs before the write lock is taken."""
        return stored

    def _check_conflicts(self, table: Dict[int, E], entity: E, exclude_id: Optional[int]) -> None:
        """Hook run under the write lock before create/update. Default: no constraints."""
        return None


class NamedRepository(Repository[N]):
    """Repository for kinds identified by a unique, case-sensitive name."""

    def find_by_name(self, name: str) -> N:
        with self._store.read_locked() as store:
            table = store.table(self._kind)
            for k in sorted(table):
                if table[k].name == name:
                    return table[k].clone()
        raise NotFoundError(self._kind.value, name)

    def _check_conflicts(self, table: Dict[int, N], entity: N, exclude_id: Optional[int]) -> None:
        for existing_id, existing in table.items():
            if existing_id != exclude_id and existing.name == entity.name:
                raise DuplicateNameError(self._kind.value, entity.name)


class CategoryRepository(NamedRepository[Category], ICategoryRepository):
    def __init__(self, store: Store) -> None:
        super().__init__(store, EntityKind.CATEGORY)


class TagRepository(NamedRepository[Tag], ITagRepository):
    def __init__(self, store: Store) -> None:
        super().__init__(store, EntityKind.TAG)


class SnippetRepository(Repository[Snippet], ISnippetRepository):
    """Snippet CRUD plus the search/filter scans."""

    def __init__(self, store: Store) -> None:
        super().__init__(store, EntityKind.SNIPPET)

    def _prepare(self, stored: Snippet) -> Snippet:
        # tags may have been reassigned after construction
        stored.tags = unique_tag_ids(stored.tags)
        return stored

    def search(self, query: str) -> Optional[List[Snippet]]:
        if not query:
            return None
        return self._select(lambda snippets: _search.search(snippets, query))

    def find_by_language(self, language: str) -> List[Snippet]:
        return self._select(lambda snippets: _search.filter_by_language(snippets, language)) or []

    def find_by_category(self, category_id: int) -> List[Snippet]:
        return self._select(lambda snippets: _search.filter_by_category(snippets, category_id)) or []

    def find_by_tag(self, tag_id: int) -> List[Snippet]:
        return self._select(lambda snippets: _search.filter_by_tag(snippets, tag_id)) or []
