from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from snip.domain.entities.category import Category
from snip.domain.entities.snippet import Snippet
from snip.domain.entities.tag import Tag

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """CRUD contract shared by every entity kind.

    Domain defines the contract; the storage layer implements it.
    """

    @abstractmethod
    def list(self) -> List[T]:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, entity_id: int) -> T:
        raise NotImplementedError

    @abstractmethod
    def create(self, entity: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, entity: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, entity_id: int) -> None:
        raise NotImplementedError


class ICategoryRepository(IRepository[Category]):
    @abstractmethod
    def find_by_name(self, name: str) -> Category:
        raise NotImplementedError


class ITagRepository(IRepository[Tag]):
    @abstractmethod
    def find_by_name(self, name: str) -> Tag:
        raise NotImplementedError


class ISnippetRepository(IRepository[Snippet]):
    @abstractmethod
    def search(self, query: str) -> Optional[List[Snippet]]:
        raise NotImplementedError

    @abstractmethod
    def find_by_language(self, language: str) -> List[Snippet]:
        raise NotImplementedError

    @abstractmethod
    def find_by_category(self, category_id: int) -> List[Snippet]:
        raise NotImplementedError

    @abstractmethod
    def find_by_tag(self, tag_id: int) -> List[Snippet]:
        raise NotImplementedError
