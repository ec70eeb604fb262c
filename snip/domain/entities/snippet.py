from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from snip.domain.errors import EmptyCodeError, EmptyLanguageError, EmptyTitleError
from snip.domain.timestamps import isoformat, parse_iso, utcnow


def unique_tag_ids(values) -> List[int]:
    """Ordered tag IDs without duplicates; None yields an empty list."""
    seen = set()
    out: List[int] = []
    for v in values or []:
        tag_id = int(v)
        if tag_id in seen:
            continue
        seen.add(tag_id)
        out.append(tag_id)
    return out


@dataclass
class Snippet:
    """Code snippet with metadata.

    `category_id` is a soft reference (0 means uncategorized) and `tags` is an
    ordered list of tag IDs without duplicates. Neither is checked against the
    existing categories/tags.
    """

    title: str
    language: str
    code: str
    description: str = ""
    category_id: int = 0
    tags: List[int] = field(default_factory=list)
    id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not self.title:
            raise EmptyTitleError()
        if not self.language:
            raise EmptyLanguageError()
        if not self.code:
            raise EmptyCodeError()
        self.description = self.description or ""
        self.category_id = int(self.category_id or 0)
        self.tags = unique_tag_ids(self.tags)
        self.created_at = parse_iso(self.created_at) or utcnow()
        self.updated_at = parse_iso(self.updated_at) or self.created_at

    @property
    def tag_ids(self) -> List[int]:
        """Copy of the tag IDs; mutating it does not touch the snippet."""
        return list(self.tags or [])

    def set_title(self, title: str) -> None:
        if not title:
            raise EmptyTitleError()
        self.title = title
        self._touch()

    def set_language(self, language: str) -> None:
        if not language:
            raise EmptyLanguageError()
        self.language = language
        self._touch()

    def set_code(self, code: str) -> None:
        if not code:
            raise EmptyCodeError()
        self.code = code
        self._touch()

    def set_description(self, description: str) -> None:
        self.description = description or ""
        self._touch()

    def set_category(self, category_id: int) -> None:
        self.category_id = int(category_id)
        self._touch()

    def add_tag(self, tag_id: int) -> None:
        # already present: no-op
        if tag_id in self.tags:
            return
        self.tags.append(int(tag_id))
        self._touch()

    def remove_tag(self, tag_id: int) -> None:
        if tag_id not in self.tags:
            return
        self.tags.remove(tag_id)
        self._touch()

    def has_tag(self, tag_id: int) -> bool:
        return tag_id in self.tags

    def clone(self) -> "Snippet":
        return copy.deepcopy(self)

    def _touch(self) -> None:
        self.updated_at = utcnow()

    # ---------- Mapping helpers ----------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "language": self.language,
            "code": self.code,
            "description": self.description,
            "category_id": self.category_id,
            "tags": list(self.tags),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Snippet":
        tags = d.get("tags")
        if tags is not None and not isinstance(tags, list):
            raise ValueError(f"snippet tags must be a list, got {type(tags).__name__}")
        return cls(
            id=int(d.get("id") or 0),
            title=str(d.get("title") or ""),
            language=str(d.get("language") or ""),
            code=str(d.get("code") or ""),
            description=str(d.get("description") or ""),
            category_id=int(d.get("category_id") or 0),
            tags=list(tags or []),
            created_at=parse_iso(d.get("created_at")),
            updated_at=parse_iso(d.get("updated_at")),
        )

    def __str__(self) -> str:
        return f"Snippet{{id={self.id}, title={self.title!r}, language={self.language!r}}}"
