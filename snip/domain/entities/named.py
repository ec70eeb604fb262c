from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from snip.domain.errors import EmptyNameError
from snip.domain.timestamps import isoformat, parse_iso, utcnow


@dataclass
class NamedEntity:
    """Shared shape of Category and Tag: an ID, a non-empty name and timestamps.

    Category and Tag subclass this without adding fields; they still compare
    unequal to each other because dataclass equality checks the concrete class.
    """

    name: str
    id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise EmptyNameError()
        self.created_at = parse_iso(self.created_at) or utcnow()
        self.updated_at = parse_iso(self.updated_at) or self.created_at

    def set_name(self, name: str) -> None:
        if not name:
            raise EmptyNameError()
        self.name = name
        self.updated_at = utcnow()

    def clone(self):
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]):
        return cls(
            id=int(d.get("id") or 0),
            name=str(d.get("name") or ""),
            created_at=parse_iso(d.get("created_at")),
            updated_at=parse_iso(d.get("updated_at")),
        )

    def __str__(self) -> str:
        return f"{type(self).__name__}{{id={self.id}, name={self.name!r}}}"
