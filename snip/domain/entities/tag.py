from __future__ import annotations

from dataclasses import dataclass

from snip.domain.entities.named import NamedEntity


@dataclass(eq=True)
class Tag(NamedEntity):
    """A label attached to many snippets through their `tags` ID list."""
