from __future__ import annotations

from dataclasses import dataclass

from snip.domain.entities.named import NamedEntity


@dataclass(eq=True)
class Category(NamedEntity):
    """A logical group of snippets. Snippets point at it by `category_id`."""
