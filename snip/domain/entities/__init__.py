from .category import Category
from .snippet import Snippet
from .tag import Tag

__all__ = ["Category", "Tag", "Snippet"]
