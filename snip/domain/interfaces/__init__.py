from .repository_interface import (
    ICategoryRepository,
    IRepository,
    ISnippetRepository,
    ITagRepository,
)

__all__ = ["IRepository", "ICategoryRepository", "ITagRepository", "ISnippetRepository"]
