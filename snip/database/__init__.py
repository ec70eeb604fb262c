"""JSON file-backed storage for snippets, categories and tags."""
from .errors import DuplicateNameError, NotFoundError, SnapshotDecodeError, StorageError
from .repositories import Repositories, open_repositories
from .repository import CategoryRepository, Repository, SnippetRepository, TagRepository
from .store import EntityKind, Store

__all__ = [
    "CategoryRepository",
    "DuplicateNameError",
    "EntityKind",
    "NotFoundError",
    "Repositories",
    "Repository",
    "SnapshotDecodeError",
    "SnippetRepository",
    "StorageError",
    "Store",
    "TagRepository",
    "open_repositories",
]
