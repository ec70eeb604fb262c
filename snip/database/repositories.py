from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from .persistence import load_snapshot, save_snapshot
from .repository import CategoryRepository, SnippetRepository, TagRepository
from .store import EntityKind, Store


class Repositories:
    """All three repositories sharing one Store, plus whole-store save/load.

    Mutations through the repositories stay in memory until `save()` is
    called.
    """

    def __init__(self, path: Union[str, Path], json_indent: Optional[int] = 2) -> None:
        self.path = Path(path)
        self.json_indent = json_indent
        self._store = Store()
        self.snippets = SnippetRepository(self._store)
        self.categories = CategoryRepository(self._store)
        self.tags = TagRepository(self._store)

    def save(self) -> None:
        save_snapshot(self._store, self.path, indent=self.json_indent)

    def load(self) -> bool:
        """Load the snapshot file; a missing file leaves an empty store and returns False."""
        return load_snapshot(self._store, self.path)

    def stats(self) -> Dict[str, Dict[str, Any]]:
        with self._store.read_locked() as store:
            return {
                kind.value: {
                    "count": len(store.table(kind)),
                    "next_id": store.peek_next_id(kind),
                }
                for kind in EntityKind
            }

    @contextmanager
    def session(self) -> Iterator["Repositories"]:
        """Yield the repositories and save on exit, also when the body raises."""
        try:
            yield self
        finally:
            self.save()


def open_repositories(settings=None) -> Repositories:
    """Build repositories for the configured storage path and load them.

    Load failures propagate; the application is expected to stop on them.
    """
    if settings is None:
        from snip.config import get_settings

        settings = get_settings()
    path = Path(settings.STORAGE_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    repos = Repositories(path, json_indent=settings.JSON_INDENT)
    repos.load()
    return repos
