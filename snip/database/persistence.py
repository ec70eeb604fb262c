"""
JSON snapshot codec for the whole store.

Save builds the snapshot under the read lock, then writes it to a temporary
file next to the destination and renames it over the destination, so the file
is never observed half-written. Load swaps the decoded state in under the write
lock. There is no partial persistence.
"""
from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from snip.domain.entities.category import Category
from snip.domain.entities.snippet import Snippet
from snip.domain.entities.tag import Tag
from snip.observability import emit_event

from .errors import SnapshotDecodeError
from .store import EntityKind, Store

_DEFAULT_FILE_MODE = 0o644

# snapshot array key, counter key, entity class
_LAYOUT = {
    EntityKind.SNIPPET: ("snippets", "next_snippet_id", Snippet),
    EntityKind.CATEGORY: ("categories", "next_category_id", Category),
    EntityKind.TAG: ("tags", "next_tag_id", Tag),
}


def encode_snapshot(store: Store) -> Dict[str, Any]:
    """Build the snapshot dict. Takes the store's read lock."""
    payload: Dict[str, Any] = {}
    with store.read_locked():
        for kind, (array_key, _counter_key, _cls) in _LAYOUT.items():
            table = store.table(kind)
            payload[array_key] = [table[k].to_dict() for k in sorted(table)]
        for kind, (_array_key, counter_key, _cls) in _LAYOUT.items():
            payload[counter_key] = store.peek_next_id(kind)
    return payload


def decode_snapshot(payload: Any, path: Any = "<memory>") -> Tuple[Dict[EntityKind, Dict[int, Any]], Dict[EntityKind, int]]:
    """Turn a parsed snapshot back into per-kind tables and counters.

    Raises SnapshotDecodeError when the shape is wrong or an entity does not
    validate. A snippet whose `tags` is null comes back with an empty list.
    Counters never fall below the highest loaded ID + 1.
    """
    if not isinstance(payload, dict):
        raise SnapshotDecodeError(path, f"expected a JSON object, got {type(payload).__name__}")

    tables: Dict[EntityKind, Dict[int, Any]] = {}
    counters: Dict[EntityKind, int] = {}
    for kind, (array_key, counter_key, cls) in _LAYOUT.items():
        items = payload.get(array_key)
        if items is None:
            items = []
        if not isinstance(items, list):
            raise SnapshotDecodeError(path, f"'{array_key}' must be an array")

        table: Dict[int, Any] = {}
        for index, raw in enumerate(items):
            if not isinstance(raw, dict):
                raise SnapshotDecodeError(path, f"{array_key}[{index}] must be an object")
            try:
                entity = cls.from_dict(raw)
            except (TypeError, ValueError) as exc:
                raise SnapshotDecodeError(path, f"{array_key}[{index}]: {exc}") from exc
            if entity.id <= 0:
                raise SnapshotDecodeError(path, f"{array_key}[{index}] has non-positive id {entity.id}")
            if entity.id in table:
                raise SnapshotDecodeError(path, f"{array_key} contains duplicate id {entity.id}")
            table[entity.id] = entity

        try:
            stored_counter = int(payload.get(counter_key) or 0)
        except (TypeError, ValueError) as exc:
            raise SnapshotDecodeError(path, f"'{counter_key}' must be an integer") from exc
        tables[kind] = table
        counters[kind] = max(stored_counter, max(table, default=0) + 1, 1)
    return tables, counters


def _target_mode(path: Path) -> int:
    """Permission bits of the existing snapshot, or 0644 for a new one."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return _DEFAULT_FILE_MODE


def _atomic_write_text(path: Path, text: str) -> None:
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
        # mkstemp creates the file as 0600
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def save_snapshot(store: Store, path: Path, indent: Optional[int] = 2) -> None:
    """Persist the whole store to `path`. I/O errors propagate to the caller."""
    path = Path(path)
    payload = encode_snapshot(store)
    text = json.dumps(payload, ensure_ascii=False, indent=indent)
    try:
        _atomic_write_text(path, text)
    except OSError as exc:
        emit_event("snapshot_save_failed", severity="error", path=str(path), error=str(exc))
        raise
    emit_event(
        "snapshot_saved",
        path=str(path),
        snippets=len(payload["snippets"]),
        categories=len(payload["categories"]),
        tags=len(payload["tags"]),
    )


def load_snapshot(store: Store, path: Path) -> bool:
    """Replace the store's state with the snapshot at `path`.

    A missing file resets the store to empty and returns False (first run).
    Returns True when a snapshot was loaded.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        with store.write_locked():
            store.reset()
        emit_event("snapshot_missing", path=str(path))
        return False

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        emit_event("snapshot_load_failed", severity="error", path=str(path), error=str(exc))
        raise SnapshotDecodeError(path, f"invalid JSON: {exc}") from exc
    try:
        tables, counters = decode_snapshot(payload, path)
    except SnapshotDecodeError as exc:
        emit_event("snapshot_load_failed", severity="error", path=str(path), error=exc.reason)
        raise

    with store.write_locked():
        store.replace_all(tables, counters)
    emit_event(
        "snapshot_loaded",
        path=str(path),
        snippets=len(tables[EntityKind.SNIPPET]),
        categories=len(tables[EntityKind.CATEGORY]),
        tags=len(tables[EntityKind.TAG]),
    )
    return True
