from __future__ import annotations

from typing import Any


class StorageError(Exception):
    """Base class for errors raised by the storage layer."""


class NotFoundError(StorageError, LookupError):
    """The requested ID or name does not exist."""

    def __init__(self, kind: str, key: Any) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key!r}")


class DuplicateNameError(StorageError):
    """Another entity of the same kind already uses this name."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} with name {name!r} already exists")


class SnapshotDecodeError(StorageError, ValueError):
    """The snapshot file exists but cannot be turned back into a store."""

    def __init__(self, path: Any, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"failed to decode snapshot {path}: {reason}")
