"""
tests/conftest.py

Shared fixtures: isolated SNIP_* environment, a Repositories instance backed
by a temporary snapshot file, and capture of structured events.
"""
import os
from pathlib import Path

import pytest

from snip.config import get_settings
from snip.database import Repositories
from snip.database import persistence
from snip.domain.entities import Snippet


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("SNIP_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def snapshot_path(tmp_path) -> Path:
    return tmp_path / "snippets.json"


@pytest.fixture()
def repos(snapshot_path) -> Repositories:
    return Repositories(snapshot_path)


@pytest.fixture()
def events(monkeypatch):
    captured = []

    def _emit(event, severity="info", **fields):
        captured.append({"event": event, "severity": severity, **fields})

    monkeypatch.setattr(persistence, "emit_event", _emit)
    return captured


@pytest.fixture()
def make_snippet(repos):
    """Create and persist a snippet in `repos`; returns the caller's copy."""

    def _make(title="QuickSort", language="go", code="func quickSort(a []int) {}", **kwargs):
        s = Snippet(title=title, language=language, code=code, **kwargs)
        repos.snippets.create(s)
        return s

    return _make
