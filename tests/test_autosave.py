import json
import time
import types

import pytest

from snip.domain.entities import Tag
from snip.services import autosave as autosave_mod
from snip.services.autosave import AutoSaver, start_autosave


def _wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture(autouse=True)
def _quiet_events(monkeypatch):
    monkeypatch.setattr(autosave_mod, "emit_event", lambda *a, **k: None)


def test_interval_must_be_positive(repos):
    with pytest.raises(ValueError):
        AutoSaver(repos, 0)


def test_periodic_save_writes_snapshot(repos, snapshot_path):
    repos.tags.create(Tag(name="go"))
    saver = AutoSaver(repos, 0.02)
    saver.start()
    try:
        assert _wait_for(lambda: saver.saves >= 2)
        assert saver.running
    finally:
        saver.stop(final_save=False)
    assert not saver.running
    data = json.loads(snapshot_path.read_text(encoding="utf-8"))
    assert [t["name"] for t in data["tags"]] == ["go"]


def test_stop_runs_final_save(repos, snapshot_path):
    with AutoSaver(repos, 60) as saver:
        repos.tags.create(Tag(name="late"))
    assert saver.saves == 1
    data = json.loads(snapshot_path.read_text(encoding="utf-8"))
    assert [t["name"] for t in data["tags"]] == ["late"]


def test_failed_save_is_counted_and_retried(repos, monkeypatch):
    attempts = {"n": 0}

    def _flaky_save():
        attempts["n"] += 1
        if attempts["n"] == 1:
            raise OSError("disk busy")

    monkeypatch.setattr(repos, "save", _flaky_save)
    saver = AutoSaver(repos, 0.02)
    saver.start()
    try:
        assert _wait_for(lambda: saver.saves >= 1)
    finally:
        saver.stop(final_save=False)
    assert saver.failures == 1


def test_unexpected_save_error_keeps_thread_alive(repos, monkeypatch):
    attempts = {"n": 0}

    def _broken_then_ok():
        attempts["n"] += 1
        if attempts["n"] <= 2:
            raise TypeError("'NoneType' object is not iterable")

    monkeypatch.setattr(repos, "save", _broken_then_ok)
    saver = AutoSaver(repos, 0.02)
    saver.start()
    try:
        assert _wait_for(lambda: saver.saves >= 1)
        assert saver.running
    finally:
        saver.stop(final_save=False)
    assert saver.failures == 2


def test_start_twice_keeps_one_thread(repos):
    saver = AutoSaver(repos, 60)
    saver.start()
    first = saver._thread
    saver.start()
    assert saver._thread is first
    saver.stop(final_save=False)


def test_start_autosave_respects_settings(repos):
    disabled = types.SimpleNamespace(AUTOSAVE_INTERVAL_SECONDS=0)
    assert start_autosave(repos, disabled) is None

    enabled = types.SimpleNamespace(AUTOSAVE_INTERVAL_SECONDS=60)
    saver = start_autosave(repos, enabled)
    try:
        assert saver is not None and saver.running
    finally:
        saver.stop(final_save=False)
