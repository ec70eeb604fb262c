"""
Periodic background save of the whole store.

A single daemon thread calls `Repositories.save()` every `interval` seconds.
A failed save is logged and tried again on the next tick; `stop()` can run a
final save whose errors do reach the caller.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from snip.database.repositories import Repositories
from snip.observability import emit_event

logger = logging.getLogger(__name__)


class AutoSaver:
    def __init__(self, repos: Repositories, interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._repos = repos
        self._interval = float(interval)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self.saves = 0
        self.failures = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._run, name="snip-autosave", daemon=True)
            self._thread.start()
        emit_event("autosave_started", interval_seconds=self._interval, path=str(self._repos.path))

    def stop(self, final_save: bool = True, timeout: Optional[float] = None) -> None:
        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop_event.set()
        if thread is not None:
            thread.join(timeout)
        emit_event("autosave_stopped", saves=self.saves, failures=self.failures)
        if final_save:
            self._repos.save()
            self.saves += 1

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            self._save_once()

    def _save_once(self) -> bool:
        try:
            self._repos.save()
        except Exception as e:
            self.failures += 1
            logger.exception("Autosave to %s failed", self._repos.path)
            emit_event("autosave_failed", severity="error", path=str(self._repos.path), error=str(e))
            return False
        self.saves += 1
        return True

    def __enter__(self) -> "AutoSaver":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop(final_save=True)


def start_autosave(repos: Repositories, settings=None) -> Optional[AutoSaver]:
    """Start an AutoSaver when the configured interval is positive."""
    if settings is None:
        from snip.config import get_settings

        settings = get_settings()
    interval = float(settings.AUTOSAVE_INTERVAL_SECONDS or 0)
    if interval <= 0:
        return None
    saver = AutoSaver(repos, interval)
    saver.start()
    return saver
