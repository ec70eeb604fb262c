"""
Process startup/shutdown for applications embedding the store.

Order: settings -> structured logging -> load snapshot (fatal on failure) ->
optional autosave. `Runtime.shutdown()` performs the final save.
"""
from __future__ import annotations

import atexit
from dataclasses import dataclass
from typing import Optional

from snip.config import Settings, get_settings
from snip.database.repositories import Repositories, open_repositories
from snip.observability import emit_event, setup_from_settings
from snip.services.autosave import AutoSaver, start_autosave


@dataclass
class Runtime:
    settings: Settings
    repos: Repositories
    autosaver: Optional[AutoSaver] = None
    closed: bool = False

    def shutdown(self) -> None:
        """Stop autosave and write the final snapshot.

        Safe to call twice. If the final save raises, the runtime stays open
        so a later call can try again.
        """
        if self.closed:
            return
        if self.autosaver is not None:
            self.autosaver.stop(final_save=True)
        else:
            self.repos.save()
        self.closed = True
        emit_event("store_shutdown", path=str(self.repos.path))


def bootstrap(settings: Optional[Settings] = None, *, register_atexit: bool = False) -> Runtime:
    settings = settings or get_settings()
    setup_from_settings(settings)
    repos = open_repositories(settings)
    runtime = Runtime(settings=settings, repos=repos, autosaver=start_autosave(repos, settings))
    if register_atexit:
        atexit.register(runtime.shutdown)
    emit_event("store_ready", path=str(repos.path), **{k: v["count"] for k, v in repos.stats().items()})
    return runtime
