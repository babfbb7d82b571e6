# lexcore/engine.py
from __future__ import annotations

import logging
import os
import threading
from typing import List, Optional

from . import loader
from .builder import HeadwordReader, rebuild as rebuild_index
from .config import Settings
from .DB.fingerprint import FingerprintTracker, compute_fingerprint
from .DB.store import FileWordStore, WordStore
from .errors import StorageUnavailable
from .models import Completion
from .search import PrefixIndex

log = logging.getLogger(__name__)

# one rebuild at a time per process; the store itself is replaced atomically
_BUILD_LOCK = threading.Lock()


class Engine:
    """
    Thin orchestration layer that glues together:
      - the dictionary directory (loader),
      - the fingerprint of the installed set (FingerprintTracker),
      - the on-disk word cache (WordStore),
      - the in-memory completion index (PrefixIndex).

    Public API (used by the CLI, Flask and the desktop app):
      * open(rebuild=False): check fingerprint -> build if stale/missing -> load
      * rebuild():           force a rebuild from the installed dictionaries
      * complete(prefix):    bounded prefix completion
      * shutdown():          drop the in-memory index
    """

    # ------------- lifecycle -------------

    def __init__(self,
                 settings: Optional[Settings] = None,
                 *,
                 store: Optional[WordStore] = None,
                 list_headwords: HeadwordReader = loader.list_headwords) -> None:
        self.settings = settings or Settings.from_env()
        self.index: Optional[PrefixIndex] = None
        self._store = store
        self._tracker: Optional[FingerprintTracker] = None
        self._list_headwords = list_headwords

    def _prepare_storage(self) -> None:
        cfg_dir = str(self.settings.config_dir)
        try:
            os.makedirs(cfg_dir, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"cannot create cache directory {cfg_dir}: {exc}") from exc
        if not os.access(cfg_dir, os.W_OK):
            raise StorageUnavailable(f"cache directory {cfg_dir} is not writable")
        if self._store is None:
            self._store = FileWordStore(str(self.settings.words_path))
        self._tracker = FingerprintTracker(str(self.settings.fingerprint_path))

    # /* ~~~ Load the cache, rebuilding it first when the dictionary set changed ~~~ */
    def open(self, *, rebuild: bool = False) -> None:
        self._prepare_storage()
        assert self._store is not None and self._tracker is not None

        identifiers = loader.list_installed_sources(str(self.settings.dict_dir))
        stale = self._tracker.check(compute_fingerprint(identifiers))

        if rebuild or stale or not self._store.exists():
            reason = "forced" if rebuild else ("dictionaries changed" if stale else "no cache yet")
            log.info("Creating autocompletion cache (%s)", reason)
            words = self._rebuild()
        else:
            log.info("Loading word cache from %s", getattr(self._store, "path", "memory"))
            words = self._store.read()

        self.index = PrefixIndex(words, strategy=self.settings.completion_strategy)
        log.info("Engine open() complete: words=%d", len(self.index))

    def rebuild(self) -> None:
        if self._tracker is None:
            self._prepare_storage()
        self.index = PrefixIndex(self._rebuild(), strategy=self.settings.completion_strategy)

    def _rebuild(self) -> List[str]:
        assert self._store is not None and self._tracker is not None
        with _BUILD_LOCK:
            sources = loader.load_sources(str(self.settings.dict_dir))
            log.info("Building word index from %d sources", len(sources))
            return rebuild_index(sources, self._store, self._tracker, self._list_headwords)

    # ------------- query -------------

    def complete(self, prefix: str) -> Completion:
        if self.index is None:
            raise RuntimeError("Engine not initialized. Call open() first.")
        return self.index.complete(prefix)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self.index = None
            log.info("Engine shutdown complete")
