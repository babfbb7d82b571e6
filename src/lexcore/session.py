from __future__ import annotations
import logging
import threading
from typing import Callable, List, Optional

from . import sound
from .config import Settings
from .engine import Engine
from .errors import SoundUnavailable, SourceUnreadable, StorageUnavailable
from .history import History
from .lookup import run_lookup
from .models import SECTION, AnnotatedDocument, Completion, LookupResult, Region
from .normalize import strip_ansi
from .regions import NavigationCursor, annotate_search, annotate_sections
from .search import Completer

log = logging.getLogger(__name__)

LookupFn = Callable[..., str]


class Session:
    """
    Everything one user interface instance mutates: the current lookup and its
    regions, the navigation cursor, history and the suggestion state.

    Every public method takes the same lock, so a UI that runs lookups on a
    worker thread never interleaves two of them.
    """

    def __init__(self,
                 settings: Settings,
                 engine: Optional[Engine] = None,
                 *,
                 lookup: LookupFn = run_lookup,
                 styled: bool = False) -> None:
        self.settings = settings
        self.engine = engine
        self.completer: Optional[Completer] = (
            Completer(engine.index) if engine is not None and engine.index is not None else None
        )
        self.history = History(str(settings.history_path), settings.history_size)
        self.history.load()
        self.cursor = NavigationCursor()
        self.styled = styled
        self._lookup = lookup
        self._lock = threading.RLock()

        self.word = ""
        self.sound_path: Optional[str] = None
        self.dictionaries: List[str] = []
        self.highlighted: Optional[int] = None
        self.last_search = ""
        self._sections = AnnotatedDocument(text="")
        self.document = self._sections

    @classmethod
    def create(cls, settings: Settings, *, rebuild: bool = False, **kwargs) -> "Session":
        """
        Open the word cache (unless autocompletion is off) and wrap it in a session.

        StorageUnavailable is fatal and propagates. An unreadable dictionary only
        disables suggestions; lookups go through sdcv and still work.
        """
        engine: Optional[Engine] = None
        if settings.autocompletion:
            engine = Engine(settings)
            try:
                engine.open(rebuild=rebuild)
            except SourceUnreadable as exc:
                log.error("Autocompletion disabled, cannot build word cache: %s", exc)
                engine = None
        return cls(settings, engine, **kwargs)

    # ---- lookups ----

    def lookup(self, word: str) -> LookupResult:
        """
        Look `word` up and make the result the current document.

        LookupFailed propagates and leaves the previous document in place.
        """
        word = word.strip()
        with self._lock:
            if not word:
                return self.result()
            raw = self._lookup(word, self.settings.sdcv_args, executable=self.settings.sdcv)
            text = raw if self.styled else strip_ansi(raw)
            doc = annotate_sections(text)
            self._sections = doc
            self.document = doc
            self.dictionaries = doc.payloads(SECTION)
            self.cursor.reset(0, len(doc.regions))
            self.highlighted = None
            self.last_search = ""
            self.word = word
            self.history.add(word)
            self.sound_path = sound.find_sound(word, str(self.settings.sound_dir))
            log.info("Looked up %r: %d dictionaries", word, len(self.dictionaries))
            return self.result()

    def result(self) -> LookupResult:
        return LookupResult(word=self.word, document=self.document,
                            dictionaries=list(self.dictionaries), sound=self.sound_path)

    # ---- navigation ----

    def search(self, query: str) -> List[Region]:
        """Tag `query` in the current lookup; labels continue after the dictionary sections."""
        with self._lock:
            if not query:
                return []
            base = len(self._sections.regions)
            doc = annotate_search(self._sections, query)
            self.document = doc
            self.last_search = query
            self.highlighted = None
            self.cursor.reset(base, len(doc.regions) - base)
            return doc.regions[base:]

    def clear_search(self) -> None:
        with self._lock:
            self.document = self._sections
            self.last_search = ""
            self.highlighted = None
            self.cursor.reset(0, len(self._sections.regions))

    def next_hit(self) -> Optional[int]:
        with self._lock:
            self.highlighted = self.cursor.advance()
            return self.highlighted

    def jump_to_dictionary(self, index: int) -> int:
        """Label of the index-th dictionary section of the current lookup."""
        with self._lock:
            if not 0 <= index < len(self.dictionaries):
                raise IndexError(index)
            self.highlighted = self._sections.regions[index].label
            return self.highlighted

    # ---- suggestions / misc ----

    def suggest(self, text: str) -> Completion:
        with self._lock:
            if self.completer is None:
                return Completion(words=[], exhausted=False)
            return self.completer.suggest(text)

    def play_sound(self) -> bool:
        """Start the player on the current word's recording. False if there is none."""
        with self._lock:
            if not self.sound_path:
                return False
            try:
                sound.play(self.sound_path, self.settings.player)
            except SoundUnavailable as exc:
                log.warning("Cannot play %s: %s", self.sound_path, exc)
                raise
            return True

    def close(self) -> None:
        with self._lock:
            try:
                self.history.save()
            except StorageUnavailable as exc:
                log.warning("History not saved: %s", exc)
            if self.engine is not None:
                self.engine.shutdown()
