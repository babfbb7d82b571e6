from __future__ import annotations
import logging
import os
from typing import Callable, Dict, Iterable, List

from .DB.fingerprint import FingerprintTracker, compute_fingerprint
from .DB.store import WordStore
from .models import DictionarySource
from .normalize import fold
from . import loader

log = logging.getLogger(__name__)

# Progress logging (set LEXBROWSE_VERBOSE=1 to enable)
VERBOSE = os.environ.get("LEXBROWSE_VERBOSE") == "1"

HeadwordReader = Callable[[DictionarySource], Iterable[str]]


def _storable(word: str) -> bool:
    # the store is line oriented
    return bool(word) and "\n" not in word and "\r" not in word


def build_index(sources: Iterable[DictionarySource],
                list_headwords: HeadwordReader = loader.list_headwords) -> List[str]:
    """
    Merge the headwords of every source into one sorted, duplicate-free list.

    Sources are read in identifier order and duplicates keep their first
    occurrence, so the stable case-insensitive sort puts words that differ only
    by case in encounter order. Two builds over the same sources therefore
    produce the same list.

    Any SourceUnreadable from `list_headwords` propagates; nothing is returned
    for a partial set of sources.
    """
    seen: Dict[str, None] = {}
    ordered = sorted(sources, key=lambda s: s.identifier)
    for src in ordered:
        added = 0
        for word in list_headwords(src):
            if _storable(word) and word not in seen:
                seen[word] = None
                added += 1
        if VERBOSE:
            print(f"[build] {src.identifier}: +{added:,} words")
    words = sorted(seen, key=fold)
    log.info("Built word index: %d words from %d sources", len(words), len(ordered))
    return words


def rebuild(sources: Iterable[DictionarySource],
            store: WordStore,
            tracker: FingerprintTracker,
            list_headwords: HeadwordReader = loader.list_headwords) -> List[str]:
    """Build, persist, then record the fingerprint of the set just indexed."""
    sources = list(sources)
    words = build_index(sources, list_headwords)
    store.write(words)
    tracker.write(compute_fingerprint(s.identifier for s in sources))
    return words
