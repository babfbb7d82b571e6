from __future__ import annotations
import bisect
from typing import List, Optional, Sequence

from . import config as CFG
from .models import Completion
from .normalize import fold


def _range_matches(words: Sequence[str], keys: Sequence[str], p: str, limit: int) -> List[str]:
    """
    Binary-search the first folded key >= p, then walk forward while keys
    still start with p. Prefix matches are contiguous in a list sorted by
    the same folding.
    """
    out: List[str] = []
    i = bisect.bisect_left(keys, p)
    n = len(keys)
    while i < n and len(out) < limit and keys[i].startswith(p):
        out.append(words[i])
        i += 1
    return out


def _scan_matches(words: Sequence[str], keys: Sequence[str], p: str, limit: int,
                  tolerance: int = CFG.SCAN_MISS_TOLERANCE) -> List[str]:
    """
    Legacy linear scan: once something matched, give up after `tolerance`
    consecutive misses. Silently truncates if the list is not sorted by fold().
    """
    out: List[str] = []
    last_hit: Optional[int] = None
    for n, key in enumerate(keys):
        if len(out) >= limit:
            break
        if key.startswith(p):
            out.append(words[n])
            last_hit = n
        elif last_hit is not None and n - last_hit >= tolerance:
            break
    return out


def complete_prefix(words: Sequence[str],
                    keys: Sequence[str],
                    prefix: str,
                    *,
                    limit: int = CFG.MAX_COMPLETIONS,
                    strategy: str = CFG.COMPLETION_STRATEGY) -> Completion:
    """
    Up to `limit` words starting with `prefix`, case-insensitively, in index order.

    `keys[i]` must be `fold(words[i])`. The result is `exhausted` when it holds at
    most one word: typing more characters cannot produce anything better.
    """
    if not prefix:
        return Completion(words=[], exhausted=False)
    p = fold(prefix)
    if strategy == "range":
        found = _range_matches(words, keys, p, limit)
    elif strategy == "scan":
        found = _scan_matches(words, keys, p, limit)
    else:
        raise ValueError(f"unknown completion strategy: {strategy!r}")
    return Completion(words=found, exhausted=len(found) <= 1)


class PrefixIndex:
    """The word cache in memory, read-only once constructed."""

    def __init__(self, words: Sequence[str], *, strategy: str = CFG.COMPLETION_STRATEGY,
                 limit: int = CFG.MAX_COMPLETIONS) -> None:
        self.words: List[str] = list(words)
        self.keys: List[str] = [fold(w) for w in self.words]
        self.strategy = strategy
        self.limit = limit

    def __len__(self) -> int:
        return len(self.words)

    def complete(self, prefix: str) -> Completion:
        return complete_prefix(self.words, self.keys, prefix,
                               limit=self.limit, strategy=self.strategy)


class Completer:
    """
    Suggestion state for one input field.

    After a query comes back exhausted, any longer text that still starts
    with it is answered without touching the index until the text diverges.
    """

    def __init__(self, index: PrefixIndex) -> None:
        self.index = index
        self._dead_prefix: Optional[str] = None

    @property
    def exhausted(self) -> bool:
        return self._dead_prefix is not None

    def suggest(self, text: str) -> Completion:
        if not text:
            return Completion(words=[], exhausted=False)
        if self._dead_prefix is not None and fold(text).startswith(fold(self._dead_prefix)):
            return Completion(words=[], exhausted=True)
        result = self.index.complete(text)
        if result.exhausted:
            self._dead_prefix = text
            return Completion(words=[], exhausted=True)
        self._dead_prefix = None
        return result

    def reset(self) -> None:
        self._dead_prefix = None
