from __future__ import annotations
import logging
import os
from collections import OrderedDict
from typing import List

from .DB.store import atomic_write_bytes

log = logging.getLogger(__name__)


class History:
    """Most recent lookups, oldest evicted first, persisted one per line."""

    def __init__(self, path: str, size: int = 10) -> None:
        self.path = os.path.abspath(path)
        self.size = max(0, int(size))
        self._items: "OrderedDict[str, None]" = OrderedDict()

    def add(self, word: str) -> None:
        if not word or "\n" in word or not self.size:
            return
        self._items.pop(word, None)
        self._items[word] = None
        while len(self._items) > self.size:
            self._items.popitem(last=False)

    def items(self) -> List[str]:
        """Newest first."""
        return list(reversed(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                for ln in f:
                    self.add(ln.rstrip("\n"))
        except FileNotFoundError:
            return
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Ignoring unreadable history %s: %s", self.path, exc)

    def save(self) -> None:
        atomic_write_bytes(self.path, "".join(w + "\n" for w in self._items).encode("utf-8"))
