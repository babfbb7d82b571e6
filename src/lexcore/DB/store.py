# lexcore/DB/store.py
from __future__ import annotations
import os
from typing import Iterable, List, Optional, Protocol

from ..errors import StorageUnavailable


class WordStore(Protocol):
    def exists(self) -> bool: ...
    def read(self) -> List[str]: ...
    def write(self, words: Iterable[str]) -> int: ...
    def close(self) -> None: ...


def atomic_write_bytes(path: str, data: bytes) -> None:
    """Write to path.tmp then os.replace, so readers never see half a file."""
    tmp = f"{path}.tmp"
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(tmp, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except OSError as exc:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise StorageUnavailable(f"cannot write {path}: {exc}") from exc


class FileWordStore:
    """
    The word cache on disk: UTF-8, one word per line, no blank lines.
    Rewritten wholesale on every build.
    """
    def __init__(self, path: str) -> None:
        self.path = os.path.abspath(path)

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def read(self) -> List[str]:
        try:
            with open(self.path, "r", encoding="utf-8", newline="\n") as f:
                return [ln.rstrip("\n") for ln in f if ln.strip("\n")]
        except OSError as exc:
            raise StorageUnavailable(f"cannot read {self.path}: {exc}") from exc

    def write(self, words: Iterable[str]) -> int:
        items = list(words)
        payload = "".join(w + "\n" for w in items).encode("utf-8")
        atomic_write_bytes(self.path, payload)
        return len(items)

    def close(self) -> None:
        pass


class MemoryWordStore:
    """In-process store (tests, --no-cache runs)."""
    def __init__(self, words: Optional[Iterable[str]] = None) -> None:
        self._words: Optional[List[str]] = list(words) if words is not None else None
        self.writes = 0

    def exists(self) -> bool:
        return self._words is not None

    def read(self) -> List[str]:
        if self._words is None:
            raise StorageUnavailable("memory store is empty")
        return list(self._words)

    def write(self, words: Iterable[str]) -> int:
        self._words = list(words)
        self.writes += 1
        return len(self._words)

    def close(self) -> None:
        self._words = None


def make_store(dsn: str) -> WordStore:
    """
    Factory:
      - file:///path/to/words -> FileWordStore
      - memory://              -> MemoryWordStore
      - plain path             -> FileWordStore
    """
    if dsn.startswith("memory://"):
        return MemoryWordStore()
    if dsn.startswith("file://"):
        return FileWordStore(dsn.removeprefix("file://"))
    if "://" in dsn:
        raise ValueError(f"Unsupported store DSN: {dsn}")
    return FileWordStore(dsn)
