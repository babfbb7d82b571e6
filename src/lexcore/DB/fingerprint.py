"""
Staleness detection for the word cache.

The fingerprint covers the *names* of the installed dictionaries, not their
contents: adding or removing a dictionary invalidates the cache, editing one
in place does not.
"""

from __future__ import annotations
import hashlib
import logging
import os
from typing import Iterable, Optional

from ..errors import StorageUnavailable
from .store import atomic_write_bytes

log = logging.getLogger(__name__)


def compute_fingerprint(identifiers: Iterable[str]) -> bytes:
    """
    Concatenated MD5 of each identifier, taken in sorted order.

    Sorting makes the result independent of directory listing order.

    Example:
        >>> compute_fingerprint(["b.ifo", "a.ifo"]) == compute_fingerprint(["a.ifo", "b.ifo"])
        True
    """
    out = bytearray()
    for ident in sorted(set(identifiers)):
        out += hashlib.md5(ident.encode("utf-8")).digest()
    return bytes(out)


def is_stale(stored: Optional[bytes], current: bytes) -> bool:
    return stored is None or stored != current


class FingerprintTracker:
    """Reads and writes the raw fingerprint bytes at `path`."""

    def __init__(self, path: str) -> None:
        self.path = os.path.abspath(path)

    def read(self) -> Optional[bytes]:
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageUnavailable(f"cannot read {self.path}: {exc}") from exc

    def write(self, fingerprint: bytes) -> None:
        atomic_write_bytes(self.path, fingerprint)

    def check(self, current: bytes) -> bool:
        """
        Return True when the cache must be rebuilt.

        The very first call (no fingerprint file yet) records `current` as the
        baseline and reports fresh; whatever is installed at that moment is
        taken as already cached.
        """
        stored = self.read()
        if stored is None:
            log.info("No fingerprint at %s, recording baseline", self.path)
            self.write(current)
            return False
        return is_stale(stored, current)
