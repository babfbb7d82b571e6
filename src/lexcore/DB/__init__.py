from .store import WordStore, FileWordStore, MemoryWordStore, make_store
from .fingerprint import FingerprintTracker, compute_fingerprint, is_stale

__all__ = [
    "WordStore", "FileWordStore", "MemoryWordStore", "make_store",
    "FingerprintTracker", "compute_fingerprint", "is_stale",
]
