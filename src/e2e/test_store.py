from pathlib import Path

import pytest

from lexcore.DB.store import FileWordStore, MemoryWordStore, make_store
from lexcore.errors import StorageUnavailable


def test_file_store_round_trip_and_no_leftovers(tmp_path: Path):
    store = make_store(f"file://{tmp_path / 'c' / 'words'}")
    assert isinstance(store, FileWordStore) and not store.exists()
    assert store.write(["Ärger", "apple"]) == 2
    assert store.read() == ["Ärger", "apple"]
    assert sorted(p.name for p in (tmp_path / "c").iterdir()) == ["words"]


def test_blank_lines_are_ignored_on_read(tmp_path: Path):
    p = tmp_path / "words"
    p.write_text("a\n\nb\n", encoding="utf-8")
    assert FileWordStore(str(p)).read() == ["a", "b"]


def test_memory_store_and_factory():
    assert isinstance(make_store("memory://"), MemoryWordStore)
    s = MemoryWordStore()
    with pytest.raises(StorageUnavailable):
        s.read()
    s.write(["x"])
    assert s.exists() and s.read() == ["x"]
    with pytest.raises(ValueError):
        make_store("sqlite:///nope")
