from pathlib import Path

import pytest

from conftest import write_stardict
from lexcore import loader
from lexcore.builder import build_index, rebuild
from lexcore.DB.fingerprint import FingerprintTracker, compute_fingerprint
from lexcore.DB.store import FileWordStore, MemoryWordStore
from lexcore.errors import SourceUnreadable
from lexcore.models import DictionarySource


def _seed(d: Path) -> None:
    write_stardict(d, "en-ru", ["apple", "Apple", "banana"])
    write_stardict(d, "ru-en", ["apple", "cherry"])


@pytest.mark.e2e
def test_merge_dedup_and_case_insensitive_order(dict_dir: Path):
    _seed(dict_dir)
    sources = loader.load_sources(str(dict_dir))
    assert [s.identifier for s in sources] == ["en-ru.ifo", "ru-en.ifo"]

    words = build_index(sources)
    assert words == ["apple", "Apple", "banana", "cherry"]
    assert all(a.lower() <= b.lower() for a, b in zip(words, words[1:]))
    assert len(set(words)) == len(words)


@pytest.mark.e2e
def test_rebuild_is_byte_identical_and_refreshes_fingerprint(dict_dir: Path, tmp_path: Path):
    _seed(dict_dir)
    write_stardict(dict_dir, "big", ["Zebra", "zebra", "ZEBRA", "yak", "Yak"], gz=True)
    store = FileWordStore(str(tmp_path / "cache" / "words"))
    tracker = FingerprintTracker(str(tmp_path / "cache" / "dicts"))

    rebuild(loader.load_sources(str(dict_dir)), store, tracker)
    first = Path(store.path).read_bytes()
    rebuild(loader.load_sources(str(dict_dir)), store, tracker)
    assert Path(store.path).read_bytes() == first

    lines = first.decode("utf-8").split("\n")
    assert lines[-1] == "" and "" not in lines[:-1]
    assert lines[:-1] == ["apple", "Apple", "banana", "cherry", "yak", "Yak", "Zebra", "zebra", "ZEBRA"]
    assert tracker.read() == compute_fingerprint(["big.ifo", "en-ru.ifo", "ru-en.ifo"])


@pytest.mark.e2e
def test_unreadable_source_fails_whole_build_and_keeps_old_index(dict_dir: Path):
    _seed(dict_dir)
    (dict_dir / "broken.ifo").write_text("not a stardict file\n", encoding="utf-8")
    store = MemoryWordStore(["old"])
    tracker = FingerprintTracker(str(dict_dir.parent / "dicts"))

    with pytest.raises(SourceUnreadable):
        rebuild(loader.load_sources(str(dict_dir)), store, tracker)
    assert store.read() == ["old"]
    assert store.writes == 0
    assert tracker.read() is None


def test_missing_idx_is_unreadable(dict_dir: Path):
    write_stardict(dict_dir, "lonely", ["a"])
    (dict_dir / "lonely.idx").unlink()
    src = loader.load_source(str(dict_dir), "lonely.ifo")
    with pytest.raises(SourceUnreadable):
        loader.list_headwords(src)


def test_64bit_offsets_and_truncated_records(dict_dir: Path):
    write_stardict(dict_dir, "wide", ["één", "twee"], bits=64)
    src = loader.load_source(str(dict_dir), "wide.ifo")
    assert src.idxoffsetbits == 64
    assert loader.list_headwords(src) == ["één", "twee"]

    with pytest.raises(SourceUnreadable):
        loader.parse_idx(b"word\x00\x00\x00", 32)


def test_injected_headword_reader_and_unstorable_words():
    sources = [DictionarySource("b.ifo", "/x"), DictionarySource("a.ifo", "/x")]
    table = {"a.ifo": ["Beta", "", "two\nlines"], "b.ifo": ["alpha", "beta"]}
    words = build_index(sources, lambda s: table[s.identifier])
    assert words == ["alpha", "Beta", "beta"]
