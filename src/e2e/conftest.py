"""Shared fixtures: tiny StarDict dictionaries on disk and settings pointing at tmp dirs."""
from __future__ import annotations
import gzip
import struct
from pathlib import Path

import pytest

from lexcore.config import Settings


def write_stardict(root: Path, stem: str, words, *, bookname: str = "", bits: int = 32,
                   gz: bool = False) -> Path:
    """Write stem.ifo + stem.idx[.gz] (no .dict, nothing here reads articles)."""
    root.mkdir(parents=True, exist_ok=True)
    rec = struct.Struct(">QI" if bits == 64 else ">II")
    idx = b"".join(w.encode("utf-8") + b"\x00" + rec.pack(i * 16, 16) for i, w in enumerate(words))
    lines = ["StarDict's dict ifo file", "version=2.4.2", f"wordcount={len(words)}",
             f"idxfilesize={len(idx)}", f"bookname={bookname or stem}"]
    if bits == 64:
        lines.append("idxoffsetbits=64")
    (root / f"{stem}.ifo").write_text("\n".join(lines) + "\n", encoding="utf-8")
    if gz:
        with gzip.open(root / f"{stem}.idx.gz", "wb") as f:
            f.write(idx)
    else:
        (root / f"{stem}.idx").write_bytes(idx)
    return root / f"{stem}.ifo"


@pytest.fixture
def dict_dir(tmp_path: Path) -> Path:
    d = tmp_path / "dic"
    d.mkdir()
    return d


@pytest.fixture
def settings(tmp_path: Path, dict_dir: Path) -> Settings:
    return Settings(
        dict_dir=dict_dir,
        sound_dir=tmp_path / "sounds",
        config_dir=tmp_path / "config",
        history_size=3,
    )
