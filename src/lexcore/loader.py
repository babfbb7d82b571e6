"""
Dictionary source access.

Installed dictionaries are StarDict triples living side by side in one
directory:

    name.ifo        text metadata ("StarDict's dict ifo file" + key=value lines)
    name.idx[.gz]   headword index: word\\0 | offset (u32 or u64, BE) | size (u32, BE)
    name.dict[.dz]  article data (never read here; sdcv does the lookups)

Only the headwords are needed to build the completion cache, so the .idx
records are walked without touching the article data.
"""

from __future__ import annotations
import gzip
import logging
import os
import struct
from typing import Dict, List

from .config import DICT_SUFFIX
from .errors import SourceUnreadable
from .models import DictionarySource

log = logging.getLogger(__name__)

IFO_MAGIC = "StarDict's dict ifo file"
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")


def list_installed_sources(root: str, suffix: str = DICT_SUFFIX) -> List[str]:
    """Identifiers (file names) of every dictionary under root, sorted."""
    try:
        names = os.listdir(root)
    except OSError as exc:
        raise SourceUnreadable(str(root), f"cannot list dictionary directory ({exc.strerror or exc})") from exc
    return sorted(n for n in names if n.endswith(suffix) and os.path.isfile(os.path.join(root, n)))


def _parse_ifo(text: str, identifier: str) -> Dict[str, str]:
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].strip() != IFO_MAGIC:
        raise SourceUnreadable(identifier, "missing StarDict ifo header")
    meta: Dict[str, str] = {}
    for ln in lines[1:]:
        key, sep, value = ln.partition("=")
        if sep:
            meta[key.strip()] = value.strip()
    return meta


def load_source(root: str, identifier: str) -> DictionarySource:
    path = os.path.join(root, identifier)
    try:
        with open(path, "r", encoding="utf-8") as f:
            meta = _parse_ifo(f.read(), identifier)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnreadable(identifier, str(exc)) from exc
    try:
        wordcount = int(meta.get("wordcount", "0") or 0)
        bits = int(meta.get("idxoffsetbits", "32") or 32)
    except ValueError as exc:
        raise SourceUnreadable(identifier, f"bad ifo field: {exc}") from exc
    if bits not in (32, 64):
        raise SourceUnreadable(identifier, f"unsupported idxoffsetbits={bits}")
    return DictionarySource(
        identifier=identifier,
        root=str(root),
        bookname=meta.get("bookname", ""),
        wordcount=wordcount,
        idxoffsetbits=bits,
    )


def load_sources(root: str, suffix: str = DICT_SUFFIX) -> List[DictionarySource]:
    return [load_source(root, ident) for ident in list_installed_sources(root, suffix)]


def _read_idx_bytes(source: DictionarySource) -> bytes:
    base = os.path.join(source.root, source.stem)
    for candidate, opener in ((base + ".idx", open), (base + ".idx.gz", gzip.open)):
        if os.path.exists(candidate):
            try:
                with opener(candidate, "rb") as f:
                    return f.read()
            except (OSError, EOFError) as exc:
                raise SourceUnreadable(source.identifier, f"{os.path.basename(candidate)}: {exc}") from exc
    raise SourceUnreadable(source.identifier, "no .idx or .idx.gz next to the .ifo")


def parse_idx(data: bytes, offset_bits: int = 32, identifier: str = "<idx>") -> List[str]:
    """Headwords in file order. Raises SourceUnreadable on a truncated record."""
    tail = (_U64.size if offset_bits == 64 else _U32.size) + _U32.size
    words: List[str] = []
    pos = 0
    n = len(data)
    while pos < n:
        nul = data.find(b"\x00", pos)
        if nul < 0 or nul + 1 + tail > n:
            raise SourceUnreadable(identifier, f"truncated idx record at byte {pos}")
        try:
            words.append(data[pos:nul].decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise SourceUnreadable(identifier, f"headword at byte {pos} is not UTF-8") from exc
        pos = nul + 1 + tail
    return words


def list_headwords(source: DictionarySource) -> List[str]:
    words = parse_idx(_read_idx_bytes(source), source.idxoffsetbits, source.identifier)
    if source.wordcount and source.wordcount != len(words):
        log.warning("%s declares %d words but its index holds %d",
                    source.identifier, source.wordcount, len(words))
    return words
