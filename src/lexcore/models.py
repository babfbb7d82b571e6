# src/lexcore/models.py
"""
Data models for the dictionary browser.

- DictionarySource: one installed StarDict dictionary, identified by its .ifo file name.
- Region / AnnotatedDocument: rendered lookup text plus addressable spans.
- Completion: the answer to one prefix query.
- LookupResult: what a session hands back to the UI after a lookup.

These classes carry no business logic beyond small lookups over their own fields.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

SECTION = "section"
SEARCH = "search"


@dataclass(frozen=True)
class DictionarySource:
    """
    Attributes
    ----------
    identifier : str
        The .ifo file name (e.g. "en-ru.ifo"). Fingerprints are computed over these.
    root : str
        Directory holding the .ifo/.idx files.
    bookname : str
        Human readable name from the .ifo metadata (may be empty).
    wordcount : int
        Declared number of entries; informational only.
    idxoffsetbits : int
        32 or 64, width of the data offsets stored in the .idx file.
    """
    identifier: str
    root: str
    bookname: str = ""
    wordcount: int = 0
    idxoffsetbits: int = 32

    @property
    def stem(self) -> str:
        return self.identifier.rsplit(".", 1)[0]

    @property
    def ifo_path(self) -> Path:
        return Path(self.root) / self.identifier


@dataclass(frozen=True)
class Region:
    label: int
    start: int        # character offsets into AnnotatedDocument.text
    end: int
    payload: str      # dictionary name (section) or matched text (search)
    kind: str = SECTION


@dataclass
class AnnotatedDocument:
    """Text plus its regions, in label order. The text is never altered by annotation."""
    text: str
    regions: List[Region] = field(default_factory=list)

    @property
    def labels(self) -> List[int]:
        return [r.label for r in self.regions]

    def region(self, label: int) -> Region:
        for r in self.regions:
            if r.label == label:
                return r
        raise KeyError(label)

    def payloads(self, kind: Optional[str] = None) -> List[str]:
        return [r.payload for r in self.regions if kind is None or r.kind == kind]


@dataclass(frozen=True)
class Completion:
    words: List[str]
    exhausted: bool   # <= 1 match: no point querying longer strings with this prefix


@dataclass
class LookupResult:
    word: str
    document: AnnotatedDocument
    dictionaries: List[str]
    sound: Optional[str] = None
