"""
Region annotation for rendered lookup output.

Two passes share one result type (AnnotatedDocument):

- annotate_sections(): one region per dictionary section of sdcv output.
  sdcv prints the section marker twice per article, first before the
  dictionary name and then before the headword, so marker lines alternate
  between opening a section and closing its header.
- annotate_search(): one region per case-insensitive occurrence of a query.

Labels are integers assigned in reading order. The text itself is never
changed here; splicing markers into it is markup.py's job.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from .config import SECTION_MARKER
from .models import SEARCH, SECTION, AnnotatedDocument, Region
from .normalize import clean_dictionary_name

EXPECT_OPEN = "expect_open"
EXPECT_CLOSE = "expect_close"


def _lines(text: str) -> Iterator[Tuple[int, str]]:
    """(offset, line without its line break) for every line of text."""
    off = 0
    for chunk in text.splitlines(keepends=True):
        yield off, chunk.rstrip("\r\n")
        off += len(chunk)


def annotate_sections(text: str, marker: str = SECTION_MARKER) -> AnnotatedDocument:
    regions: List[Region] = []
    state = EXPECT_OPEN
    for off, line in _lines(text):
        pos = line.find(marker)
        if pos < 0:
            continue
        if state == EXPECT_OPEN:
            name = clean_dictionary_name(line[pos + len(marker):])
            start = off + pos
            regions.append(Region(len(regions), start, start + len(marker), name, SECTION))
            state = EXPECT_CLOSE
        else:
            state = EXPECT_OPEN
    return AnnotatedDocument(text=text, regions=regions)


def annotate_search(source: Union[str, AnnotatedDocument], query: str) -> AnnotatedDocument:
    """
    Tag every occurrence of `query`, ignoring case.

    A plain string starts numbering at 0. An AnnotatedDocument keeps its
    regions and the new ones continue after them.
    """
    if isinstance(source, AnnotatedDocument):
        text, regions = source.text, list(source.regions)
    else:
        text, regions = source, []
    if not query:
        return AnnotatedDocument(text=text, regions=regions)

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    label = len(regions)
    for off, line in _lines(text):
        for m in pattern.finditer(line):
            regions.append(Region(label, off + m.start(), off + m.end(), m.group(0), SEARCH))
            label += 1
    return AnnotatedDocument(text=text, regions=regions)


@dataclass
class NavigationCursor:
    """
    Position among the regions created by the latest annotation pass.

    After reset() nothing is highlighted; the first advance() yields `first`.
    Advancing past the last region stays on the last one.
    """
    first: int = 0
    count: int = 0
    current: Optional[int] = None

    def reset(self, first: int, count: int) -> None:
        self.first = first
        self.count = count
        self.current = None

    @property
    def last(self) -> Optional[int]:
        return self.first + self.count - 1 if self.count else None

    def advance(self) -> Optional[int]:
        if not self.count:
            return None
        if self.current is None:
            self.current = self.first
        elif self.current < self.first + self.count - 1:
            self.current += 1
        return self.current

    def jump(self, label: int) -> int:
        if not (self.first <= label < self.first + self.count):
            raise IndexError(f"region {label} outside {self.first}..{self.first + self.count - 1}")
        self.current = label
        return label
