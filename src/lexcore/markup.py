from __future__ import annotations
import html
from typing import Dict, List, Set, Tuple

from .models import SEARCH, SECTION, AnnotatedDocument
from .normalize import STYLE_REPLACEMENTS, replace_all, strip_ansi

REGION_END = '[""]'

# tview-style color tags around each kind of region
KIND_STYLES: Dict[str, Tuple[str, str]] = {
    SECTION: ("[#06989A:]", "[-:-]"),
    SEARCH: ("[#FCE94F:#FF5FFF]", "[-:-]"),
}


def region_start(label: int) -> str:
    return f'["{label}"]'


def restyle(text: str) -> str:
    """Remap the sdcv palette to one that reads on dark and light terminals."""
    return replace_all(text, STYLE_REPLACEMENTS)


def to_tagged(doc: AnnotatedDocument, *, styled: bool = True) -> str:
    """
    Splice region markers into the text:  ["3"]matched text[""]

    Events at one position are emitted ends first, so adjacent regions never
    swallow each other; nested regions open outer-first and close inner-first.
    """
    events: List[Tuple[int, int, int, str]] = []
    for r in doc.regions:
        pre, post = KIND_STYLES.get(r.kind, ("", "")) if styled else ("", "")
        # sort keys: position, ends before starts, then outer before inner on open
        events.append((r.start, 1, -r.end, pre + region_start(r.label)))
        events.append((r.end, 0, -r.start, REGION_END + post))
    events.sort(key=lambda e: (e[0], e[1], e[2]))

    out: List[str] = []
    cur = 0
    for pos, _, _, marker in events:
        out.append(doc.text[cur:pos])
        out.append(marker)
        cur = pos
    out.append(doc.text[cur:])
    text = "".join(out)
    return restyle(text) if styled else text


def segments(doc: AnnotatedDocument, strip_styles: bool = True) -> List[Tuple[str, Tuple[int, ...]]]:
    """
    Split the text at every region boundary.

    Each piece comes with the labels of all regions covering it, outermost first.
    With `strip_styles` the terminal escape codes are removed from every piece;
    pieces left empty are dropped.
    """
    bounds = {0, len(doc.text)}
    for r in doc.regions:
        bounds.add(r.start)
        bounds.add(r.end)
    cuts = sorted(bounds)
    out: List[Tuple[str, Tuple[int, ...]]] = []
    for a, b in zip(cuts, cuts[1:]):
        if a == b:
            continue
        piece = doc.text[a:b]
        if strip_styles:
            piece = strip_ansi(piece)
            if not piece:
                continue
        covering = sorted((r for r in doc.regions if r.start <= a and b <= r.end),
                          key=lambda r: (r.start, -r.end))
        out.append((piece, tuple(r.label for r in covering)))
    return out


def to_html(doc: AnnotatedDocument) -> str:
    """
    Escaped HTML, every region wrapped in <mark data-region="N">.

    A region split over several pieces gets id="region-N" on its first mark only.
    """
    kinds = {r.label: r.kind for r in doc.regions}
    seen: Set[int] = set()
    parts: List[str] = []
    for piece, labels in segments(doc):
        chunk = html.escape(piece)
        for label in reversed(labels):
            anchor = "" if label in seen else f' id="region-{label}"'
            chunk = f'<mark class="region {kinds[label]}" data-region="{label}"{anchor}>{chunk}</mark>'
        seen.update(labels)
        parts.append(chunk)
    return "".join(parts)
