import pytest

from lexcore.models import SEARCH, SECTION
from lexcore.regions import NavigationCursor, annotate_search, annotate_sections

SDCV_OUT = (
    "Found 2 items, similar to apple.\n"
    "-->Mueller EN-RU\n"
    "-->apple\n"
    "\n"
    "  яблоко\n"
    "\n"
    "-->WordNet\n"
    "-->apple\n"
    "\n"
    " n 1: fruit with red or yellow or green skin (Apple)\n"
)


def test_search_scenario_numbering_and_cursor():
    text = "alpha\nbeta\nALPHA line\ngamma"
    doc = annotate_search(text, "alpha")
    assert doc.text == text
    assert doc.labels == [0, 1]
    assert [(r.start, r.end, r.payload) for r in doc.regions] == [(0, 5, "alpha"), (11, 16, "ALPHA")]
    assert {r.kind for r in doc.regions} == {SEARCH}

    cur = NavigationCursor()
    cur.reset(0, len(doc.regions))
    assert cur.current is None
    assert cur.advance() == 0
    assert cur.advance() == 1
    assert cur.advance() == 1     # no wraparound


def test_every_occurrence_is_a_region():
    doc = annotate_search("aXa xa\nnone\nXA", "xa")
    assert doc.labels == [0, 1, 2]
    assert [doc.text[r.start:r.end] for r in doc.regions] == ["Xa", "xa", "XA"]


def test_empty_query_is_a_noop():
    doc = annotate_search("abc", "")
    assert doc.regions == [] and doc.text == "abc"


def test_sections_take_every_other_marker_line():
    doc = annotate_sections(SDCV_OUT)
    assert doc.labels == [0, 1]
    assert doc.payloads(SECTION) == ["Mueller EN-RU", "WordNet"]
    for r in doc.regions:
        assert doc.text[r.start:r.end] == "-->"
    assert doc.text == SDCV_OUT


def test_section_names_lose_terminal_styling():
    text = "-->\x1b[0;34mMueller\x1b[0m\n-->\x1b[0;32mapple\x1b[0m\ntext\n"
    assert annotate_sections(text).payloads() == ["Mueller"]


def test_search_labels_continue_after_existing_regions():
    sections = annotate_sections(SDCV_OUT)
    doc = annotate_search(sections, "apple")
    assert doc.labels == list(range(len(doc.regions)))
    hits = doc.regions[2:]
    assert [r.label for r in hits] == [2, 3, 4, 5]
    assert [r.payload for r in hits] == ["apple", "apple", "apple", "Apple"]
    # the source document is left alone
    assert sections.labels == [0, 1]


def test_cursor_starting_after_sections_and_jump():
    cur = NavigationCursor()
    cur.reset(2, 3)
    assert cur.advance() == 2
    assert cur.jump(4) == 4
    assert cur.advance() == 4
    with pytest.raises(IndexError):
        cur.jump(1)
    cur.reset(5, 0)
    assert cur.advance() is None
