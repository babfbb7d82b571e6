from __future__ import annotations
import re
from typing import Iterable, Tuple

# ESC [ ... final byte; sdcv -c only emits SGR sequences but be generous.
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

# Styling sdcv wraps around dictionary names; removed from the name shown in navigation.
NAME_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("\x1b[0;34m", ""),
    ("\x1b[0m", ""),
    ("[0;34m", ""),
    ("[0m", ""),
)

# Terminal palette rewrite applied before rendering lookup output.
STYLE_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("[0;37m", "[0;10m"),
    ("[3m", "[0;10m"),
    ("[0;34m", "[0;36m"),
)


def fold(text: str) -> str:
    """The one case folding used for sorting, bisecting and prefix matching."""
    return text.lower()


def replace_all(text: str, table: Iterable[Tuple[str, str]]) -> str:
    for old, new in table:
        text = text.replace(old, new)
    return text


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def clean_dictionary_name(raw: str) -> str:
    """'\\x1b[0;34mMueller EN-RU\\x1b[0m' -> 'Mueller EN-RU'"""
    return strip_ansi(replace_all(raw, NAME_REPLACEMENTS)).strip()
