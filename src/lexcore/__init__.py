"""
lexcore: word cache, prefix completion and result regions for a local StarDict browser.

Main entry points:
    Engine(settings).open()          fingerprint check, rebuild if needed, load the cache
    Engine.complete(prefix)          up to 25 case-insensitive prefix matches
    annotate_sections(text)          one region per dictionary section of sdcv output
    annotate_search(doc, query)      one region per search hit
    Session.create(settings)         the state a UI works against

Example Usage:
    from lexcore import Settings, Session

    session = Session.create(Settings.from_env())
    print(session.suggest("appl").words)
    result = session.lookup("apple")
    print(result.dictionaries)
"""

from .config import Settings, VERSION
from .engine import Engine
from .models import AnnotatedDocument, Completion, DictionarySource, LookupResult, Region
from .regions import NavigationCursor, annotate_search, annotate_sections
from .search import Completer, PrefixIndex, complete_prefix
from .session import Session

__version__ = VERSION
__all__ = [
    "Settings", "Engine", "Session",
    "AnnotatedDocument", "Completion", "DictionarySource", "LookupResult", "Region",
    "NavigationCursor", "annotate_search", "annotate_sections",
    "Completer", "PrefixIndex", "complete_prefix",
]
