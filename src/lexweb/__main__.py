from __future__ import annotations
import argparse
import logging
import sys

from lexcore.config import VERSION, add_common_arguments, settings_from_args
from lexcore.errors import LexError, LookupFailed, SoundUnavailable, StorageUnavailable
from lexcore.lookup import lookup_available
from lexcore.session import Session

log = logging.getLogger(__name__)


def _print_hits(session: Session, hits) -> None:
    if not hits:
        print("(no matches)"); return
    text = session.document.text
    print("#   Line   Match")
    for r in hits:
        line_no = text.count("\n", 0, r.start) + 1
        print(f"{r.label:<3} {line_no:<6} {r.payload}")


def _print_lookup(session: Session, word: str) -> None:
    try:
        res = session.lookup(word)
    except LookupFailed as exc:
        print(f"error: {exc}", file=sys.stderr); return
    print(res.document.text.rstrip("\n") or "(nothing found)")
    if res.dictionaries:
        print("\nFound in dictionaries: " + ", ".join(res.dictionaries))


def _print_completion(session: Session, prefix: str) -> None:
    c = session.suggest(prefix)
    for w in c.words:
        print(w)
    if c.exhausted:
        print("(no further completions)")


REPL_HELP = """Type a word to look it up (empty line to quit).
  ?prefix      suggestions          :find text   search in the result
  :next        next search hit      :dicts       dictionaries in the result
  :hist        history              :say         pronounce"""


def _repl(session: Session) -> None:
    print(REPL_HELP)
    while True:
        try:
            raw = input("> ")
        except (EOFError, KeyboardInterrupt):
            print(); break
        cmd = raw.strip()
        if not cmd:
            break
        if cmd.startswith("?"):
            _print_completion(session, cmd[1:])
        elif cmd.startswith(":find"):
            _print_hits(session, session.search(cmd[5:].strip()))
        elif cmd == ":next":
            label = session.next_hit()
            print("(no hits)" if label is None else f"-> region {label}")
        elif cmd == ":dicts":
            for i, name in enumerate(session.dictionaries):
                print(f"{i:<3} {name}")
        elif cmd == ":hist":
            for w in session.history.items():
                print(w)
        elif cmd == ":say":
            try:
                if not session.play_sound():
                    print("(no recording)")
            except SoundUnavailable as exc:
                print(f"error: {exc}", file=sys.stderr)
        else:
            _print_lookup(session, cmd)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Look up words in local StarDict dictionaries")
    add_common_arguments(p)
    p.add_argument("--q", default=None, help="Word or phrase to look up once")
    p.add_argument("--complete", default=None, metavar="PREFIX", help="Print completions for PREFIX")
    p.add_argument("--search", default=None, help="Search text inside the --q result")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("words", nargs="*", help="Word or phrase to look up at start")
    args = p.parse_args(argv)

    if args.version:
        print(VERSION)
        return 0
    settings = settings_from_args(args)
    if settings.verbose:
        logging.basicConfig(level=logging.INFO)
    if not lookup_available(settings.sdcv):
        log.warning("%s not found in PATH; lookups will fail", settings.sdcv)

    try:
        session = Session.create(settings, rebuild=args.rebuild)
    except StorageUnavailable as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.complete is not None:
            _print_completion(session, args.complete)
        query = args.q or " ".join(args.words)
        if query:
            _print_lookup(session, query)
            if args.search:
                _print_hits(session, session.search(args.search))
        if args.repl:
            _repl(session)
        return 0
    except LexError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
