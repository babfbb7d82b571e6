from __future__ import annotations
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

VERSION = "1.0.0"
APP_NAME = "lexbrowse"

# completion
MAX_COMPLETIONS: int = 25
SCAN_MISS_TOLERANCE: int = 3     # consecutive misses that end the legacy scan
COMPLETION_STRATEGY = "range"    # "range" (bisect) or "scan" (legacy bounded scan)

# dictionary sources
DICT_SUFFIX = ".ifo"
SECTION_MARKER = "-->"           # emitted by sdcv before the dictionary name and the headword

# defaults for the external collaborators
DEFAULT_DICT_DIR = "/usr/share/stardict/dic"
DEFAULT_SOUND_DIR = "/usr/share/stardict/sounds"
DEFAULT_PLAYER = "mpv"
DEFAULT_SDCV = "sdcv"
DEFAULT_SDCV_ARGS = "-c -n"
LOOKUP_TIMEOUT: float = 15.0
SOUND_EXTS = (".mp3", ".ogg", ".wav")

HISTORY_SIZE: int = 10

# cache file names under the config dir
FINGERPRINT_FILE = "dicts"
WORDS_FILE = "words"
HISTORY_FILE = "history"


def _default_config_dir() -> Path:
    env = os.environ.get("LEXBROWSE_CONFIG_DIR")
    if env:
        return Path(env)
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(base) / APP_NAME


@dataclass
class Settings:
    """
    Runtime options shared by the CLI, the web app and the desktop app.

    Every field has a module-level default above; entry points override
    them from argparse flags and the environment.
    """
    dict_dir: Path = Path(DEFAULT_DICT_DIR)
    sound_dir: Path = Path(DEFAULT_SOUND_DIR)
    config_dir: Path = field(default_factory=_default_config_dir)
    player: List[str] = field(default_factory=lambda: [DEFAULT_PLAYER])
    sdcv: str = DEFAULT_SDCV
    sdcv_args: List[str] = field(default_factory=lambda: shlex.split(DEFAULT_SDCV_ARGS))
    history_size: int = HISTORY_SIZE
    autocompletion: bool = True
    completion_strategy: str = COMPLETION_STRATEGY
    verbose: bool = False

    @property
    def fingerprint_path(self) -> Path:
        return self.config_dir / FINGERPRINT_FILE

    @property
    def words_path(self) -> Path:
        return self.config_dir / WORDS_FILE

    @property
    def history_path(self) -> Path:
        return self.config_dir / HISTORY_FILE

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        s = cls(**overrides)
        if os.environ.get("LEXBROWSE_NOAUTO") == "1":
            s.autocompletion = False
        if os.environ.get("LEXBROWSE_VERBOSE") == "1":
            s.verbose = True
        return s


def add_common_arguments(parser) -> None:
    """Register the options every entry point understands."""
    parser.add_argument("--history-size", type=int, default=HISTORY_SIZE, help="Set history size")
    parser.add_argument("--sound-dir", default=DEFAULT_SOUND_DIR, help="Set the directory with sound files")
    parser.add_argument("--dict-dir", default=DEFAULT_DICT_DIR, help="Set the directory with dictionary files")
    parser.add_argument("--config-dir", default=None, help="Where the word cache and history live")
    parser.add_argument("--player", default=DEFAULT_PLAYER, help="Set audio player")
    parser.add_argument("--sdcv", default=DEFAULT_SDCV_ARGS, help="Set sdcv custom arguments")
    parser.add_argument("--noauto", action="store_true", help="Disable autocompletion")
    parser.add_argument("--strategy", choices=["range", "scan"], default=COMPLETION_STRATEGY,
                        help="Completion strategy")
    parser.add_argument("--rebuild", action="store_true", help="Rebuild the word cache at startup")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--version", action="store_true", help="Print current version")


def settings_from_args(args) -> Settings:
    overrides = dict(
        dict_dir=Path(args.dict_dir),
        sound_dir=Path(args.sound_dir),
        player=shlex.split(args.player),
        sdcv_args=shlex.split(args.sdcv),
        history_size=args.history_size,
        autocompletion=not args.noauto,
        completion_strategy=args.strategy,
        verbose=args.verbose,
    )
    if args.config_dir:
        overrides["config_dir"] = Path(args.config_dir)
    return Settings.from_env(**overrides)
