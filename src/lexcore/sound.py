from __future__ import annotations
import logging
import os
import shutil
import subprocess
from typing import List, Optional, Sequence

from .config import SOUND_EXTS
from .errors import SoundUnavailable

log = logging.getLogger(__name__)


def sound_dirs(sound_root: str) -> List[str]:
    """Voice collections: the immediate subdirectories of sound_root."""
    try:
        entries = sorted(os.listdir(sound_root))
    except OSError:
        return []
    return [e for e in entries if os.path.isdir(os.path.join(sound_root, e))]


def find_sound(word: str, sound_root: str, exts: Sequence[str] = SOUND_EXTS) -> Optional[str]:
    """<root>/<collection>/<first letter>/<word>.<ext>, or None."""
    key = word.strip().lower()
    if not key:
        return None
    for d in sound_dirs(sound_root):
        base = os.path.join(sound_root, d, key[0], key)
        for ext in exts:
            if os.path.isfile(base + ext):
                return base + ext
    return None


def play(path: str, player: Sequence[str]) -> subprocess.Popen:
    if not player or shutil.which(player[0]) is None:
        raise SoundUnavailable(f"player not found: {player[0] if player else '(none)'}")
    if not os.path.isfile(path):
        raise SoundUnavailable(f"no such sound file: {path}")
    try:
        return subprocess.Popen([*player, path], stdin=subprocess.DEVNULL,
                                stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as exc:
        raise SoundUnavailable(f"{player[0]}: {exc}") from exc
