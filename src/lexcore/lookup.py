from __future__ import annotations
import logging
import shutil
import subprocess
from typing import Sequence

from . import config as CFG
from .errors import LookupFailed

log = logging.getLogger(__name__)


def lookup_available(executable: str = CFG.DEFAULT_SDCV) -> bool:
    return shutil.which(executable) is not None


def run_lookup(word: str,
               args: Sequence[str] = ("-c", "-n"),
               *,
               executable: str = CFG.DEFAULT_SDCV,
               timeout: float = CFG.LOOKUP_TIMEOUT) -> str:
    """
    Run the dictionary program on `word` and return its standard output.

    Nothing partial is returned: a missing program, a timeout or a non-zero
    exit all raise LookupFailed.
    """
    if not word.strip():
        return ""
    cmd = [executable, *args, word]
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True,
                              encoding="utf-8", errors="replace", timeout=timeout)
    except FileNotFoundError as exc:
        raise LookupFailed(f"{executable}: command not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise LookupFailed(f"{executable} did not answer within {timeout:g}s") from exc
    except OSError as exc:
        raise LookupFailed(f"{executable}: {exc}") from exc

    if proc.stderr:
        log.debug("%s stderr: %s", executable, proc.stderr.strip())
    if proc.returncode != 0:
        tail = (proc.stderr or "").strip().splitlines()[-1:] or [f"exit status {proc.returncode}"]
        raise LookupFailed(f"{executable} failed: {tail[0]}")
    return proc.stdout
