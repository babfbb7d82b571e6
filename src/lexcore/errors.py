from __future__ import annotations


class LexError(Exception):
    """Base class for every error raised by lexcore."""


class SourceUnreadable(LexError):
    """A dictionary source (its .ifo or .idx) could not be opened or parsed."""

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}" if reason else source)


class StorageUnavailable(LexError):
    """The cache directory or one of its files cannot be created or written."""


class LookupFailed(LexError):
    """The external lookup program is missing, failed, or timed out."""


class SoundUnavailable(LexError):
    """No player, or the player could not be started."""
