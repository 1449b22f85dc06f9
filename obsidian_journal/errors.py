"""Exceptions raised by journal operations."""


class VaultAccessError(OSError):
    """The vault directory is missing or cannot be listed."""


class StructuringError(ValueError):
    """The language model reply could not be turned into a note."""


class DailyNoteError(RuntimeError):
    """Today's note could not be located or bootstrapped."""
