"""Core vault checks and note path helpers."""

import re
from pathlib import Path

from obsidian_journal.constants import NOTE_EXTENSION
from obsidian_journal.data_models import VaultMetadata
from obsidian_journal.errors import VaultAccessError

# Characters Obsidian refuses in file names or that break [[wikilinks]]
_FORBIDDEN_CHARACTERS = re.compile(r'[\\/:*?"<>|#^\[\]]')
_WHITESPACE = re.compile(r"\s+")


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Args:
        vault: Metadata describing the vault to use.

    Raises:
        VaultAccessError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise VaultAccessError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def note_file_stem(title: str) -> str:
    """Turn a generated title into a file stem: unsafe characters dropped, spaces to ``-``.

    Examples:
        >>> note_file_stem("Weekly  Review: Goals")
        'Weekly-Review-Goals'

    Raises:
        ValueError: If nothing usable is left of ``title``.
    """
    cleaned = _FORBIDDEN_CHARACTERS.sub("", title).strip().strip(".")
    stem = _WHITESPACE.sub("-", cleaned)
    if not stem:
        raise ValueError(f"Title '{title}' does not contain any characters usable in a file name.")
    return stem


def resolve_note_path(vault: VaultMetadata, file_name: str) -> Path:
    """Resolve a note file name to an absolute path inside ``vault``.

    Raises:
        ValueError: If the resolved path escapes the vault root.
    """
    if not file_name.endswith(NOTE_EXTENSION):
        file_name = f"{file_name}{NOTE_EXTENSION}"

    candidate = (vault.path / file_name).resolve(strict=False)
    vault_root = vault.path.resolve(strict=False)
    if not candidate.is_relative_to(vault_root):
        raise ValueError("Note path escapes the configured vault.")
    return candidate


def note_title(path: Path) -> str:
    """Title of a note file: its name without the ``.md`` extension."""
    name = path.name
    if name.endswith(NOTE_EXTENSION):
        return name[: -len(NOTE_EXTENSION)]
    return name
