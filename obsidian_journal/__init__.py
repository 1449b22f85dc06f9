"""Obsidian Journal MCP Server

Structures raw transcripts into Obsidian notes and links related notes via
Model Context Protocol.
"""

from obsidian_journal.config import get_settings, load_journal_settings
from obsidian_journal.core.related_notes import RelatedNoteFinder, find_related_notes
from obsidian_journal.data_models import JournalSettings, RelatedNotesConfig, VaultMetadata
from obsidian_journal.errors import DailyNoteError, StructuringError, VaultAccessError
from obsidian_journal.server import mcp, run_server

# Import tools to register them with the MCP server
from obsidian_journal import tools  # noqa: F401

__version__ = "1.0.0"
__all__ = [
    "get_settings",
    "load_journal_settings",
    "RelatedNoteFinder",
    "find_related_notes",
    "JournalSettings",
    "RelatedNotesConfig",
    "VaultMetadata",
    "DailyNoteError",
    "StructuringError",
    "VaultAccessError",
    "mcp",
    "run_server",
]
