"""Pydantic input models for MCP tool validation.

Architecture:
- base: BaseTranscriptInput for transcript-driven tools
- note_models: Input models for note creation and daily-note updates
- search_models: Input models for search and related-note discovery

Usage:
    from obsidian_journal.models import AddNoteInput, SearchNotesInput
"""

from .base import BaseTranscriptInput
from .note_models import AddNoteInput, UpdateTodayNoteInput
from .search_models import FindRelatedNotesInput, SearchNotesInput

__all__ = [
    "BaseTranscriptInput",
    "AddNoteInput",
    "UpdateTodayNoteInput",
    "SearchNotesInput",
    "FindRelatedNotesInput",
]
