"""Pydantic input models for note creation and daily-note updates."""

from __future__ import annotations

from .base import BaseTranscriptInput


class AddNoteInput(BaseTranscriptInput):
    """Input model for add_structured_note tool.

    Structures a raw transcript into a new note and links related notes.

    Examples:
        >>> AddNoteInput(raw_content="Thinking about how to plan next quarter...")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"raw_content": "Thinking about how to plan next quarter, first the hiring..."}
            ]
        }


class UpdateTodayNoteInput(BaseTranscriptInput):
    """Input model for update_today_note tool.

    Merges a raw transcript into today's daily note, creating it if necessary.

    Examples:
        >>> UpdateTodayNoteInput(raw_content="Had a great run this morning...")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"raw_content": "Had a great run this morning, then the team sync ran long."}
            ]
        }
