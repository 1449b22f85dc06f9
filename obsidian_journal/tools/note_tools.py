"""Note writing MCP tools.

This module provides MCP tool wrappers for transcript-driven note writes:
- Add a structured note linked to related notes
- Update today's daily note

All tools delegate to core operations in obsidian_journal.core.note_operations.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_journal.server import mcp
from obsidian_journal.config import get_settings
from obsidian_journal.core.structuring import NoteStructurer
from obsidian_journal.models import AddNoteInput, UpdateTodayNoteInput
from obsidian_journal.core.note_operations import add_structured_note, update_today_note


@lru_cache(maxsize=1)
def get_structurer() -> NoteStructurer:
    """Return the process-wide structurer built from the LLM settings."""
    return NoteStructurer.from_config(get_settings().llm)


# ==============================================================================
# CREATE OPERATIONS
# ==============================================================================

# Structures the transcript with the model, links related notes, writes a new file.
@mcp.tool(name="add_structured_note")
async def add_structured_note_tool(
    input: AddNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Structure a raw transcript and create a new note, linking related notes.

    The transcript is turned into a titled markdown note with tags. Up to the
    configured number of existing notes containing the new content are linked
    under a "Related Notes:" heading as [[wikilinks]].

    Args:
        input (AddNoteInput): Validated input containing:
            - raw_content (str): Raw transcript of thoughts and reflections

    Returns:
        {
            "vault": str,
            "title": str,
            "fileName": str,       # e.g. "Garden-Plan.md"
            "path": str,
            "tags": [str, ...],
            "relatedNotes": [str, ...],
            "status": "created"
        }

    Error Handling:
        - ValidationError: Empty transcript
        - Vault not accessible → Error with vault path
        - Model reply not usable → StructuringError
        - Note with the generated name exists → FileExistsError
    """
    return await add_structured_note(get_settings(), get_structurer(), input.raw_content)


# ==============================================================================
# UPDATE OPERATIONS
# ==============================================================================

# Creates today's note through Obsidian when missing, then merges the transcript.
@mcp.tool(name="update_today_note")
async def update_today_note_tool(
    input: UpdateTodayNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Structure a raw transcript into today's note, creating it if necessary.

    Today's note location follows the vault's daily-notes settings. When the
    file is missing it is created through the Obsidian Advanced URI handler.

    Args:
        input (UpdateTodayNoteInput): Validated input containing:
            - raw_content (str): Raw transcript of thoughts and reflections

    Returns:
        {
            "vault": str,
            "title": str,
            "fileName": str,
            "path": str,
            "AIResponse": str,     # Raw model reply
            "relatedNotes": [str, ...],
            "status": "updated"
        }

    Error Handling:
        - ValidationError: Empty transcript
        - Today's note could not be created → DailyNoteError
    """
    return await update_today_note(get_settings(), get_structurer(), input.raw_content)
