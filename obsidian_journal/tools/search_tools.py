"""Search and discovery tools for the Obsidian journal.

- search_notes: Search note titles, text and tags with snippets
- find_related_notes: List notes related to a piece of content
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_journal.server import mcp
from obsidian_journal.config import get_settings
from obsidian_journal.models import FindRelatedNotesInput, SearchNotesInput
from obsidian_journal.core.search_operations import search_notes
from obsidian_journal.core.related_notes import find_related_notes
from obsidian_journal.core.note_operations import related_note_finder

logger = logging.getLogger(__name__)


@mcp.tool(name="search_notes")
async def search_notes_tool(
    input: SearchNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Search notes in the vault.

    Args:
        input (SearchNotesInput): Validated input containing:
            - query (str): Case-insensitive search string
            - limit (int): Maximum results (default 10)

    Returns:
        {
            "vault": str,
            "query": str,
            "results": [{"title": str, "snippet": str, "tags": [str, ...]}, ...]
        }
    """
    return search_notes(get_settings(), input.query, limit=input.limit)


@mcp.tool(name="find_related_notes")
async def find_related_notes_tool(
    input: FindRelatedNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Find notes related to a piece of content.

    Scans the vault in directory order and stops after ``cap`` matches, so the
    result is not ranked by relevance.

    Args:
        input (FindRelatedNotesInput): Validated input containing:
            - content (str): Text to relate
            - exclude_title (str): Note never reported as related
            - cap (int, optional): Maximum titles (defaults to configured cap)

    Returns:
        {"vault": str, "relatedNotes": [str, ...], "cap": int}
    """
    settings = get_settings()
    finder = related_note_finder(settings)
    cap = settings.related.match_cap if input.cap is None else input.cap
    related = await asyncio.to_thread(
        find_related_notes,
        input.content,
        input.exclude_title,
        settings.related.vault_path,
        cap=cap,
        strategy=finder.strategy,
    )
    logger.info("find_related_notes returned %d titles", len(related))
    return {"vault": settings.vault.name, "relatedNotes": related, "cap": cap}
