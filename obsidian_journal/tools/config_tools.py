"""MCP tools for inspecting the journal configuration."""

import logging
from typing import Any
from mcp.server.fastmcp import Context

from obsidian_journal.server import mcp
from obsidian_journal.config import get_settings
from obsidian_journal.core.daily_notes import today_note_path

logger = logging.getLogger(__name__)


@mcp.tool()
async def get_journal_config(ctx: Context | None = None) -> dict[str, Any]:
    """Show the vault, related-notes, daily-note and model settings in use.

    Returns:
        {
            "vault": {"name": str, "path": str, "description": str, "exists": bool},
            "related_notes": {"vault_path": str, "match_cap": int, "strategy": str, ...},
            "daily_notes": {"folder": str, "format": str, "creation_timeout": float},
            "llm": {"model": str, "embedding_model": str, "api_key_configured": bool, ...},
            "today_note": str
        }

    Error Handling:
        - Config file missing → Error with expected config path
        - Invalid config format → Error describing the problem
    """
    settings = get_settings()
    payload = settings.as_payload()
    payload["today_note"] = str(today_note_path(settings))
    return payload
