"""MCP tool definitions for the Obsidian journal service.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from obsidian_journal.tools import config_tools
from obsidian_journal.tools import note_tools
from obsidian_journal.tools import search_tools

__all__ = [
    "config_tools",
    "note_tools",
    "search_tools",
]
