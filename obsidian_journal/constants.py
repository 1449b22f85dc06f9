"""Module-level constants for the Obsidian journal MCP server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "journal.yaml"
CONFIG_ENV_VAR = "OBSIDIAN_JOURNAL_CONFIG"
DOTENV_PATH = Path(".env.development")

# Notes
NOTE_EXTENSION = ".md"
DEFAULT_MATCH_CAP = 2
DEFAULT_DAILY_FOLDER = ""
DEFAULT_DAILY_FORMAT = "YYYY-MM-DD"
DAILY_NOTES_SETTINGS = Path(".obsidian") / "daily-notes.json"

# LLM
DEFAULT_CHAT_MODEL = "gpt-4o-mini"
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"

# Search
SNIPPET_RADIUS = 100
