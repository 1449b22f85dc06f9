"""Search operations over the vault's notes."""

from __future__ import annotations

import logging
import re
from typing import Any

import frontmatter
import yaml

from obsidian_journal.constants import NOTE_EXTENSION, SNIPPET_RADIUS
from obsidian_journal.core.vault_operations import ensure_vault_ready, note_title
from obsidian_journal.data_models import JournalSettings

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split raw note text into frontmatter metadata and markdown body.

    A malformed frontmatter block is treated as part of the body.
    """
    if not text:
        return {}, ""

    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as exc:
        logger.debug("Treating invalid frontmatter as body text: %s", exc)
        return {}, text

    metadata = dict(post.metadata or {})
    return metadata, post.content if post.content is not None else ""


def _normalize_tags(raw_tags: Any) -> list[str]:
    if raw_tags is None:
        return []
    if isinstance(raw_tags, str):
        raw_tags = raw_tags.replace(",", " ").split()
    if not isinstance(raw_tags, list):
        return []
    return [str(tag).lstrip("#").strip() for tag in raw_tags if str(tag).strip()]


def _snippet(body: str, position: int, length: int) -> str:
    start = max(0, position - SNIPPET_RADIUS)
    end = min(len(body), position + length + SNIPPET_RADIUS)
    snippet = body[start:end].strip().replace("\n", " ")
    if start > 0:
        snippet = f"...{snippet}"
    if end < len(body):
        snippet = f"{snippet}..."
    return snippet


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def search_notes(settings: JournalSettings, query: str, limit: int = 10) -> dict[str, Any]:
    """Case-insensitive search across note titles, bodies and frontmatter tags.

    Args:
        settings: Journal settings.
        query: Search string.
        limit: Maximum number of results.

    Returns:
        ``{"vault", "query", "results": [{"title", "snippet", "tags"}, ...]}`` with
        results in title order.

    Raises:
        ValueError: If the query is empty or ``limit`` is not positive.
        VaultAccessError: If the vault directory is missing.
    """
    vault = settings.vault
    ensure_vault_ready(vault)

    trimmed_query = query.strip()
    if not trimmed_query:
        raise ValueError("Search query cannot be empty.")
    if limit < 1:
        raise ValueError("Search limit must be at least 1.")

    query_lower = trimmed_query.lower()
    query_pattern = re.compile(re.escape(trimmed_query), re.IGNORECASE)
    results: list[dict[str, Any]] = []

    for path in sorted(vault.path.glob(f"*{NOTE_EXTENSION}")):
        if not path.is_file():
            continue

        try:
            text = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            logger.warning(
                "Skipping file '%s' in vault '%s' due to read error: %s",
                path,
                vault.name,
                exc,
            )
            continue

        metadata, body = _parse_frontmatter(text)
        title = note_title(path)
        tags = _normalize_tags(metadata.get("tags"))

        hit = query_pattern.search(body)
        if hit is not None:
            snippet = _snippet(body, hit.start(), hit.end() - hit.start())
        elif query_lower in title.lower() or any(query_lower in tag.lower() for tag in tags):
            snippet = _snippet(body, 0, 0)
        else:
            continue

        results.append({"title": title, "snippet": snippet, "tags": tags})
        if len(results) >= limit:
            break

    return {
        "vault": vault.name,
        "query": trimmed_query,
        "results": results,
    }
