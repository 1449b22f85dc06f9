"""Core business logic for creating structured notes and updating today's note."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Any, Optional

from openai import OpenAI

from obsidian_journal.core.daily_notes import UriOpener, create_daily_note_via_uri, today_note_path
from obsidian_journal.core.related_notes import RelatedNoteFinder, build_strategy
from obsidian_journal.core.structuring import NoteStructurer, extract_markdown_content
from obsidian_journal.core.vault_operations import (
    ensure_vault_ready,
    note_file_stem,
    note_title,
    resolve_note_path,
)
from obsidian_journal.data_models import JournalSettings

logger = logging.getLogger(__name__)

RELATED_HEADER = "Related Notes:"
_RELATED_BLOCK = re.compile(
    r"^" + re.escape(RELATED_HEADER) + r"[ \t]*(?:\n|$)(?P<links>(?:- \[\[[^\]\n]+\]\][ \t]*(?:\n|$))*)",
    re.MULTILINE,
)
_LINK = re.compile(r"\[\[([^\]\n]+)\]\]")


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def related_note_finder(settings: JournalSettings) -> RelatedNoteFinder:
    """Build the finder described by ``settings.related``."""
    client = None
    if settings.related.strategy == "embedding":
        client = OpenAI(api_key=settings.llm.api_key)
    strategy = build_strategy(settings.related, client=client, model=settings.llm.embedding_model)
    return RelatedNoteFinder(settings.related, strategy=strategy)


def _related_block(related: list[str]) -> str:
    lines = [RELATED_HEADER] + [f"- [[{title}]]" for title in related]
    return "\n".join(lines) + "\n"


def render_note(title: str, content: str, tags: list[str], related: list[str]) -> str:
    """Render a new note: heading, optional related-notes links, body, optional tags.

    Examples:
        >>> render_note("Idea", "Body", ["a", "b"], ["Other"])
        '# Idea\\n\\nRelated Notes:\\n- [[Other]]\\n\\nBody\\n\\nTags: a, b'
    """
    text = f"# {title}\n\n"
    if related:
        text += _related_block(related) + "\n"
    text += f"{content}\n"
    if tags:
        text += f"\nTags: {', '.join(tags)}"
    return text


def splice_related_links(body: str, related: list[str]) -> str:
    """Merge ``related`` into the note's ``Related Notes:`` block, appending one if absent.

    Titles already linked in the block are not repeated.
    """
    if not related:
        return body

    match = _RELATED_BLOCK.search(body)
    if match is None:
        return f"{body.rstrip()}\n\n{_related_block(related)}"

    existing = _LINK.findall(match.group("links"))
    merged = existing + [title for title in related if title not in existing]
    return body[: match.start()] + _related_block(merged) + body[match.end():]


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


async def add_structured_note(
    settings: JournalSettings,
    structurer: NoteStructurer,
    raw_content: str,
) -> dict[str, Any]:
    """Structure a raw transcript into a new note linked to related notes.

    Args:
        settings: Journal settings.
        structurer: Model wrapper producing title, content and tags.
        raw_content: Raw transcript of thoughts and reflections.

    Returns:
        A dictionary describing the created note, including the related titles.

    Raises:
        VaultAccessError: If the vault directory is missing.
        StructuringError: If the model reply cannot be parsed.
        FileExistsError: If a note with the generated file name already exists.
    """
    vault = settings.vault
    ensure_vault_ready(vault)

    structured = await structurer.structure_content(raw_content)
    stem = note_file_stem(structured.title)
    target_path = resolve_note_path(vault, stem)
    if target_path.exists():
        raise FileExistsError(f"Note '{target_path.name}' already exists in vault '{vault.name}'.")

    related = await asyncio.to_thread(related_note_finder(settings).find, structured.content, stem)
    target_path.write_text(
        render_note(structured.title, structured.content, structured.tags, related),
        encoding="utf-8",
    )
    logger.info(
        "Created note '%s' in vault '%s' with %d related notes",
        target_path.name,
        vault.name,
        len(related),
    )
    return {
        "vault": vault.name,
        "title": structured.title,
        "fileName": target_path.name,
        "path": str(target_path),
        "tags": structured.tags,
        "relatedNotes": related,
        "status": "created",
    }


async def update_today_note(
    settings: JournalSettings,
    structurer: NoteStructurer,
    raw_content: str,
    opener: Optional[UriOpener] = None,
    note_path: Optional[Path] = None,
) -> dict[str, Any]:
    """Merge a raw transcript into today's note, creating it through Obsidian if needed.

    Args:
        settings: Journal settings.
        structurer: Model wrapper that rewrites the daily note.
        raw_content: Raw transcript of thoughts and reflections.
        opener: URI launcher used when today's note is missing.
        note_path: Override for today's note location (defaults to the vault's
            daily-note settings).

    Returns:
        A dictionary with the note title, file name, the raw model reply and the
        related titles.

    Raises:
        VaultAccessError: If the vault directory is missing.
        DailyNoteError: If today's note cannot be created.
    """
    vault = settings.vault
    ensure_vault_ready(vault)

    today_path = note_path or today_note_path(settings)
    title = note_title(today_path)
    if not today_path.is_file():
        logger.info("Today's note %s does not exist yet", today_path)
        await create_daily_note_via_uri(settings, today_path, opener=opener)

    existing = today_path.read_text(encoding="utf-8")
    ai_response = await structurer.structure_daily_note(existing, raw_content)
    updated = extract_markdown_content(ai_response)

    related = await asyncio.to_thread(related_note_finder(settings).find, updated, title)
    today_path.write_text(splice_related_links(updated, related), encoding="utf-8")
    logger.info("Updated today's note '%s' with %d related notes", today_path.name, len(related))

    return {
        "vault": vault.name,
        "title": title,
        "fileName": today_path.name,
        "path": str(today_path),
        "AIResponse": ai_response,
        "relatedNotes": related,
        "status": "updated",
    }
