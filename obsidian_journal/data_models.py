"""Data models for the journal configuration and note payloads."""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from obsidian_journal.constants import (
    DEFAULT_CHAT_MODEL,
    DEFAULT_DAILY_FOLDER,
    DEFAULT_DAILY_FORMAT,
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_MATCH_CAP,
)


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing the Obsidian vault."""

    name: str
    path: Path
    description: str = ""

    @property
    def exists(self) -> bool:
        return self.path.is_dir()

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.exists,
        }


@dataclass(frozen=True)
class RelatedNotesConfig:
    """Where and how the related-notes lookup scans."""

    vault_path: Path
    match_cap: int = DEFAULT_MATCH_CAP
    strategy: str = "substring"
    threshold: Optional[float] = None

    def as_payload(self) -> dict[str, Any]:
        return {
            "vault_path": str(self.vault_path),
            "match_cap": self.match_cap,
            "strategy": self.strategy,
            "threshold": self.threshold,
        }


@dataclass(frozen=True)
class DailyNoteConfig:
    """Fallback daily-note layout, used when the vault has no daily-notes.json."""

    folder: str = DEFAULT_DAILY_FOLDER
    format: str = DEFAULT_DAILY_FORMAT
    creation_timeout: float = 5.0
    poll_interval: float = 0.25

    def as_payload(self) -> dict[str, Any]:
        return {
            "folder": self.folder,
            "format": self.format,
            "creation_timeout": self.creation_timeout,
        }


@dataclass(frozen=True)
class LLMConfig:
    """Model names and credentials for the OpenAI client."""

    model: str = DEFAULT_CHAT_MODEL
    embedding_model: str = DEFAULT_EMBEDDING_MODEL
    api_key: Optional[str] = field(default=None, repr=False)
    temperature: float = 0.3

    def as_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "embedding_model": self.embedding_model,
            "api_key_configured": bool(self.api_key),
            "temperature": self.temperature,
        }


@dataclass(frozen=True)
class JournalSettings:
    """Everything the journal operations need, resolved once from journal.yaml."""

    vault: VaultMetadata
    related: RelatedNotesConfig
    daily: DailyNoteConfig = field(default_factory=DailyNoteConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)

    def as_payload(self) -> dict[str, Any]:
        return {
            "vault": self.vault.as_payload(),
            "related_notes": self.related.as_payload(),
            "daily_notes": self.daily.as_payload(),
            "llm": self.llm.as_payload(),
        }


@dataclass(frozen=True)
class StructuredNote:
    """A transcript turned into a titled, tagged note body."""

    title: str
    content: str
    tags: list[str] = field(default_factory=list)
