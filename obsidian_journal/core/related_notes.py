"""Related-note discovery for freshly written note content.

The finder lists the vault once, walks the ``.md`` entries in directory order and
asks a :class:`MatchStrategy` whether each candidate is related to the new content.
The scan stops as soon as ``cap`` titles have been collected, so the result is a
prefix of the match set in listing order, not a relevance ranking.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Any, Optional, Protocol

import openai

from obsidian_journal.constants import NOTE_EXTENSION
from obsidian_journal.data_models import RelatedNotesConfig
from obsidian_journal.errors import VaultAccessError

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"\w+")


# ==============================================================================
# MATCH STRATEGIES
# ==============================================================================


class MatchStrategy(Protocol):
    """Scores how related a candidate note is to the new content."""

    threshold: float

    def score(self, content: str, candidate: str) -> float:
        ...


class SubstringMatch:
    """Case-insensitive literal containment of the content in the candidate."""

    threshold = 1.0

    def score(self, content: str, candidate: str) -> float:
        return 1.0 if content.lower() in candidate.lower() else 0.0


class TokenOverlapMatch:
    """Jaccard overlap between the lowercase word sets of both texts."""

    def __init__(self, threshold: float = 0.3) -> None:
        self.threshold = threshold

    @staticmethod
    def _tokens(text: str) -> set[str]:
        return set(_TOKEN_PATTERN.findall(text.lower()))

    def score(self, content: str, candidate: str) -> float:
        left = self._tokens(content)
        right = self._tokens(candidate)
        if not left or not right:
            return 0.0
        return len(left & right) / len(left | right)


def cosine_similarity(left: list[float], right: list[float]) -> float:
    """Cosine similarity of two equal-length vectors (0.0 for zero vectors)."""
    dot = sum(a * b for a, b in zip(left, right))
    norm = math.sqrt(sum(a * a for a in left)) * math.sqrt(sum(b * b for b in right))
    if norm == 0:
        return 0.0
    return dot / norm


class EmbeddingMatch:
    """Cosine similarity of OpenAI embeddings.

    ``client`` is a synchronous ``openai.OpenAI`` instance, so async callers run the
    scan in a worker thread. The embedding of the new content is computed once and
    reused for every candidate in the scan.
    """

    def __init__(self, client: Any, model: str, threshold: float = 0.8) -> None:
        self.client = client
        self.model = model
        self.threshold = threshold
        self._query: Optional[tuple[str, list[float]]] = None

    def _embed(self, text: str) -> list[float]:
        response = self.client.embeddings.create(model=self.model, input=text)
        return list(response.data[0].embedding)

    def score(self, content: str, candidate: str) -> float:
        if self._query is None or self._query[0] != content:
            self._query = (content, self._embed(content))
        return cosine_similarity(self._query[1], self._embed(candidate))


def build_strategy(config: RelatedNotesConfig, client: Any = None, model: Optional[str] = None) -> MatchStrategy:
    """Instantiate the strategy named in ``config``.

    Raises:
        ValueError: If the strategy is unknown, or ``embedding`` is requested
            without a client and model.
    """
    if config.strategy == "substring":
        return SubstringMatch()
    if config.strategy == "token_overlap":
        if config.threshold is None:
            return TokenOverlapMatch()
        return TokenOverlapMatch(threshold=config.threshold)
    if config.strategy == "embedding":
        if client is None or not model:
            raise ValueError("The 'embedding' strategy needs an OpenAI client and an embedding model.")
        if config.threshold is None:
            return EmbeddingMatch(client, model)
        return EmbeddingMatch(client, model, threshold=config.threshold)
    raise ValueError(f"Unknown related-notes strategy '{config.strategy}'.")


# ==============================================================================
# VAULT SCAN
# ==============================================================================


def _list_vault(vault_path: Path) -> list[Path]:
    try:
        return list(vault_path.iterdir())
    except OSError as exc:
        raise VaultAccessError(f"Vault is not accessible at {vault_path}: {exc}") from exc


def find_related_notes(
    content: str,
    exclude_title: str,
    vault_path: Path,
    cap: int = 2,
    strategy: Optional[MatchStrategy] = None,
) -> list[str]:
    """Return up to ``cap`` titles of vault notes related to ``content``.

    Args:
        content: Text of the note being written or updated.
        exclude_title: Title of that note, never reported as related to itself.
        vault_path: Directory holding the notes (flat, ``<title>.md`` files).
        cap: Maximum number of titles to return.
        strategy: Relatedness test. Defaults to :class:`SubstringMatch`.

    Returns:
        Titles in directory-listing order, at most ``cap`` of them.

    Raises:
        VaultAccessError: If the vault directory cannot be listed.
        ValueError: If ``content`` is empty or ``cap`` is negative.
    """
    if not content:
        raise ValueError("Content to relate cannot be empty.")
    if cap < 0:
        raise ValueError("Related-notes cap cannot be negative.")

    entries = _list_vault(vault_path)
    if cap == 0:
        return []

    strategy = strategy or SubstringMatch()
    excluded_name = f"{exclude_title}{NOTE_EXTENSION}"
    related: list[str] = []

    for entry in entries:
        if not entry.name.endswith(NOTE_EXTENSION) or entry.name == excluded_name:
            continue

        try:
            candidate = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping '%s' while finding related notes: %s", entry.name, exc)
            continue

        try:
            score = strategy.score(content, candidate)
        except openai.OpenAIError as exc:
            logger.warning("Skipping '%s': scoring failed: %s", entry.name, exc)
            continue

        if score >= strategy.threshold:
            related.append(entry.name[: -len(NOTE_EXTENSION)])
            if len(related) >= cap:
                break

    logger.debug("Found %d related notes for '%s' in %s", len(related), exclude_title, vault_path)
    return related


class RelatedNoteFinder:
    """Binds a :class:`RelatedNotesConfig` and strategy to :func:`find_related_notes`."""

    def __init__(self, config: RelatedNotesConfig, strategy: Optional[MatchStrategy] = None) -> None:
        self.config = config
        self.strategy = strategy or SubstringMatch()

    def find(self, content: str, exclude_title: str) -> list[str]:
        return find_related_notes(
            content,
            exclude_title,
            self.config.vault_path,
            cap=self.config.match_cap,
            strategy=self.strategy,
        )
