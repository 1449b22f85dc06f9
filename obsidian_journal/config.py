"""Configuration loading for the journal service."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from obsidian_journal.constants import CONFIG_ENV_VAR, CONFIG_PATH, DOTENV_PATH
from obsidian_journal.data_models import (
    DailyNoteConfig,
    JournalSettings,
    LLMConfig,
    RelatedNotesConfig,
    VaultMetadata,
)

logger = logging.getLogger(__name__)

STRATEGIES = ("substring", "token_overlap", "embedding")


def _section(raw_config: Mapping[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Configuration section '{name}' must be a mapping")
    return section


def _resolve_vault_path(raw_path: str) -> Path:
    resolved_path = Path(raw_path).expanduser()
    try:
        resolved_path = resolved_path.resolve(strict=False)
    except RuntimeError:
        # resolve can raise on symlink loops; keep the expanded path
        pass
    return resolved_path


def parse_journal_settings(
    raw_config: Mapping[str, Any],
    environ: Optional[Mapping[str, str]] = None,
) -> JournalSettings:
    """Validate a parsed configuration mapping into :class:`JournalSettings`.

    Args:
        raw_config: Mapping loaded from ``journal.yaml``.
        environ: Environment used for overrides. Defaults to ``os.environ``.

    Returns:
        The fully populated settings.

    Raises:
        ValueError: If a section is malformed, the vault path is missing, the match
            cap is negative, or the strategy is unknown.
    """
    env = os.environ if environ is None else environ

    vault_section = _section(raw_config, "vault")
    raw_path = env.get("VAULT_PATH") or vault_section.get("path")
    if not isinstance(raw_path, str) or not raw_path.strip():
        raise ValueError("Configuration must provide 'vault.path' or the VAULT_PATH environment variable")

    vault_path = _resolve_vault_path(raw_path.strip())
    vault = VaultMetadata(
        name=str(vault_section.get("name") or vault_path.name),
        path=vault_path,
        description=str(vault_section.get("description", "")).strip(),
    )

    related_section = _section(raw_config, "related_notes")
    match_cap = related_section.get("match_cap", 2)
    if not isinstance(match_cap, int) or isinstance(match_cap, bool) or match_cap < 0:
        raise ValueError("'related_notes.match_cap' must be a non-negative integer")
    strategy = related_section.get("strategy", "substring")
    if strategy not in STRATEGIES:
        raise ValueError(
            f"Unknown related-notes strategy '{strategy}'. Expected one of: {', '.join(STRATEGIES)}"
        )
    threshold = related_section.get("threshold")
    if threshold is not None and not isinstance(threshold, (int, float)):
        raise ValueError("'related_notes.threshold' must be a number")

    related = RelatedNotesConfig(
        vault_path=vault_path,
        match_cap=match_cap,
        strategy=strategy,
        threshold=float(threshold) if threshold is not None else None,
    )

    daily_section = _section(raw_config, "daily_notes")
    daily = DailyNoteConfig(
        folder=str(daily_section.get("folder", "") or ""),
        format=str(daily_section.get("format", "YYYY-MM-DD")),
        creation_timeout=float(daily_section.get("creation_timeout", 5.0)),
        poll_interval=float(daily_section.get("poll_interval", 0.25)),
    )

    llm_section = _section(raw_config, "llm")
    llm = LLMConfig(
        model=env.get("OPENAI_MODEL") or str(llm_section.get("model", "gpt-4o-mini")),
        embedding_model=str(llm_section.get("embedding_model", "text-embedding-3-small")),
        api_key=env.get("OPENAI_API_KEY") or None,
        temperature=float(llm_section.get("temperature", 0.3)),
    )

    return JournalSettings(vault=vault, related=related, daily=daily, llm=llm)


def load_journal_settings(config_path: Optional[Path] = None) -> JournalSettings:
    """Load and validate the journal configuration file.

    Environment overrides are read from ``.env.development`` (if present) before
    the YAML file is parsed.

    Args:
        config_path: Path to the YAML configuration file. Defaults to the value of
            ``OBSIDIAN_JOURNAL_CONFIG`` or ``journal.yaml`` at the repository root.

    Returns:
        The validated :class:`JournalSettings`.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file does not provide the expected structure.
    """
    load_dotenv(DOTENV_PATH)

    if config_path is None:
        config_path = Path(os.environ.get(CONFIG_ENV_VAR) or CONFIG_PATH)

    if not config_path.exists():
        raise FileNotFoundError(f"Journal configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Journal configuration must be a YAML mapping")

    settings = parse_journal_settings(raw_config)
    if not settings.vault.exists:
        logger.warning("Configured vault '%s' does not exist at %s", settings.vault.name, settings.vault.path)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> JournalSettings:
    """Return the process-wide settings, loading them on first use."""
    return load_journal_settings()
