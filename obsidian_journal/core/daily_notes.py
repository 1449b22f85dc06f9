"""Daily-note path resolution and bootstrapping through Obsidian's URI handler."""

from __future__ import annotations

import asyncio
import json
import logging
import platform
import re
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Awaitable, Callable, Optional
from urllib.parse import quote

from obsidian_journal.constants import DAILY_NOTES_SETTINGS, NOTE_EXTENSION
from obsidian_journal.data_models import DailyNoteConfig, JournalSettings
from obsidian_journal.errors import DailyNoteError

logger = logging.getLogger(__name__)

UriOpener = Callable[[str], Awaitable[None]]

_MOMENT_TOKENS = re.compile(r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd")


# ==============================================================================
# PATH RESOLUTION
# ==============================================================================


def format_moment_date(pattern: str, day: date) -> str:
    """Render ``day`` with a Moment.js format string as used by Obsidian.

    Supports ``YYYY``, ``YY``, ``MMMM``, ``MMM``, ``MM``, ``M``, ``DD``, ``D``,
    ``dddd``, ``ddd`` and ``[escaped]`` literals; every other character is copied.

    Examples:
        >>> format_moment_date("YYYY-MM-DD", date(2025, 3, 7))
        '2025-03-07'
        >>> format_moment_date("[Week of] MMM D", date(2025, 3, 7))
        'Week of Mar 7'
    """

    def _render(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith("["):
            return token[1:-1]
        return {
            "YYYY": f"{day.year:04d}",
            "YY": f"{day.year % 100:02d}",
            "MMMM": day.strftime("%B"),
            "MMM": day.strftime("%b"),
            "MM": f"{day.month:02d}",
            "M": str(day.month),
            "DD": f"{day.day:02d}",
            "D": str(day.day),
            "dddd": day.strftime("%A"),
            "ddd": day.strftime("%a"),
        }[token]

    return _MOMENT_TOKENS.sub(_render, pattern)


def load_daily_note_settings(vault_path: Path, defaults: DailyNoteConfig) -> DailyNoteConfig:
    """Merge the vault's ``.obsidian/daily-notes.json`` over configured defaults.

    Args:
        vault_path: Vault root.
        defaults: Configured fallback folder and format.

    Returns:
        A :class:`DailyNoteConfig` using the vault's folder/format when set.
    """
    settings_path = vault_path / DAILY_NOTES_SETTINGS
    if not settings_path.is_file():
        return defaults

    try:
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable daily-notes settings at %s: %s", settings_path, exc)
        return defaults

    if not isinstance(raw, dict):
        return defaults

    folder = raw.get("folder") or defaults.folder
    pattern = raw.get("format") or defaults.format
    return replace(defaults, folder=str(folder).strip("/"), format=str(pattern))


def today_note_path(settings: JournalSettings, today: Optional[date] = None) -> Path:
    """Return the absolute path of the daily note for ``today`` (defaults to now)."""
    config = load_daily_note_settings(settings.vault.path, settings.daily)
    name = format_moment_date(config.format, today or date.today())
    return settings.vault.path / config.folder / f"{name}{NOTE_EXTENSION}"


# ==============================================================================
# URI BOOTSTRAP
# ==============================================================================


def build_daily_note_uri(vault_name: str) -> str:
    """Advanced URI callout asking Obsidian to open (and create) today's note."""
    return f"obsidian://advanced-uri?vault={quote(vault_name, safe='')}&daily=true"


def _opener_command(uri: str) -> list[str]:
    system = platform.system()
    if system == "Darwin":
        return ["open", uri]
    if system == "Windows":
        return ["cmd", "/c", "start", "", uri]
    return ["xdg-open", uri]


async def launch_uri(uri: str) -> None:
    """Hand ``uri`` to the platform's default URL handler."""
    process = await asyncio.create_subprocess_exec(
        *_opener_command(uri),
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    _, stderr = await process.communicate()
    if process.returncode != 0:
        raise DailyNoteError(
            f"Opening '{uri}' failed with exit code {process.returncode}: {stderr.decode(errors='ignore').strip()}"
        )


async def create_daily_note_via_uri(
    settings: JournalSettings,
    note_path: Path,
    opener: Optional[UriOpener] = None,
) -> Path:
    """Ask Obsidian to create today's note and wait for the file to appear.

    Args:
        settings: Journal settings (vault name, timeout and poll interval).
        note_path: Where the daily note is expected to be written.
        opener: Coroutine that launches a URI. Defaults to :func:`launch_uri`.

    Returns:
        ``note_path`` once it exists.

    Raises:
        DailyNoteError: If the URI cannot be launched or the file does not appear
            before ``creation_timeout`` seconds elapse.
    """
    uri = build_daily_note_uri(settings.vault.name)
    logger.info("Creating today's note via %s", uri)

    try:
        await (opener or launch_uri)(uri)
    except OSError as exc:
        raise DailyNoteError(f"Failed to create today's note via Obsidian URI: {exc}") from exc

    loop = asyncio.get_running_loop()
    deadline = loop.time() + settings.daily.creation_timeout
    while not note_path.is_file():
        if loop.time() >= deadline:
            raise DailyNoteError(
                f"Failed to create today's note via Obsidian URI: {note_path} did not appear "
                f"within {settings.daily.creation_timeout:g}s."
            )
        await asyncio.sleep(settings.daily.poll_interval)

    return note_path
