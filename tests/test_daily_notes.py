"""Tests for daily-note path resolution and URI bootstrapping."""

import asyncio
import json
from datetime import date

import pytest

from obsidian_journal.core.daily_notes import (
    build_daily_note_uri,
    create_daily_note_via_uri,
    format_moment_date,
    load_daily_note_settings,
    today_note_path,
)
from obsidian_journal.data_models import DailyNoteConfig
from obsidian_journal.errors import DailyNoteError


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("YYYY-MM-DD", "2025-03-07"),
        ("YY.M.D", "25.3.7"),
        ("YYYY/MM/YYYY-MM-DD", "2025/03/2025-03-07"),
        ("[Journal] YYYY-MM-DD", "Journal 2025-03-07"),
        ("dddd, MMMM D", "Friday, March 7"),
        ("ddd DD MMM", "Fri 07 Mar"),
    ],
)
def test_format_moment_date(pattern, expected):
    assert format_moment_date(pattern, date(2025, 3, 7)) == expected


def test_daily_settings_default_without_obsidian_config(vault_path):
    defaults = DailyNoteConfig(folder="Daily", format="YYYY-MM-DD")
    assert load_daily_note_settings(vault_path, defaults) == defaults


def test_daily_settings_read_from_vault(vault_path):
    config_dir = vault_path / ".obsidian"
    config_dir.mkdir()
    (config_dir / "daily-notes.json").write_text(
        json.dumps({"folder": "Journal/Daily/", "format": "DD-MM-YYYY"}), encoding="utf-8"
    )

    config = load_daily_note_settings(vault_path, DailyNoteConfig())

    assert config.folder == "Journal/Daily"
    assert config.format == "DD-MM-YYYY"


def test_daily_settings_blank_values_fall_back(vault_path):
    config_dir = vault_path / ".obsidian"
    config_dir.mkdir()
    (config_dir / "daily-notes.json").write_text('{"folder": "", "format": ""}', encoding="utf-8")

    config = load_daily_note_settings(vault_path, DailyNoteConfig(folder="Daily"))

    assert config.folder == "Daily"
    assert config.format == "YYYY-MM-DD"


def test_daily_settings_invalid_json_falls_back(vault_path, caplog):
    config_dir = vault_path / ".obsidian"
    config_dir.mkdir()
    (config_dir / "daily-notes.json").write_text("{not json", encoding="utf-8")

    with caplog.at_level("WARNING"):
        config = load_daily_note_settings(vault_path, DailyNoteConfig())

    assert config == DailyNoteConfig()
    assert "daily-notes" in caplog.text


def test_today_note_path_at_vault_root(settings, vault_path):
    assert today_note_path(settings, date(2025, 1, 2)) == vault_path / "2025-01-02.md"


def test_today_note_path_uses_vault_folder(settings, vault_path):
    config_dir = vault_path / ".obsidian"
    config_dir.mkdir()
    (config_dir / "daily-notes.json").write_text('{"folder": "Daily"}', encoding="utf-8")

    assert today_note_path(settings, date(2025, 1, 2)) == vault_path / "Daily" / "2025-01-02.md"


def test_build_daily_note_uri_quotes_vault_name():
    assert build_daily_note_uri("My Vault") == "obsidian://advanced-uri?vault=My%20Vault&daily=true"


def test_create_daily_note_waits_for_file(settings, vault_path):
    note_path = vault_path / "2025-01-02.md"
    opened = []

    async def opener(uri):
        opened.append(uri)
        note_path.write_text("# 2025-01-02\n", encoding="utf-8")

    result = asyncio.run(create_daily_note_via_uri(settings, note_path, opener=opener))

    assert result == note_path
    assert opened == ["obsidian://advanced-uri?vault=Journal&daily=true"]


def test_create_daily_note_times_out(settings, vault_path):
    async def opener(uri):
        return None

    with pytest.raises(DailyNoteError, match="Failed to create today's note"):
        asyncio.run(create_daily_note_via_uri(settings, vault_path / "missing.md", opener=opener))


def test_create_daily_note_wraps_launch_failure(settings, vault_path):
    async def opener(uri):
        raise FileNotFoundError("xdg-open")

    with pytest.raises(DailyNoteError):
        asyncio.run(create_daily_note_via_uri(settings, vault_path / "missing.md", opener=opener))
