"""Tests for structured note creation and daily-note updates."""

import asyncio
import json

import pytest

from obsidian_journal.core.note_operations import (
    add_structured_note,
    render_note,
    splice_related_links,
    update_today_note,
)
from obsidian_journal.core.structuring import NoteStructurer
from obsidian_journal.core.vault_operations import note_file_stem, resolve_note_path
from obsidian_journal.errors import DailyNoteError, VaultAccessError


def structured_reply(title, content, tags=()):
    return json.dumps({"title": title, "content": content, "tags": list(tags)})


class TestRenderNote:
    def test_full_note(self):
        text = render_note("Garden Plan", "Plant beans.", ["garden", "spring"], ["Seeds", "Soil"])
        assert text == (
            "# Garden Plan\n\n"
            "Related Notes:\n- [[Seeds]]\n- [[Soil]]\n\n"
            "Plant beans.\n"
            "\nTags: garden, spring"
        )

    def test_without_related_or_tags(self):
        assert render_note("T", "Body", [], []) == "# T\n\nBody\n"


class TestSpliceRelatedLinks:
    def test_appends_block_when_missing(self):
        assert splice_related_links("# Day\n\n- ran\n", ["Run Log"]) == (
            "# Day\n\n- ran\n\nRelated Notes:\n- [[Run Log]]\n"
        )

    def test_merges_into_existing_block(self):
        body = "# Day\n\nRelated Notes:\n- [[Run Log]]\n\n- ran\n"
        assert splice_related_links(body, ["Run Log", "Diet"]) == (
            "# Day\n\nRelated Notes:\n- [[Run Log]]\n- [[Diet]]\n\n- ran\n"
        )

    def test_header_at_end_of_body_is_reused(self):
        result = splice_related_links("# Day\n\nRelated Notes:", ["X"])
        assert result == "# Day\n\nRelated Notes:\n- [[X]]\n"
        assert result.count("Related Notes:") == 1

    def test_no_related_leaves_body_untouched(self):
        assert splice_related_links("# Day", []) == "# Day"


class TestVaultHelpers:
    def test_note_file_stem(self):
        assert note_file_stem("Weekly  Review: Goals") == "Weekly-Review-Goals"
        assert note_file_stem("a/b\\c") == "abc"

    def test_note_file_stem_rejects_empty(self):
        with pytest.raises(ValueError):
            note_file_stem(":/?")

    def test_resolve_note_path_stays_in_vault(self, settings, vault_path):
        assert resolve_note_path(settings.vault, "Note") == (vault_path / "Note.md").resolve()
        with pytest.raises(ValueError):
            resolve_note_path(settings.vault, "../outside")


class TestAddStructuredNote:
    def test_creates_note_with_related_links(self, settings, vault_path, fake_chat_client):
        (vault_path / "Beans.md").write_text("Notes: plant beans near the fence.", encoding="utf-8")
        (vault_path / "Taxes.md").write_text("File by April.", encoding="utf-8")
        structurer = NoteStructurer(
            fake_chat_client(structured_reply("Garden Plan", "Plant beans", ["garden"])),
            "gpt-4o-mini",
        )

        result = asyncio.run(add_structured_note(settings, structurer, "um, plant beans I guess"))

        assert result["fileName"] == "Garden-Plan.md"
        assert result["relatedNotes"] == ["Beans"]
        assert result["status"] == "created"
        written = (vault_path / "Garden-Plan.md").read_text(encoding="utf-8")
        assert written == "# Garden Plan\n\nRelated Notes:\n- [[Beans]]\n\nPlant beans\n\nTags: garden"

    def test_new_note_without_matches(self, settings, vault_path, fake_chat_client):
        structurer = NoteStructurer(fake_chat_client(structured_reply("Idea", "Something new")), "m")

        result = asyncio.run(add_structured_note(settings, structurer, "something new"))

        assert result["relatedNotes"] == []
        assert (vault_path / "Idea.md").read_text(encoding="utf-8") == "# Idea\n\nSomething new\n"

    def test_existing_note_is_not_overwritten(self, settings, vault_path, fake_chat_client):
        (vault_path / "Idea.md").write_text("original", encoding="utf-8")
        structurer = NoteStructurer(fake_chat_client(structured_reply("Idea", "replacement")), "m")

        with pytest.raises(FileExistsError):
            asyncio.run(add_structured_note(settings, structurer, "replacement"))

        assert (vault_path / "Idea.md").read_text(encoding="utf-8") == "original"

    def test_missing_vault(self, settings, vault_path, fake_chat_client):
        vault_path.rmdir()
        structurer = NoteStructurer(fake_chat_client(structured_reply("Idea", "x")), "m")

        with pytest.raises(VaultAccessError):
            asyncio.run(add_structured_note(settings, structurer, "x"))


class TestUpdateTodayNote:
    def test_updates_existing_note(self, settings, vault_path, fake_chat_client):
        today = vault_path / "2025-01-02.md"
        today.write_text("# 2025-01-02\n", encoding="utf-8")
        (vault_path / "Running.md").write_text("- ran 5k in the park\n", encoding="utf-8")
        reply = "Updated:\n```markdown\n- ran 5k in the park\n```"
        client = fake_chat_client(reply)

        result = asyncio.run(
            update_today_note(settings, NoteStructurer(client, "m"), "ran 5k", note_path=today)
        )

        assert result["title"] == "2025-01-02"
        assert result["AIResponse"] == reply
        assert result["relatedNotes"] == ["Running"]
        assert today.read_text(encoding="utf-8") == (
            "- ran 5k in the park\n\nRelated Notes:\n- [[Running]]\n"
        )
        assert "# 2025-01-02" in client.requests[0]["messages"][-1]["content"]

    def test_excludes_today_from_related(self, settings, vault_path, fake_chat_client):
        today = vault_path / "2025-01-02.md"
        today.write_text("- journaling\n", encoding="utf-8")
        client = fake_chat_client("```markdown\n- journaling\n```")

        result = asyncio.run(
            update_today_note(settings, NoteStructurer(client, "m"), "journaling", note_path=today)
        )

        assert result["relatedNotes"] == []

    def test_creates_missing_note_through_uri(self, settings, vault_path, fake_chat_client):
        today = vault_path / "2025-01-02.md"

        async def opener(uri):
            today.write_text("# 2025-01-02\n", encoding="utf-8")

        client = fake_chat_client("```markdown\n# 2025-01-02\n- new entry\n```")
        result = asyncio.run(
            update_today_note(settings, NoteStructurer(client, "m"), "new entry", opener=opener, note_path=today)
        )

        assert result["fileName"] == "2025-01-02.md"
        assert today.read_text(encoding="utf-8") == "# 2025-01-02\n- new entry"

    def test_fails_when_note_never_appears(self, settings, vault_path, fake_chat_client):
        async def opener(uri):
            return None

        with pytest.raises(DailyNoteError):
            asyncio.run(
                update_today_note(
                    settings,
                    NoteStructurer(fake_chat_client(), "m"),
                    "entry",
                    opener=opener,
                    note_path=vault_path / "2025-01-02.md",
                )
            )
