"""Shared fixtures: throwaway vaults and a fake OpenAI chat client."""

from types import SimpleNamespace

import pytest

from obsidian_journal.data_models import (
    DailyNoteConfig,
    JournalSettings,
    RelatedNotesConfig,
    VaultMetadata,
)


class FakeChatClient:
    """Mimics ``AsyncOpenAI().chat.completions.create`` with canned replies."""

    def __init__(self, *replies: str) -> None:
        self.replies = list(replies)
        self.requests: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs):
        self.requests.append(kwargs)
        reply = self.replies.pop(0)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


@pytest.fixture
def vault_path(tmp_path):
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def settings(vault_path):
    return JournalSettings(
        vault=VaultMetadata(name="Journal", path=vault_path, description="test vault"),
        related=RelatedNotesConfig(vault_path=vault_path, match_cap=2),
        daily=DailyNoteConfig(creation_timeout=0.2, poll_interval=0.01),
    )


@pytest.fixture
def fake_chat_client():
    """Factory for :class:`FakeChatClient` instances."""
    return FakeChatClient
