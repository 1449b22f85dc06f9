"""Language-model calls that turn raw transcripts into note content."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from openai import AsyncOpenAI

from obsidian_journal.data_models import LLMConfig, StructuredNote
from obsidian_journal.errors import StructuringError

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?P<lang>[\w-]*)[ \t]*\n(?P<body>.*?)```", re.DOTALL)

STRUCTURE_SYSTEM_PROMPT = (
    "You are a knowledge management assistant that organizes spoken thoughts "
    "into clean Obsidian notes."
)

STRUCTURE_PROMPT = """Turn the following raw transcript into a structured markdown note.

Rules:
1. Pick a short, specific title (max 8 words, no punctuation other than spaces and hyphens)
2. Organize the content with markdown headings and bullet points
3. Keep the author's voice; do not invent facts
4. Suggest 2-5 lowercase, hyphenated tags

Return ONLY a JSON object with the keys "title", "content" and "tags".

Transcript:
{raw_content}"""

DAILY_NOTE_PROMPT = """Here is today's note from my Obsidian vault:

{existing_content}

Merge the following raw transcript into it. Keep every existing section and entry,
place the new material under the most fitting headings (add headings if needed),
and tidy the wording without dropping information.

Return the complete updated note inside a single ```markdown code block.

Transcript:
{raw_content}"""


def extract_markdown_content(reply: str) -> str:
    """Pull the note body out of a model reply.

    Prefers the first ```markdown (or ```md) fenced block, then any fenced block,
    and finally the stripped reply itself.
    """
    blocks = list(_FENCE_PATTERN.finditer(reply))
    for match in blocks:
        if match.group("lang").lower() in {"markdown", "md"}:
            return match.group("body").strip()
    if blocks:
        return blocks[0].group("body").strip()
    return reply.strip()


def parse_structured_note(reply: str) -> StructuredNote:
    """Parse the JSON object returned for :data:`STRUCTURE_PROMPT`.

    Raises:
        StructuringError: If the reply is not a JSON object with a non-empty
            ``title`` and ``content``.
    """
    payload_text = extract_markdown_content(reply)
    try:
        payload = json.loads(payload_text)
    except json.JSONDecodeError as exc:
        raise StructuringError(f"Model reply is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise StructuringError("Model reply must be a JSON object.")

    title = payload.get("title")
    content = payload.get("content")
    if not isinstance(title, str) or not title.strip():
        raise StructuringError("Model reply is missing a 'title'.")
    if not isinstance(content, str) or not content.strip():
        raise StructuringError("Model reply is missing 'content'.")

    raw_tags = payload.get("tags") or []
    if isinstance(raw_tags, str):
        raw_tags = raw_tags.split(",")
    tags = [str(tag).strip() for tag in raw_tags if str(tag).strip()]

    return StructuredNote(title=title.strip(), content=content.strip(), tags=tags)


class NoteStructurer:
    """Single prompt-and-parse round trips against a chat completion model."""

    def __init__(self, client: Any, model: str, temperature: float = 0.3) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_config(cls, config: LLMConfig) -> "NoteStructurer":
        return cls(AsyncOpenAI(api_key=config.api_key), config.model, config.temperature)

    async def _complete(self, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": STRUCTURE_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
        )
        reply = response.choices[0].message.content or ""
        logger.debug("Model %s replied with %d characters", self.model, len(reply))
        return reply

    async def structure_content(self, raw_content: str) -> StructuredNote:
        reply = await self._complete(STRUCTURE_PROMPT.format(raw_content=raw_content))
        return parse_structured_note(reply)

    async def structure_daily_note(self, existing_content: str, raw_content: str) -> str:
        """Return the model's full reply; callers extract the markdown block."""
        return await self._complete(
            DAILY_NOTE_PROMPT.format(existing_content=existing_content, raw_content=raw_content)
        )
