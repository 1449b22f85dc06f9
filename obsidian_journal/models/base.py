"""Base Pydantic models for MCP tool input validation.

Base Models:
- BaseTranscriptInput: Common validation for tools that take a raw transcript
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class BaseTranscriptInput(BaseModel):
    """Base model for tools that structure a raw transcript with the language model."""

    raw_content: str = Field(
        min_length=1,
        description=(
            "Raw transcript of thoughts and reflections. "
            "Spoken or typed text; structure is added automatically."
        ),
        examples=["So today I mostly worked on the garden plan, and I keep thinking about..."]
    )

    @field_validator('raw_content')
    @classmethod
    def validate_raw_content(cls, v: str) -> str:
        """Reject transcripts that are empty or only whitespace.

        Args:
            v: The transcript to validate

        Returns:
            The transcript with surrounding whitespace removed

        Raises:
            ValueError: If nothing is left after stripping
        """
        cleaned = v.strip()
        if not cleaned:
            raise ValueError(
                "Transcript cannot be empty. "
                "Provide the raw text you want turned into a note."
            )
        return cleaned
