"""Pydantic input models for search and related-note discovery."""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class SearchNotesInput(BaseModel):
    """Input model for search_notes tool.

    Case-insensitive search over note titles, bodies and frontmatter tags.

    Examples:
        >>> SearchNotesInput(query="garden")
        >>> SearchNotesInput(query="project", limit=5)
    """

    query: str = Field(
        min_length=1,
        description=(
            "Search string (case-insensitive). "
            "Matched against note titles, note text and frontmatter tags."
        )
    )

    limit: int = Field(
        10,
        ge=1,
        le=50,
        description="Maximum number of results to return (1-50)."
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Validate search query is not empty."""
        if not v.strip():
            raise ValueError(
                "Search query cannot be empty. "
                "Provide a search term to find notes."
            )
        return v.strip()

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "garden", "limit": 10},
            ]
        }


class FindRelatedNotesInput(BaseModel):
    """Input model for find_related_notes tool.

    Lists notes whose text contains the given content (case-insensitive),
    stopping after ``cap`` matches in directory order.

    Examples:
        >>> FindRelatedNotesInput(content="sourdough starter", exclude_title="Baking")
    """

    content: str = Field(
        min_length=1,
        description="Note content to find related notes for."
    )

    exclude_title: str = Field(
        "",
        description=(
            "Title of the note the content belongs to (file name without .md). "
            "This note is never reported as related to itself."
        )
    )

    cap: Optional[int] = Field(
        None,
        ge=0,
        le=20,
        description="Maximum number of titles (omit to use the configured cap)."
    )

    @field_validator('exclude_title')
    @classmethod
    def validate_exclude_title(cls, v: str) -> str:
        """Strip whitespace and an optional .md extension."""
        cleaned = v.strip()
        if cleaned.endswith(".md"):
            cleaned = cleaned[:-3]
        return cleaned
