"""Markdown document models."""

from typing import Any, Dict, List

from pydantic import Field

from .base import ContentModel


class Section(ContentModel):
    """A heading-delimited block of Markdown content."""
    title: str
    content: str = ""
    level: int = Field(ge=1, le=6)

    @property
    def lines(self) -> List[str]:
        return self.content.splitlines()


class MarkdownDocument(ContentModel):
    """Front matter plus ordered sections of a Markdown source."""
    front_matter: Dict[str, Any] = Field(default_factory=dict)
    sections: List[Section] = Field(default_factory=list)
    raw_content: str = ""
