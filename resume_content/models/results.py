"""Search result models."""

from typing import Generic, List, Tuple, TypeVar

from pydantic import Field

from .base import CamelModel, ParseResult, ValidationError


T = TypeVar("T")


class SearchMatch(CamelModel):
    """Where a term was found: the field, its value and [start, end) spans."""
    field: str
    value: str
    indices: List[Tuple[int, int]] = Field(default_factory=list)


class SearchResult(CamelModel, Generic[T]):
    item: T
    score: float
    matches: List[SearchMatch] = Field(default_factory=list)


class ContentSearchResults(CamelModel):
    """Search hits across one language's experience, skills and projects."""
    experience: List[SearchResult] = Field(default_factory=list)
    skills: List[SearchResult] = Field(default_factory=list)
    projects: List[SearchResult] = Field(default_factory=list)

    @property
    def total_results(self) -> int:
        return len(self.experience) + len(self.skills) + len(self.projects)


class DatasetResult(CamelModel):
    """Resume and project loads for one language plus their cross-checks."""
    language: str
    resume: ParseResult
    projects: ParseResult
    consistency_warnings: List[ValidationError] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.resume.success and self.projects.success
