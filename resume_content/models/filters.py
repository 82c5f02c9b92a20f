"""Filter options and filtered result models."""

from typing import Generic, List, Optional, TypeVar

from pydantic import Field

from .base import CamelModel


T = TypeVar("T")


class DateRange(CamelModel):
    """Inclusive year range; a missing bound is unconstrained."""
    start: Optional[str] = None
    end: Optional[str] = None


class FilterOptions(CamelModel):
    """Independent, AND-combined filter predicates."""
    search_term: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    companies: List[str] = Field(default_factory=list)
    industries: List[str] = Field(default_factory=list)
    role_types: List[str] = Field(default_factory=list)
    company_sizes: List[str] = Field(default_factory=list)
    project_types: List[str] = Field(default_factory=list)
    client_types: List[str] = Field(default_factory=list)
    skill_levels: List[str] = Field(default_factory=list)
    skill_categories: List[str] = Field(default_factory=list)
    date_range: Optional[DateRange] = None

    def merge(self, other: "FilterOptions") -> "FilterOptions":
        """Combine two option sets into one whose predicates are all active."""
        if self.search_term and other.search_term and self.search_term != other.search_term:
            raise ValueError("Cannot merge two different search terms")
        if self.date_range and other.date_range:
            raise ValueError("Cannot merge two date ranges")
        list_fields = (
            "technologies", "companies", "industries", "role_types", "company_sizes", "project_types",
            "client_types", "skill_levels", "skill_categories",
        )
        update = {}
        for name in list_fields:
            ours, theirs = getattr(self, name), getattr(other, name)
            if ours and theirs:
                raise ValueError(f"Cannot merge two '{name}' predicates")
            update[name] = list(ours or theirs)
        update["search_term"] = self.search_term or other.search_term
        update["date_range"] = self.date_range or other.date_range
        return self.model_copy(update=update)


class FilteredResults(CamelModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    total_count: int = 0
    filtered_count: int = 0
    applied_filters: List[str] = Field(default_factory=list)


class FacetOptions(CamelModel):
    """Distinct values available for each filter facet."""
    technologies: List[str] = Field(default_factory=list)
    companies: List[str] = Field(default_factory=list)
    industries: List[str] = Field(default_factory=list)
    project_types: List[str] = Field(default_factory=list)
    client_types: List[str] = Field(default_factory=list)
    skill_categories: List[str] = Field(default_factory=list)
