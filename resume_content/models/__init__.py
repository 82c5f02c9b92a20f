"""Data models for the content pipeline."""

from .base import CamelModel, ContentModel, Extraction, ParseResult, SkippedRecord, ValidationError
from .cache import CacheEntry, CacheStats
from .filters import DateRange, FacetOptions, FilteredResults, FilterOptions
from .markdown import MarkdownDocument, Section
from .metrics import (
    CareerStep,
    ExperienceMetrics,
    MetricsSummary,
    ProjectMetrics,
    SkillMetrics,
    TechnologyUsage,
)
from .project import EnhancedProject, Project
from .resume import (
    PRESENT,
    PRESENT_MARKERS,
    Achievement,
    EducationItem,
    ExperienceItem,
    Language,
    PersonalInfo,
    Period,
    QualificationSummary,
    ResumeData,
    Skill,
    SkillCategory,
    SkillLevel,
    is_present,
)
from .results import ContentSearchResults, DatasetResult, SearchMatch, SearchResult

__all__ = [
    "CamelModel",
    "ContentModel",
    "Extraction",
    "ParseResult",
    "SkippedRecord",
    "ValidationError",
    "CacheEntry",
    "CacheStats",
    "DateRange",
    "FacetOptions",
    "FilteredResults",
    "FilterOptions",
    "MarkdownDocument",
    "Section",
    "CareerStep",
    "ExperienceMetrics",
    "MetricsSummary",
    "ProjectMetrics",
    "SkillMetrics",
    "TechnologyUsage",
    "EnhancedProject",
    "Project",
    "PRESENT",
    "PRESENT_MARKERS",
    "is_present",
    "Achievement",
    "EducationItem",
    "ExperienceItem",
    "Language",
    "PersonalInfo",
    "Period",
    "QualificationSummary",
    "ResumeData",
    "Skill",
    "SkillCategory",
    "SkillLevel",
    "ContentSearchResults",
    "DatasetResult",
    "SearchMatch",
    "SearchResult",
]
