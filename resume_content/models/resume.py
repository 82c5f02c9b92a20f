"""Resume related data models."""

from enum import Enum
from typing import List, Optional, Union

from pydantic import Field

from .base import ContentModel


PRESENT = "Present"


class SkillLevel(str, Enum):
    """Proficiency levels a skill may carry."""
    EXPERT = "Expert"
    ADVANCED = "Advanced"
    INTERMEDIATE = "Intermediate"
    BEGINNER = "Beginner"


class PersonalInfo(ContentModel):
    """Contact block at the top of a resume."""
    name: str = ""
    title: str = ""
    location: str = ""
    email: str = ""
    phone: str = ""
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None


class Period(ContentModel):
    """Year interval. ``end`` is a year or ``Present``."""
    start: str = ""
    end: str = ""

    @property
    def is_current(self) -> bool:
        return is_present(self.end)


class Achievement(ContentModel):
    metric: str = ""
    description: str = ""
    impact: Optional[str] = None


class ExperienceItem(ContentModel):
    """Represents a work experience entry."""
    id: str = ""
    position: str = ""
    company: str = ""
    location: str = ""
    period: Period = Field(default_factory=Period)
    description: str = ""
    achievements: List[Achievement] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    responsibilities: Optional[List[str]] = None
    team_size: Optional[int] = None
    budget: Optional[str] = None
    # Derived by enrichment, never by extraction
    company_size: Optional[str] = None
    industry: Optional[str] = None
    role_type: Optional[str] = None
    remote: Optional[bool] = None
    highlights: Optional[List[str]] = None


class EducationItem(ContentModel):
    """Represents an education entry."""
    id: str = ""
    degree: str = ""
    institution: str = ""
    location: str = ""
    period: Period = Field(default_factory=Period)
    description: Optional[str] = None
    gpa: Optional[str] = None
    honors: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    type: Optional[str] = None


class Skill(ContentModel):
    name: str = ""
    level: str = SkillLevel.ADVANCED.value
    years_of_experience: Optional[Union[int, float]] = None
    category: Optional[str] = None


class SkillCategory(ContentModel):
    name: str = ""
    skills: List[Skill] = Field(default_factory=list)


class Language(ContentModel):
    name: str = ""
    proficiency: str = ""
    level: Optional[str] = None


class QualificationSummary(ContentModel):
    title: str = ""
    items: List[str] = Field(default_factory=list)


class ResumeData(ContentModel):
    """Aggregate root of one resume in one language."""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    objective: Optional[str] = None
    summary: QualificationSummary = Field(default_factory=QualificationSummary)
    experience: List[ExperienceItem] = Field(default_factory=list)
    education: List[EducationItem] = Field(default_factory=list)
    skills: List[SkillCategory] = Field(default_factory=list)
    languages: List[Language] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)

    def all_skills(self) -> List[Skill]:
        return [skill for category in self.skills for skill in category.skills]


PRESENT_MARKERS = {"present", "presente", "atual", "current"}


def is_present(value: str) -> bool:
    """True for any end-of-period marker meaning "still ongoing"."""
    return (value or "").strip().lower() in PRESENT_MARKERS
