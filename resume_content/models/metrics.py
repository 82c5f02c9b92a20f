"""Aggregated metrics models."""

from typing import List, Optional, Union

from pydantic import Field

from .base import CamelModel


Number = Union[int, float]


class TechnologyUsage(CamelModel):
    name: str
    count: int
    years: Optional[Number] = None


class CareerStep(CamelModel):
    year: str
    level: str
    company: str


class ClientTypeCount(CamelModel):
    type: str
    count: int


class CategoryCount(CamelModel):
    category: str
    count: int


class SkillYears(CamelModel):
    skill: str
    years: Number


class ExperienceMetrics(CamelModel):
    total_years: float = 0.0
    companies_worked: int = 0
    roles_held: int = 0
    industries_experienced: List[str] = Field(default_factory=list)
    top_technologies: List[TechnologyUsage] = Field(default_factory=list)
    career_progression: List[CareerStep] = Field(default_factory=list)


class ProjectMetrics(CamelModel):
    total_projects: int = 0
    industries_covered: List[str] = Field(default_factory=list)
    average_duration: float = 0.0
    success_rate: int = 100
    top_technologies: List[TechnologyUsage] = Field(default_factory=list)
    client_types: List[ClientTypeCount] = Field(default_factory=list)


class SkillMetrics(CamelModel):
    total_skills: int = 0
    expert_skills: int = 0
    advanced_skills: int = 0
    skills_by_category: List[CategoryCount] = Field(default_factory=list)
    trending_skills: List[str] = Field(default_factory=list)
    years_of_experience: List[SkillYears] = Field(default_factory=list)


class MetricsSummary(CamelModel):
    """Experience, project and skill metrics for one language."""
    experience: ExperienceMetrics = Field(default_factory=ExperienceMetrics)
    projects: ProjectMetrics = Field(default_factory=ProjectMetrics)
    skills: SkillMetrics = Field(default_factory=SkillMetrics)
    technologies: List[str] = Field(default_factory=list)
    industries: List[str] = Field(default_factory=list)
