"""
Derived statistics over experience, projects and skills.
"""

import re
from collections import Counter
from typing import Dict, List, Optional

from resume_content.models.metrics import (
    CareerStep,
    CategoryCount,
    ClientTypeCount,
    ExperienceMetrics,
    MetricsSummary,
    ProjectMetrics,
    SkillMetrics,
    SkillYears,
    TechnologyUsage,
)
from resume_content.models.project import Project
from resume_content.models.resume import ExperienceItem, ResumeData, SkillCategory, SkillLevel
from resume_content.services.vocabulary import Vocabulary, load_vocabulary
from resume_content.utils.date_parser import current_year, parse_year, period_years
from resume_content.utils.logger import get_logger

logger = get_logger(__name__)


TOP_TECHNOLOGIES = 10
FIRST_INTEGER_RE = re.compile(r'(\d+)')
PROJECT_SUCCESS_RATE = 100


class MetricsService:
    """
    Aggregate metrics for dashboards.

    Malformed records (unparsable years, missing durations) contribute zero
    instead of failing the whole computation.
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None, year: Optional[int] = None):
        self.vocabulary = vocabulary or load_vocabulary()
        self._year = year

    @property
    def current_year(self) -> int:
        return self._year if self._year is not None else current_year()

    def total_years(self, experience: List[ExperienceItem]) -> float:
        years = sum(period_years(item.period, self.current_year) for item in experience)
        return round(years, 1)

    def experience_metrics(self, experience: List[ExperienceItem]) -> ExperienceMetrics:
        """
        Compute experience metrics.

        Args:
            experience: Experience entries (enriched entries also report industries)

        Returns:
            ExperienceMetrics
        """
        usage: Dict[str, Dict[str, int]] = {}
        for item in experience:
            item_years = period_years(item.period, self.current_year)
            for tech in item.technologies:
                stats = usage.setdefault(tech, {"count": 0, "years": 0})
                stats["count"] += 1
                stats["years"] += item_years

        top = sorted(usage.items(), key=lambda entry: entry[1]["count"], reverse=True)[:TOP_TECHNOLOGIES]

        def start_year(item: ExperienceItem) -> int:
            return parse_year(item.period.start, self.current_year) or 0

        progression = [
            CareerStep(year=item.period.start, level=item.position, company=item.company)
            for item in sorted(experience, key=start_year)
        ]

        industries = []
        for item in experience:
            if item.industry and item.industry not in industries:
                industries.append(item.industry)

        return ExperienceMetrics(
            total_years=self.total_years(experience),
            companies_worked=len({item.company for item in experience}),
            roles_held=len({item.position for item in experience}),
            industries_experienced=industries,
            top_technologies=[
                TechnologyUsage(name=name, count=stats["count"], years=stats["years"]) for name, stats in top
            ],
            career_progression=progression,
        )

    def project_metrics(self, projects: List[Project]) -> ProjectMetrics:
        tech_counts = Counter(tech for project in projects for tech in project.technologies)
        client_counts = Counter(project.client_type for project in projects)

        durations = []
        for project in projects:
            match = FIRST_INTEGER_RE.search(project.duration)
            if match:
                durations.append(int(match.group(1)))

        industries = []
        for project in projects:
            if project.industry not in industries:
                industries.append(project.industry)

        return ProjectMetrics(
            total_projects=len(projects),
            industries_covered=industries,
            average_duration=sum(durations) / len(durations) if durations else 0.0,
            success_rate=PROJECT_SUCCESS_RATE,
            top_technologies=[
                TechnologyUsage(name=name, count=count)
                for name, count in sorted(tech_counts.items(), key=lambda entry: entry[1], reverse=True)
            ][:TOP_TECHNOLOGIES],
            client_types=[
                ClientTypeCount(type=client_type, count=count)
                for client_type, count in sorted(client_counts.items(), key=lambda entry: entry[1], reverse=True)
            ],
        )

    def skill_metrics(self, categories: List[SkillCategory]) -> SkillMetrics:
        skills = [skill for category in categories for skill in category.skills]
        ranked = sorted(
            (skill for skill in skills if skill.years_of_experience),
            key=lambda skill: skill.years_of_experience,
            reverse=True,
        )

        return SkillMetrics(
            total_skills=len(skills),
            expert_skills=sum(1 for skill in skills if skill.level == SkillLevel.EXPERT.value),
            advanced_skills=sum(1 for skill in skills if skill.level == SkillLevel.ADVANCED.value),
            skills_by_category=[
                CategoryCount(category=category.name, count=len(category.skills)) for category in categories
            ],
            trending_skills=self.vocabulary.trending_in(skill.name for skill in skills),
            years_of_experience=[SkillYears(skill=skill.name, years=skill.years_of_experience) for skill in ranked],
        )

    @staticmethod
    def all_technologies(experience: List[ExperienceItem], projects: List[Project]) -> List[str]:
        technologies = {tech for item in experience for tech in item.technologies}
        technologies.update(tech for project in projects for tech in project.technologies)
        return sorted(technologies)

    @staticmethod
    def all_industries(experience: List[ExperienceItem], projects: List[Project]) -> List[str]:
        industries = {item.industry for item in experience if item.industry}
        industries.update(project.industry for project in projects if project.industry)
        return sorted(industries)

    def summarize(self, resume: ResumeData, projects: List[Project]) -> MetricsSummary:
        """Experience, project and skill metrics plus the combined technology and industry lists."""
        summary = MetricsSummary(
            experience=self.experience_metrics(resume.experience),
            projects=self.project_metrics(projects),
            skills=self.skill_metrics(resume.skills),
            technologies=self.all_technologies(resume.experience, projects),
            industries=self.all_industries(resume.experience, projects),
        )
        logger.debug(
            f"Metrics: {summary.experience.total_years} years, "
            f"{summary.projects.total_projects} projects, {summary.skills.total_skills} skills"
        )
        return summary
