"""
Derived metadata for experience entries and projects.
"""

import re
from collections import OrderedDict
from typing import Dict, List, Optional

from resume_content.models.project import EnhancedProject, Project
from resume_content.models.resume import ExperienceItem
from resume_content.services.vocabulary import Vocabulary, load_vocabulary
from resume_content.utils.date_parser import current_year, parse_year, year_from_duration
from resume_content.utils.logger import get_logger

logger = get_logger(__name__)


HIGHLIGHT_PATTERNS = [
    re.compile(r'\d+%\s+\w+'),
    re.compile(r'\$[\d,]+'),
    re.compile(r'\d+\+\s+\w+'),
    re.compile(r'increased.*?by.*?\d+', re.IGNORECASE),
    re.compile(r'reduced.*?by.*?\d+', re.IGNORECASE),
    re.compile(r'improved.*?by.*?\d+', re.IGNORECASE),
]
DURATION_NUMBER_RE = re.compile(r'(\d+)')
QUANTIFIED_RE = re.compile(r'\d+%|\$[\d,]+')

GROUP_ATTRIBUTES = {
    "industry": "industry",
    "clientType": "client_type",
    "client_type": "client_type",
    "projectType": "project_type",
    "project_type": "project_type",
}


class EnrichmentService:
    """Infer company size, industry, role type and similar derived fields."""

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or load_vocabulary()

    # Experience

    def company_size(self, item: ExperienceItem) -> str:
        known = self.vocabulary.infer_company_size(item.company)
        if known:
            return known

        if item.team_size:
            if item.team_size > 1000:
                return "Enterprise"
            if item.team_size > 250:
                return "Large"
            if item.team_size > 50:
                return "Medium"
            if item.team_size > 10:
                return "Small"
            return "Startup"

        company = item.company.lower()
        if "startup" in company or "inc." in company:
            return "Startup"
        return "Medium"

    def highlights(self, item: ExperienceItem) -> List[str]:
        found = [achievement.description for achievement in item.achievements if achievement.description]
        for pattern in HIGHLIGHT_PATTERNS:
            found.extend(pattern.findall(item.description))
        return list(OrderedDict.fromkeys(found))

    def enrich_experience(self, experience: List[ExperienceItem]) -> List[ExperienceItem]:
        """
        Return copies of the entries with derived fields filled in.

        Args:
            experience: Parsed experience entries

        Returns:
            New entries; the input records are left untouched
        """
        enriched = []
        for item in experience:
            enriched.append(item.model_copy(update={
                "company_size": self.company_size(item),
                "industry": self.vocabulary.infer_industry(f"{item.company} {item.description}"),
                "role_type": self.vocabulary.infer_role_type(item.position, item.description),
                "remote": self.vocabulary.is_remote(f"{item.location} {item.description}"),
                "highlights": self.highlights(item),
            }))
        return enriched

    # Projects

    def complexity(self, project: Project) -> str:
        level = self.vocabulary.infer_complexity(project.action)
        if level:
            return level

        tech_count = len(project.technologies)
        if tech_count > 8:
            return "Very High"
        if tech_count > 5:
            return "High"
        if tech_count > 2:
            return "Medium"
        return "Low"

    def impact(self, project: Project) -> str:
        level = self.vocabulary.infer_impact(project.result)
        if level:
            return level
        if QUANTIFIED_RE.search(project.result):
            return "High"
        return "Medium"

    @staticmethod
    def tags(project: Project) -> List[str]:
        tags = [project.industry, project.client_type, project.project_type, *project.technologies]

        months = DURATION_NUMBER_RE.search(project.duration)
        if months:
            value = int(months.group(1))
            if value <= 3:
                tags.append("Short-term")
            elif value <= 12:
                tags.append("Medium-term")
            else:
                tags.append("Long-term")

        return [tag for tag in OrderedDict.fromkeys(tags) if tag]

    def enrich_projects(self, projects: List[Project]) -> List[EnhancedProject]:
        return [
            EnhancedProject(
                **project.model_dump(),
                complexity=self.complexity(project),
                impact=self.impact(project),
                tags=self.tags(project),
            )
            for project in projects
        ]

    # Grouping and timelines

    @staticmethod
    def group_projects(projects: List[Project], group_by: str) -> Dict[str, List[Project]]:
        """
        Group projects by industry, client type, project type or year.

        Projects without a parenthetical year are grouped under the current year.
        """
        groups: Dict[str, List[Project]] = {}
        for project in projects:
            if group_by == "year":
                key = str(year_from_duration(project.duration) or current_year())
            elif group_by in GROUP_ATTRIBUTES:
                key = getattr(project, GROUP_ATTRIBUTES[group_by])
            else:
                key = "Other"
            groups.setdefault(key, []).append(project)
        return groups

    @staticmethod
    def build_timeline(experience: List[ExperienceItem]) -> List[Dict]:
        """
        Year-ordered start/end events for the experience timeline.

        Entries with unparsable start years are left out; current roles get
        no end event.
        """
        timeline: Dict[int, List[Dict]] = {}
        for item in experience:
            start = parse_year(item.period.start)
            if start is None:
                continue
            event = {"position": item.position, "company": item.company, "experience": item}
            timeline.setdefault(start, []).append({"type": "start", **event})

            if item.period.is_current:
                continue
            end = parse_year(item.period.end)
            if end is not None:
                timeline.setdefault(end, []).append({"type": "end", **event})

        return [{"year": year, "events": timeline[year]} for year in sorted(timeline)]
