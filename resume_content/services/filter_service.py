"""
AND-combined filtering of experience, projects and skills.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from resume_content.models.filters import DateRange, FacetOptions, FilteredResults, FilterOptions
from resume_content.models.project import Project
from resume_content.models.resume import ExperienceItem, Skill, SkillCategory
from resume_content.services.enrichment_service import EnrichmentService
from resume_content.services.search_service import (
    EXPERIENCE_FIELDS,
    PROJECT_FIELDS,
    SKILL_FIELDS,
    SearchService,
)
from resume_content.utils.date_parser import current_year, parse_year, period_span
from resume_content.utils.logger import get_logger

logger = get_logger(__name__)


T = TypeVar("T")
Predicate = Callable[[T], bool]


def contains_any(value: Optional[str], needles: Iterable[str]) -> bool:
    """Case-insensitive substring match of any needle inside value."""
    if not value:
        return False
    lowered = value.lower()
    return any(needle.lower() in lowered for needle in needles)


def any_contains_any(values: Iterable[str], needles: Sequence[str]) -> bool:
    return any(contains_any(value, needles) for value in values)


def describe_date_range(date_range: DateRange) -> str:
    return f"Date Range: {date_range.start or 'Start'} - {date_range.end or 'Present'}"


class FilterService:
    """
    Apply independent, optional predicates; an item survives only if every
    active predicate accepts it.
    """

    def __init__(
        self,
        search_service: Optional[SearchService] = None,
        enrichment_service: Optional[EnrichmentService] = None,
        year: Optional[int] = None
    ):
        """
        Initialize filter service.

        Args:
            search_service: Used for search-term predicates
            enrichment_service: Derives industry/role/company size when entries lack them
            year: Year that "Present" resolves to; defaults to now
        """
        self.search_service = search_service or SearchService()
        self.enrichment_service = enrichment_service or EnrichmentService()
        self._year = year

    @property
    def current_year(self) -> int:
        return self._year if self._year is not None else current_year()

    @staticmethod
    def _apply(items: List[T], predicates: List[Tuple[str, Predicate]]) -> FilteredResults:
        filtered = [item for item in items if all(predicate(item) for _, predicate in predicates)]
        applied = [description for description, _ in predicates]
        if applied:
            logger.debug(f"Filters {applied} kept {len(filtered)}/{len(items)} items")
        return FilteredResults(
            items=filtered,
            total_count=len(items),
            filtered_count=len(filtered),
            applied_filters=applied,
        )

    def _search_predicate(self, term: str, fields: Sequence[str]) -> Predicate:
        return lambda item: self.search_service.matches(item, term, fields)

    # ------------------------------------------------------------------
    # Experience
    # ------------------------------------------------------------------

    def _industry(self, item: ExperienceItem) -> str:
        if item.industry:
            return item.industry
        return self.enrichment_service.vocabulary.infer_industry(f"{item.company} {item.description}")

    def _role_type(self, item: ExperienceItem) -> str:
        if item.role_type:
            return item.role_type
        return self.enrichment_service.vocabulary.infer_role_type(item.position, item.description)

    def _company_size(self, item: ExperienceItem) -> str:
        return item.company_size or self.enrichment_service.company_size(item)

    def _overlaps(self, item: ExperienceItem, date_range: DateRange) -> bool:
        span = period_span(item.period, self.current_year)
        if span is None:
            return False
        start, end = span

        range_start = parse_year(date_range.start, self.current_year) if date_range.start else None
        range_end = parse_year(date_range.end, self.current_year) if date_range.end else None
        if range_start is not None and end < range_start:
            return False
        if range_end is not None and start > range_end:
            return False
        return True

    def filter_experience(self, items: List[ExperienceItem], options: FilterOptions) -> FilteredResults:
        """
        Filter experience entries.

        Args:
            items: Experience entries
            options: Active predicates

        Returns:
            FilteredResults with the surviving entries and applied filter labels
        """
        predicates: List[Tuple[str, Predicate]] = []

        if options.role_types:
            predicates.append((
                f"Role: {', '.join(options.role_types)}",
                lambda item: contains_any(self._role_type(item), options.role_types),
            ))
        if options.industries:
            predicates.append((
                f"Industry: {', '.join(options.industries)}",
                lambda item: contains_any(self._industry(item), options.industries),
            ))
        if options.company_sizes:
            predicates.append((
                f"Company Size: {', '.join(options.company_sizes)}",
                lambda item: self._company_size(item) in options.company_sizes,
            ))
        if options.companies:
            predicates.append((
                f"Company: {', '.join(options.companies)}",
                lambda item: contains_any(item.company, options.companies),
            ))
        if options.technologies:
            predicates.append((
                f"Technology: {', '.join(options.technologies)}",
                lambda item: any_contains_any(item.technologies, options.technologies),
            ))
        if options.date_range and (options.date_range.start or options.date_range.end):
            date_range = options.date_range
            predicates.append((describe_date_range(date_range), lambda item: self._overlaps(item, date_range)))
        if options.search_term and options.search_term.strip():
            predicates.append((
                f'Search: "{options.search_term}"',
                self._search_predicate(options.search_term, EXPERIENCE_FIELDS),
            ))

        return self._apply(items, predicates)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def filter_projects(self, projects: List[Project], options: FilterOptions) -> FilteredResults:
        predicates: List[Tuple[str, Predicate]] = []

        if options.project_types:
            predicates.append((
                f"Project Type: {', '.join(options.project_types)}",
                lambda project: contains_any(project.project_type, options.project_types),
            ))
        if options.client_types:
            predicates.append((
                f"Client Type: {', '.join(options.client_types)}",
                lambda project: contains_any(project.client_type, options.client_types),
            ))
        if options.industries:
            predicates.append((
                f"Industry: {', '.join(options.industries)}",
                lambda project: contains_any(project.industry, options.industries),
            ))
        if options.technologies:
            predicates.append((
                f"Technology: {', '.join(options.technologies)}",
                lambda project: any_contains_any(project.technologies, options.technologies),
            ))
        if options.search_term and options.search_term.strip():
            predicates.append((
                f'Search: "{options.search_term}"',
                self._search_predicate(options.search_term, PROJECT_FIELDS),
            ))

        return self._apply(projects, predicates)

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------

    def filter_skills(self, categories: List[SkillCategory], options: FilterOptions) -> FilteredResults:
        """Filter the flattened skills of every category; levels match exactly."""
        skills: List[Skill] = [
            skill if skill.category else skill.model_copy(update={"category": category.name})
            for category in categories
            for skill in category.skills
        ]
        predicates: List[Tuple[str, Predicate]] = []

        if options.skill_levels:
            predicates.append((
                f"Level: {', '.join(options.skill_levels)}",
                lambda skill: skill.level in options.skill_levels,
            ))
        if options.skill_categories:
            predicates.append((
                f"Category: {', '.join(options.skill_categories)}",
                lambda skill: contains_any(skill.category, options.skill_categories),
            ))
        if options.search_term and options.search_term.strip():
            predicates.append((
                f'Search: "{options.search_term}"',
                self._search_predicate(options.search_term, SKILL_FIELDS),
            ))

        return self._apply(skills, predicates)

    # ------------------------------------------------------------------
    # Facets
    # ------------------------------------------------------------------

    def facet_options(
        self,
        experience: List[ExperienceItem],
        projects: List[Project],
        categories: List[SkillCategory]
    ) -> FacetOptions:
        """Sorted distinct values users can filter on."""
        technologies = {tech for item in experience for tech in item.technologies}
        technologies.update(tech for project in projects for tech in project.technologies)
        industries = {self._industry(item) for item in experience}
        industries.update(project.industry for project in projects)

        return FacetOptions(
            technologies=sorted(technologies),
            companies=sorted({item.company for item in experience}),
            industries=sorted(industry for industry in industries if industry),
            project_types=sorted({project.project_type for project in projects}),
            client_types=sorted({project.client_type for project in projects}),
            skill_categories=sorted({category.name for category in categories}),
        )
