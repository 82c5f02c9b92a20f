"""
Field-level and cross-dataset validation for résumé and project records.
"""

import re
from typing import Any, List, Optional, Set, Tuple

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from resume_content.config.settings import ValidationBounds
from resume_content.models.base import ParseResult, ValidationError
from resume_content.models.project import Project
from resume_content.models.resume import (
    EducationItem,
    ExperienceItem,
    Language,
    PersonalInfo,
    Period,
    ResumeData,
    Skill,
    SkillCategory,
    SkillLevel,
    is_present,
)
from .date_parser import YEAR_RE, current_year, period_span, year_from_duration
from .logger import get_logger

logger = get_logger(__name__)


EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_RE = re.compile(r'^\+?[\d\s()\-]{10,}$')

_URL_ADAPTER = TypeAdapter(HttpUrl)

SKILL_LEVELS = [level.value for level in SkillLevel]


def _blank(value: Optional[str]) -> bool:
    return not value or not str(value).strip()


class DataValidator:
    """
    Validate parsed records without mutating them.

    Every rule is checked and all violations are returned together so a
    caller can show every problem at once.
    """

    def __init__(self, bounds: Optional[ValidationBounds] = None, year: Optional[int] = None):
        """
        Initialize validator.

        Args:
            bounds: Year and skill bounds; defaults to 1950..current+1 and 0..50
            year: Fixed "current" year, mainly for tests
        """
        self.bounds = bounds or ValidationBounds()
        self._year = year

    @property
    def current_year(self) -> int:
        return self._year if self._year is not None else current_year()

    # ------------------------------------------------------------------
    # Primitive checks
    # ------------------------------------------------------------------

    def is_valid_year(self, value: Any) -> bool:
        text = str(value or "").strip()
        if not YEAR_RE.match(text):
            return False
        year = int(text)
        return self.bounds.min_year <= year <= self.current_year + self.bounds.future_year_tolerance

    @staticmethod
    def is_valid_email(value: str) -> bool:
        return bool(EMAIL_RE.match(value or ""))

    @staticmethod
    def is_valid_phone(value: str) -> bool:
        return bool(PHONE_RE.match(value or ""))

    @staticmethod
    def is_valid_url(value: str) -> bool:
        try:
            _URL_ADAPTER.validate_python(value)
        except PydanticValidationError:
            return False
        return True

    # ------------------------------------------------------------------
    # Record checks
    # ------------------------------------------------------------------

    def validate_personal_info(self, info: PersonalInfo) -> List[ValidationError]:
        errors = []

        if _blank(info.name):
            errors.append(ValidationError(field="personalInfo.name", message="Name is required", value=info.name))

        if _blank(info.email) or not self.is_valid_email(info.email):
            errors.append(ValidationError(
                field="personalInfo.email", message="Valid email address is required", value=info.email
            ))

        if info.phone and not self.is_valid_phone(info.phone):
            errors.append(ValidationError(
                field="personalInfo.phone", message="Invalid phone number format", value=info.phone
            ))

        for attr, label in (("linkedin", "LinkedIn"), ("github", "GitHub"), ("website", "website")):
            url = getattr(info, attr)
            if url and not self.is_valid_url(url):
                errors.append(ValidationError(
                    field=f"personalInfo.{attr}", message=f"Invalid {label} URL format", value=url
                ))

        return errors

    def validate_period(self, period: Period, prefix: str) -> List[ValidationError]:
        """
        Check bounds, ordering and future dates of a period.

        A bound that fails the year check is not also reported as being in
        the future, so each violated rule yields exactly one error.
        """
        errors = []
        start, end = period.start, period.end
        start_ok = self.is_valid_year(start)
        end_present = is_present(end)
        end_ok = end_present or self.is_valid_year(end)

        if not start_ok:
            errors.append(ValidationError(
                field=f"{prefix}.period.start", message="Valid start year is required", value=start
            ))
        if not end_ok:
            errors.append(ValidationError(
                field=f"{prefix}.period.end", message='Valid end year or "Present" is required', value=end
            ))

        if start_ok and end_ok and not end_present and int(end) < int(start):
            errors.append(ValidationError(
                field=f"{prefix}.period",
                message="End year cannot be before start year",
                value=f"{start} - {end}",
            ))

        if start_ok and int(start) > self.current_year:
            errors.append(ValidationError(
                field=f"{prefix}.period.start", message="Start year cannot be in the future", value=start
            ))
        if end_ok and not end_present and int(end) > self.current_year:
            errors.append(ValidationError(
                field=f"{prefix}.period.end", message="End year cannot be in the future", value=end
            ))

        return errors

    def validate_experience_item(self, item: ExperienceItem, index: int) -> List[ValidationError]:
        prefix = f"experience[{index}]"
        errors = []

        if _blank(item.position):
            errors.append(ValidationError(
                field=f"{prefix}.position", message="Position title is required", value=item.position
            ))
        if _blank(item.company):
            errors.append(ValidationError(
                field=f"{prefix}.company", message="Company name is required", value=item.company
            ))

        errors.extend(self.validate_period(item.period, prefix))

        for ach_index, achievement in enumerate(item.achievements):
            if _blank(achievement.description):
                errors.append(ValidationError(
                    field=f"{prefix}.achievements[{ach_index}].description",
                    message="Achievement description is required",
                    value=achievement.description,
                ))

        return errors

    def validate_education_item(self, item: EducationItem, index: int) -> List[ValidationError]:
        prefix = f"education[{index}]"
        errors = []

        if _blank(item.degree):
            errors.append(ValidationError(field=f"{prefix}.degree", message="Degree is required", value=item.degree))
        if _blank(item.institution):
            errors.append(ValidationError(
                field=f"{prefix}.institution", message="Institution name is required", value=item.institution
            ))

        errors.extend(self.validate_period(item.period, prefix))
        return errors

    def validate_skill(self, skill: Skill, prefix: str) -> List[ValidationError]:
        errors = []

        if _blank(skill.name):
            errors.append(ValidationError(field=f"{prefix}.name", message="Skill name is required", value=skill.name))

        if skill.level not in SKILL_LEVELS:
            errors.append(ValidationError(
                field=f"{prefix}.level",
                message=f"Skill level must be one of: {', '.join(SKILL_LEVELS)}",
                value=skill.level,
            ))

        years = skill.years_of_experience
        if years is not None and not 0 <= years <= self.bounds.max_skill_years:
            errors.append(ValidationError(
                field=f"{prefix}.yearsOfExperience",
                message=f"Years of experience must be between 0 and {self.bounds.max_skill_years}",
                value=years,
            ))

        return errors

    def validate_skill_category(self, category: SkillCategory, index: int) -> List[ValidationError]:
        prefix = f"skills[{index}]"
        errors = []

        if _blank(category.name):
            errors.append(ValidationError(
                field=f"{prefix}.name", message="Skill category name is required", value=category.name
            ))
        if not category.skills:
            errors.append(ValidationError(
                field=f"{prefix}.skills", message="At least one skill is required in each category", value=[]
            ))

        for skill_index, skill in enumerate(category.skills):
            errors.extend(self.validate_skill(skill, f"{prefix}.skills[{skill_index}]"))

        return errors

    def validate_language(self, language: Language, index: int) -> List[ValidationError]:
        prefix = f"languages[{index}]"
        errors = []

        if _blank(language.name):
            errors.append(ValidationError(
                field=f"{prefix}.name", message="Language name is required", value=language.name
            ))
        if _blank(language.proficiency):
            errors.append(ValidationError(
                field=f"{prefix}.proficiency", message="Language proficiency is required", value=language.proficiency
            ))

        return errors

    def validate_project(self, project: Project, index: int) -> List[ValidationError]:
        prefix = f"projects[{index}]"
        required = (
            ("title", "title", "Project title is required"),
            ("duration", "duration", "Project duration is required"),
            ("location", "location", "Project location is required"),
            ("client_type", "clientType", "Client type is required"),
            ("project_type", "projectType", "Project type is required"),
            ("industry", "industry", "Industry is required"),
            ("business_unit", "businessUnit", "Business unit is required"),
            ("problem", "problem", "Problem description is required"),
            ("action", "action", "Action description is required"),
            ("result", "result", "Result description is required"),
        )
        errors = []
        for attr, field, message in required:
            value = getattr(project, attr)
            if _blank(value):
                errors.append(ValidationError(field=f"{prefix}.{field}", message=message, value=value))
        return errors

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def validate_resume(self, resume: ResumeData) -> ParseResult:
        """
        Validate a complete resume.

        Args:
            resume: Parsed resume data

        Returns:
            ParseResult carrying the resume on success, every error otherwise
        """
        errors = self.validate_personal_info(resume.personal_info)

        if not resume.summary.items:
            errors.append(ValidationError(field="summary", message="Summary with at least one item is required"))

        if not resume.experience:
            errors.append(ValidationError(field="experience", message="At least one experience item is required"))
        for index, item in enumerate(resume.experience):
            errors.extend(self.validate_experience_item(item, index))

        for index, item in enumerate(resume.education):
            errors.extend(self.validate_education_item(item, index))

        if not resume.skills:
            errors.append(ValidationError(field="skills", message="At least one skill category is required"))
        for index, category in enumerate(resume.skills):
            errors.extend(self.validate_skill_category(category, index))

        for index, language in enumerate(resume.languages):
            errors.extend(self.validate_language(language, index))

        if errors:
            logger.debug(f"Resume validation found {len(errors)} errors")
            return ParseResult.fail(errors, data=resume)
        return ParseResult.ok(resume)

    def validate_projects(self, projects: List[Project]) -> ParseResult:
        errors = []
        if not projects:
            errors.append(ValidationError(field="projects", message="At least one project is required"))
        for index, project in enumerate(projects):
            errors.extend(self.validate_project(project, index))

        if errors:
            logger.debug(f"Project validation found {len(errors)} errors")
            return ParseResult.fail(errors, data=projects)
        return ParseResult.ok(projects)

    def validate(self, record: Any) -> ParseResult:
        """
        Validate any supported record, dispatching on its type.

        Args:
            record: ResumeData, a Project or list of projects, or a single
                resume component (personal info, experience, education,
                skill category, skill, language)

        Returns:
            ParseResult with all discovered errors
        """
        if isinstance(record, ResumeData):
            return self.validate_resume(record)
        if isinstance(record, list) and all(isinstance(item, Project) for item in record):
            return self.validate_projects(record)

        if isinstance(record, Project):
            errors = self.validate_project(record, 0)
        elif isinstance(record, PersonalInfo):
            errors = self.validate_personal_info(record)
        elif isinstance(record, ExperienceItem):
            errors = self.validate_experience_item(record, 0)
        elif isinstance(record, EducationItem):
            errors = self.validate_education_item(record, 0)
        elif isinstance(record, SkillCategory):
            errors = self.validate_skill_category(record, 0)
        elif isinstance(record, Skill):
            errors = self.validate_skill(record, "skill")
        elif isinstance(record, Language):
            errors = self.validate_language(record, 0)
        else:
            return ParseResult.error("general", f"Unsupported record type: {type(record).__name__}")

        if errors:
            return ParseResult.fail(errors, data=record)
        return ParseResult.ok(record)

    # ------------------------------------------------------------------
    # Cross-dataset consistency
    # ------------------------------------------------------------------

    def check_consistency(self, resume: ResumeData, projects: List[Project]) -> List[ValidationError]:
        """
        Compare projects against the resume they should agree with.

        Warnings are advisory: technologies used in projects but absent from
        the resume's experience and skills, and projects dated outside every
        experience period.

        Args:
            resume: Successfully loaded resume
            projects: Successfully loaded projects

        Returns:
            List of warnings (empty when consistent)
        """
        warnings = []

        known: Set[str] = set()
        for item in resume.experience:
            known.update(tech.lower() for tech in item.technologies)
        for skill in resume.all_skills():
            known.add(skill.name.lower())

        missing = []
        for project in projects:
            for tech in project.technologies:
                if tech.lower() not in known and tech not in missing:
                    missing.append(tech)
        if missing:
            warnings.append(ValidationError(
                field="consistency.technologies",
                message=f"Technologies mentioned in projects but not in resume: {', '.join(missing)}",
                value=missing,
            ))

        intervals: List[Tuple[int, int]] = []
        for item in resume.experience:
            span = period_span(item.period, self.current_year)
            if span is not None:
                intervals.append(span)

        for index, project in enumerate(projects):
            year = year_from_duration(project.duration)
            if year is None:
                continue
            if not any(start <= year <= end for start, end in intervals):
                warnings.append(ValidationError(
                    field=f"projects[{index}].duration",
                    message=f"Project year {year} does not align with experience timeline",
                    value=project.duration,
                ))

        for warning in warnings:
            logger.warning(f"Consistency warning - {warning}")
        return warnings
