"""
Data service: load, sanitize, validate and cache resume and project content,
then expose search, filtering and metrics over it.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from resume_content.config.settings import Settings
from resume_content.models.base import ParseResult
from resume_content.models.cache import CacheStats
from resume_content.models.filters import FacetOptions, FilteredResults, FilterOptions
from resume_content.models.metrics import MetricsSummary
from resume_content.models.project import Project
from resume_content.models.results import ContentSearchResults, DatasetResult
from resume_content.models.resume import ResumeData
from resume_content.services.cache_service import CacheService, cache_key
from resume_content.services.content_source import (
    ContentNotFoundError,
    ContentSource,
    ContentSourceError,
    FileContentSource,
    HttpContentSource,
)
from resume_content.services.enrichment_service import EnrichmentService
from resume_content.services.filter_service import FilterService
from resume_content.services.metrics_service import MetricsService
from resume_content.services.project_extractor import ProjectExtractor
from resume_content.services.resume_extractor import ResumeExtractor
from resume_content.services.search_service import (
    EXPERIENCE_FIELDS,
    PROJECT_FIELDS,
    SKILL_FIELDS,
    SearchService,
)
from resume_content.services.vocabulary import Vocabulary, load_vocabulary
from resume_content.utils.data_validator import DataValidator
from resume_content.utils.date_parser import parse_year
from resume_content.utils.file_utils import ensure_directory, save_json
from resume_content.utils.logger import get_logger
from resume_content.utils.paths import PROJECTS, RESUME, content_candidates, output_filename
from resume_content.utils.sanitizer import normalize_data, sanitize_data

logger = get_logger(__name__)


_PROJECT_LIST = TypeAdapter(List[Project])


class DataService:
    """Façade over the content pipeline for every supported language."""

    def __init__(
        self,
        settings: Settings,
        source: Optional[ContentSource] = None,
        cache: Optional[CacheService] = None,
        validator: Optional[DataValidator] = None,
        vocabulary: Optional[Vocabulary] = None
    ):
        """
        Initialize data service.

        Args:
            settings: Application settings
            source: Raw content source; HTTP when ``content_base_url`` is set,
                otherwise the content directory
            cache: Cache for validated datasets
            validator: Data validator using the configured bounds
            vocabulary: Keyword vocabularies for extraction and enrichment
        """
        self.settings = settings
        self.source = source if source is not None else self._default_source(settings)
        self.cache = cache if cache is not None else CacheService(
            ttl_ms=settings.cache_ttl_ms,
            max_size=settings.cache_max_size,
            version=settings.data_version,
        )
        self.validator = validator if validator is not None else DataValidator(bounds=settings.validation)
        if vocabulary is None:
            vocabulary = load_vocabulary(str(settings.vocabulary_path))
        self.vocabulary = vocabulary

        self.resume_extractor = ResumeExtractor(self.vocabulary)
        self.project_extractor = ProjectExtractor(self.vocabulary)
        self.enrichment_service = EnrichmentService(self.vocabulary)
        self.search_service = SearchService()
        self.filter_service = FilterService(self.search_service, self.enrichment_service)
        self.metrics_service = MetricsService(self.vocabulary)

        logger.info(f"Data service initialized ({self.source.describe('')})")

    @staticmethod
    def _default_source(settings: Settings) -> ContentSource:
        if settings.content_base_url:
            return HttpContentSource(settings.content_base_url, timeout=settings.request_timeout)
        return FileContentSource(settings.content_dir)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_resume(self, language: str, use_cache: bool = True, force_refresh: bool = False) -> ParseResult:
        """
        Load the resume for a language.

        Args:
            language: Language code such as ``en``
            use_cache: Serve a fresh cached copy when available
            force_refresh: Ignore the cache and reload from the source

        Returns:
            ParseResult with ResumeData, the validator's errors, or a single
            ``general`` error for structural failures
        """
        return self._load(RESUME, language, use_cache, force_refresh)

    def load_projects(self, language: str, use_cache: bool = True, force_refresh: bool = False) -> ParseResult:
        """Load the project list for a language; see ``load_resume``."""
        return self._load(PROJECTS, language, use_cache, force_refresh)

    def _load(self, entity_type: str, language: str, use_cache: bool, force_refresh: bool) -> ParseResult:
        if language not in self.settings.languages:
            return ParseResult.error("general", f"Unsupported language: {language}", value=language)

        key = cache_key(entity_type, language)
        if use_cache and not force_refresh:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug(f"Cache hit for {key}")
                return ParseResult.ok(copy.deepcopy(cached))

        try:
            parsed = self._fetch_and_parse(entity_type, language)
        except ContentNotFoundError as e:
            logger.error(f"❌ No {entity_type} content for '{language}': {e}")
            return ParseResult.error("general", f"Failed to load {entity_type} data: {e}")
        except ContentSourceError as e:
            logger.error(f"❌ Could not fetch {entity_type} content for '{language}': {e}")
            return ParseResult.error("general", f"Failed to load {entity_type} data: {e}")
        except json.JSONDecodeError as e:
            logger.error(f"❌ Invalid JSON for {key}: {e}")
            return ParseResult.error("general", f"Invalid JSON in {entity_type} data: {e}")
        except PydanticValidationError as e:
            logger.error(f"❌ {key} does not match the expected structure: {e.error_count()} errors")
            return ParseResult.error("general", f"Malformed {entity_type} data: {e}")

        if not parsed.success:
            return parsed

        data = normalize_data(sanitize_data(parsed.data))
        result = self.validator.validate(data)
        if not result.success:
            logger.warning(f"⚠️  {key} failed validation with {len(result.errors)} errors")
            return result

        if use_cache:
            self.cache.set(key, copy.deepcopy(result.data))
        logger.info(f"✅ Loaded {key}")
        return result

    def _fetch_and_parse(self, entity_type: str, language: str) -> ParseResult:
        tried = []
        for name in content_candidates(entity_type, language):
            try:
                raw = self.source.fetch(name)
            except ContentNotFoundError:
                tried.append(self.source.describe(name))
                continue

            logger.debug(f"Parsing {self.source.describe(name)}")
            if name.endswith(".json"):
                return ParseResult.ok(self._from_json(entity_type, json.loads(raw)))
            if entity_type == RESUME:
                return self.resume_extractor.parse(raw)
            return self.project_extractor.parse(raw)

        raise ContentNotFoundError(f"tried {', '.join(tried)}")

    @staticmethod
    def _from_json(entity_type: str, payload: Any) -> Union[ResumeData, List[Project]]:
        if entity_type == RESUME:
            return ResumeData.model_validate(payload)
        if isinstance(payload, dict) and "projects" in payload:
            payload = payload["projects"]
        return _PROJECT_LIST.validate_python(payload)

    def load_dataset(self, language: str, use_cache: bool = True, force_refresh: bool = False) -> DatasetResult:
        """
        Load resume and projects together and cross-check them.

        Consistency warnings are only computed when both loads succeed.
        """
        resume = self.load_resume(language, use_cache, force_refresh)
        projects = self.load_projects(language, use_cache, force_refresh)

        warnings = []
        if resume.success and projects.success:
            warnings = self.validator.check_consistency(resume.data, projects.data)

        return DatasetResult(language=language, resume=resume, projects=projects, consistency_warnings=warnings)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search(self, term: str, language: str) -> ContentSearchResults:
        """
        Search experience, skills and projects of one language.

        Datasets that fail to load contribute no results.
        """
        results = ContentSearchResults()

        resume = self.load_resume(language)
        if resume.success:
            results.experience = self.search_service.search(resume.data.experience, term, EXPERIENCE_FIELDS)
            skills = [
                skill if skill.category else skill.model_copy(update={"category": category.name})
                for category in resume.data.skills
                for skill in category.skills
            ]
            results.skills = self.search_service.search(skills, term, SKILL_FIELDS)

        projects = self.load_projects(language)
        if projects.success:
            results.projects = self.search_service.search(projects.data, term, PROJECT_FIELDS)

        logger.info(f"Search '{term}' ({language}): {results.total_results} results")
        return results

    def filter_experience(self, language: str, options: FilterOptions) -> Optional[FilteredResults]:
        """Enriched experience entries matching every active filter, newest first."""
        resume = self.load_resume(language)
        if not resume.success:
            return None

        enriched = self.enrichment_service.enrich_experience(resume.data.experience)
        filtered = self.filter_service.filter_experience(enriched, options)
        filtered.items = sorted(
            filtered.items,
            key=lambda item: parse_year(item.period.start, self.filter_service.current_year) or 0,
            reverse=True,
        )
        return filtered

    def filter_projects(self, language: str, options: FilterOptions) -> Optional[FilteredResults]:
        """Enriched projects matching every active filter, ordered by title."""
        projects = self.load_projects(language)
        if not projects.success:
            return None

        enriched = self.enrichment_service.enrich_projects(projects.data)
        filtered = self.filter_service.filter_projects(enriched, options)
        filtered.items = sorted(filtered.items, key=lambda project: project.title.lower())
        return filtered

    def filter_skills(self, language: str, options: FilterOptions) -> Optional[FilteredResults]:
        resume = self.load_resume(language)
        if not resume.success:
            return None
        return self.filter_service.filter_skills(resume.data.skills, options)

    def facet_options(self, language: str) -> Optional[FacetOptions]:
        dataset = self.load_dataset(language)
        if not dataset.success:
            return None
        return self.filter_service.facet_options(
            self.enrichment_service.enrich_experience(dataset.resume.data.experience),
            dataset.projects.data,
            dataset.resume.data.skills,
        )

    def metrics(self, language: str) -> Optional[MetricsSummary]:
        """Dashboard metrics, or None unless both resume and projects load."""
        dataset = self.load_dataset(language)
        if not dataset.success:
            logger.warning(f"⚠️  Metrics unavailable for '{language}'")
            return None

        resume = dataset.resume.data
        enriched = resume.model_copy(
            update={"experience": self.enrichment_service.enrich_experience(resume.experience)}
        )
        return self.metrics_service.summarize(enriched, dataset.projects.data)

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def refresh(self, language: str) -> Dict[str, bool]:
        """Reload both datasets for a language, bypassing the cache."""
        dataset = self.load_dataset(language, force_refresh=True)
        return {RESUME: dataset.resume.success, PROJECTS: dataset.projects.success}

    def preload(self, languages: Optional[Iterable[str]] = None) -> Dict[str, Dict[str, bool]]:
        """
        Warm the cache.

        Args:
            languages: Languages to load; every configured language when omitted

        Returns:
            Mapping of language to per-dataset success flags
        """
        status = {}
        for language in languages or self.settings.languages:
            status[language] = {
                RESUME: self.load_resume(language).success,
                PROJECTS: self.load_projects(language).success,
            }
        logger.info(f"Preloaded {status}")
        return status

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_json(self, language: str, output_dir: Union[Path, str, None] = None) -> Dict[str, Path]:
        """
        Write validated datasets as ``resume-<lang>.json`` and ``projects-<lang>.json``.

        Datasets that fail to load are skipped.

        Args:
            language: Language code
            output_dir: Target directory; the configured output directory when omitted

        Returns:
            Mapping of entity type to written file path
        """
        target = ensure_directory(output_dir or self.settings.output_dir)
        written = {}

        resume = self.load_resume(language)
        if resume.success:
            written[RESUME] = save_json(resume.data.to_json_dict(), target / output_filename(RESUME, language))
        else:
            logger.error(f"❌ Not exporting resume-{language}: {len(resume.errors)} errors")

        projects = self.load_projects(language)
        if projects.success:
            written[PROJECTS] = save_json(
                [project.to_json_dict() for project in projects.data],
                target / output_filename(PROJECTS, language),
            )
        else:
            logger.error(f"❌ Not exporting projects-{language}: {len(projects.errors)} errors")

        for path in written.values():
            logger.info(f"💾 Saved {path}")
        return written
