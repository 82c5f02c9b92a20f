"""Service layer modules."""

from .cache_service import CacheService
from .content_source import ContentNotFoundError, ContentSourceError, FileContentSource, HttpContentSource
from .data_service import DataService
from .enrichment_service import EnrichmentService
from .filter_service import FilterService
from .metrics_service import MetricsService
from .project_extractor import ProjectExtractor, projects_to_markdown
from .resume_extractor import ResumeExtractor
from .search_service import SearchService
from .vocabulary import Vocabulary, load_vocabulary

__all__ = [
    "CacheService",
    "ContentNotFoundError",
    "ContentSourceError",
    "FileContentSource",
    "HttpContentSource",
    "DataService",
    "EnrichmentService",
    "FilterService",
    "MetricsService",
    "ProjectExtractor",
    "projects_to_markdown",
    "ResumeExtractor",
    "SearchService",
    "Vocabulary",
    "load_vocabulary",
]
