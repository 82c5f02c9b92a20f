"""
Scored, multi-field, case-insensitive search over record lists.
"""

import re
from typing import Any, List, Optional, Sequence, Tuple

from pydantic.alias_generators import to_snake

from resume_content.models.results import SearchMatch, SearchResult
from resume_content.utils.logger import get_logger

logger = get_logger(__name__)


EXACT_MULTIPLIER = 10
PREFIX_MULTIPLIER = 5
WORD_MULTIPLIER = 3
SUBSTRING_MULTIPLIER = 1
LIST_ELEMENT_SCORE = 2

EXPERIENCE_FIELDS = ("position", "company", "description")
PROJECT_FIELDS = ("title", "problem", "action", "result", "industry")
SKILL_FIELDS = ("name", "category")


def find_all_indices(text: str, term: str) -> List[Tuple[int, int]]:
    """All (start, end) spans of ``term`` in ``text``, overlapping occurrences included."""
    indices = []
    index = text.find(term)
    while index != -1:
        indices.append((index, index + len(term)))
        index = text.find(term, index + 1)
    return indices


def field_value(item: Any, field: str) -> Any:
    """Read a field from a dict or model, accepting snake_case or camelCase names."""
    if isinstance(item, dict):
        if field in item:
            return item[field]
        return item.get(to_snake(field))
    value = getattr(item, field, None)
    if value is None:
        value = getattr(item, to_snake(field), None)
    return value


class SearchService:
    """Rank records by how well their fields match a search term."""

    @staticmethod
    def score_text(value: str, term: str) -> Tuple[float, List[Tuple[int, int]]]:
        """
        Score one string field.

        The occurrence count is multiplied by 10 for an exact match, 5 for a
        prefix match, 3 for a whole-word match and 1 otherwise. The fraction
        of the field covered by the term is added so that, within a tier,
        the tighter match ranks first.

        Args:
            value: Field value
            term: Lower-cased search term

        Returns:
            Tuple of (score, match spans); score 0 when absent
        """
        lowered = value.lower()
        indices = find_all_indices(lowered, term)
        if not indices:
            return 0.0, []

        if lowered == term:
            multiplier = EXACT_MULTIPLIER
        elif lowered.startswith(term):
            multiplier = PREFIX_MULTIPLIER
        elif re.search(rf'\b{re.escape(term)}\b', lowered):
            multiplier = WORD_MULTIPLIER
        else:
            multiplier = SUBSTRING_MULTIPLIER

        coverage = len(term) / len(lowered)
        return len(indices) * multiplier + coverage, indices

    def score_item(self, item: Any, term: str, fields: Sequence[str]) -> Tuple[float, List[SearchMatch]]:
        total = 0.0
        matches: List[SearchMatch] = []

        for field in fields:
            value = field_value(item, field)
            if isinstance(value, str):
                score, indices = self.score_text(value, term)
                if indices:
                    matches.append(SearchMatch(field=field, value=value, indices=indices))
                    total += score
            elif isinstance(value, (list, tuple)):
                for element in value:
                    if not isinstance(element, str):
                        continue
                    indices = find_all_indices(element.lower(), term)
                    if indices:
                        matches.append(SearchMatch(field=field, value=element, indices=indices))
                        total += LIST_ELEMENT_SCORE

        return total, matches

    def search(self, items: Sequence[Any], term: Optional[str], fields: Sequence[str]) -> List[SearchResult]:
        """
        Search items and order them by descending relevance.

        Args:
            items: Records (models or dicts)
            term: Search term; blank returns every item with score 1
            fields: Field names to search

        Returns:
            Matching items as SearchResult, best first, ties in input order
        """
        if not term or not term.strip():
            return [SearchResult(item=item, score=1, matches=[]) for item in items]

        normalized = term.strip().lower()
        results = []
        for item in items:
            score, matches = self.score_item(item, normalized, fields)
            if matches:
                results.append(SearchResult(item=item, score=score, matches=matches))

        results.sort(key=lambda result: result.score, reverse=True)
        logger.debug(f"Search '{term}' matched {len(results)}/{len(items)} items")
        return results

    def matches(self, item: Any, term: str, fields: Sequence[str]) -> bool:
        return bool(self.search([item], term, fields))
