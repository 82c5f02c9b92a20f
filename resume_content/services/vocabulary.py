"""
Keyword vocabularies loaded from configuration data.

Technology, industry and enrichment keyword tables live in
``resume_content/data/vocabulary.json`` so they can be extended without
touching extraction logic.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from resume_content.utils.file_utils import load_json
from resume_content.utils.logger import get_logger
from resume_content.utils.paths import DEFAULT_VOCABULARY_PATH

logger = get_logger(__name__)


KeywordTable = Dict[str, List[str]]


def _first_keyword_match(table: KeywordTable, text: str) -> Optional[str]:
    lowered = text.lower()
    for label, keywords in table.items():
        if any(keyword.lower() in lowered for keyword in keywords):
            return label
    return None


class TechnologyVocabulary:
    """Maps free text onto canonical technology names."""

    def __init__(self, patterns: Dict[str, List[str]]):
        self._patterns: List[Tuple[str, List[re.Pattern]]] = [
            (name, [re.compile(p, re.IGNORECASE) for p in regexes])
            for name, regexes in patterns.items()
        ]
        self._by_lower = {name.lower(): name for name, _ in self._patterns}

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self._patterns]

    def match(self, text: str) -> List[str]:
        """
        Find every technology mentioned in the text.

        Args:
            text: Free text to scan

        Returns:
            Canonical names ordered by first mention, without duplicates
        """
        if not text:
            return []
        found = []
        for order, (name, regexes) in enumerate(self._patterns):
            positions = []
            for regex in regexes:
                hit = regex.search(text)
                if hit:
                    positions.append(hit.start())
            if positions:
                found.append((min(positions), order, name))
        return [name for _, _, name in sorted(found)]

    def matches_any(self, text: str) -> bool:
        return bool(self.match(text))

    def canonical(self, name: str) -> str:
        """Canonical spelling of a technology name; unknown names are returned trimmed."""
        cleaned = name.strip()
        known = self._by_lower.get(cleaned.lower())
        if known:
            return known
        for candidate, regexes in self._patterns:
            if any(regex.fullmatch(cleaned) for regex in regexes):
                return candidate
        return cleaned


class Vocabulary:
    """All keyword tables used by extraction, enrichment and metrics."""

    def __init__(self, data: Dict):
        self.technologies = TechnologyVocabulary(data.get("technologies", {}))
        self.trending: List[str] = list(data.get("trending", []))
        self.industries: KeywordTable = dict(data.get("industries", {}))
        self.company_sizes: KeywordTable = dict(data.get("companySizes", {}))
        self.role_types: Dict[str, Dict[str, List[str]]] = dict(data.get("roleTypes", {}))
        self.remote_keywords: List[str] = list(data.get("remote", []))
        self.complexity: KeywordTable = dict(data.get("complexity", {}))
        self.impact: KeywordTable = dict(data.get("impact", {}))

    @classmethod
    def load(cls, path: Union[Path, str, None] = None) -> "Vocabulary":
        """
        Load the vocabulary from a JSON file.

        Args:
            path: Vocabulary file; the bundled one when omitted

        Returns:
            Vocabulary instance
        """
        path = Path(path) if path else DEFAULT_VOCABULARY_PATH
        data = load_json(path)
        vocabulary = cls(data)
        logger.debug(f"Loaded {len(vocabulary.technologies.names)} technologies from {path}")
        return vocabulary

    def infer_industry(self, text: str) -> str:
        return _first_keyword_match(self.industries, text) or "Other"

    def infer_company_size(self, company: str) -> Optional[str]:
        for size, names in self.company_sizes.items():
            if any(name in company for name in names):
                return size
        return None

    def infer_role_type(self, position: str, description: str) -> str:
        position_lower = position.lower()
        description_lower = description.lower()
        for role, keywords in self.role_types.items():
            if any(k in position_lower for k in keywords.get("position", [])):
                return role
            if any(k in description_lower for k in keywords.get("description", [])):
                return role
        return "Individual Contributor"

    def is_remote(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.remote_keywords)

    def infer_complexity(self, text: str) -> Optional[str]:
        return _first_keyword_match(self.complexity, text)

    def infer_impact(self, text: str) -> Optional[str]:
        return _first_keyword_match(self.impact, text)

    def trending_in(self, names: Iterable[str]) -> List[str]:
        """Trending technologies present in ``names``, in vocabulary order."""
        present = {name.lower() for name in names}
        return [name for name in self.trending if name.lower() in present]


@lru_cache()
def load_vocabulary(path: Optional[str] = None) -> Vocabulary:
    """Cached vocabulary loader keyed by path."""
    return Vocabulary.load(path)
