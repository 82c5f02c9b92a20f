"""
Line-level tokenizer for résumé and portfolio Markdown.

Each line is classified into exactly one variant so extractors can dispatch
on ``kind`` instead of poking at string prefixes.
"""

import re
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')
BULLET_RE = re.compile(r'^[•\-*]\s+(.*)$')
METADATA_RE = re.compile(r'^\*\*(?P<label>[^*]+?)\s*(?::\*\*|\*\*\s*:)\s*(?P<value>.*)$')
METRIC_RE = re.compile(r'\d+(?:[.,]\d+)?%|\$[\d,]+(?:\.\d+)?[kKmMbB]?|\d+\+')
IMPROVEMENT_RE = re.compile(
    r'\b(?:increased|improved|reduced|saved|grew|cut|'
    r'aumentou|aumentei|melhorou|melhorei|reduziu|reduzi|economizou|economizei)\b'
    r'\D*?(\d+(?:[.,]\d+)?)',
    re.IGNORECASE,
)
CAPITALIZED_RUN_RE = re.compile(r'^[A-Z][^a-z]*[A-Z]')


class _Line(BaseModel):
    model_config = ConfigDict(frozen=True)


class Heading(_Line):
    kind: Literal["heading"] = "heading"
    level: int
    text: str


class MetadataField(_Line):
    kind: Literal["metadata"] = "metadata"
    label: str
    value: str


class BulletAchievement(_Line):
    kind: Literal["achievement"] = "achievement"
    text: str
    metric: str = ""


class BulletResponsibility(_Line):
    kind: Literal["responsibility"] = "responsibility"
    text: str


class FreeText(_Line):
    kind: Literal["text"] = "text"
    text: str
    emphasized: bool = False

    @property
    def plain(self) -> str:
        return strip_emphasis(self.text)


ParsedLine = Union[Heading, MetadataField, BulletAchievement, BulletResponsibility, FreeText]


def strip_emphasis(text: str) -> str:
    """Remove bold/italic markers and surrounding whitespace."""
    return re.sub(r'\*\*|__', '', text).strip()


def is_achievement(text: str) -> bool:
    """True when the text carries a metric or an improvement verb followed by a number."""
    return bool(METRIC_RE.search(text) or IMPROVEMENT_RE.search(text))


def extract_metric(text: str) -> str:
    """Return the first metric pattern in ``text`` or an empty string."""
    match = METRIC_RE.search(text)
    return match.group(0) if match else ""


def _parse_metadata(text: str) -> Optional[MetadataField]:
    match = METADATA_RE.match(text)
    if not match:
        return None
    return MetadataField(label=match.group("label").strip(), value=match.group("value").strip())


def tokenize_line(line: str) -> Optional[ParsedLine]:
    """
    Classify a single line.
    
    Args:
        line: One line of Markdown
        
    Returns:
        The parsed variant, or None for blank lines
    """
    text = line.strip()
    if not text:
        return None
    
    heading = HEADING_RE.match(text)
    if heading:
        return Heading(level=len(heading.group(1)), text=heading.group(2).strip())
    
    bullet = BULLET_RE.match(text)
    if bullet:
        body = bullet.group(1).strip()
        metadata = _parse_metadata(body)
        if metadata:
            return metadata
        if is_achievement(body):
            return BulletAchievement(text=body, metric=extract_metric(body))
        return BulletResponsibility(text=body)
    
    metadata = _parse_metadata(text)
    if metadata:
        return metadata
    
    emphasized = "**" in text or bool(CAPITALIZED_RUN_RE.match(text))
    return FreeText(text=text, emphasized=emphasized)


def tokenize(content: str) -> List[ParsedLine]:
    """Tokenize every non-blank line of a section body."""
    parsed = (tokenize_line(line) for line in content.splitlines())
    return [line for line in parsed if line is not None]
