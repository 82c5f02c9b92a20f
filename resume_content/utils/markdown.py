"""
Markdown section splitting with optional YAML front matter.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from resume_content.models.markdown import MarkdownDocument, Section
from .logger import get_logger

logger = get_logger(__name__)


HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')
FRONT_MATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)', re.DOTALL)


def parse_front_matter(markdown: str) -> Tuple[Dict[str, Any], str]:
    """
    Separate a leading ``---`` YAML block from the Markdown body.
    
    Malformed or non-mapping front matter is logged and ignored.
    
    Args:
        markdown: Raw Markdown text
        
    Returns:
        Tuple of (front matter dict, remaining body)
    """
    match = FRONT_MATTER_RE.match(markdown)
    if not match:
        return {}, markdown
    
    body = markdown[match.end():]
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring malformed front matter: {e}")
        return {}, body
    
    if data is None:
        return {}, body
    if not isinstance(data, dict):
        logger.warning(f"Ignoring front matter of type {type(data).__name__}")
        return {}, body
    return data, body


def split_sections(markdown: str) -> MarkdownDocument:
    """
    Split Markdown into heading-delimited sections.
    
    Every non-blank line after a heading belongs to that heading's section;
    lines before the first heading are dropped.
    
    Args:
        markdown: Raw Markdown text, optionally with front matter
        
    Returns:
        MarkdownDocument with front matter and ordered sections
    """
    markdown = markdown or ""
    front_matter, body = parse_front_matter(markdown)
    
    sections: List[Section] = []
    title: Optional[str] = None
    level = 0
    buffer: List[str] = []
    
    for raw_line in body.splitlines():
        line = raw_line.rstrip()
        heading = HEADING_RE.match(line)
        if heading:
            if title is not None:
                sections.append(Section(title=title, content="".join(buffer), level=level))
            level = len(heading.group(1))
            title = heading.group(2).strip()
            buffer = []
        elif title is not None and line.strip():
            buffer.append(line + "\n")
    
    if title is not None:
        sections.append(Section(title=title, content="".join(buffer), level=level))
    
    logger.debug(f"Split markdown into {len(sections)} sections")
    return MarkdownDocument(front_matter=front_matter, sections=sections, raw_content=markdown)


def find_section(sections: Iterable[Section], keywords: Iterable[str]) -> Optional[Section]:
    """
    Find the first section whose title contains one of the keywords.
    
    Keywords are tried in priority order, so an earlier keyword wins over a
    section that appears earlier in the document.
    """
    sections = list(sections)
    for keyword in keywords:
        keyword = keyword.lower()
        for section in sections:
            if keyword in section.title.lower():
                return section
    return None


def section_with_children(sections: List[Section], section: Section) -> str:
    """
    Content of a section followed by its nested subsections.
    
    Subsection headings are rendered as bold lines so entry-boundary
    detection treats them like any other emphasized line.
    """
    position = next((i for i, candidate in enumerate(sections) if candidate is section), None)
    if position is None:
        return section.content
    
    parts = [section.content]
    for child in sections[position + 1:]:
        if child.level <= section.level:
            break
        parts.append(f"**{child.title}**\n")
        parts.append(child.content)
    return "".join(parts)
