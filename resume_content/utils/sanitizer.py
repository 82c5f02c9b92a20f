"""
Markup stripping and whitespace normalization over nested content.
"""

import re
from typing import Any

from bs4 import BeautifulSoup
from pydantic import BaseModel


TAG_RE = re.compile(r'<[^>]*>')
HORIZONTAL_SPACE_RE = re.compile(r'[ \t\f\v\u00a0]+')
BLANK_LINES_RE = re.compile(r'\n{2,}')


def _strip_markup(text: str) -> str:
    # Unwrapping a tag can expose another (e.g. escaped entities), so repeat until stable
    while TAG_RE.search(text):
        soup = BeautifulSoup(text, 'html.parser')
        for element in soup(['script', 'style']):
            element.decompose()
        stripped = soup.get_text()
        if stripped == text:
            break
        text = stripped
    return text


def normalize_text(text: str) -> str:
    """
    Collapse whitespace runs to one space, trim each line, and reduce
    consecutive blank lines to a single line break.
    """
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    lines = [HORIZONTAL_SPACE_RE.sub(' ', line).strip() for line in text.split('\n')]
    text = '\n'.join(lines)
    return BLANK_LINES_RE.sub('\n', text).strip()


def sanitize_text(text: str) -> str:
    """Remove script/style blocks and tags, then normalize whitespace."""
    return normalize_text(_strip_markup(text))


def _walk(value: Any, transform) -> Any:
    if isinstance(value, str):
        return transform(value)
    if isinstance(value, BaseModel):
        data = {name: _walk(getattr(value, name), transform) for name in type(value).model_fields}
        return type(value).model_validate(data)
    if isinstance(value, dict):
        return {key: _walk(item, transform) for key, item in value.items()}
    if isinstance(value, list):
        return [_walk(item, transform) for item in value]
    if isinstance(value, tuple):
        return tuple(_walk(item, transform) for item in value)
    return value


def sanitize_data(value: Any) -> Any:
    """
    Recursively sanitize every string inside ``value``.
    
    Walks dicts, lists, tuples and pydantic models, returning new
    containers; the input is never mutated. Idempotent.
    
    Args:
        value: Arbitrary nested data
        
    Returns:
        Sanitized copy of the data
    """
    return _walk(value, sanitize_text)


def normalize_data(value: Any) -> Any:
    """Recursively normalize whitespace of every string inside ``value``."""
    return _walk(value, normalize_text)
