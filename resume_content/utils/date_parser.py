"""Year parsing for résumé periods.

Periods in this pipeline are year-granular: ``"2019"`` or a present marker
such as ``"Present"``/``"Presente"``/``"Atual"``.
"""

import re
from datetime import date
from typing import Optional, Tuple

from resume_content.models.resume import Period, is_present


YEAR_RE = re.compile(r'^\d{4}$')
PERIOD_RE = re.compile(
    r'(\d{4})\s*(?:[-–—]|to|até|a)\s*(\d{4}|present|presente|atual|current)\b',
    re.IGNORECASE,
)
DURATION_YEAR_RE = re.compile(r'\((\d{4})\)')


def current_year() -> int:
    return date.today().year


def parse_year(value: Optional[str], present_year: Optional[int] = None) -> Optional[int]:
    """
    Parse a period bound into an integer year.
    
    Args:
        value: A four-digit year or a present marker
        present_year: Year substituted for present markers (defaults to now)
        
    Returns:
        The year, or None when the value is not a year
    """
    if value is None:
        return None
    text = str(value).strip()
    if is_present(text):
        return present_year if present_year is not None else current_year()
    if YEAR_RE.match(text):
        return int(text)
    return None


def period_span(period: Period, present_year: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """Return (start, end) years, or None when either bound is unparsable."""
    start = parse_year(period.start, present_year)
    end = parse_year(period.end, present_year)
    if start is None or end is None:
        return None
    return start, end


def period_years(period: Period, present_year: Optional[int] = None) -> int:
    """Length of a period in years; malformed or inverted periods count as 0."""
    span = period_span(period, present_year)
    if span is None:
        return 0
    return max(span[1] - span[0], 0)


def find_period(text: str) -> Optional[Period]:
    """
    Find a ``YYYY - YYYY|Present`` range inside free text.
    
    Present markers in any supported language are canonicalised to ``Present``.
    """
    match = PERIOD_RE.search(text)
    if not match:
        return None
    end = match.group(2)
    if is_present(end):
        end = "Present"
    return Period(start=match.group(1), end=end)


def year_from_duration(duration: str) -> Optional[int]:
    """Extract the parenthetical year of a project duration, e.g. ``6 months (2023)``."""
    match = DURATION_YEAR_RE.search(duration or "")
    return int(match.group(1)) if match else None
