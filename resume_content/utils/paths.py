"""
Path constants and helpers for content and output files.
"""

from pathlib import Path
from typing import List


# Base directories
PACKAGE_ROOT = Path(__file__).parent.parent
PROJECT_ROOT = PACKAGE_ROOT.parent
PACKAGE_DATA_DIR = PACKAGE_ROOT / "data"
CONTENT_DIR = PROJECT_ROOT / "content"
OUTPUT_DIR = PROJECT_ROOT / "output"

DEFAULT_VOCABULARY_PATH = PACKAGE_DATA_DIR / "vocabulary.json"

RESUME = "resume"
PROJECTS = "projects"


def content_candidates(entity_type: str, language: str) -> List[str]:
    """
    Names to try, in order, when fetching raw content for an entity.
    
    JSON exports win over Markdown sources. Projects fall back to the
    language-neutral ``projects.md`` file.
    
    Args:
        entity_type: ``resume`` or ``projects``
        language: Language code such as ``en`` or ``pt``
        
    Returns:
        Ordered list of file names
    """
    names = [
        f"{entity_type}-{language}.json",
        f"{entity_type}-{language}.md",
    ]
    if entity_type == PROJECTS:
        names.append("projects.md")
    return names


def output_filename(entity_type: str, language: str) -> str:
    """File name of a JSON export, e.g. ``resume-en.json``."""
    return f"{entity_type}-{language}.json"
