"""Utility modules."""

from .logger import get_logger, setup_logging
from .file_utils import ensure_directory, save_json, load_json, read_text
from .paths import (
    CONTENT_DIR,
    DEFAULT_VOCABULARY_PATH,
    OUTPUT_DIR,
    PROJECT_ROOT,
    content_candidates,
    output_filename,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "ensure_directory",
    "save_json",
    "load_json",
    "read_text",
    "CONTENT_DIR",
    "DEFAULT_VOCABULARY_PATH",
    "OUTPUT_DIR",
    "PROJECT_ROOT",
    "content_candidates",
    "output_filename",
]
