"""
File utility functions.
"""

import json
from pathlib import Path
from typing import Any, Union

from .logger import get_logger

logger = get_logger(__name__)


def ensure_directory(directory: Union[Path, str]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.
    
    Args:
        directory: Path to the directory
        
    Returns:
        Path object for the directory
    """
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_json(data: Any, filepath: Union[Path, str], indent: int = 2) -> Path:
    """
    Save data to a JSON file, keeping accented characters readable.
    
    Args:
        data: JSON-serializable data (dicts, lists, scalars)
        filepath: Path to the JSON file
        indent: JSON indentation level
        
    Returns:
        Path the data was written to
    """
    path = Path(filepath)
    ensure_directory(path.parent)
    
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
        f.write("\n")
    
    logger.debug(f"Saved JSON to {path}")
    return path


def load_json(filepath: Union[Path, str]) -> Any:
    """
    Load data from a JSON file.
    
    Args:
        filepath: Path to the JSON file
        
    Returns:
        Loaded data
        
    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(filepath)
    
    if not path.exists():
        logger.error(f"JSON file not found: {path}")
        raise FileNotFoundError(f"File not found: {path}")
    
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    
    logger.debug(f"Loaded JSON from {path}")
    return data


def read_text(filepath: Union[Path, str]) -> str:
    """Read a UTF-8 text file, raising FileNotFoundError when absent."""
    path = Path(filepath)
    
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    
    return path.read_text(encoding='utf-8')
