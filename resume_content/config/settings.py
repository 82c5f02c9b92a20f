"""
Configuration settings management with environment variable support.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from resume_content.utils.paths import CONTENT_DIR, DEFAULT_VOCABULARY_PATH, OUTPUT_DIR


# Load environment variables
load_dotenv()


class ValidationBounds(BaseModel):
    """Numeric bounds enforced by the data validator."""
    min_year: int = 1950
    future_year_tolerance: int = 1
    max_skill_years: int = 50


class Settings(BaseSettings):
    """Pipeline settings, overridable through RESUME_* environment variables."""
    
    # Content locations
    content_dir: Path = CONTENT_DIR
    output_dir: Path = OUTPUT_DIR
    content_base_url: Optional[str] = None
    request_timeout: float = 10.0
    languages: List[str] = Field(default_factory=lambda: ["en", "pt"])
    
    # Cache
    cache_ttl_seconds: float = 600
    cache_max_size: int = 100
    data_version: str = "1.0.0"
    
    # Extraction and validation
    vocabulary_path: Path = DEFAULT_VOCABULARY_PATH
    validation: ValidationBounds = Field(default_factory=ValidationBounds)
    
    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    
    model_config = SettingsConfigDict(
        env_prefix="RESUME_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
    
    @property
    def cache_ttl_ms(self) -> int:
        return int(self.cache_ttl_seconds * 1000)
    
    @classmethod
    def from_json(cls, config_path: str = "config.json") -> "Settings":
        """
        Load settings from JSON configuration file.
        
        Environment variables still apply to keys the file leaves out.
        
        Args:
            config_path: Path to JSON configuration file
            
        Returns:
            Settings instance
            
        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If the file is not valid JSON or fails validation
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
            return cls(**config_data)
        except FileNotFoundError:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file: {e}")
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}")
    
    def to_dict(self) -> Dict:
        """Convert settings to dictionary."""
        return self.model_dump(mode="json", exclude_none=True)


@lru_cache()
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.
    
    Args:
        config_path: Optional JSON configuration file; environment only when omitted
        
    Returns:
        Settings instance (cached)
    """
    if config_path:
        return Settings.from_json(config_path)
    return Settings()
