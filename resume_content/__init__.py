"""Bilingual résumé content pipeline."""

__version__ = "1.0.0"
