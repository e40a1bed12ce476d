"""File discovery and the per-file result cache."""

from .cache import ResultCache, cache_key
from .discover import UnsupportedLanguageError, detect_language, iter_source_files

__all__ = [
    "ResultCache",
    "cache_key",
    "UnsupportedLanguageError",
    "detect_language",
    "iter_source_files",
]
