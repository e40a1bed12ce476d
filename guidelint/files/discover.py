"""Source file discovery and language detection."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..config import LANGUAGE_EXTENSIONS, LintConfig

logger = logging.getLogger(__name__)


class UnsupportedLanguageError(ValueError):
    """Raised when a file's extension maps to no supported language."""


def detect_language(path: Path) -> str:
    """Map a file path to html, css or js by extension."""
    language = LANGUAGE_EXTENSIONS.get(path.suffix.lower())
    if language is None:
        supported = ", ".join(sorted(LANGUAGE_EXTENSIONS))
        raise UnsupportedLanguageError(f"Unsupported file type '{path.suffix}' for {path} (expected one of {supported})")
    return language


def is_excluded(path: Path, patterns: Iterable[str]) -> bool:
    """True when any path component, or the whole path, matches a pattern."""
    posix = path.as_posix()
    for pattern in patterns:
        if fnmatch.fnmatch(posix, pattern):
            return True
        if any(fnmatch.fnmatch(part, pattern) for part in path.parts):
            return True
    return False


def iter_source_files(paths: Iterable[Path], config: LintConfig) -> Iterator[Path]:
    """Expand paths into lintable files in a stable order.

    Directories are walked recursively; excluded and unsupported files inside
    them are skipped. Files named explicitly must have a supported extension.

    Raises:
        FileNotFoundError: If a path does not exist
        UnsupportedLanguageError: If an explicit file has an unknown extension
    """
    seen: set[Path] = set()
    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"No such file or directory: {path}")
        if path.is_file():
            detect_language(path)
            if path not in seen:
                seen.add(path)
                yield path
            continue
        for candidate in sorted(path.rglob("*")):
            if not candidate.is_file():
                continue
            relative = candidate.relative_to(path)
            if is_excluded(relative, config.exclude):
                logger.debug("Skipping excluded file %s", candidate)
                continue
            if candidate.suffix.lower() not in LANGUAGE_EXTENSIONS:
                continue
            if candidate not in seen:
                seen.add(candidate)
                yield candidate
