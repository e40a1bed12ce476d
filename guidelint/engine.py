"""Lint orchestration: scan, run rules, collect results."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import RULESET_VERSION, LintConfig
from .files.cache import ResultCache, cache_key
from .files.discover import detect_language, iter_source_files
from .parse.css_scan import scan_css
from .parse.html_scan import HtmlDocument, scan_html
from .parse.js_scan import tokenize_js
from .parse.source import SourceText, collect_directives
from .report.models import FileResult, LintReport, Violation, compute_sha256, create_report
from .rules.base import PARSE_ERROR, RuleEngine, create_default_engine

logger = logging.getLogger(__name__)

_SCANNERS = {
    "html": scan_html,
    "css": scan_css,
    "js": tokenize_js,
}

_default_engine: RuleEngine | None = None


def get_engine() -> RuleEngine:
    """Get or create the shared engine with the full catalogue."""
    global _default_engine
    if _default_engine is None:
        _default_engine = create_default_engine()
    return _default_engine


def scan(language: str, source: SourceText) -> Any:
    """Scan source with the scanner for its language."""
    try:
        scanner = _SCANNERS[language]
    except KeyError:
        raise ValueError(f"Unknown language: {language}") from None
    return scanner(source)


def lint_text(
    text: str,
    language: str,
    config: LintConfig | None = None,
    path: str = "<text>",
    engine: RuleEngine | None = None,
) -> FileResult:
    """Lint source text.

    Args:
        text: Source code
        language: html, css or js
        config: Lint settings (defaults when omitted)
        path: Path recorded on violations
        engine: Rule engine (the full catalogue when omitted)

    Returns:
        FileResult with sorted violations
    """
    config = config or LintConfig()
    engine = engine or get_engine()
    source = SourceText(text)

    document = scan(language, source)
    directives = collect_directives(source, document.comment_bodies())

    # <style> and <script> bodies are linted as their own language, positioned in the host file.
    embedded: list[Any] = []
    if isinstance(document, HtmlDocument):
        for block in document.blocks:
            sub_source = source.embedded(block.start, block.end)
            sub_document = scan(block.language, sub_source)
            directives.merge(collect_directives(sub_source, sub_document.comment_bodies()))
            embedded.append(sub_document)

    violations = engine.run(document, config, path, directives=directives)
    for sub_document in embedded:
        violations.extend(engine.run(sub_document, config, path, directives=directives, include_text=False))
    violations.sort(key=Violation.sort_key)

    return FileResult(
        path=path,
        language=language,
        sha256=compute_sha256(source.text),
        violations=violations,
    )


def _read_source(path: Path) -> tuple[bytes, str]:
    raw = path.read_bytes()
    try:
        return raw, raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw, raw.decode("latin-1")


def lint_file(
    path: Path,
    config: LintConfig | None = None,
    cache: ResultCache | None = None,
    engine: RuleEngine | None = None,
) -> FileResult:
    """Lint a file on disk, consulting the result cache when given.

    Read failures become a parse-error violation instead of aborting the run.
    """
    config = config or LintConfig()
    language = detect_language(path)
    display = str(path)

    try:
        raw, text = _read_source(path)
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return FileResult(
            path=display,
            language=language,
            sha256="",
            violations=[Violation(
                path=display,
                line=1,
                column=1,
                rule=PARSE_ERROR,
                severity="error",
                message=f"Cannot read file: {e}",
            )],
        )

    key = cache_key(RULESET_VERSION, language, display, config.cache_fingerprint(), compute_sha256(raw))
    if cache is not None:
        payload = cache.get(key)
        if payload is not None:
            try:
                result = FileResult.model_validate(payload)
            except ValidationError:
                logger.debug("Discarding stale cache entry for %s", path)
            else:
                logger.debug("Cache hit for %s", path)
                return result

    result = lint_text(text, language, config=config, path=display, engine=engine)
    if cache is not None:
        cache.put(key, result.model_dump(mode="json"))
    return result


def lint_paths(
    paths: Iterable[Path],
    config: LintConfig | None = None,
    cache: ResultCache | None = None,
    engine: RuleEngine | None = None,
) -> LintReport:
    """Lint every source file under the given paths.

    Raises:
        FileNotFoundError: If a path does not exist
        UnsupportedLanguageError: If an explicit file has an unknown extension
    """
    config = config or LintConfig()
    engine = engine or get_engine()

    unknown = sorted(set(config.rules) - {rule.id for rule in engine.rules})
    for rule_id in unknown:
        logger.warning("Config names unknown rule '%s'", rule_id)

    results = [
        lint_file(path, config=config, cache=cache, engine=engine)
        for path in iter_source_files(paths, config)
    ]
    logger.debug("Linted %d files", len(results))
    return create_report(results)
