"""Rule base class, registry and the engine that runs rules over a document.

Usage:
    engine = create_default_engine()
    violations = engine.run(document, config, path="index.html")
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from ..config import LintConfig
from ..parse.source import Directives, Finding
from ..report.models import Violation

logger = logging.getLogger(__name__)

# Block-Element-Modifier: block__element--modifier, lowercase words joined by hyphens
BEM_PATTERN = (
    r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*"
    r"(?:__[a-z0-9]+(?:-[a-z0-9]+)*)?"
    r"(?:--[a-z0-9]+(?:-[a-z0-9]+)*)?$"
)

TEXT_LANGUAGE = "text"
PARSE_ERROR = "parse-error"

RULES: dict[str, type[Rule]] = {}


def register(cls: type[Rule]) -> type[Rule]:
    """Class decorator adding a rule to the catalogue."""
    if cls.id in RULES:
        raise ValueError(f"Duplicate rule id: {cls.id}")
    RULES[cls.id] = cls
    return cls


def bem_regex(config: LintConfig) -> re.Pattern[str]:
    return re.compile(config.bem_pattern or BEM_PATTERN)


class Rule(ABC):
    """A single convention check.

    Subclasses set the class attributes and implement check(), yielding
    Findings located through the document's SourceText.
    """

    id: str = ""
    language: str = TEXT_LANGUAGE
    description: str = ""
    default_severity: str = "warning"

    @abstractmethod
    def check(self, document: Any, config: LintConfig) -> Iterable[Finding]:
        """Yield findings for this rule."""

    def finding(self, document: Any, offset: int, message: str) -> Finding:
        return document.source.finding(self.id, offset, message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, language={self.language!r})"


class RuleEngine:
    """Runs registered rules over scanned documents.

    Rules are indexed by language; text rules apply to every language but only
    to the outermost document, not to embedded blocks.
    """

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}
        self._by_language: dict[str, list[Rule]] = {}

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule
        bucket = self._by_language.setdefault(rule.language, [])
        bucket.append(rule)
        bucket.sort(key=lambda r: r.id)
        logger.debug("Registered rule: %s", rule.id)

    def register_all(self, rules: Iterable[Rule]) -> None:
        for rule in rules:
            self.register(rule)

    @property
    def rules(self) -> list[Rule]:
        return sorted(self._rules.values(), key=lambda r: r.id)

    def get(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def rules_for(self, language: str, include_text: bool = True) -> list[Rule]:
        selected = list(self._by_language.get(language, []))
        if include_text and language != TEXT_LANGUAGE:
            selected.extend(self._by_language.get(TEXT_LANGUAGE, []))
        return sorted(selected, key=lambda r: r.id)

    def run(
        self,
        document: Any,
        config: LintConfig,
        path: str,
        directives: Directives | None = None,
        include_text: bool = True,
    ) -> list[Violation]:
        """Evaluate every enabled rule and return filtered, sorted violations."""
        violations: list[Violation] = []

        for finding in document.findings:
            if directives is not None and directives.suppresses(finding.rule, finding.line):
                logger.debug("Suppressed %s at %s:%d", finding.rule, path, finding.line)
                continue
            violations.append(_to_violation(finding, path, "error"))

        for rule in self.rules_for(document.language, include_text=include_text):
            severity = config.severity_for(rule.id, rule.default_severity)
            if severity is None:
                continue
            for finding in rule.check(document, config):
                if directives is not None and directives.suppresses(finding.rule, finding.line):
                    logger.debug("Suppressed %s at %s:%d", finding.rule, path, finding.line)
                    continue
                violations.append(_to_violation(finding, path, severity))

        violations.sort(key=Violation.sort_key)
        return violations


def _to_violation(finding: Finding, path: str, severity: str) -> Violation:
    return Violation(
        path=path,
        line=finding.line,
        column=finding.column,
        rule=finding.rule,
        severity=severity,
        message=finding.message,
    )


def create_default_engine() -> RuleEngine:
    """Engine with the full rule catalogue registered."""
    # Importing the rule modules populates RULES.
    from . import css_rules, html_rules, js_rules, text_rules  # noqa: F401

    engine = RuleEngine()
    engine.register_all(cls() for cls in RULES.values())
    return engine
