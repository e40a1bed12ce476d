"""Configuration constants, paths and the lint config model for guidelint."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

# Cache location - user-level, shared across projects
CACHE_DIR = Path(os.getenv("GUIDELINT_CACHE_DIR", Path.home() / ".guidelint" / "cache"))

# Explicit config file, takes precedence over discovery
CONFIG_ENV_VAR = "GUIDELINT_CONFIG"
CONFIG_FILENAMES = ("guidelint.json", ".guidelint.json")

# Bumped whenever a rule changes behavior; part of every cache key
RULESET_VERSION = "0.1.0"
REPORT_SCHEMA_VERSION = 1

LANGUAGE_EXTENSIONS = {
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".js": "js",
    ".mjs": "js",
    ".cjs": "js",
}

DEFAULT_EXCLUDE = ["node_modules", ".git", "dist", "build", "vendor"]

DEFAULT_INDENT_SIZE = 2
DEFAULT_MAX_SELECTOR_DEPTH = 3

SEVERITY_VALUES = ("error", "warning", "off")


class ConfigError(ValueError):
    """Raised when a config file cannot be read or fails validation."""


class LintConfig(BaseModel):
    """User-tunable lint settings, loaded from guidelint.json."""

    model_config = {"extra": "forbid"}

    indent_size: int = Field(default=DEFAULT_INDENT_SIZE, ge=1)
    max_selector_depth: int = Field(default=DEFAULT_MAX_SELECTOR_DEPTH, ge=1)
    js_quotes: Literal["auto", "single", "double"] = "auto"
    allow_loose_null_equality: bool = True
    bem_pattern: str | None = None
    rules: dict[str, Literal["error", "warning", "off"]] = Field(default_factory=dict)
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))

    @field_validator("bem_pattern")
    @classmethod
    def _pattern_compiles(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"bem_pattern is not a valid regex: {e}") from e
        return value

    def severity_for(self, rule_id: str, default: str) -> str | None:
        """Effective severity for a rule, or None when it is switched off."""
        severity = self.rules.get(rule_id, default)
        if severity == "off":
            return None
        return severity

    def cache_fingerprint(self) -> str:
        """Stable text form used when hashing cache keys."""
        return json.dumps(self.model_dump(mode="json"), sort_keys=True)


def find_config(start: Path) -> Path | None:
    """Walk upward from start and return the first config file found."""
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def load_config(path: Path | None = None, start: Path | None = None) -> LintConfig:
    """Load lint configuration.

    Args:
        path: Explicit config file path
        start: Directory to start discovery from (defaults to cwd)

    Returns:
        Validated LintConfig (defaults when no file is found)

    Raises:
        ConfigError: If the file is missing, not JSON, or invalid
    """
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
    if path is None:
        path = find_config(start or Path.cwd())
    if path is None:
        return LintConfig()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    try:
        return LintConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
