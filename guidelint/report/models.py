"""Report models and deterministic serialization."""

import hashlib
import json
from typing import Literal

from pydantic import BaseModel, Field

from ..config import REPORT_SCHEMA_VERSION, RULESET_VERSION

Severity = Literal["error", "warning"]


class Violation(BaseModel):
    """A single convention violation with its location."""

    path: str
    line: int
    column: int
    rule: str
    severity: Severity
    message: str

    def sort_key(self) -> tuple[int, int, str, str]:
        return (self.line, self.column, self.rule, self.message)


class FileResult(BaseModel):
    """Lint outcome for one file."""

    path: str
    language: str
    sha256: str
    violations: list[Violation] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == "warning")


class LintReport(BaseModel):
    """Lint report covering every checked file."""

    schema_version: int = REPORT_SCHEMA_VERSION
    ruleset_version: str = RULESET_VERSION
    files: list[FileResult]

    @property
    def error_count(self) -> int:
        return sum(f.error_count for f in self.files)

    @property
    def warning_count(self) -> int:
        return sum(f.warning_count for f in self.files)

    @property
    def violation_count(self) -> int:
        return sum(len(f.violations) for f in self.files)

    @property
    def files_with_violations(self) -> int:
        return sum(1 for f in self.files if f.violations)

    def summary(self) -> dict[str, int]:
        return {
            "files": len(self.files),
            "files_with_violations": self.files_with_violations,
            "errors": self.error_count,
            "warnings": self.warning_count,
        }


def compute_sha256(content: bytes | str) -> str:
    """Compute SHA256 hash of content.

    Args:
        content: Bytes or string to hash

    Returns:
        Hex-encoded SHA256 hash
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def create_report(results: list[FileResult]) -> LintReport:
    """Create a report with files and violations in a stable order.

    Args:
        results: Per-file lint results in any order

    Returns:
        LintReport sorted by path, violations by (line, column, rule)
    """
    ordered: list[FileResult] = []
    for result in sorted(results, key=lambda r: r.path):
        ordered.append(result.model_copy(update={
            "violations": sorted(result.violations, key=Violation.sort_key),
        }))
    return LintReport(files=ordered)


def report_payload(report: LintReport) -> dict:
    """JSON-ready report with the summary folded in."""
    payload = report.model_dump(mode="json")
    payload["summary"] = report.summary()
    return payload


def dump_report_json(report: LintReport) -> str:
    """Serialize a report deterministically."""
    return json.dumps(report_payload(report), indent=2, sort_keys=True, ensure_ascii=False) + "\n"

