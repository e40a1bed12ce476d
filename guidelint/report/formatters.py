"""Render lint reports as text, JSON or a static HTML page."""

from __future__ import annotations

from pathlib import Path

from .. import __version__
from .models import LintReport, dump_report_json
from .templates import page, report_body

FORMATS = ("text", "json", "html")


def format_text(report: LintReport) -> str:
    """One `path:line:col: severity [rule] message` line per violation, then a summary."""
    lines: list[str] = []
    for result in report.files:
        for v in result.violations:
            lines.append(f"{v.path}:{v.line}:{v.column}: {v.severity} [{v.rule}] {v.message}")

    files = len(report.files)
    if report.violation_count:
        lines.append(
            f"{report.violation_count} problems ({report.error_count} errors, "
            f"{report.warning_count} warnings) in {report.files_with_violations} of {files} files"
        )
    else:
        lines.append(f"No problems found in {files} files")
    return "\n".join(lines) + "\n"


def format_json(report: LintReport) -> str:
    return dump_report_json(report)


def render_html_report(report: LintReport, title: str = "guidelint report") -> str:
    """Self-contained HTML page listing every file and its violations."""
    masthead = [f"guidelint {__version__}", f"ruleset {report.ruleset_version}"]
    return page(title, masthead, report_body(report, title))


def format_report(report: LintReport, fmt: str) -> str:
    if fmt == "text":
        return format_text(report)
    if fmt == "json":
        return format_json(report)
    if fmt == "html":
        return render_html_report(report)
    raise ValueError(f"Unknown report format: {fmt} (expected one of {', '.join(FORMATS)})")


def write_report(report: LintReport, output_path: Path, fmt: str) -> Path:
    """Write a report in the given format.

    Args:
        report: LintReport object
        output_path: File to write
        fmt: text, json or html

    Returns:
        Path to written report file
    """
    content = format_report(report, fmt)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    return output_path
