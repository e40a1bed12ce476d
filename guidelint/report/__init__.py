"""Violation models and report rendering."""

from .formatters import format_json, format_report, format_text, render_html_report, write_report
from .models import FileResult, LintReport, Violation, compute_sha256, create_report

__all__ = [
    "Violation",
    "FileResult",
    "LintReport",
    "compute_sha256",
    "create_report",
    "format_text",
    "format_json",
    "format_report",
    "render_html_report",
    "write_report",
]
