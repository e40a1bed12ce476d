"""Markup builders for the HTML lint report."""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from .models import FileResult, LintReport, Violation
from .styles import CSS


def page(title: str, masthead: Iterable[str], body: str) -> str:
    """Wrap body markup in a complete document with the inline stylesheet."""
    items = "\n".join(f"<span>{escape(item)}</span>" for item in masthead)
    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{escape(title)}</title>",
        f"<style>{CSS}</style>",
        "</head>",
        "<body>",
        '<div class="masthead">',
        items,
        "</div>",
        body,
        "</body>",
        "</html>",
    ]) + "\n"


def summary_line(report: LintReport) -> str:
    return (
        f"{report.error_count} errors, {report.warning_count} warnings "
        f"in {report.files_with_violations} of {len(report.files)} files"
    )


def violation_row(v: Violation) -> str:
    severity = escape(v.severity)
    return (
        f"<tr><td>{v.line}:{v.column}</td>"
        f'<td class="severity--{severity}">{severity}</td>'
        f"<td>{escape(v.rule)}</td>"
        f"<td>{escape(v.message)}</td></tr>"
    )


def violations_table(violations: Iterable[Violation]) -> str:
    rows = [violation_row(v) for v in violations]
    return "\n".join([
        '<table class="violations">',
        "<tr><th>Where</th><th>Severity</th><th>Rule</th><th>Message</th></tr>",
        *rows,
        "</table>",
    ])


def file_section(result: FileResult) -> str:
    parts = ['<section class="file">', f'<h2 class="file__path">{escape(result.path)}</h2>']
    if result.violations:
        meta = f"{result.language}: {result.error_count} errors, {result.warning_count} warnings"
        parts.append(f'<div class="file__meta">{escape(meta)}</div>')
        parts.append(violations_table(result.violations))
    else:
        parts.append(f'<div class="file__meta file__meta--clean">{escape(result.language)}: no violations</div>')
    parts.append("</section>")
    return "\n".join(parts)


def report_body(report: LintReport, title: str) -> str:
    sections = [file_section(result) for result in report.files]
    return "\n".join([
        f"<h1>{escape(title)}</h1>",
        f'<p class="summary">{escape(summary_line(report))}</p>',
        *sections,
    ])
