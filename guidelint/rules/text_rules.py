"""Whitespace rules shared by every language."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from ..config import LintConfig
from ..parse.source import Finding
from .base import Rule, register

_LEADING = re.compile(r"[ \t]*")
_TRAILING = re.compile(r"[ \t]+$")


def _inside(ranges: list[tuple[int, int]], offset: int) -> bool:
    return any(start < offset < end for start, end in ranges)


@register
class IndentSpacesRule(Rule):
    id = "indent-spaces"
    description = "Indent with soft tabs, in multiples of indent_size spaces"
    default_severity = "error"

    def check(self, document: Any, config: LintConfig) -> Iterator[Finding]:
        source = document.source
        skipped = document.skipped_ranges()
        for index, line in enumerate(source.lines):
            if not line.strip():
                continue
            line_start = source.line_start(index + 1)
            if _inside(skipped, line_start):
                continue
            leading = _LEADING.match(line).group()
            if "\t" in leading:
                yield self.finding(
                    document,
                    line_start + leading.index("\t"),
                    "Indent with spaces, not tabs",
                )
            elif len(leading) % config.indent_size:
                yield self.finding(
                    document,
                    line_start,
                    f"Indentation of {len(leading)} spaces is not a multiple of {config.indent_size}",
                )


@register
class TrailingWhitespaceRule(Rule):
    id = "trailing-whitespace"
    description = "No whitespace at the end of a line"

    def check(self, document: Any, config: LintConfig) -> Iterator[Finding]:
        source = document.source
        for index, line in enumerate(source.lines):
            match = _TRAILING.search(line)
            if match:
                yield self.finding(
                    document,
                    source.line_start(index + 1) + match.start(),
                    "Trailing whitespace",
                )


@register
class FinalNewlineRule(Rule):
    id = "final-newline"
    description = "Files end with exactly one newline"

    def check(self, document: Any, config: LintConfig) -> Iterator[Finding]:
        text = document.source.text
        if not text.strip():
            return
        if not text.endswith("\n"):
            yield self.finding(document, len(text), "File should end with a newline")
            return
        stripped = text.rstrip("\n")
        if len(text) - len(stripped) > 1:
            yield self.finding(document, len(stripped) + 1, "File ends with extra blank lines")
