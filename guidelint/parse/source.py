"""Source text with offset-to-position mapping and suppression directives."""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Finding:
    """A raw rule observation, before severity and path are attached."""

    rule: str
    line: int
    column: int
    message: str


class SourceText:
    """Normalized source text with a line-start index.

    Line endings are normalized to LF so that offsets are stable regardless of
    the platform the file was authored on.
    """

    def __init__(self, text: str, base_offset: int = 0, parent: SourceText | None = None):
        self.text = text.replace("\r\n", "\n").replace("\r", "\n")
        self.base_offset = base_offset
        self.parent = parent
        self._line_starts = [0]
        for match in re.finditer(r"\n", self.text):
            self._line_starts.append(match.end())

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    def position(self, offset: int) -> tuple[int, int]:
        """Map a local offset to a 1-based (line, column) in the outermost file."""
        if self.parent is not None:
            return self.parent.position(self.base_offset + offset)
        offset = max(0, min(offset, len(self.text)))
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def offset_at(self, line: int, column0: int) -> int:
        """Local offset for a 1-based line and 0-based column (HTMLParser.getpos)."""
        index = max(0, min(line - 1, len(self._line_starts) - 1))
        return self._line_starts[index] + column0

    def line_start(self, line: int) -> int:
        return self._line_starts[line - 1]

    def line_of(self, offset: int) -> int:
        return self.position(offset)[0]

    def finding(self, rule: str, offset: int, message: str) -> Finding:
        line, column = self.position(offset)
        return Finding(rule=rule, line=line, column=column, message=message)

    def embedded(self, start: int, end: int) -> SourceText:
        """Sub-source for an embedded block whose positions map back to this file."""
        return SourceText(self.text[start:end], base_offset=start, parent=self)


DIRECTIVE_PATTERN = re.compile(
    r"guidelint-(?P<kind>disable-file|disable-next-line|disable-line)\b(?P<ids>[^\n]*)"
)
_RULE_ID = re.compile(r"[a-z][a-z0-9]*(?:-[a-z0-9]+)*")


@dataclass
class Directives:
    """Suppressions collected from source comments.

    A value of None in by_line means every rule is suppressed on that line.
    """

    file_disabled: set[str] = field(default_factory=set)
    disable_all_file: bool = False
    by_line: dict[int, set[str] | None] = field(default_factory=dict)

    def add(self, line: int, ids: set[str]) -> None:
        if line in self.by_line and self.by_line[line] is None:
            return
        if not ids:
            self.by_line[line] = None
            return
        self.by_line.setdefault(line, set()).update(ids)

    def suppresses(self, rule: str, line: int) -> bool:
        if self.disable_all_file:
            return True
        if self.file_disabled and rule in self.file_disabled:
            return True
        if line not in self.by_line:
            return False
        ids = self.by_line[line]
        return ids is None or rule in ids

    def merge(self, other: Directives) -> None:
        self.disable_all_file = self.disable_all_file or other.disable_all_file
        self.file_disabled.update(other.file_disabled)
        for line, ids in other.by_line.items():
            self.add(line, set() if ids is None else ids)


def collect_directives(source: SourceText, comments: Iterable[tuple[int, str]]) -> Directives:
    """Build Directives from (body offset, comment body) pairs.

    The offset must point at the first character of the comment body, after
    the opening delimiter, so that the body end maps to the comment's last line.
    """
    directives = Directives()
    for offset, body in comments:
        for match in DIRECTIVE_PATTERN.finditer(body):
            ids = set(_RULE_ID.findall(match.group("ids")))
            kind = match.group("kind")
            if kind == "disable-file":
                if ids:
                    directives.file_disabled.update(ids)
                else:
                    directives.disable_all_file = True
            elif kind == "disable-line":
                directives.add(source.line_of(offset), ids)
            else:
                end_line = source.line_of(offset + len(body))
                directives.add(end_line + 1, ids)
    return directives
