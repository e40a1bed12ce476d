"""Best-effort CSS scanning into rules, selectors and declarations.

This is not a full CSS parser. It understands enough structure (comments,
strings, blocks, nested conditional at-rules) to attach accurate offsets to
selectors and declarations, which is what the style rules need.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .source import Finding, SourceText

# At-rules whose blocks contain ordinary style rules
CONDITIONAL_AT_RULES = {"media", "supports", "document", "layer", "container", "scope"}

_IMPORTANT = re.compile(r"!\s*important\b", re.IGNORECASE)
_AT_NAME = re.compile(r"@(?P<name>[-\w]+)")


@dataclass(frozen=True)
class CssSelector:
    text: str
    offset: int


@dataclass(frozen=True)
class CssDeclaration:
    property: str
    value: str
    offset: int
    colon_offset: int
    value_offset: int
    end: int
    has_semicolon: bool

    @property
    def important(self) -> bool:
        return bool(_IMPORTANT.search(self.value))


@dataclass
class CssRule:
    prelude: str
    prelude_offset: int
    open_brace: int
    close_brace: int
    selectors: list[CssSelector] = field(default_factory=list)
    declarations: list[CssDeclaration] = field(default_factory=list)
    parent_at_rule: str | None = None
    at_rule: str | None = None
    in_keyframes: bool = False

    @property
    def is_style_rule(self) -> bool:
        return self.at_rule is None and not self.in_keyframes


@dataclass(frozen=True)
class CssStatement:
    """A block-less at-rule such as @import or @charset."""

    name: str
    text: str
    offset: int


@dataclass(frozen=True)
class CssComment:
    offset: int
    end: int
    body: str


@dataclass
class Stylesheet:
    source: SourceText
    text: str
    rules: list[CssRule] = field(default_factory=list)
    statements: list[CssStatement] = field(default_factory=list)
    comments: list[CssComment] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)

    language = "css"

    def style_rules(self) -> list[CssRule]:
        return [rule for rule in self.rules if rule.is_style_rule]

    def comment_bodies(self) -> list[tuple[int, str]]:
        return [(c.offset + 2, c.body) for c in self.comments]

    def skipped_ranges(self) -> list[tuple[int, int]]:
        return [(c.offset, c.end) for c in self.comments]


def blank_comments(text: str) -> tuple[str, list[CssComment], int | None]:
    """Replace comment bodies with spaces, keeping newlines and offsets.

    Returns:
        (blanked text, comments, offset of an unterminated comment or None)
    """
    out: list[str] = []
    comments: list[CssComment] = []
    i = 0
    n = len(text)
    quote: str | None = None
    while i < n:
        ch = text[i]
        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == quote or ch == "\n":
                quote = None
            i += 1
            continue
        if ch in {'"', "'"}:
            quote = ch
            out.append(ch)
            i += 1
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                out.append(re.sub(r"[^\n]", " ", text[i:]))
                return "".join(out), comments, i
            end += 2
            comments.append(CssComment(offset=i, end=end, body=text[i + 2:end - 2]))
            out.append(re.sub(r"[^\n]", " ", text[i:end]))
            i = end
            continue
        out.append(ch)
        i += 1
    return "".join(out), comments, None


def split_top_level(text: str, separator: str) -> list[tuple[int, str, bool]]:
    """Split on a separator outside strings, parens and brackets.

    Returns:
        (start index, segment text, terminated by separator) triples
    """
    parts: list[tuple[int, str, bool]] = []
    depth = 0
    quote: str | None = None
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in {'"', "'"}:
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
        elif ch == separator and depth == 0:
            parts.append((start, text[start:i], True))
            start = i + 1
        i += 1
    parts.append((start, text[start:], False))
    return parts


def scan_css(source: SourceText) -> Stylesheet:
    """Scan a stylesheet. Malformed structure becomes parse-error findings."""
    blanked, comments, unterminated = blank_comments(source.text)
    sheet = Stylesheet(source=source, text=blanked, comments=comments)
    if unterminated is not None:
        sheet.findings.append(source.finding("parse-error", unterminated, "Unterminated comment"))
    _CssScanner(sheet).scan()
    return sheet


class _CssScanner:
    def __init__(self, sheet: Stylesheet) -> None:
        self.sheet = sheet
        self.text = sheet.text
        self.pos = 0

    def scan(self) -> None:
        self._scan_rules(parent_at_rule=None, in_keyframes=False, nested=False)

    def _error(self, offset: int, message: str) -> None:
        self.sheet.findings.append(self.sheet.source.finding("parse-error", offset, message))

    def _scan_rules(self, parent_at_rule: str | None, in_keyframes: bool, nested: bool) -> bool:
        """Scan rules until EOF or, when nested, the closing brace.

        Returns:
            False when a nested block hit EOF without closing.
        """
        text = self.text
        prelude_start = self.pos
        quote: str | None = None
        while self.pos < len(text):
            ch = text[self.pos]
            if quote:
                if ch == "\\":
                    self.pos += 2
                    continue
                if ch == quote or ch == "\n":
                    quote = None
                self.pos += 1
                continue
            if ch in {'"', "'"}:
                quote = ch
            elif ch == ";":
                self._statement(prelude_start, self.pos)
                prelude_start = self.pos + 1
            elif ch == "{":
                if not self._block(prelude_start, parent_at_rule, in_keyframes):
                    return False
                prelude_start = self.pos
                continue
            elif ch == "}":
                if nested:
                    return True
                self._error(self.pos, "Unexpected closing brace")
                prelude_start = self.pos + 1
            self.pos += 1
        if not nested:
            trailing = text[prelude_start:]
            if trailing.strip():
                lead = len(trailing) - len(trailing.lstrip())
                self._error(prelude_start + lead, "Selector without a rule block")
        return not nested

    def _statement(self, start: int, end: int) -> None:
        segment = self.text[start:end]
        stripped = segment.strip()
        if not stripped:
            return
        offset = start + (len(segment) - len(segment.lstrip()))
        match = _AT_NAME.match(stripped)
        if match:
            self.sheet.statements.append(CssStatement(name=match.group("name").lower(), text=stripped, offset=offset))
        else:
            self._error(offset, "Declaration outside of a rule block")

    def _block(self, prelude_start: int, parent_at_rule: str | None, in_keyframes: bool) -> bool:
        open_brace = self.pos
        raw_prelude = self.text[prelude_start:open_brace]
        prelude = raw_prelude.strip()
        prelude_offset = prelude_start + (len(raw_prelude) - len(raw_prelude.lstrip()))
        self.pos += 1

        at_match = _AT_NAME.match(prelude)
        if at_match:
            name = at_match.group("name").lower()
            bare = re.sub(r"^-[a-z]+-", "", name)
            if name in CONDITIONAL_AT_RULES or bare == "keyframes":
                closed = self._scan_rules(
                    parent_at_rule=name,
                    in_keyframes=in_keyframes or bare == "keyframes",
                    nested=True,
                )
                if not closed:
                    self._error(open_brace, f"Unclosed @{name} block")
                    return False
                self.pos += 1
                return True
            rule = CssRule(
                prelude=prelude,
                prelude_offset=prelude_offset,
                open_brace=open_brace,
                close_brace=-1,
                parent_at_rule=parent_at_rule,
                at_rule=name,
                in_keyframes=in_keyframes,
            )
        else:
            rule = CssRule(
                prelude=prelude,
                prelude_offset=prelude_offset,
                open_brace=open_brace,
                close_brace=-1,
                parent_at_rule=parent_at_rule,
                in_keyframes=in_keyframes,
            )
            for start, segment, _ in split_top_level(raw_prelude, ","):
                stripped = segment.strip()
                if stripped:
                    lead = len(segment) - len(segment.lstrip())
                    rule.selectors.append(CssSelector(text=stripped, offset=prelude_start + start + lead))

        close_brace = self._find_block_end(self.pos)
        if close_brace is None:
            self._error(open_brace, "Unclosed rule block")
            self.pos = len(self.text)
            return False
        rule.close_brace = close_brace
        rule.declarations = self._declarations(self.pos, close_brace)
        self.sheet.rules.append(rule)
        self.pos = close_brace + 1
        return True

    def _find_block_end(self, start: int) -> int | None:
        depth = 0
        quote: str | None = None
        i = start
        text = self.text
        while i < len(text):
            ch = text[i]
            if quote:
                if ch == "\\":
                    i += 2
                    continue
                if ch == quote or ch == "\n":
                    quote = None
            elif ch in {'"', "'"}:
                quote = ch
            elif ch == "{":
                depth += 1
            elif ch == "}":
                if depth == 0:
                    return i
                depth -= 1
            i += 1
        return None

    def _declarations(self, start: int, end: int) -> list[CssDeclaration]:
        body = self.text[start:end]
        declarations: list[CssDeclaration] = []
        for seg_start, segment, terminated in split_top_level(body, ";"):
            if not segment.strip() or "{" in segment:
                continue
            colon = segment.find(":")
            lead = len(segment) - len(segment.lstrip())
            seg_offset = start + seg_start
            if colon == -1:
                self._error(seg_offset + lead, f"Malformed declaration '{segment.strip()}'")
                continue
            raw_value = segment[colon + 1:]
            value_lead = len(raw_value) - len(raw_value.lstrip())
            declarations.append(CssDeclaration(
                property=segment[:colon].strip(),
                value=raw_value.strip(),
                offset=seg_offset + lead,
                colon_offset=seg_offset + colon,
                value_offset=seg_offset + colon + 1 + value_lead,
                end=seg_offset + len(segment.rstrip()),
                has_semicolon=terminated,
            ))
        return declarations
