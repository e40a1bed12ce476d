"""Regex-based JavaScript tokenizer.

Produces a flat token stream, which is enough for the idiomatic-JavaScript
rules. Regex literals are told apart from division by the previous
significant token.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from .source import Finding, SourceText

KEYWORDS = {
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "export",
    "extends",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "let",
    "new",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "yield",
    "await",
    "null",
    "true",
    "false",
}

# Keywords after which a slash starts a regex rather than a division
_REGEX_AFTER_KEYWORDS = {
    "return",
    "typeof",
    "instanceof",
    "in",
    "new",
    "delete",
    "void",
    "throw",
    "case",
    "do",
    "else",
    "yield",
    "await",
}

_WHITESPACE = re.compile(r"\s+")
_LINE_COMMENT = re.compile(r"//[^\n]*")
_IDENTIFIER = re.compile(r"[A-Za-z_$\u00a0-\uffff][\w$\u00a0-\uffff]*")
_NUMBER = re.compile(
    r"(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|(?:\d[\d_]*\.?[\d_]*|\.\d[\d_]*)(?:[eE][+-]?\d+)?)n?"
)
_STRING = re.compile(r"""'(?:[^'\\\n]|\\.)*'|"(?:[^"\\\n]|\\.)*\"""", re.DOTALL)
_REGEX = re.compile(r"/(?![*/])(?:[^/\\\[\n]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[a-z]*")
_PUNCT = re.compile(
    r">>>=|\.\.\.|===|!==|\*\*=|<<=|>>=|>>>|\?\?=|&&=|\|\|="
    r"|=>|==|!=|<=|>=|&&|\|\||\?\?|\?\.|\+\+|--|\+=|-=|\*=|/=|%=|&=|\|=|\^=|\*\*|<<|>>"
    r"|[{}()\[\];,<>+\-*/%&|^!~?:=.@#]"
)


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.value)


@dataclass
class JsTokens:
    source: SourceText
    tokens: list[Token] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)

    language = "js"

    def significant(self) -> list[Token]:
        return [t for t in self.tokens if t.kind != "comment"]

    def comment_bodies(self) -> list[tuple[int, str]]:
        bodies: list[tuple[int, str]] = []
        for token in self.tokens:
            if token.kind != "comment":
                continue
            if token.value.startswith("/*"):
                bodies.append((token.offset + 2, token.value[2:-2]))
            else:
                bodies.append((token.offset + 2, token.value[2:]))
        return bodies

    def skipped_ranges(self) -> list[tuple[int, int]]:
        return [
            (t.offset, t.end)
            for t in self.tokens
            if t.kind == "template" or (t.kind == "comment" and t.value.startswith("/*"))
        ]


def _regex_allowed(previous: Token | None) -> bool:
    if previous is None:
        return True
    if previous.kind in {"number", "string", "template", "regex"}:
        return False
    if previous.kind == "identifier":
        # `of` is contextual, so it reaches here as an identifier
        return previous.value == "of"
    if previous.kind == "keyword":
        return previous.value in _REGEX_AFTER_KEYWORDS
    return previous.value not in {")", "]", "}", "++", "--"}


def _scan_template(text: str, start: int) -> int | None:
    """Return the index just past a template literal, or None if unterminated."""
    i = start + 1
    depth = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if depth == 0 and ch == "`":
            return i + 1
        if text.startswith("${", i):
            depth += 1
            i += 2
            continue
        if depth and ch == "}":
            depth -= 1
        elif depth and ch == "{":
            depth += 1
        i += 1
    return None


def tokenize_js(source: SourceText) -> JsTokens:
    """Tokenize JavaScript. Unterminated constructs become parse-error findings."""
    result = JsTokens(source=source)
    for token in _iter_tokens(source, result.findings):
        result.tokens.append(token)
    return result


def _iter_tokens(source: SourceText, findings: list[Finding]) -> Iterator[Token]:
    text = source.text
    pos = 0
    previous: Token | None = None
    while pos < len(text):
        match = _WHITESPACE.match(text, pos)
        if match:
            pos = match.end()
            continue

        if text.startswith("/*", pos):
            end = text.find("*/", pos + 2)
            if end == -1:
                findings.append(source.finding("parse-error", pos, "Unterminated block comment"))
                return
            yield Token("comment", text[pos:end + 2], pos)
            pos = end + 2
            continue

        match = _LINE_COMMENT.match(text, pos)
        if match:
            yield Token("comment", match.group(), pos)
            pos = match.end()
            continue

        ch = text[pos]
        token: Token | None = None
        if ch in {'"', "'"}:
            match = _STRING.match(text, pos)
            if not match:
                findings.append(source.finding("parse-error", pos, "Unterminated string literal"))
                return
            token = Token("string", match.group(), pos)
        elif ch == "`":
            end = _scan_template(text, pos)
            if end is None:
                findings.append(source.finding("parse-error", pos, "Unterminated template literal"))
                return
            token = Token("template", text[pos:end], pos)
        elif ch == "/" and _regex_allowed(previous):
            match = _REGEX.match(text, pos)
            if match:
                token = Token("regex", match.group(), pos)
        elif ch.isdigit() or (ch == "." and text[pos + 1:pos + 2].isdigit()):
            match = _NUMBER.match(text, pos)
            if match:
                token = Token("number", match.group(), pos)

        if token is None:
            match = _IDENTIFIER.match(text, pos)
            if match:
                word = match.group()
                kind = "keyword" if word in KEYWORDS else "identifier"
                # Property names (obj.if) are plain identifiers.
                if previous is not None and previous.value in {".", "?."}:
                    kind = "identifier"
                token = Token(kind, word, pos)
            else:
                match = _PUNCT.match(text, pos)
                value = match.group() if match else ch
                token = Token("punct", value, pos)

        yield token
        previous = token
        pos = token.end
