"""Idiomatic JavaScript conventions checked over the token stream."""

from __future__ import annotations

import re
from collections.abc import Iterator

from ..config import LintConfig
from ..parse.js_scan import JsTokens, Token
from ..parse.source import Finding
from .base import Rule, register

_CAMEL = re.compile(r"^[a-z][a-zA-Z0-9]*$")
_PASCAL = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
_CONSTANT = re.compile(r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)*$")

# Keywords that end an unterminated declaration list under ASI
_STATEMENT_KEYWORDS = {
    "var",
    "let",
    "const",
    "function",
    "class",
    "if",
    "for",
    "while",
    "do",
    "return",
    "switch",
    "try",
    "throw",
    "export",
    "import",
}

QUOTE_NAMES = {"'": "single", '"': "double"}


def is_idiomatic_name(name: str) -> bool:
    """camelCase, PascalCase, or UPPER_SNAKE constants; leading _ or $ allowed."""
    bare = name.lstrip("_$")
    if not bare:
        return True
    return bool(_CAMEL.match(bare) or _PASCAL.match(bare) or _CONSTANT.match(bare))


def _matching_paren(tokens: list[Token], index: int) -> int | None:
    """Index of the ')' closing the '(' at index."""
    depth = 0
    for i in range(index, len(tokens)):
        value = tokens[i].value
        if tokens[i].kind != "punct":
            continue
        if value == "(":
            depth += 1
        elif value == ")":
            depth -= 1
            if depth == 0:
                return i
    return None


@register
class StrictEqualityRule(Rule):
    id = "js-strict-equality"
    language = "js"
    description = "Use === and !== instead of == and !="
    default_severity = "error"

    def check(self, document: JsTokens, config: LintConfig) -> Iterator[Finding]:
        tokens = document.significant()
        for i, token in enumerate(tokens):
            if token.kind != "punct" or token.value not in {"==", "!="}:
                continue
            if config.allow_loose_null_equality:
                neighbors = {tokens[j].value for j in (i - 1, i + 1) if 0 <= j < len(tokens)}
                if "null" in neighbors:
                    continue
            yield self.finding(document, token.offset, f"Use '{token.value}=' instead of '{token.value}'")


@register
class QuotesRule(Rule):
    id = "js-quotes"
    language = "js"
    description = "String literals use one quote style consistently"

    def check(self, document: JsTokens, config: LintConfig) -> Iterator[Finding]:
        strings = [t for t in document.tokens if t.kind == "string"]
        if not strings:
            return
        if config.js_quotes == "auto":
            expected = strings[0].value[0]
        else:
            expected = "'" if config.js_quotes == "single" else '"'
        for token in strings:
            quote = token.value[0]
            if quote == expected:
                continue
            # Switching quotes would force escapes; leave those alone.
            if expected in token.value[1:-1]:
                continue
            yield self.finding(document, token.offset, f"Use {QUOTE_NAMES[expected]} quotes for strings")


@register
class CurlyRule(Rule):
    id = "js-curly"
    language = "js"
    description = "Control statement bodies are wrapped in braces"

    def check(self, document: JsTokens, config: LintConfig) -> Iterator[Finding]:
        tokens = document.significant()
        for i, token in enumerate(tokens):
            if token.kind != "keyword":
                continue
            if token.value in {"if", "for", "while"}:
                j = i + 1
                if token.value == "for" and j < len(tokens) and tokens[j].value == "await":
                    j += 1
                if j >= len(tokens) or tokens[j].value != "(":
                    continue
                close = _matching_paren(tokens, j)
                if close is None or close + 1 >= len(tokens):
                    continue
                body = tokens[close + 1]
                # `} while (x);` closes a do-while; `while (x);` is an empty loop.
                if token.value == "while" and body.value == ";":
                    continue
                if body.value != "{":
                    yield self.finding(document, body.offset, f"Wrap the '{token.value}' body in braces")
            elif token.value in {"else", "do"}:
                if i + 1 >= len(tokens):
                    continue
                body = tokens[i + 1]
                if body.value == "{" or (token.value == "else" and body.value == "if"):
                    continue
                yield self.finding(document, body.offset, f"Wrap the '{token.value}' body in braces")


@register
class CamelCaseRule(Rule):
    id = "js-camelcase"
    language = "js"
    description = "Declared names are camelCase, PascalCase or UPPER_SNAKE constants"

    def check(self, document: JsTokens, config: LintConfig) -> Iterator[Finding]:
        tokens = document.significant()
        for i, token in enumerate(tokens):
            if token.kind != "keyword":
                continue
            if token.value in {"function", "class"}:
                j = i + 1
                if j < len(tokens) and tokens[j].value == "*":
                    j += 1
                if j < len(tokens) and tokens[j].kind == "identifier":
                    yield from self._check_name(document, tokens[j])
            elif token.value in {"var", "let", "const"}:
                for name in _declared_names(tokens, i + 1):
                    yield from self._check_name(document, name)

    def _check_name(self, document: JsTokens, token: Token) -> Iterator[Finding]:
        if not is_idiomatic_name(token.value):
            yield self.finding(document, token.offset, f"Name '{token.value}' should be camelCase")


def _declared_names(tokens: list[Token], start: int) -> Iterator[Token]:
    """Plain identifiers bound by a var/let/const list; patterns are skipped."""
    depth = 0
    expecting_name = True
    for i in range(start, len(tokens)):
        token = tokens[i]
        value = token.value
        if token.kind == "punct" and value in {"(", "[", "{"}:
            depth += 1
            expecting_name = False
            continue
        if token.kind == "punct" and value in {")", "]", "}"}:
            depth -= 1
            if depth < 0:
                return
            continue
        if depth:
            continue
        if value == ";":
            return
        if value == ",":
            expecting_name = True
            continue
        if token.kind == "keyword" and value in _STATEMENT_KEYWORDS:
            return
        if expecting_name:
            if token.kind == "identifier":
                yield token
            expecting_name = False


@register
class NoEvalRule(Rule):
    id = "js-no-eval"
    language = "js"
    description = "No eval() or new Function()"
    default_severity = "error"

    def check(self, document: JsTokens, config: LintConfig) -> Iterator[Finding]:
        tokens = document.significant()
        for i, token in enumerate(tokens[:-1]):
            following = tokens[i + 1]
            if token.kind == "identifier" and token.value == "eval" and following.value == "(":
                if i > 0 and tokens[i - 1].value in {".", "?."}:
                    continue
                yield self.finding(document, token.offset, "eval() is evil; avoid it")
            elif token.value == "new" and token.kind == "keyword" and following.value == "Function":
                yield self.finding(document, token.offset, "Avoid new Function(); it is eval in disguise")


@register
class NoWithRule(Rule):
    id = "js-no-with"
    language = "js"
    description = "No with statements"
    default_severity = "error"

    def check(self, document: JsTokens, config: LintConfig) -> Iterator[Finding]:
        tokens = document.significant()
        for i, token in enumerate(tokens[:-1]):
            if token.kind == "keyword" and token.value == "with" and tokens[i + 1].value == "(":
                yield self.finding(document, token.offset, "Do not use with statements")
