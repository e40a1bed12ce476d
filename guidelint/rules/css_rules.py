"""CSS conventions: formatting, values, and specificity.

Selector checks run on masked selector text where strings and attribute
brackets are blanked out, so `[href="#top"]` does not read as an ID selector.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from ..config import LintConfig
from ..parse.css_scan import CssRule, CssSelector, Stylesheet
from ..parse.source import Finding
from .base import Rule, bem_regex, register

_HEX = re.compile(r"(?<![\w&-])#(?P<hex>[0-9a-fA-F]{3,8})\b")
_ZERO_UNIT = re.compile(
    r"(?<![\w.#-])0+(?:\.0+)?(?P<unit>px|em|rem|ex|ch|vw|vh|vmin|vmax|cm|mm|in|pt|pc|q)(?![\w%])",
    re.IGNORECASE,
)
_LEADING_ZERO = re.compile(r"(?<![\w.#-])-?0\.\d")
_QUOTED = re.compile(r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'")
_UNQUOTED_ATTRIBUTE = re.compile(r"\[\s*[-\w|]+\s*[~|^$*]?=\s*(?P<value>[^\]'\"\s]+)")
_ID_SELECTOR = re.compile(r"#(?P<name>-?[_a-zA-Z][-\w]*)")
_CLASS_SELECTOR = re.compile(r"\.(?P<name>-?[_a-zA-Z][-\w]*)")
_QUALIFIED = re.compile(r"(?:^|(?<=[\s>+~(,]))(?P<element>[a-zA-Z][\w-]*)(?=[.#])")
_COMBINATOR = re.compile(r"\s*[>+~]\s*|\s+")


def mask_value(value: str) -> str:
    """Blank out strings and url(...) bodies so value checks skip them."""
    out = re.sub(r"url\([^)]*\)", lambda m: " " * len(m.group()), value, flags=re.IGNORECASE)
    out = re.sub(r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'", lambda m: " " * len(m.group()), out)
    return out


def mask_selector(selector: str, parens: bool = False, fill: str = " ") -> str:
    """Blank out strings and bracketed parts with fill, keeping offsets."""
    closers = {"[": "]", "(": ")"} if parens else {"[": "]"}
    out: list[str] = []
    stack: list[str] = []
    quote: str | None = None
    for ch in selector:
        if quote:
            out.append(fill)
            if ch == quote:
                quote = None
            continue
        if ch in {'"', "'"}:
            quote = ch
            out.append(fill)
            continue
        if ch in closers:
            stack.append(closers[ch])
            out.append(ch)
            continue
        if stack and ch == stack[-1]:
            stack.pop()
            out.append(ch)
            continue
        out.append(fill if stack else ch)
    return "".join(out)


def compound_count(selector: str) -> int:
    masked = mask_selector(selector, parens=True, fill="_").strip()
    return len([part for part in _COMBINATOR.split(masked) if part])


@register
class SelectorPerLineRule(Rule):
    id = "css-selector-per-line"
    language = "css"
    description = "Each selector in a group goes on its own line"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        source = document.source
        for rule in document.style_rules():
            for previous, selector in zip(rule.selectors, rule.selectors[1:]):
                if source.line_of(previous.offset) == source.line_of(selector.offset):
                    yield self.finding(document, selector.offset, f"Put selector '{selector.text}' on its own line")


@register
class SpaceBeforeBraceRule(Rule):
    id = "css-space-before-brace"
    language = "css"
    description = "Exactly one space before the opening brace"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for rule in document.rules:
            if not rule.prelude:
                continue
            start = rule.open_brace
            while start > 0 and document.text[start - 1].isspace():
                start -= 1
            gap = document.text[start:rule.open_brace]
            if "\n" in gap:
                yield self.finding(document, rule.open_brace, "Opening brace belongs on the selector line")
            elif gap != " ":
                yield self.finding(document, rule.open_brace, "Use exactly one space before '{'")


@register
class ColonSpaceRule(Rule):
    id = "css-colon-space"
    language = "css"
    description = "No space before and one space after a declaration colon"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        text = document.text
        for rule in document.rules:
            for declaration in rule.declarations:
                if text[declaration.offset + len(declaration.property):declaration.colon_offset]:
                    yield self.finding(document, declaration.colon_offset, "Remove space before ':'")
                if not declaration.value:
                    continue
                gap = text[declaration.colon_offset + 1:declaration.value_offset]
                if "\n" in gap:
                    continue
                if gap != " ":
                    yield self.finding(document, declaration.colon_offset, "Use one space after ':'")


@register
class TrailingSemicolonRule(Rule):
    id = "css-trailing-semicolon"
    language = "css"
    description = "Every declaration ends with a semicolon"
    default_severity = "error"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for rule in document.rules:
            for declaration in rule.declarations:
                if not declaration.has_semicolon:
                    yield self.finding(
                        document,
                        declaration.end,
                        f"End the '{declaration.property}' declaration with a semicolon",
                    )


@register
class DeclarationPerLineRule(Rule):
    id = "css-declaration-per-line"
    language = "css"
    description = "One declaration per line in multi-declaration rules"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        source = document.source
        for rule in document.rules:
            if len(rule.declarations) < 2:
                continue
            previous_line = source.line_of(rule.open_brace)
            for declaration in rule.declarations:
                line = source.line_of(declaration.offset)
                if line == previous_line:
                    yield self.finding(
                        document,
                        declaration.offset,
                        f"Put the '{declaration.property}' declaration on its own line",
                    )
                previous_line = source.line_of(declaration.end)


def _hex_colors(rule: CssRule) -> Iterator[tuple[int, str]]:
    for declaration in rule.declarations:
        for match in _HEX.finditer(mask_value(declaration.value)):
            yield declaration.value_offset + match.start(), match.group("hex")


@register
class HexCaseRule(Rule):
    id = "css-hex-case"
    language = "css"
    description = "Hex colors are lowercase"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for rule in document.rules:
            for offset, digits in _hex_colors(rule):
                if digits != digits.lower():
                    yield self.finding(document, offset, f"Use lowercase hex color '#{digits.lower()}'")


@register
class HexShorthandRule(Rule):
    id = "css-hex-shorthand"
    language = "css"
    description = "Hex colors use shorthand where possible"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for rule in document.rules:
            for offset, digits in _hex_colors(rule):
                if len(digits) != 6:
                    continue
                lowered = digits.lower()
                if lowered[0] == lowered[1] and lowered[2] == lowered[3] and lowered[4] == lowered[5]:
                    short = lowered[0] + lowered[2] + lowered[4]
                    yield self.finding(document, offset, f"Use shorthand hex color '#{short}'")


@register
class ZeroUnitsRule(Rule):
    id = "css-zero-units"
    language = "css"
    description = "No units on zero lengths"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for rule in document.rules:
            for declaration in rule.declarations:
                for match in _ZERO_UNIT.finditer(mask_value(declaration.value)):
                    yield self.finding(
                        document,
                        declaration.value_offset + match.start(),
                        f"Omit the unit on zero values ('0' not '{match.group()}')",
                    )


@register
class LeadingZeroRule(Rule):
    id = "css-leading-zero"
    language = "css"
    description = "No leading zero before decimal values"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for rule in document.rules:
            for declaration in rule.declarations:
                for match in _LEADING_ZERO.finditer(mask_value(declaration.value)):
                    yield self.finding(
                        document,
                        declaration.value_offset + match.start(),
                        "Omit the leading zero in decimal values",
                    )


def _single_quoted(text: str) -> Iterator[re.Match[str]]:
    for match in _QUOTED.finditer(text):
        if match.group().startswith("'"):
            yield match


@register
class DoubleQuotesRule(Rule):
    id = "css-double-quotes"
    language = "css"
    description = "Strings and attribute selector values use double quotes"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for rule in document.rules:
            for selector in rule.selectors:
                for match in _single_quoted(selector.text):
                    yield self.finding(document, selector.offset + match.start(), "Use double quotes in selectors")
                for match in _UNQUOTED_ATTRIBUTE.finditer(selector.text):
                    yield self.finding(
                        document,
                        selector.offset + match.start("value"),
                        "Quote attribute selector values with double quotes",
                    )
            for declaration in rule.declarations:
                for match in _single_quoted(declaration.value):
                    yield self.finding(
                        document,
                        declaration.value_offset + match.start(),
                        "Use double quotes for strings",
                    )
        for statement in document.statements:
            for match in _single_quoted(statement.text):
                yield self.finding(document, statement.offset + match.start(), "Use double quotes for strings")


def _selectors(document: Stylesheet) -> Iterator[CssSelector]:
    for rule in document.style_rules():
        yield from rule.selectors


@register
class NoIdSelectorRule(Rule):
    id = "css-no-id-selector"
    language = "css"
    description = "No ID selectors; keep specificity low with classes"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for selector in _selectors(document):
            for match in _ID_SELECTOR.finditer(mask_selector(selector.text)):
                yield self.finding(
                    document,
                    selector.offset + match.start(),
                    f"Avoid ID selector '#{match.group('name')}'",
                )


@register
class NoImportantRule(Rule):
    id = "css-no-important"
    language = "css"
    description = "No !important declarations"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for rule in document.rules:
            for declaration in rule.declarations:
                if declaration.important:
                    yield self.finding(
                        document,
                        declaration.value_offset + declaration.value.find("!"),
                        f"Avoid !important on '{declaration.property}'",
                    )


@register
class QualifiedSelectorRule(Rule):
    id = "css-qualified-selector"
    language = "css"
    description = "Classes and IDs are not qualified with element names"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for selector in _selectors(document):
            masked = mask_selector(selector.text)
            for match in _QUALIFIED.finditer(masked):
                yield self.finding(
                    document,
                    selector.offset + match.start("element"),
                    f"Do not qualify selectors with element '{match.group('element')}'",
                )


@register
class SelectorDepthRule(Rule):
    id = "css-selector-depth"
    language = "css"
    description = "Selectors have at most max_selector_depth compound parts"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        for selector in _selectors(document):
            depth = compound_count(selector.text)
            if depth > config.max_selector_depth:
                yield self.finding(
                    document,
                    selector.offset,
                    f"Selector is {depth} levels deep (max {config.max_selector_depth})",
                )


@register
class BemClassRule(Rule):
    id = "css-bem-class"
    language = "css"
    description = "Class selectors follow BEM (block__element--modifier)"

    def check(self, document: Stylesheet, config: LintConfig) -> Iterator[Finding]:
        pattern = bem_regex(config)
        for selector in _selectors(document):
            for match in _CLASS_SELECTOR.finditer(mask_selector(selector.text)):
                name = match.group("name")
                if not pattern.match(name):
                    yield self.finding(
                        document,
                        selector.offset + match.start(),
                        f"Class '.{name}' does not follow BEM naming",
                    )
