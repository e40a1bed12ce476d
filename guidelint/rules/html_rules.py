"""HTML authoring conventions: syntax, attribute order and naming."""

from __future__ import annotations

from collections.abc import Iterator

from ..config import LintConfig
from ..parse.html_scan import VOID_TAGS, HtmlAttribute, HtmlDocument, HtmlTag
from ..parse.source import Finding
from .base import Rule, bem_regex, register

BOOLEAN_ATTRIBUTES = {
    "allowfullscreen",
    "async",
    "autofocus",
    "autoplay",
    "checked",
    "controls",
    "default",
    "defer",
    "disabled",
    "formnovalidate",
    "hidden",
    "inert",
    "ismap",
    "itemscope",
    "loop",
    "multiple",
    "muted",
    "nomodule",
    "novalidate",
    "open",
    "playsinline",
    "readonly",
    "required",
    "reversed",
    "selected",
}

# SVG keeps mixed-case names that HTML parsers fold; these are correct as written.
SVG_MIXED_CASE = {
    "attributename",
    "basefrequency",
    "clippath",
    "clippathunits",
    "feblend",
    "fecolormatrix",
    "fegaussianblur",
    "feoffset",
    "foreignobject",
    "gradienttransform",
    "gradientunits",
    "lineargradient",
    "markerheight",
    "markerunits",
    "markerwidth",
    "maskcontentunits",
    "maskunits",
    "pathlength",
    "patterncontentunits",
    "patterntransform",
    "patternunits",
    "preserveaspectratio",
    "radialgradient",
    "refx",
    "refy",
    "repeatcount",
    "spreadmethod",
    "stddeviation",
    "textlength",
    "textpath",
    "viewbox",
}

# Attribute order for readability: class first, then identifiers, data, and so on.
ATTRIBUTE_GROUPS = [
    ("class",),
    ("id", "name"),
    ("data-*",),
    ("src", "for", "type", "href", "value"),
    ("title", "alt"),
    ("role", "aria-*"),
]

DEFAULT_STYLE_TYPES = {"text/css"}
DEFAULT_SCRIPT_TYPES = {"text/javascript", "application/javascript"}


def attribute_rank(name: str) -> int:
    """Position of an attribute in the preferred order; unlisted names get len(ATTRIBUTE_GROUPS)."""
    for rank, group in enumerate(ATTRIBUTE_GROUPS):
        for pattern in group:
            if pattern.endswith("*"):
                if name.startswith(pattern[:-1]):
                    return rank
            elif name == pattern:
                return rank
    return len(ATTRIBUTE_GROUPS)


@register
class DoctypeRule(Rule):
    id = "html-doctype"
    language = "html"
    description = "Documents start with the HTML5 doctype <!DOCTYPE html>"
    default_severity = "error"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        html_tags = document.find("html")
        if not html_tags:
            return
        if document.doctype is None or document.doctype_offset is None:
            yield self.finding(document, html_tags[0].offset, "Missing <!DOCTYPE html>")
            return
        if document.doctype.lower().split() != ["doctype", "html"]:
            yield self.finding(
                document,
                document.doctype_offset,
                f"Use the HTML5 doctype <!DOCTYPE html>, not <!{document.doctype}>",
            )
        first = document.first_content_offset
        leading_comment = any(c.offset == first for c in document.comments)
        if document.tags and document.tags[0].offset < document.doctype_offset:
            yield self.finding(document, document.doctype_offset, "Doctype must precede all elements")
        elif first is not None and first < document.doctype_offset and not leading_comment:
            yield self.finding(document, document.doctype_offset, "Doctype must precede all content")


@register
class LangRule(Rule):
    id = "html-lang"
    language = "html"
    description = "The <html> element declares a lang attribute"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        for tag in document.find("html"):
            if not (tag.get("lang") or "").strip():
                yield self.finding(document, tag.offset, "Add a lang attribute to <html>")


@register
class CharsetRule(Rule):
    id = "html-charset"
    language = "html"
    description = "Documents with a <head> declare <meta charset>"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        heads = document.find("head")
        if not heads:
            return
        if any(meta.has("charset") for meta in document.find("meta")):
            return
        yield self.finding(document, heads[0].offset, 'Declare the encoding with <meta charset="utf-8">')


@register
class LowercaseRule(Rule):
    id = "html-lowercase"
    language = "html"
    description = "Element and attribute names are lowercase"
    default_severity = "error"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        for tag in document.tags:
            if _is_mixed(tag.raw_name):
                yield self.finding(document, tag.offset + 1, f"Element name '{tag.raw_name}' should be lowercase")
            for attribute in tag.attributes:
                if _is_mixed(attribute.raw_name):
                    yield self.finding(
                        document,
                        attribute.offset,
                        f"Attribute name '{attribute.raw_name}' should be lowercase",
                    )
        for raw_name, offset in document.end_tags:
            if _is_mixed(raw_name):
                yield self.finding(document, offset + 2, f"Element name '{raw_name}' should be lowercase")


def _is_mixed(name: str) -> bool:
    return name != name.lower() and name.lower() not in SVG_MIXED_CASE


@register
class DoubleQuotesRule(Rule):
    id = "html-double-quotes"
    language = "html"
    description = "Attribute values are wrapped in double quotes"
    default_severity = "error"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        for tag in document.tags:
            for attribute in tag.attributes:
                if attribute.value is None or attribute.quote == '"':
                    continue
                if attribute.quote == "'":
                    message = f"Use double quotes for the value of '{attribute.name}'"
                else:
                    message = f"Quote the value of '{attribute.name}' with double quotes"
                yield self.finding(document, attribute.offset, message)


@register
class BooleanAttributeRule(Rule):
    id = "html-boolean-attribute"
    language = "html"
    description = "Boolean attributes are written without a value"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        for tag in document.tags:
            for attribute in tag.attributes:
                if attribute.name not in BOOLEAN_ATTRIBUTES or attribute.value is None:
                    continue
                if attribute.name == "hidden" and attribute.value.lower() == "until-found":
                    continue
                yield self.finding(
                    document,
                    attribute.offset,
                    f"Boolean attribute '{attribute.name}' should not have a value",
                )


@register
class VoidSlashRule(Rule):
    id = "html-void-slash"
    language = "html"
    description = "Void elements omit the trailing slash"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        for tag in document.tags:
            if tag.name in VOID_TAGS and tag.raw.rstrip().endswith("/>"):
                yield self.finding(
                    document,
                    tag.offset + tag.raw.rfind("/"),
                    f"Omit the trailing slash on <{tag.name}>",
                )


@register
class TypeAttributeRule(Rule):
    id = "html-type-attribute"
    language = "html"
    description = "No default type attribute on stylesheets and scripts"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        for tag in document.tags:
            attribute = _attribute(tag, "type")
            if attribute is None or attribute.value is None:
                continue
            value = attribute.value.strip().lower()
            if tag.name == "link":
                rel = (tag.get("rel") or "").lower().split()
                if "stylesheet" in rel and value in DEFAULT_STYLE_TYPES:
                    yield self.finding(document, attribute.offset, "Omit type on stylesheet links")
            elif tag.name == "style" and value in DEFAULT_STYLE_TYPES:
                yield self.finding(document, attribute.offset, "Omit type on <style>")
            elif tag.name == "script" and value in DEFAULT_SCRIPT_TYPES:
                yield self.finding(document, attribute.offset, "Omit type on <script>; JavaScript is the default")


def _attribute(tag: HtmlTag, name: str) -> HtmlAttribute | None:
    for attribute in tag.attributes:
        if attribute.name == name:
            return attribute
    return None


@register
class AttributeOrderRule(Rule):
    id = "html-attribute-order"
    language = "html"
    description = "Attributes follow class, id/name, data-*, src/for/type/href/value, title/alt, role/aria-*"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        for tag in document.tags:
            highest: HtmlAttribute | None = None
            for attribute in tag.attributes:
                rank = attribute_rank(attribute.name)
                if rank == len(ATTRIBUTE_GROUPS):
                    continue
                if highest is not None and rank < attribute_rank(highest.name):
                    yield self.finding(
                        document,
                        attribute.offset,
                        f"Attribute '{attribute.name}' should come before '{highest.name}'",
                    )
                    break
                if highest is None or rank >= attribute_rank(highest.name):
                    highest = attribute


@register
class InlineStyleRule(Rule):
    id = "html-inline-style"
    language = "html"
    description = "No inline style attributes"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        for tag in document.tags:
            attribute = _attribute(tag, "style")
            if attribute is not None:
                yield self.finding(document, attribute.offset, "Avoid inline styles; use a class")


@register
class BemClassRule(Rule):
    id = "html-bem-class"
    language = "html"
    description = "Class names follow BEM (block__element--modifier)"

    def check(self, document: HtmlDocument, config: LintConfig) -> Iterator[Finding]:
        pattern = bem_regex(config)
        for tag in document.tags:
            attribute = _attribute(tag, "class")
            if attribute is None or not attribute.value:
                continue
            for name in attribute.value.split():
                # Template placeholders are not class names.
                if any(ch in name for ch in "{}<>$%"):
                    continue
                if not pattern.match(name):
                    yield self.finding(
                        document,
                        attribute.offset,
                        f"Class '{name}' does not follow BEM naming",
                    )
