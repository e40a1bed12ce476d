"""Best-effort HTML scanning.

The document is streamed through the standard library parser. The raw
spelling of tags and attributes (case, quoting) is recovered from the
start-tag text, since the parser lowercases names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser

from .source import Finding, SourceText

# HTML void elements (no end tag in normal HTML)
VOID_TAGS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}

# Elements whose text content is whitespace-sensitive
VERBATIM_TAGS = {"pre", "textarea"}

JS_SCRIPT_TYPES = {
    "",
    "module",
    "text/javascript",
    "application/javascript",
    "text/ecmascript",
    "application/ecmascript",
}

_TAG_NAME = re.compile(r"<\s*(?P<name>[^\s/>]+)")
_ATTRIBUTE = re.compile(
    r"""(?P<name>[^\s"'>/=]+)"""
    r"""(?:\s*=\s*(?P<value>"[^"]*"|'[^']*'|[^\s"'=<>`]+))?"""
)


@dataclass(frozen=True)
class HtmlAttribute:
    raw_name: str
    value: str | None
    quote: str
    offset: int

    @property
    def name(self) -> str:
        return self.raw_name.lower()


@dataclass
class HtmlTag:
    name: str
    raw_name: str
    offset: int
    raw: str
    attributes: list[HtmlAttribute] = field(default_factory=list)
    self_closing: bool = False

    def get(self, name: str) -> str | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value if attribute.value is not None else ""
        return None

    def has(self, name: str) -> bool:
        return any(attribute.name == name for attribute in self.attributes)


@dataclass(frozen=True)
class EmbeddedBlock:
    """Code embedded in a <style> or <script> element body."""

    language: str
    start: int
    end: int


@dataclass(frozen=True)
class Comment:
    offset: int
    end: int
    body: str
    body_offset: int


@dataclass
class HtmlDocument:
    source: SourceText
    tags: list[HtmlTag] = field(default_factory=list)
    end_tags: list[tuple[str, int]] = field(default_factory=list)
    doctype: str | None = None
    doctype_offset: int | None = None
    comments: list[Comment] = field(default_factory=list)
    blocks: list[EmbeddedBlock] = field(default_factory=list)
    verbatim_ranges: list[tuple[int, int]] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)

    language = "html"

    @property
    def first_content_offset(self) -> int | None:
        """Offset of the first non-whitespace character, or None for a blank document."""
        stripped = self.source.text.lstrip()
        if not stripped:
            return None
        return len(self.source.text) - len(stripped)

    def find(self, name: str) -> list[HtmlTag]:
        return [tag for tag in self.tags if tag.name == name]

    def comment_bodies(self) -> list[tuple[int, str]]:
        return [(c.body_offset, c.body) for c in self.comments]

    def skipped_ranges(self) -> list[tuple[int, int]]:
        """Ranges where indentation is not the author's to choose."""
        return self.verbatim_ranges + [(c.offset, c.end) for c in self.comments]


def parse_attributes(raw: str, base_offset: int) -> tuple[str, list[HtmlAttribute]]:
    """Split raw start-tag text into its raw tag name and attributes."""
    name_match = _TAG_NAME.match(raw)
    if not name_match:
        return "", []
    body_end = len(raw) - 1 if raw.endswith(">") else len(raw)
    attributes: list[HtmlAttribute] = []
    for match in _ATTRIBUTE.finditer(raw, name_match.end(), body_end):
        value = match.group("value")
        quote = ""
        if value is not None and value[:1] in {'"', "'"}:
            quote = value[0]
            value = value[1:-1]
        attributes.append(HtmlAttribute(
            raw_name=match.group("name"),
            value=value,
            quote=quote,
            offset=base_offset + match.start(),
        ))
    return name_match.group("name"), attributes


def scan_html(source: SourceText) -> HtmlDocument:
    """Scan HTML into tags, comments and embedded blocks."""
    document = HtmlDocument(source=source)
    parser = _ScanningHTMLParser(document)
    try:
        parser.feed(source.text)
        parser.close()
    except Exception as e:
        # Keep everything gathered so far; report the failure as a finding.
        line, column = parser.getpos()
        document.findings.append(Finding(
            rule="parse-error",
            line=line,
            column=column + 1,
            message=f"HTML could not be fully parsed: {e}",
        ))
    return document


class _ScanningHTMLParser(HTMLParser):
    """Streaming scanner that records tags with their absolute offsets."""

    def __init__(self, document: HtmlDocument) -> None:
        super().__init__(convert_charrefs=True)
        self.document = document
        self._open_blocks: dict[str, tuple[str | None, int]] = {}
        self._open_verbatim: dict[str, list[int]] = {}

    def _offset(self) -> int:
        line, column = self.getpos()
        return self.document.source.offset_at(line, column)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._record_tag(tag, self_closing=False)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._record_tag(tag, self_closing=True)

    def _record_tag(self, tag: str, self_closing: bool) -> None:
        offset = self._offset()
        raw = self.get_starttag_text() or f"<{tag}>"
        raw_name, attributes = parse_attributes(raw, offset)
        html_tag = HtmlTag(
            name=tag.lower(),
            raw_name=raw_name or tag,
            offset=offset,
            raw=raw,
            attributes=attributes,
            self_closing=self_closing or raw.rstrip().endswith("/>"),
        )
        self.document.tags.append(html_tag)

        if html_tag.self_closing:
            return
        content_start = offset + len(raw)
        if html_tag.name == "style":
            self._open_blocks["style"] = ("css", content_start)
        elif html_tag.name == "script":
            script_type = (html_tag.get("type") or "").strip().lower()
            language = "js" if script_type in JS_SCRIPT_TYPES else None
            self._open_blocks["script"] = (language, content_start)
        elif html_tag.name in VERBATIM_TAGS:
            self._open_verbatim.setdefault(html_tag.name, []).append(offset)

    def handle_endtag(self, tag: str) -> None:
        offset = self._offset()
        tag_l = tag.lower()
        raw_name = self.document.source.text[offset + 2:offset + 2 + len(tag)] or tag
        self.document.end_tags.append((raw_name, offset))

        if tag_l in self._open_blocks:
            language, start = self._open_blocks.pop(tag_l)
            if language and self.document.source.text[start:offset].strip():
                self.document.blocks.append(EmbeddedBlock(language=language, start=start, end=offset))
        elif self._open_verbatim.get(tag_l):
            start = self._open_verbatim[tag_l].pop()
            self.document.verbatim_ranges.append((start, offset))

    def handle_decl(self, decl: str) -> None:
        if decl.lower().startswith("doctype") and self.document.doctype is None:
            self.document.doctype = decl
            self.document.doctype_offset = self._offset()

    def handle_comment(self, data: str) -> None:
        offset = self._offset()
        end = offset + len(data) + 7
        self.document.comments.append(Comment(offset=offset, end=end, body=data, body_offset=offset + 4))
