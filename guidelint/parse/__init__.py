"""Lightweight scanners for HTML, CSS and JavaScript."""

from .css_scan import Stylesheet, scan_css
from .html_scan import HtmlDocument, scan_html
from .js_scan import JsTokens, tokenize_js
from .source import Finding, SourceText, collect_directives

__all__ = [
    "Finding",
    "SourceText",
    "collect_directives",
    "HtmlDocument",
    "scan_html",
    "Stylesheet",
    "scan_css",
    "JsTokens",
    "tokenize_js",
]
