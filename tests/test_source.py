"""Tests for source positions and suppression directives."""

import unittest

from guidelint.parse.source import SourceText, collect_directives


class TestSourceText(unittest.TestCase):
    def test_position_is_one_based(self) -> None:
        source = SourceText("ab\ncd\n")
        self.assertEqual(source.position(0), (1, 1))
        self.assertEqual(source.position(4), (2, 2))
        self.assertEqual(source.position(6), (3, 1))

    def test_normalizes_line_endings(self) -> None:
        source = SourceText("a\r\nb\rc")
        self.assertEqual(source.text, "a\nb\nc")
        self.assertEqual(source.lines, ["a", "b", "c"])

    def test_embedded_positions_map_to_host(self) -> None:
        host = SourceText("xx\n<style>\na{}\n</style>")
        start = host.text.index("<style>") + len("<style>")
        end = host.text.index("</style>")
        sub = host.embedded(start, end)
        self.assertEqual(sub.text, "\na{}\n")
        self.assertEqual(sub.position(1), (3, 1))

    def test_offset_at_matches_position(self) -> None:
        source = SourceText("one\ntwo\nthree\n")
        offset = source.offset_at(3, 2)
        self.assertEqual(source.text[offset], "r")
        self.assertEqual(source.position(offset), (3, 3))


class TestDirectives(unittest.TestCase):
    def test_disable_next_line_for_rule(self) -> None:
        body = " guidelint-disable-next-line foo-bar "
        source = SourceText(f"/*{body}*/\nx\ny\n")
        directives = collect_directives(source, [(2, body)])
        self.assertTrue(directives.suppresses("foo-bar", 2))
        self.assertFalse(directives.suppresses("other-rule", 2))
        self.assertFalse(directives.suppresses("foo-bar", 3))

    def test_disable_line_without_ids_suppresses_everything(self) -> None:
        body = " guidelint-disable-line "
        source = SourceText(f"x /*{body}*/\n")
        directives = collect_directives(source, [(4, body)])
        self.assertTrue(directives.suppresses("anything", 1))
        self.assertFalse(directives.suppresses("anything", 2))

    def test_disable_file(self) -> None:
        source = SourceText("<!-- guidelint-disable-file -->\n")
        directives = collect_directives(source, [(4, " guidelint-disable-file ")])
        self.assertTrue(directives.suppresses("html-lang", 10))

    def test_disable_file_for_listed_rules(self) -> None:
        body = " guidelint-disable-file css-no-id-selector, css-no-important "
        source = SourceText(f"/*{body}*/\n")
        directives = collect_directives(source, [(2, body)])
        self.assertTrue(directives.suppresses("css-no-important", 5))
        self.assertFalse(directives.suppresses("css-bem-class", 5))

    def test_merge_keeps_blanket_suppression(self) -> None:
        source = SourceText("a\nb\n")
        first = collect_directives(source, [(0, "guidelint-disable-line")])
        second = collect_directives(source, [(0, "guidelint-disable-line js-quotes")])
        second.merge(first)
        self.assertTrue(second.suppresses("css-bem-class", 1))


if __name__ == "__main__":
    unittest.main()
