"""Tests for CSS convention rules."""

import unittest

from guidelint.config import LintConfig
from guidelint.engine import lint_text
from guidelint.rules.css_rules import compound_count, mask_selector

CLEAN_STYLESHEET = """\
.card,
.card--wide {
  margin: 0 auto;
  color: #fff;
  opacity: .5;
}

.card__title { font-weight: 600; }

@media (min-width: 768px) {
  .card__title {
    font-size: 1.25rem;
  }
}

a[href^="http"] {
  text-decoration: underline;
}

@keyframes spin {
  from {
    opacity: 0;
  }
}
"""


def lint(text: str, **settings):
    return lint_text(text, "css", config=LintConfig(**settings)).violations


def rule_ids(text: str, **settings) -> list[str]:
    return [v.rule for v in lint(text, **settings)]


class TestHelpers(unittest.TestCase):
    def test_mask_selector_keeps_offsets(self) -> None:
        masked = mask_selector('a[href="#top"] .b')
        self.assertEqual(len(masked), len('a[href="#top"] .b'))
        self.assertNotIn("#", masked)

    def test_compound_count(self) -> None:
        self.assertEqual(compound_count(".a"), 1)
        self.assertEqual(compound_count(".a > .b + .c"), 3)
        self.assertEqual(compound_count(".a:not(.b .c)"), 1)


class TestCleanStylesheet(unittest.TestCase):
    def test_conventional_stylesheet_passes(self) -> None:
        self.assertEqual(lint(CLEAN_STYLESHEET), [])


class TestFormattingRules(unittest.TestCase):
    def test_selectors_on_one_line(self) -> None:
        self.assertEqual(rule_ids(".a, .b {\n  color: red;\n}\n"), ["css-selector-per-line"])

    def test_space_before_brace(self) -> None:
        self.assertEqual(rule_ids(".a{\n  color: red;\n}\n"), ["css-space-before-brace"])
        self.assertEqual(rule_ids(".a  {\n  color: red;\n}\n"), ["css-space-before-brace"])

    def test_brace_on_next_line(self) -> None:
        violations = lint(".a\n{\n  color: red;\n}\n")
        self.assertEqual([v.rule for v in violations], ["css-space-before-brace"])
        self.assertEqual(violations[0].message, "Opening brace belongs on the selector line")
        self.assertEqual((violations[0].line, violations[0].column), (2, 1))

    def test_colon_spacing(self) -> None:
        self.assertEqual(rule_ids(".a {\n  color:red;\n}\n"), ["css-colon-space"])
        self.assertEqual(rule_ids(".a {\n  color : red;\n}\n"), ["css-colon-space"])

    def test_missing_semicolon_is_an_error(self) -> None:
        violations = lint(".a {\n  color: red\n}\n")
        self.assertEqual([v.rule for v in violations], ["css-trailing-semicolon"])
        self.assertEqual(violations[0].severity, "error")
        self.assertEqual((violations[0].line, violations[0].column), (2, 13))

    def test_declarations_share_a_line(self) -> None:
        violations = lint(".a { color: red; top: 0; }\n")
        self.assertEqual([v.rule for v in violations], ["css-declaration-per-line"] * 2)

    def test_single_declaration_may_share_the_brace_line(self) -> None:
        self.assertEqual(rule_ids(".a { color: red; }\n"), [])


class TestValueRules(unittest.TestCase):
    def test_uppercase_hex(self) -> None:
        self.assertEqual(rule_ids(".a {\n  color: #FFF;\n}\n"), ["css-hex-case"])

    def test_hex_shorthand(self) -> None:
        violations = lint(".a {\n  color: #ff00ff;\n}\n")
        self.assertEqual([v.rule for v in violations], ["css-hex-shorthand"])
        self.assertIn("#f0f", violations[0].message)
        self.assertEqual(rule_ids(".a {\n  color: #123456;\n}\n"), [])

    def test_zero_units(self) -> None:
        self.assertEqual(rule_ids(".a {\n  margin: 0px;\n}\n"), ["css-zero-units"])
        self.assertEqual(rule_ids(".a {\n  margin: 10px;\n}\n"), [])

    def test_leading_zero(self) -> None:
        self.assertEqual(rule_ids(".a {\n  opacity: 0.5;\n}\n"), ["css-leading-zero"])
        self.assertEqual(rule_ids(".a {\n  width: 10.5px;\n}\n"), [])

    def test_leading_zero_on_negative_values(self) -> None:
        self.assertEqual(rule_ids(".a {\n  margin: -0.5em;\n}\n"), ["css-leading-zero"])
        self.assertEqual(rule_ids(".a {\n  margin: -.5em;\n}\n"), [])

    def test_values_inside_url_are_ignored(self) -> None:
        self.assertEqual(rule_ids('.a {\n  background: url("img/0.5px-#FFF.png");\n}\n'), [])

    def test_single_quoted_strings(self) -> None:
        self.assertEqual(rule_ids(".a {\n  font-family: 'Helvetica';\n}\n"), ["css-double-quotes"])
        self.assertEqual(rule_ids("@import 'base.css';\n"), ["css-double-quotes"])

    def test_apostrophes_inside_double_quoted_strings(self) -> None:
        css = ".a {\n  font-family: \"Bob's Font\", \"Ann's Font\";\n}\n"
        self.assertEqual(rule_ids(css), [])
        self.assertEqual(rule_ids("a[title=\"it's\"] {\n  color: red;\n}\n"), [])

    def test_unquoted_attribute_selector(self) -> None:
        self.assertEqual(rule_ids("input[type=text] {\n  color: red;\n}\n"), ["css-double-quotes"])

    def test_important(self) -> None:
        self.assertEqual(rule_ids(".a {\n  color: red !important;\n}\n"), ["css-no-important"])


class TestSelectorRules(unittest.TestCase):
    def test_id_selector(self) -> None:
        violations = lint("#main {\n  color: red;\n}\n")
        self.assertEqual([v.rule for v in violations], ["css-no-id-selector"])
        self.assertEqual(violations[0].message, "Avoid ID selector '#main'")

    def test_hash_inside_attribute_is_not_an_id(self) -> None:
        self.assertEqual(rule_ids('[href="#top"] {\n  color: red;\n}\n'), [])

    def test_qualified_selector(self) -> None:
        self.assertEqual(rule_ids("div.box {\n  color: red;\n}\n"), ["css-qualified-selector"])
        self.assertEqual(rule_ids(".nav a {\n  color: red;\n}\n"), [])

    def test_selector_depth(self) -> None:
        text = ".a .b .c .d {\n  color: red;\n}\n"
        self.assertEqual(rule_ids(text), ["css-selector-depth"])
        self.assertEqual(rule_ids(text, max_selector_depth=4), [])

    def test_bem_class_selector(self) -> None:
        self.assertEqual(rule_ids(".navBar {\n  color: red;\n}\n"), ["css-bem-class"])
        self.assertEqual(rule_ids(".nav_item {\n  color: red;\n}\n"), ["css-bem-class"])


class TestParseErrors(unittest.TestCase):
    def test_unclosed_block(self) -> None:
        violations = lint(".a {\n  color: red;\n")
        self.assertIn("parse-error", [v.rule for v in violations])
        self.assertTrue(all(v.severity == "error" for v in violations if v.rule == "parse-error"))

    def test_parse_errors_cannot_be_switched_off(self) -> None:
        violations = lint(".a {\n  color: red;\n", rules={"parse-error": "off"})
        self.assertIn("parse-error", [v.rule for v in violations])


if __name__ == "__main__":
    unittest.main()
