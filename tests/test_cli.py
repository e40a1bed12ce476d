"""Tests for the command-line interface."""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from guidelint.cli import EXIT_OK, EXIT_USAGE, EXIT_VIOLATIONS, main


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.config = self.root / "guidelint.json"
        self.config.write_text("{}", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write(self, name: str, text: str) -> Path:
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path

    def run_cli(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def check(self, *argv: str) -> tuple[int, str, str]:
        return self.run_cli("check", "--no-cache", "--config", str(self.config), *argv)


class TestCheck(CliTestCase):
    def test_clean_file(self) -> None:
        path = self.write("a.css", ".a {\n  color: red;\n}\n")
        code, out, _ = self.check(str(path))
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out, "No problems found in 1 files\n")

    def test_errors_fail(self) -> None:
        path = self.write("a.css", ".a {\n  color: red\n}\n")
        code, out, _ = self.check(str(path))
        self.assertEqual(code, EXIT_VIOLATIONS)
        self.assertIn(f"{path}:2:13: error [css-trailing-semicolon]", out)

    def test_warnings_pass_unless_strict(self) -> None:
        path = self.write("a.css", "#main {\n  color: red;\n}\n")
        self.assertEqual(self.check(str(path))[0], EXIT_OK)
        self.assertEqual(self.check("--strict", str(path))[0], EXIT_VIOLATIONS)

    def test_json_format(self) -> None:
        path = self.write("a.js", "if (a == b) {\n  run();\n}\n")
        code, out, _ = self.check("--format", "json", str(path))
        self.assertEqual(code, EXIT_VIOLATIONS)
        payload = json.loads(out)
        self.assertEqual(payload["summary"]["errors"], 1)
        self.assertEqual(payload["files"][0]["violations"][0]["rule"], "js-strict-equality")

    def test_html_output_file(self) -> None:
        path = self.write("a.css", ".a {\n  color: red;\n}\n")
        output = self.root / "report.html"
        code, out, _ = self.check("--format", "html", "--output", str(output), str(path))
        self.assertEqual(code, EXIT_OK)
        self.assertIn("Report written", out)
        self.assertIn("No problems found in 1 files", out)
        self.assertTrue(output.read_text(encoding="utf-8").startswith("<!DOCTYPE html>"))

    def test_unwritable_output(self) -> None:
        path = self.write("a.css", ".a {\n  color: red;\n}\n")
        output = path / "report.json"
        code, _, err = self.check("--format", "json", "--output", str(output), str(path))
        self.assertEqual(code, EXIT_USAGE)
        self.assertTrue(err.startswith("Error: cannot write report"))

    def test_config_severity_override(self) -> None:
        self.config.write_text(json.dumps({"rules": {"css-no-id-selector": "error"}}), encoding="utf-8")
        path = self.write("a.css", "#main {\n  color: red;\n}\n")
        self.assertEqual(self.check(str(path))[0], EXIT_VIOLATIONS)

    def test_invalid_config(self) -> None:
        self.config.write_text('{"indent_size": "wide"}', encoding="utf-8")
        path = self.write("a.css", ".a {\n  color: red;\n}\n")
        code, _, err = self.check(str(path))
        self.assertEqual(code, EXIT_USAGE)
        self.assertTrue(err.startswith("Error: "))

    def test_missing_path(self) -> None:
        code, _, err = self.check(str(self.root / "missing.css"))
        self.assertEqual(code, EXIT_USAGE)
        self.assertIn("missing.css", err)

    def test_unsupported_file(self) -> None:
        path = self.write("notes.txt", "hello\n")
        self.assertEqual(self.check(str(path))[0], EXIT_USAGE)


class TestRulesCommand(CliTestCase):
    def test_lists_catalogue(self) -> None:
        code, out, _ = self.run_cli("rules")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("css-no-id-selector", out)
        self.assertIn("indent-spaces", out)

    def test_language_filter(self) -> None:
        _, out, _ = self.run_cli("rules", "--language", "js")
        self.assertIn("js-strict-equality", out)
        self.assertNotIn("css-", out)


class TestCacheCommand(CliTestCase):
    def test_info_and_clear(self) -> None:
        cache_dir = self.root / "cache"
        with patch("guidelint.config.CACHE_DIR", cache_dir):
            code, out, _ = self.run_cli("cache")
            self.assertEqual(code, EXIT_OK)
            self.assertIn("Cached results: 0", out)

            code, out, _ = self.run_cli("cache", "--clear")
            self.assertEqual(code, EXIT_OK)
            self.assertIn(f"Cleared cache: {cache_dir}", out)


if __name__ == "__main__":
    unittest.main()
