"""Tests for config loading and validation."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from guidelint.config import (
    CONFIG_ENV_VAR,
    DEFAULT_EXCLUDE,
    ConfigError,
    LintConfig,
    find_config,
    load_config,
)


class TestLintConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = LintConfig()
        self.assertEqual(config.indent_size, 2)
        self.assertEqual(config.max_selector_depth, 3)
        self.assertEqual(config.js_quotes, "auto")
        self.assertTrue(config.allow_loose_null_equality)
        self.assertEqual(config.exclude, DEFAULT_EXCLUDE)

    def test_exclude_default_is_a_copy(self) -> None:
        config = LintConfig()
        config.exclude.append("tmp")
        self.assertNotIn("tmp", DEFAULT_EXCLUDE)

    def test_severity_for(self) -> None:
        config = LintConfig(rules={"css-no-id-selector": "error", "js-quotes": "off"})
        self.assertEqual(config.severity_for("css-no-id-selector", "warning"), "error")
        self.assertIsNone(config.severity_for("js-quotes", "warning"))
        self.assertEqual(config.severity_for("html-lang", "warning"), "warning")

    def test_rejects_unknown_keys_and_values(self) -> None:
        with self.assertRaises(ValidationError):
            LintConfig.model_validate({"indent": 4})
        with self.assertRaises(ValidationError):
            LintConfig.model_validate({"rules": {"js-quotes": "fatal"}})
        with self.assertRaises(ValidationError):
            LintConfig.model_validate({"indent_size": 0})

    def test_rejects_invalid_bem_pattern(self) -> None:
        with self.assertRaises(ValidationError):
            LintConfig(bem_pattern="([a-z")

    def test_fingerprint_tracks_settings(self) -> None:
        self.assertEqual(LintConfig().cache_fingerprint(), LintConfig().cache_fingerprint())
        self.assertNotEqual(
            LintConfig().cache_fingerprint(),
            LintConfig(indent_size=4).cache_fingerprint(),
        )


class TestLoadConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self._env = patch.dict(os.environ)
        self._env.start()
        os.environ.pop(CONFIG_ENV_VAR, None)

    def tearDown(self) -> None:
        self._env.stop()
        self._tmp.cleanup()

    def _write(self, name: str, data) -> Path:
        path = self.root / name
        path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
        return path

    def test_explicit_path(self) -> None:
        path = self._write("custom.json", {"indent_size": 4})
        self.assertEqual(load_config(path).indent_size, 4)

    def test_discovery_walks_up(self) -> None:
        self._write("guidelint.json", {"js_quotes": "single"})
        nested = self.root / "src" / "app"
        nested.mkdir(parents=True)
        self.assertEqual(find_config(nested), (self.root / "guidelint.json").resolve())
        self.assertEqual(load_config(start=nested).js_quotes, "single")

    def test_hidden_config_name(self) -> None:
        self._write(".guidelint.json", {"max_selector_depth": 5})
        self.assertEqual(load_config(start=self.root).max_selector_depth, 5)

    def test_env_var(self) -> None:
        path = self._write("env.json", {"allow_loose_null_equality": False})
        os.environ[CONFIG_ENV_VAR] = str(path)
        self.assertFalse(load_config(start=self.root).allow_loose_null_equality)

    def test_missing_explicit_file(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.root / "nope.json")

    def test_invalid_json(self) -> None:
        path = self._write("guidelint.json", "{not json")
        with self.assertRaises(ConfigError) as ctx:
            load_config(path)
        self.assertIn("Invalid JSON", str(ctx.exception))

    def test_non_object(self) -> None:
        path = self._write("guidelint.json", [1, 2])
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_validation_error_is_wrapped(self) -> None:
        path = self._write("guidelint.json", {"rules": {"js-quotes": "loud"}})
        with self.assertRaises(ConfigError):
            load_config(path)


if __name__ == "__main__":
    unittest.main()
