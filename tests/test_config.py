"""Tests for config persistence and input sanitization.

Validates viewer preference keys round-trip through the JSON file.
Ensures malformed config data is safely normalized on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyscroll import config
from lazyscroll.viewport import ViewportOptions


class ConfigBehaviorTests(unittest.TestCase):
    def test_viewport_options_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("lazyscroll.config.CONFIG_PATH", config_path):
                config.save_viewport_options(ViewportOptions(wrap=False, number=True))
                loaded = config.load_viewport_options()

            self.assertEqual(loaded, ViewportOptions(wrap=False, number=True))
            self.assertTrue(config_path.exists())

    def test_missing_config_uses_given_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyscroll.config.CONFIG_PATH", config_path):
                loaded = config.load_viewport_options(ViewportOptions(wrap=False, number=False))

            self.assertEqual(loaded, ViewportOptions(wrap=False, number=False))

    def test_non_boolean_option_values_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyscroll.config.CONFIG_PATH", config_path):
                config.save_config({"wrap": "no", "number": 0})
                loaded = config.load_viewport_options()

            self.assertEqual(loaded, ViewportOptions(wrap=True, number=True))

    def test_malformed_json_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("lazyscroll.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

            config_path.write_text("[1, 2]\n", encoding="utf-8")
            with mock.patch("lazyscroll.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_theme_and_style_names_are_stripped_and_validated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyscroll.config.CONFIG_PATH", config_path):
                config.save_theme_name("  ocean ")
                config.save_style_name("   ")
                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertIsNone(config.load_style_name())

                config.save_config({"theme": 3, "style": "friendly"})
                self.assertIsNone(config.load_theme_name())
                self.assertEqual(config.load_style_name(), "friendly")

    def test_save_preserves_unrelated_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyscroll.config.CONFIG_PATH", config_path):
                config.save_theme_name("ocean")
                config.save_viewport_options(ViewportOptions(wrap=True, number=False))
                saved = config.load_config()

            self.assertEqual(saved, {"theme": "ocean", "wrap": True, "number": False})


if __name__ == "__main__":
    unittest.main()
