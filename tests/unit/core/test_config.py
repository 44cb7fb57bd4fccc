from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from repoview import config
from repoview.limits import DEFAULT_SYNTAX_MAX_LINES, STATUS_POLL_SECONDS


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("repoview.config.CONFIG_PATH", Path(tmp) / "absent.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_settings(), config.Settings())

    def test_malformed_json_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("repoview.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertFalse(config.load_show_hidden())
                self.assertTrue(config.load_dark_theme())

    def test_non_object_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2]", encoding="utf-8")
            with mock.patch("repoview.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_saved_preferences_round_trip_and_keep_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("repoview.config.CONFIG_PATH", config_path):
                config.save_config({"syntax_max_lines": 50})
                config.save_show_hidden(True)
                config.save_dark_theme(False)

                settings = config.load_settings()
                self.assertTrue(settings.show_hidden)
                self.assertFalse(settings.dark_theme)
                self.assertEqual(settings.syntax_max_lines, 50)

    def test_invalid_numeric_values_use_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("repoview.config.CONFIG_PATH", config_path):
                for poll, max_lines in ((0, -3), (True, True), ("5", "10"), (-1.5, 2.5)):
                    config.save_config({"status_poll_seconds": poll, "syntax_max_lines": max_lines})
                    self.assertEqual(config.load_status_poll_seconds(), STATUS_POLL_SECONDS)
                    self.assertEqual(config.load_syntax_max_lines(), DEFAULT_SYNTAX_MAX_LINES)

                config.save_config({"status_poll_seconds": 2, "syntax_max_lines": 10})
                self.assertEqual(config.load_status_poll_seconds(), 2.0)
                self.assertEqual(config.load_syntax_max_lines(), 10)

    def test_non_boolean_show_hidden_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("repoview.config.CONFIG_PATH", config_path):
                config.save_config({"show_hidden": "yes"})
                self.assertFalse(config.load_show_hidden())


if __name__ == "__main__":
    unittest.main()
