"""Tests for config persistence and value validation.

Malformed files and out-of-range values must fall back to defaults.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazynav.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.config_path = Path(tmp.name) / "nested" / "config.json"
        patcher = mock.patch("lazynav.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_file_yields_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_api_url(), "http://localhost:3000/api")
        self.assertEqual(config.load_request_timeout(), 10.0)
        self.assertEqual(config.load_detail_scroll_step(), 5)
        self.assertIsNone(config.load_max_cached_paths())
        self.assertEqual(config.load_double_click_seconds(), 0.35)
        self.assertIsNone(config.load_theme_name())
        self.assertIsNone(config.load_last_path())

    def test_malformed_or_non_object_config_is_ignored(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})
        self.config_path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

    def test_valid_values_are_loaded(self) -> None:
        config.save_config(
            {
                "api_url": " http://nav.example/api ",
                "request_timeout": 2,
                "detail_scroll_step": 8,
                "max_cached_paths": 64,
                "double_click_seconds": 0.5,
                "theme": "ocean",
            }
        )
        self.assertEqual(config.load_api_url(), "http://nav.example/api")
        self.assertEqual(config.load_request_timeout(), 2.0)
        self.assertEqual(config.load_detail_scroll_step(), 8)
        self.assertEqual(config.load_max_cached_paths(), 64)
        self.assertEqual(config.load_double_click_seconds(), 0.5)
        self.assertEqual(config.load_theme_name(), "ocean")

    def test_invalid_values_fall_back(self) -> None:
        config.save_config(
            {
                "api_url": "",
                "request_timeout": -1,
                "detail_scroll_step": True,
                "max_cached_paths": 0,
                "double_click_seconds": "fast",
                "theme": 3,
            }
        )
        self.assertEqual(config.load_api_url(), config.DEFAULT_API_URL)
        self.assertEqual(config.load_request_timeout(), config.DEFAULT_REQUEST_TIMEOUT)
        self.assertEqual(config.load_detail_scroll_step(), config.DEFAULT_DETAIL_SCROLL_STEP)
        self.assertIsNone(config.load_max_cached_paths())
        self.assertEqual(config.load_double_click_seconds(), config.DEFAULT_DOUBLE_CLICK_SECONDS)
        self.assertIsNone(config.load_theme_name())

    def test_last_path_round_trip_and_root_clears_it(self) -> None:
        config.save_config({"theme": "ocean"})
        config.save_last_path("art.sketch")
        self.assertEqual(config.load_last_path(), "art.sketch")
        config.save_last_path(None)
        self.assertIsNone(config.load_last_path())
        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved, {"theme": "ocean"})

    def test_save_failure_is_not_raised(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.mkdir()
        config.save_config({"theme": "ocean"})
        self.assertEqual(config.load_config(), {})

    def test_settings_prefer_overrides_over_config(self) -> None:
        config.save_config({"api_url": "http://file/api", "request_timeout": 3, "max_cached_paths": 9})
        settings = config.NavigatorSettings.resolve(api_url="http://cli/api", max_cached_paths=4)
        self.assertEqual(settings.api_url, "http://cli/api")
        self.assertEqual(settings.request_timeout, 3.0)
        self.assertEqual(settings.max_cached_paths, 4)
        self.assertEqual(config.NavigatorSettings.resolve().api_url, "http://file/api")


if __name__ == "__main__":
    unittest.main()
