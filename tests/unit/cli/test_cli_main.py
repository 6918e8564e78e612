from __future__ import annotations

import io
import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazynav import cli
from lazynav.errors import FetchError
from lazynav.runtime import config
from lazynav.runtime.navigation import NavigationController
from lazynav.tree_cache import TreeCache
from nav_fakes import art_tree


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


async def _fake_load_views(settings, path):
    nav = NavigationController(TreeCache(art_tree()))
    try:
        if not await nav.navigate_to(path):
            raise FetchError(nav.listing_status.error or "navigation failed", path)
        await nav.settle()
        return nav.views
    finally:
        nav.close()


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.config_path = Path(tmp.name) / "config.json"
        patcher = mock.patch.object(config, "CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_main(self, argv: list[str]) -> str:
        out = io.StringIO()
        with mock.patch("lazynav.cli.load_views", _fake_load_views), mock.patch("sys.stdout", out):
            cli.main(argv)
        return out.getvalue()

    def test_json_snapshot_of_a_level(self) -> None:
        data = json.loads(self.run_main(["--json", "art"]))
        self.assertEqual(data["current_path"], "art")
        self.assertEqual(data["selected_index"], 0)
        self.assertEqual(data["preview_target"], "art.sketch")

    def test_json_snapshot_of_a_nested_level(self) -> None:
        data = json.loads(self.run_main(["--json", "art.sketch"]))
        self.assertEqual(data["current_path"], "art.sketch")

    def test_render_snapshot_is_clipped_to_max_cols(self) -> None:
        text = self.run_main(["--render", "art", "--max-cols", "12"])
        self.assertIn("path: art", text)
        for line in text.splitlines():
            self.assertLessEqual(len(line), 12)

    def test_json_and_render_are_exclusive(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--json", "art", "--render", "art"])
        self.assertIn("Cannot combine", str(ctx.exception.code))

    def test_fetch_failure_exits_with_message(self) -> None:
        async def failing(settings, path):
            raise FetchError("HTTP 404", path)

        with mock.patch("lazynav.cli.load_views", failing):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--json", "missing"])
        self.assertEqual(ctx.exception.code, "lazynav: HTTP 404")

    def test_interactive_mode_requires_a_terminal(self) -> None:
        with mock.patch("sys.stdin", io.StringIO()), mock.patch("sys.stdout", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([])
        self.assertIn("needs a terminal", str(ctx.exception.code))

    def test_resume_reopens_last_path(self) -> None:
        config.save_last_path("art.sketch")
        with mock.patch("sys.stdin", _Tty()), mock.patch("sys.stdout", _Tty()):
            with mock.patch("lazynav.cli.run_navigator", return_value=0) as run:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(["http://example.test/api", "--resume", "--no-color"])
        self.assertEqual(ctx.exception.code, 0)
        settings, theme, initial_path = run.call_args.args
        self.assertEqual(settings.api_url, "http://example.test/api")
        self.assertEqual(theme.name, "plain")
        self.assertEqual(initial_path, "art.sketch")

    def test_explicit_path_wins_over_resume(self) -> None:
        config.save_last_path("art.sketch")
        with mock.patch("sys.stdin", _Tty()), mock.patch("sys.stdout", _Tty()):
            with mock.patch("lazynav.cli.run_navigator", return_value=0) as run:
                with self.assertRaises(SystemExit):
                    cli.main(["--path", "writing", "--resume"])
        self.assertEqual(run.call_args.args[2], "writing")


class CliParserTests(unittest.TestCase):
    def test_numeric_options_must_be_positive(self) -> None:
        parser = cli.build_parser()
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                parser.parse_args(["--max-cached-paths", "0"])
            with self.assertRaises(SystemExit):
                parser.parse_args(["--timeout", "-1"])
        args = parser.parse_args(["--timeout", "2.5", "--max-cached-paths", "8"])
        self.assertEqual(args.timeout, 2.5)
        self.assertEqual(args.max_cached_paths, 8)


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        root.handlers = []

        def restore() -> None:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)

        self.addCleanup(restore)

    def test_log_file_receives_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "nav.log"
            cli.configure_logging(str(log_path), debug=True, interactive=True)
            logging.getLogger("lazynav.test").debug("hello from the navigator")
            for handler in logging.getLogger().handlers:
                handler.flush()
                handler.close()
            logging.getLogger().handlers = []
            self.assertIn("hello from the navigator", log_path.read_text(encoding="utf-8"))

    def test_interactive_session_without_log_file_installs_nothing(self) -> None:
        cli.configure_logging(None, debug=True, interactive=True)
        self.assertEqual(logging.getLogger().handlers, [])


if __name__ == "__main__":
    unittest.main()
