"""One-shot loading through the real fetcher over ``httpx.MockTransport``."""

from __future__ import annotations

import unittest
from functools import partial
from unittest import mock

import httpx

from lazynav.api_client import NodeFetcher
from lazynav.errors import FetchError
from lazynav.runtime.app import load_views
from lazynav.runtime.config import NavigatorSettings

ROUTES = {
    "/api/directories/root": {
        "directories": [
            {"path": "art", "display_name": "Art", "has_children": True},
            {"path": "misc", "display_name": "Misc", "has_children": False},
        ]
    },
    "/api/directories/children/art": {
        "directories": [{"path": "art.sketch", "display_name": "Sketch", "has_subnodes": 1}]
    },
    "/api/directories/assets/art": {
        "assets": [{"file_path": "art/readme.md", "raw_path": "content/art/readme.md", "raw_filename": "readme.md"}]
    },
    "/api/directories/children/art.sketch": {"directories": []},
    "/api/directories/assets/art.sketch": {
        "assets": [{"file_path": "art.sketch/a.png", "raw_path": "content/art/sketch/a.png", "raw_filename": "a.png"}]
    },
}


class LoadViewsOverHttpTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.requests: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.raw_path.decode("ascii")
            self.requests.append(path)
            body = ROUTES.get(path)
            return httpx.Response(200, json=body) if body is not None else httpx.Response(404)

        patcher = mock.patch(
            "lazynav.runtime.app.NodeFetcher",
            partial(NodeFetcher, transport=httpx.MockTransport(handler)),
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        self.settings = NavigatorSettings(api_url="http://backend.test/api")

    async def test_level_with_preview_is_fully_loaded(self) -> None:
        views = await load_views(self.settings, "art")
        self.assertEqual([node.label for node in views.current_nodes], ["readme.md", "Sketch"])
        self.assertEqual([node.label for node in views.breadcrumb], ["Art"])
        self.assertEqual(views.preview_target, "art.sketch")
        self.assertEqual([node.label for node in views.preview_nodes], ["a.png"])
        self.assertTrue(views.preview_loaded)
        self.assertEqual(len(self.requests), len(set(self.requests)))

    async def test_missing_level_raises_fetch_error(self) -> None:
        with self.assertRaises(FetchError) as ctx:
            await load_views(self.settings, "nowhere")
        self.assertIn("HTTP 404", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
