"""Async HTTP client for the directory backend."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .errors import FetchError
from .tree_model import AssetNode, DirectoryNode
from .tree_path import ROOT_PATH, encode_path, normalize_path

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class NodeFetcher:
    """Thin async wrapper around the three backend listing endpoints.

    Every call is one round trip with a timeout; failures surface as
    ``FetchError``. Retry policy belongs to callers.
    """

    def __init__(
        self,
        api_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _get_json(self, url: str, path: str) -> dict[str, Any]:
        client = await self._get_client()
        log.debug(f"GET {url}")
        try:
            response = await client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            log.warning(f"Request for {path or '<root>'} timed out after {self.timeout}s")
            raise FetchError(f"request timed out after {self.timeout:g}s", path=path) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.warning(f"Request for {path or '<root>'} failed with HTTP {status}")
            raise FetchError(f"server returned HTTP {status}", path=path) from e
        except httpx.HTTPError as e:
            log.warning(f"Request for {path or '<root>'} failed: {e}")
            raise FetchError(f"request failed: {e}", path=path) from e
        except ValueError as e:
            raise FetchError(f"malformed response: {e}", path=path) from e
        if not isinstance(data, dict):
            raise FetchError("malformed response: expected a JSON object", path=path)
        return data

    @staticmethod
    def _items(data: dict[str, Any], key: str, path: str) -> list[dict[str, Any]]:
        items = data.get(key)
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise FetchError(f"malformed response: missing {key!r} list", path=path)
        return items

    async def _fetch_directories(self, url: str, path: str) -> list[DirectoryNode]:
        data = await self._get_json(url, path)
        try:
            return [DirectoryNode.from_json(item) for item in self._items(data, "directories", path)]
        except ValueError as e:
            raise FetchError(f"malformed response: {e}", path=path) from e

    async def fetch_root(self) -> list[DirectoryNode]:
        """List the top-level directories."""
        return await self._fetch_directories("/directories/root", ROOT_PATH)

    async def fetch_children(self, path: str) -> list[DirectoryNode]:
        """List the direct child directories of ``path``."""
        path = normalize_path(path)
        return await self._fetch_directories(f"/directories/children/{encode_path(path)}", path)

    async def fetch_assets(self, path: str) -> list[AssetNode]:
        """List the leaf assets stored under ``path``."""
        path = normalize_path(path)
        data = await self._get_json(f"/directories/assets/{encode_path(path)}", path)
        try:
            return [AssetNode.from_json(item) for item in self._items(data, "assets", path)]
        except ValueError as e:
            raise FetchError(f"malformed response: {e}", path=path) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> NodeFetcher:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
