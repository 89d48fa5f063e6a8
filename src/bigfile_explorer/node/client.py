# File: src/bigfile_explorer/node/client.py

import asyncio
from typing import Any, Iterable, List, Optional

import aiohttp
from async_timeout import timeout

from ..exceptions import (
    NodeError,
    NodeNotFoundError,
    NodeResponseError,
    NodeUnavailableError,
)
from ..utils.config import Config
from ..utils.logger import get_logger
from .models import NodeBlock, NodeInfo, NodeTransaction

logger = get_logger(__name__)

class NodeClient:
    """HTTP client for a BigFile node's public API."""

    def __init__(
        self,
        base_url: str = Config.NODE_URL,
        request_timeout: float = Config.NODE_TIMEOUT,
        verify_ssl: bool = Config.NODE_VERIFY_SSL,
        max_concurrency: int = Config.NODE_MAX_CONCURRENCY,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.request_timeout = request_timeout
        self.verify_ssl = verify_ssl
        self.max_concurrency = max(1, max_concurrency)
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_config(cls, config) -> "NodeClient":
        return cls(
            base_url=config.get("node.url", Config.NODE_URL),
            request_timeout=config.get("node.timeout", Config.NODE_TIMEOUT),
            verify_ssl=config.get("node.verify_ssl", Config.NODE_VERIFY_SSL),
            max_concurrency=config.get("node.max_concurrency", Config.NODE_MAX_CONCURRENCY)
        )

    async def __aenter__(self) -> "NodeClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            # The public node serves a self-signed certificate
            connector = aiohttp.TCPConnector(ssl=self.verify_ssl)
            self._session = aiohttp.ClientSession(connector=connector)
            self._owns_session = True
        return self._session

    async def close(self):
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        session = self._get_session()
        try:
            async with timeout(self.request_timeout):
                async with session.get(url) as response:
                    if response.status == 404:
                        raise NodeNotFoundError(f"Not found: {path}", url=url, status=404)
                    if response.status >= 400:
                        body = await response.text()
                        logger.error(f"Node returned {response.status} for {url}: {body[:200]}")
                        raise NodeResponseError(
                            f"Node returned HTTP {response.status} for {path}",
                            url=url,
                            status=response.status
                        )
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        logger.error(f"Unreadable JSON from {url}: {e}")
                        raise NodeResponseError(
                            f"Invalid JSON from node for {path}",
                            url=url,
                            status=response.status
                        ) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out after {self.request_timeout}s fetching {url}")
            raise NodeUnavailableError(f"Timed out fetching {path}", url=url) from e
        except aiohttp.ClientError as e:
            logger.error(f"Failed to reach node at {url}: {e}")
            raise NodeUnavailableError(f"Node unreachable: {e}", url=url) from e

    async def get_info(self) -> NodeInfo:
        return NodeInfo.from_json(await self._get_json("/info"))

    async def get_block_by_height(self, height: int) -> NodeBlock:
        payload = await self._get_json(f"/block/height/{height}")
        return NodeBlock.from_json(payload, height=height)

    async def get_block_by_hash(self, block_hash: str) -> NodeBlock:
        return NodeBlock.from_json(await self._get_json(f"/block/hash/{block_hash}"))

    async def get_current_block(self) -> NodeBlock:
        return NodeBlock.from_json(await self._get_json("/block/current"))

    async def get_transaction(self, tx_id: str) -> NodeTransaction:
        return NodeTransaction.from_json(await self._get_json(f"/tx/{tx_id}"), tx_id=tx_id)

    async def get_blocks(
        self,
        heights: Iterable[int],
        max_concurrency: Optional[int] = None
    ) -> List[NodeBlock]:
        """Fetch blocks concurrently, keeping the order of ``heights``.

        Heights that fail to load are logged and left out.
        """
        return await self._fan_out(
            list(heights), self.get_block_by_height, "block at height", max_concurrency
        )

    async def get_transactions(
        self,
        tx_ids: Iterable[str],
        max_concurrency: Optional[int] = None
    ) -> List[NodeTransaction]:
        return await self._fan_out(
            list(tx_ids), self.get_transaction, "transaction", max_concurrency
        )

    async def _fan_out(self, keys, fetch, label: str, max_concurrency: Optional[int]) -> list:
        semaphore = asyncio.Semaphore(max_concurrency or self.max_concurrency)

        async def fetch_one(key):
            async with semaphore:
                try:
                    return await fetch(key)
                except NodeError as e:
                    logger.warning(f"Skipping {label} {key}: {e}")
                    return None

        results = await asyncio.gather(*(fetch_one(key) for key in keys))
        return [result for result in results if result is not None]
