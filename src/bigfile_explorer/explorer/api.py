# File: src/bigfile_explorer/explorer/api.py
import asyncio
import random
import time
from fastapi import HTTPException
from typing import List, Optional

from ..exceptions import NodeNotFoundError
from ..node.client import NodeClient
from ..node.models import NodeBlock
from ..utils.config import Config
from ..utils.format import format_timestamp
from ..utils.logger import get_logger
from . import derive
from .aggregator import window_heights
from .models import (
    BlockDetail,
    BlockSummary,
    GrowthPoint,
    HashRatePoint,
    HistoricalMetrics,
    HistoricalPoint,
    NetworkHealth,
    RatePoint,
    TransactionCount,
    TransactionSummary,
)

logger = get_logger(__name__)

def summarize_transaction(tx) -> TransactionSummary:
    return TransactionSummary(
        id=tx.id,
        block_height=tx.block_height,
        block_hash=tx.block_hash,
        data_size=tx.data_size,
        timestamp=tx.timestamp,
        fee=tx.fee,
        data_root=tx.data_root,
        owner=tx.owner,
        target=tx.target,
        tags=tx.tags
    )

class ExplorerAPI:
    def __init__(
        self,
        client: NodeClient,
        latest_blocks_limit: int = Config.LATEST_BLOCKS_LIMIT,
        series_window: int = Config.SERIES_WINDOW,
        max_transactions_per_page: int = Config.MAX_TRANSACTIONS_PER_PAGE,
        default_block_time: float = Config.DEFAULT_BLOCK_TIME,
        rng: Optional[random.Random] = None
    ):
        self.client = client
        self.latest_blocks_limit = latest_blocks_limit
        self.series_window = series_window
        self.max_transactions_per_page = max_transactions_per_page
        self.default_block_time = default_block_time
        self.rng = rng or random.Random()

    @classmethod
    def from_config(cls, client: NodeClient, config) -> "ExplorerAPI":
        return cls(
            client,
            latest_blocks_limit=config.get("explorer.latest_blocks_limit", Config.LATEST_BLOCKS_LIMIT),
            series_window=config.get("explorer.series_window", Config.SERIES_WINDOW),
            max_transactions_per_page=config.get(
                "explorer.max_transactions_per_page", Config.MAX_TRANSACTIONS_PER_PAGE
            ),
            default_block_time=config.get("explorer.default_block_time", Config.DEFAULT_BLOCK_TIME)
        )

    async def _latest_blocks(self, count: int) -> List[NodeBlock]:
        info = await self.client.get_info()
        return await self.client.get_blocks(window_heights(info.height, count))

    async def get_latest_blocks(self, limit: Optional[int] = None) -> List[BlockSummary]:
        """Get latest blocks, newest first."""
        blocks = await self._latest_blocks(limit or self.latest_blocks_limit)
        return [derive.summarize_block(block) for block in blocks]

    async def get_block(self, block_id: str) -> BlockDetail:
        """Get block by height or hash, with its transactions resolved."""
        try:
            if block_id.isascii() and block_id.isdigit():
                block = await self.client.get_block_by_height(int(block_id))
            else:
                block = await self.client.get_block_by_hash(block_id)
        except NodeNotFoundError:
            raise HTTPException(status_code=404, detail="Block not found")

        tx_ids = block.tx_ids
        transactions = await self.client.get_transactions(tx_ids[:self.max_transactions_per_page])
        logger.debug(f"Block {block.height}: resolved {len(transactions)} of {len(tx_ids)} transactions")
        return BlockDetail(
            hash=block.indep_hash,
            height=block.height,
            timestamp=block.timestamp,
            previous_block=block.previous_block,
            txs=tx_ids,
            size=block.size,
            miner=block.reward_addr,
            transactions=[summarize_transaction(tx) for tx in transactions]
        )

    async def get_transaction(self, tx_id: str) -> TransactionSummary:
        """Get transaction by id."""
        try:
            tx = await self.client.get_transaction(tx_id)
        except NodeNotFoundError:
            raise HTTPException(status_code=404, detail="Transaction not found")
        return summarize_transaction(tx)

    async def get_transaction_count(self) -> TransactionCount:
        info, last_block = await asyncio.gather(self.client.get_info(), self.client.get_current_block())
        return TransactionCount(total=info.tx_count, last_block=last_block.tx_count, pending=info.tx_pending)

    async def get_network_growth(self) -> List[GrowthPoint]:
        return derive.network_growth_series(await self._latest_blocks(self.series_window))

    async def get_transaction_rate(self) -> List[RatePoint]:
        return derive.transaction_rate_series(await self._latest_blocks(self.series_window))

    async def get_hash_rate(self) -> List[HashRatePoint]:
        return derive.hash_rate_series(await self._latest_blocks(self.series_window))

    def get_historical_metrics(self, now: Optional[float] = None) -> HistoricalMetrics:
        """Hourly placeholder series; randomly generated, not read from the node."""
        now = time.time() if now is None else now
        points = self.series_window
        data = [
            HistoricalPoint(
                timestamp=format_timestamp(now - (points - 1 - i) * 3600),
                tps=2 + self.rng.random(),
                size=120 + i * 3 + self.rng.random() * 2,
                hash_rate=45 + self.rng.random() * 10
            )
            for i in range(points)
        ]
        return HistoricalMetrics(data=data)

    async def get_network_health(self) -> NetworkHealth:
        info = await self.client.get_info()
        if info.peers > Config.HEALTHY_PEER_THRESHOLD:
            peer_health = Config.PEER_HEALTH_GOOD
        else:
            peer_health = Config.PEER_HEALTH_DEGRADED
        return NetworkHealth(
            uptime=Config.UPTIME,
            block_time=info.block_time or self.default_block_time,
            peer_health=peer_health
        )
