# File: src/bigfile_explorer/explorer/aggregator.py

from dataclasses import dataclass
from typing import List, Optional

from ..node.client import NodeClient
from ..node.models import NodeBlock, NodeInfo
from ..utils.config import Config
from ..utils.logger import get_logger
from . import derive
from .cache import DashboardCache
from .models import CurrentStats, DashboardSnapshot, Trends

logger = get_logger(__name__)

@dataclass
class DashboardSettings:
    cache_ttl: float = Config.CACHE_TTL
    recent_block_count: int = Config.RECENT_BLOCK_COUNT
    trend_points: int = Config.TREND_POINTS
    tps_window: int = Config.TPS_WINDOW
    min_tps: float = Config.MIN_TPS
    assumed_block_size: int = Config.ASSUMED_BLOCK_SIZE
    assumed_network_block_size: int = Config.ASSUMED_NETWORK_BLOCK_SIZE
    storage_cost: float = Config.STORAGE_COST
    transactions_eod_factor: float = Config.TRANSACTIONS_EOD_FACTOR
    weave_eod_factor: float = Config.WEAVE_EOD_FACTOR

    @classmethod
    def from_config(cls, config) -> "DashboardSettings":
        section = config.section("dashboard")
        known = cls.__dataclass_fields__
        return cls(**{key: value for key, value in section.items() if key in known})

def window_heights(current_height: int, count: int) -> List[int]:
    """Heights of the last ``count`` blocks, newest first, never below 0."""
    return list(range(current_height, max(current_height - count, -1), -1))

class DashboardAggregator:
    def __init__(
        self,
        client: NodeClient,
        settings: Optional[DashboardSettings] = None,
        cache: Optional[DashboardCache] = None
    ):
        self.client = client
        self.settings = settings or DashboardSettings()
        self.cache = cache if cache is not None else DashboardCache(ttl=self.settings.cache_ttl)

    async def get_dashboard(self) -> DashboardSnapshot:
        """Return the cached snapshot, rebuilding it once the TTL has passed."""
        cached = self.cache.get()
        if cached is not None:
            return cached

        snapshot = await self.build_snapshot()
        return self.cache.set(snapshot)

    async def build_snapshot(self) -> DashboardSnapshot:
        # A failure here aborts the whole snapshot
        info = await self.client.get_info()

        window = max(self.settings.trend_points, self.settings.recent_block_count, self.settings.tps_window)
        heights = window_heights(info.height, window)
        blocks = await self.client.get_blocks(heights)
        if len(blocks) < len(heights):
            logger.warning(f"Dashboard built from {len(blocks)} of {len(heights)} blocks")

        trend_blocks = blocks[:self.settings.trend_points]
        snapshot = DashboardSnapshot(
            current=self._current_stats(info, blocks[:self.settings.tps_window]),
            trends=Trends(
                transactions=derive.transaction_trend(trend_blocks, self.settings.transactions_eod_factor),
                weave_size=derive.weave_size_trend(trend_blocks, self.settings.weave_eod_factor),
                data_uploaded=derive.data_uploaded_trend(trend_blocks, self.settings.trend_points)
            ),
            recent_blocks=[
                derive.summarize_block(block)
                for block in blocks[:self.settings.recent_block_count]
            ]
        )

        logger.info(
            f"Dashboard refreshed: height={info.height} peers={info.peers} "
            f"blocks={len(blocks)} tx={snapshot.current.total_transactions} tps={snapshot.current.tps}"
        )
        return snapshot

    def _current_stats(self, info: NodeInfo, blocks: List[NodeBlock]) -> CurrentStats:
        """Headline figures; ``blocks`` is the TPS window, newest first."""
        block_count = info.blocks or info.height

        if info.weave_size is not None:
            weave_size = info.weave_size
        else:
            weave_size = block_count * self.settings.assumed_block_size

        return CurrentStats(
            height=info.height,
            peer_count=info.peers,
            # Every block carries at least one transaction
            total_transactions=max(derive.total_transactions(blocks), info.blocks),
            tps=derive.calculate_tps(blocks, self.settings.min_tps),
            weave_size=weave_size,
            network_size=max(info.network_size, block_count * self.settings.assumed_network_block_size),
            storage_cost=self.settings.storage_cost,
            active_addresses=info.peers or 1,
            proof_rate=info.blocks or 1,
            changes=derive.calculate_changes(blocks)
        )
