# File: src/bigfile_explorer/monitoring/metrics.py

import time
from dataclasses import dataclass
from typing import Dict, Optional

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest
from prometheus_client.parser import text_string_to_metric_families

from ..node.client import NodeClient
from ..node.models import NodeBlock, NodeInfo
from ..utils.config import Config
from ..utils.logger import get_logger

logger = get_logger(__name__)

CONTENT_TYPE = CONTENT_TYPE_LATEST

# metric suffix -> help text
GAUGES = {
    'height': 'Current block height',
    'peers': 'Number of connected peers',
    'storage_size': 'Total storage size in bytes',
    'mining_rate': 'Network hash rate',
    'transaction_throughput': 'Transactions per second',
    'transaction_count': 'Total number of transactions',
    'price_per_gib': 'Storage price per GiB',
    'block_time': 'Average block time in seconds',
    'timestamp': 'Last block timestamp',
    'total_transactions': 'Transactions in the latest block',
    'average_block_size': 'Average block size in bytes',
}

@dataclass
class NetworkMetrics:
    height: int = 0
    peer_count: int = 0
    total_size: float = 0
    network_size: float = 0
    hash_rate: float = 0
    tps: float = 0
    transaction_count: int = 0
    storage_price: float = 0
    proof_rate: float = 0
    last_block_time: float = 0  # milliseconds
    total_transactions: int = 0
    average_block_size: float = 0

class MetricsCollector:
    """Renders node figures as a Prometheus text exposition.

    A fresh registry is built per scrape since every value comes straight from
    the node and nothing is accumulated between requests.
    """

    def __init__(self, client: NodeClient, prefix: str = Config.METRICS_PREFIX):
        self.client = client
        self.prefix = prefix

    def gauge_values(self, info: NodeInfo, last_block: NodeBlock, now: Optional[float] = None) -> Dict[str, float]:
        weave_size = info.weave_size or 0
        return {
            'height': info.height,
            'peers': info.peers,
            'storage_size': weave_size,
            'mining_rate': info.current_diff,
            'transaction_throughput': info.tx_throughput,
            'transaction_count': info.tx_count,
            'price_per_gib': info.storage_cost,
            'block_time': info.block_time or 0,
            'timestamp': info.current_timestamp or (time.time() if now is None else now),
            'total_transactions': last_block.tx_count,
            'average_block_size': weave_size / max(info.height, 1),
        }

    def render(self, info: NodeInfo, last_block: NodeBlock, now: Optional[float] = None) -> bytes:
        registry = CollectorRegistry()
        for suffix, value in self.gauge_values(info, last_block, now).items():
            gauge = Gauge(f'{self.prefix}_{suffix}', GAUGES[suffix], registry=registry)
            gauge.set(float(value))
        return generate_latest(registry)

    async def collect(self) -> bytes:
        info = await self.client.get_info()
        last_block = await self.client.get_block_by_height(info.height)
        logger.debug(f"Rendering metrics for height {info.height}")
        return self.render(info, last_block)

def parse_metrics(text: str, prefix: str = Config.METRICS_PREFIX) -> NetworkMetrics:
    """Read an exposition produced by MetricsCollector back into NetworkMetrics."""
    values: Dict[str, float] = {}
    for family in text_string_to_metric_families(text):
        for sample in family.samples:
            if sample.name.startswith(f'{prefix}_'):
                values[sample.name[len(prefix) + 1:]] = sample.value

    block_time = values.get('block_time', 0)
    total_size = values.get('storage_size', 0)
    return NetworkMetrics(
        height=int(values.get('height', 0)),
        peer_count=int(values.get('peers', 0)),
        total_size=total_size,
        network_size=total_size,
        hash_rate=values.get('mining_rate', 0),
        tps=values.get('transaction_throughput', 0),
        transaction_count=int(values.get('transaction_count', 0)),
        storage_price=values.get('price_per_gib', 0),
        proof_rate=1 / max(block_time, 0.1),
        last_block_time=values.get('timestamp', 0) * 1000,
        total_transactions=int(values.get('total_transactions', 0)),
        average_block_size=values.get('average_block_size', 0)
    )
