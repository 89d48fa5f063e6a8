# File: src/bigfile_explorer/explorer/derive.py
"""Pure functions turning fetched blocks into dashboard figures.

Block lists passed in here are ordered newest first, the order in which they
are fetched. Trend series come out oldest first so they chart left to right.
"""

from typing import List, Sequence

from ..node.models import NodeBlock
from ..utils.config import Config
from ..utils.format import format_timestamp
from .models import (
    BlockSummary,
    ChangeIndicator,
    Changes,
    GrowthPoint,
    HashRatePoint,
    RatePoint,
    TrendPoint,
    TrendSeries,
)

def total_transactions(blocks: Sequence[NodeBlock]) -> int:
    return sum(block.tx_count for block in blocks)

def calculate_tps(blocks: Sequence[NodeBlock], min_tps: float = Config.MIN_TPS) -> float:
    """Transactions per second across the window, rounded to 2 decimals."""
    if not blocks or len(blocks) < 2:
        return min_tps

    latest, oldest = blocks[0], blocks[-1]
    time_span = max(latest.timestamp - oldest.timestamp, 1)
    return round(total_transactions(blocks) / time_span, 2)

def percentage_change(current: float, previous: float) -> ChangeIndicator:
    if not previous:
        return ChangeIndicator(value=0, is_positive=True)
    change = (current - previous) / previous * 100
    return ChangeIndicator(value=round(abs(change), 2), is_positive=change >= 0)

def calculate_changes(blocks: Sequence[NodeBlock]) -> Changes:
    """Latest block against the one before it."""
    if len(blocks) < 2:
        flat = ChangeIndicator(value=0, is_positive=True)
        return Changes(transactions=flat, size=flat, peers=flat)

    latest, previous = blocks[0], blocks[1]
    return Changes(
        transactions=percentage_change(latest.tx_count, previous.tx_count),
        size=percentage_change(latest.size, previous.size),
        # No peer history is kept between requests
        peers=ChangeIndicator(value=0, is_positive=True)
    )

def summarize_block(block: NodeBlock) -> BlockSummary:
    return BlockSummary(
        height=block.height,
        hash=block.indep_hash,
        timestamp=block.timestamp * 1000,
        size=block.size,
        tx_count=block.tx_count
    )

def transaction_trend(
    blocks: Sequence[NodeBlock],
    eod_factor: float = Config.TRANSACTIONS_EOD_FACTOR
) -> TrendSeries:
    chronological = list(reversed(blocks))
    data = [
        TrendPoint(timestamp=format_timestamp(block.timestamp), value=block.tx_count)
        for block in chronological
    ]
    latest = data[-1].value if data else 0
    return TrendSeries(
        data=data,
        total_24h=sum(point.value for point in data),
        eod_estimate=latest * eod_factor
    )

def weave_size_trend(
    blocks: Sequence[NodeBlock],
    eod_factor: float = Config.WEAVE_EOD_FACTOR
) -> TrendSeries:
    """Running total of block sizes across the window."""
    data = []
    running = 0
    for block in reversed(blocks):
        running += block.size
        data.append(TrendPoint(timestamp=format_timestamp(block.timestamp), value=running))

    latest = data[-1].value if data else 0
    return TrendSeries(data=data, total_24h=latest, eod_estimate=latest * eod_factor)

def data_uploaded_trend(
    blocks: Sequence[NodeBlock],
    points: int = Config.TREND_POINTS
) -> TrendSeries:
    chronological = list(reversed(blocks))
    data = [
        TrendPoint(timestamp=format_timestamp(block.timestamp), value=block.uploaded_bytes)
        for block in chronological
    ]
    total = sum(point.value for point in data)
    # Scale the observed window up to a full day's worth of samples
    eod_estimate = total * (points / len(data)) if data else 0
    return TrendSeries(data=data, total_24h=total, eod_estimate=eod_estimate)

def network_growth_series(blocks: Sequence[NodeBlock]) -> List[GrowthPoint]:
    series = []
    running = 0
    for block in reversed(blocks):
        running += block.size
        series.append(GrowthPoint(
            timestamp=format_timestamp(block.timestamp),
            height=block.height,
            size=running,
            tx_count=block.tx_count
        ))
    return series

def transaction_rate_series(blocks: Sequence[NodeBlock]) -> List[RatePoint]:
    return [
        RatePoint(timestamp=format_timestamp(block.timestamp), height=block.height, tps=block.tx_count)
        for block in reversed(blocks)
    ]

def hash_rate_series(blocks: Sequence[NodeBlock]) -> List[HashRatePoint]:
    return [
        HashRatePoint(timestamp=format_timestamp(block.timestamp), height=block.height, hash_rate=block.diff)
        for block in reversed(blocks)
    ]
