# tests/test_derive.py
import pytest

from bigfile_explorer.explorer import derive
from bigfile_explorer.node.models import NodeBlock
from conftest import GENESIS_TIME, make_block

def blocks_for(heights, tx_count=2, **extra):
    """Parsed blocks, newest first, 120s apart."""
    return [NodeBlock.from_json(make_block(h, tx_count=tx_count, **extra)) for h in heights]

class TestTps:
    def test_total_over_span(self):
        blocks = blocks_for(range(100, 85, -1))
        # 30 transactions over 14 * 120 seconds
        assert derive.calculate_tps(blocks) == round(30 / 1680, 2)

    def test_empty_window_uses_minimum(self):
        assert derive.calculate_tps([]) == 0.01

    def test_single_block_uses_minimum(self):
        assert derive.calculate_tps(blocks_for([5])) == 0.01
        assert derive.calculate_tps(blocks_for([5]), min_tps=0.5) == 0.5

    def test_zero_span_floors_to_one_second(self):
        blocks = [
            NodeBlock.from_json(make_block(2, tx_count=3, timestamp=GENESIS_TIME)),
            NodeBlock.from_json(make_block(1, tx_count=4, timestamp=GENESIS_TIME)),
        ]
        assert derive.calculate_tps(blocks) == 7.0

    def test_never_negative(self):
        assert derive.calculate_tps(blocks_for(range(10, 0, -1), tx_count=0)) == 0

class TestChanges:
    def test_percentage_change(self):
        change = derive.percentage_change(150, 100)
        assert change.value == 50
        assert change.is_positive is True

        drop = derive.percentage_change(1, 3)
        assert drop.value == 66.67
        assert drop.is_positive is False

    def test_previous_zero(self):
        change = derive.percentage_change(10, 0)
        assert change.value == 0
        assert change.is_positive is True

    def test_latest_against_previous_block(self):
        blocks = [
            NodeBlock.from_json(make_block(2, tx_count=4)),
            NodeBlock.from_json(make_block(1, tx_count=2)),
        ]
        changes = derive.calculate_changes(blocks)
        assert changes.transactions.value == 100
        assert changes.size.value == 0
        assert changes.peers.value == 0

    def test_short_window_is_flat(self):
        changes = derive.calculate_changes(blocks_for([1]))
        assert changes.transactions.value == 0
        assert changes.transactions.is_positive is True

class TestTrends:
    def test_transaction_trend_is_chronological(self):
        blocks = [NodeBlock.from_json(make_block(h, tx_count=h - 10)) for h in (13, 12, 11)]
        trend = derive.transaction_trend(blocks)

        assert [point.value for point in trend.data] == [1, 2, 3]
        assert trend.total_24h == 6
        assert trend.eod_estimate == 3 * 24

    def test_weave_size_trend_is_running_sum(self):
        trend = derive.weave_size_trend(blocks_for([3, 2, 1]))

        assert [point.value for point in trend.data] == [2048, 4096, 6144]
        assert trend.total_24h == 6144
        assert trend.eod_estimate == pytest.approx(6144 * 1.01)

    def test_data_uploaded_trend_projects_full_day(self):
        trend = derive.data_uploaded_trend(blocks_for([4, 3, 2, 1]), points=24)

        assert trend.total_24h == 4 * 2048
        assert trend.eod_estimate == 4 * 2048 * 6

    def test_empty_trends(self):
        for trend in (
            derive.transaction_trend([]),
            derive.weave_size_trend([]),
            derive.data_uploaded_trend([]),
        ):
            assert trend.data == []
            assert trend.total_24h == 0
            assert trend.eod_estimate == 0

    def test_trend_labels(self):
        trend = derive.transaction_trend([NodeBlock.from_json(make_block(1, timestamp=0))])
        assert trend.data[0].timestamp == "12:00 AM"

class TestSeries:
    def test_summarize_block(self):
        summary = derive.summarize_block(NodeBlock.from_json(make_block(7, timestamp=1000)))
        assert summary.height == 7
        assert summary.hash == "hash-7"
        assert summary.timestamp == 1_000_000
        assert summary.tx_count == 2
        assert summary.model_dump(by_alias=True)["txCount"] == 2

    def test_network_growth_ascending(self):
        series = derive.network_growth_series(blocks_for([3, 2, 1]))
        assert [point.height for point in series] == [1, 2, 3]
        assert [point.size for point in series] == [2048, 4096, 6144]

    def test_rate_and_hash_rate(self):
        blocks = blocks_for([2, 1], diff="1000")
        assert [point.tps for point in derive.transaction_rate_series(blocks)] == [2, 2]
        assert [point.hash_rate for point in derive.hash_rate_series(blocks)] == [1000, 1000]
