# tests/test_api.py
import aiohttp
import pytest
from fastapi.testclient import TestClient

from bigfile_explorer.api.server import create_app
from bigfile_explorer.config.settings import ExplorerConfig
from bigfile_explorer.explorer.api import ExplorerAPI
from bigfile_explorer.monitoring.metrics import parse_metrics
from bigfile_explorer.node.client import NodeClient
from conftest import NODE_URL, FakeNodeSession, make_chain

class TestExplorerRoutes:
    @pytest.fixture
    def session(self):
        routes = make_chain(info={"blocks": 101, "tx_count": 5000, "tx_pending": ["p1", "p2"]})
        routes["/block/current"] = routes["/block/height/100"]
        routes["/block/hash/hash-99"] = routes["/block/height/99"]
        routes["/tx/tx-99-0"] = {
            "id": "tx-99-0",
            "owner": "owner-key",
            "target": "",
            "reward": "10",
            "data_size": "2048",
            "data_root": "root",
            "block_height": 99,
            "block_indep_hash": "hash-99",
        }
        return FakeNodeSession(routes)

    @pytest.fixture
    def client(self, session):
        config = ExplorerConfig(config_path=None, environ={})
        node = NodeClient(base_url=NODE_URL, session=session)
        return TestClient(create_app(config, client=node))

    def test_dashboard(self, client):
        response = client.get("/api/dashboard")
        assert response.status_code == 200

        body = response.json()
        assert body["current"]["totalTransactions"] >= 30
        assert body["current"]["tps"] >= 0
        assert body["current"]["changes"]["transactions"] == {"value": 0, "isPositive": True}
        assert [block["height"] for block in body["recentBlocks"]] == list(range(100, 85, -1))
        assert set(body["trends"]) == {"transactions", "weaveSize", "dataUploaded"}
        assert set(body["trends"]["transactions"]) == {"data", "total24h", "eodEstimate"}

    def test_dashboard_is_cached(self, client, session):
        first = client.get("/api/dashboard").json()
        second = client.get("/api/dashboard").json()

        assert first == second
        assert session.count("/info") == 1

    def test_dashboard_upstream_down(self, client, session):
        session.routes["/info"] = aiohttp.ClientConnectionError("unreachable")

        response = client.get("/api/dashboard")

        assert response.status_code == 500
        assert response.json()["error"] == "Upstream node unavailable"

    def test_latest_blocks(self, client):
        response = client.get("/api/blocks")
        assert response.status_code == 200

        blocks = response.json()
        assert [block["height"] for block in blocks] == list(range(100, 90, -1))
        assert blocks[0] == {
            "height": 100,
            "hash": "hash-100",
            "timestamp": (1_700_000_000 + 100 * 120) * 1000,
            "size": 2048,
            "txCount": 2,
        }

    def test_latest_blocks_limit(self, client):
        assert len(client.get("/api/blocks", params={"limit": 3}).json()) == 3
        assert client.get("/api/blocks", params={"limit": 0}).status_code == 422

    def test_latest_blocks_default_limit_from_config(self, session):
        config = ExplorerConfig(config_path=None, environ={})
        config.update("explorer.latest_blocks_limit", 3)
        client = TestClient(create_app(config, client=NodeClient(base_url=NODE_URL, session=session)))

        blocks = client.get("/api/blocks").json()
        assert [block["height"] for block in blocks] == [100, 99, 98]

    def test_block_by_height(self, client):
        response = client.get("/api/block/99")
        assert response.status_code == 200

        block = response.json()
        assert block["hash"] == "hash-99"
        assert block["previous_block"] == "hash-98"
        assert block["txs"] == ["tx-99-0", "tx-99-1"]
        # tx-99-1 is unknown to the node and left out
        assert [tx["id"] for tx in block["transactions"]] == ["tx-99-0"]
        assert block["transactions"][0]["data_size"] == 2048

    def test_block_by_hash(self, client):
        response = client.get("/api/block/hash-99")
        assert response.status_code == 200
        assert response.json()["height"] == 99

    def test_block_not_found(self, client):
        response = client.get("/api/block/unknown-hash")
        assert response.status_code == 404
        assert response.json() == {"error": "Block not found"}

    def test_non_ascii_digit_block_id_is_looked_up_as_hash(self, client, session):
        response = client.get("/api/block/\u00b2")

        assert response.status_code == 404
        assert response.json() == {"error": "Block not found"}
        assert session.count("/block/hash/\u00b2") == 1
        assert not any(call.startswith("/block/height/") for call in session.calls)

    def test_transaction(self, client):
        response = client.get("/api/tx/tx-99-0")
        assert response.status_code == 200

        tx = response.json()
        assert tx["block_height"] == 99
        assert tx["block_hash"] == "hash-99"
        assert tx["fee"] == 10

    def test_transaction_not_found(self, client):
        response = client.get("/api/tx/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Transaction not found"}

    def test_transaction_count(self, client):
        response = client.get("/api/transactions/count")
        assert response.json() == {"total": 5000, "lastBlock": 2, "pending": 2}

    def test_prometheus_metrics(self, client):
        response = client.get("/api/metrics")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "# TYPE arweave_height gauge" in response.text

        metrics = parse_metrics(response.text)
        assert metrics.height == 100
        assert metrics.peer_count == 12
        assert metrics.total_transactions == 2

    def test_series_are_ascending(self, client):
        for path in ("/api/metrics/network-growth", "/api/metrics/transaction-rate", "/api/metrics/hash-rate"):
            points = client.get(path).json()
            heights = [point["height"] for point in points]
            assert heights == sorted(heights)
            assert heights[-1] == 100

        growth = client.get("/api/metrics/network-growth").json()
        assert growth[-1]["size"] == 15 * 2048
        assert growth[-1]["txCount"] == 2

    def test_historical_is_flagged_synthetic(self, client):
        body = client.get("/api/metrics/historical").json()
        assert body["synthetic"] is True
        assert len(body["data"]) == 24
        assert set(body["data"][0]) == {"timestamp", "tps", "size", "hashRate"}

    def test_health(self, client):
        body = client.get("/api/metrics/health").json()
        assert body["peerHealth"] == 92
        assert body["blockTime"] == 2.1
        assert body["uptime"] == 99.9
        assert body["synthetic"] == ["uptime", "peerHealth"]

class TestExplorerAPI:
    @pytest.mark.asyncio
    async def test_transaction_count_reads_info_and_current_block_together(self):
        routes = make_chain(info={"tx_count": 5000, "tx_pending": 1})
        routes["/block/current"] = routes["/block/height/100"]
        session = FakeNodeSession(routes, delay=0.05)
        explorer = ExplorerAPI(NodeClient(base_url=NODE_URL, session=session))

        count = await explorer.get_transaction_count()

        assert count.total == 5000
        assert count.last_block == 2
        assert count.pending == 1
        assert session.max_in_flight == 2
