# tests/conftest.py
import asyncio
import json

import pytest

from bigfile_explorer.node.client import NodeClient

NODE_URL = "http://node.test:1984"
GENESIS_TIME = 1_700_000_000

class FakeResponse:
    """Stands in for an aiohttp response inside ``async with session.get()``."""

    def __init__(self, status=200, payload=None, body=None, delay=0):
        self.status = status
        self._payload = payload
        self._body = body
        self._delay = delay

    async def json(self, content_type="application/json"):
        if self._body is not None:
            return json.loads(self._body)
        return self._payload

    async def text(self):
        return self._body if self._body is not None else json.dumps(self._payload)

    async def __aenter__(self):
        if self._delay:
            await asyncio.sleep(self._delay)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

class FakeNodeSession:
    """Routes ``GET <path>`` to canned payloads; unknown paths answer 404."""

    def __init__(self, routes=None, delay=0):
        self.routes = dict(routes or {})
        self.delay = delay
        self.calls = []
        self.closed = False
        self.in_flight = 0
        self.max_in_flight = 0

    def path_of(self, url):
        return url[len(NODE_URL):]

    def count(self, path):
        return self.calls.count(path)

    def get(self, url):
        path = self.path_of(url)
        self.calls.append(path)
        route = self.routes.get(path)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, FakeResponse):
            return route
        if route is None:
            return _Tracked(self, FakeResponse(404, {"error": "not_found"}, delay=self.delay))
        return _Tracked(self, FakeResponse(200, route, delay=self.delay))

    async def close(self):
        self.closed = True

class _Tracked:
    def __init__(self, session, response):
        self.session = session
        self.response = response

    async def __aenter__(self):
        self.session.in_flight += 1
        self.session.max_in_flight = max(self.session.max_in_flight, self.session.in_flight)
        try:
            return await self.response.__aenter__()
        finally:
            self.session.in_flight -= 1

    async def __aexit__(self, exc_type, exc, tb):
        return False

def make_block(height, tx_count=2, timestamp=None, **extra):
    block = {
        "indep_hash": f"hash-{height}",
        "height": height,
        "previous_block": f"hash-{height - 1}",
        "timestamp": timestamp if timestamp is not None else GENESIS_TIME + height * 120,
        "txs": [f"tx-{height}-{i}" for i in range(tx_count)],
        "block_size": 2048,
        "reward_addr": f"miner-{height % 3}",
        "diff": "115792089237316195423570985008687907853269984665640564039457584007908834671663",
    }
    block.update(extra)
    return block

def make_chain(height=100, count=15, tx_count=2, info=None):
    """Routes for a node at ``height`` that can serve its last ``count`` blocks."""
    routes = {
        "/info": dict({"height": height, "peers": 12, "weave_size": 987654321}, **(info or {})),
    }
    for h in range(height - count + 1, height + 1):
        routes[f"/block/height/{h}"] = make_block(h, tx_count=tx_count)
    return routes

@pytest.fixture
def chain_routes():
    return make_chain()

@pytest.fixture
def node_session(chain_routes):
    return FakeNodeSession(chain_routes)

@pytest.fixture
def node_client(node_session):
    return NodeClient(base_url=NODE_URL, session=node_session, max_concurrency=4)
