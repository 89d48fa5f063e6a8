# File: src/bigfile_explorer/node/models.py
"""Records parsed from the node's JSON.

The node does not guarantee any field, and some numeric fields arrive as
strings, so every field is read through a coercing helper and falls back to a
neutral default instead of raising.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]

def as_int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default

def as_number(value: Any, default: Number = 0) -> Number:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

def as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)

def as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []

def _present(payload: Dict[str, Any], key: str) -> bool:
    return payload.get(key) is not None

@dataclass
class NodeInfo:
    height: int = 0
    peers: int = 0
    blocks: int = 0
    weave_size: Optional[int] = None
    network_size: int = 0
    current_diff: Number = 0
    tx_count: int = 0
    tx_throughput: Number = 0
    storage_cost: Number = 0
    block_time: Optional[Number] = None
    current_timestamp: Optional[Number] = None
    tx_pending: int = 0

    @classmethod
    def from_json(cls, payload: Any) -> "NodeInfo":
        if not isinstance(payload, dict):
            payload = {}

        # Some node builds report a peer count, others the peer list itself
        peers = payload.get("peers")
        peer_count = len(peers) if isinstance(peers, (list, tuple)) else as_int(peers)

        pending = payload.get("tx_pending")
        pending_count = len(pending) if isinstance(pending, (list, tuple)) else as_int(pending)

        block_time = payload.get("current_block_time", payload.get("block_time"))

        return cls(
            height=as_int(payload.get("height")),
            peers=peer_count,
            blocks=as_int(payload.get("blocks")),
            weave_size=as_int(payload["weave_size"]) if _present(payload, "weave_size") else None,
            network_size=as_int(payload.get("network_size")),
            current_diff=as_number(payload.get("current_diff", payload.get("diff"))),
            tx_count=as_int(payload.get("tx_count")),
            tx_throughput=as_number(payload.get("tx_throughput")),
            storage_cost=as_number(payload.get("storage_cost")),
            block_time=as_number(block_time) if block_time is not None else None,
            current_timestamp=(
                as_number(payload["current_timestamp"])
                if _present(payload, "current_timestamp") else None
            ),
            tx_pending=pending_count
        )

@dataclass
class NodeBlock:
    height: int
    indep_hash: str = ""
    previous_block: str = ""
    timestamp: int = 0
    weave_size: int = 0
    block_size: Optional[int] = None
    txs: List[Any] = field(default_factory=list)
    reward_addr: str = ""
    diff: Number = 0

    @classmethod
    def from_json(cls, payload: Any, height: Optional[int] = None) -> "NodeBlock":
        """Parse a block; ``height`` is used when the payload omits it."""
        if not isinstance(payload, dict):
            payload = {}
        return cls(
            height=as_int(payload.get("height"), height if height is not None else 0),
            indep_hash=as_str(payload.get("indep_hash", payload.get("hash"))),
            previous_block=as_str(payload.get("previous_block")),
            timestamp=as_int(payload.get("timestamp")),
            weave_size=as_int(payload.get("weave_size")),
            block_size=as_int(payload["block_size"]) if _present(payload, "block_size") else None,
            txs=as_list(payload.get("txs")),
            reward_addr=as_str(payload.get("reward_addr")),
            diff=as_number(payload.get("diff"))
        )

    @property
    def tx_count(self) -> int:
        return len(self.txs)

    @property
    def tx_ids(self) -> List[str]:
        """Transaction ids whether the node embedded ids or full records."""
        ids = []
        for tx in self.txs:
            if isinstance(tx, dict):
                if tx.get("id"):
                    ids.append(as_str(tx["id"]))
            elif tx:
                ids.append(as_str(tx))
        return ids

    @property
    def size(self) -> int:
        return self.weave_size or self.block_size or 0

    @property
    def uploaded_bytes(self) -> int:
        """Data carried by this block's transactions."""
        if self.block_size is not None:
            return self.block_size
        return sum(as_int(tx.get("data_size")) for tx in self.txs if isinstance(tx, dict))

@dataclass
class NodeTransaction:
    id: str
    owner: str = ""
    target: str = ""
    fee: int = 0
    data_size: int = 0
    data_root: str = ""
    tags: List[Dict[str, str]] = field(default_factory=list)
    block_height: Optional[int] = None
    block_hash: str = ""
    timestamp: Optional[int] = None

    @classmethod
    def from_json(cls, payload: Any, tx_id: str = "") -> "NodeTransaction":
        if not isinstance(payload, dict):
            payload = {}

        tags = []
        for tag in as_list(payload.get("tags")):
            if isinstance(tag, dict):
                tags.append({"name": as_str(tag.get("name")), "value": as_str(tag.get("value"))})

        return cls(
            id=as_str(payload.get("id"), tx_id),
            owner=as_str(payload.get("owner")),
            target=as_str(payload.get("target")),
            fee=as_int(payload.get("reward", payload.get("fee"))),
            data_size=as_int(payload.get("data_size")),
            data_root=as_str(payload.get("data_root")),
            tags=tags,
            block_height=as_int(payload["block_height"]) if _present(payload, "block_height") else None,
            block_hash=as_str(payload.get("block_indep_hash")),
            timestamp=as_int(payload["timestamp"]) if _present(payload, "timestamp") else None
        )
