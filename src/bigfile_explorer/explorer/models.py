# File: src/bigfile_explorer/explorer/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Union

Number = Union[int, float]

class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

class BlockSummary(CamelModel):
    height: int
    hash: str
    timestamp: int  # milliseconds
    size: int
    tx_count: int = Field(alias="txCount")

class TransactionSummary(BaseModel):
    id: str
    block_height: Optional[int] = None
    block_hash: str = ""
    data_size: int = 0
    timestamp: Optional[int] = None
    fee: int = 0
    data_root: str = ""
    owner: str = ""
    target: str = ""
    tags: List[Dict[str, str]] = []

class BlockDetail(BaseModel):
    hash: str
    height: int
    timestamp: int  # seconds
    previous_block: str
    txs: List[str]
    size: int
    miner: str = ""
    transactions: List[TransactionSummary] = []

class ChangeIndicator(CamelModel):
    value: float = 0
    is_positive: bool = Field(default=True, alias="isPositive")

class Changes(BaseModel):
    transactions: ChangeIndicator
    size: ChangeIndicator
    peers: ChangeIndicator

class CurrentStats(CamelModel):
    height: int
    peer_count: int = Field(alias="peerCount")
    total_transactions: int = Field(alias="totalTransactions")
    tps: float
    weave_size: int = Field(alias="weaveSize")
    network_size: int = Field(alias="networkSize")
    storage_cost: float = Field(alias="storageCost")
    active_addresses: int = Field(alias="activeAddresses")
    proof_rate: int = Field(alias="proofRate")
    changes: Changes

class TrendPoint(BaseModel):
    timestamp: str
    value: Number

class TrendSeries(CamelModel):
    data: List[TrendPoint]
    total_24h: Number = Field(alias="total24h")
    eod_estimate: Number = Field(alias="eodEstimate")

class Trends(CamelModel):
    transactions: TrendSeries
    weave_size: TrendSeries = Field(alias="weaveSize")
    data_uploaded: TrendSeries = Field(alias="dataUploaded")

class DashboardSnapshot(CamelModel):
    current: CurrentStats
    trends: Trends
    recent_blocks: List[BlockSummary] = Field(alias="recentBlocks")

class TransactionCount(CamelModel):
    total: int
    last_block: int = Field(alias="lastBlock")
    pending: int

class GrowthPoint(CamelModel):
    timestamp: str
    height: int
    size: int
    tx_count: int = Field(alias="txCount")

class RatePoint(BaseModel):
    timestamp: str
    height: int
    tps: int

class HashRatePoint(CamelModel):
    timestamp: str
    height: int
    hash_rate: Number = Field(alias="hashRate")

class HistoricalPoint(CamelModel):
    timestamp: str
    tps: float
    size: float
    hash_rate: float = Field(alias="hashRate")

class HistoricalMetrics(BaseModel):
    synthetic: bool = True
    data: List[HistoricalPoint]

class NetworkHealth(CamelModel):
    uptime: float
    block_time: float = Field(alias="blockTime")
    peer_health: int = Field(alias="peerHealth")
    synthetic: List[str] = ["uptime", "peerHealth"]
