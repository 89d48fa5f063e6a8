# File: src/bigfile_explorer/api/routes/metrics.py
from fastapi import APIRouter, Depends, Request, Response
from typing import List

from ...explorer.api import ExplorerAPI
from ...explorer.models import GrowthPoint, HashRatePoint, HistoricalMetrics, NetworkHealth, RatePoint
from ...monitoring.metrics import CONTENT_TYPE
from .explorer import get_explorer

router = APIRouter(prefix="/api")

@router.get("/metrics")
async def get_metrics(request: Request):
    body = await request.app.state.metrics.collect()
    return Response(content=body, media_type=CONTENT_TYPE)

@router.get("/metrics/historical", response_model=HistoricalMetrics)
async def get_historical(explorer: ExplorerAPI = Depends(get_explorer)):
    # Placeholder data: flagged as synthetic in the payload
    return explorer.get_historical_metrics()

@router.get("/metrics/network-growth", response_model=List[GrowthPoint])
async def get_network_growth(explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_network_growth()

@router.get("/metrics/transaction-rate", response_model=List[RatePoint])
async def get_transaction_rate(explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_transaction_rate()

@router.get("/metrics/hash-rate", response_model=List[HashRatePoint])
async def get_hash_rate(explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_hash_rate()

@router.get("/metrics/health", response_model=NetworkHealth)
async def get_health(explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_network_health()
