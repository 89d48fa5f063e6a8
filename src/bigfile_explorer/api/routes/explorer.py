# File: src/bigfile_explorer/api/routes/explorer.py
from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional

from ...explorer.api import ExplorerAPI
from ...explorer.models import BlockDetail, BlockSummary, TransactionCount, TransactionSummary

router = APIRouter(prefix="/api")

def get_explorer(request: Request) -> ExplorerAPI:
    return request.app.state.explorer

@router.get("/blocks", response_model=List[BlockSummary])
async def get_latest_blocks(
    limit: Optional[int] = Query(None, ge=1, le=100),
    explorer: ExplorerAPI = Depends(get_explorer)
):
    return await explorer.get_latest_blocks(limit)

@router.get("/block/{block_id}", response_model=BlockDetail)
async def get_block(block_id: str, explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_block(block_id)

@router.get("/tx/{tx_id}", response_model=TransactionSummary)
async def get_transaction(tx_id: str, explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_transaction(tx_id)

@router.get("/transactions/count", response_model=TransactionCount)
async def get_transaction_count(explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_transaction_count()
