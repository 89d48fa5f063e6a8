# File: src/bigfile_explorer/api/routes/dashboard.py
from fastapi import APIRouter, Request

from ...explorer.models import DashboardSnapshot

router = APIRouter(prefix="/api")

@router.get("/dashboard", response_model=DashboardSnapshot)
async def get_dashboard(request: Request):
    return await request.app.state.aggregator.get_dashboard()
