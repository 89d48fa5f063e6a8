# File: src/bigfile_explorer/api/server.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config.settings import ExplorerConfig
from ..exceptions import NodeError, NodeNotFoundError
from ..explorer.aggregator import DashboardAggregator, DashboardSettings
from ..explorer.api import ExplorerAPI
from ..explorer.cache import DashboardCache
from ..monitoring.metrics import MetricsCollector
from ..node.client import NodeClient
from ..utils.config import Config
from ..utils.logger import get_logger
from .routes import dashboard_router, explorer_router, metrics_router

logger = get_logger(__name__)

def create_app(
    config: Optional[ExplorerConfig] = None,
    client: Optional[NodeClient] = None,
    cache: Optional[DashboardCache] = None
) -> FastAPI:
    config = config or ExplorerConfig(config_path=None)
    client = client or NodeClient.from_config(config)
    settings = DashboardSettings.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Explorer backend using node {client.base_url}")
        yield
        await client.close()

    app = FastAPI(title="BigFile Explorer API", lifespan=lifespan)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.client = client
    app.state.aggregator = DashboardAggregator(
        client,
        settings=settings,
        cache=cache if cache is not None else DashboardCache(ttl=settings.cache_ttl)
    )
    app.state.explorer = ExplorerAPI.from_config(client, config)
    app.state.metrics = MetricsCollector(
        client, prefix=config.get("monitoring.metrics_prefix", Config.METRICS_PREFIX)
    )

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(NodeNotFoundError)
    async def node_not_found(request: Request, exc: NodeNotFoundError):
        return JSONResponse(status_code=404, content={"error": "Not found", "details": str(exc)})

    @app.exception_handler(NodeError)
    async def node_error(request: Request, exc: NodeError):
        logger.error(f"{request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Upstream node unavailable", "details": str(exc)}
        )

    # Include routers
    app.include_router(dashboard_router)
    app.include_router(explorer_router)
    app.include_router(metrics_router)

    return app
