from .dashboard import router as dashboard_router
from .explorer import router as explorer_router
from .metrics import router as metrics_router

__all__ = ["dashboard_router", "explorer_router", "metrics_router"]
