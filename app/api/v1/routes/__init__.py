"""
API Routes
"""
from app.api.v1.routes.decision import router as decision_router, ROUTE_PATH

__all__ = [
    "decision_router",
    "ROUTE_PATH",
]
