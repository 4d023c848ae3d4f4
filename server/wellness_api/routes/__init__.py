"""API route modules."""
from .auth import router as auth_router
from .metrics import router as metrics_router

__all__ = [
    "auth_router",
    "metrics_router",
]
