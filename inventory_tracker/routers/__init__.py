from inventory_tracker.routers.auth import router as auth_router
from inventory_tracker.routers.health import router as health_router
from inventory_tracker.routers.inventory import router as inventory_router

__all__ = [
    "auth_router",
    "health_router",
    "inventory_router",
]
