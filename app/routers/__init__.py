# app/routers/__init__.py

from .inventory.warehouse_router import router as warehouse_router
from .inventory.warehouse_location_router import router as warehouse_location_router
from .inventory.location_router import router as location_router
from .inventory.layout_router import router as layout_router
from .inventory.location_resolver_router import router as location_resolver_router


__all__ = [
"warehouse_router",
"warehouse_location_router",
"location_router",
"layout_router",
"location_resolver_router",
]
