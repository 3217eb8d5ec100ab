# routers/__init__.py

from fastapi import APIRouter

from .auth import router as auth_router
from .navigation import router as navigation_router
from .admins import router as admins_router
from .workers import router as workers_router
from .categories import router as categories_router
from .offices import router as offices_router
from .dashboard import router as dashboard_router
from .health import router as health_router


# Everything the admin console talks to, in registration order
api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(navigation_router)

# Record management
api_router.include_router(admins_router)
api_router.include_router(workers_router)
api_router.include_router(categories_router)
api_router.include_router(offices_router)

api_router.include_router(dashboard_router)
api_router.include_router(health_router)

__all__ = ["api_router"]
