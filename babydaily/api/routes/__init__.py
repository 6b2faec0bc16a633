"""Package routes: exports every FastAPI router."""

from .auth import router as auth_router
from .babies import router as babies_router
from .export import router as export_router
from .health import router as health_router
from .records import diapers_router, feedings_router, growth_router, sleeps_router
from .users import router as users_router
from .views import router as views_router

__all__ = [
    "auth_router", "babies_router", "diapers_router", "export_router", "feedings_router",
    "growth_router", "health_router", "sleeps_router", "users_router", "views_router",
]
