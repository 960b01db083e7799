from wopihost.api.http.health import router as health_router
from wopihost.api.http.wopi import router as wopi_router

__all__ = [
    "health_router",
    "wopi_router"
]
