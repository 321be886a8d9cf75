from watchconsole.api.console import router as console_router
from watchconsole.api.health import router as health_router

__all__ = [
    "console_router",
    "health_router",
]
