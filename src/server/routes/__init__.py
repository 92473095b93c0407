"""Route registration helpers."""

from .auth import register_auth_routes
from .health import register_health_routes
from .tasks import register_task_routes

__all__ = [
    "register_auth_routes",
    "register_health_routes",
    "register_task_routes",
]
