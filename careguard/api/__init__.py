"""FastAPI integration: route guards and access endpoints."""

from .app import create_app
from .guards import PermissionDependency, RouteAccessDependency, require_permission

__all__ = [
    "PermissionDependency",
    "RouteAccessDependency",
    "create_app",
    "require_permission",
]
