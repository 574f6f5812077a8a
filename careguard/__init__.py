"""careguard: role-based access control for multi-role applications."""

from .rbac import (
    Action,
    ConfigurationError,
    Grant,
    PermissionResolver,
    PolicyTable,
    RouteCatalog,
    RouteEntry,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ConfigurationError",
    "Grant",
    "PermissionResolver",
    "PolicyTable",
    "RouteCatalog",
    "RouteEntry",
    "__version__",
]
