from typing import Optional

from fastapi import HTTPException, Request, status

from careguard.common.settings import Settings, get_settings
from careguard.rbac import PermissionResolver, RouteCatalog


def get_resolver(request: Request) -> PermissionResolver:
    """Resolver for this request: request state first, then app state."""
    resolver = getattr(request.state, "resolver", None) or getattr(
        request.app.state, "resolver", None
    )
    if resolver is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Access control is not configured",
        )
    return resolver


def get_navigation_catalog(request: Request) -> RouteCatalog:
    """Catalog rendered as navigation."""
    return getattr(request.app.state, "catalog", None) or RouteCatalog()


def get_route_catalog(request: Request) -> RouteCatalog:
    """Catalog used by route guards (navigation plus alias routes)."""
    routes = getattr(request.app.state, "routes", None)
    return routes or get_navigation_catalog(request)


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_current_role(request: Request) -> Optional[str]:
    """Role established by the upstream authentication layer.

    Middleware may set ``request.state.role``; otherwise the trusted role
    header is read. Returns None when no role is present.
    """
    role = getattr(request.state, "role", None)
    if role:
        return role
    header = get_app_settings(request).role_header
    role = request.headers.get(header, "").strip()
    return role or None


def require_role(request: Request) -> str:
    """Current role, or 401 if the request carries none."""
    role = get_current_role(request)
    if not role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return role
