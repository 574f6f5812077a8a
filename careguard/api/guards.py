"""Route guards for FastAPI applications.

Provides dependencies that enforce careguard decisions on endpoints:
401 when the request carries no role, 403 when the resolver denies.
The same "Insufficient permissions" detail is returned for unknown roles
and for known roles lacking a grant.
"""

from typing import Any, Optional

from fastapi import Depends, HTTPException, Request, status

from careguard.common.logger import get_logger
from careguard.rbac import Action, RouteCatalog

from .deps import get_resolver, get_route_catalog, require_role

logger = get_logger("careguard.api")


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Insufficient permissions",
    )


class PermissionDependency:
    """
    FastAPI dependency checking one action on one module.

    Usage:
        @router.delete("/invoices/{id}", dependencies=[Depends(PermissionDependency("invoices", "delete"))])
        async def delete_invoice(id: str):
            ...
    """

    def __init__(self, module: str, action: Any = Action.READ):
        self.module = module
        self.action = action

    async def __call__(self, request: Request) -> str:
        role = require_role(request)
        resolver = get_resolver(request)

        if not resolver.has_permission(role, self.module, self.action):
            raise _forbidden()

        return role


class RouteAccessDependency:
    """
    FastAPI dependency gating a request path through the route catalog.

    The request path, minus ``prefix``, is looked up in the catalog and read
    access on its module is required. Paths missing from the catalog are
    denied.

    Usage:
        pages = APIRouter(prefix="/pages", dependencies=[Depends(RouteAccessDependency(prefix="/pages"))])
    """

    def __init__(self, catalog: Optional[RouteCatalog] = None, prefix: str = ""):
        self.catalog = catalog
        self.prefix = prefix.rstrip("/")

    def route_path(self, request: Request) -> str:
        path = request.url.path
        if self.prefix and (path == self.prefix or path.startswith(self.prefix + "/")):
            path = path[len(self.prefix):] or "/"
        return path

    async def __call__(self, request: Request) -> str:
        role = require_role(request)
        resolver = get_resolver(request)
        catalog = self.catalog if self.catalog is not None else get_route_catalog(request)
        path = self.route_path(request)

        if not resolver.can_access_route(role, path, catalog):
            logger.debug(f"Route {path} denied for role {role}")
            raise _forbidden()

        return role


def require_permission(module: str, action: Any = Action.READ):
    """
    Shorthand for ``Depends(PermissionDependency(module, action))``.

    Usage:
        @router.get("/patients")
        async def list_patients(role: str = require_permission("patients")):
            ...
    """
    return Depends(PermissionDependency(module, action))
