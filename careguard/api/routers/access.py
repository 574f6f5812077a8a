"""Access endpoints: navigation, grants and route decisions for the caller's role."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from careguard.rbac import Action, PermissionResolver, RouteCatalog

from ..deps import get_navigation_catalog, get_resolver, get_route_catalog, require_role

router = APIRouter(prefix="/api", tags=["access"])


# Schemas
class NavItem(BaseModel):
    path: str
    module: Optional[str] = None
    label: str = ""
    icon: Optional[str] = None


class NavigationResponse(BaseModel):
    role: str
    items: List[NavItem] = Field(default_factory=list)


class GrantInfo(BaseModel):
    module: str
    actions: List[str]


class PermissionsResponse(BaseModel):
    role: str
    full_access: bool
    grants: List[GrantInfo] = Field(default_factory=list)


class RouteAccessResponse(BaseModel):
    role: str
    path: str
    allowed: bool


class PermissionCheckResponse(BaseModel):
    role: str
    module: str
    action: str
    allowed: bool


# Endpoints
@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(
    role: str = Depends(require_role),
    resolver: PermissionResolver = Depends(get_resolver),
    catalog: RouteCatalog = Depends(get_navigation_catalog),
):
    """Navigation entries visible to the current role, in catalog order."""
    items = resolver.get_visible_navigation(role, catalog)
    return NavigationResponse(
        role=role,
        items=[NavItem(**entry.to_dict()) for entry in items],
    )


@router.get("/permissions", response_model=PermissionsResponse)
async def get_permissions(
    role: str = Depends(require_role),
    resolver: PermissionResolver = Depends(get_resolver),
):
    """Grant list of the current role."""
    grants = resolver.get_role_permissions(role)
    return PermissionsResponse(
        role=role,
        full_access=resolver.is_full_access(role),
        grants=[GrantInfo(**grant.to_dict()) for grant in grants],
    )


@router.get("/access", response_model=RouteAccessResponse)
async def check_route_access(
    path: str = Query(..., description="Application route to check"),
    role: str = Depends(require_role),
    resolver: PermissionResolver = Depends(get_resolver),
    catalog: RouteCatalog = Depends(get_route_catalog),
):
    """Whether the current role may open a route."""
    return RouteAccessResponse(
        role=role,
        path=path,
        allowed=resolver.can_access_route(role, path, catalog),
    )


@router.get("/check", response_model=PermissionCheckResponse)
async def check_permission(
    module: str = Query(..., min_length=1),
    action: str = Query(Action.READ.value, min_length=1),
    role: str = Depends(require_role),
    resolver: PermissionResolver = Depends(get_resolver),
):
    """Whether the current role may perform an action on a module."""
    return PermissionCheckResponse(
        role=role,
        module=module,
        action=action,
        allowed=resolver.has_permission(role, module, action),
    )
