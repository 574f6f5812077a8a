"""Application factory for the careguard API."""

from typing import Optional

from fastapi import FastAPI

from careguard import __version__
from careguard.common.logger import configure_logging, get_logger
from careguard.common.settings import Settings, get_settings
from careguard.rbac import PermissionResolver, RouteCatalog
from careguard.rbac.loader import load_policy_table, load_route_catalog
from careguard.rbac.roles import DEFAULT_ROUTE_CATALOG, build_default_policy, build_default_routes

from .routers import access

logger = get_logger("careguard.api")


def build_resolver(settings: Settings) -> PermissionResolver:
    """Resolver over the configured policy file, or the built-in policy."""
    if settings.policy_file:
        table = load_policy_table(settings.policy_file, allowed_actions=settings.allowed_actions_list)
    else:
        table = build_default_policy()
    return PermissionResolver(table)


def create_app(
    resolver: Optional[PermissionResolver] = None,
    catalog: Optional[RouteCatalog] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API.

    Raises:
        ConfigurationError: If the configured policy or catalog is malformed.
            Startup must not continue with a broken policy.
    """
    settings = settings or get_settings()

    configure_logging(settings)

    if resolver is None:
        resolver = build_resolver(settings)

    if catalog is not None:
        routes = catalog
    elif settings.catalog_file:
        catalog = routes = load_route_catalog(settings.catalog_file)
    else:
        catalog, routes = DEFAULT_ROUTE_CATALOG, build_default_routes()

    app = FastAPI(
        title=settings.app_name,
        description="Role-based access control for multi-role applications",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Replace app.state.resolver with a new resolver to change policy at runtime
    app.state.settings = settings
    app.state.resolver = resolver
    app.state.catalog = catalog
    app.state.routes = routes

    app.include_router(access.router)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": __version__,
            "roles": len(app.state.resolver.roles),
        }

    logger.info(f"careguard API ready: {len(resolver.roles)} roles, {len(catalog)} routes")
    return app
