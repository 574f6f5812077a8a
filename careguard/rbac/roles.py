"""Default role definitions for the healthcare admin portal.

Defines the 6 standard roles with their grants:
1. Patient - Own health records, resources, support and shop
2. Super Admin - Full access to every module
3. Healthcare Provider - Clinical work without deletes or billing
4. Practice Manager - Operations, billing and settings
5. Receptionist - Front desk: patients, sessions and messages
6. Billing Specialist - Invoices and insurance
"""

from typing import Dict, List

from .catalog import RouteCatalog, RouteEntry
from .permissions import Action, Grant, build_grants
from .policy import PolicyTable, RolePolicy
from .resolver import PermissionResolver

C, R, U, D = Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE
CRUD = (C, R, U, D)


PATIENT_GRANTS = build_grants(
    ("dashboard", [R]),
    ("health", [R, U]),
    ("resources", [R]),
    ("support", [C, R, U]),
    ("shop", [R, C]),
)

# Explicit grants are kept for reference; the full-access flag covers the rest
SUPER_ADMIN_GRANTS = build_grants(
    ("dashboard", [R]),
    ("patients", CRUD),
    ("sessions", CRUD),
    ("forms", CRUD),
    ("form-builder", CRUD),
    ("orders", CRUD),
    ("invoices", CRUD),
    ("tasks", CRUD),
    ("insurance", CRUD),
    ("messages", CRUD),
    ("providers", CRUD),
    ("pharmacies", CRUD),
    ("tags", CRUD),
    ("discounts", CRUD),
    ("products", CRUD),
    ("resources", CRUD),
    ("settings", CRUD),
    ("audit", [R]),
)

HEALTHCARE_PROVIDER_GRANTS = build_grants(
    ("dashboard", [R]),
    ("patients", [C, R, U]),
    ("sessions", [C, R, U]),
    ("forms", [C, R, U]),
    ("form-builder", [C, R, U]),
    ("orders", [C, R, U]),
    ("tasks", [C, R, U]),
    ("messages", [C, R, U]),
    ("resources", [R]),
)

PRACTICE_MANAGER_GRANTS = build_grants(
    ("dashboard", [R]),
    ("patients", [R, U]),
    ("sessions", [R, U]),
    ("forms", CRUD),
    ("form-builder", CRUD),
    ("orders", [R, U]),
    ("invoices", CRUD),
    ("tasks", CRUD),
    ("insurance", CRUD),
    ("messages", [C, R, U]),
    ("providers", [C, R, U]),
    ("pharmacies", [C, R, U]),
    ("discounts", CRUD),
    ("products", [R, U]),
    ("settings", [R, U]),
)

RECEPTIONIST_GRANTS = build_grants(
    ("dashboard", [R]),
    ("patients", [C, R, U]),
    ("sessions", [C, R, U]),
    ("forms", [C, R, U]),
    ("tasks", [R, U]),
    ("messages", [C, R, U]),
)

BILLING_SPECIALIST_GRANTS = build_grants(
    ("dashboard", [R]),
    ("patients", [R]),
    ("orders", [R, U]),
    ("invoices", CRUD),
    ("insurance", CRUD),
    ("tasks", [R, U]),
)


DEFAULT_ROLES: Dict[str, dict] = {
    "patient": {
        "name": "Patient",
        "description": "Patient portal: own health data, resources, support and shop",
        "grants": PATIENT_GRANTS,
        "full_access": False,
    },
    "super_admin": {
        "name": "Super Admin",
        "description": "Full access to every module",
        "grants": SUPER_ADMIN_GRANTS,
        "full_access": True,
    },
    "healthcare_provider": {
        "name": "Healthcare Provider",
        "description": "Clinical work on patients, sessions, forms, orders and tasks",
        "grants": HEALTHCARE_PROVIDER_GRANTS,
        "full_access": False,
    },
    "practice_manager": {
        "name": "Practice Manager",
        "description": "Practice operations, billing, catalog and settings",
        "grants": PRACTICE_MANAGER_GRANTS,
        "full_access": False,
    },
    "receptionist": {
        "name": "Receptionist",
        "description": "Front desk: patient intake, scheduling and messages",
        "grants": RECEPTIONIST_GRANTS,
        "full_access": False,
    },
    "billing_specialist": {
        "name": "Billing Specialist",
        "description": "Invoices and insurance, read access to patients and orders",
        "grants": BILLING_SPECIALIST_GRANTS,
        "full_access": False,
    },
}


DEFAULT_ROUTE_CATALOG = RouteCatalog([
    RouteEntry("/", "dashboard", "Dashboard", "LayoutDashboard"),
    RouteEntry("/patients", "patients", "Patients", "Users"),
    RouteEntry("/sessions", "sessions", "Sessions", "Calendar"),
    RouteEntry("/forms", "forms", "Forms", "FileText"),
    RouteEntry("/orders", "orders", "Orders", "ShoppingCart"),
    RouteEntry("/invoices", "invoices", "Invoices", "Receipt"),
    RouteEntry("/tasks", "tasks", "Tasks", "CheckSquare"),
    RouteEntry("/insurance", "insurance", "Insurance", "Shield"),
    RouteEntry("/messages", "messages", "Messages", "MessageSquare"),
    RouteEntry("/providers", "providers", "Providers", "UserCheck"),
    RouteEntry("/pharmacies", "pharmacies", "Pharmacies", "Building"),
    RouteEntry("/tags", "tags", "Tags", "Tag"),
    RouteEntry("/discounts", "discounts", "Discounts", "Percent"),
    RouteEntry("/products", "products", "Products", "Package"),
    RouteEntry("/resources", "resources", "Resources", "BookOpen"),
    RouteEntry("/settings", "settings", "Settings", "Settings"),
    RouteEntry("/audit", "audit", "Audit Log", "FileSearch"),
])

# Routes that resolve to a module but are not shown in the sidebar
ROUTE_ALIASES = RouteCatalog([
    RouteEntry("/dashboard", "dashboard", "Dashboard", "LayoutDashboard"),
])


def build_default_policy() -> PolicyTable:
    """Build the policy table for the default roles."""
    return PolicyTable({
        key: RolePolicy(role=key, grants=role["grants"], full_access=role["full_access"])
        for key, role in DEFAULT_ROLES.items()
    })


def build_default_routes() -> RouteCatalog:
    """Navigation catalog followed by alias routes, for route guards."""
    return RouteCatalog(list(DEFAULT_ROUTE_CATALOG) + list(ROUTE_ALIASES))


def get_default_role_grants(role_key: str) -> List[Grant]:
    """Get the grants of a default role."""
    role = DEFAULT_ROLES.get(role_key)
    if not role:
        raise ValueError(f"Unknown default role: {role_key}")
    return list(role["grants"])


def build_default_resolver(**kwargs) -> PermissionResolver:
    """Build a PermissionResolver over the default policy."""
    return PermissionResolver(build_default_policy(), **kwargs)
