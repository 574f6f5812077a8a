"""CLI for inspecting a policy table.

Usage:
    python -m careguard <policy-file|-> <role>                  # visible navigation
    python -m careguard <policy-file|-> <role> <module> <action> # single decision

``-`` selects the built-in healthcare policy. Navigation is listed for the
catalog named by CAREGUARD_CATALOG_FILE, or the built-in catalog. Exit
status is 0 when allowed, 1 when denied, and 2 on usage or configuration
errors.
"""

import sys

from .common.logger import setup_logger
from .common.settings import get_settings
from .rbac import ConfigurationError, PermissionResolver
from .rbac.loader import load_policy_table, load_route_catalog
from .rbac.roles import DEFAULT_ROUTE_CATALOG, build_default_policy

USAGE = "Usage: python -m careguard <policy-file|-> <role> [<module> <action>]"


def main(argv=None) -> int:
    """Main entry point for the policy CLI."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (2, 4):
        print(USAGE, file=sys.stderr)
        return 2

    setup_logger("careguard", level="WARNING")

    policy_source, role = args[0], args[1]
    try:
        table = build_default_policy() if policy_source == "-" else load_policy_table(policy_source)
        resolver = PermissionResolver(table)
        catalog_file = get_settings().catalog_file
        catalog = load_route_catalog(catalog_file) if catalog_file else DEFAULT_ROUTE_CATALOG
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ConfigurationError as e:
        print(f"Invalid policy or catalog: {e}", file=sys.stderr)
        return 2

    if len(args) == 4:
        module, action = args[2], args[3]
        allowed = resolver.has_permission(role, module, action)
        print(f"{role} {action} {module}: {'ALLOWED' if allowed else 'DENIED'}")
        return 0 if allowed else 1

    items = resolver.get_visible_navigation(role, catalog)
    print(f"Role: {role}{' (full access)' if resolver.is_full_access(role) else ''}")
    print(f"Visible navigation: {len(items)} of {len(catalog)}")
    for item in items:
        print(f"  {item.path:<14} {item.label} [{item.module}]")
    return 0 if items else 1


if __name__ == "__main__":
    sys.exit(main())
