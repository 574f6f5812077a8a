"""RBAC (Role-Based Access Control) module for careguard.

This module defines the grant model, policy table, route catalog and the
permission resolver.
"""

from .catalog import RouteCatalog, RouteEntry
from .permissions import Action, Grant
from .exceptions import ConfigurationError
from .policy import PolicyTable, RolePolicy, parse_policy_table
from .resolver import AccessDecision, DecisionReason, PermissionResolver, logging_observer

__all__ = [
    "AccessDecision",
    "Action",
    "ConfigurationError",
    "DecisionReason",
    "Grant",
    "PermissionResolver",
    "PolicyTable",
    "RolePolicy",
    "RouteCatalog",
    "RouteEntry",
    "logging_observer",
    "parse_policy_table",
]
