"""Permission resolver for careguard.

Answers authorization queries against an immutable policy table:

- has_permission: may a role perform an action on a module?
- get_role_permissions: what is the role's full grant list?
- can_access_route: may a role open a page of the route catalog?
- get_visible_navigation: which catalog entries does a role see?

Every query is total. Unknown roles, modules, actions and paths are
denied, never reported as errors, so a typo in a role name cannot crash a
request handler or reveal which roles exist. Only construction raises.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Tuple

from ..common.logger import get_logger
from .catalog import RouteCatalog, RouteEntry
from .exceptions import ConfigurationError
from .permissions import Action, Grant, normalize_token
from .policy import PolicyTable, parse_policy_table

logger = get_logger("careguard.resolver")


class DecisionReason(str, Enum):
    """Why a permission check was allowed or denied."""

    GRANTED = "granted"
    FULL_ACCESS = "full_access"
    UNKNOWN_ROLE = "unknown_role"
    NO_GRANT = "no_grant"
    ACTION_NOT_GRANTED = "action_not_granted"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a single permission check, as passed to observers."""

    role: Any
    module: Any
    action: Any
    allowed: bool
    reason: DecisionReason


DecisionObserver = Callable[[AccessDecision], None]


class PermissionResolver:
    """Resolves role permissions from an immutable policy table.

    Safe to share between threads and async tasks: nothing is mutated after
    construction. To change policy, build a new resolver and swap the
    reference held by the application.
    """

    def __init__(
        self,
        policy_table: Any,
        observer: Optional[DecisionObserver] = None,
        allowed_actions: Optional[Iterable[str]] = None,
    ):
        """
        Initialize with a policy table.

        Args:
            policy_table: PolicyTable or a mapping in the serialized form
            observer: Optional callable invoked with every AccessDecision
            allowed_actions: Closed action set used when parsing a mapping

        Raises:
            ConfigurationError: If the table is empty or malformed
        """
        self._policy = parse_policy_table(policy_table, allowed_actions=allowed_actions)
        self._observer = observer
        logger.info(f"Permission resolver ready with {len(self._policy)} roles")

    @property
    def policy(self) -> PolicyTable:
        return self._policy

    @property
    def roles(self) -> Tuple[str, ...]:
        return self._policy.roles

    def is_full_access(self, role: Any) -> bool:
        """Check if a role bypasses per-module checks."""
        policy = self._policy.get(normalize_token(role))
        return bool(policy and policy.full_access)

    def has_permission(self, role: Any, module: Any, action: Any) -> bool:
        """Check if a role may perform an action on a module."""
        decision = self._evaluate(role, module, action)
        self._notify(decision)
        return decision.allowed

    def has_any_permission(self, role: Any, module: Any, actions: Any) -> bool:
        """Check if a role has at least one of the actions on a module."""
        return any(self.has_permission(role, module, a) for a in _as_action_list(actions))

    def has_all_permissions(self, role: Any, module: Any, actions: Any) -> bool:
        """Check if a role has every one of the actions on a module.

        An empty action list is denied.
        """
        action_list = _as_action_list(actions)
        if not action_list:
            return False
        return all(self.has_permission(role, module, a) for a in action_list)

    def get_role_permissions(self, role: Any) -> List[Grant]:
        """Get a copy of the role's grants (empty for unknown roles)."""
        policy = self._policy.get(normalize_token(role))
        if policy is None:
            return []
        return list(policy.grants)

    def get_accessible_modules(self, role: Any, action: Any = Action.READ) -> List[str]:
        """Get the modules, in grant order, on which a role may perform an action."""
        action_key = normalize_token(action)
        policy = self._policy.get(normalize_token(role))
        if policy is None or action_key is None:
            return []
        if policy.full_access:
            return [grant.module for grant in policy.grants]
        return [grant.module for grant in policy.grants if action_key in grant.actions]

    def can_access_route(self, role: Any, route_path: Any, route_catalog: Any) -> bool:
        """Check if a role may open a route.

        Read access on the route's module is the gate. Routes missing from
        the catalog, or mapped to no module, are denied for every role.
        """
        catalog = self._coerce_catalog(route_catalog)
        if catalog is None:
            return False
        module = catalog.module_for(route_path)
        if module is None:
            return False
        return self.has_permission(role, module, Action.READ)

    def get_visible_navigation(self, role: Any, route_catalog: Any) -> List[RouteEntry]:
        """Filter a route catalog down to the entries a role may read.

        Catalog order is preserved. Full-access roles get the whole catalog.
        """
        catalog = self._coerce_catalog(route_catalog)
        if catalog is None:
            return []
        if self.is_full_access(role):
            return list(catalog.entries)
        return [
            entry
            for entry in catalog
            if entry.module is not None and self.has_permission(role, entry.module, Action.READ)
        ]

    def _evaluate(self, role: Any, module: Any, action: Any) -> AccessDecision:
        policy = self._policy.get(normalize_token(role))
        if policy is None:
            return AccessDecision(role, module, action, False, DecisionReason.UNKNOWN_ROLE)

        module_key = normalize_token(module)
        action_key = normalize_token(action)
        if module_key is None or action_key is None:
            return AccessDecision(role, module, action, False, DecisionReason.INVALID_INPUT)

        if policy.full_access:
            return AccessDecision(role, module_key, action_key, True, DecisionReason.FULL_ACCESS)

        grant = policy.grant_for(module_key)
        if grant is None:
            return AccessDecision(role, module_key, action_key, False, DecisionReason.NO_GRANT)
        if not grant.allows(action_key):
            return AccessDecision(
                role, module_key, action_key, False, DecisionReason.ACTION_NOT_GRANTED
            )
        return AccessDecision(role, module_key, action_key, True, DecisionReason.GRANTED)

    def _notify(self, decision: AccessDecision) -> None:
        if self._observer is None:
            return
        try:
            self._observer(decision)
        except Exception:
            logger.exception("Access decision observer raised; decision unchanged")

    @staticmethod
    def _coerce_catalog(route_catalog: Any) -> Optional[RouteCatalog]:
        try:
            return RouteCatalog.coerce(route_catalog)
        except (ConfigurationError, TypeError) as e:
            logger.error(f"Invalid route catalog, denying access: {e}")
            return None


def logging_observer(
    log: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
) -> DecisionObserver:
    """Build an observer that writes every decision to a logger."""
    target = log or logger

    def observe(decision: AccessDecision) -> None:
        target.log(
            level,
            "has_permission(%s, %s, %s) = %s [%s]",
            decision.role,
            decision.module,
            decision.action,
            decision.allowed,
            decision.reason.value,
        )

    return observe


def _as_action_list(actions: Any) -> list:
    if actions is None:
        return []
    if isinstance(actions, (str, Enum)):
        return [actions]
    try:
        return list(actions)
    except TypeError:
        return []
