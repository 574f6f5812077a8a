"""Policy table for careguard RBAC.

A policy table maps each role to its ordered grants and an optional
full-access flag. Tables are built once, validated up front, and never
mutated afterwards.

Serialized form (JSON or YAML)::

    {
        "billing_specialist": [
            {"module": "invoices", "actions": ["create", "read", "update", "delete"]},
            {"module": "patients", "actions": ["read"]}
        ],
        "super_admin": [{"*": true}],
        "auditor": {"full_access": false, "grants": [{"module": "audit", "actions": ["read"]}]}
    }
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..common.logger import get_logger
from .exceptions import ConfigurationError
from .permissions import Grant

logger = get_logger("careguard.policy")

FULL_ACCESS_KEYS = ("*", "full_access")


def merge_grants(grants: Iterable[Grant]) -> Tuple[Tuple[Grant, ...], List[str]]:
    """Merge grants that name the same module.

    The merged grant holds the union of actions and keeps the position of
    the first occurrence.

    Returns:
        Tuple of (merged grants, modules that had duplicates)
    """
    merged: Dict[str, Grant] = {}
    duplicates: List[str] = []
    for grant in grants:
        existing = merged.get(grant.module)
        if existing is None:
            merged[grant.module] = grant
        else:
            merged[grant.module] = existing.merge(grant)
            if grant.module not in duplicates:
                duplicates.append(grant.module)
    return tuple(merged.values()), duplicates


@dataclass(frozen=True)
class RolePolicy:
    """Grants and full-access flag for a single role."""

    role: str
    grants: Tuple[Grant, ...] = ()
    full_access: bool = False
    _index: Mapping[str, Grant] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        grants, duplicates = merge_grants(self.grants)
        if duplicates:
            logger.warning(
                f"Merged duplicate grants for role {self.role}: {', '.join(duplicates)}"
            )
        object.__setattr__(self, "grants", grants)
        object.__setattr__(
            self, "_index", MappingProxyType({g.module: g for g in grants})
        )

    def grant_for(self, module: str) -> Optional[Grant]:
        """Get the grant for a module, or None if the role has none."""
        return self._index.get(module)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_access": self.full_access,
            "grants": [g.to_dict() for g in self.grants],
        }


class PolicyTable:
    """Immutable mapping of role name to :class:`RolePolicy`."""

    def __init__(self, roles: Mapping[str, RolePolicy]):
        if not roles:
            raise ConfigurationError("Policy table is empty: at least one role is required")
        for name, policy in roles.items():
            if not isinstance(name, str) or not name:
                raise ConfigurationError(f"Invalid role name: {name!r}")
            if policy.role != name:
                raise ConfigurationError(
                    f"Role entry {name!r} holds the policy of role {policy.role!r}"
                )
        self._roles: Mapping[str, RolePolicy] = MappingProxyType(dict(roles))

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        allowed_actions: Optional[Iterable[str]] = None,
    ) -> "PolicyTable":
        """Parse a table from its serialized form."""
        return parse_policy_table(data, allowed_actions=allowed_actions)

    @property
    def roles(self) -> Tuple[str, ...]:
        return tuple(self._roles)

    def get(self, role: Any) -> Optional[RolePolicy]:
        """Get a role's policy, or None for unknown or non-string roles."""
        if not isinstance(role, str):
            return None
        return self._roles.get(role)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the table back to the mapping form."""
        return {name: policy.to_dict() for name, policy in self._roles.items()}

    def __contains__(self, role: object) -> bool:
        return isinstance(role, str) and role in self._roles

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __repr__(self) -> str:
        return f"PolicyTable(roles={list(self._roles)!r})"


def parse_policy_table(
    data: Any,
    allowed_actions: Optional[Iterable[str]] = None,
) -> PolicyTable:
    """Parse and validate a policy table.

    Args:
        data: A PolicyTable (checked against ``allowed_actions`` and returned
            unchanged) or a mapping of role name to role entry in the
            serialized form
        allowed_actions: If given, the closed set of actions this deployment
            accepts; any other action in the table is an error

    Returns:
        PolicyTable instance

    Raises:
        ConfigurationError: If the table is empty or malformed
    """
    allowed = frozenset(allowed_actions) if allowed_actions is not None else None

    if isinstance(data, PolicyTable):
        for role in data:
            _check_role_policy(data.get(role), allowed)
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Policy table must be a mapping of role to grants, got {type(data).__name__}"
        )
    if not data:
        raise ConfigurationError("Policy table is empty: at least one role is required")

    roles = {}
    for role, entry in data.items():
        if not isinstance(role, str) or not role.strip():
            raise ConfigurationError(f"Invalid role name: {role!r}")
        roles[role] = parse_role_policy(role, entry, allowed)

    logger.debug(f"Parsed policy table with {len(roles)} roles")
    return PolicyTable(roles)


def parse_role_policy(
    role: str,
    entry: Any,
    allowed_actions: Optional[frozenset] = None,
) -> RolePolicy:
    """Parse one role's entry (list form or mapping form)."""
    if isinstance(entry, RolePolicy):
        _check_role_policy(entry, allowed_actions)
        return entry

    full_access = False
    if entry is None:
        items: list = []
    elif isinstance(entry, Mapping):
        full_access = _parse_full_access_flag(role, entry)
        items = entry.get("grants") or []
        if not isinstance(items, (list, tuple)):
            raise ConfigurationError(f"Grants for role {role!r} must be a list")
    elif isinstance(entry, (list, tuple)):
        items = list(entry)
    else:
        raise ConfigurationError(
            f"Entry for role {role!r} must be a list of grants or a mapping, "
            f"got {type(entry).__name__}"
        )

    grants = []
    for item in items:
        if isinstance(item, Grant):
            _check_actions(role, item.module, item.actions, allowed_actions)
            grants.append(item)
            continue
        if not isinstance(item, Mapping):
            raise ConfigurationError(
                f"Grant for role {role!r} must be a mapping, got {type(item).__name__}"
            )
        if "module" not in item and any(key in item for key in FULL_ACCESS_KEYS):
            # Sentinel element: {"*": true}
            full_access = _parse_full_access_flag(role, item) or full_access
            continue
        grants.append(parse_grant(role, item, allowed_actions))

    return RolePolicy(role=role, grants=tuple(grants), full_access=full_access)


def parse_grant(
    role: str,
    item: Mapping[str, Any],
    allowed_actions: Optional[frozenset] = None,
) -> Grant:
    """Parse a single ``{"module": ..., "actions": [...]}`` grant."""
    flags = [key for key in FULL_ACCESS_KEYS if key in item]
    if flags:
        raise ConfigurationError(
            f"Grant for role {role!r} mixes 'module' with full-access key {flags[0]!r}"
        )

    module = item.get("module")
    if not isinstance(module, str) or not module.strip():
        raise ConfigurationError(f"Grant for role {role!r} has an invalid module: {module!r}")

    actions = item.get("actions", [])
    if isinstance(actions, str) or not isinstance(actions, (list, tuple, set, frozenset)):
        raise ConfigurationError(
            f"Actions for {role!r}/{module!r} must be a list of strings, got {actions!r}"
        )
    for action in actions:
        if not isinstance(action, str) or not action:
            raise ConfigurationError(
                f"Invalid action {action!r} for {role!r}/{module!r}"
            )
    _check_actions(role, module, actions, allowed_actions)
    return Grant(module, frozenset(actions))


def _check_role_policy(policy: RolePolicy, allowed_actions: Optional[frozenset]) -> None:
    for grant in policy.grants:
        _check_actions(policy.role, grant.module, grant.actions, allowed_actions)


def _check_actions(
    role: str,
    module: str,
    actions: Iterable[str],
    allowed_actions: Optional[frozenset],
) -> None:
    if allowed_actions is None:
        return
    unknown = sorted(set(actions) - allowed_actions)
    if unknown:
        raise ConfigurationError(
            f"Unknown actions for {role!r}/{module!r}: {', '.join(unknown)}. "
            f"Allowed: {', '.join(sorted(allowed_actions))}"
        )


def _parse_full_access_flag(role: str, entry: Mapping[str, Any]) -> bool:
    flag = False
    for key in FULL_ACCESS_KEYS:
        if key not in entry:
            continue
        value = entry[key]
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"Full-access flag {key!r} for role {role!r} must be a boolean, got {value!r}"
            )
        flag = flag or value
    return flag
