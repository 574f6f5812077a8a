"""Permission model for careguard RBAC.

A grant pairs one module (a functional area such as ``patients`` or
``invoices``) with the set of actions a role may perform on it.

Actions are plain strings. The standard CRUD set is exposed as the
:class:`Action` enum, but any non-empty string is a valid action unless a
deployment closes the set when building its policy table.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Optional


class Action(str, Enum):
    """Standard actions that can be performed on a module."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


# Convenience sets for common grant patterns
CRUD_ACTIONS = frozenset(a.value for a in Action)
READONLY_ACTIONS = frozenset([Action.READ.value])
WRITE_ACTIONS = frozenset([Action.CREATE.value, Action.UPDATE.value, Action.DELETE.value])


def normalize_token(value: Any) -> Optional[str]:
    """Return the string form of a module or action, or None if unusable.

    Enum members are reduced to their value. Anything that is not a
    non-empty string yields None, which callers treat as a denial.
    """
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str) or not value:
        return None
    return value


@dataclass(frozen=True)
class Grant:
    """A module and the actions permitted on it."""

    module: str
    actions: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept any iterable of actions but always store a frozenset of strings
        actions = frozenset(a.value if isinstance(a, Enum) else a for a in self.actions)
        object.__setattr__(self, "actions", actions)

    def allows(self, action: str) -> bool:
        """Check if the grant permits the given action."""
        return action in self.actions

    def merge(self, other: "Grant") -> "Grant":
        """Union of two grants on the same module."""
        if other.module != self.module:
            raise ValueError(
                f"Cannot merge grants for different modules: {self.module}, {other.module}"
            )
        return Grant(self.module, self.actions | other.actions)

    def sorted_actions(self) -> list[str]:
        """Actions in CRUD order first, then any custom actions alphabetically."""
        crud_order = [a.value for a in Action]
        known = [a for a in crud_order if a in self.actions]
        custom = sorted(a for a in self.actions if a not in CRUD_ACTIONS)
        return known + custom

    def to_dict(self) -> dict:
        return {"module": self.module, "actions": self.sorted_actions()}

    def __str__(self) -> str:
        return f"{self.module}:{','.join(self.sorted_actions())}"


def build_grants(*pairs: tuple) -> tuple[Grant, ...]:
    """Build grants from (module, actions) tuples."""
    return tuple(Grant(module, frozenset(actions)) for module, actions in pairs)
