"""Tests for the grant model."""

import dataclasses

import pytest

from careguard.rbac.permissions import (
    Action, Grant, CRUD_ACTIONS, build_grants, normalize_token,
)


class TestAction:
    """Test the Action enum."""

    def test_action_values(self):
        """Test CRUD action values."""
        assert Action.CREATE.value == "create"
        assert Action.READ.value == "read"
        assert Action.UPDATE.value == "update"
        assert Action.DELETE.value == "delete"

    def test_crud_actions(self):
        assert CRUD_ACTIONS == {"create", "read", "update", "delete"}

    def test_normalize_token(self):
        """Test normalization of modules and actions."""
        assert normalize_token(Action.READ) == "read"
        assert normalize_token("invoices") == "invoices"
        assert normalize_token("") is None
        assert normalize_token(None) is None
        assert normalize_token(42) is None
        assert normalize_token(["read"]) is None


class TestGrant:
    """Test Grant values."""

    def test_actions_stored_as_frozenset(self):
        grant = Grant("patients", ["read", "update"])
        assert isinstance(grant.actions, frozenset)
        assert grant.actions == {"read", "update"}

    def test_grant_is_immutable(self):
        grant = Grant("patients", frozenset(["read"]))
        with pytest.raises(dataclasses.FrozenInstanceError):
            grant.module = "invoices"

    def test_allows(self):
        grant = Grant("orders", frozenset(["read", "update"]))
        assert grant.allows("read")
        assert not grant.allows("delete")

    def test_merge_unions_actions(self):
        """Test merging two grants on the same module."""
        merged = Grant("tasks", {"read"}).merge(Grant("tasks", {"update"}))
        assert merged.module == "tasks"
        assert merged.actions == {"read", "update"}

    def test_merge_different_modules_raises(self):
        with pytest.raises(ValueError):
            Grant("tasks", {"read"}).merge(Grant("orders", {"read"}))

    def test_to_dict_orders_actions(self):
        """CRUD actions come first in CRUD order, custom actions after."""
        grant = Grant("invoices", {"export", "delete", "read", "create"})
        assert grant.to_dict() == {
            "module": "invoices",
            "actions": ["create", "read", "delete", "export"],
        }
        assert str(grant) == "invoices:create,read,delete,export"

    def test_build_grants(self):
        grants = build_grants(("dashboard", [Action.READ]), ("shop", ["read", Action.CREATE]))
        assert grants == (
            Grant("dashboard", frozenset(["read"])),
            Grant("shop", frozenset(["read", "create"])),
        )
