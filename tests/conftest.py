"""Pytest configuration and shared fixtures."""

import pytest

from careguard.rbac import PermissionResolver, RouteCatalog, RouteEntry


@pytest.fixture
def billing_policy():
    """Policy with a single billing role."""
    return {
        "billing_specialist": [
            {"module": "invoices", "actions": ["create", "read", "update", "delete"]},
            {"module": "patients", "actions": ["read"]},
        ],
    }


@pytest.fixture
def clinic_policy():
    """Policy with a restricted role, a full-access role and an empty role."""
    return {
        "front_desk": [
            {"module": "dashboard", "actions": ["read"]},
            {"module": "patients", "actions": ["create", "read", "update"]},
            {"module": "tasks", "actions": ["update"]},
        ],
        "owner": [{"*": True}],
        "suspended": [],
    }


@pytest.fixture
def sample_catalog():
    """Three-page catalog."""
    return RouteCatalog([
        RouteEntry("/", "dashboard", "Dashboard", "LayoutDashboard"),
        RouteEntry("/patients", "patients", "Patients", "Users"),
        RouteEntry("/settings", "settings", "Settings", "Settings"),
    ])


@pytest.fixture
def resolver(clinic_policy):
    return PermissionResolver(clinic_policy)
