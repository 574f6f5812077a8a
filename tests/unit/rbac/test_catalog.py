"""Tests for the route catalog."""

import pytest

from careguard.rbac.catalog import RouteCatalog, RouteEntry, normalize_path
from careguard.rbac.exceptions import ConfigurationError


class TestNormalizePath:
    """Test path normalization for lookups."""

    @pytest.mark.parametrize("raw,expected", [
        ("/patients", "/patients"),
        ("/patients/", "/patients"),
        (" /patients ", "/patients"),
        ("/patients?page=2", "/patients"),
        ("/patients#top", "/patients"),
        ("/", "/"),
        ("//", "/"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "?x=1", None, 5])
    def test_unusable_paths(self, raw):
        assert normalize_path(raw) is None


class TestRouteCatalog:
    """Test RouteCatalog construction and lookups."""

    def test_module_for(self, sample_catalog):
        assert sample_catalog.module_for("/") == "dashboard"
        assert sample_catalog.module_for("/patients") == "patients"
        assert sample_catalog.module_for("/patients/") == "patients"
        assert sample_catalog.module_for("/missing") is None
        assert sample_catalog.module_for(None) is None

    def test_many_routes_to_one_module(self):
        catalog = RouteCatalog([
            RouteEntry("/", "dashboard", "Dashboard"),
            RouteEntry("/dashboard", "dashboard", "Dashboard"),
        ])
        assert catalog.module_for("/") == "dashboard"
        assert catalog.module_for("/dashboard") == "dashboard"

    def test_unmapped_route(self):
        """A route listed without a module maps to nothing."""
        catalog = RouteCatalog([RouteEntry("/beta", None, "Beta")])
        assert catalog.module_for("/beta") is None

    def test_repeated_path_with_same_module(self):
        catalog = RouteCatalog([
            RouteEntry("/reports", "reports", "Reports"),
            RouteEntry("/reports/", "reports", "Reports (all)"),
        ])
        assert catalog.module_for("/reports") == "reports"
        assert len(catalog) == 2

    def test_conflicting_modules_for_one_path_rejected(self):
        """A path mapped to two modules would let navigation and guards disagree."""
        with pytest.raises(ConfigurationError, match="mapped to both"):
            RouteCatalog([
                RouteEntry("/x", "a", "A"),
                RouteEntry("/x/", "b", "B"),
            ])

    def test_from_mappings(self):
        catalog = RouteCatalog([
            {"path": "/", "module": "dashboard", "label": "Dashboard", "icon": "LayoutDashboard"},
            {"path": "/tags", "module": "tags"},
        ])
        assert catalog[0] == RouteEntry("/", "dashboard", "Dashboard", "LayoutDashboard")
        assert catalog[1] == RouteEntry("/tags", "tags", "", None)

    def test_order_preserved(self, sample_catalog):
        assert sample_catalog.paths() == ["/", "/patients", "/settings"]
        assert [e.module for e in sample_catalog] == ["dashboard", "patients", "settings"]

    def test_to_list(self, sample_catalog):
        assert sample_catalog.to_list()[1] == {
            "path": "/patients", "module": "patients", "label": "Patients", "icon": "Users",
        }

    def test_coerce(self, sample_catalog):
        assert RouteCatalog.coerce(sample_catalog) is sample_catalog
        assert len(RouteCatalog.coerce(None)) == 0
        assert RouteCatalog.coerce(list(sample_catalog)).paths() == sample_catalog.paths()

    @pytest.mark.parametrize("entry", [
        {"module": "tags"},
        {"path": "", "module": "tags"},
        {"path": "/tags", "module": ""},
        {"path": "/tags", "module": 3},
        "/tags",
        RouteEntry("", "tags"),
    ])
    def test_invalid_entries_raise(self, entry):
        with pytest.raises(ConfigurationError):
            RouteCatalog([entry])
