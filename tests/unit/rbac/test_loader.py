"""Tests for loading policy tables and route catalogs from files."""

import json

import pytest
import yaml

from careguard.rbac import PermissionResolver
from careguard.rbac.exceptions import ConfigurationError
from careguard.rbac.loader import load_policy_table, load_route_catalog


class TestLoadPolicyTable:
    """Tests for load_policy_table."""

    def test_load_json_policy(self, tmp_path, billing_policy):
        policy_file = tmp_path / "policy.json"
        policy_file.write_text(json.dumps(billing_policy))

        resolver = PermissionResolver(load_policy_table(policy_file))

        assert resolver.has_permission("billing_specialist", "invoices", "delete")
        assert not resolver.has_permission("billing_specialist", "patients", "update")

    def test_load_yaml_policy_with_full_access(self, tmp_path):
        policy_file = tmp_path / "policy.yaml"
        policy_file.write_text(
            "super_admin:\n"
            "  - '*': true\n"
            "receptionist:\n"
            "  - module: patients\n"
            "    actions: [create, read, update]\n"
        )

        table = load_policy_table(policy_file)

        assert table.get("super_admin").full_access
        assert table.get("receptionist").grant_for("patients").allows("create")

    def test_empty_policy_file_raises(self, tmp_path):
        policy_file = tmp_path / "policy.yaml"
        policy_file.write_text("")

        with pytest.raises(ConfigurationError, match="empty"):
            load_policy_table(policy_file)

    def test_closed_action_set(self, tmp_path):
        policy_file = tmp_path / "policy.yaml"
        policy_file.write_text(yaml.dump({"clerk": [{"module": "orders", "actions": ["archive"]}]}))

        with pytest.raises(ConfigurationError, match="archive"):
            load_policy_table(policy_file, allowed_actions=["read"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_policy_table(tmp_path / "missing.yaml")


class TestLoadRouteCatalog:
    """Tests for load_route_catalog."""

    def test_list_root(self, tmp_path):
        catalog_file = tmp_path / "routes.yaml"
        catalog_file.write_text(yaml.dump([
            {"path": "/", "module": "dashboard", "label": "Dashboard"},
            {"path": "/tags", "module": "tags", "label": "Tags", "icon": "Tag"},
        ]))

        catalog = load_route_catalog(catalog_file)

        assert catalog.paths() == ["/", "/tags"]
        assert catalog.module_for("/tags") == "tags"

    def test_routes_key(self, tmp_path):
        catalog_file = tmp_path / "routes.json"
        catalog_file.write_text(json.dumps({"routes": [{"path": "/audit", "module": "audit"}]}))

        assert load_route_catalog(catalog_file).module_for("/audit") == "audit"

    def test_invalid_document(self, tmp_path):
        catalog_file = tmp_path / "routes.yaml"
        catalog_file.write_text("routes: 3\n")

        with pytest.raises(ConfigurationError):
            load_route_catalog(catalog_file)

    def test_invalid_entry(self, tmp_path):
        catalog_file = tmp_path / "routes.yaml"
        catalog_file.write_text(yaml.dump([{"module": "tags"}]))

        with pytest.raises(ConfigurationError, match="invalid path"):
            load_route_catalog(catalog_file)

    def test_conflicting_modules(self, tmp_path):
        catalog_file = tmp_path / "routes.yaml"
        catalog_file.write_text(yaml.dump([
            {"path": "/reports", "module": "reports"},
            {"path": "/reports/", "module": "audit"},
        ]))

        with pytest.raises(ConfigurationError, match="mapped to both"):
            load_route_catalog(catalog_file)
