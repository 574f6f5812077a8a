"""Tests for environment settings."""

from careguard.common.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CAREGUARD_POLICY_FILE", raising=False)
        settings = Settings(_env_file=None)

        assert settings.policy_file is None
        assert settings.catalog_file is None
        assert settings.allowed_actions_list is None
        assert settings.role_header == "X-User-Role"
        assert settings.log_level == "INFO"
        assert settings.log_max_bytes == 10485760
        assert settings.log_backup_count == 5

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CAREGUARD_POLICY_FILE", "/etc/careguard/policy.yaml")
        monkeypatch.setenv("CAREGUARD_ALLOWED_ACTIONS", "create, read,update,,delete")
        monkeypatch.setenv("CAREGUARD_FILE_LOGGING", "true")

        settings = Settings(_env_file=None)

        assert settings.policy_file == "/etc/careguard/policy.yaml"
        assert settings.allowed_actions_list == ["create", "read", "update", "delete"]
        assert settings.file_logging is True

    def test_get_settings_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
