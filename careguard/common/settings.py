from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "careguard"
    debug: bool = False

    # Policy sources (built-in defaults when unset)
    policy_file: Optional[str] = None
    catalog_file: Optional[str] = None

    # Comma-separated closed action set; empty leaves actions open
    allowed_actions: str = ""

    @property
    def allowed_actions_list(self) -> Optional[list[str]]:
        actions = [a.strip() for a in self.allowed_actions.split(",") if a.strip()]
        return actions or None

    # Trusted header carrying the role set by the upstream auth layer
    role_header: str = "X-User-Role"

    # Logging
    log_level: str = "INFO"
    log_dir: str = "/var/log/careguard"
    file_logging: bool = False
    log_max_bytes: int = 10485760
    log_backup_count: int = 5

    model_config = SettingsConfigDict(
        env_prefix="CAREGUARD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
