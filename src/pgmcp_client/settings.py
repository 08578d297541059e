from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration."""

    server_command: str = "postgres-mcp"
    startup_timeout_seconds: float = 30.0
    list_tools_on_startup: bool = False

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_dir: Path = Path("logs")
    log_max_bytes: int = 2_000_000
    log_backup_count: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PGMCP_",
        extra="ignore",
    )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the settings singleton (loaded from env / .env)."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings()
    return _SETTINGS
