"""
Configuration management for the usergraph service
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 4000
    reload: bool = False
    cors_origins: list[str] = ["*"]

    # Database connection parts
    db_name: str = "usergraph"
    db_user: str = "postgres"
    db_password: str = ""
    db_host: str = "localhost"
    db_port: int = 5432

    # Full URL, takes precedence over the parts above when set
    database_url: str | None = None
    database_pool_size: int = 10
    database_max_overflow: int = 20

    # Create missing tables at startup instead of relying on migrations
    db_sync: bool = False
    sql_echo: bool = False

    # Environment
    debug: bool = False
    log_level: str = "info"

    @property
    def async_database_url(self) -> str:
        """Database URL for the asyncpg driver."""
        if self.database_url:
            url = make_url(self.database_url)
            if url.drivername in ("postgresql", "postgres"):
                url = url.set(drivername="postgresql+asyncpg")
        else:
            url = URL.create(
                "postgresql+asyncpg",
                username=self.db_user,
                password=self.db_password or None,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            )
        return url.render_as_string(hide_password=False)


def get_settings() -> Settings:
    """Re-read settings from the environment (used by the CLI and tests)."""
    return Settings()
