from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

IN_MEMORY_DATABASE_URLS = {"sqlite://", "sqlite+pysqlite://", "sqlite+pysqlite:///:memory:", "sqlite:///:memory:"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="PS_", extra="ignore")

    app_name: str = "Print Shop Order-to-Cash"
    env: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    database_url: str = "sqlite+pysqlite:///./printshop.db"

    log_level: str = "INFO"
    bootstrap_demo_on_startup: bool = False

    currency_code: str = "IDR"
    cashflow_bucket_limit: int = Field(
        default=30,
        ge=1,
        description="Number of most recent daily buckets kept when no date window is given",
    )
    dashboard_days: int = Field(default=7, ge=1)

    def model_post_init(self, __context) -> None:
        if self.env.lower() == "dev":
            return
        if self.database_url in IN_MEMORY_DATABASE_URLS:
            raise ValueError(
                "in-memory database is not allowed outside dev mode; set env var: PS_DATABASE_URL"
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
