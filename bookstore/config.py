"""Application configuration module."""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = Field(default="development", alias="APP_ENV")
    pg_host: str = Field(default="localhost", alias="PGHOST")
    pg_port: int = Field(default=5432, alias="PGPORT")
    pg_user: str = Field(default="postgres", alias="PGUSER")
    pg_password: str = Field(default="", alias="PGPASSWORD")
    pg_database: str = Field(default="books", alias="PGDATABASE")
    pg_test_database: str = Field(default="books_test", alias="PGDATABASE_TEST")
    pg_ssl: bool = Field(default=False, alias="PGSSL")
    pg_pool_min_size: int = Field(default=1, alias="PG_POOL_MIN_SIZE")
    pg_pool_max_size: int = Field(default=10, alias="PG_POOL_MAX_SIZE")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Comma-separated list of allowed origins
    cors_origins: str = Field(
        default="http://127.0.0.1:3000,http://localhost:3000,http://127.0.0.1:8000,http://localhost:8000",
        alias="CORS_ORIGINS",
    )

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def database_name(self) -> str:
        """Database to connect to; the test environment never uses the dev database."""
        if self.app_env == "test":
            return self.pg_test_database
        return self.pg_database

    @property
    def ssl_mode(self) -> Optional[str]:
        # Azure PostgreSQL requires SSL
        if self.pg_ssl or "postgres.database.azure.com" in self.pg_host.lower():
            return "require"
        return None

    @property
    def password(self) -> Optional[str]:
        # Empty password means trust auth
        return self.pg_password.strip() or None


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
