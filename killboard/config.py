"""
Configuration settings for the killboard service.

Uses Pydantic Settings to load environment variables for the database
connection pool, the HTTP server, and logging. Values are read once at process
start; the pool receives them as a fixed `PoolConfig` object.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from killboard.infrastructure.db_factory import PoolConfig


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("killboard", alias="DB_NAME")
    db_connection_limit: int = Field(10, alias="DB_CONNECTION_LIMIT", ge=1)
    db_connect_attempts: int = Field(3, alias="DB_CONNECT_ATTEMPTS", ge=1)

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # HTTP server
    host: str = Field("127.0.0.1", alias="HOST")
    port: int = Field(3000, alias="PORT")
    ssl_certfile: Optional[str] = Field(None, alias="SSL_CERTFILE")
    ssl_keyfile: Optional[str] = Field(None, alias="SSL_KEYFILE")
    trusted_hosts: List[str] = Field(
        default_factory=lambda: ["127.0.0.1", "::1"], alias="TRUSTED_HOSTS"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def pool_config(self) -> PoolConfig:
        """Connection pool parameters derived from the database settings."""
        return PoolConfig(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_password,
            database=self.db_name,
            connection_limit=self.db_connection_limit,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
