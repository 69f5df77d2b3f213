"""
Configuration Module
====================

Helpdesk settings read from environment variables or a `.env` file.

`REQUEST_STORE_BACKEND` picks where requests and conversations live:
`database` (SQLAlchemy, `DATABASE_URL`) or `supabase` (`SUPABASE_URL`,
`SUPABASE_API_KEY`).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional


ENVIRONMENTS = frozenset({"development", "staging", "production"})


class Settings(BaseSettings):
    """Validated, case-insensitive settings; unknown variables are ignored."""

    # ========== Application ==========
    app_name: str = Field(default="helpdesk-assistant", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/helpdesk",
        description="SQLAlchemy connection URL (async driver)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Request Store ==========
    request_store_backend: Literal["database", "supabase"] = Field(
        default="database",
        description="Where requests and conversations are read from and stored"
    )

    # ========== Supabase (PostgREST) ==========
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xyzcompany.supabase.co)"
    )
    supabase_api_key: Optional[str] = Field(
        default=None,
        description="Supabase service or anon key"
    )
    supabase_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for Supabase REST calls",
        ge=0.1,
        le=60
    )
    supabase_requests_table: str = Field(default="requests", description="Requests table")
    supabase_conversations_table: str = Field(
        default="ai_conversations",
        description="Assistant conversations table"
    )

    # ========== Assistant ==========
    knowledge_base_path: Optional[Path] = Field(
        default=None,
        description="Optional YAML file replacing the built-in knowledge base"
    )
    display_timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone for request dates in assistant replies (e.g., America/Sao_Paulo)"
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ENVIRONMENTS:
            raise ValueError(f"environment must be one of {sorted(ENVIRONMENTS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()


# Global settings instance
settings = get_settings()
