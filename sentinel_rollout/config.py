"""Configuration management for the rollout status checker."""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Status checker settings."""

    model_config = SettingsConfigDict(
        env_prefix="SENTINEL_ROLLOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"

    # Kubernetes Settings
    kubectl_binary: str = Field(
        default="kubectl",
        description="kubectl executable used for cluster queries",
    )
    managed_by: str = Field(
        default="sentinel",
        description="Value of the app.kubernetes.io/managed-by label",
    )

    # Polling Settings
    poll_interval_seconds: float = Field(default=1.0, gt=0)
    default_deadline_seconds: float = Field(
        default=600.0,
        gt=0,
        description="Budget for workloads without a declared progress deadline",
    )
    query_timeout_seconds: Optional[float] = Field(
        default=60.0,
        gt=0,
        description="Upper bound on a single kubectl invocation",
    )
    max_concurrent_checks: Optional[int] = Field(default=None, ge=1)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging for applications embedding the checker."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
