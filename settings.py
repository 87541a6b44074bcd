"""Runtime settings built from the environment configuration."""

import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator

import config

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Proxy settings, validated and normalised once at startup."""

    # Routing
    access_prefix: str = Field(default="/3lwqk", min_length=1)
    routing_prefix: str = Field(default="/gh/", min_length=1)
    enforce_name_validation: bool = False

    # Upstream
    upstream_timeout: float = Field(default=30.0, gt=0, le=3600)

    @field_validator("access_prefix")
    @classmethod
    def _normalize_access_prefix(cls, value: str) -> str:
        value = "/" + value.strip().strip("/")
        if value == "/":
            raise ValueError("access_prefix must not be empty")
        return value

    @field_validator("routing_prefix")
    @classmethod
    def _normalize_routing_prefix(cls, value: str) -> str:
        value = value.strip().strip("/")
        if not value:
            raise ValueError("routing_prefix must not be empty")
        return f"/{value}/"


# In-memory cached settings
_cached_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get current settings (cached in memory)."""
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = load_settings()
    return _cached_settings


def load_settings() -> Settings:
    """Load settings from the environment configuration."""
    s = Settings(
        access_prefix=config.ACCESS_PREFIX,
        routing_prefix=config.ROUTING_PREFIX,
        enforce_name_validation=config.ENFORCE_NAME_VALIDATION,
        upstream_timeout=config.UPSTREAM_TIMEOUT,
    )
    logger.debug(f"Settings loaded: routing_prefix={s.routing_prefix}, timeout={s.upstream_timeout}s")
    return s


def invalidate_cache() -> None:
    """Force reload settings from the configuration on next access."""
    global _cached_settings
    _cached_settings = None
