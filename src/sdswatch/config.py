"""Configuration and environment handling for SDS Watch."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

__all__ = [
    "DEFAULT_TENANT",
    "Settings",
    "get_settings",
    "reset_settings",
]

# Tenant id used by Edge Data Store, which has no multi-tenant namespace listing
DEFAULT_TENANT = "default"


class Settings(BaseModel):
    """Connection and refresh settings.

    All values can be customized via environment variables and are
    overridden by command line flags where the CLI offers one.
    """

    resource: str = Field(
        default="http://localhost:5590",
        description="Base URL of the SDS instance (EDS or cloud resource)",
    )

    api_version: str = Field(
        default="v1",
        description="SDS REST API version",
    )

    tenant_id: str = Field(
        default=DEFAULT_TENANT,
        description="Tenant id; 'default' selects Edge Data Store behavior",
    )

    debounce_ms: int = Field(
        default=300,
        ge=0,
        description="Quiet period applied to typed input before it is acted on",
    )

    refresh_ms: int = Field(
        default=5_000,
        gt=0,
        description="Initial chart refresh period in milliseconds",
    )

    event_count: int = Field(
        default=100,
        gt=0,
        description="Number of most recent events fetched per stream on each refresh",
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    @property
    def is_edge(self) -> bool:
        """Whether the settings point at an Edge Data Store (no tenants)."""
        return self.tenant_id == DEFAULT_TENANT

    @classmethod
    def from_env(cls) -> Settings:
        """Create Settings from environment variables.

        Environment variables:
        - SDSWATCH_RESOURCE: Base URL of the SDS instance (default: http://localhost:5590)
        - SDSWATCH_API_VERSION: API version (default: v1)
        - SDSWATCH_TENANT_ID: Tenant id (default: default)
        - SDSWATCH_DEBOUNCE_MS: Input debounce in milliseconds (default: 300)
        - SDSWATCH_REFRESH_MS: Refresh period in milliseconds (default: 5000)
        - SDSWATCH_EVENT_COUNT: Events fetched per stream (default: 100)
        - SDSWATCH_REQUEST_TIMEOUT: HTTP timeout in seconds (default: 30)
        """
        fields = cls.model_fields
        return cls(
            resource=os.environ.get("SDSWATCH_RESOURCE", fields["resource"].default),
            api_version=os.environ.get("SDSWATCH_API_VERSION", fields["api_version"].default),
            tenant_id=os.environ.get("SDSWATCH_TENANT_ID", fields["tenant_id"].default),
            debounce_ms=int(os.environ.get("SDSWATCH_DEBOUNCE_MS", fields["debounce_ms"].default)),
            refresh_ms=int(os.environ.get("SDSWATCH_REFRESH_MS", fields["refresh_ms"].default)),
            event_count=int(os.environ.get("SDSWATCH_EVENT_COUNT", fields["event_count"].default)),
            request_timeout=float(os.environ.get("SDSWATCH_REQUEST_TIMEOUT", fields["request_timeout"].default)),
        )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get settings.

    Returns cached instance if already initialized.
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings. Used for testing."""
    global _settings
    _settings = None
