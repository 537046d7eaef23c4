"""Pydantic models for CLI configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from fluentbit_monitor.config.constants import (
    DEFAULT_HTTP_RETRY_BACKOFF,
    DEFAULT_HTTP_RETRY_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
)


class AgentProfile(BaseModel):
    """A named Fluent Bit agent connection profile."""

    name: str
    url: str = Field(description="Agent HTTP server base URL, e.g. http://localhost:2020")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT, gt=0, le=600,
        description="Per-request timeout in seconds",
    )
    retry_timeout: float = Field(
        default=DEFAULT_HTTP_RETRY_TIMEOUT, gt=0, le=3600,
        description="How long to keep polling an endpoint before giving up",
    )
    poll_interval: float = Field(
        default=DEFAULT_HTTP_RETRY_BACKOFF, gt=0, le=60,
        description="Delay between polling attempts in seconds",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")


class CLIConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    default_format: str = "table"
    profiles: dict[str, AgentProfile] = Field(default_factory=dict)
