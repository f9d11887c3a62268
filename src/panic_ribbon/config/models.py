"""Pydantic models for Panic Ribbon configuration."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

PLACEHOLDER_NAME = "Localhost"
PLACEHOLDER_URL = "http://localhost:8080/health"
PLACEHOLDER_RESTART = "echo 'No restart script configured'"
DEFAULT_LOG_FILE = "panic.log"


class ServiceSpec(BaseModel):
    """A monitored service. Accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    health_check_url: str = Field(
        validation_alias=AliasChoices("health_check_url", "healthCheckUrl"),
    )
    restart_command: str = Field(
        default="",
        validation_alias=AliasChoices("restart_command", "restartScriptPath", "restartCommand"),
    )


class RibbonConfig(BaseModel):
    """Root configuration model for services.yaml."""

    services: list[ServiceSpec] = Field(default_factory=list)
    poll_interval: float = Field(default=10.0, gt=0)
    check_timeout: float = Field(default=5.0, gt=0)
    ribbon_width: int = Field(default=12, ge=1)
    opacity: float = Field(default=0.8, ge=0.0, le=1.0)
    log_file: str = DEFAULT_LOG_FILE


def placeholder_service() -> ServiceSpec:
    return ServiceSpec(
        name=PLACEHOLDER_NAME,
        health_check_url=PLACEHOLDER_URL,
        restart_command=PLACEHOLDER_RESTART,
    )


def default_config() -> RibbonConfig:
    """The single-entry configuration used when none is available."""
    return RibbonConfig(services=[placeholder_service()])
