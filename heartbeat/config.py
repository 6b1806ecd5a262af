"""Heartbeat Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every option has a default: the heartbeat runs with an empty environment
    - low_compute_multiplier, when set, is a positive number
    - get_settings() is cached (lru_cache) — single instance per process
    - Settings are frozen: the cycle context shares them by reference

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - HEARTBEAT_ prefix: keeps the agent's other env vars out of this model
    - low_compute_multiplier left None when unset; the default (4) is applied
      where the cycle context is built, so a caller-supplied config behaves the same
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from heartbeat.core.domain_types import Network


class HeartbeatConfig(BaseSettings):
    """Heartbeat settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HEARTBEAT_", env_file=".env", case_sensitive=False,
        extra="ignore", frozen=True,
    )

    # Cycle context
    low_compute_multiplier: float | None = None

    # Chain
    network: Network = Network.BASE
    rpc_url: str | None = None
    rpc_timeout_seconds: float = 10.0

    # Observability (read by infrastructure/observability.setup_logging)
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("low_compute_multiplier")
    @classmethod
    def multiplier_must_be_positive(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("low_compute_multiplier must be > 0")
        return v

    @field_validator("rpc_timeout_seconds")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("rpc_timeout_seconds must be > 0")
        return v


@lru_cache
def get_settings() -> HeartbeatConfig:
    return HeartbeatConfig()
