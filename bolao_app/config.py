"""Application configuration for the bolão toolkit."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .exceptions import ConfigError

DEFAULT_API_URL = "https://loteriascaixa-api.herokuapp.com/api"


@dataclass
class NetworkConfig:
    """Network related configuration."""

    user_agent: str = "bolao-app/1.0 (+https://github.com/your-org/bolao)"
    accept_language: str = "pt-BR,pt;q=0.9"
    timeout: int = 15
    retry_attempts: int = 3
    backoff_seconds: float = 1.0


@dataclass
class SourceConfig:
    """Where official draw results are read from."""

    results_api_url: str = DEFAULT_API_URL

    def result_url(self, api_name: str, draw: str) -> str:
        return f"{self.results_api_url.rstrip('/')}/{api_name}/{draw}"


@dataclass
class ScheduleConfig:
    """Draw-day settings."""

    # Hour after which today's draw no longer accepts tickets.
    cutoff_hour: int = 20


@dataclass
class AppConfig:
    """Top level configuration container."""

    network: NetworkConfig = field(default_factory=NetworkConfig)
    sources: SourceConfig = field(default_factory=SourceConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)

    @classmethod
    def create_default(cls) -> "AppConfig":
        """Create a default configuration instance."""

        return cls()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Default configuration overridden by ``BOLAO_*`` environment variables."""

        env = os.environ if environ is None else environ
        config = cls.create_default()
        api_url = env.get("BOLAO_API_URL", "").strip()
        if api_url:
            config.sources.results_api_url = api_url
        config.network.timeout = _int_env(env, "BOLAO_TIMEOUT", config.network.timeout)
        config.network.retry_attempts = _int_env(env, "BOLAO_RETRIES", config.network.retry_attempts)
        config.schedule.cutoff_hour = _int_env(
            env, "BOLAO_CUTOFF_HOUR", config.schedule.cutoff_hour, minimum=0, maximum=23
        )
        return config


def _int_env(
    env: Mapping[str, str], name: str, default: int, *, minimum: int = 1, maximum: int | None = None
) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer", exc, error_code="invalid_env", context={name: raw}) from exc
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}", error_code="invalid_env", context={name: raw})
    if maximum is not None and value > maximum:
        raise ConfigError(f"{name} must be <= {maximum}", error_code="invalid_env", context={name: raw})
    return value
