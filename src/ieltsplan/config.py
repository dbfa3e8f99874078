"""Server configuration for ieltsplan."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from ieltsplan._constants import GEMINI_BASE_URL, GEMINI_MODEL, STATE_TTL_SECONDS, STORAGE_KEY
from ieltsplan.exceptions import ConfigError

BACKEND_MEMORY = "memory"
BACKEND_KV = "kv"
_BACKENDS = frozenset({BACKEND_MEMORY, BACKEND_KV})
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env: Mapping[str, str], name: str, cast: type) -> Any:
    raw = env.get(name)
    if raw is None:
        return None
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a {cast.__name__}, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class SyncConfig:
    """Server configuration.

    Parameters
    ----------
    host : str
        Interface the HTTP server binds to.
    port : int
        TCP port the HTTP server listens on.
    storage_key : str
        Key the whole StoredState object lives under.
    ttl_seconds : int
        Expiry applied on every write. Defaults to 30 days.
    backend : str
        ``"memory"`` (process-local, for development and tests) or
        ``"kv"`` (Redis-over-REST service such as Vercel KV / Upstash).
    kv_url : str or None
        REST endpoint of the key-value service. Required for ``"kv"``.
    kv_token : str or None
        Bearer token for the key-value service. Required for ``"kv"``.
    storage_timeout : float
        Seconds allowed for one backend round trip.
    gemini_api_key : str or None
        API key for the completion proxy. The proxy answers 500 when unset.
    gemini_model : str
        Model name used in the ``generateContent`` URL.
    gemini_base_url : str
        Base URL of the Generative Language API.
    upstream_timeout : float
        Seconds allowed for one completion upstream call.
    debug_logging : bool
        Log redacted request payloads at DEBUG level.
    log_level : str
        Root logging level the server CLI configures. Case-insensitive,
        stored upper-case.
    """

    host: str = "127.0.0.1"
    port: int = 8080
    storage_key: str = STORAGE_KEY
    ttl_seconds: int = STATE_TTL_SECONDS
    backend: str = BACKEND_MEMORY
    kv_url: str | None = None
    kv_token: str | None = None
    storage_timeout: float = 10.0
    gemini_api_key: str | None = None
    gemini_model: str = GEMINI_MODEL
    gemini_base_url: str = GEMINI_BASE_URL
    upstream_timeout: float = 60.0
    debug_logging: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        level = self.log_level.strip().upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}")
        object.__setattr__(self, "log_level", level)
        if self.backend not in _BACKENDS:
            raise ConfigError(f"backend must be one of {sorted(_BACKENDS)}, got {self.backend!r}")
        if self.backend == BACKEND_KV and not (self.kv_url and self.kv_token):
            raise ConfigError("backend 'kv' requires kv_url and kv_token")
        if self.ttl_seconds <= 0:
            raise ConfigError(f"ttl_seconds must be positive, got {self.ttl_seconds}")
        if self.storage_timeout <= 0 or self.upstream_timeout <= 0:
            raise ConfigError("timeouts must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> SyncConfig:
        """Create configuration from environment variables.

        Reads ``IELTSPLAN_*`` variables, plus ``KV_REST_API_URL``,
        ``KV_REST_API_TOKEN`` and ``GEMINI_API_KEY`` as injected by the
        hosting platform. Explicit keyword arguments override environment
        values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        SyncConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "IELTSPLAN_HOST": "host",
            "IELTSPLAN_STORAGE_KEY": "storage_key",
            "IELTSPLAN_BACKEND": "backend",
            "KV_REST_API_URL": "kv_url",
            "KV_REST_API_TOKEN": "kv_token",
            "GEMINI_API_KEY": "gemini_api_key",
            "IELTSPLAN_GEMINI_MODEL": "gemini_model",
            "IELTSPLAN_GEMINI_BASE_URL": "gemini_base_url",
            "IELTSPLAN_LOG_LEVEL": "log_level",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "IELTSPLAN_PORT": ("port", int),
            "IELTSPLAN_TTL_SECONDS": ("ttl_seconds", int),
            "IELTSPLAN_STORAGE_TIMEOUT": ("storage_timeout", float),
            "IELTSPLAN_UPSTREAM_TIMEOUT": ("upstream_timeout", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            if field_name in overrides:
                continue
            parsed = _env_number(env, env_key, cast)
            if parsed is not None:
                config_kwargs[field_name] = parsed

        if "debug_logging" not in overrides:
            config_kwargs["debug_logging"] = _env_bool(env.get("IELTSPLAN_DEBUG_LOGGING"), False)

        # A KV URL in the environment implies the KV backend unless told otherwise.
        if "backend" not in config_kwargs and "backend" not in overrides and config_kwargs.get("kv_url"):
            config_kwargs["backend"] = BACKEND_KV

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
