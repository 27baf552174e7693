"""
Environment driven settings for statement rendering.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

ENV_DIALECT = "BLAZESQL_DIALECT"
ENV_SLOW_RENDER_MS = "BLAZESQL_SLOW_RENDER_MS"
ENV_LOG_PARAMS = "BLAZESQL_LOG_PARAMS"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_non_negative_int(value: str, *, key: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc
    if parsed < 0:
        raise ConfigurationError(f"'{key}' must not be negative: {value!r}")
    return parsed


@dataclass(frozen=True)
class Settings:
    """
    Rendering options.

    ``default_dialect`` is only consulted by pagination when neither the
    pagination window nor the builder names a dialect.
    """

    default_dialect: Optional[str] = None
    slow_render_ms: int = 100
    log_params: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        dialect = (env.get(ENV_DIALECT) or "").strip() or None
        slow_render_ms = cls.slow_render_ms
        if env.get(ENV_SLOW_RENDER_MS):
            slow_render_ms = _parse_non_negative_int(env[ENV_SLOW_RENDER_MS], key=ENV_SLOW_RENDER_MS)
        log_params = cls.log_params
        if env.get(ENV_LOG_PARAMS):
            log_params = _parse_bool(env[ENV_LOG_PARAMS], key=ENV_LOG_PARAMS)
        return cls(default_dialect=dialect, slow_render_ms=slow_render_ms, log_params=log_params)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure(settings: Settings) -> None:
    global _settings
    _settings = settings


def reset_settings() -> None:
    global _settings
    _settings = None
