"""
Environment-driven settings.

All knobs are plain env vars (optionally loaded from `.env` / `.env.local` by
the HTTP app):

- `FORM_ENGINE_DEFAULT_LOCALE=en` locale used when an import omits locales
- `FORM_ENGINE_STRICT_IMPORT=1` reject imports instead of repairing them
- `FORM_ENGINE_HTTP_LOG=1` enables request/response logging
- `FORM_ENGINE_HTTP_LOG_HEADERS=1` logs request/response headers (redacted)
- `FORM_ENGINE_HTTP_LOG_BODY_MAX_BYTES=4096` caps body bytes captured per request/response
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool = False) -> bool:
    v = (os.getenv(name) or "").strip().lower()
    if not v:
        return default
    return v in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


@dataclass(frozen=True)
class EngineSettings:
    default_locale: str = "en"
    strict_import: bool = False
    http_log: bool = False
    http_log_headers: bool = False
    http_log_body_max_bytes: int = 4096


def load_settings() -> EngineSettings:
    """Read settings from the environment on every call."""
    return EngineSettings(
        default_locale=_env_str("FORM_ENGINE_DEFAULT_LOCALE", "en"),
        strict_import=_env_bool("FORM_ENGINE_STRICT_IMPORT", default=False),
        http_log=_env_bool("FORM_ENGINE_HTTP_LOG", default=False),
        http_log_headers=_env_bool("FORM_ENGINE_HTTP_LOG_HEADERS", default=False),
        http_log_body_max_bytes=_env_int("FORM_ENGINE_HTTP_LOG_BODY_MAX_BYTES", default=4096),
    )
