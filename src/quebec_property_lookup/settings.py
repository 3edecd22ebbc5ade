from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = str(raw).strip().lower()
    if v in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return str(raw).strip()


@dataclass(frozen=True)
class Settings:
    """Process-wide projection settings.

    Env vars are read once and cached; call `reset_settings_cache()` after
    changing them.
    """

    province: str
    default_municipality: str
    strict: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            province=_env_str("QPL_PROVINCE", "QC") or "QC",
            default_municipality=_env_str("QPL_DEFAULT_MUNICIPALITY", ""),
            strict=_env_bool("QPL_STRICT", False),
            log_level=_env_str("QPL_LOG_LEVEL", "WARNING").upper() or "WARNING",
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def reset_settings_cache() -> None:
    """Test helper to force env re-read."""

    get_settings.cache_clear()
