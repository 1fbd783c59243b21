"""Environment-driven settings for the HTTP service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def _to_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    port: int = 5000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_ORIGINS)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        origins = tuple(
            origin.strip()
            for origin in env.get("DCA_CORS_ORIGINS", ",".join(DEFAULT_ORIGINS)).split(",")
            if origin.strip()
        )
        try:
            port = int(env.get("PORT", "5000"))
        except ValueError:
            port = 5000
        return cls(
            port=port,
            debug=_to_bool(env.get("DCA_DEBUG")),
            log_level=env.get("DCA_LOG_LEVEL", "INFO").upper(),
            cors_origins=origins,
        )
