"""Runtime configuration, read from environment variables."""

import os
from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping, Optional, Self

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DispatchMode(StrEnum):
    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    log_json: bool = False
    # Production runs the queue-backed single consumer. 'sync' is meant for tests / single-threaded debugging.
    dispatch_mode: DispatchMode = DispatchMode.ASYNC

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        env = os.environ if environ is None else environ

        port_str = env.get("PORT", str(cls.port))
        try:
            port = int(port_str)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port_str!r}") from None

        log_level = env.get("LOG_LEVEL", cls.log_level).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

        mode = env.get("DISPATCH_MODE", cls.dispatch_mode).lower()
        if mode not in [m.value for m in DispatchMode]:
            raise ValueError(
                f"DISPATCH_MODE must be one of {', '.join(DispatchMode)}, got {mode!r}"
            )

        return cls(
            host=env.get("HOST", cls.host),
            port=port,
            log_level=log_level,
            log_json=env.get("LOG_JSON", "0").lower() in ("1", "true", "yes"),
            dispatch_mode=DispatchMode(mode),
        )
