from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameSettings:
    # Deadline of the round listener; the rolling animation covers the same window.
    listener_timeout_ms: int = 20_000
    # How long each shade is shown on the player button.
    roll_step_ms: int = 1_000
    lock_ttl_ms: int = 5_000
    log_level: str = "INFO"
    redis_url: str = "redis://localhost:6379/0"


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive (got {value})")
    return value


def settings_from_env() -> GameSettings:
    defaults = GameSettings()
    return GameSettings(
        listener_timeout_ms=_int_from_env("COLORMATCH_LISTENER_TIMEOUT_MS", defaults.listener_timeout_ms),
        roll_step_ms=_int_from_env("COLORMATCH_ROLL_STEP_MS", defaults.roll_step_ms),
        lock_ttl_ms=_int_from_env("COLORMATCH_LOCK_TTL_MS", defaults.lock_ttl_ms),
        log_level=os.environ.get("COLORMATCH_LOG_LEVEL", defaults.log_level).upper(),
        redis_url=os.environ.get("REDIS_URL", defaults.redis_url),
    )


def configure_logging(settings: GameSettings) -> None:
    # No-op if the host runtime already installed handlers.
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
