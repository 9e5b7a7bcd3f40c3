from __future__ import annotations

import redis

from colormatch.config import GameSettings


def create_redis(settings: GameSettings) -> redis.Redis:
    # Session records are JSON text, so keep responses as str.
    return redis.Redis.from_url(settings.redis_url, decode_responses=True)
