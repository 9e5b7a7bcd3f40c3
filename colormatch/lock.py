from __future__ import annotations

from contextlib import contextmanager

import redis


class SessionBusy(ValueError):
    def __init__(self, session_id: str) -> None:
        super().__init__("Session is busy")
        self.session_id = session_id


def _lock_key(session_id: str) -> str:
    return f"colormatch:lock:{session_id}"


@contextmanager
def session_lock(*, r: redis.Redis, session_id: str, ttl_ms: int = 5_000):
    """Best-effort per-session lock.

    A second request for the same session while the first is in flight raises
    SessionBusy. For a spoken intent the entry point answers with a retry
    prompt; an overlapping input-handler event is dropped without a response,
    since the player never asked for anything. The TTL bounds how long a
    crashed holder can block the session.
    """

    key = _lock_key(session_id)
    acquired = r.set(key, "1", nx=True, px=ttl_ms)
    if not acquired:
        raise SessionBusy(session_id)
    try:
        yield
    finally:
        r.delete(key)
