from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

import redis

from colormatch.api.models import DevicePair, SessionRecord, SkillMode


SESSION_KEY_PREFIX = "colormatch:session:"  # + {session_id}

# Sessions are short-lived; let abandoned ones expire.
SESSION_TTL_S = 24 * 60 * 60


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _session_key(session_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


def new_session(*, session_id: str) -> SessionRecord:
    return SessionRecord(session_id=session_id, last_updated_at=_now())


def save_session(*, r: redis.Redis, record: SessionRecord) -> None:
    record.last_updated_at = _now()
    r.set(_session_key(record.session_id), record.model_dump_json(), ex=SESSION_TTL_S)


def get_session(*, r: redis.Redis, session_id: str) -> SessionRecord | None:
    raw = r.get(_session_key(session_id))
    if not raw:
        return None
    return SessionRecord.model_validate_json(raw)


def require_session(*, r: redis.Redis, session_id: str) -> SessionRecord:
    record = get_session(r=r, session_id=session_id)
    if record is None:
        raise ValueError("Session not found")
    return record


def register_devices(*, r: redis.Redis, session_id: str, device_ids: Sequence[str | None]) -> SessionRecord:
    """Store the buttons picked up by roll call and move the session into play."""

    devices = DevicePair.from_ids(device_ids)
    record = get_session(r=r, session_id=session_id) or new_session(session_id=session_id)
    record.devices = devices
    record.mode = SkillMode.play
    record.expecting_end_confirmation = False
    save_session(r=r, record=record)
    return record


def delete_session(*, r: redis.Redis, session_id: str) -> None:
    r.delete(_session_key(session_id))
