from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import redis

from colormatch.api.models import InputHandlerEventBatch, SessionRecord, SkillMode
from colormatch.arbiter import EventArbiter
from colormatch.config import GameSettings
from colormatch.lock import session_lock
from colormatch.palette import UnknownColor, color_names
from colormatch.prompts import help_speech
from colormatch.session import RoundResponse, RoundSession
from colormatch.session_store import require_session, save_session


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionResult:
    record: SessionRecord
    response: RoundResponse


def help_response() -> RoundResponse:
    speech = help_speech(color_names())
    return RoundResponse(state_changed=False, speech=speech, reprompt=speech, open_microphone=True)


def handle_color_intent(
    *,
    r: redis.Redis,
    session_id: str,
    request_id: str,
    color: str | None,
    settings: GameSettings | None = None,
    rng: random.Random | None = None,
) -> ActionResult:
    """Start (or restart) a round for the color the player asked for.

    An unrecognized color is answered with help instead of an error.
    """

    settings = settings or GameSettings()

    with session_lock(r=r, session_id=session_id, ttl_ms=settings.lock_ttl_ms):
        record = require_session(r=r, session_id=session_id)
        if record.devices is None:
            raise ValueError("No buttons registered for this session")

        session = RoundSession(record.round, settings=settings, rng=rng)
        try:
            response = session.start_round(color=color, devices=record.devices, request_id=request_id)
        except UnknownColor as e:
            logger.warning("Unknown color %r requested; falling back to help", e.color)
            return ActionResult(record=record, response=help_response())

        record.mode = SkillMode.play
        record.expecting_end_confirmation = False
        save_session(r=r, record=record)
        return ActionResult(record=record, response=response)


def handle_input_handler_event(
    *,
    r: redis.Redis,
    session_id: str,
    batch: InputHandlerEventBatch,
    settings: GameSettings | None = None,
) -> ActionResult:
    settings = settings or GameSettings()

    with session_lock(r=r, session_id=session_id, ttl_ms=settings.lock_ttl_ms):
        record = require_session(r=r, session_id=session_id)

        session = RoundSession(record.round, settings=settings)
        response = EventArbiter(session).dispatch_batch(batch)

        if response.enter_exit_confirmation:
            record.mode = SkillMode.exit_confirmation
            record.expecting_end_confirmation = True
        if response.state_changed:
            save_session(r=r, record=record)

        return ActionResult(record=record, response=response)
