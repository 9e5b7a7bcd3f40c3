from __future__ import annotations

import logging
from typing import Any

import redis

from colormatch.actions import handle_color_intent, handle_input_handler_event, help_response
from colormatch.api.models import InputHandlerEventBatch
from colormatch.config import GameSettings, configure_logging, settings_from_env
from colormatch.infra.redis_client import create_redis
from colormatch.lock import SessionBusy
from colormatch.prompts import error_speech
from colormatch.session import RoundResponse


logger = logging.getLogger(__name__)

COLOR_INTENT = "colorIntent"
INPUT_HANDLER_EVENT = "GameEngine.InputHandlerEvent"


def _ssml(text: str) -> dict[str, str]:
    return {"type": "SSML", "ssml": f"<speak>{text}</speak>"}


def build_response_envelope(response: RoundResponse) -> dict[str, Any]:
    body: dict[str, Any] = {"directives": [d.to_directive() for d in response.directives]}
    if response.speech:
        body["outputSpeech"] = _ssml(response.speech)
    if response.reprompt:
        body["reprompt"] = {"outputSpeech": _ssml(response.reprompt)}
    if response.open_microphone:
        body["shouldEndSession"] = False
    return {"version": "1.0", "response": body}


def route_request(*, r: redis.Redis, event: dict[str, Any], settings: GameSettings) -> RoundResponse:
    request = event.get("request") or {}
    session_id = (event.get("session") or {}).get("sessionId")
    if not session_id:
        raise ValueError("sessionId is required")

    request_type = request.get("type")

    if request_type == INPUT_HANDLER_EVENT:
        batch = InputHandlerEventBatch.model_validate(request)
        try:
            return handle_input_handler_event(r=r, session_id=session_id, batch=batch, settings=settings).response
        except SessionBusy:
            logger.info("Session %s busy; dropping input event batch from %s", session_id, batch.originating_request_id)
            return RoundResponse.noop()

    intent = request.get("intent") or {}
    if request_type == "IntentRequest" and intent.get("name") == COLOR_INTENT:
        color = ((intent.get("slots") or {}).get("color") or {}).get("value")
        return handle_color_intent(
            r=r,
            session_id=session_id,
            request_id=str(request.get("requestId") or ""),
            color=color,
            settings=settings,
        ).response

    logger.info("Unhandled request %s/%s; answering with help", request_type, intent.get("name"))
    return help_response()


def handler(
    event: dict[str, Any],
    context: Any = None,
    *,
    r: redis.Redis | None = None,
    settings: GameSettings | None = None,
) -> dict[str, Any]:
    """Function entry point for a voice-platform request envelope."""

    settings = settings or settings_from_env()
    configure_logging(settings)

    client = r if r is not None else create_redis(settings)
    try:
        response = route_request(r=client, event=event, settings=settings)
    except ValueError as e:
        # Covers pydantic ValidationError too; the player hears a retry prompt instead of silence.
        logger.warning("Request failed: %s", e)
        response = RoundResponse(state_changed=False, speech=error_speech(), open_microphone=True)
    finally:
        if r is None:
            client.close()

    return build_response_envelope(response)
