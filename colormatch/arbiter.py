from __future__ import annotations

import logging
from collections.abc import Sequence

from colormatch.api.models import GameEngineEvent, InputHandlerEventBatch
from colormatch.recognizers import BUTTON_DOWN_EVENT, TIMEOUT_EVENT
from colormatch.session import RoundResponse, RoundSession


logger = logging.getLogger(__name__)


class EventArbiter:
    """Routes inbound input-handler events to the round they belong to.

    A batch only counts if it was produced by the listener the session armed
    most recently. Anything else (redelivery, a listener superseded by a newer
    round, a listener retired by an outcome) is dropped without touching state.
    """

    def __init__(self, session: RoundSession) -> None:
        self.session = session

    def dispatch(self, originating_request_id: str, events: Sequence[GameEngineEvent]) -> RoundResponse:
        current = self.session.state.listener
        if current is None or originating_request_id != current:
            logger.info(
                "Stale input event received (originating=%s, current=%s). Ignoring!",
                originating_request_id,
                current,
            )
            return RoundResponse.noop(stale=True)

        for event in events:
            if event.name == BUTTON_DOWN_EVENT:
                if not event.input_events:
                    logger.warning("button_down_event without input events; ignoring batch")
                    return RoundResponse.noop()
                pressed = event.input_events[0]
                return self.session.on_button_press(pressed.gadget_id, pressed.color)

            if event.name == TIMEOUT_EVENT:
                return self.session.on_timeout()

            logger.debug("Ignoring unrecognized input event: %s", event.name)

        return RoundResponse.noop()

    def dispatch_batch(self, batch: InputHandlerEventBatch) -> RoundResponse:
        return self.dispatch(batch.originating_request_id, batch.events)
