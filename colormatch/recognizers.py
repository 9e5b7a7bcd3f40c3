from __future__ import annotations

from typing import Any, Literal

from colormatch.core.directives import WireModel


BUTTON_DOWN_RECOGNIZER = "button_down_recognizer"
BUTTON_DOWN_EVENT = "button_down_event"
TIMEOUT_EVENT = "timeout"

# Built-in recognizer that fires when the input handler reaches its deadline.
TIMED_OUT_RECOGNIZER = "timed out"


class PatternStep(WireModel):
    gadget_ids: tuple[str, ...]
    action: Literal["down", "up"]


class RecognizerRule(WireModel):
    type: Literal["match"] = "match"
    fuzzy: bool = False
    anchor: Literal["start", "end", "anywhere"] = "end"
    pattern: tuple[PatternStep, ...]


class EventRule(WireModel):
    meets: tuple[str, ...]
    reports: Literal["history", "matches", "nothing"]
    should_end_input_handler: bool


def button_down_recognizer(device_id: str) -> dict[str, RecognizerRule]:
    """Recognizer matching a single button-down from exactly one device.

    Non-fuzzy and anchored at the end of the input stream, so the most recent
    action is the one that counts.
    """

    if not device_id:
        raise ValueError("device_id is required")
    rule = RecognizerRule(pattern=(PatternStep(gadget_ids=(device_id,), action="down"),))
    return {BUTTON_DOWN_RECOGNIZER: rule}


def round_events(recognizers: dict[str, RecognizerRule]) -> dict[str, EventRule]:
    """Compose the two named outcomes of a round listener.

    Both end the input handler, so the platform reports exactly one of them.
    """

    return {
        BUTTON_DOWN_EVENT: EventRule(
            meets=tuple(recognizers),
            reports="matches",
            should_end_input_handler=True,
        ),
        TIMEOUT_EVENT: EventRule(
            meets=(TIMED_OUT_RECOGNIZER,),
            reports="history",
            should_end_input_handler=True,
        ),
    }


def rules_to_wire(rules: dict[str, RecognizerRule] | dict[str, EventRule]) -> dict[str, Any]:
    return {name: rule.to_wire() for name, rule in rules.items()}
