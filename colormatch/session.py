from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from colormatch.animations import (
    DEFAULT_BUTTON_DOWN,
    DEFAULT_BUTTON_UP,
    LOSING_ANIMATION,
    WINNING_ANIMATION,
    fade_out_animation,
    rolling_sequence,
    solid_animation,
)
from colormatch.api.models import DevicePair, RoundOutcome, RoundPhase, RoundState
from colormatch.config import GameSettings
from colormatch.core.directives import ArmListener, Directive, LightAnimation, SetAnimation
from colormatch.fsm import InvalidTransition, RoundFSM
from colormatch.palette import canonical_color, pick_random_shade, shades_for
from colormatch.prompts import outcome_speech, play_again_reprompt, round_started_speech
from colormatch.recognizers import button_down_recognizer, round_events, rules_to_wire


logger = logging.getLogger(__name__)

# Flash of the target shade while a button is held or released.
PRESS_FLASH_MS = 10
TIMEOUT_FADE_MS = 2_000


@dataclass(frozen=True, slots=True)
class RoundResponse:
    """Result of applying an intent or event to a round.

    - `state_changed`: if the round state mutated.
    - `directives`: device commands for the platform, in emission order.
    - `enter_exit_confirmation`: the outer flow should ask "play again?" next.
    - `stale`: the input was dropped because it belonged to a superseded listener.
    """

    state_changed: bool
    directives: list[Directive] = field(default_factory=list)
    speech: str | None = None
    reprompt: str | None = None
    outcome: RoundOutcome | None = None
    enter_exit_confirmation: bool = False
    open_microphone: bool = False
    stale: bool = False

    @staticmethod
    def noop(*, stale: bool = False) -> RoundResponse:
        return RoundResponse(state_changed=False, stale=stale)


def new_listener_handle(request_id: str) -> str:
    """Listener handles are the id of the request that armed the listener."""

    if not request_id:
        raise ValueError("request_id is required to arm a listener")
    return request_id


class RoundSession:
    """Owns one player's RoundState and drives it through a round.

    awaiting_color -> awaiting_press -> won | lost | timed_out

    Calls that don't fit the current phase are logged and leave the state untouched.
    """

    def __init__(
        self,
        state: RoundState | None = None,
        *,
        settings: GameSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.state = state if state is not None else RoundState()
        self.settings = settings or GameSettings()
        self._rng = rng or random.Random()

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    def start_round(self, *, color: str | None, devices: DevicePair, request_id: str) -> RoundResponse:
        # Everything that can fail runs before the state is touched.
        color_key = canonical_color(color)
        shades = shades_for(color_key)
        target = pick_random_shade(shades, rng=self._rng)
        listener = new_listener_handle(request_id)

        RoundFSM(self.state).fire("round_started")
        self.state.color = color_key
        self.state.target_shade = target
        self.state.devices = devices
        self.state.listener = listener

        logger.info("Round started: color=%s target_shade=%s listener=%s", color_key, target, listener)

        timeout_ms = self.settings.listener_timeout_ms
        recognizers = button_down_recognizer(devices.player)
        both = tuple(devices.as_list())

        directives: list[Directive] = [
            ArmListener(
                timeout_ms=timeout_ms,
                recognizers=rules_to_wire(recognizers),
                events=rules_to_wire(round_events(recognizers)),
            ),
            SetAnimation(
                target="idle",
                devices=(devices.reference,),
                sequence=solid_animation(1, target, timeout_ms),
            ),
            SetAnimation(
                target="idle",
                devices=(devices.player,),
                sequence=rolling_sequence(shades, self.settings.roll_step_ms, window_ms=timeout_ms),
            ),
            SetAnimation(target="buttonDown", devices=both, sequence=solid_animation(1, target, PRESS_FLASH_MS)),
            SetAnimation(target="buttonUp", devices=both, sequence=solid_animation(1, target, PRESS_FLASH_MS)),
        ]

        return RoundResponse(
            state_changed=True,
            directives=directives,
            speech=round_started_speech(color_key),
            open_microphone=False,
        )

    def on_timeout(self) -> RoundResponse:
        if not self._fire("listener_timed_out"):
            return RoundResponse.noop()

        color = self.state.color or ""
        idle = fade_out_animation(1, color, TIMEOUT_FADE_MS)
        return self._resolve(RoundOutcome.timeout, idle)

    def on_button_press(self, device_id: str, observed_shade: str | None) -> RoundResponse:
        # Judged on the reported shade alone; the recognizer only lets the player button through.
        matched = observed_shade is not None and observed_shade == self.state.target_shade
        if not self._fire("press_matched" if matched else "press_missed"):
            return RoundResponse.noop()

        logger.debug("Button %s reported shade %s (target %s)", device_id, observed_shade, self.state.target_shade)
        if matched:
            return self._resolve(RoundOutcome.win, WINNING_ANIMATION)
        return self._resolve(RoundOutcome.lose, LOSING_ANIMATION)

    def _fire(self, event: str) -> bool:
        try:
            RoundFSM(self.state).fire(event)
        except InvalidTransition as e:
            logger.warning("Ignoring round event: %s", e)
            return False
        return True

    def _resolve(self, outcome: RoundOutcome, idle_animation: LightAnimation) -> RoundResponse:
        devices = self.state.devices
        if devices is None:
            raise RuntimeError("Resolved a round that has no devices")

        # Retire the listener so a redelivered batch is recognized as stale.
        self.state.listener = None
        logger.info("Round resolved: outcome=%s color=%s", outcome.value, self.state.color)

        both = tuple(devices.as_list())
        return RoundResponse(
            state_changed=True,
            directives=[
                SetAnimation(target="idle", devices=both, sequence=idle_animation),
                SetAnimation(target="buttonDown", devices=both, sequence=DEFAULT_BUTTON_DOWN),
                SetAnimation(target="buttonUp", devices=both, sequence=DEFAULT_BUTTON_UP),
            ],
            speech=outcome_speech(outcome),
            reprompt=play_again_reprompt(),
            outcome=outcome,
            enter_exit_confirmation=True,
            open_microphone=True,
        )
