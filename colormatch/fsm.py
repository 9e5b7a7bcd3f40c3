from __future__ import annotations

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from colormatch.api.models import RoundPhase, RoundState


class InvalidTransition(RuntimeError):
    def __init__(self, event: str, phase: RoundPhase) -> None:
        super().__init__(f"Event '{event}' not allowed in phase '{phase.value}'")
        self.event = event
        self.phase = phase


class RoundFSM(StateMachine):
    """FSM wrapper around RoundState.

    The FSM only guards transitions; RoundSession owns the data changes that
    go with them.
    """

    awaiting_color = State(RoundPhase.awaiting_color.value, value=RoundPhase.awaiting_color.value, initial=True)
    awaiting_press = State(RoundPhase.awaiting_press.value, value=RoundPhase.awaiting_press.value)
    won = State(RoundPhase.won.value, value=RoundPhase.won.value)
    lost = State(RoundPhase.lost.value, value=RoundPhase.lost.value)
    timed_out = State(RoundPhase.timed_out.value, value=RoundPhase.timed_out.value)

    # Picking a color always (re)arms a round, superseding any listener in flight.
    round_started = (
        awaiting_color.to(awaiting_press)
        | awaiting_press.to(awaiting_press)
        | won.to(awaiting_press)
        | lost.to(awaiting_press)
        | timed_out.to(awaiting_press)
    )
    press_matched = awaiting_press.to(won)
    press_missed = awaiting_press.to(lost)
    listener_timed_out = awaiting_press.to(timed_out)

    def __init__(self, round_state: RoundState):
        self.round_state = round_state
        super().__init__(start_value=round_state.phase.value)

    @property
    def phase(self) -> RoundPhase:
        return RoundPhase(str(self.current_state.value))

    def fire(self, event: str) -> RoundPhase:
        """Apply `event` and copy the resulting phase onto the round state."""

        try:
            self.send(event)
        except TransitionNotAllowed as e:
            raise InvalidTransition(event, self.phase) from e
        self.sync_phase_to_model()
        return self.phase

    def sync_phase_to_model(self) -> None:
        self.round_state.phase = self.phase
