from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RoundPhase(StrEnum):
    awaiting_color = "awaiting_color"
    awaiting_press = "awaiting_press"
    won = "won"
    lost = "lost"
    timed_out = "timed_out"


class RoundOutcome(StrEnum):
    win = "win"
    lose = "lose"
    timeout = "timeout"


RESOLVED_PHASES: dict[RoundPhase, RoundOutcome] = {
    RoundPhase.won: RoundOutcome.win,
    RoundPhase.lost: RoundOutcome.lose,
    RoundPhase.timed_out: RoundOutcome.timeout,
}


class SkillMode(StrEnum):
    roll_call = "roll_call"
    play = "play"
    exit_confirmation = "exit_confirmation"


class DevicePair(BaseModel):
    """The two buttons in play: the reference button first, the player button second."""

    model_config = ConfigDict(frozen=True)

    reference: str = Field(..., min_length=1)
    player: str = Field(..., min_length=1)

    @staticmethod
    def from_ids(device_ids: Sequence[str | None]) -> DevicePair:
        if len(device_ids) != 2:
            raise ValueError(f"Exactly two buttons are required (got {len(device_ids)})")
        reference, player = device_ids
        if not reference or not player:
            raise ValueError("Button ids must be non-empty")
        return DevicePair(reference=reference, player=player)

    def as_list(self) -> list[str]:
        return [self.reference, self.player]


class RoundState(BaseModel):
    color: str | None = None
    target_shade: str | None = None
    devices: DevicePair | None = None

    # Request id of the request that armed the current listener.
    listener: str | None = None

    phase: RoundPhase = RoundPhase.awaiting_color

    @property
    def outcome(self) -> RoundOutcome | None:
        return RESOLVED_PHASES.get(self.phase)


class SessionRecord(BaseModel):
    session_id: str
    last_updated_at: datetime

    devices: DevicePair | None = None
    mode: SkillMode = SkillMode.roll_call

    # Set once a round ends and we're waiting on "play again?".
    expecting_end_confirmation: bool = False

    round: RoundState = Field(default_factory=RoundState)


class _InboundModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class InputEvent(_InboundModel):
    gadget_id: str
    color: str | None = None
    action: str | None = None
    feature: str | None = None
    timestamp: str | None = None


class GameEngineEvent(_InboundModel):
    name: str
    input_events: list[InputEvent] = Field(default_factory=list)


class InputHandlerEventBatch(_InboundModel):
    originating_request_id: str
    events: list[GameEngineEvent] = Field(default_factory=list)
