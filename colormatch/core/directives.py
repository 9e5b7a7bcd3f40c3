from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


AnimationTarget = Literal["idle", "buttonDown", "buttonUp"]

# The set-light directive calls the idle animation trigger "none".
_TRIGGER_EVENTS: dict[str, str] = {
    "idle": "none",
    "buttonDown": "buttonDown",
    "buttonUp": "buttonUp",
}


class WireModel(BaseModel):
    """Base for models that serialize to the gadget wire format (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AnimationStep(WireModel):
    duration_ms: int = Field(..., ge=1)
    blend: bool = False
    # 6-digit hex, no leading '#'.
    color: str = Field(..., pattern=r"^[0-9a-f]{6}$")


class LightAnimation(WireModel):
    """One light sequence played `repeat` times on the targeted lights."""

    repeat: int = Field(..., ge=1)
    target_lights: tuple[str, ...] = ("1",)
    sequence: tuple[AnimationStep, ...] = Field(..., min_length=1)

    @property
    def cycle_duration_ms(self) -> int:
        return sum(step.duration_ms for step in self.sequence)

    @property
    def total_duration_ms(self) -> int:
        return self.repeat * self.cycle_duration_ms


class ArmListener(WireModel):
    """Start a time-boxed input handler on the platform."""

    timeout_ms: int = Field(..., ge=1)
    recognizers: dict[str, Any]
    events: dict[str, Any]

    def to_directive(self) -> dict[str, Any]:
        return {
            "type": "GameEngine.StartInputHandler",
            "timeout": self.timeout_ms,
            "recognizers": self.recognizers,
            "events": self.events,
        }


class SetAnimation(WireModel):
    target: AnimationTarget
    devices: tuple[str, ...]
    sequence: LightAnimation

    def to_directive(self) -> dict[str, Any]:
        return {
            "type": "GadgetController.SetLight",
            "version": 1,
            "targetGadgets": list(self.devices),
            "parameters": {
                "triggerEvent": _TRIGGER_EVENTS[self.target],
                "triggerEventTimeMs": 0,
                "animations": [self.sequence.to_wire()],
            },
        }


Directive = ArmListener | SetAnimation
