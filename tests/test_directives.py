from __future__ import annotations

import pytest
from pydantic import ValidationError

from colormatch.animations import solid_animation
from colormatch.core.directives import AnimationStep, ArmListener, LightAnimation, SetAnimation


def test_set_animation_idle_uses_none_trigger() -> None:
    directive = SetAnimation(target="idle", devices=("g1", "g2"), sequence=solid_animation(1, "0000ff", 500))

    assert directive.to_directive() == {
        "type": "GadgetController.SetLight",
        "version": 1,
        "targetGadgets": ["g1", "g2"],
        "parameters": {
            "triggerEvent": "none",
            "triggerEventTimeMs": 0,
            "animations": [
                {
                    "repeat": 1,
                    "targetLights": ["1"],
                    "sequence": [{"durationMs": 500, "blend": False, "color": "0000ff"}],
                }
            ],
        },
    }


@pytest.mark.parametrize("target", ["buttonDown", "buttonUp"])
def test_set_animation_press_triggers(target: str) -> None:
    directive = SetAnimation(target=target, devices=("g1",), sequence=solid_animation(1, "black", 100))  # type: ignore[arg-type]
    assert directive.to_directive()["parameters"]["triggerEvent"] == target


def test_arm_listener_directive() -> None:
    directive = ArmListener(timeout_ms=20_000, recognizers={"r": {}}, events={"e": {}})
    assert directive.to_directive() == {
        "type": "GameEngine.StartInputHandler",
        "timeout": 20_000,
        "recognizers": {"r": {}},
        "events": {"e": {}},
    }


def test_animation_models_validate() -> None:
    with pytest.raises(ValidationError):
        AnimationStep(duration_ms=0, color="0000ff")
    with pytest.raises(ValidationError):
        AnimationStep(duration_ms=10, color="blue")
    with pytest.raises(ValidationError):
        LightAnimation(repeat=1, sequence=())
