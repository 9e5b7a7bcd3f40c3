from __future__ import annotations

import pytest

from colormatch.animations import (
    DEFAULT_BUTTON_DOWN,
    DEFAULT_BUTTON_UP,
    LOSING_ANIMATION,
    WINNING_ANIMATION,
    fade_out_animation,
    repeat_count_for,
    resolve_color,
    rolling_sequence,
    solid_animation,
)
from colormatch.core.directives import LightAnimation
from colormatch.palette import COLOR_SHADES, EmptyPalette


def _colors(animation: LightAnimation) -> list[str]:
    return [step.color for step in animation.sequence]


def test_rolling_sequence_is_palindrome_without_repeated_endpoints() -> None:
    anim = rolling_sequence(["aa0000", "bb0000", "cc0000"], 1000)
    assert _colors(anim) == ["aa0000", "bb0000", "cc0000", "bb0000"]


def test_rolling_sequence_for_blue_palette() -> None:
    anim = rolling_sequence(COLOR_SHADES["blue"], 1000)

    assert _colors(anim) == ["0000ff", "000077", "000027", "000003", "000027", "000077"]
    assert all(step.duration_ms == 1000 for step in anim.sequence)
    assert all(step.blend is False for step in anim.sequence)
    assert anim.cycle_duration_ms == 6000
    assert anim.repeat == 4


def test_rolling_sequence_single_shade_does_not_reverse() -> None:
    anim = rolling_sequence(["123456"], 1000)
    assert _colors(anim) == ["123456"]
    assert anim.repeat == 21


def test_rolling_sequence_two_shades() -> None:
    anim = rolling_sequence(["aa0000", "bb0000"], 500)
    assert _colors(anim) == ["aa0000", "bb0000"]


@pytest.mark.parametrize("shade_count", [1, 2, 3, 4, 5, 7])
@pytest.mark.parametrize("step_ms", [250, 1000, 3000])
def test_rolling_repeat_covers_window_minimally(shade_count: int, step_ms: int) -> None:
    shades = [f"{i:06x}" for i in range(shade_count)]
    anim = rolling_sequence(shades, step_ms, window_ms=20_000)

    assert anim.total_duration_ms >= 20_000
    assert (anim.repeat - 1) * anim.cycle_duration_ms <= 20_000


def test_repeat_count_when_window_is_exact_multiple() -> None:
    # Total play time runs strictly past the window.
    assert repeat_count_for(cycle_duration_ms=4000, window_ms=20_000) == 6


def test_rolling_sequence_rejects_bad_input() -> None:
    with pytest.raises(EmptyPalette):
        rolling_sequence([], 1000)
    with pytest.raises(ValueError):
        rolling_sequence(["aa0000"], 0)


def test_resolve_color_accepts_names_and_hex() -> None:
    assert resolve_color("light blue") == "00a0b0"
    assert resolve_color("#FF00AA") == "ff00aa"
    assert resolve_color("0000ff") == "0000ff"
    assert resolve_color("no such color") == "ffffff"


def test_basic_animations() -> None:
    solid = solid_animation(1, "000077", 20_000)
    assert solid.repeat == 1
    assert _colors(solid) == ["000077"]
    assert solid.total_duration_ms == 20_000

    fade = fade_out_animation(1, "blue", 2000)
    assert _colors(fade) == ["0000ff", "000000"]
    assert fade.sequence[-1].duration_ms == 2000


def test_outcome_and_default_animations() -> None:
    assert WINNING_ANIMATION.repeat == 3
    assert _colors(WINNING_ANIMATION) == [resolve_color("light blue"), resolve_color("dark green")]
    assert _colors(LOSING_ANIMATION) == [resolve_color("orange"), resolve_color("red")]
    assert _colors(DEFAULT_BUTTON_DOWN) == ["0000ff", "000000"]
    assert _colors(DEFAULT_BUTTON_UP) == ["000000"]
