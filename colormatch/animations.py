from __future__ import annotations

import re
from collections.abc import Sequence

from colormatch.core.directives import AnimationStep, LightAnimation
from colormatch.palette import EmptyPalette


DEFAULT_WINDOW_MS = 20_000

NAMED_COLORS: dict[str, str] = {
    "white": "ffffff",
    "black": "000000",
    "red": "ff0000",
    "orange": "ff3300",
    "yellow": "ffd400",
    "green": "00ff00",
    "dark green": "006400",
    "blue": "0000ff",
    "light blue": "00a0b0",
    "dark blue": "00008b",
    "purple": "a000a0",
    "pink": "ff69b4",
}

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def resolve_color(color: str) -> str:
    """Map a color name or hex string to the 6-digit lowercase hex a light expects.

    Unrecognized values light up white rather than failing the whole response.
    """

    m = _HEX_RE.match(color.strip())
    if m:
        return m.group(1).lower()
    return NAMED_COLORS.get(color.strip().casefold(), NAMED_COLORS["white"])


def solid_animation(cycles: int, color: str, duration_ms: int) -> LightAnimation:
    return LightAnimation(
        repeat=cycles,
        sequence=(AnimationStep(duration_ms=duration_ms, blend=False, color=resolve_color(color)),),
    )


def fade_out_animation(cycles: int, color: str, duration_ms: int) -> LightAnimation:
    return LightAnimation(
        repeat=cycles,
        sequence=(
            AnimationStep(duration_ms=1, blend=True, color=resolve_color(color)),
            AnimationStep(duration_ms=duration_ms, blend=True, color=NAMED_COLORS["black"]),
        ),
    )


def pulse_animation(cycles: int, color_from: str, color_to: str) -> LightAnimation:
    return LightAnimation(
        repeat=cycles,
        sequence=(
            AnimationStep(duration_ms=500, blend=True, color=resolve_color(color_from)),
            AnimationStep(duration_ms=1000, blend=True, color=resolve_color(color_to)),
        ),
    )


def repeat_count_for(*, cycle_duration_ms: int, window_ms: int = DEFAULT_WINDOW_MS) -> int:
    """Smallest number of cycles whose total duration runs past `window_ms`."""

    if cycle_duration_ms <= 0:
        raise ValueError("cycle_duration_ms must be positive")
    return window_ms // cycle_duration_ms + 1


def rolling_sequence(
    shades: Sequence[str],
    step_duration_ms: int,
    *,
    window_ms: int = DEFAULT_WINDOW_MS,
) -> LightAnimation:
    """Cycle a light back and forth through `shades` for at least `window_ms`.

    The traversal goes forward through every shade, then backward without
    repeating either endpoint, so looping it shows no jump: [a, b, c, d]
    plays as [a, b, c, d, c, b].
    """

    if not shades:
        raise EmptyPalette("Cannot build a rolling sequence from an empty palette")
    if step_duration_ms <= 0:
        raise ValueError("step_duration_ms must be positive")

    order = list(shades) + list(shades[-2:0:-1])
    steps = tuple(AnimationStep(duration_ms=step_duration_ms, blend=False, color=resolve_color(s)) for s in order)

    cycle_duration_ms = len(steps) * step_duration_ms
    return LightAnimation(
        repeat=repeat_count_for(cycle_duration_ms=cycle_duration_ms, window_ms=window_ms),
        sequence=steps,
    )


WINNING_ANIMATION = pulse_animation(3, "light blue", "dark green")
LOSING_ANIMATION = pulse_animation(3, "orange", "red")

# Close to the buttons' factory behavior; used when a round ends.
DEFAULT_BUTTON_DOWN = fade_out_animation(1, "blue", 200)
DEFAULT_BUTTON_UP = solid_animation(1, "black", 100)
