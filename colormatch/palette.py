from __future__ import annotations

import logging
import random
from collections.abc import Sequence


logger = logging.getLogger(__name__)


class UnknownColor(ValueError):
    """Raised when a color name is not one of the configured color families."""

    def __init__(self, color: str | None) -> None:
        super().__init__(f"Unknown color: {color!r}")
        self.color = color


class EmptyPalette(RuntimeError):
    pass


# Ordered from most to least intense.
COLOR_SHADES: dict[str, tuple[str, ...]] = {
    "blue": ("0000ff", "000077", "000027", "000003"),
    "green": ("00ff00", "007700", "002700", "000300"),
    "red": ("ff0000", "770000", "270000", "030000"),
}


def color_names() -> list[str]:
    return list(COLOR_SHADES)


def canonical_color(color: str | None) -> str:
    """Normalize a spoken color slot value to a configured family name.

    Lookup is forgiving about surrounding whitespace and case.
    """

    key = (color or "").strip().casefold()
    if key not in COLOR_SHADES:
        raise UnknownColor(color)
    return key


def shades_for(color: str | None) -> tuple[str, ...]:
    key = canonical_color(color)
    shades = COLOR_SHADES[key]
    if not shades:
        logger.error("Color family %r has no shades configured", key)
        raise EmptyPalette(f"No shades configured for color: {key}")
    return shades


def pick_random_shade(shades: Sequence[str], *, rng: random.Random | None = None) -> str:
    if not shades:
        raise EmptyPalette("Cannot pick a shade from an empty palette")
    rng = rng or random.Random()
    return shades[rng.randrange(len(shades))]
