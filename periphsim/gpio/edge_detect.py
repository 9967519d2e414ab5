"""Per-bit edge detection between two consecutive samples."""

from __future__ import annotations

from typing import NamedTuple

from periphsim.core.bitvec import invert, width_mask


class EdgeVectors(NamedTuple):
    rising: int
    falling: int


def detect(current: int, previous: int, width: int = 32) -> EdgeVectors:
    """Return the rising and falling pulses for this tick.

    rising = current & ~previous, falling = ~current & previous.
    """
    mask = width_mask(width)
    current &= mask
    previous &= mask
    return EdgeVectors(
        rising=current & invert(previous, width),
        falling=invert(current, width) & previous,
    )
