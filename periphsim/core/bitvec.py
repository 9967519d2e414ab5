"""Fixed-width bit vector helpers.

Bit vectors are plain ints paired with a width. Every helper here returns a
value truncated to the width it was given.
"""

from __future__ import annotations

from periphsim.core.exceptions import WidthMismatch


def width_mask(width: int) -> int:
    """Return an all-ones mask of the given width."""
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    return (1 << width) - 1


def check_width(value: int, width: int, name: str | None = None) -> int:
    """Validate that value fits in width bits and return it unchanged.

    Raises:
        WidthMismatch: If value is negative or has bits set above width
    """
    if value < 0 or value >> width:
        raise WidthMismatch(value, width, name)
    return value


def invert(value: int, width: int) -> int:
    """Bitwise NOT within width bits."""
    return ~value & width_mask(width)


def masked_update(current: int, data: int, mask: int, shift: int = 0) -> int:
    """Replace the bits of current selected by mask << shift with data.

    next = (current & ~(mask << shift)) | ((data & mask) << shift)
    """
    field = mask << shift
    return (current & ~field) | ((data & mask) << shift)


def half_mask(width: int) -> int:
    """Mask covering one half-word of a width-bit register (width assumed even)."""
    return width_mask(width // 2)
