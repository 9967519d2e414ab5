"""Edge/level interrupt detection feeding a sticky write-1-to-clear status.

Per tick:

    detect  = (rising_en & rising) | (falling_en & falling)
            | (lvlhigh_en & level) | (lvllow_en & ~level)
    status' = (status | detect) & ~clear_mask

The clear is applied after the new events are ORed in, so a bit that is
detected and cleared in the same tick ends up cleared.
"""

from __future__ import annotations

from dataclasses import dataclass

from periphsim.core.bitvec import check_width, invert, width_mask
from periphsim.core.register import ClockedRegister
from periphsim.gpio.edge_detect import EdgeVectors


@dataclass(frozen=True)
class InterruptEnables:
    """The four enable sets, one bit per input line."""

    rising: int = 0
    falling: int = 0
    level_high: int = 0
    level_low: int = 0

    def validate(self, width: int) -> "InterruptEnables":
        for name in ("rising", "falling", "level_high", "level_low"):
            check_width(getattr(self, name), width, f"interrupts.{name}")
        return self

    @property
    def any(self) -> int:
        """Lines with at least one interrupt source enabled."""
        return self.rising | self.falling | self.level_high | self.level_low


def detect_interrupts(
    enables: InterruptEnables, edges: EdgeVectors, level: int, width: int = 32
) -> int:
    return (
        (enables.rising & edges.rising)
        | (enables.falling & edges.falling)
        | (enables.level_high & level)
        | (enables.level_low & invert(level, width))
    ) & width_mask(width)


def next_status(status: int, detected: int, clear_mask: int) -> int:
    """Sticky update: set newly detected bits, then apply write-1-to-clear."""
    return (status | detected) & ~clear_mask


class InterruptController:
    """Sticky interrupt status register for the GPIO lines."""

    def __init__(self, enables: InterruptEnables | None = None, width: int = 32):
        self.width = width
        self.enables = (enables or InterruptEnables()).validate(width)
        self._status = ClockedRegister(width, 0, "intr_state")
        self._clear_mask = 0
        self._detected = 0

    @property
    def status(self) -> int:
        return self._status.value

    @property
    def intr_out(self) -> int:
        """Interrupt lines; the status register drives them directly."""
        return self._status.value

    @property
    def last_detected(self) -> int:
        """Events found by the most recent evaluate()."""
        return self._detected

    def clear(self, mask: int) -> None:
        """Request write-1-to-clear of mask at the next edge.

        Several clears before one edge accumulate.
        """
        self._clear_mask |= check_width(mask, self.width, "clear_mask")

    def evaluate(self, edges: EdgeVectors, level: int) -> None:
        self._detected = detect_interrupts(self.enables, edges, level, self.width)
        self._status.stage(next_status(self.status, self._detected, self._clear_mask))

    def commit(self) -> None:
        self._status.commit()
        self._clear_mask = 0

    def set_reset(self, asserted: bool) -> None:
        self._status.set_reset(asserted)
        if asserted:
            self._clear_mask = 0

    def reset(self) -> None:
        self._status.reset()
        self._clear_mask = 0
        self._detected = 0
