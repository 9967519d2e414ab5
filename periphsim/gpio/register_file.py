"""Output-data and output-enable registers with masked half-word writes.

Write policy, per register, per clock edge:

- DirectWrite replaces the whole register and wins over any masked
  request issued in the same tick. The two are never merged.
- MaskedWriteUpper / MaskedWriteLower replace only the bits selected by
  their mask within the upper / lower half-word. Both may apply in the same
  tick since they touch disjoint bits.
- With no request the register holds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from periphsim.core.bitvec import check_width, half_mask, masked_update, width_mask
from periphsim.core.register import ClockedRegister


@dataclass(frozen=True)
class DirectWrite:
    data: int


@dataclass(frozen=True)
class MaskedWriteUpper:
    data: int
    mask: int


@dataclass(frozen=True)
class MaskedWriteLower:
    data: int
    mask: int


@dataclass(frozen=True)
class NoWrite:
    pass


NO_WRITE = NoWrite()

WriteRequest = Union[DirectWrite, MaskedWriteUpper, MaskedWriteLower, NoWrite]


def compute_next(
    current: int,
    requests: WriteRequest | Iterable[WriteRequest],
    width: int = 32,
) -> int:
    """Apply this tick's write requests to current and return the next value.

    A later request of the same kind replaces an earlier one. The halves split at
    width // 2, so width is assumed even.
    """
    if isinstance(requests, (DirectWrite, MaskedWriteUpper, MaskedWriteLower, NoWrite)):
        requests = (requests,)

    direct = upper = lower = None
    for req in requests:
        if isinstance(req, DirectWrite):
            direct = req
        elif isinstance(req, MaskedWriteUpper):
            upper = req
        elif isinstance(req, MaskedWriteLower):
            lower = req

    if direct is not None:
        return direct.data & width_mask(width)

    half = width // 2
    field = half_mask(width)
    nxt = current
    if upper is not None:
        nxt = masked_update(nxt, upper.data, upper.mask & field, shift=half)
    if lower is not None:
        nxt = masked_update(nxt, lower.data, lower.mask & field)
    return nxt & width_mask(width)


class MaskedRegister:
    """One register under the direct-over-masked write policy."""

    def __init__(self, width: int = 32, reset_value: int = 0, name: str | None = None):
        self.width = width
        self.name = name or "masked_reg"
        self._reg = ClockedRegister(width, reset_value, self.name)
        self._requests: dict[type, WriteRequest] = {}

    @property
    def value(self) -> int:
        return self._reg.value

    @property
    def pending(self) -> tuple[WriteRequest, ...]:
        return tuple(self._requests.values())

    def validate(self, req: WriteRequest) -> None:
        """Check a request against this register without queueing it.

        Raises:
            WidthMismatch: If data or mask do not fit their operand width
            TypeError: If req is not a write request
        """
        if isinstance(req, NoWrite):
            return
        if isinstance(req, DirectWrite):
            check_width(req.data, self.width, f"{self.name}.data")
        elif isinstance(req, (MaskedWriteUpper, MaskedWriteLower)):
            half = self.width // 2
            check_width(req.data, half, f"{self.name}.data")
            check_width(req.mask, half, f"{self.name}.mask")
        else:
            raise TypeError(f"Unsupported write request {req!r}")

    def request(self, req: WriteRequest) -> None:
        """Queue a write for the next clock edge."""
        self.validate(req)
        if not isinstance(req, NoWrite):
            self._requests[type(req)] = req

    def evaluate(self) -> None:
        self._reg.stage(compute_next(self.value, self._requests.values(), self.width))

    def commit(self) -> None:
        self._reg.commit()
        self._requests.clear()

    def set_reset(self, asserted: bool) -> None:
        self._reg.set_reset(asserted)
        if asserted:
            self._requests.clear()

    def reset(self) -> None:
        self._reg.reset()
        self._requests.clear()


class MaskedRegisterFile:
    """Output-data and output-enable registers. They share no state."""

    def __init__(self, width: int = 32, data_out_reset: int = 0, data_oe_reset: int = 0):
        self.width = width
        self.data_out = MaskedRegister(width, data_out_reset, "data_out")
        self.data_oe = MaskedRegister(width, data_oe_reset, "data_oe")

    def _registers(self) -> tuple[MaskedRegister, MaskedRegister]:
        return (self.data_out, self.data_oe)

    def evaluate(self) -> None:
        for reg in self._registers():
            reg.evaluate()

    def commit(self) -> None:
        for reg in self._registers():
            reg.commit()

    def set_reset(self, asserted: bool) -> None:
        for reg in self._registers():
            reg.set_reset(asserted)

    def reset(self) -> None:
        for reg in self._registers():
            reg.reset()
