"""Peripheral protocol for memory-mapped models.

A Peripheral is any model that responds to read/write operations at
peripheral-relative offsets (MMIO) in addition to its per-tick pin inputs.

PROTOCOL CONTRACT:
- Offsets are peripheral-relative (0x00 - max offset in peripheral)
- Must support 1, 2, and 4-byte accesses
- Read: Return the register value or 0 if undefined
- Write: Request a register update at the next clock edge, or silently
  ignore writes to undefined/read-only offsets
- Reset: Restore all registers to reset values
- Exceptions: Only raise for contract violations (never for normal I/O)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Peripheral(Protocol):
    """Memory-mapped peripheral interface (structural subtyping)."""

    def write(self, offset: int, size: int, value: int) -> None:
        """Write to a peripheral register.

        Args:
            offset: Peripheral-relative address (0x00+)
            size: Number of bytes to write (1, 2, or 4)
            value: Data to write
        """
        ...

    def read(self, offset: int, size: int) -> int:
        """Read from a peripheral register.

        Returns:
            Register value, or 0 if offset is undefined
        """
        ...

    def reset(self) -> None:
        """Reset peripheral to its initial state."""
        ...

    def evaluate(self) -> None:
        """Compute next state for the coming clock edge."""
        ...

    def commit(self) -> None:
        """Apply the state computed by evaluate()."""
        ...
