"""Hardware register abstraction layer.

Two kinds of register live here:

- ClockedRegister: the storage primitive every model is built from. It
  holds a fixed-width value that changes only at a clock edge (or
  immediately, when reset is asserted).
- Register / RegisterFile: the memory-mapped bus view of a peripheral.
  A bus register translates CPU-style reads and writes at an offset into
  the model's own operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from periphsim.core.bitvec import check_width, width_mask


class ClockedRegister:
    """Fixed-width register updated once per clock edge.

    Updates are two-phase so that a group of registers can all be computed
    from the same pre-edge state:

        reg.stage(next_value)   # evaluate phase
        reg.commit()            # commit phase

    tick(next_value) does both in one call.

    Reset is asynchronous and active while asserted: the held value becomes
    the reset value the moment reset is asserted, and commits are ignored
    until it is released.
    """

    def __init__(self, width: int = 32, reset_value: int = 0, name: str | None = None):
        self.width = width
        self.name = name or "reg"
        self.reset_value = check_width(reset_value, width, f"{self.name}.reset_value")
        self._value = self.reset_value
        self._pending: Optional[int] = None
        self._in_reset = False

    @property
    def value(self) -> int:
        return self._value

    @property
    def in_reset(self) -> bool:
        return self._in_reset

    def set_reset(self, asserted: bool) -> None:
        """Drive the reset input. Asserting clears the value immediately."""
        self._in_reset = asserted
        if asserted:
            self._value = self.reset_value
            self._pending = None

    def stage(self, next_value: int) -> None:
        """Record the value to load at the next commit."""
        self._pending = next_value & width_mask(self.width)

    def commit(self) -> None:
        """Load the staged value (no-op if nothing staged or in reset)."""
        if self._in_reset:
            self._value = self.reset_value
        elif self._pending is not None:
            self._value = self._pending
        self._pending = None

    def tick(self, next_value: int) -> None:
        self.stage(next_value)
        self.commit()

    def reset(self) -> None:
        """Pulse reset: clear to the reset value and drop any staged value."""
        self._value = self.reset_value
        self._pending = None

    def __repr__(self) -> str:
        digits = (self.width + 3) // 4
        return f"ClockedRegister({self.name}=0x{self._value:0{digits}X})"


@dataclass(frozen=True)
class RegisterDescriptor:
    """Metadata about a single bus register.

    This is documentation and validation, not enforcement. The actual
    read/write behavior is implemented by the Register subclass.
    """

    offset: int
    name: str
    width: int  # 1, 2, 4 bytes
    read_only: bool = False
    write_only: bool = False
    reset_value: int = 0


class Register(ABC):
    """Base class for a bus-visible register at a fixed offset.

    Subclasses decide what a read returns and what a write does to the
    model behind them.
    """

    def __init__(self, offset: int, width: int = 4, name: str | None = None):
        self.offset = offset
        self.width = width  # Documentation only; not enforced
        self.name = name or f"REG_{offset:02X}"

    @abstractmethod
    def read(self, access_size: int) -> int:
        """Read from this register, masked to access_size bytes."""
        ...

    @abstractmethod
    def write(self, access_size: int, val: int) -> None:
        """Apply a bus write to this register."""
        ...

    def describe(self) -> RegisterDescriptor:
        return RegisterDescriptor(offset=self.offset, name=self.name, width=self.width)


class ViewRegister(Register):
    """Read-only window onto a model value. Writes are silently ignored."""

    def __init__(self, offset: int, getter: Callable[[], int], name: str | None = None):
        super().__init__(offset, 4, name)
        self._getter = getter

    def read(self, access_size: int) -> int:
        mask = (1 << (access_size * 8)) - 1
        return self._getter() & mask

    def write(self, access_size: int, val: int) -> None:
        pass  # Ignore writes

    def describe(self) -> RegisterDescriptor:
        return RegisterDescriptor(
            offset=self.offset, name=self.name, width=self.width, read_only=True
        )


class RegisterFile:
    """Storage and dispatch for a set of bus registers.

    Maps offset -> Register. Handles access size validation to catch bugs
    early.
    """

    def __init__(self):
        self._registers: dict[int, Register] = {}

    def add(self, reg: Register) -> None:
        """Add a register to this file.

        Raises:
            ValueError: If a register already exists at this offset
        """
        if reg.offset in self._registers:
            raise ValueError(f"Register at offset 0x{reg.offset:X} already exists")
        self._registers[reg.offset] = reg

    def read(self, offset: int, access_size: int, default_reset: int = 0) -> int:
        """Read from offset.

        If the offset is not in any register, returns default_reset (typically 0).
        """
        self._validate_size(access_size)

        if offset in self._registers:
            return self._registers[offset].read(access_size)
        return default_reset & ((1 << (access_size * 8)) - 1)

    def write(self, offset: int, access_size: int, val: int) -> None:
        """Write to offset.

        If the offset is not in any register, the write is silently ignored.
        This matches hardware behavior: writes to undefined offsets have no effect.
        """
        self._validate_size(access_size)

        if offset in self._registers:
            self._registers[offset].write(access_size, val)

    def get_register(self, offset: int) -> Optional[Register]:
        """Return the register at offset, or None."""
        return self._registers.get(offset)

    def descriptors(self) -> list[RegisterDescriptor]:
        """Describe every register, ordered by offset."""
        return [self._registers[off].describe() for off in sorted(self._registers)]

    # Private helpers -------------------------------------------------------

    @staticmethod
    def _validate_size(size: int) -> None:
        """Check that size is valid."""
        if size not in (1, 2, 4):
            raise ValueError(f"Invalid access size {size}; must be 1, 2, or 4 bytes")
