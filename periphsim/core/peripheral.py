"""Base peripheral helpers for shared behavior."""

from __future__ import annotations

from periphsim.core.register import RegisterDescriptor, RegisterFile


class BasePeripheral:
    """Optional base class for clocked, memory-mapped models.

    Provides the register bus dispatch and a standalone tick() for models
    that are not attached to a Clock. Concrete peripherals implement
    evaluate/commit/reset behavior and populate self._registers.
    """

    def __init__(self, name: str, size: int, base_addr: int = 0):
        self.name = name
        self.size = size
        self.base_addr = base_addr
        self._registers = RegisterFile()
        self._cycle = 0

    @property
    def cycle(self) -> int:
        """Clock edges this peripheral has committed since reset."""
        return self._cycle

    def read(self, offset: int, size: int) -> int:
        """Read from a peripheral register (0 for undefined offsets)."""
        return self._registers.read(offset, size, default_reset=0)

    def write(self, offset: int, size: int, value: int) -> None:
        """Write to a peripheral register (ignored for undefined offsets)."""
        self._registers.write(offset, size, value)

    def register_map(self) -> list[RegisterDescriptor]:
        return self._registers.descriptors()

    def tick(self, cycles: int = 1) -> None:
        """Take cycles clock edges without an external Clock."""
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        for _ in range(cycles):
            self.evaluate()
            self.commit()

    def evaluate(self) -> None:
        """Compute next state (override in subclasses)."""
        raise NotImplementedError("evaluate() must be implemented by subclasses")

    def commit(self) -> None:
        """Apply next state (override in subclasses)."""
        raise NotImplementedError("commit() must be implemented by subclasses")

    def reset(self) -> None:
        """Reset peripheral state (override in subclasses)."""
        raise NotImplementedError("reset() must be implemented by subclasses")
