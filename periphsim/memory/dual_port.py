"""Dual-port memory core with read-first (write-after-read) ports.

Each port, on its clock edge:

1. reads array[address] as it stood before the edge,
2. writes write_data to array[address] if write_enable is set (visible
   from the next edge),
3. loads the value read in step 1 into its read-data register.

A port whose enable is low skips all three steps and its read-data
register holds.

When both ports are enabled, target the same address on the same edge and
at least one writes, the outcome is unspecified. tick() resolves it by
reading both ports from the pre-edge array and then applying port A's write
before port B's; callers must not rely on that order. Every such edge is
recorded in `collisions` and logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from periphsim.core.bitvec import check_width
from periphsim.core.exceptions import InvalidConfig, OutOfRange
from periphsim.core.register import ClockedRegister
from periphsim.utils.consts import PORT_NAMES

logger = logging.getLogger(__name__)


@dataclass
class PortInputs:
    """Signals driven into one port. They stay driven until changed."""

    address: int = 0
    write_enable: bool = False
    write_data: int = 0
    enable: bool = True


@dataclass(frozen=True)
class Collision:
    """Same-address access by both ports on one edge with a write involved."""

    cycle: int
    address: int
    writers: tuple[str, ...]


class MemoryPort:
    """One access port: its driven inputs and its read-data register."""

    def __init__(self, name: str, width: int):
        self.name = name
        self.inputs = PortInputs()
        self.read_data = ClockedRegister(width, 0, f"{name}.read_data")
        self.cycles = 0
        self.pending_write: Optional[tuple[int, int]] = None
        # Value read by the last evaluate(); None while the port is disabled
        self.last_read: Optional[int] = None


class DualPortMemoryCore:
    """Fixed-depth array shared by two independent read-first ports."""

    def __init__(
        self,
        depth: int,
        word_width: int = 32,
        initializer: Optional[Iterable[int]] = None,
    ):
        if depth <= 0:
            raise InvalidConfig("depth", f"must be positive, got {depth}")
        if word_width <= 0:
            raise InvalidConfig("word_width", f"must be positive, got {word_width}")
        self.depth = depth
        self.word_width = word_width
        self._initial = self._initial_cells(initializer)
        self._cells = list(self._initial)
        self.ports = {name: MemoryPort(name, word_width) for name in PORT_NAMES}
        self.collisions: list[Collision] = []
        self._cycle = 0

    def _initial_cells(self, initializer: Optional[Iterable[int]]) -> list[int]:
        cells = [0] * self.depth
        if initializer is None:
            return cells
        for index, value in enumerate(initializer):
            if index >= self.depth:
                raise InvalidConfig(
                    "initializer", f"provides more than {self.depth} values"
                )
            cells[index] = check_width(value, self.word_width, f"initializer[{index}]")
        return cells

    @property
    def cycle(self) -> int:
        return self._cycle

    @property
    def cells(self) -> tuple[int, ...]:
        return tuple(self._cells)

    def _check_address(self, address: int) -> int:
        if not 0 <= address < self.depth:
            raise OutOfRange(address, self.depth)
        return address

    def _port(self, name: str) -> MemoryPort:
        try:
            return self.ports[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown port {name!r}; expected one of {PORT_NAMES}") from None

    def peek(self, address: int) -> int:
        """Debug read of a cell; does not touch any port."""
        return self._cells[self._check_address(address)]

    def drive(
        self,
        port: str,
        address: int,
        write_enable: bool = False,
        write_data: int = 0,
        enable: bool = True,
    ) -> None:
        """Set a port's inputs for the coming edge(s).

        Raises:
            OutOfRange: If address is outside [0, depth)
            WidthMismatch: If write_data does not fit the word width
        """
        p = self._port(port)
        self._check_address(address)
        check_width(write_data, self.word_width, "write_data")
        p.inputs = PortInputs(
            address=address,
            write_enable=bool(write_enable),
            write_data=write_data,
            enable=bool(enable),
        )

    def read_data(self, port: str) -> int:
        """Current value of a port's read-data register."""
        return self._port(port).read_data.value

    # Per-port clock domain -------------------------------------------------

    def evaluate_port(self, port: str) -> Optional[int]:
        p = self._port(port)
        p.pending_write = None
        p.last_read = None
        if not p.inputs.enable:
            return None

        address = p.inputs.address
        value = self._cells[address]
        p.read_data.stage(value)
        p.last_read = value
        if p.inputs.write_enable:
            p.pending_write = (address, p.inputs.write_data)
        return value

    def commit_port(self, port: str) -> None:
        p = self._port(port)
        p.read_data.commit()
        if p.pending_write is not None:
            address, data = p.pending_write
            self._cells[address] = data
            p.pending_write = None
        p.cycles += 1

    def tick_port(self, port: str) -> None:
        """Take one edge of a single port's clock."""
        self.evaluate_port(port)
        self.commit_port(port)

    def access(
        self,
        port: str,
        address: int,
        write_enable: bool = False,
        write_data: int = 0,
        enable: bool = True,
    ) -> int:
        """Drive one port and clock it once.

        Returns:
            The value read on this edge (pre-write). With enable low the
            port does nothing and the held read-data value is returned.
        """
        self.drive(port, address, write_enable, write_data, enable)
        self.tick_port(port)
        return self.read_data(port)

    # Both ports on one shared edge -----------------------------------------

    def _detect_collision(self) -> Optional[Collision]:
        a, b = (self.ports[name].inputs for name in PORT_NAMES)
        if not (a.enable and b.enable) or a.address != b.address:
            return None
        writers = tuple(
            name for name, inputs in zip(PORT_NAMES, (a, b)) if inputs.write_enable
        )
        if not writers:
            return None
        return Collision(cycle=self._cycle, address=a.address, writers=writers)

    def evaluate(self) -> None:
        collision = self._detect_collision()
        if collision is not None:
            self.collisions.append(collision)
            logger.warning(
                "Dual-port collision at address %d (cycle %d, writers=%s); result unspecified",
                collision.address,
                collision.cycle,
                ",".join(collision.writers),
            )
        for name in PORT_NAMES:
            self.evaluate_port(name)

    def commit(self) -> None:
        for name in PORT_NAMES:
            self.commit_port(name)
        self._cycle += 1

    def tick(self) -> None:
        self.evaluate()
        self.commit()

    def reset(self) -> None:
        """Restore the initial contents and clear port state."""
        self._cells = list(self._initial)
        for p in self.ports.values():
            p.inputs = PortInputs()
            p.read_data.reset()
            p.cycles = 0
            p.pending_write = None
            p.last_read = None
        self.collisions.clear()
        self._cycle = 0
