"""Snapshot types shared by the models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class RegisterValue:
    """Single register value for debug and trace comparison."""

    name: str
    value: int
    group: str = "core"


@dataclass(frozen=True)
class GpioSnapshot:
    """GPIO state as seen after the last clock edge."""

    cycle: int
    data_out: int
    data_oe: int
    intr_state: int
    data_in: int
    sync_stages: tuple[int, int, int]

    @property
    def registers(self) -> tuple[RegisterValue, ...]:
        return (
            RegisterValue("DATA_OUT", self.data_out, "output"),
            RegisterValue("DATA_OE", self.data_oe, "output"),
            RegisterValue("INTR_STATE", self.intr_state, "interrupt"),
            RegisterValue("DATA_IN", self.data_in, "input"),
        )


@dataclass(frozen=True)
class PortSnapshot:
    """State of one memory port."""

    name: str
    read_data: int
    output: int


@dataclass(frozen=True)
class MemorySnapshot:
    """Dual-port memory state: both ports plus the cell contents."""

    cycle: int
    ports: Mapping[str, PortSnapshot]
    cells: tuple[int, ...]
