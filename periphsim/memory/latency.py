"""Output latency stage for the dual-port memory."""

from __future__ import annotations

from enum import Enum

from periphsim.core.exceptions import InvalidConfig
from periphsim.core.register import ClockedRegister
from periphsim.utils.consts import HIGH_PERFORMANCE, LATENCY_MODES, LOW_LATENCY


class LatencyMode(Enum):
    LOW_LATENCY = LOW_LATENCY
    HIGH_PERFORMANCE = HIGH_PERFORMANCE

    @property
    def read_latency(self) -> int:
        """Ticks from address to data at the port output."""
        return 1 if self is LatencyMode.LOW_LATENCY else 2

    @classmethod
    def parse(cls, value: "str | LatencyMode") -> "LatencyMode":
        if isinstance(value, LatencyMode):
            return value
        try:
            return cls(str(value).upper())
        except ValueError as exc:
            raise InvalidConfig(
                "latency", f"must be one of {', '.join(LATENCY_MODES)}, got {value!r}"
            ) from exc


class OutputLatencyStage:
    """Pass-through or one registered stage after a port's read-data register.

    In HIGH_PERFORMANCE mode the output register loads the read-data
    register's pre-edge value while output_enable is set and holds
    otherwise. It resets to zero independently of the memory contents.
    """

    def __init__(self, mode: "str | LatencyMode", width: int, name: str = "port"):
        self.mode = LatencyMode.parse(mode)
        self.output_enable = True
        self._output_reg: ClockedRegister | None = None
        if self.mode is LatencyMode.HIGH_PERFORMANCE:
            self._output_reg = ClockedRegister(width, 0, f"{name}.dout")

    @property
    def registered(self) -> bool:
        return self._output_reg is not None

    def output(self, read_data: int) -> int:
        if self._output_reg is None:
            return read_data
        return self._output_reg.value

    def evaluate(self, read_data: int) -> None:
        if self._output_reg is not None and self.output_enable:
            self._output_reg.stage(read_data)

    def commit(self) -> None:
        if self._output_reg is not None:
            self._output_reg.commit()

    def set_reset(self, asserted: bool) -> None:
        if self._output_reg is not None:
            self._output_reg.set_reset(asserted)

    def reset(self) -> None:
        if self._output_reg is not None:
            self._output_reg.reset()
