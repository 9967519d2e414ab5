"""Dual-port block RAM: memory core plus per-port output latency stage."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from periphsim.core.exceptions import InvalidConfig
from periphsim.interfaces.snapshot import MemorySnapshot, PortSnapshot
from periphsim.memory.dual_port import Collision, DualPortMemoryCore
from periphsim.memory.init_file import load_init_file
from periphsim.memory.latency import LatencyMode, OutputLatencyStage
from periphsim.utils.config_loader import MemoryConfig, get_config
from periphsim.utils.consts import PORT_NAMES

logger = logging.getLogger(__name__)


class DualPortRam:
    """True dual-port RAM with selectable output latency.

    LOW_LATENCY: a port's output is its read-data register, one edge after
    the address is presented. HIGH_PERFORMANCE: a further output register
    adds one edge, so the output at edge N equals the LOW_LATENCY output at
    edge N-1.

    Both ports share the clock when driven through tick() or a Clock;
    tick_port() clocks one port on its own.
    """

    def __init__(
        self,
        depth: int,
        word_width: int = 32,
        latency: "str | LatencyMode" = LatencyMode.LOW_LATENCY,
        initializer: Optional[Iterable[int]] = None,
        name: str = "bram",
    ):
        self.name = name
        self.latency = LatencyMode.parse(latency)
        self.core = DualPortMemoryCore(depth, word_width, initializer)
        self._stages = {
            port: OutputLatencyStage(self.latency, word_width, f"{name}.{port}")
            for port in PORT_NAMES
        }

    @classmethod
    def from_config(cls, cfg: Optional[MemoryConfig] = None, **kwargs) -> "DualPortRam":
        """Build from a MemoryConfig (default: the bundled memory/config.yaml)."""
        if cfg is None:
            cfg = get_config("memory").memory
            if cfg is None:
                raise InvalidConfig("memory", "section missing")
        initializer = None
        if cfg.init_file is not None:
            logger.debug("Loading %s init file %s", kwargs.get("name", "bram"), cfg.init_file)
            initializer = load_init_file(cfg.init_file, cfg.depth, cfg.word_width)
        return cls(
            depth=cfg.depth,
            word_width=cfg.word_width,
            latency=cfg.latency,
            initializer=initializer,
            **kwargs,
        )

    @property
    def depth(self) -> int:
        return self.core.depth

    @property
    def word_width(self) -> int:
        return self.core.word_width

    @property
    def collisions(self) -> list[Collision]:
        return self.core.collisions

    def _stage(self, port: str) -> OutputLatencyStage:
        try:
            return self._stages[port.lower()]
        except KeyError:
            raise ValueError(f"Unknown port {port!r}; expected one of {PORT_NAMES}") from None

    # Inputs ----------------------------------------------------------------

    def drive(
        self,
        port: str,
        address: int,
        write_enable: bool = False,
        write_data: int = 0,
        enable: bool = True,
        output_enable: bool = True,
    ) -> None:
        """Set a port's inputs; they stay driven until changed."""
        stage = self._stage(port)
        self.core.drive(port, address, write_enable, write_data, enable)
        stage.output_enable = bool(output_enable)

    def set_reset(self, port: str, asserted: bool) -> None:
        """Drive a port's output-register reset. The array is unaffected."""
        self._stage(port).set_reset(asserted)

    # Outputs ---------------------------------------------------------------

    def output(self, port: str) -> int:
        return self._stage(port).output(self.core.read_data(port))

    def outputs(self) -> dict[str, int]:
        return {port: self.output(port) for port in PORT_NAMES}

    def peek(self, address: int) -> int:
        return self.core.peek(address)

    # Clocking --------------------------------------------------------------

    def evaluate(self) -> None:
        for port in PORT_NAMES:
            self._stages[port].evaluate(self.core.read_data(port))
        self.core.evaluate()

    def commit(self) -> None:
        self.core.commit()
        for port in PORT_NAMES:
            self._stages[port].commit()

    def tick(self, cycles: int = 1) -> None:
        """Take cycles shared clock edges on both ports."""
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        for _ in range(cycles):
            self.evaluate()
            self.commit()

    def tick_port(self, port: str) -> None:
        """Take one edge of a single port's clock."""
        stage = self._stage(port)
        stage.evaluate(self.core.read_data(port))
        self.core.tick_port(port)
        stage.commit()

    def access(
        self,
        port: str,
        address: int,
        write_enable: bool = False,
        write_data: int = 0,
        enable: bool = True,
        output_enable: bool = True,
    ) -> int:
        """Drive one port, clock it once and return its output."""
        self.drive(port, address, write_enable, write_data, enable, output_enable)
        self.tick_port(port)
        return self.output(port)

    def reset(self) -> None:
        """Power-on reset: reload initial contents and clear every register."""
        logger.debug("Resetting %s", self.name)
        self.core.reset()
        for stage in self._stages.values():
            stage.reset()
            stage.output_enable = True

    def get_snapshot(self) -> MemorySnapshot:
        ports = {
            port: PortSnapshot(
                name=port,
                read_data=self.core.read_data(port),
                output=self.output(port),
            )
            for port in PORT_NAMES
        }
        return MemorySnapshot(cycle=self.core.cycle, ports=ports, cells=self.core.cells)
