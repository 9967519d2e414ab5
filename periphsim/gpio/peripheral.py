"""GPIO controller with synchronized inputs, masked outputs and interrupts.

Data path per clock edge:

    pads -> InputSynchronizer -> edge detect -> InterruptController
                                    |
                                    +-> DATA_IN (synchronized level)

    bus / write requests -> MaskedRegisterFile -> pad output, pad enable

All sub-blocks evaluate against the pre-edge state and then commit
together, so interrupt detection in tick N sees the synchronizer stages
from before edge N.

REGISTER BUS:
  INTR_STATE          @ 0x00 (sticky status, write 1 to clear)
  INTR_ENABLE         @ 0x04 (lines with any interrupt source enabled)
  DATA_IN             @ 0x10 (synchronized pad level, read-only)
  DIRECT_OUT          @ 0x14 (full output-data write)
  MASKED_OUT_LOWER    @ 0x18 ([31:16] mask, [15:0] data for lines 15..0)
  MASKED_OUT_UPPER    @ 0x1C ([31:16] mask, [15:0] data for lines 31..16)
  DIRECT_OE           @ 0x20
  MASKED_OE_LOWER     @ 0x24
  MASKED_OE_UPPER     @ 0x28
  INTR_CTRL_EN_*      @ 0x2C..0x38 (enable sets, read-only here)

Offsets come from GpioConfig and can be overridden in config.yaml.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

from periphsim.core.bitvec import check_width, half_mask, width_mask
from periphsim.core.exceptions import InvalidConfig
from periphsim.core.peripheral import BasePeripheral
from periphsim.core.register import Register, ViewRegister
from periphsim.gpio.edge_detect import detect
from periphsim.gpio.interrupts import InterruptController, InterruptEnables
from periphsim.gpio.register_file import (
    DirectWrite,
    MaskedRegister,
    MaskedRegisterFile,
    MaskedWriteLower,
    MaskedWriteUpper,
    WriteRequest,
)
from periphsim.gpio.synchronizer import InputSynchronizer
from periphsim.interfaces.snapshot import GpioSnapshot
from periphsim.utils.config_loader import (
    GpioConfig,
    GpioRegisterOffsets,
    get_config,
    validate_gpio_width,
)
from periphsim.utils.consts import ConstUtils

logger = logging.getLogger(__name__)

GPIO_REGISTER_BLOCK_SIZE = 0x40


class GpioOutputs(NamedTuple):
    pad_output: int
    pad_enable: int
    intr_state: int


def _require_word_access(name: str, size: int) -> None:
    if size != 4:
        raise ValueError(f"{name} writes must be 4 bytes")


class InterruptStateRegister(Register):
    """INTR_STATE: reads the sticky status, writes are write-1-to-clear."""

    def __init__(self, offset: int, controller: InterruptController):
        super().__init__(offset, 4, "INTR_STATE")
        self._controller = controller

    def read(self, access_size: int) -> int:
        return self._controller.status & ((1 << (access_size * 8)) - 1)

    def write(self, access_size: int, val: int) -> None:
        _require_word_access(self.name, access_size)
        self._controller.clear(val & width_mask(self._controller.width))


class DirectWriteRegister(Register):
    """DIRECT_OUT / DIRECT_OE: full-width write of the target register."""

    def __init__(self, offset: int, target: MaskedRegister, name: str):
        super().__init__(offset, 4, name)
        self._target = target

    def read(self, access_size: int) -> int:
        return self._target.value & ((1 << (access_size * 8)) - 1)

    def write(self, access_size: int, val: int) -> None:
        _require_word_access(self.name, access_size)
        self._target.request(DirectWrite(val & width_mask(self._target.width)))


class MaskedWriteRegister(Register):
    """MASKED_*_LOWER / MASKED_*_UPPER: bits [31:16] mask, bits [15:0] data.

    Reads return the selected half of the target with a zero mask field.
    """

    def __init__(self, offset: int, target: MaskedRegister, upper: bool, name: str):
        super().__init__(offset, 4, name)
        self._target = target
        self._upper = upper

    def read(self, access_size: int) -> int:
        half = self._target.width // 2
        value = self._target.value >> half if self._upper else self._target.value
        return value & half_mask(self._target.width) & ((1 << (access_size * 8)) - 1)

    def write(self, access_size: int, val: int) -> None:
        _require_word_access(self.name, access_size)
        field = half_mask(self._target.width)
        data = val & field
        mask = (val >> ConstUtils.HALF_WORD_BITS) & field
        req_type = MaskedWriteUpper if self._upper else MaskedWriteLower
        self._target.request(req_type(data=data, mask=mask))


class GpioPeripheral(BasePeripheral):
    """Synchronized-input, interrupt-capable GPIO controller.

    Pin-side inputs (drive_pads) stay driven until changed. Write requests
    and interrupt clears are one-shot: they apply at the next clock edge and
    are then dropped.
    """

    def __init__(
        self,
        width: int = ConstUtils.GPIO_WIDTH,
        enables: Optional[InterruptEnables] = None,
        data_out_reset: int = 0,
        data_oe_reset: int = 0,
        offsets: Optional[GpioRegisterOffsets] = None,
        name: str = "gpio",
        base_addr: int = 0,
    ):
        super().__init__(name=name, size=GPIO_REGISTER_BLOCK_SIZE, base_addr=base_addr)
        self.width = validate_gpio_width(width)
        self.offsets = offsets or GpioRegisterOffsets()
        self._sync = InputSynchronizer(width)
        self._outputs = MaskedRegisterFile(width, data_out_reset, data_oe_reset)
        self._interrupts = InterruptController(enables, width)
        self._build_register_map()

    @classmethod
    def from_config(cls, cfg: Optional[GpioConfig] = None, **kwargs) -> "GpioPeripheral":
        """Build from a GpioConfig (default: the bundled gpio/config.yaml)."""
        if cfg is None:
            cfg = get_config("gpio").gpio
            if cfg is None:
                raise InvalidConfig("gpio", "section missing")
        intr = cfg.interrupts
        return cls(
            width=cfg.width,
            enables=InterruptEnables(
                rising=intr.rising,
                falling=intr.falling,
                level_high=intr.level_high,
                level_low=intr.level_low,
            ),
            data_out_reset=cfg.data_out_reset,
            data_oe_reset=cfg.data_oe_reset,
            offsets=cfg.offsets,
            **kwargs,
        )

    def _build_register_map(self) -> None:
        off = self.offsets
        data_out = self._outputs.data_out
        data_oe = self._outputs.data_oe
        enables = self._interrupts.enables

        self._registers.add(InterruptStateRegister(off.intr_state, self._interrupts))
        self._registers.add(ViewRegister(off.intr_enable, lambda: enables.any, "INTR_ENABLE"))
        self._registers.add(ViewRegister(off.data_in, self._sync.sampled, "DATA_IN"))
        self._registers.add(DirectWriteRegister(off.direct_out, data_out, "DIRECT_OUT"))
        self._registers.add(
            MaskedWriteRegister(off.masked_out_lower, data_out, False, "MASKED_OUT_LOWER")
        )
        self._registers.add(
            MaskedWriteRegister(off.masked_out_upper, data_out, True, "MASKED_OUT_UPPER")
        )
        self._registers.add(DirectWriteRegister(off.direct_oe, data_oe, "DIRECT_OE"))
        self._registers.add(
            MaskedWriteRegister(off.masked_oe_lower, data_oe, False, "MASKED_OE_LOWER")
        )
        self._registers.add(
            MaskedWriteRegister(off.masked_oe_upper, data_oe, True, "MASKED_OE_UPPER")
        )
        self._registers.add(
            ViewRegister(off.intr_ctrl_en_rising, lambda: enables.rising, "INTR_CTRL_EN_RISING")
        )
        self._registers.add(
            ViewRegister(off.intr_ctrl_en_falling, lambda: enables.falling, "INTR_CTRL_EN_FALLING")
        )
        self._registers.add(
            ViewRegister(
                off.intr_ctrl_en_lvlhigh, lambda: enables.level_high, "INTR_CTRL_EN_LVLHIGH"
            )
        )
        self._registers.add(
            ViewRegister(off.intr_ctrl_en_lvllow, lambda: enables.level_low, "INTR_CTRL_EN_LVLLOW")
        )

    # Inputs ----------------------------------------------------------------

    def drive_pads(self, raw: int) -> None:
        """Set the raw (asynchronous) pad input vector."""
        self._sync.drive(raw)

    def write_data(self, request: WriteRequest) -> None:
        """Queue a write to the output-data register for the next edge."""
        self._outputs.data_out.request(request)

    def write_enable(self, request: WriteRequest) -> None:
        """Queue a write to the output-enable register for the next edge."""
        self._outputs.data_oe.request(request)

    def clear_interrupts(self, mask: int) -> None:
        """Write-1-to-clear interrupt status bits at the next edge."""
        self._interrupts.clear(mask)

    # Outputs ---------------------------------------------------------------

    @property
    def enables(self) -> InterruptEnables:
        return self._interrupts.enables

    @property
    def pad_output(self) -> int:
        return self._outputs.data_out.value

    @property
    def pad_enable(self) -> int:
        return self._outputs.data_oe.value

    @property
    def intr_state(self) -> int:
        return self._interrupts.intr_out

    @property
    def data_in(self) -> int:
        """Synchronized pad level (two edges behind the raw pads)."""
        return self._sync.sampled()

    def outputs(self) -> GpioOutputs:
        return GpioOutputs(self.pad_output, self.pad_enable, self.intr_state)

    # Clocking --------------------------------------------------------------

    def evaluate(self) -> None:
        level = self._sync.sampled()
        edges = detect(level, self._sync.previous(), self.width)
        self._interrupts.evaluate(edges, level)
        self._outputs.evaluate()
        self._sync.evaluate()

    def commit(self) -> None:
        self._interrupts.commit()
        self._outputs.commit()
        self._sync.commit()
        self._cycle += 1

    def step(
        self,
        pads: Optional[int] = None,
        data: Optional[WriteRequest] = None,
        enable: Optional[WriteRequest] = None,
        clear_mask: int = 0,
    ) -> GpioOutputs:
        """Drive one tick's inputs, take one edge and return the outputs.

        Bad inputs raise before anything is driven or queued.
        """
        if pads is not None:
            check_width(pads, self.width, "pads")
        check_width(clear_mask, self.width, "clear_mask")
        if data is not None:
            self._outputs.data_out.validate(data)
        if enable is not None:
            self._outputs.data_oe.validate(enable)

        if pads is not None:
            self.drive_pads(pads)
        if data is not None:
            self.write_data(data)
        if enable is not None:
            self.write_enable(enable)
        if clear_mask:
            self.clear_interrupts(clear_mask)
        self.tick()
        return self.outputs()

    # Reset -----------------------------------------------------------------

    def set_reset(self, asserted: bool) -> None:
        """Drive the asynchronous reset. Registers clear while asserted."""
        self._sync.set_reset(asserted)
        self._outputs.set_reset(asserted)
        self._interrupts.set_reset(asserted)

    def reset(self) -> None:
        logger.debug("Resetting %s", self.name)
        self._sync.reset()
        self._outputs.reset()
        self._interrupts.reset()
        self._cycle = 0

    def get_snapshot(self) -> GpioSnapshot:
        return GpioSnapshot(
            cycle=self._cycle,
            data_out=self.pad_output,
            data_oe=self.pad_enable,
            intr_state=self.intr_state,
            data_in=self.data_in,
            sync_stages=self._sync.stages,
        )
