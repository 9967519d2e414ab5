"""GPIO controller model (auto-registers as "gpio")."""

from periphsim.core.registry import register_model
from periphsim.gpio.edge_detect import EdgeVectors, detect
from periphsim.gpio.interrupts import InterruptController, InterruptEnables
from periphsim.gpio.peripheral import GpioOutputs, GpioPeripheral
from periphsim.gpio.register_file import (
    NO_WRITE,
    DirectWrite,
    MaskedRegister,
    MaskedRegisterFile,
    MaskedWriteLower,
    MaskedWriteUpper,
    NoWrite,
    WriteRequest,
    compute_next,
)
from periphsim.gpio.synchronizer import InputSynchronizer

register_model("gpio", GpioPeripheral.from_config)

__all__ = [
    "GpioPeripheral",
    "GpioOutputs",
    "InputSynchronizer",
    "EdgeVectors",
    "detect",
    "InterruptController",
    "InterruptEnables",
    "MaskedRegister",
    "MaskedRegisterFile",
    "DirectWrite",
    "MaskedWriteUpper",
    "MaskedWriteLower",
    "NoWrite",
    "NO_WRITE",
    "WriteRequest",
    "compute_next",
]
