"""Interface abstractions for periphsim.

Defines behavioral contracts that all implementations must satisfy:
- ClockSubscriber / IClock: two-phase clock edge propagation
- Peripheral: Memory-mapped register bus protocol
- Snapshot types: frozen views of model state for debugging and traces
"""

from periphsim.interfaces.clock import ClockSubscriber, IClock
from periphsim.interfaces.peripheral import Peripheral
from periphsim.interfaces.snapshot import (
    GpioSnapshot,
    MemorySnapshot,
    PortSnapshot,
    RegisterValue,
)

__all__ = [
    "IClock",
    "ClockSubscriber",
    "Peripheral",
    "RegisterValue",
    "GpioSnapshot",
    "PortSnapshot",
    "MemorySnapshot",
]
