"""Cycle-stepped behavioral models of memory-mapped peripherals.

This package models two peripherals as deterministic state machines that
take one state update per clock edge:
- A GPIO controller with double-flop input synchronization, masked
  output writes and sticky edge/level interrupts
- A dual-port block RAM with read-first ports and selectable output latency

Every model splits a clock edge into evaluate() and commit(), so models
sharing a Clock all see the same pre-edge state.

Getting started:
    from periphsim import Clock, create_model

    gpio = create_model("gpio")
    clock = Clock()
    clock.subscribe(gpio)
    gpio.drive_pads(0x1)
    clock.tick(3)
"""

# Core abstractions
from periphsim.core.clock import Clock
from periphsim.core.exceptions import (
    ConfigurationError,
    InvalidConfig,
    OutOfRange,
    SimulatorError,
    WidthMismatch,
)
from periphsim.core.register import ClockedRegister
from periphsim.core.registry import create_model, list_available_models
from periphsim.core.simulation_engine import SimulationEngine

# Models (auto-register when imported)
from periphsim.gpio import GpioPeripheral
from periphsim.memory import DualPortRam, LatencyMode

__all__ = [
    # Core
    "Clock",
    "ClockedRegister",
    "SimulationEngine",
    # Errors
    "SimulatorError",
    "ConfigurationError",
    "InvalidConfig",
    "OutOfRange",
    "WidthMismatch",
    # Model creation
    "create_model",
    "list_available_models",
    # Concrete models
    "GpioPeripheral",
    "DualPortRam",
    "LatencyMode",
]
