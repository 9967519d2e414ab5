"""Core modules for periphsim.

Core infrastructure shared by every model:
- bitvec: fixed-width bit vector helpers
- register: clocked register primitive and bus register abstraction
- clock: two-phase clock driving evaluate/commit
- peripheral: base class for memory-mapped models
- registry: model registry and factory
- exceptions: contract-violation errors
"""

from periphsim.core.bitvec import check_width, masked_update, width_mask
from periphsim.core.clock import Clock
from periphsim.core.exceptions import (
    ConfigurationError,
    InvalidConfig,
    OutOfRange,
    SimulatorError,
    WidthMismatch,
)
from periphsim.core.peripheral import BasePeripheral
from periphsim.core.register import (
    ClockedRegister,
    Register,
    RegisterDescriptor,
    RegisterFile,
    ViewRegister,
)
from periphsim.core.registry import (
    ModelRegistry,
    create_model,
    list_available_models,
    register_model,
)
from periphsim.core.simulation_engine import SimulationEngine

__all__ = [
    # Bit vectors
    "check_width",
    "masked_update",
    "width_mask",
    # Registers
    "ClockedRegister",
    "Register",
    "ViewRegister",
    "RegisterFile",
    "RegisterDescriptor",
    # Clock / engine
    "Clock",
    "SimulationEngine",
    # Peripheral base
    "BasePeripheral",
    # Errors
    "SimulatorError",
    "ConfigurationError",
    "InvalidConfig",
    "OutOfRange",
    "WidthMismatch",
    # Model registry
    "ModelRegistry",
    "create_model",
    "list_available_models",
    "register_model",
]
