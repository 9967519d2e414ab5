"""Dual-port block RAM model (auto-registers as "dual_port_ram")."""

from periphsim.core.registry import register_model
from periphsim.memory.dual_port import Collision, DualPortMemoryCore, PortInputs
from periphsim.memory.init_file import load_init_file
from periphsim.memory.latency import LatencyMode, OutputLatencyStage
from periphsim.memory.ram import DualPortRam

register_model("dual_port_ram", DualPortRam.from_config)

__all__ = [
    "DualPortRam",
    "DualPortMemoryCore",
    "PortInputs",
    "Collision",
    "LatencyMode",
    "OutputLatencyStage",
    "load_init_file",
]
