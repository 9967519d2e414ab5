"""Helpers for loading and validating model configuration."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore[import-untyped]

from periphsim.core.exceptions import InvalidConfig
from periphsim.utils.consts import LATENCY_MODES, LOW_LATENCY, ConstUtils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterruptEnableConfig:
    """Per-line interrupt enables; fixed for the life of the model."""

    rising: int = 0
    falling: int = 0
    level_high: int = 0
    level_low: int = 0


@dataclass(frozen=True)
class GpioRegisterOffsets:
    """Bus offsets of the GPIO registers."""

    intr_state: int = 0x00
    intr_enable: int = 0x04
    data_in: int = 0x10
    direct_out: int = 0x14
    masked_out_lower: int = 0x18
    masked_out_upper: int = 0x1C
    direct_oe: int = 0x20
    masked_oe_lower: int = 0x24
    masked_oe_upper: int = 0x28
    intr_ctrl_en_rising: int = 0x2C
    intr_ctrl_en_falling: int = 0x30
    intr_ctrl_en_lvlhigh: int = 0x34
    intr_ctrl_en_lvllow: int = 0x38


@dataclass(frozen=True)
class GpioConfig:
    width: int = ConstUtils.GPIO_WIDTH
    data_out_reset: int = 0
    data_oe_reset: int = 0
    interrupts: InterruptEnableConfig = field(default_factory=InterruptEnableConfig)
    offsets: GpioRegisterOffsets = field(default_factory=GpioRegisterOffsets)


@dataclass(frozen=True)
class MemoryConfig:
    depth: int
    word_width: int = 32
    latency: str = LOW_LATENCY
    init_file: Optional[Path] = None


@dataclass(frozen=True)
class SimulatorConfig:
    gpio: Optional[GpioConfig] = None
    memory: Optional[MemoryConfig] = None


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, SimulatorConfig] = {}
_CACHE_LOCK = threading.RLock()


def _get_config_path(model_name: str, path: Optional[str] = None) -> str:
    if path is None:
        # Config files are in periphsim/{model_name}/config.yaml
        base = Path(__file__).parent.parent / model_name / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise InvalidConfig(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise InvalidConfig(f"Config root must be a mapping, got {type(raw).__name__}")
    return raw


def _as_int(section: str, key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfig(f"{section}.{key}", f"expected an integer, got {value!r}")
    return value


def _build_interrupt_cfg(raw: dict[str, Any]) -> InterruptEnableConfig:
    return InterruptEnableConfig(
        **{k: _as_int("gpio.interrupts", k, v) for k, v in raw.items()}
    )


def _build_gpio_offsets(raw: dict[str, Any]) -> GpioRegisterOffsets:
    return GpioRegisterOffsets(
        **{k: _as_int("gpio.offsets", k, v) for k, v in raw.items()}
    )


def _build_gpio_config(gpio_raw: dict[str, Any]) -> GpioConfig:
    cfg = GpioConfig(
        width=_as_int("gpio", "width", gpio_raw.get("width", ConstUtils.GPIO_WIDTH)),
        data_out_reset=_as_int("gpio", "data_out_reset", gpio_raw.get("data_out_reset", 0)),
        data_oe_reset=_as_int("gpio", "data_oe_reset", gpio_raw.get("data_oe_reset", 0)),
        interrupts=_build_interrupt_cfg(gpio_raw.get("interrupts") or {}),
        offsets=_build_gpio_offsets(gpio_raw.get("offsets") or {}),
    )
    _validate_gpio_config(cfg)
    return cfg


def _build_memory_config(mem_raw: dict[str, Any], base_dir: Optional[Path]) -> MemoryConfig:
    latency = str(mem_raw.get("latency", LOW_LATENCY)).upper()
    if latency not in LATENCY_MODES:
        raise InvalidConfig(
            "memory.latency", f"must be one of {', '.join(LATENCY_MODES)}, got {latency!r}"
        )

    init_file = mem_raw.get("init_file")
    init_path: Optional[Path] = None
    if init_file is not None:
        init_path = Path(init_file)
        if not init_path.is_absolute() and base_dir is not None:
            init_path = base_dir / init_path

    cfg = MemoryConfig(
        depth=_as_int("memory", "depth", mem_raw["depth"]),
        word_width=_as_int("memory", "word_width", mem_raw.get("word_width", 32)),
        latency=latency,
        init_file=init_path,
    )
    _validate_memory_config(cfg)
    return cfg


def _parse_simulator_cfg_from_dict(
    raw: dict[str, Any], base_dir: Optional[Path] = None
) -> SimulatorConfig:
    if "gpio" not in raw and "memory" not in raw:
        raise InvalidConfig("config must contain a 'gpio' or 'memory' section")

    try:
        gpio_raw = raw.get("gpio")
        mem_raw = raw.get("memory")
        cfg = SimulatorConfig(
            gpio=_build_gpio_config(gpio_raw) if gpio_raw is not None else None,
            memory=_build_memory_config(mem_raw, base_dir) if mem_raw is not None else None,
        )
    except KeyError as exc:
        raise InvalidConfig(f"Missing required config key: {exc}") from exc
    except (TypeError, AttributeError) as exc:
        raise InvalidConfig(f"Invalid config schema: {exc}") from exc

    return cfg


def validate_gpio_width(width: int) -> int:
    """Reject GPIO widths the masked-write halves and the register bus cannot carry.

    Raises:
        InvalidConfig: If width is not positive, odd or wider than the bus
    """
    if width <= 0 or width % 2:
        raise InvalidConfig("gpio.width", f"must be a positive even number of lines, got {width}")
    if width > ConstUtils.GPIO_MAX_WIDTH:
        raise InvalidConfig(
            "gpio.width", f"register bus carries at most {ConstUtils.GPIO_MAX_WIDTH} lines"
        )
    return width


def _validate_gpio_config(gpio: GpioConfig) -> None:
    """Basic sanity checks to fail fast on bad configs."""
    validate_gpio_width(gpio.width)

    limit = 1 << gpio.width
    for name in ("data_out_reset", "data_oe_reset"):
        if not 0 <= getattr(gpio, name) < limit:
            raise InvalidConfig(f"gpio.{name}", f"does not fit in {gpio.width} bits")
    for name in ("rising", "falling", "level_high", "level_low"):
        if not 0 <= getattr(gpio.interrupts, name) < limit:
            raise InvalidConfig(f"gpio.interrupts.{name}", f"does not fit in {gpio.width} bits")

    offsets = list(vars(gpio.offsets).values())
    if len(set(offsets)) != len(offsets):
        raise InvalidConfig("gpio.offsets", "register offsets must be unique")


def _validate_memory_config(mem: MemoryConfig) -> None:
    if mem.depth <= 0:
        raise InvalidConfig("memory.depth", "must be positive")
    if mem.word_width <= 0:
        raise InvalidConfig("memory.word_width", "must be positive")


def load_config(model_name: str, path: Optional[str] = None) -> SimulatorConfig:
    """Load and validate configuration from a YAML file.

    Args:
        model_name: Model identifier (e.g., 'gpio', 'memory') for config lookup.
        path: Optional path to YAML config. If None, load bundled
            periphsim/{model_name}/config.yaml.

    Returns:
        SimulatorConfig instance

    Raises:
        InvalidConfig: on parse or validation errors
    """

    p = Path(_get_config_path(model_name=model_name, path=path))
    raw = _load_yaml_file(p)
    logger.debug("Loaded %s config from %s", model_name, p)

    return _parse_simulator_cfg_from_dict(raw=raw, base_dir=p.parent)


def get_config(model_name: str) -> SimulatorConfig:
    """Return the loaded config for model_name, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe. Multiple threads can
    safely call this concurrently.
    """
    with _CACHE_LOCK:
        if model_name not in _LOADER_CACHE:
            _LOADER_CACHE[model_name] = load_config(model_name=model_name)
        return _LOADER_CACHE[model_name]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    All subsequent calls to get_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
