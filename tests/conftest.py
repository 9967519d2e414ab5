"""
Pytest configuration and shared fixtures for the periphsim test suite.
"""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'periphsim' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from periphsim.utils.config_loader import clear_config_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    """Every test starts with an empty config cache."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


GPIO_INTERRUPTS = {
    "rising": 0x0000_0001,
    "falling": 0x0000_0002,
    "level_high": 0x0000_0004,
    "level_low": 0x0000_0008,
}

GPIO_OFFSETS = {
    "intr_state": 0x00,
    "intr_enable": 0x04,
    "data_in": 0x10,
    "direct_out": 0x14,
    "masked_out_lower": 0x18,
    "masked_out_upper": 0x1C,
    "direct_oe": 0x20,
    "masked_oe_lower": 0x24,
    "masked_oe_upper": 0x28,
    "intr_ctrl_en_rising": 0x2C,
    "intr_ctrl_en_falling": 0x30,
    "intr_ctrl_en_lvlhigh": 0x34,
    "intr_ctrl_en_lvllow": 0x38,
}

MEMORY_CFG = {
    "depth": 64,
    "word_width": 16,
    "latency": "HIGH_PERFORMANCE",
}


@pytest.fixture
def valid_simulator_config_dict():
    """
    Fixture providing a complete valid configuration dictionary.
    """
    return {
        "gpio": {
            "width": 32,
            "data_out_reset": 0x0000_00FF,
            "data_oe_reset": 0x0,
            "interrupts": dict(GPIO_INTERRUPTS),
            "offsets": dict(GPIO_OFFSETS),
        },
        "memory": dict(MEMORY_CFG),
    }


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_simulator_config_dict):
    """
    Fixture that creates a temporary YAML file with valid configuration.

    Yields:
        Path: Path to the temporary YAML file with valid configuration
    """
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_simulator_config_dict, f)

    yield temp_yaml_file


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
