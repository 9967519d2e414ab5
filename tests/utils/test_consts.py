from periphsim.memory import LatencyMode
from periphsim.utils.consts import LATENCY_MODES, PORT_NAMES, ConstUtils


def test_bus_fits_widest_gpio():
    assert ConstUtils.GPIO_MAX_WIDTH == 2 * ConstUtils.HALF_WORD_BITS
    assert ConstUtils.GPIO_WIDTH <= ConstUtils.GPIO_MAX_WIDTH


def test_latency_mode_names_match_enum():
    assert LATENCY_MODES == tuple(mode.value for mode in LatencyMode)


def test_port_names():
    assert PORT_NAMES == ("a", "b")
