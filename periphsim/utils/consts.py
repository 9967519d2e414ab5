"""Constants and utility values for the models."""


class ConstUtils:
    """Bus layout and model constants."""

    HALF_WORD_BITS = 16
    """Width of a masked-write operand and of the mask field on the bus."""

    GPIO_WIDTH = 32
    """Default number of GPIO lines (one bit each)."""

    GPIO_MAX_WIDTH = 32
    """Widest GPIO the register bus layout can carry."""


# Output latency modes for the dual-port memory
LOW_LATENCY = "LOW_LATENCY"
HIGH_PERFORMANCE = "HIGH_PERFORMANCE"
LATENCY_MODES = (LOW_LATENCY, HIGH_PERFORMANCE)

# Dual-port memory port identifiers
PORT_A = "a"
PORT_B = "b"
PORT_NAMES = (PORT_A, PORT_B)
