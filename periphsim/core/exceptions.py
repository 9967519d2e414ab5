"""Custom exceptions used throughout the periphsim package.

Only contract violations raise. Tie-break cases (direct + masked write in the
same tick, dual-port same-address collision) are resolved by the models and
never reported as errors.
"""

from typing import Any, Optional


class SimulatorError(Exception):
    """Base exception for all simulator errors.

    All periphsim-specific exceptions inherit from this class.
    This allows catching all simulator errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(SimulatorError):
    """Raised when there's an error in configuration.

    This includes:
    - Invalid configuration value
    - Missing required configuration
    - Configuration validation failures
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class InvalidConfig(ConfigurationError):
    """Raised for construction-time configuration the models cannot accept.

    Examples:
    - Unknown latency mode string
    - Non-positive memory depth or word width
    - Initializer with more values than the memory has cells
    """


class OutOfRange(SimulatorError):
    """Raised when an address falls outside [0, depth).

    Addresses are never wrapped or aliased.
    """

    def __init__(
        self,
        address: int,
        depth: int,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Address {address} out of range for depth {depth}"
        details = details or {}
        details["address"] = address
        details["depth"] = depth
        super().__init__(message=message, details=details)
        self.address = address
        self.depth = depth


class WidthMismatch(SimulatorError):
    """Raised when a supplied vector does not fit the configured width.

    Examples:
    - 0x1_0000 driven onto a 16-bit operand
    - A negative value for any bit vector
    """

    def __init__(
        self,
        value: int,
        width: int,
        name: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        label = name or "value"
        if value < 0:
            message = f"{label}={value} is negative; bit vectors are unsigned"
        else:
            message = f"{label}=0x{value:X} does not fit in {width} bits"
        details = details or {}
        details["width"] = width
        super().__init__(message=message, details=details)
        self.value = value
        self.width = width
