"""Custom exceptions used throughout the mcp23s17 package."""

from typing import Any, Optional


class ExpanderError(Exception):
    """Base exception for all driver errors.

    All driver-specific exceptions inherit from this class.
    This allows catching all driver errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(ExpanderError):
    """Raised when there's an error in configuration.

    This includes:
    - Invalid configuration value
    - Missing required configuration
    - Unparseable configuration file
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


class InvalidPinError(ExpanderError, ValueError):
    """Raised when a pin identifier is outside 0-15."""

    def __init__(self, pin_number: Any, details: Optional[dict[str, Any]] = None):
        details = details or {}
        details["pin_number"] = pin_number
        super().__init__(message=f"Illegal pin number: {pin_number!r}", details=details)
        self.pin_number = pin_number


class InvalidArgumentError(ExpanderError, ValueError):
    """Raised for caller errors on listener registration and construction.

    Examples:
    - Adding or removing a None listener
    - Adding a listener that is already registered
    - Removing a listener that was never registered
    - Passing None for a required interrupt line
    """


class BusIOError(ExpanderError, OSError):
    """Raised when an SPI transaction or chip-select toggle fails.

    The chip-select line has already been released when this propagates.
    """

    def __init__(
        self,
        message: str,
        address: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if address is not None:
            details = details or {}
            details["address"] = f"0x{address:02X}"

        super().__init__(message=message, details=details)
        self.address = address


class InterruptDispatchError(ExpanderError, RuntimeError):
    """Raised from an interrupt callback when the flag/capture reads fail.

    Interrupt handling runs on the edge-detect collaborator's thread with no
    caller to return an error to, so the failure is escalated instead.
    """
