"""Core modules for the driver.

- pin: pin numbering, port membership and bit helpers
- register: shadow registers and the register address map
- listeners: lock-guarded interrupt listener collections
- pin_view: per-pin configuration facade
- interrupt_router: INTF/INTCAP demultiplexing into listener calls
- device: the MCP23S17 controller and its bring-up variants
"""

from mcp23s17.core.device import MCP23S17
from mcp23s17.core.exceptions import (
    BusIOError,
    ConfigurationError,
    ExpanderError,
    InterruptDispatchError,
    InvalidArgumentError,
    InvalidPinError,
)
from mcp23s17.core.interrupt_router import InterruptRouter, find_flagged_pin
from mcp23s17.core.listeners import ListenerSet
from mcp23s17.core.pin import PORT_A_PINS, PORT_B_PINS, Pin, Port, get_bit, resolve_byte, set_bit
from mcp23s17.core.pin_view import PinView
from mcp23s17.core.register import (
    REGISTER_MAP,
    ConfigRegister,
    RegisterDescriptor,
    RegisterPair,
    ShadowRegisters,
)

__all__ = [
    # Device
    "MCP23S17",
    "PinView",
    "InterruptRouter",
    "ListenerSet",
    "find_flagged_pin",
    # Pin addressing
    "Pin",
    "Port",
    "PORT_A_PINS",
    "PORT_B_PINS",
    "get_bit",
    "set_bit",
    "resolve_byte",
    # Registers
    "ConfigRegister",
    "RegisterDescriptor",
    "RegisterPair",
    "ShadowRegisters",
    "REGISTER_MAP",
    # Errors
    "ExpanderError",
    "ConfigurationError",
    "InvalidPinError",
    "InvalidArgumentError",
    "BusIOError",
    "InterruptDispatchError",
]
