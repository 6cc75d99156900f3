"""MCP23S17 16-bit SPI GPIO expander driver.

This package provides per-pin access to an MCP23S17: direction, polarity,
pull-ups, interrupt configuration and values, with interrupt edges turned
into per-pin listener callbacks.

Design:
- Pin setters only touch shadow registers; commits are explicit
- Flag, capture and GPIO registers are always read live
- Host hardware is reached through small protocols (SpiBus, ChipSelect,
  InterruptLine) so any platform library can be plugged in

Getting started:
    from mcp23s17 import MCP23S17, Pin

    expander = MCP23S17.new_without_interrupts(spi, chip_select)
    pin = expander.get_pin_view(Pin.PIN0)
    pin.set_as_output()
    expander.write_iodir_a()
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
from mcp23s17.core.pin import Pin, Port
from mcp23s17.core.pin_view import PinView
from mcp23s17.core.register import ConfigRegister
from mcp23s17.interfaces.bus import ChipSelect, InterruptLine, InterruptListener, SpiBus
from mcp23s17.utils.config_loader import ExpanderConfig, SpiConfig, get_config, load_config

__all__ = [
    # Driver
    "MCP23S17",
    "PinView",
    "Pin",
    "Port",
    "ConfigRegister",
    # Collaborator protocols
    "SpiBus",
    "ChipSelect",
    "InterruptLine",
    "InterruptListener",
    # Configuration
    "ExpanderConfig",
    "SpiConfig",
    "load_config",
    "get_config",
    # Errors
    "ExpanderError",
    "ConfigurationError",
    "InvalidPinError",
    "InvalidArgumentError",
    "BusIOError",
    "InterruptDispatchError",
]
