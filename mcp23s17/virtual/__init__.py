"""Virtual MCP23S17 for running the driver without hardware."""

from mcp23s17.virtual.chip import (
    SpiTransaction,
    VirtualChipSelect,
    VirtualInterruptLine,
    VirtualMCP23S17,
)
from mcp23s17.virtual.registers import ReadOnlyRegister, Register, RegisterFile, SimpleRegister

__all__ = [
    "VirtualMCP23S17",
    "VirtualChipSelect",
    "VirtualInterruptLine",
    "SpiTransaction",
    "Register",
    "SimpleRegister",
    "ReadOnlyRegister",
    "RegisterFile",
]
