"""Register storage for the virtual MCP23S17.

Registers are the fundamental unit of chip behavior. Every register on the
MCP23S17 is 8 bits wide and addressed by a single byte; the chip model
adds side effects (interrupt clearing, latch mirroring) on top.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from mcp23s17.utils.consts import ConstUtils


class Register(ABC):
    """Base class for any register with custom read/write behavior.

    For simple registers (just storage), use SimpleRegister.
    For registers the bus may not write, use ReadOnlyRegister.
    """

    def __init__(self, address: int, reset_value: int = 0):
        """Initialize a register.

        Args:
            address: Register address (IOCON.BANK = 0 layout)
            reset_value: Value to return to on reset()
        """
        self.address = address
        self.reset_value = reset_value & ConstUtils.MASK_8_BITS
        self.value = self.reset_value

    @abstractmethod
    def read(self) -> int:
        """Read this register over the bus."""
        ...

    @abstractmethod
    def write(self, val: int) -> None:
        """Update register value from a bus write."""
        ...

    def reset(self) -> None:
        """Reset to power-on state."""
        self.value = self.reset_value


class SimpleRegister(Register):
    """A register that is just storage (no side effects)."""

    def read(self) -> int:
        return self.value

    def write(self, val: int) -> None:
        self.value = val & ConstUtils.MASK_8_BITS


class ReadOnlyRegister(SimpleRegister):
    """A register the bus can only read. Bus writes are silently ignored.

    The chip model updates ``value`` directly.
    """

    def write(self, val: int) -> None:
        pass  # Ignore writes


class RegisterFile:
    """Storage and dispatch for a set of registers, keyed by address."""

    def __init__(self):
        self._registers: dict[int, Register] = {}

    def add(self, reg: Register) -> None:
        """Add a register to this file.

        Raises:
            ValueError: If a register already exists at this address
        """
        if reg.address in self._registers:
            raise ValueError(f"Register at address 0x{reg.address:02X} already exists")
        self._registers[reg.address] = reg

    def alias(self, address: int, reg: Register) -> None:
        """Expose an existing register at a second address."""
        if address in self._registers:
            raise ValueError(f"Register at address 0x{address:02X} already exists")
        self._registers[address] = reg

    def read(self, address: int) -> int:
        """Read from address. Unimplemented addresses read as 0."""
        reg = self._registers.get(address)
        return reg.read() if reg is not None else 0

    def write(self, address: int, val: int) -> None:
        """Write to address. Writes to unimplemented addresses are ignored."""
        reg = self._registers.get(address)
        if reg is not None:
            reg.write(val)

    def reset(self) -> None:
        """Reset all registers."""
        for reg in self._registers.values():
            reg.reset()

    def get_register(self, address: int) -> Optional[Register]:
        """Return the register at address, or None."""
        return self._registers.get(address)
