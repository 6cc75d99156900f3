"""Pin addressing for the 16 expander pins.

Pins 0-7 live on port A and pins 8-15 on port B. Each pin owns exactly one
bit (``bit_index``) of every register in its port's register pair.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from mcp23s17.core.exceptions import InvalidPinError
from mcp23s17.utils.consts import ConstUtils


class Port(Enum):
    """One of the two 8-bit pin groups."""

    A = "A"
    B = "B"

    @property
    def pins(self) -> tuple[Pin, ...]:
        """Pins of this port in ascending bit order."""
        return PORT_A_PINS if self is Port.A else PORT_B_PINS


class Pin(IntEnum):
    """Logical pin identifier; the value is the pin number 0-15."""

    # Port A
    PIN0 = 0
    PIN1 = 1
    PIN2 = 2
    PIN3 = 3
    PIN4 = 4
    PIN5 = 5
    PIN6 = 6
    PIN7 = 7
    # Port B
    PIN8 = 8
    PIN9 = 9
    PIN10 = 10
    PIN11 = 11
    PIN12 = 12
    PIN13 = 13
    PIN14 = 14
    PIN15 = 15

    @property
    def pin_number(self) -> int:
        return int(self)

    @property
    def port(self) -> Port:
        return Port.A if self < ConstUtils.PINS_PER_PORT else Port.B

    @property
    def bit_index(self) -> int:
        return int(self) % ConstUtils.PINS_PER_PORT

    @property
    def mask(self) -> int:
        return 1 << self.bit_index

    def is_port_a(self) -> bool:
        return self.port is Port.A

    def is_port_b(self) -> bool:
        return self.port is Port.B

    @classmethod
    def from_pin_number(cls, pin_number: int) -> Pin:
        """Return the pin for ``pin_number``.

        Raises:
            InvalidPinError: If pin_number is not an integer in 0-15.
        """
        if isinstance(pin_number, bool) or not isinstance(pin_number, int):
            raise InvalidPinError(pin_number)
        if not 0 <= pin_number < ConstUtils.NUM_PINS:
            raise InvalidPinError(pin_number)
        return cls(pin_number)


PORT_A_PINS: tuple[Pin, ...] = tuple(Pin(i) for i in range(0, 8))
PORT_B_PINS: tuple[Pin, ...] = tuple(Pin(i) for i in range(8, 16))


def resolve_byte(pin: Pin, byte_a: int, byte_b: int) -> int:
    """Pick the port-A or port-B half of a register pair for ``pin``."""
    return byte_a if pin.port is Port.A else byte_b


def get_bit(pin: Pin, byte: int) -> bool:
    """Extract ``pin``'s bit from a register byte."""
    return (byte & pin.mask) != 0


def set_bit(pin: Pin, byte: int, value: bool) -> int:
    """Return ``byte`` with ``pin``'s bit set to ``value``; other bits untouched."""
    if value:
        return (byte | pin.mask) & ConstUtils.MASK_8_BITS
    return (byte & ~pin.mask) & ConstUtils.MASK_8_BITS
