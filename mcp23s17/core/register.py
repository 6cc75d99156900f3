"""Shadow register file for the expander's configuration registers.

The driver keeps an in-memory copy ("shadow") of each writable configuration
register. Pin views mutate the shadows; the device pushes a shadow byte to
the chip only when explicitly asked to commit it. Nothing in this module
performs I/O.

The flag, capture and GPIO registers are never shadowed; they are read from
the bus every time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from mcp23s17.core.pin import Pin, Port, get_bit, resolve_byte, set_bit
from mcp23s17.utils import consts
from mcp23s17.utils.consts import ConstUtils


@dataclass(frozen=True)
class RegisterDescriptor:
    """Metadata about a register pair (or the single IOCON byte).

    This is documentation and lookup data, not enforcement.
    """

    name: str
    address_a: int
    address_b: Optional[int]  # None for single-byte registers
    reset_value: int = 0x00
    read_only: bool = False

    def address(self, port: Port) -> int:
        """Address of the half of this register serving ``port``."""
        if port is Port.B:
            if self.address_b is None:
                raise ValueError(f"{self.name} is a single-byte register")
            return self.address_b
        return self.address_a


class ConfigRegister(Enum):
    """The seven shadowed configuration register pairs."""

    IODIR = "IODIR"
    IPOL = "IPOL"
    GPINTEN = "GPINTEN"
    DEFVAL = "DEFVAL"
    INTCON = "INTCON"
    GPPU = "GPPU"
    OLAT = "OLAT"

    @property
    def descriptor(self) -> RegisterDescriptor:
        return REGISTER_MAP[self.value]


REGISTER_MAP: dict[str, RegisterDescriptor] = {
    "IODIR": RegisterDescriptor("IODIR", consts.ADDR_IODIRA, consts.ADDR_IODIRB, reset_value=0xFF),
    "IPOL": RegisterDescriptor("IPOL", consts.ADDR_IPOLA, consts.ADDR_IPOLB),
    "GPINTEN": RegisterDescriptor("GPINTEN", consts.ADDR_GPINTENA, consts.ADDR_GPINTENB),
    "DEFVAL": RegisterDescriptor("DEFVAL", consts.ADDR_DEFVALA, consts.ADDR_DEFVALB),
    "INTCON": RegisterDescriptor("INTCON", consts.ADDR_INTCONA, consts.ADDR_INTCONB),
    "IOCON": RegisterDescriptor("IOCON", consts.ADDR_IOCON, None),
    "GPPU": RegisterDescriptor("GPPU", consts.ADDR_GPPUA, consts.ADDR_GPPUB),
    "INTF": RegisterDescriptor("INTF", consts.ADDR_INTFA, consts.ADDR_INTFB, read_only=True),
    "INTCAP": RegisterDescriptor(
        "INTCAP", consts.ADDR_INTCAPA, consts.ADDR_INTCAPB, read_only=True
    ),
    "GPIO": RegisterDescriptor("GPIO", consts.ADDR_GPIOA, consts.ADDR_GPIOB),
    "OLAT": RegisterDescriptor("OLAT", consts.ADDR_OLATA, consts.ADDR_OLATB),
}


@dataclass
class RegisterPair:
    """Port-A and port-B shadow bytes of one configuration register."""

    a: int = 0x00
    b: int = 0x00

    def value(self, port: Port) -> int:
        return self.a if port is Port.A else self.b

    def get(self, pin: Pin) -> bool:
        return get_bit(pin, resolve_byte(pin, self.a, self.b))

    def set(self, pin: Pin, value: bool) -> None:
        if pin.is_port_a():
            self.a = set_bit(pin, self.a, value)
        else:
            self.b = set_bit(pin, self.b, value)


def _reset_pair(register: ConfigRegister) -> RegisterPair:
    reset = register.descriptor.reset_value & ConstUtils.MASK_8_BITS
    return RegisterPair(a=reset, b=reset)


@dataclass
class ShadowRegisters:
    """All fourteen configuration shadow bytes of one device.

    THREAD SAFETY: Not thread-safe. Callers serialize mutations of a pair
    against each other and against a commit of the same pair.
    """

    iodir: RegisterPair = field(default_factory=lambda: _reset_pair(ConfigRegister.IODIR))
    ipol: RegisterPair = field(default_factory=lambda: _reset_pair(ConfigRegister.IPOL))
    gpinten: RegisterPair = field(default_factory=lambda: _reset_pair(ConfigRegister.GPINTEN))
    defval: RegisterPair = field(default_factory=lambda: _reset_pair(ConfigRegister.DEFVAL))
    intcon: RegisterPair = field(default_factory=lambda: _reset_pair(ConfigRegister.INTCON))
    gppu: RegisterPair = field(default_factory=lambda: _reset_pair(ConfigRegister.GPPU))
    olat: RegisterPair = field(default_factory=lambda: _reset_pair(ConfigRegister.OLAT))

    def pair(self, register: ConfigRegister) -> RegisterPair:
        """Return the shadow pair for ``register``."""
        return getattr(self, register.value.lower())
