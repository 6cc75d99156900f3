"""In-process model of an MCP23S17 sitting on an SPI bus.

The virtual chip implements the driver's collaborator protocols, so an
MCP23S17 driver can be brought up against it with no hardware::

    chip = VirtualMCP23S17()
    expander = MCP23S17.new_with_interrupts(
        chip, chip.chip_select, chip.int_a, chip.int_b
    )
    chip.drive_input(Pin.PIN3, True)

Modelled behavior (IOCON.BANK = 0, byte-sequential mode):
- Frames are decoded only while chip-select is low
- GPIO reads return input levels (XOR IPOL) for input pins and OLAT for
  output pins; GPIO writes land in OLAT
- An enabled input pin that changes (INTCON = 0) or differs from DEFVAL
  (INTCON = 1) sets its INTF bit. The first such event on a port also
  latches INTCAP and asserts the port's INT line (both lines when
  IOCON.MIRROR is set)
- Reading INTCAP or GPIO of a port clears its INTF and releases the line

Not modelled: IOCON.BANK = 1, hardware addressing, open-drain/polarity of
the INT outputs, pull-ups affecting undriven pins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from mcp23s17.core.pin import Pin, Port, get_bit, set_bit
from mcp23s17.core.register import REGISTER_MAP
from mcp23s17.utils import consts
from mcp23s17.utils.consts import ConstUtils
from mcp23s17.virtual.registers import ReadOnlyRegister, Register, RegisterFile, SimpleRegister

logger = logging.getLogger(__name__)

_ADDRESS_SPACE = consts.ADDR_OLATB + 1
_OPCODE_MASK = 0xF0


@dataclass(frozen=True)
class SpiTransaction:
    """One chip-select framed exchange as seen by the chip."""

    frame: tuple[int, ...]
    response: tuple[int, ...]

    @property
    def is_read(self) -> bool:
        return bool(self.frame[0] & 0x01)

    @property
    def address(self) -> int:
        return self.frame[1]


class VirtualChipSelect:
    """Chip-select input of the virtual chip; records every level driven."""

    def __init__(self) -> None:
        self.levels: list[bool] = []

    @property
    def is_selected(self) -> bool:
        # Idle (never driven) counts as deselected
        return bool(self.levels) and not self.levels[-1]

    def high(self) -> None:
        self.levels.append(True)

    def low(self) -> None:
        self.levels.append(False)


class VirtualInterruptLine:
    """An INT output of the chip as seen by a host input with edge detection."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.level = True  # idle high, active low
        self._callbacks: list[Callable[[], None]] = []

    def add_falling_edge_callback(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def drive(self, level: bool) -> None:
        """Set the line level, firing callbacks on a high-to-low transition."""
        falling = self.level and not level
        self.level = level
        if falling:
            logger.debug(f"{self.name} falling edge")
            for callback in list(self._callbacks):
                callback()


class _PortRegister(Register):
    """GPIO register: computed on read, writes go to OLAT."""

    def __init__(
        self,
        address: int,
        on_read: Callable[[], int],
        on_write: Callable[[int], None],
    ):
        super().__init__(address)
        self._on_read = on_read
        self._on_write = on_write

    def read(self) -> int:
        return self._on_read()

    def write(self, val: int) -> None:
        self._on_write(val & ConstUtils.MASK_8_BITS)


class _CaptureRegister(ReadOnlyRegister):
    """INTCAP register: reading it clears the port's interrupt."""

    def __init__(self, address: int, on_read: Callable[[], None]):
        super().__init__(address)
        self._on_read = on_read

    def read(self) -> int:
        value = self.value
        self._on_read()
        return value


class VirtualMCP23S17:
    """Virtual MCP23S17 implementing the SpiBus protocol.

    Attributes:
        chip_select: The chip's CS input (ChipSelect protocol).
        int_a: INTA output (InterruptLine protocol).
        int_b: INTB output (InterruptLine protocol).
        transactions: Every decoded frame, oldest first.
    """

    def __init__(self) -> None:
        self.chip_select = VirtualChipSelect()
        self.int_a = VirtualInterruptLine("INTA")
        self.int_b = VirtualInterruptLine("INTB")
        self.transactions: list[SpiTransaction] = []
        self._inputs = {Port.A: 0x00, Port.B: 0x00}
        self._registers = RegisterFile()
        self._build_registers()

    def _build_registers(self) -> None:
        for name in ("IODIR", "IPOL", "GPINTEN", "DEFVAL", "INTCON", "GPPU", "OLAT"):
            descriptor = REGISTER_MAP[name]
            for port in Port:
                self._registers.add(
                    SimpleRegister(descriptor.address(port), descriptor.reset_value)
                )

        iocon = SimpleRegister(consts.ADDR_IOCON)
        self._registers.add(iocon)
        self._registers.alias(consts.ADDR_IOCON + 1, iocon)

        for port in Port:
            self._registers.add(ReadOnlyRegister(REGISTER_MAP["INTF"].address(port)))
            self._registers.add(
                _CaptureRegister(
                    REGISTER_MAP["INTCAP"].address(port),
                    on_read=lambda port=port: self._clear_interrupt(port),
                )
            )
            self._registers.add(
                _PortRegister(
                    REGISTER_MAP["GPIO"].address(port),
                    on_read=lambda port=port: self._read_gpio(port),
                    on_write=lambda val, port=port: self._write_olat(port, val),
                )
            )

    # ==========================================================
    # SpiBus protocol
    # ==========================================================

    def transfer(self, data: Sequence[int]) -> Sequence[int]:
        """Decode one frame: control byte, address, then data bytes."""
        frame = tuple(b & ConstUtils.MASK_8_BITS for b in data)
        response = [0x00] * len(frame)
        if not self.chip_select.is_selected or len(frame) < 2:
            return response
        if frame[0] & _OPCODE_MASK != ConstUtils.WRITE_OPCODE:
            return response

        is_read = bool(frame[0] & 0x01)
        address = frame[1]
        for i in range(2, len(frame)):
            if is_read:
                response[i] = self._registers.read(address)
            else:
                self._registers.write(address, frame[i])
            address = (address + 1) % _ADDRESS_SPACE

        self.transactions.append(SpiTransaction(frame=frame, response=tuple(response)))
        return response

    # ==========================================================
    # Test-side controls
    # ==========================================================

    def register_value(self, address: int) -> int:
        """Peek at a register without bus side effects."""
        reg = self._registers.get_register(address)
        if reg is None:
            raise KeyError(f"No register at 0x{address:02X}")
        if isinstance(reg, _PortRegister):
            return self._compute_gpio(Port.A if address == consts.ADDR_GPIOA else Port.B)
        return reg.value

    def drive_input(self, pin: Pin, level: bool) -> None:
        """Drive an external level onto ``pin`` and evaluate interrupts."""
        port = pin.port
        previous = get_bit(pin, self._inputs[port])
        self._inputs[port] = set_bit(pin, self._inputs[port], level)

        if not self._bit("IODIR", pin):
            return  # output pins ignore the external level
        if not self._bit("GPINTEN", pin):
            return

        if self._bit("INTCON", pin):
            triggered = level != self._bit("DEFVAL", pin)
        else:
            triggered = level != previous
        if triggered:
            self._raise_interrupt(pin)

    def reset(self) -> None:
        """Power-on reset of registers, inputs and INT lines."""
        self._registers.reset()
        self._inputs = {Port.A: 0x00, Port.B: 0x00}
        self._update_lines()

    # Private helpers -------------------------------------------------------

    def _reg(self, name: str, port: Port) -> Register:
        address = REGISTER_MAP[name].address(port)
        reg = self._registers.get_register(address)
        if reg is None:
            raise KeyError(f"No register {name} at 0x{address:02X}")
        return reg

    def _bit(self, name: str, pin: Pin) -> bool:
        return get_bit(pin, self._reg(name, pin.port).value)

    def _read_gpio(self, port: Port) -> int:
        value = self._compute_gpio(port)
        self._clear_interrupt(port)
        return value

    def _compute_gpio(self, port: Port) -> int:
        iodir = self._reg("IODIR", port).value
        ipol = self._reg("IPOL", port).value
        olat = self._reg("OLAT", port).value
        inputs = self._inputs[port] ^ ipol
        return ((inputs & iodir) | (olat & ~iodir)) & ConstUtils.MASK_8_BITS

    def _write_olat(self, port: Port, value: int) -> None:
        self._reg("OLAT", port).value = value

    def _raise_interrupt(self, pin: Pin) -> None:
        intf = self._reg("INTF", pin.port)
        if intf.value == 0:
            self._reg("INTCAP", pin.port).value = self._compute_gpio(pin.port)
        intf.value |= pin.mask
        logger.debug(f"Interrupt condition on {pin.name}: INTF=0x{intf.value:02X}")
        self._update_lines()

    def _clear_interrupt(self, port: Port) -> None:
        self._reg("INTF", port).value = 0
        self._update_lines()

    def _line_active(self, port: Port) -> bool:
        pending_a = self._reg("INTF", Port.A).value != 0
        pending_b = self._reg("INTF", Port.B).value != 0
        if self._registers.read(consts.ADDR_IOCON) & ConstUtils.IOCON_MIRROR:
            return pending_a or pending_b
        return pending_a if port is Port.A else pending_b

    def _update_lines(self) -> None:
        # A callback fired by INTA may already have cleared port B.
        self.int_a.drive(not self._line_active(Port.A))
        self.int_b.drive(not self._line_active(Port.B))
