"""MCP23S17 device controller.

Owns the SPI transport, the chip-select line, the shadow registers, the pin
views and the global interrupt listeners, and wires 0, 1 or 2 interrupt
lines to the interrupt router.

Getting started::

    expander = MCP23S17.new_with_tied_interrupts(spi, chip_select, int_line)
    led = expander.get_pin_view(Pin.PIN8)
    led.set_as_output()
    expander.write_iodir_b()
    led.set()
    expander.write_olat_b()

THREAD SAFETY: pin view creation and listener registration are thread-safe.
Bus transactions are not serialized; callers that commit from several
threads (or alongside interrupt dispatch) must hold their own lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional, Sequence, Union

from mcp23s17.core.exceptions import BusIOError, InvalidArgumentError
from mcp23s17.core.interrupt_router import InterruptRouter
from mcp23s17.core.listeners import ListenerSet
from mcp23s17.core.pin import Pin, Port
from mcp23s17.core.pin_view import PinView
from mcp23s17.core.register import ConfigRegister, ShadowRegisters
from mcp23s17.interfaces.bus import ChipSelect, InterruptLine, InterruptListener, SpiBus
from mcp23s17.utils import consts
from mcp23s17.utils.consts import ConstUtils, register_name

logger = logging.getLogger(__name__)


class MCP23S17:
    """Driver for one MCP23S17 on an SPI bus.

    Construct through one of the ``new_*`` classmethods, which differ only in
    how the chip's interrupt outputs are wired to the host.

    Attributes:
        _spi: SPI transport.
        _chip_select: Active-low chip-select line.
        _registers: Shadow copies of the configuration registers.
        _pin_views: One slot per pin number, filled on first use.
        _global_listeners: Listeners notified for interrupts on any pin.
        _router: Demultiplexes interrupt edges into listener calls.
    """

    def __init__(
        self,
        spi: SpiBus,
        chip_select: ChipSelect,
        port_a_interrupt: Optional[InterruptLine] = None,
        port_b_interrupt: Optional[InterruptLine] = None,
    ) -> None:
        """Take ownership of the bus and bring chip-select to its idle level.

        Prefer the ``new_*`` classmethods; this does not attach any
        interrupt callbacks.

        Raises:
            InvalidArgumentError: If spi or chip_select is None.
            BusIOError: If chip-select cannot be driven high.
        """
        if spi is None:
            raise InvalidArgumentError("spi must be non-null")
        if chip_select is None:
            raise InvalidArgumentError("chip_select must be non-null")

        self._spi = spi
        self._chip_select = chip_select
        # Held so the bindings stay alive with the device
        self._port_a_interrupt = port_a_interrupt
        self._port_b_interrupt = port_b_interrupt

        self._registers = ShadowRegisters()
        self._pin_views: list[Optional[PinView]] = [None] * ConstUtils.NUM_PINS
        self._pin_views_lock = threading.RLock()
        self._global_listeners = ListenerSet()
        self._router = InterruptRouter(
            read_register=self.read_register,
            global_listeners=self._global_listeners,
            pin_view_for=self.get_pin_view,
        )

        # CS is active low; make sure the chip starts deselected.
        try:
            chip_select.high()
        except OSError as exc:
            logger.error(f"Chip-select bring-up failed: {exc}")
            raise BusIOError("Failed to drive chip-select high during bring-up") from exc

    # ==========================================================
    # Construction variants
    # ==========================================================

    @classmethod
    def new_without_interrupts(cls, spi: SpiBus, chip_select: ChipSelect) -> MCP23S17:
        """Expander whose INTA/INTB outputs are not connected."""
        logger.debug("Bringing up MCP23S17 without interrupts")
        return cls(spi, chip_select)

    @classmethod
    def new_with_tied_interrupts(
        cls, spi: SpiBus, chip_select: ChipSelect, interrupt: InterruptLine
    ) -> MCP23S17:
        """Expander with INTA and INTB mirrored onto one host input.

        Sets IOCON.MIRROR so either port raises the shared line. Each falling
        edge services port A, then port B.
        """
        _require(interrupt, "interrupt")
        logger.debug("Bringing up MCP23S17 with tied interrupts")
        expander = cls(spi, chip_select, interrupt, interrupt)
        expander._write(consts.ADDR_IOCON, ConstUtils.IOCON_MIRROR)
        interrupt.add_falling_edge_callback(expander._router.handle_tied)
        return expander

    @classmethod
    def new_with_interrupts(
        cls,
        spi: SpiBus,
        chip_select: ChipSelect,
        port_a_interrupt: InterruptLine,
        port_b_interrupt: InterruptLine,
    ) -> MCP23S17:
        """Expander with INTA and INTB on separate host inputs."""
        _require(port_a_interrupt, "port_a_interrupt")
        _require(port_b_interrupt, "port_b_interrupt")
        logger.debug("Bringing up MCP23S17 with independent interrupts")
        expander = cls(spi, chip_select, port_a_interrupt, port_b_interrupt)
        port_a_interrupt.add_falling_edge_callback(expander._router.handle_port_a)
        port_b_interrupt.add_falling_edge_callback(expander._router.handle_port_b)
        return expander

    @classmethod
    def new_with_port_a_interrupts(
        cls, spi: SpiBus, chip_select: ChipSelect, port_a_interrupt: InterruptLine
    ) -> MCP23S17:
        """Expander with only INTA connected."""
        _require(port_a_interrupt, "port_a_interrupt")
        logger.debug("Bringing up MCP23S17 with port A interrupts")
        expander = cls(spi, chip_select, port_a_interrupt, None)
        port_a_interrupt.add_falling_edge_callback(expander._router.handle_port_a)
        return expander

    @classmethod
    def new_with_port_b_interrupts(
        cls, spi: SpiBus, chip_select: ChipSelect, port_b_interrupt: InterruptLine
    ) -> MCP23S17:
        """Expander with only INTB connected."""
        _require(port_b_interrupt, "port_b_interrupt")
        logger.debug("Bringing up MCP23S17 with port B interrupts")
        expander = cls(spi, chip_select, None, port_b_interrupt)
        port_b_interrupt.add_falling_edge_callback(expander._router.handle_port_b)
        return expander

    # ==========================================================
    # Pin views
    # ==========================================================

    def get_pin_view(self, pin: Union[Pin, int]) -> PinView:
        """Return the view for ``pin``, creating it on first use.

        The same pin always yields the same PinView instance.

        Raises:
            InvalidPinError: If pin is not a pin number in 0-15.
        """
        pin = Pin.from_pin_number(pin)
        # Also reached from interrupt dispatch, hence the lock.
        with self._pin_views_lock:
            view = self._pin_views[pin]
            if view is None:
                view = PinView(pin, self._registers, self.read_register)
                self._pin_views[pin] = view
        return view

    def pin_views(self) -> Iterator[PinView]:
        """Iterate the views of all 16 pins in pin order."""
        for pin in Pin:
            yield self.get_pin_view(pin)

    def __iter__(self) -> Iterator[PinView]:
        return self.pin_views()

    # ==========================================================
    # Global listeners
    # ==========================================================

    def add_global_listener(self, listener: Optional[InterruptListener]) -> None:
        """Register a listener notified for interrupts on every pin.

        No check is made that any pin has its interrupt enabled.

        Raises:
            InvalidArgumentError: If listener is None or already registered.
        """
        self._global_listeners.add(listener)

    def remove_global_listener(self, listener: Optional[InterruptListener]) -> None:
        """Raises InvalidArgumentError if listener is None or not registered."""
        self._global_listeners.remove(listener)

    # ==========================================================
    # Write-commit operations
    # ==========================================================

    def commit(self, register: ConfigRegister, port: Port) -> None:
        """Push one half of a shadow register pair to the chip.

        Raises:
            BusIOError: If the SPI write fails.
        """
        value = self._registers.pair(register).value(port)
        self._write(register.descriptor.address(port), value)

    def commit_pin(self, register: ConfigRegister, pin: Union[Pin, int]) -> None:
        """Commit the half of ``register`` that ``pin`` lives on."""
        self.commit(register, Pin.from_pin_number(pin).port)

    def write_iodir_a(self) -> None:
        self.commit(ConfigRegister.IODIR, Port.A)

    def write_iodir_b(self) -> None:
        self.commit(ConfigRegister.IODIR, Port.B)

    def write_ipol_a(self) -> None:
        self.commit(ConfigRegister.IPOL, Port.A)

    def write_ipol_b(self) -> None:
        self.commit(ConfigRegister.IPOL, Port.B)

    def write_gpinten_a(self) -> None:
        self.commit(ConfigRegister.GPINTEN, Port.A)

    def write_gpinten_b(self) -> None:
        self.commit(ConfigRegister.GPINTEN, Port.B)

    def write_defval_a(self) -> None:
        self.commit(ConfigRegister.DEFVAL, Port.A)

    def write_defval_b(self) -> None:
        self.commit(ConfigRegister.DEFVAL, Port.B)

    def write_intcon_a(self) -> None:
        self.commit(ConfigRegister.INTCON, Port.A)

    def write_intcon_b(self) -> None:
        self.commit(ConfigRegister.INTCON, Port.B)

    def write_gppu_a(self) -> None:
        self.commit(ConfigRegister.GPPU, Port.A)

    def write_gppu_b(self) -> None:
        self.commit(ConfigRegister.GPPU, Port.B)

    def write_olat_a(self) -> None:
        self.commit(ConfigRegister.OLAT, Port.A)

    def write_olat_b(self) -> None:
        self.commit(ConfigRegister.OLAT, Port.B)

    # ==========================================================
    # Bus primitives
    # ==========================================================

    def read_register(self, address: int) -> int:
        """Read one register from the chip.

        Raises:
            BusIOError: If the SPI transaction fails or returns a short frame.
        """
        frame = (ConstUtils.READ_OPCODE, address, ConstUtils.READ_FILLER)
        response = self._transfer(frame, address)
        if len(response) <= ConstUtils.READ_RESPONSE_INDEX:
            raise BusIOError(
                f"Short SPI response reading {register_name(address)}: {list(response)}",
                address=address,
            )
        value = response[ConstUtils.READ_RESPONSE_INDEX] & ConstUtils.MASK_8_BITS
        logger.debug(f"Read {register_name(address)} -> 0x{value:02X}")
        return value

    def _write(self, address: int, value: int) -> None:
        frame = (ConstUtils.WRITE_OPCODE, address, value & ConstUtils.MASK_8_BITS)
        self._transfer(frame, address)
        logger.debug(f"Wrote {register_name(address)} <- 0x{value:02X}")

    def _transfer(self, frame: Sequence[int], address: int) -> Sequence[int]:
        """One chip-select framed transaction; CS is released on every path."""
        try:
            try:
                self._chip_select.low()
                return self._spi.transfer(list(frame))
            finally:
                self._chip_select.high()
        except OSError as exc:
            logger.error(f"SPI transaction on {register_name(address)} failed: {exc}")
            raise BusIOError(
                f"SPI transaction on {register_name(address)} failed: {exc}",
                address=address,
            ) from exc


def _require(line: Optional[InterruptLine], name: str) -> None:
    if line is None:
        raise InvalidArgumentError(f"{name} must be non-null")

