"""Per-pin facade over the device's shadow registers.

Every setter on a PinView only updates the in-memory shadow register. Nothing
reaches the chip until the matching write-commit is issued on the device,
once per register half rather than once per pin::

    for pin in (Pin.PIN0, Pin.PIN1, Pin.PIN2):
        expander.get_pin_view(pin).set_as_output()
    expander.write_iodir_a()

The only getter that talks to the bus is get() on an input pin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

from mcp23s17.core.listeners import ListenerSet
from mcp23s17.core.pin import Pin, get_bit
from mcp23s17.core.register import REGISTER_MAP, ShadowRegisters

if TYPE_CHECKING:
    from mcp23s17.interfaces.bus import InterruptListener


class PinView:
    """Configuration and state of a single expander pin.

    Instances are created by MCP23S17.get_pin_view(); there is exactly one
    per pin per device.

    Attributes:
        _pin: The pin this view addresses.
        _registers: The owning device's shadow registers.
        _read_register: Device primitive for a live single-register read.
        _listeners: Listeners for interrupts on this pin.
    """

    def __init__(
        self,
        pin: Pin,
        registers: ShadowRegisters,
        read_register: Callable[[int], int],
    ) -> None:
        self._pin = pin
        self._registers = registers
        self._read_register = read_register
        self._listeners = ListenerSet()

    @property
    def pin(self) -> Pin:
        return self._pin

    def __repr__(self) -> str:
        direction = "input" if self.is_input() else "output"
        return f"PinView({self._pin.name}, port={self._pin.port.name}, {direction})"

    # ==========================================================
    # Value (OLAT shadow / live GPIO)
    # ==========================================================

    def get(self) -> bool:
        """Return the logical value of the pin.

        For an output pin this is the last commanded value from the OLAT
        shadow and no bus traffic occurs. For an input pin the port's GPIO
        register is read from the chip.

        Raises:
            BusIOError: If the live GPIO read fails.
        """
        if self.is_output():
            return self._registers.olat.get(self._pin)
        address = REGISTER_MAP["GPIO"].address(self._pin.port)
        return get_bit(self._pin, self._read_register(address))

    def set(self, value: bool = True) -> None:
        """Set the commanded output value (OLAT shadow)."""
        self._registers.olat.set(self._pin, value)

    def clear(self) -> None:
        self.set(False)

    # ==========================================================
    # Direction (IODIR, 1 = input)
    # ==========================================================

    def is_input(self) -> bool:
        return self._registers.iodir.get(self._pin)

    def is_output(self) -> bool:
        return not self.is_input()

    def set_direction(self, input_: bool) -> None:
        self._registers.iodir.set(self._pin, input_)

    def set_as_input(self) -> None:
        self.set_direction(True)

    def set_as_output(self) -> None:
        self.set_direction(False)

    # ==========================================================
    # Input polarity (IPOL)
    # ==========================================================

    def is_input_inverted(self) -> bool:
        return self._registers.ipol.get(self._pin)

    def set_input_inverted(self, inverted: bool) -> None:
        self._registers.ipol.set(self._pin, inverted)

    def invert_input(self) -> None:
        self.set_input_inverted(True)

    def uninvert_input(self) -> None:
        self.set_input_inverted(False)

    # ==========================================================
    # Interrupt enable (GPINTEN)
    # ==========================================================

    def is_interrupt_enabled(self) -> bool:
        return self._registers.gpinten.get(self._pin)

    def set_interrupt_enabled(self, enabled: bool) -> None:
        self._registers.gpinten.set(self._pin, enabled)

    def enable_interrupt(self) -> None:
        self.set_interrupt_enabled(True)

    def disable_interrupt(self) -> None:
        self.set_interrupt_enabled(False)

    # ==========================================================
    # Default comparison value (DEFVAL)
    # ==========================================================

    def get_default_comparison_value(self) -> bool:
        return self._registers.defval.get(self._pin)

    def set_default_comparison_value(self, value: bool) -> None:
        """Value the pin is compared against in comparison interrupt mode."""
        self._registers.defval.set(self._pin, value)

    # ==========================================================
    # Interrupt mode (INTCON, 1 = compare against DEFVAL)
    # ==========================================================

    def is_interrupt_comparison_mode(self) -> bool:
        return self._registers.intcon.get(self._pin)

    def is_interrupt_change_mode(self) -> bool:
        return not self.is_interrupt_comparison_mode()

    def set_interrupt_mode(self, comparison: bool) -> None:
        self._registers.intcon.set(self._pin, comparison)

    def to_interrupt_comparison_mode(self) -> None:
        self.set_interrupt_mode(True)

    def to_interrupt_change_mode(self) -> None:
        self.set_interrupt_mode(False)

    # ==========================================================
    # Pull-up (GPPU)
    # ==========================================================

    def is_pulled_up(self) -> bool:
        return self._registers.gppu.get(self._pin)

    def set_pulled_up(self, pulled_up: bool) -> None:
        self._registers.gppu.set(self._pin, pulled_up)

    def enable_pull_up(self) -> None:
        self.set_pulled_up(True)

    def disable_pull_up(self) -> None:
        self.set_pulled_up(False)

    # ==========================================================
    # Interrupt listeners
    # ==========================================================

    def add_listener(self, listener: Optional[InterruptListener]) -> None:
        """Register a listener for interrupts on this pin.

        Whether the pin's interrupt is actually enabled is not checked.

        Raises:
            InvalidArgumentError: If listener is None or already registered.
        """
        self._listeners.add(listener)

    def remove_listener(self, listener: Optional[InterruptListener]) -> None:
        """Unregister a listener.

        Raises:
            InvalidArgumentError: If listener is None or not registered.
        """
        self._listeners.remove(listener)

    def relay_interrupt(self, captured_value: bool) -> None:
        """Deliver a captured interrupt value to this pin's listeners."""
        self._listeners.notify(captured_value, self._pin)
