"""Interrupt demultiplexing: one INT edge -> zero or one pin event per port.

On a falling edge of a port's interrupt line the router reads that port's
INTF (which pin fired) and INTCAP (pin levels at the moment it fired), finds
the first flagged pin in ascending bit order and hands the captured value to
the global listeners, then to the listeners of that pin's view.

Only the first flagged pin of a port is dispatched per edge; simultaneous
flags on higher bits of the same port are not reported.

THREAD SAFETY: dispatch runs on whatever thread the interrupt line
collaborator calls back on. Listeners must return quickly and must not
block. The router does no queuing or debouncing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from mcp23s17.core.exceptions import BusIOError, InterruptDispatchError
from mcp23s17.core.pin import Pin, Port, get_bit
from mcp23s17.core.register import REGISTER_MAP

if TYPE_CHECKING:
    from mcp23s17.core.listeners import ListenerSet
    from mcp23s17.core.pin_view import PinView

logger = logging.getLogger(__name__)


def find_flagged_pin(intf: int, pins: tuple[Pin, ...]) -> Optional[Pin]:
    """Return the first pin of ``pins`` whose bit is set in ``intf``."""
    for pin in pins:
        if get_bit(pin, intf):
            return pin
    return None


class InterruptRouter:
    """Turns interrupt edges into listener calls for one device.

    Args:
        read_register: Device primitive for a live single-register read.
        global_listeners: Listeners notified for every pin, before pin listeners.
        pin_view_for: Returns the (memoized) view of a pin.
    """

    def __init__(
        self,
        read_register: Callable[[int], int],
        global_listeners: ListenerSet,
        pin_view_for: Callable[[Pin], PinView],
    ) -> None:
        self._read_register = read_register
        self._global_listeners = global_listeners
        self._pin_view_for = pin_view_for

    def dispatch(self, intf: int, intcap: int, port: Port) -> Optional[Pin]:
        """Deliver the first flagged pin of ``port`` to listeners.

        Returns:
            The pin that was dispatched, or None if no flag was set.
        """
        pin = find_flagged_pin(intf, port.pins)
        if pin is None:
            logger.debug(f"Spurious interrupt on port {port.name}: INTF=0x{intf:02X}")
            return None

        captured_value = get_bit(pin, intcap)
        logger.debug(f"Interrupt on {pin.name}: captured={captured_value}")
        self._global_listeners.notify(captured_value, pin)
        # May create the view here if the chip was configured before the
        # caller ever touched this pin.
        self._pin_view_for(pin).relay_interrupt(captured_value)
        return pin

    def handle_port(self, port: Port) -> Optional[Pin]:
        """Read INTF/INTCAP for ``port`` and dispatch.

        Raises:
            InterruptDispatchError: If either register read fails.
        """
        try:
            intf = self._read_register(REGISTER_MAP["INTF"].address(port))
            intcap = self._read_register(REGISTER_MAP["INTCAP"].address(port))
        except BusIOError as exc:
            logger.critical(f"Interrupt handling for port {port.name} failed: {exc}")
            raise InterruptDispatchError(
                f"Failed to read interrupt registers for port {port.name}",
                details={"port": port.name, **exc.details},
            ) from exc
        return self.dispatch(intf, intcap, port)

    def handle_port_a(self) -> None:
        self.handle_port(Port.A)

    def handle_port_b(self) -> None:
        self.handle_port(Port.B)

    def handle_tied(self) -> None:
        """Shared INT line: process port A completely, then port B."""
        self.handle_port(Port.A)
        self.handle_port(Port.B)
