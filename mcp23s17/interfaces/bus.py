"""Collaborator protocols consumed by the driver.

The driver never talks to hardware directly. It needs three things from the
host platform, each described here as a structural protocol:

- SpiBus: a full-duplex byte transfer on an SPI device
- ChipSelect: the active-low chip-select output line
- InterruptLine: a digital input that can report falling edges

PROTOCOL CONTRACT:
- Transport failures are reported by raising OSError (or a subclass)
- transfer() returns exactly as many bytes as it was given
- Falling-edge callbacks may run on any thread the platform chooses
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, Sequence

if TYPE_CHECKING:
    from mcp23s17.core.pin import Pin


class SpiBus(Protocol):
    """Byte-oriented full-duplex SPI transport."""

    def transfer(self, data: Sequence[int]) -> Sequence[int]:
        """Clock ``data`` out and return the bytes clocked in.

        Raises:
            OSError: If the transaction fails.
        """
        ...


class ChipSelect(Protocol):
    """Active-low chip-select line."""

    def high(self) -> None:
        """Drive the line high (chip deselected)."""
        ...

    def low(self) -> None:
        """Drive the line low (chip selected)."""
        ...


class InterruptLine(Protocol):
    """Digital input the host watches for edges."""

    def add_falling_edge_callback(self, callback: Callable[[], None]) -> None:
        """Invoke ``callback`` on every high-to-low transition of the line."""
        ...


class InterruptListener(Protocol):
    """Receives interrupt events for a pin.

    Listeners run synchronously on the edge-detect thread and must not block.
    """

    def __call__(self, captured_value: bool, pin: Pin) -> None: ...
