"""Interface abstractions for the driver's external collaborators.

Defines the structural contracts the host platform must satisfy:
- SpiBus: SPI transport
- ChipSelect: chip-select output line
- InterruptLine: falling-edge notifications from an interrupt input
- InterruptListener: callback shape for pin interrupt events
"""

from mcp23s17.interfaces.bus import ChipSelect, InterruptLine, InterruptListener, SpiBus

__all__ = [
    "SpiBus",
    "ChipSelect",
    "InterruptLine",
    "InterruptListener",
]
