"""SpiBus adapter over the Linux spidev userspace driver."""

from __future__ import annotations

import logging
from typing import Sequence

import spidev  # type: ignore[import-not-found]

from mcp23s17.utils.config_loader import SpiConfig

logger = logging.getLogger(__name__)


class SpidevBus:
    """Full-duplex transfers on /dev/spidev<bus>.<device>.

    The chip-select is driven separately by the driver, so the kernel's own
    CE handling should be wired to an unused line or left unconnected.
    """

    def __init__(self, bus: int, device: int, max_speed_hz: int = 1_000_000, mode: int = 0):
        self._spi = spidev.SpiDev()
        self._spi.open(bus, device)
        self._spi.max_speed_hz = max_speed_hz
        self._spi.mode = mode
        logger.debug(f"Opened spidev{bus}.{device} at {max_speed_hz} Hz, mode {mode}")

    @classmethod
    def from_config(cls, cfg: SpiConfig) -> SpidevBus:
        return cls(cfg.bus, cfg.device, max_speed_hz=cfg.max_speed_hz, mode=cfg.mode)

    def transfer(self, data: Sequence[int]) -> Sequence[int]:
        return self._spi.xfer2(list(data))

    def close(self) -> None:
        self._spi.close()

    def __enter__(self) -> SpidevBus:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
