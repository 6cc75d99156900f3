"""Helpers for loading and validating the expander's bus configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import threading

import yaml  # type: ignore[import-untyped]

from mcp23s17.core.exceptions import ConfigurationError
from mcp23s17.utils.consts import ConstUtils


@dataclass(frozen=True)
class SpiConfig:
    bus: int
    device: int
    max_speed_hz: int = 1_000_000
    mode: int = 0


@dataclass(frozen=True)
class ExpanderConfig:
    spi: SpiConfig


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, ExpanderConfig] = {}
_CACHE_LOCK = threading.RLock()


def _get_config_path(path: Optional[str] = None) -> str:
    if path is None:
        # Bundled defaults live next to the package: mcp23s17/config.yaml
        base = Path(__file__).parent.parent / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError("Config root must be a mapping")
    return raw


def _parse_expander_cfg_from_dict(raw: dict[str, Any]) -> ExpanderConfig:
    try:
        spi = raw["spi"]
        cfg = ExpanderConfig(
            spi=SpiConfig(
                bus=int(spi["bus"]),
                device=int(spi["device"]),
                max_speed_hz=int(spi.get("max_speed_hz", 1_000_000)),
                mode=int(spi.get("mode", 0)),
            ),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    _validate_spi_config(cfg.spi)
    return cfg


def _validate_spi_config(spi: SpiConfig) -> None:
    """Basic sanity checks to fail fast on bad configs."""
    if spi.bus < 0 or spi.device < 0:
        raise ConfigurationError("spi", "bus and device must be non-negative")

    if not 0 < spi.max_speed_hz <= ConstUtils.SPI_MAX_SPEED_HZ:
        raise ConfigurationError(
            "spi.max_speed_hz",
            f"must be in 1..{ConstUtils.SPI_MAX_SPEED_HZ} Hz, got {spi.max_speed_hz}",
        )

    if spi.mode not in (0, 1, 2, 3):
        raise ConfigurationError("spi.mode", f"must be 0-3, got {spi.mode}")


def load_config(path: Optional[str] = None) -> ExpanderConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Optional path to YAML config. If None, load bundled mcp23s17/config.yaml.

    Returns:
        ExpanderConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(path=path))
    raw = _load_yaml_file(p)

    return _parse_expander_cfg_from_dict(raw=raw)


def get_config(path: Optional[str] = None) -> ExpanderConfig:
    """Return the loaded config for path, loading and caching if necessary.

    Configs are cached per resolved path; repeated calls return the cached
    instance without re-reading the YAML file.

    THREAD SAFETY: This function is thread-safe. Multiple threads can
    safely call this concurrently.
    """
    key = _get_config_path(path=path)
    with _CACHE_LOCK:
        if key not in _LOADER_CACHE:
            _LOADER_CACHE[key] = load_config(path=key)
        return _LOADER_CACHE[key]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    Useful for testing. All subsequent calls to get_config() will reload
    from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
