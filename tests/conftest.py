"""
Pytest configuration and shared fixtures for the mcp23s17 test suite.
"""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'mcp23s17' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mcp23s17.utils.consts import ConstUtils  # noqa: E402


class RecordingBus:
    """SpiBus double that records frames and answers reads from a register dict."""

    def __init__(self, registers=None):
        self.registers = dict(registers or {})
        self.frames = []
        self.fail_with = None
        self.chip_select = None

    def transfer(self, data):
        frame = list(data)
        if self.chip_select is not None:
            assert self.chip_select.is_selected, "transfer outside chip-select"
        self.frames.append(frame)
        if self.fail_with is not None:
            raise self.fail_with
        if frame[0] == ConstUtils.READ_OPCODE:
            return [0x00, 0x00, self.registers.get(frame[1], 0x00)]
        return [0x00] * len(frame)

    @property
    def writes(self):
        return [tuple(f[1:]) for f in self.frames if f[0] == ConstUtils.WRITE_OPCODE]

    @property
    def reads(self):
        return [f[1] for f in self.frames if f[0] == ConstUtils.READ_OPCODE]


class RecordingChipSelect:
    """ChipSelect double recording every level change."""

    def __init__(self):
        self.levels = []
        self.fail_on_high = None

    @property
    def is_selected(self):
        return bool(self.levels) and self.levels[-1] is False

    def high(self):
        if self.fail_on_high is not None:
            raise self.fail_on_high
        self.levels.append(True)

    def low(self):
        self.levels.append(False)


class FakeInterruptLine:
    """InterruptLine double; fire() simulates a falling edge."""

    def __init__(self):
        self.callbacks = []

    def add_falling_edge_callback(self, callback):
        self.callbacks.append(callback)

    def fire(self):
        for callback in self.callbacks:
            callback()


class ListenerRecorder:
    """Callable listener appending (tag, captured_value, pin) to a shared log."""

    def __init__(self, log, tag):
        self.log = log
        self.tag = tag

    def __call__(self, captured_value, pin):
        self.log.append((self.tag, captured_value, pin))


@pytest.fixture
def chip_select():
    return RecordingChipSelect()


@pytest.fixture
def bus(chip_select):
    spi = RecordingBus()
    spi.chip_select = chip_select
    return spi


@pytest.fixture
def interrupt_line():
    return FakeInterruptLine()


@pytest.fixture
def listener_log():
    """Shared log that recorders created by make_listener() append to."""
    return []


@pytest.fixture
def make_listener(listener_log):
    def factory(tag):
        return ListenerRecorder(listener_log, tag)

    return factory


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


SPI_CFG = {
    "bus": 0,
    "device": 1,
    "max_speed_hz": 2_000_000,
    "mode": 0,
}


@pytest.fixture
def valid_expander_config_dict():
    """
    Fixture providing a complete valid expander configuration dictionary.
    """
    return {"spi": dict(SPI_CFG)}


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_expander_config_dict):
    """
    Fixture that creates a temporary YAML file with valid configuration.
    """
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_expander_config_dict, f)

    yield temp_yaml_file


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
