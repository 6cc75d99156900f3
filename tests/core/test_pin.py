import pytest

from mcp23s17.core.exceptions import InvalidPinError
from mcp23s17.core.pin import (
    PORT_A_PINS,
    PORT_B_PINS,
    Pin,
    Port,
    get_bit,
    resolve_byte,
    set_bit,
)


@pytest.mark.parametrize("number", range(16))
def test_from_pin_number_round_trips(number):
    pin = Pin.from_pin_number(number)
    assert pin.pin_number == number
    assert pin.port is (Port.A if number < 8 else Port.B)
    assert pin.bit_index == number % 8
    assert pin.mask == 1 << (number % 8)


@pytest.mark.parametrize("number", [-1, 16, 100, None, "3", 2.0, True])
def test_from_pin_number_rejects_invalid(number):
    with pytest.raises(InvalidPinError) as exc_info:
        Pin.from_pin_number(number)
    assert exc_info.value.pin_number == number


def test_invalid_pin_error_is_value_error():
    with pytest.raises(ValueError):
        Pin.from_pin_number(42)


def test_port_membership_helpers():
    assert Pin.PIN7.is_port_a() and not Pin.PIN7.is_port_b()
    assert Pin.PIN8.is_port_b() and not Pin.PIN8.is_port_a()


def test_port_pin_tuples_are_ordered_and_disjoint():
    assert PORT_A_PINS == tuple(Pin(i) for i in range(8))
    assert PORT_B_PINS == tuple(Pin(i) for i in range(8, 16))
    assert Port.A.pins is PORT_A_PINS
    assert Port.B.pins is PORT_B_PINS
    assert [p.bit_index for p in PORT_B_PINS] == list(range(8))


def test_resolve_byte_selects_half():
    assert resolve_byte(Pin.PIN3, 0xAA, 0x55) == 0xAA
    assert resolve_byte(Pin.PIN11, 0xAA, 0x55) == 0x55


@pytest.mark.parametrize("pin", list(Pin))
@pytest.mark.parametrize("value", [False, True])
def test_set_bit_then_get_bit(pin, value):
    for byte in (0x00, 0xFF, 0xA5):
        assert get_bit(pin, set_bit(pin, byte, value)) is value


@pytest.mark.parametrize("pin", list(Pin))
def test_set_bit_leaves_other_bits_alone(pin):
    for byte in (0x00, 0xFF, 0x5A):
        for value in (False, True):
            changed = set_bit(pin, byte, value)
            assert changed & ~pin.mask & 0xFF == byte & ~pin.mask & 0xFF
            assert 0 <= changed <= 0xFF


def test_get_bit_examples():
    assert get_bit(Pin.PIN2, 0b00000100) is True
    assert get_bit(Pin.PIN10, 0b00000100) is True
    assert get_bit(Pin.PIN3, 0b00000100) is False
