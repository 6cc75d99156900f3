import pytest

from mcp23s17.core.pin import Pin, Port
from mcp23s17.core.register import (
    REGISTER_MAP,
    ConfigRegister,
    RegisterDescriptor,
    RegisterPair,
    ShadowRegisters,
)


def test_register_map_matches_datasheet():
    expected = {
        "IODIR": (0x00, 0x01),
        "IPOL": (0x02, 0x03),
        "GPINTEN": (0x04, 0x05),
        "DEFVAL": (0x06, 0x07),
        "INTCON": (0x08, 0x09),
        "IOCON": (0x0A, None),
        "GPPU": (0x0C, 0x0D),
        "INTF": (0x0E, 0x0F),
        "INTCAP": (0x10, 0x11),
        "GPIO": (0x12, 0x13),
        "OLAT": (0x14, 0x15),
    }
    assert {name: (d.address_a, d.address_b) for name, d in REGISTER_MAP.items()} == expected


def test_read_only_registers_flagged():
    read_only = {name for name, d in REGISTER_MAP.items() if d.read_only}
    assert read_only == {"INTF", "INTCAP"}


def test_descriptor_address_by_port():
    desc = REGISTER_MAP["GPPU"]
    assert desc.address(Port.A) == 0x0C
    assert desc.address(Port.B) == 0x0D


def test_single_byte_register_has_no_port_b():
    with pytest.raises(ValueError):
        REGISTER_MAP["IOCON"].address(Port.B)


def test_descriptor_is_frozen():
    desc = RegisterDescriptor("X", 0x00, 0x01)
    with pytest.raises(AttributeError):
        desc.name = "Y"


def test_config_register_descriptors():
    assert [r.descriptor.name for r in ConfigRegister] == [
        "IODIR",
        "IPOL",
        "GPINTEN",
        "DEFVAL",
        "INTCON",
        "GPPU",
        "OLAT",
    ]


def test_shadow_reset_values():
    shadows = ShadowRegisters()
    assert (shadows.iodir.a, shadows.iodir.b) == (0xFF, 0xFF)
    for register in ConfigRegister:
        if register is ConfigRegister.IODIR:
            continue
        pair = shadows.pair(register)
        assert (pair.a, pair.b) == (0x00, 0x00)


def test_shadow_instances_are_independent():
    first = ShadowRegisters()
    second = ShadowRegisters()
    first.gppu.set(Pin.PIN0, True)
    assert second.gppu.a == 0x00


def test_register_pair_set_routes_to_port():
    pair = RegisterPair()
    pair.set(Pin.PIN1, True)
    pair.set(Pin.PIN9, True)
    pair.set(Pin.PIN15, True)
    assert pair.a == 0b00000010
    assert pair.b == 0b10000010
    assert pair.value(Port.A) == pair.a
    assert pair.value(Port.B) == pair.b
    assert pair.get(Pin.PIN9) is True
    assert pair.get(Pin.PIN8) is False


def test_register_pair_clear_bit():
    pair = RegisterPair(a=0xFF, b=0xFF)
    pair.set(Pin.PIN4, False)
    assert pair.a == 0xEF
    assert pair.b == 0xFF


def test_pair_lookup():
    shadows = ShadowRegisters()
    assert shadows.pair(ConfigRegister.OLAT) is shadows.olat
    assert shadows.pair(ConfigRegister.INTCON) is shadows.intcon
