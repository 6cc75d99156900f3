"""Constants for the MCP23S17 wire protocol and register map."""


class ConstUtils:
    """Bitwise masks and SPI framing constants."""

    MASK_8_BITS = 0xFF
    """8-bit mask: 0xFF"""

    PINS_PER_PORT = 8
    """Number of pins in each of port A and port B."""

    NUM_PINS = 16
    """Total number of pins on the expander."""

    WRITE_OPCODE = 0x40
    """Control byte for a register write (hardware address A2..A0 = 000)."""

    READ_OPCODE = 0x41
    """Control byte for a register read (hardware address A2..A0 = 000)."""

    READ_FILLER = 0x00
    """Arbitrary byte clocked out while the register value is clocked in."""

    READ_RESPONSE_INDEX = 2
    """Index of the register value in a 3-byte read response."""

    IOCON_MIRROR = 0x40
    """IOCON.MIRROR: INTA and INTB are internally ORed together."""

    SPI_MAX_SPEED_HZ = 10_000_000
    """Highest SPI clock supported by the chip (10 MHz)."""


# Register addresses for IOCON.BANK = 0
ADDR_IODIRA = 0x00
ADDR_IODIRB = 0x01
ADDR_IPOLA = 0x02
ADDR_IPOLB = 0x03
ADDR_GPINTENA = 0x04
ADDR_GPINTENB = 0x05
ADDR_DEFVALA = 0x06
ADDR_DEFVALB = 0x07
ADDR_INTCONA = 0x08
ADDR_INTCONB = 0x09
ADDR_IOCON = 0x0A
ADDR_GPPUA = 0x0C
ADDR_GPPUB = 0x0D
ADDR_INTFA = 0x0E
ADDR_INTFB = 0x0F
ADDR_INTCAPA = 0x10
ADDR_INTCAPB = 0x11
ADDR_GPIOA = 0x12
ADDR_GPIOB = 0x13
ADDR_OLATA = 0x14
ADDR_OLATB = 0x15

# Human-readable names, used for logging and error details
REGISTER_NAMES: dict[int, str] = {
    ADDR_IODIRA: "IODIRA",
    ADDR_IODIRB: "IODIRB",
    ADDR_IPOLA: "IPOLA",
    ADDR_IPOLB: "IPOLB",
    ADDR_GPINTENA: "GPINTENA",
    ADDR_GPINTENB: "GPINTENB",
    ADDR_DEFVALA: "DEFVALA",
    ADDR_DEFVALB: "DEFVALB",
    ADDR_INTCONA: "INTCONA",
    ADDR_INTCONB: "INTCONB",
    ADDR_IOCON: "IOCON",
    ADDR_GPPUA: "GPPUA",
    ADDR_GPPUB: "GPPUB",
    ADDR_INTFA: "INTFA",
    ADDR_INTFB: "INTFB",
    ADDR_INTCAPA: "INTCAPA",
    ADDR_INTCAPB: "INTCAPB",
    ADDR_GPIOA: "GPIOA",
    ADDR_GPIOB: "GPIOB",
    ADDR_OLATA: "OLATA",
    ADDR_OLATB: "OLATB",
}


def register_name(address: int) -> str:
    """Return the datasheet name for a register address, or its hex form."""
    return REGISTER_NAMES.get(address, f"0x{address:02X}")
