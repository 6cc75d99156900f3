import argparse
import logging
import sys
from pathlib import Path

# Ensure local repo package is used even if another "mcp23s17" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mcp23s17 import MCP23S17, Pin
from mcp23s17.virtual import VirtualMCP23S17


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Mirror a button on PIN0 to an LED on PIN8 using a virtual MCP23S17."
    )
    parser.add_argument(
        "--presses",
        type=int,
        default=3,
        help="Number of simulated button presses",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log bus traffic")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    chip = VirtualMCP23S17()
    expander = MCP23S17.new_with_tied_interrupts(chip, chip.chip_select, chip.int_a)

    button = expander.get_pin_view(Pin.PIN0)
    button.enable_pull_up()
    button.invert_input()  # pressed pulls the line low
    button.enable_interrupt()
    expander.write_gppu_a()
    expander.write_ipol_a()
    expander.write_gpinten_a()

    led = expander.get_pin_view(Pin.PIN8)
    led.set_as_output()
    expander.write_iodir_b()

    def on_button(captured_value: bool, pin: Pin) -> None:
        led.set(captured_value)
        expander.write_olat_b()
        logging.info("%s %s -> LED %s", pin.name, captured_value, led.get())

    button.add_listener(on_button)

    chip.drive_input(Pin.PIN0, True)  # released
    for _ in range(args.presses):
        chip.drive_input(Pin.PIN0, False)
        chip.drive_input(Pin.PIN0, True)


if __name__ == "__main__":
    main()
