"""Drive a pad pattern through the GPIO model and print the interrupt trace."""

import argparse
import sys
from pathlib import Path

# Ensure the local package is used even if another "periphsim" is installed.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from periphsim import SimulationEngine
from periphsim.gpio import GpioPeripheral, InterruptEnables


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="GPIO edge/level interrupt demo.")
    parser.add_argument(
        "--pattern",
        default="0,1,1,1,0,0,1,0,0,0",
        help="Comma-separated raw values for pad 0, one per tick",
    )
    parser.add_argument(
        "--clear-at",
        type=int,
        default=6,
        help="Tick at which INTR_STATE is written with 1 to clear pad 0",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    pattern = [int(v) for v in args.pattern.split(",")]

    gpio = GpioPeripheral(enables=InterruptEnables(rising=0x1, falling=0x1))
    engine = SimulationEngine()
    engine.attach(gpio)

    def drive(item: tuple[int, int]) -> None:
        tick, level = item
        gpio.drive_pads(level)
        if tick == args.clear_at:
            gpio.write(gpio.offsets.intr_state, 4, 0x1)

    trace = engine.run(enumerate(pattern), drive, gpio.get_snapshot)
    for tick, (raw, snap) in enumerate(zip(pattern, trace)):
        print(
            f"tick {tick:2d} raw={raw} stages={snap.sync_stages} "
            f"data_in={snap.data_in:#x} intr_state={snap.intr_state:#x}"
        )


if __name__ == "__main__":
    main()
