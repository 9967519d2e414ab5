"""Compare LOW_LATENCY and HIGH_PERFORMANCE read timing on the dual-port RAM."""

import argparse
import sys
from pathlib import Path

# Ensure the local package is used even if another "periphsim" is installed.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from periphsim import DualPortRam, LatencyMode


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dual-port RAM latency demo.")
    parser.add_argument("--depth", type=int, default=16, help="Number of cells")
    parser.add_argument("--ticks", type=int, default=8, help="Addresses to sweep")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    contents = [0x100 + i for i in range(args.depth)]
    rams = {
        mode: DualPortRam(args.depth, 16, mode, initializer=contents) for mode in LatencyMode
    }

    for tick in range(args.ticks):
        address = tick % args.depth
        row = []
        for mode, ram in rams.items():
            ram.drive("a", address)
            ram.tick()
            row.append(f"{mode.value}={ram.output('a'):#06x}")
        print(f"tick {tick:2d} addr={address:2d} " + " ".join(row))


if __name__ == "__main__":
    main()
