"""BITBUFFER memory footprint demo.

Fills one buffer per value range with random data, reads it back and
compares the packed size against a plain ``uint16`` NumPy array.

Run:
    python scripts/demo_footprint.py
    python scripts/demo_footprint.py --capacity 10000 --overflow clamp_max
"""

from __future__ import annotations

import argparse
import sys

import numpy as np

from bitbuffer.core.types import OverflowPolicy, RangeCode
from bitbuffer.fifo.buffer import BitBuffer
from bitbuffer.fifo.diagnostics import format_slots


def main() -> int:
    parser = argparse.ArgumentParser(description="BITBUFFER footprint demo")
    parser.add_argument("--capacity", type=int, default=1000, help="Values per buffer")
    parser.add_argument(
        "--overflow",
        default="reject",
        choices=[p.value for p in OverflowPolicy],
        help="Overflow policy for out-of-range values",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    plain_bytes = np.zeros(args.capacity, dtype=np.uint16).nbytes

    print(f"{'range':>8} {'bits':>5} {'bytes':>8} {'uint16':>8} {'ratio':>6}  stored/offered")
    print("-" * 60)
    for code in RangeCode:
        with BitBuffer(code, args.capacity, overflow=args.overflow) as buf:
            # Offer some values above the range to show the overflow policy
            data = rng.integers(0, code.value_count + code.value_count // 4, size=args.capacity)
            stored = buf.extend(data)
            print(
                f"{code.value_count:>8} {buf.bit_width:>5} {buf.nbytes:>8} "
                f"{plain_bytes:>8} {buf.nbytes / plain_bytes:>6.2f}  {stored}/{len(data)}"
            )

    print()
    print("Slot dump, 4-value range, capacity 6, after 8 pushes and 2 pops:")
    with BitBuffer(RangeCode.RANGE4, 6) as buf:
        buf.extend([3, 2, 1, 0, 3, 2, 1, 0])
        buf.pop()
        buf.pop()
        print("  " + format_slots(buf.snapshot()))
        print(f"  values oldest->newest: {buf.to_array().tolist()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
