"""
Headless station run.

Builds the simulation from the data pack, ticks it, prints periodic
summaries, and writes a save at the end.

Usage (install the package first with `pip install -e .`):
    python scripts/run_headless.py [ticks] [data_root]
"""

import sys
import time
from pathlib import Path

from station.simulation import StationSimulation
from station.persistence import save_game
from station.constants import TICK_SUMMARY_INTERVAL


def main():
    ticks = int(sys.argv[1]) if len(sys.argv) > 1 else 6000
    data_root = Path(sys.argv[2]) if len(sys.argv) > 2 else Path(__file__).parent.parent / "data"

    print("=" * 80)
    print(f"Headless station run: {ticks} ticks")
    print("=" * 80)

    sim = StationSimulation(data_root=data_root, schema_dir=data_root / "schemas")

    start = time.perf_counter()
    sim.run(ticks, summary_every=TICK_SUMMARY_INTERVAL)
    elapsed = time.perf_counter() - start

    print()
    print(f"Simulated {ticks * sim.dt:.1f}s in {elapsed:.2f}s wall time")
    for tick, line in list(sim.events)[-10:]:
        print(f"  [{tick:6d}] {line}")

    save_game(sim, Path("saves"))


if __name__ == '__main__':
    main()
