"""
Station simulation kernel.

Main simulation class that owns the station, the crew, the shared random
stream, and the fixed-step tick loop.
"""

import numpy as np
import time
from dataclasses import replace
from collections import deque
from pathlib import Path
from typing import Dict, List, Optional

from .data_types import World, ItemDefinition
from .loader import load_all_data
from .station import Station
from .inhabitant import Inhabitant, InhabitantType, CREW_TYPES
from .grid import TileType
from .items import food_types, drink_types
from .rng import StationRng, make_seed
from .constants import TICK_TIME_WINDOW, EVENT_LOG_LIMIT


class StationSimulation:
    """
    Main simulation class for a crewed station.

    Manages station generation, crew lifecycle, and the tick loop.
    Deterministic: the same world config and seed give the same state
    after the same number of ticks.
    """

    def __init__(
        self,
        data_root: Optional[Path] = None,
        schema_dir: Optional[Path] = None,
        world: Optional[World] = None,
        item_catalog: Optional[Dict[str, ItemDefinition]] = None,
        seed: Optional[int] = None,
        verbose: bool = False,
        generate: bool = True
    ):
        """
        Initialize simulation from a data pack or an explicit world config.

        Args:
            data_root: Path to data directory (ignored when world is given)
            schema_dir: Optional path to JSON schemas
            world: Explicit world config (skips loading)
            item_catalog: Item definitions by variant (with world)
            seed: Optional seed override
            verbose: Print inhabitant events as they happen
            generate: Build the station and crew (False when restoring a save)
        """
        if world is None:
            if data_root is None:
                raise ValueError("Either data_root or world is required")
            print("Loading data pack...")
            data = load_all_data(data_root, schema_dir)
            world = data['world']
            item_catalog = data['items']

        if seed is not None:
            world = replace(world, seed=seed)

        self.world: World = world
        self.item_catalog: Dict[str, ItemDefinition] = item_catalog or {}
        self.verbose: bool = verbose

        # Simulation state
        self.rng = StationRng(make_seed(self.world.seed, self.world.world_id))
        self.station: Optional[Station] = None
        self.inhabitants: List[Inhabitant] = []
        self.tick_count: int = 0
        self.dt: float = self.world.simulation.tick_delta_seconds
        self._paused: bool = False

        # Event log (bounded)
        self.events: deque = deque(maxlen=EVENT_LOG_LIMIT)

        # Performance metrics
        self._tick_times: List[float] = []
        self._tick_time_sum: float = 0.0
        self._tick_time_window: int = TICK_TIME_WINDOW  # Rolling average window

        if not generate:
            return

        # Make a new station
        self.station = Station.generate(self.world.station, self.rng, self.item_catalog)
        print(f"  Station: {self.station.num_tiles()} tiles "
              f"({len(self.station.tiles(TileType.FLOOR))} floor)")

        # Put some people in it, all starting on the same tile
        self._spawn_crew()

        print(f"[OK] Simulation initialized: {len(self.inhabitants)} inhabitants, "
              f"dt={self.dt:.4f}s, seed={self.world.seed}")

    def _spawn_crew(self):
        """Place the initial crew together on one random floor tile"""
        crew = self.world.crew
        tile = self.station.get_random_tile(TileType.FLOOR, self.rng)
        if tile is None:
            print("[WARN] Station has no floor tiles, no crew spawned")
            return

        pos = tile.to_world_position(self.station)
        for i in range(crew.count):
            if crew.roles:
                kind = InhabitantType(crew.roles[i % len(crew.roles)])
            else:
                kind = self.get_random_inhabitant_type()
            self.add_inhabitant(kind, pos)

    def _record_event(self, line: str):
        self.events.append((self.tick_count, line))
        if self.verbose:
            print(line)

    def attach(self, inhabitant: Inhabitant):
        """Wire an inhabitant into the event log and movement timing"""
        inhabitant.event_sink = self._record_event
        inhabitant.seconds_per_tile = self.world.simulation.seconds_per_tile

    def get_random_inhabitant_type(self) -> InhabitantType:
        return CREW_TYPES[self.rng.rand_range(0, len(CREW_TYPES))]

    def add_inhabitant(self, kind: Optional[InhabitantType] = None, pos=None) -> Optional[Inhabitant]:
        """
        Add an inhabitant to the station.

        Args:
            kind: Role (random crew role when omitted)
            pos: World position (random floor tile when omitted)

        Returns:
            The new inhabitant, or None while paused or with nowhere to stand
        """
        if self._paused:
            return None

        if pos is None:
            tile = self.station.get_random_tile(TileType.FLOOR, self.rng)
            if tile is None:
                return None
            pos = tile.to_world_position(self.station)

        if kind is None:
            kind = self.get_random_inhabitant_type()

        inhabitant = Inhabitant.create(pos, kind, self.item_catalog)
        self.attach(inhabitant)
        self.inhabitants.append(inhabitant)
        self._record_event(f"Putting {kind.value} inhabitant at {inhabitant.pos.tolist()}")
        return inhabitant

    @property
    def is_paused(self) -> bool:
        return self._paused

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def tick(self, dt: Optional[float] = None):
        """
        Advance simulation by one time step.

        Order is fixed: station items update first, then each inhabitant
        in list order, all drawing from the one shared random stream.
        Paused simulations don't advance.

        Args:
            dt: Time step override in seconds (defaults to the world's fixed step)
        """
        if self._paused:
            return

        start_time = time.perf_counter()
        step = self.dt if dt is None else dt

        # Update the station
        self.station.update(step)

        # Update and move the inhabitants
        for inhabitant in self.inhabitants:
            inhabitant.update(step, self.station, self.rng)

        # Increment tick count
        self.tick_count += 1

        # Record timing
        elapsed = time.perf_counter() - start_time
        self._record_tick_time(elapsed)

    def run(self, ticks: int, summary_every: Optional[int] = None):
        """Tick repeatedly, optionally printing a summary every N ticks"""
        for _ in range(ticks):
            self.tick()
            if summary_every and self.tick_count % summary_every == 0:
                self.print_tick_summary()

    def get_station_stats(self) -> dict:
        """Counts shown in the status bar"""
        return {
            'inhabitants': len(self.inhabitants),
            'ghosts': sum(1 for i in self.inhabitants if i.is_ghost),
            'food': self.station.count_items(food_types()),
            'drink': self.station.count_items(drink_types()),
            'tiles': self.station.num_tiles(),
        }

    def get_tick_stats(self) -> dict:
        """
        Get current tick timing statistics.

        Returns:
            Dict with tick_count, avg_tick_time_ms, last_tick_time_ms
        """
        if not self._tick_times:
            return {
                'tick_count': self.tick_count,
                'avg_tick_time_ms': 0.0,
                'last_tick_time_ms': 0.0
            }

        avg_time = self._tick_time_sum / len(self._tick_times)
        last_time = self._tick_times[-1]

        return {
            'tick_count': self.tick_count,
            'avg_tick_time_ms': avg_time * 1000.0,
            'last_tick_time_ms': last_time * 1000.0
        }

    def _record_tick_time(self, elapsed: float):
        """
        Record tick timing for rolling average.

        Args:
            elapsed: Tick time in seconds
        """
        self._tick_times.append(elapsed)
        self._tick_time_sum += elapsed

        # Maintain rolling window
        if len(self._tick_times) > self._tick_time_window:
            removed = self._tick_times.pop(0)
            self._tick_time_sum -= removed

    def get_snapshot(self) -> dict:
        """
        Get complete simulation state snapshot.

        Returns:
            Dict with tick_count, stats, inhabitants, timing
        """
        return {
            'tick_count': self.tick_count,
            'paused': self._paused,
            'stats': self.get_station_stats(),
            'inhabitants': [i.to_dict() for i in self.inhabitants],
            'timing': self.get_tick_stats()
        }

    def print_tick_summary(self):
        """Print tick summary to console (lightweight monitoring)"""
        stats = self.get_tick_stats()
        station_stats = self.get_station_stats()
        mean_hunger = np.mean([i.hunger for i in self.inhabitants]) if self.inhabitants else 0.0
        print(f"Tick {stats['tick_count']:6d} | "
              f"Avg: {stats['avg_tick_time_ms']:6.3f} ms | "
              f"Last: {stats['last_tick_time_ms']:6.3f} ms | "
              f"Inhabitants: {station_stats['inhabitants']} ({station_stats['ghosts']} ghosts) | "
              f"Food: {station_stats['food']} Drink: {station_stats['drink']} | "
              f"Hunger: {mean_hunger:.1f}")
