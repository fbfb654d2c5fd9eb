"""
Deterministic RNG utilities for station simulation.

Uses SHA256 hashing to derive stable seeds from hierarchical components
(world_seed, world_id, component_name). All randomness uses
numpy.random.Generator(PCG64) for reproducible cross-session results.
"""

import hashlib
import numpy as np
from typing import Any


def make_seed(*components: Any) -> int:
    """
    Generate deterministic 64-bit seed from hierarchical components.

    Uses SHA256 to hash components into stable seed value.

    Args:
        *components: Seed components (world_seed, world_id, stream name, etc.)

    Returns:
        64-bit integer seed for numpy RNG

    Example:
        station_seed = make_seed(world_seed, "station-alpha", "generation")
    """
    # Join all components with colon separator
    hash_input = ":".join(str(c) for c in components)

    # SHA256 hash and extract 64-bit integer
    hash_bytes = hashlib.sha256(hash_input.encode('utf-8')).digest()
    seed = int.from_bytes(hash_bytes[:8], byteorder='big')

    return seed


class StationRng:
    """
    Seeded random stream shared by generation and inhabitant decisions.

    One stream per simulation keeps the draw order (and so the outcome)
    fixed for a given seed. The generator state can be captured and
    restored for save games.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = np.random.Generator(np.random.PCG64(seed))

    def rand_float(self) -> float:
        """Uniform float in [0, 1)"""
        return float(self._rng.random())

    def rand_range(self, low: int, high: int) -> int:
        """
        Uniform integer in [low, high).

        Raises:
            ValueError: if the range is empty
        """
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")
        return int(self._rng.integers(low, high))

    def get_state(self) -> dict:
        """JSON-compatible snapshot of the generator state"""
        return self._rng.bit_generator.state

    def set_state(self, state: dict):
        """Restore a snapshot taken with get_state()"""
        self._rng.bit_generator.state = state

    @classmethod
    def from_state(cls, seed: int, state: dict) -> 'StationRng':
        rng = cls(seed)
        rng.set_state(state)
        return rng
