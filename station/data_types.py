"""
Data types mirroring YAML schema structures.

These dataclasses are populated by loader.py from YAML files.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import (
    STATION_WIDTH_DEFAULT,
    STATION_HEIGHT_DEFAULT,
    FLOOR_PROBABILITY_DEFAULT,
    SMOOTHING_PASSES_DEFAULT,
    TILE_WIDTH_DEFAULT,
    TICK_DELTA_SECONDS_DEFAULT,
    SECONDS_PER_TILE_DEFAULT,
    CREW_COUNT_DEFAULT,
)


# ============================================================================
# Item Catalog
# ============================================================================

@dataclass
class ItemDefinition:
    """Stats for one item variant"""
    variant: str  # energy_bar, meal_ready_to_eat, water, coffee, fridge, locker
    energy: int = 0  # Hunger restored when eaten
    hydration: int = 0  # Thirst restored when drunk
    capacity: int = 0  # Containers only
    stock: List[str] = field(default_factory=list)  # Variants cycled to fill a new container
    description: Optional[str] = None


# ============================================================================
# World Definition
# ============================================================================

@dataclass
class StationConfig:
    """Procedural station generation parameters"""
    width: int = STATION_WIDTH_DEFAULT
    height: int = STATION_HEIGHT_DEFAULT
    floor_probability: float = FLOOR_PROBABILITY_DEFAULT
    smoothing_passes: int = SMOOTHING_PASSES_DEFAULT
    tile_width: float = TILE_WIDTH_DEFAULT
    origin: List[float] = field(default_factory=lambda: [0.0, 0.0])  # [x, y] world position of tile (0, 0)
    starting_items: List[str] = field(default_factory=lambda: ["fridge"])  # Placed on the first floor tile


@dataclass
class SimulationConfig:
    """Simulation global defaults"""
    tick_delta_seconds: float = TICK_DELTA_SECONDS_DEFAULT
    seconds_per_tile: float = SECONDS_PER_TILE_DEFAULT


@dataclass
class CrewConfig:
    """Initial crew"""
    count: int = CREW_COUNT_DEFAULT
    roles: Optional[List[str]] = None  # Fixed roles; random non-ghost roles when omitted


@dataclass
class World:
    """World configuration"""
    world_id: str
    name: str
    seed: int
    station: StationConfig
    simulation: SimulationConfig
    crew: CrewConfig
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'world_id': self.world_id,
            'name': self.name,
            'seed': self.seed,
            'station': {
                'width': self.station.width,
                'height': self.station.height,
                'floor_probability': self.station.floor_probability,
                'smoothing_passes': self.station.smoothing_passes,
                'tile_width': self.station.tile_width,
                'origin': list(self.station.origin),
                'starting_items': list(self.station.starting_items),
            },
            'simulation': {
                'tick_delta_seconds': self.simulation.tick_delta_seconds,
                'seconds_per_tile': self.simulation.seconds_per_tile,
            },
            'crew': {
                'count': self.crew.count,
                'roles': list(self.crew.roles) if self.crew.roles is not None else None,
            },
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'World':
        return cls(
            world_id=data['world_id'],
            name=data['name'],
            seed=data['seed'],
            station=StationConfig(**data.get('station', {})),
            simulation=SimulationConfig(**data.get('simulation', {})),
            crew=CrewConfig(**data.get('crew', {})),
            description=data.get('description')
        )
