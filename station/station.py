"""
Station: the tile container inhabitants live on.

Holds a sparse map of GridPosition -> Tile, generates new stations
procedurally, and answers the grid queries used by inhabitants
(neighbors, random tiles, item locations, paths).
"""

import math
import numpy as np
from typing import Dict, List, Optional

from .grid import GridPosition, Tile, TileType, WallDirection
from .items import Item, ItemType
from .data_types import ItemDefinition, StationConfig
from .pathfinding import path_to
from .rng import StationRng
from .constants import (
    TILE_WIDTH_DEFAULT,
    SMOOTHING_MIN_NEIGHBORS,
    SMOOTHING_BIRTH_NEIGHBORS,
)


class Station:
    """
    The station grid.

    Attributes:
        origin: World position of tile (0, 0), as [x, y]
        tile_width: World units per tile edge
    """

    def __init__(self, origin=(0.0, 0.0), tile_width: float = TILE_WIDTH_DEFAULT):
        self.origin: np.ndarray = np.array(origin, dtype=np.float64)
        self.tile_width: float = float(tile_width)
        self._tiles: Dict[GridPosition, Tile] = {}

    @classmethod
    def generate(
        cls,
        config: StationConfig,
        rng: StationRng,
        catalog: Optional[Dict[str, ItemDefinition]] = None
    ) -> 'Station':
        """
        Randomly generate a new station.

        1. Random floor fill
        2. Cellular smoothing passes (grow/shrink into bigger spaces)
        3. Walls around every floor (8-neighborhood)
        4. Starting items on the first floor tile

        Args:
            config: Generation parameters
            rng: Shared random stream (draws one float per cell)
            catalog: Item catalog for starting items

        Returns:
            Generated station
        """
        station = cls(origin=config.origin, tile_width=config.tile_width)
        width, height = config.width, config.height

        # Randomly place floor tiles to give us a base
        for x in range(width):
            for y in range(height):
                if rng.rand_float() < config.floor_probability:
                    station.add_tile(Tile(GridPosition(x, y), TileType.FLOOR))

        # Expand the floor tiles into bigger spaces
        for _ in range(config.smoothing_passes):
            for x in range(width):
                for y in range(height):
                    pos = GridPosition(x, y)
                    neighbor_count = len(station.get_neighbors(pos))
                    if station.has_tile(pos):
                        if neighbor_count < SMOOTHING_MIN_NEIGHBORS:
                            station.remove_tile(pos)
                    elif neighbor_count == SMOOTHING_BIRTH_NEIGHBORS:
                        station.add_tile(Tile(pos, TileType.FLOOR))

        # Place walls around the edges (collected first, the map can't change while we scan it)
        to_place = set()
        for tile in station.tiles():
            if tile.kind != TileType.FLOOR:
                continue
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    neighbor_pos = GridPosition(tile.pos.x + dx, tile.pos.y + dy)
                    if not station.has_tile(neighbor_pos):
                        to_place.add(neighbor_pos)

        for pos in sorted(to_place):
            station.add_tile(Tile(pos, TileType.WALL, station.get_wall_direction(pos)))

        # Place some items on the tiles
        floors = station.tiles(TileType.FLOOR)
        if floors:
            first = floors[0]
            for variant in config.starting_items:
                first.add_item(Item.create(ItemType.from_variant(variant), first.pos, catalog))

        return station

    def get_wall_direction(self, pos: GridPosition) -> WallDirection:
        """
        Best wall direction for a position, used for generation.

        Every generated wall is drawn as a full block for now.
        """
        # TODO: pick exterior edges and corners from the floor layout around pos
        return WallDirection.FULL

    def add_tile(self, tile: Tile):
        """Adds a tile to the station. Trusts the tile's position"""
        self._tiles[tile.pos] = tile

    def num_tiles(self) -> int:
        return len(self._tiles)

    def has_tile(self, pos: GridPosition) -> bool:
        return pos in self._tiles

    def get_tile(self, pos: GridPosition) -> Optional[Tile]:
        return self._tiles.get(pos)

    def remove_tile(self, pos: GridPosition):
        self._tiles.pop(pos, None)

    def tiles(self, kind: Optional[TileType] = None) -> List[Tile]:
        """All tiles (optionally of one kind), sorted by position"""
        return [self._tiles[pos] for pos in sorted(self._tiles)
                if kind is None or self._tiles[pos].kind == kind]

    def get_random_tile(
        self,
        kind: TileType,
        rng: StationRng,
        direction: Optional[WallDirection] = None
    ) -> Optional[Tile]:
        """
        Uniformly random tile of a kind.

        Args:
            kind: Tile kind to pick from
            rng: Random stream
            direction: Optional wall/door direction to match as well

        Returns:
            Random matching tile, or None if there are none
        """
        options = [tile for tile in self.tiles() if tile.matches(kind, direction)]
        if not options:
            return None

        index = rng.rand_range(0, len(options))
        return options[index]

    def get_tile_from_world(self, point) -> Optional[Tile]:
        """
        Tile whose cell contains a world point.

        Tile cells are centered on origin + pos * tile_width.
        """
        point = np.asarray(point, dtype=np.float64)

        # Move up and to the left by half a tile, then snap to grid
        translated = (point - self.tile_width / 2.0) / self.tile_width - self.origin / self.tile_width
        grid_pos = GridPosition(int(math.ceil(translated[0])), int(math.ceil(translated[1])))

        return self.get_tile(grid_pos)

    def get_neighbors(self, pos: GridPosition) -> List[Tile]:
        """
        Orthogonal neighbor tiles that exist.

        Order is E W N S, reversed to S N W E on cells where x + y is even
        so straight-line paths zig-zag instead of hugging one side.
        """
        x, y = pos.x, pos.y
        dirs = [
            GridPosition(x + 1, y),
            GridPosition(x - 1, y),
            GridPosition(x, y - 1),
            GridPosition(x, y + 1),
        ]
        if (x + y) % 2 == 0:
            dirs.reverse()

        return [self._tiles[d] for d in dirs if d in self._tiles]

    def path_to(self, start: GridPosition, target: GridPosition) -> List[GridPosition]:
        """Path from start to target avoiding walls (see pathfinding.path_to)"""
        return path_to(self, start, target)

    def find_items(self, item_types: List[ItemType]) -> List[GridPosition]:
        """Positions of tiles holding a matching item (directly or in a container)"""
        return [tile.pos for tile in self.tiles() if tile.has_item(item_types)]

    def count_items(self, item_types: List[ItemType]) -> int:
        """Matching items across all tiles, container contents included"""
        return sum(item.count(item_types) for tile in self._tiles.values() for item in tile.items)

    def update(self, dt: float):
        """Update all items"""
        for tile in self._tiles.values():
            for item in tile.items:
                item.update(dt)

    def to_dict(self) -> dict:
        return {
            'origin': self.origin.tolist(),
            'tile_width': self.tile_width,
            'tiles': [tile.to_dict() for tile in self.tiles()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Station':
        station = cls(origin=data['origin'], tile_width=data['tile_width'])
        for tile_data in data.get('tiles', []):
            station.add_tile(Tile.from_dict(tile_data))
        return station
