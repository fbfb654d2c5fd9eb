"""
Grid primitives: positions, tile kinds, and tiles.

A station is a sparse grid. Each occupied cell holds one Tile; empty cells
are open space. Tiles are identified by their GridPosition.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .items import Item, ItemType
    from .station import Station


@dataclass(frozen=True, order=True)
class GridPosition:
    """Integer cell coordinate on the station grid"""
    x: int
    y: int

    def distance(self, other: 'GridPosition') -> int:
        """Manhattan distance on a square grid"""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def tie_key(self) -> Tuple[int, int]:
        """
        Expansion order among equal-cost frontier entries.

        Lower x first, then higher y.
        """
        return (self.x, -self.y)

    @classmethod
    def from_tuple(cls, pos: Tuple[int, int]) -> 'GridPosition':
        return cls(int(pos[0]), int(pos[1]))

    def to_list(self) -> List[int]:
        return [self.x, self.y]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class TileType(Enum):
    """What kind of square a tile is"""
    FLOOR = "floor"
    WALL = "wall"
    DOOR = "door"


class WallDirection(Enum):
    """
    Drawing hint for walls and doors.

    Directions like "top-left" indicate that in a square walled room,
    this is the top-left corner.
    """
    INTERIOR_VERTICAL = "interior_vertical"
    INTERIOR_HORIZONTAL = "interior_horizontal"
    INTERIOR_CROSS = "interior_cross"
    INTERIOR_CORNER_TOP_LEFT = "interior_corner_top_left"
    INTERIOR_CORNER_TOP_RIGHT = "interior_corner_top_right"
    INTERIOR_CORNER_BOTTOM_LEFT = "interior_corner_bottom_left"
    INTERIOR_CORNER_BOTTOM_RIGHT = "interior_corner_bottom_right"
    EXTERIOR_TOP = "exterior_top"
    EXTERIOR_BOTTOM = "exterior_bottom"
    EXTERIOR_LEFT = "exterior_left"
    EXTERIOR_RIGHT = "exterior_right"
    EXTERIOR_CORNER_TOP_LEFT = "exterior_corner_top_left"
    EXTERIOR_CORNER_TOP_RIGHT = "exterior_corner_top_right"
    EXTERIOR_CORNER_BOTTOM_LEFT = "exterior_corner_bottom_left"
    EXTERIOR_CORNER_BOTTOM_RIGHT = "exterior_corner_bottom_right"
    FULL = "full"


@dataclass(eq=False)
class Tile:
    """
    One cell of the station.

    Attributes:
        pos: Position of the tile within the station
        kind: Floor, wall or door
        direction: Wall/door drawing hint (None for floors)
        items: Items lying on the tile
    """
    pos: GridPosition
    kind: TileType
    direction: Optional[WallDirection] = None
    items: List['Item'] = field(default_factory=list)

    # Tiles are equal if they are in the same spot
    def __eq__(self, other) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.pos == other.pos

    def __hash__(self) -> int:
        return hash(self.pos)

    def matches(self, kind: TileType, direction: Optional[WallDirection] = None) -> bool:
        """Kind match; direction only compared when given"""
        if self.kind != kind:
            return False
        return direction is None or self.direction == direction

    def add_item(self, item: 'Item'):
        self.items.append(item)

    def has_item(self, item_types: List['ItemType']) -> bool:
        """Do we have an item of one of these types here (or in a container here)?"""
        return self.get_item(item_types) is not None

    def get_item(self, item_types: List['ItemType']) -> Optional['Item']:
        """
        First item matching item_types, or the container holding one.

        Returns:
            Matching item, containing container, or None
        """
        for item in self.items:
            if item.kind in item_types:
                return item

            # If this is a container, look inside
            if item.is_container and item.find_item(item_types) is not None:
                return item

        return None

    def take_item(self, item_types: List['ItemType']) -> Optional['Item']:
        """
        Remove and return a matching item from the tile or a container on it.

        Returns:
            The removed item, or None if nothing matched
        """
        item = self.get_item(item_types)
        if item is None:
            return None

        if item.kind in item_types:
            self.remove_item(item.id)
            return item

        return item.take_item(item_types)

    def remove_item(self, item_id):
        """Given an item id, removes it from the tile"""
        self.items = [item for item in self.items if item.id != item_id]

    def to_world_position(self, station: 'Station') -> np.ndarray:
        """World position of the tile center"""
        return station.origin + np.array([self.pos.x, self.pos.y], dtype=np.float64) * station.tile_width

    def to_dict(self) -> dict:
        return {
            'pos': self.pos.to_list(),
            'kind': self.kind.value,
            'direction': self.direction.value if self.direction is not None else None,
            'items': [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Tile':
        from .items import Item

        direction = data.get('direction')
        return cls(
            pos=GridPosition.from_tuple(data['pos']),
            kind=TileType(data['kind']),
            direction=WallDirection(direction) if direction is not None else None,
            items=[Item.from_dict(i) for i in data.get('items', [])]
        )
