"""
Inhabitant runtime representation.

Inhabitants are the station crew. Each one has needs (hunger, thirst,
health), a behavior stack (top = current), an inventory, and a path it
follows tile by tile. Positions are world coordinates so movement can
ease smoothly between tile centers.
"""

import uuid
import numpy as np
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .grid import GridPosition, Tile, TileType
from .items import Item, ItemType, FoodType, DrinkType, food_types, drink_types
from .data_types import ItemDefinition
from .spatial import rank_by_manhattan, ease_in_out, lerp
from .rng import StationRng
from .constants import (
    NEED_MAX,
    HEALTH_MAX,
    NEED_THRESHOLD,
    NEED_PER_TILE,
    STARVATION_DAMAGE,
    SECONDS_PER_TILE_DEFAULT,
)


class InhabitantType(Enum):
    PILOT = "pilot"
    ENGINEER = "engineer"
    SCIENTIST = "scientist"
    MEDIC = "medic"
    SOLDIER = "soldier"
    MINER = "miner"
    COOK = "cook"
    GHOST = "ghost"


# Roles a living inhabitant can be spawned with
CREW_TYPES = [t for t in InhabitantType if t != InhabitantType.GHOST]


class BehaviorKind(Enum):
    WANDER = "wander"
    SEARCH = "search"
    EAT = "eat"
    DRINK = "drink"
    WORK = "work"


@dataclass(frozen=True)
class Behavior:
    """One entry on the behavior stack. SEARCH carries the item types sought."""
    kind: BehaviorKind
    item_types: Tuple[ItemType, ...] = ()

    def to_dict(self) -> dict:
        return {'kind': self.kind.value, 'item_types': [t.to_dict() for t in self.item_types]}

    @classmethod
    def from_dict(cls, data: dict) -> 'Behavior':
        return cls(
            kind=BehaviorKind(data['kind']),
            item_types=tuple(ItemType.from_dict(t) for t in data.get('item_types', []))
        )

    def __str__(self) -> str:
        if self.kind == BehaviorKind.SEARCH:
            return f"search({', '.join(t.variant for t in self.item_types)})"
        return self.kind.value


@dataclass(eq=False)
class Inhabitant:
    """
    A member of the station crew.

    Attributes:
        kind: Role (GHOST once dead)
        pos: World position [x, y] float64
        id: Unique identifier
        dest: World position being walked to, None when idle
        path: Grid positions to walk through (start excluded)
        current_waypoint: Index into path of the next tile
        move_elapsed: Seconds spent on the current tile-to-tile segment
        segment_start: World position the current segment eases from
        behaviors: Behavior stack, last entry is current
        health: 0..HEALTH_MAX
        hunger: 0..NEED_MAX
        thirst: 0..NEED_MAX
        age: Seconds alive (or dead)
        items: Inventory
        seconds_per_tile: Time to walk one tile
        event_sink: Optional callback receiving event lines
    """
    kind: InhabitantType
    pos: np.ndarray
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    dest: Optional[np.ndarray] = None
    path: List[GridPosition] = field(default_factory=list)
    current_waypoint: int = 0
    move_elapsed: float = 0.0
    segment_start: Optional[np.ndarray] = None
    behaviors: List[Behavior] = field(default_factory=list)
    health: int = HEALTH_MAX
    hunger: int = 0
    thirst: int = 0
    age: float = 0.0
    items: List[Item] = field(default_factory=list)
    seconds_per_tile: float = SECONDS_PER_TILE_DEFAULT
    event_sink: Optional[Callable[[str], None]] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        """Ensure positions are float64 arrays"""
        self.pos = np.array(self.pos, dtype=np.float64)
        if self.dest is not None:
            self.dest = np.array(self.dest, dtype=np.float64)
        if self.segment_start is None:
            self.segment_start = self.pos.copy()
        else:
            self.segment_start = np.array(self.segment_start, dtype=np.float64)

    @classmethod
    def create(
        cls,
        pos,
        kind: InhabitantType,
        catalog: Optional[Dict[str, ItemDefinition]] = None,
        **kwargs
    ) -> 'Inhabitant':
        """New inhabitant; the living start with an energy bar and a water"""
        items = []
        if kind != InhabitantType.GHOST:
            items = [
                Item.create(ItemType.food(FoodType.ENERGY_BAR), GridPosition(0, 0), catalog),
                Item.create(ItemType.drink(DrinkType.WATER), GridPosition(1, 0), catalog),
            ]
        return cls(kind=kind, pos=pos, items=items, **kwargs)

    def __str__(self) -> str:
        current = self.current_behavior()
        return (f"[{self.id} ({self.kind.value}, {int(self.age)}s), "
                f"Behavior: {current if current is not None else 'none'}, "
                f"Health: {self.health}, Hunger: {self.hunger}, Thirst: {self.thirst}]")

    def _log(self, message: str):
        if self.event_sink is not None:
            self.event_sink(f"{self} {message}")

    @property
    def is_ghost(self) -> bool:
        return self.kind == InhabitantType.GHOST

    def current_behavior(self) -> Optional[Behavior]:
        return self.behaviors[-1] if self.behaviors else None

    def is_moving(self) -> bool:
        return self.dest is not None

    def can_move_to(self, tile: Optional[Tile]) -> bool:
        """
        Whether we can be on a tile.

        Doesn't check whether we can _get_ there, only if we can be there.
        """
        # Ghosts can go anywhere
        if self.is_ghost:
            return True

        if tile is None:
            return False

        # TODO: check door access once doors can be locked
        return tile.kind in (TileType.FLOOR, TileType.DOOR)

    def update(self, dt: float, station, rng: StationRng):
        """
        Advance one tick: age, then act on the current behavior.

        Args:
            dt: Time step in seconds
            station: Station we live on
            rng: Shared random stream
        """
        self.age += dt

        current_tile = station.get_tile_from_world(self.pos)
        behavior = self.current_behavior()

        if behavior is None:
            self._decide()
        elif behavior.kind == BehaviorKind.WANDER:
            if self.is_moving():
                self.keep_moving(dt, station)
            else:
                tile = station.get_random_tile(TileType.FLOOR, rng)
                if tile is not None and self.can_move_to(tile):
                    self.set_destination(station, tile.to_world_position(station))
        elif behavior.kind == BehaviorKind.EAT:
            self._satisfy(current_tile, food_types(), self.eat, "Eating", "food")
        elif behavior.kind == BehaviorKind.DRINK:
            self._satisfy(current_tile, drink_types(), self.drink, "Drinking", "drink")
        elif behavior.kind == BehaviorKind.SEARCH:
            if self.is_moving():
                self.keep_moving(dt, station)
            else:
                self._search(station, current_tile, list(behavior.item_types))
        elif behavior.kind == BehaviorKind.WORK:
            self.behaviors.pop()

    def _decide(self):
        """Pick what to do next from current needs"""
        if self.wants_food() >= NEED_THRESHOLD:
            self.behaviors.append(Behavior(BehaviorKind.EAT))
        elif self.wants_drink() >= NEED_THRESHOLD:
            self.behaviors.append(Behavior(BehaviorKind.DRINK))
        else:
            self.behaviors.append(Behavior(BehaviorKind.WANDER))

    def _satisfy(
        self,
        current_tile: Optional[Tile],
        item_types: List[ItemType],
        consume: Callable[[Item], None],
        verb: str,
        need: str
    ):
        """Consume from inventory, else from the tile we're on, else go searching"""
        item = self.take_item(item_types)
        source = "inventory"
        if item is None and current_tile is not None:
            item = current_tile.take_item(item_types)
            source = "tile"

        if item is not None:
            self._log(f"{verb} from {source}")
            consume(item)
            self.behaviors.pop()
        else:
            self._log(f"Searching for {need}")
            self.behaviors.append(Behavior(BehaviorKind.SEARCH, tuple(item_types)))

    def _search(self, station, current_tile: Optional[Tile], item_types: List[ItemType]):
        """Head for the closest reachable tile holding a matching item"""
        if current_tile is None:
            self._give_up_search()
            return

        start = current_tile.pos
        best_path: List[GridPosition] = []

        for distance, pos in rank_by_manhattan(start, station.find_items(item_types)):
            if pos == start:
                # Already standing on it
                self.behaviors.pop()
                return

            # Manhattan distance bounds the path length from below
            if best_path and distance >= len(best_path):
                break

            path = station.path_to(start, pos)
            if path and (not best_path or len(path) < len(best_path)):
                best_path = path

        if best_path:
            target = station.get_tile(best_path[-1])
            self.set_destination(station, target.to_world_position(station))
        else:
            self._give_up_search()

    def _give_up_search(self):
        """Nothing reachable: drop the search and the need behind it, go wander"""
        self._log("Nothing to find")
        self.behaviors.pop()
        if self.behaviors and self.behaviors[-1].kind in (BehaviorKind.EAT, BehaviorKind.DRINK):
            self.behaviors.pop()
        self.behaviors.append(Behavior(BehaviorKind.WANDER))

    def set_destination(self, station, dest):
        """Path from our tile to the destination's tile and start walking"""
        dest = np.array(dest, dtype=np.float64)
        if np.array_equal(dest, self.pos):
            return

        start_tile = station.get_tile_from_world(self.pos)
        dest_tile = station.get_tile_from_world(dest)
        path = []
        if start_tile is not None and dest_tile is not None:
            path = station.path_to(start_tile.pos, dest_tile.pos)

        if path:
            self._log(f"Pathing from {self.pos.tolist()} to {dest.tolist()}")
            self.move_elapsed = 0.0
            self.path = path
            self.current_waypoint = 0
            self.segment_start = self.pos.copy()
            self.dest = dest
        else:
            self._log("No path")

    def keep_moving(self, dt: float, station):
        """Ease toward the next waypoint; pop the behavior on arrival"""
        if self.dest is None:
            return

        waypoint_tile = station.get_tile(self.path[self.current_waypoint])
        if waypoint_tile is None:
            # Tile vanished under our path
            self._stop()
            self._log("Path blocked")
            return

        waypoint = waypoint_tile.to_world_position(station)
        self.move_elapsed += dt
        t = self.move_elapsed / self.seconds_per_tile
        self.pos = lerp(self.segment_start, waypoint, ease_in_out(t))

        if t < 1.0:
            return

        # Reached the waypoint
        self.pos = waypoint.copy()
        self.segment_start = self.pos.copy()
        self.current_waypoint += 1
        self.move_elapsed = 0.0

        # Moving takes work!
        self.add_hunger(NEED_PER_TILE)
        self.add_thirst(NEED_PER_TILE)

        if self.current_waypoint >= len(self.path) and self.dest is not None:
            self._log(f"Arrived at {self.pos.tolist()}")
            self._stop()
            if self.behaviors:
                self.behaviors.pop()

    def _stop(self):
        self.dest = None
        self.path = []
        self.current_waypoint = 0
        self.move_elapsed = 0.0
        self.segment_start = self.pos.copy()

    def add_hunger(self, value: int):
        if self.is_ghost:
            return

        self.hunger += value
        if self.hunger >= NEED_MAX:
            self.hunger = NEED_MAX
            self._log("Starving! Taking damage.")
            self.take_damage(STARVATION_DAMAGE)

    def add_thirst(self, value: int):
        if self.is_ghost:
            return

        self.thirst += value
        if self.thirst >= NEED_MAX:
            self.thirst = NEED_MAX
            self._log("Parched! Taking damage.")
            self.take_damage(STARVATION_DAMAGE)

    def eat(self, item: Item):
        self.hunger = max(0, self.hunger - item.energy)

    def drink(self, item: Item):
        self.thirst = max(0, self.thirst - item.hydration)

    def take_damage(self, amount: int):
        if self.is_ghost:
            return

        self.health = max(0, self.health - amount)
        if self.health == 0:
            self._log("I die. I am dead.")
            self.die()

    def die(self):
        """Become a ghost. Dropping the current plan lets the ghost decide afresh."""
        if self.is_ghost:
            return
        self.kind = InhabitantType.GHOST
        self.behaviors = []
        self._stop()

    def wants_food(self) -> float:
        """Linear to hunger; ghosts never want food"""
        if self.is_ghost:
            return 0.0
        return self.hunger / NEED_MAX

    def wants_drink(self) -> float:
        """Linear to thirst; ghosts never want drink"""
        if self.is_ghost:
            return 0.0
        return self.thirst / NEED_MAX

    def has_item(self, item_types: List[ItemType]) -> bool:
        """Do we have an item of this type on us (containers included)?"""
        for item in self.items:
            if item.kind in item_types:
                return True
            if item.is_container and item.find_item(item_types) is not None:
                return True
        return False

    def take_item(self, item_types: List[ItemType]) -> Optional[Item]:
        """Remove and return a matching item from the inventory"""
        for item in self.items:
            if item.kind in item_types:
                self.remove_item(item.id)
                return item
        for item in self.items:
            if item.is_container:
                taken = item.take_item(item_types)
                if taken is not None:
                    return taken
        return None

    def remove_item(self, item_id: uuid.UUID):
        """Given an item id, removes it from our inventory"""
        self.items = [item for item in self.items if item.id != item_id]

    def to_dict(self) -> dict:
        return {
            'id': str(self.id),
            'kind': self.kind.value,
            'pos': self.pos.tolist(),
            'dest': self.dest.tolist() if self.dest is not None else None,
            'path': [p.to_list() for p in self.path],
            'current_waypoint': self.current_waypoint,
            'move_elapsed': self.move_elapsed,
            'segment_start': self.segment_start.tolist(),
            'behaviors': [b.to_dict() for b in self.behaviors],
            'health': self.health,
            'hunger': self.hunger,
            'thirst': self.thirst,
            'age': self.age,
            'items': [item.to_dict() for item in self.items],
            'seconds_per_tile': self.seconds_per_tile,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Inhabitant':
        return cls(
            kind=InhabitantType(data['kind']),
            pos=data['pos'],
            id=uuid.UUID(data['id']),
            dest=data.get('dest'),
            path=[GridPosition.from_tuple(p) for p in data.get('path', [])],
            current_waypoint=data.get('current_waypoint', 0),
            move_elapsed=data.get('move_elapsed', 0.0),
            segment_start=data.get('segment_start'),
            behaviors=[Behavior.from_dict(b) for b in data.get('behaviors', [])],
            health=data.get('health', HEALTH_MAX),
            hunger=data.get('hunger', 0),
            thirst=data.get('thirst', 0),
            age=data.get('age', 0.0),
            items=[Item.from_dict(i) for i in data.get('items', [])],
            seconds_per_tile=data.get('seconds_per_tile', SECONDS_PER_TILE_DEFAULT)
        )
