"""
Items: food, drink, and containers.

Items live on tiles or in inhabitant inventories. Containers hold other
items up to a capacity. Stats are baked at creation from the data pack
item catalog, with fallbacks from constants.ITEM_DEFAULTS.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .grid import GridPosition
from .data_types import ItemDefinition
from .constants import ITEM_DEFAULTS, CONTAINER_CAPACITY_DEFAULT


class ContainerFullError(Exception):
    """Raised when adding an item to a full container (or a non-container)"""
    pass


class ItemCategory(Enum):
    FOOD = "food"
    DRINK = "drink"
    CONTAINER = "container"


class FoodType(Enum):
    ENERGY_BAR = "energy_bar"
    MEAL_READY_TO_EAT = "meal_ready_to_eat"


class DrinkType(Enum):
    WATER = "water"
    COFFEE = "coffee"


class ContainerType(Enum):
    FRIDGE = "fridge"
    LOCKER = "locker"


_VARIANTS = {
    ItemCategory.FOOD: FoodType,
    ItemCategory.DRINK: DrinkType,
    ItemCategory.CONTAINER: ContainerType,
}


@dataclass(frozen=True)
class ItemType:
    """Category plus variant, e.g. ItemType(FOOD, 'energy_bar')"""
    category: ItemCategory
    variant: str

    @classmethod
    def food(cls, kind: FoodType) -> 'ItemType':
        return cls(ItemCategory.FOOD, kind.value)

    @classmethod
    def drink(cls, kind: DrinkType) -> 'ItemType':
        return cls(ItemCategory.DRINK, kind.value)

    @classmethod
    def container(cls, kind: ContainerType) -> 'ItemType':
        return cls(ItemCategory.CONTAINER, kind.value)

    @classmethod
    def from_variant(cls, variant: str) -> 'ItemType':
        """Look up the category of a variant name (e.g. 'coffee')"""
        for category, enum_cls in _VARIANTS.items():
            if variant in {v.value for v in enum_cls}:
                return cls(category, variant)
        raise ValueError(f"Unknown item variant: {variant}")

    def to_dict(self) -> dict:
        return {'category': self.category.value, 'variant': self.variant}

    @classmethod
    def from_dict(cls, data: dict) -> 'ItemType':
        return cls(ItemCategory(data['category']), data['variant'])

    def __str__(self) -> str:
        return f"{self.category.value}:{self.variant}"


def food_types() -> List[ItemType]:
    return [ItemType.food(kind) for kind in FoodType]


def drink_types() -> List[ItemType]:
    return [ItemType.drink(kind) for kind in DrinkType]


def container_types() -> List[ItemType]:
    return [ItemType.container(kind) for kind in ContainerType]


@dataclass
class Item:
    """
    An object on a tile or carried by an inhabitant.

    Attributes:
        id: Unique identifier
        kind: Item type
        pos: Grid position (slot index for contents and inventory)
        items: Contents (containers only)
        capacity: Max contents (0 for non-containers)
        energy: Hunger restored when eaten
        hydration: Thirst restored when drunk
    """
    kind: ItemType
    pos: GridPosition
    capacity: int = 0
    energy: int = 0
    hydration: int = 0
    items: List['Item'] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def create(
        cls,
        kind: ItemType,
        pos: GridPosition,
        catalog: Optional[Dict[str, ItemDefinition]] = None
    ) -> 'Item':
        """
        Create an item with stats from the catalog (or defaults).

        Containers with a stock list come filled: the stock variants are
        repeated in order until the container is at capacity.
        """
        definition = catalog.get(kind.variant) if catalog else None
        defaults = ITEM_DEFAULTS.get(kind.variant, {})

        if definition is not None:
            energy = definition.energy
            hydration = definition.hydration
            capacity = definition.capacity
            stock = definition.stock
        else:
            energy = defaults.get('energy', 0)
            hydration = defaults.get('hydration', 0)
            capacity = defaults.get('capacity', 0)
            stock = defaults.get('stock', [])

        if kind.category == ItemCategory.CONTAINER:
            if capacity <= 0:
                capacity = CONTAINER_CAPACITY_DEFAULT
        else:
            capacity = 0

        item = cls(kind=kind, pos=pos, capacity=capacity, energy=energy, hydration=hydration)

        if stock:
            for i in range(capacity):
                variant = stock[i % len(stock)]
                item.add_item(cls.create(ItemType.from_variant(variant), GridPosition(i, 0), catalog))

        return item

    @property
    def is_container(self) -> bool:
        return self.kind.category == ItemCategory.CONTAINER

    def get_name(self) -> str:
        """Human-readable description"""
        variant = self.kind.variant
        if variant == FoodType.ENERGY_BAR.value:
            return f"Your basic energy bar. Restores {self.energy} hunger"
        if variant == FoodType.MEAL_READY_TO_EAT.value:
            return f"An entire MRE. Restores {self.energy} hunger"
        if variant == DrinkType.WATER.value:
            return f"Your standard bottle of water. Restores {self.hydration} thirst"
        if variant == DrinkType.COFFEE.value:
            return (f"A cup of \"fresh\"-brewed coffee. Restores {self.hydration} thirst "
                    f"and {self.energy} energy")
        if variant == ContainerType.FRIDGE.value:
            return f"Keeps food and drink cold. Has {len(self.items)} items."
        if variant == ContainerType.LOCKER.value:
            return f"Storage container. Has {len(self.items)} items."
        return str(self.kind)

    def update(self, dt: float):
        for item in self.items:
            item.update(dt)

    def add_item(self, item: 'Item'):
        """
        Put an item into this container.

        Raises:
            ContainerFullError: if at capacity (non-containers have capacity 0)
        """
        if len(self.items) >= self.capacity:
            raise ContainerFullError(f"{self.kind} is at capacity ({self.capacity})")
        self.items.append(item)

    def find_item(self, item_types: List[ItemType]) -> Optional['Item']:
        """First content matching item_types"""
        for item in self.items:
            if item.kind in item_types:
                return item
        return None

    def take_item(self, item_types: List[ItemType]) -> Optional['Item']:
        """Remove and return the first content matching item_types"""
        item = self.find_item(item_types)
        if item is not None:
            self.remove_item(item.id)
        return item

    def remove_item(self, item_id: uuid.UUID):
        self.items = [item for item in self.items if item.id != item_id]

    def count(self, item_types: List[ItemType]) -> int:
        """Matching items, this one and contents included"""
        total = 1 if self.kind in item_types else 0
        for item in self.items:
            total += item.count(item_types)
        return total

    def to_dict(self) -> dict:
        return {
            'id': str(self.id),
            'kind': self.kind.to_dict(),
            'pos': self.pos.to_list(),
            'capacity': self.capacity,
            'energy': self.energy,
            'hydration': self.hydration,
            'items': [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Item':
        return cls(
            kind=ItemType.from_dict(data['kind']),
            pos=GridPosition.from_tuple(data['pos']),
            capacity=data.get('capacity', 0),
            energy=data.get('energy', 0),
            hydration=data.get('hydration', 0),
            items=[cls.from_dict(i) for i in data.get('items', [])],
            id=uuid.UUID(data['id'])
        )

    def __repr__(self) -> str:
        return f"[{self.id} ({self.kind})] {self.get_name()}"
