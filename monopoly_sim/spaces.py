"""
Board space definitions and types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class SpaceType(Enum):
    """Types of spaces on the board."""

    GO = "go"
    STREET = "street"
    RAILWAY = "railway"
    UTILITY = "utility"
    TAX = "tax"
    CHANCE = "chance"
    COMMUNITY_CHEST = "community_chest"
    JUST_VISITING = "just_visiting"
    GO_TO_JAIL = "go_to_jail"
    FREE_PARKING = "free_parking"


PROPERTY_TYPES = (SpaceType.STREET, SpaceType.RAILWAY, SpaceType.UTILITY)


@dataclass
class Space:
    """Base class for a board space."""

    name: str
    position: int
    space_type: SpaceType

    @property
    def is_property(self) -> bool:
        return self.space_type in PROPERTY_TYPES

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', position={self.position})"


@dataclass(repr=False)
class PropertySpace(Space):
    """A space that can be owned and mortgaged."""

    price: int

    def __init__(self, name: str, position: int, space_type: SpaceType, price: int):
        super().__init__(name, position, space_type)
        self.price = price

    @property
    def mortgage_value(self) -> int:
        return self.price // 2

    @property
    def sell_value(self) -> int:
        """Cash the bank pays when the property is sold back to it."""
        return self.price // 2


@dataclass(repr=False)
class StreetSpace(PropertySpace):
    """A street belonging to a colour set."""

    colour_set: int
    rents: Tuple[int, ...]
    building_value: int

    def __init__(
        self,
        name: str,
        position: int,
        price: int,
        colour_set: int,
        rents: Tuple[int, ...],
        building_value: int,
    ):
        super().__init__(name, position, SpaceType.STREET, price)
        if len(rents) != 6:
            raise ValueError(f"{name}: rent table needs 6 entries (base, 1-4 houses, hotel)")
        self.colour_set = colour_set
        self.rents = tuple(rents)
        self.building_value = building_value

    def rent_for_level(self, level: int) -> int:
        """Table rent for a development level (0 = none, 1-4 houses, 5 = hotel)."""
        return self.rents[level]


@dataclass(repr=False)
class RailwaySpace(PropertySpace):
    """A railway station."""

    def __init__(self, name: str, position: int, price: int = 200):
        super().__init__(name, position, SpaceType.RAILWAY, price)


@dataclass(repr=False)
class UtilitySpace(PropertySpace):
    """Electric Company or Water Works."""

    def __init__(self, name: str, position: int, price: int = 200):
        super().__init__(name, position, SpaceType.UTILITY, price)


@dataclass(repr=False)
class TaxSpace(Space):
    """A flat-fee tax space."""

    amount: int

    def __init__(self, name: str, position: int, amount: int):
        super().__init__(name, position, SpaceType.TAX)
        self.amount = amount


def simple_space(name: str, position: int, space_type: SpaceType) -> Space:
    """Create a space with no data of its own (Go, cards, jail, parking)."""
    return Space(name, position, space_type)
