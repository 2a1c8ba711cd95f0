"""
The London board: 40 spaces, 22 streets in 8 colour sets, 4 railways, 2 utilities.
"""

from typing import Dict, List, Optional

from monopoly_sim.spaces import (
    PropertySpace,
    RailwaySpace,
    Space,
    SpaceType,
    StreetSpace,
    TaxSpace,
    UtilitySpace,
    simple_space,
)

BOARD_SIZE = 40

GO = 0
JUST_VISITING = 10
FREE_PARKING = 20
GO_TO_JAIL = 30

# Extra slot in per-space statistics for players sitting in jail.
IN_JAIL_SLOT = BOARD_SIZE

# Houses and hotels cost the same within a colour set.
BUILDING_VALUES = (50, 60, 100, 100, 150, 150, 200, 200)

COLOUR_SET_NAMES = (
    "brown",
    "light_blue",
    "pink",
    "orange",
    "red",
    "yellow",
    "green",
    "dark_blue",
)


def _street(name: str, position: int, price: int, colour_set: int, *rents: int) -> StreetSpace:
    return StreetSpace(name, position, price, colour_set, rents, BUILDING_VALUES[colour_set])


class Board:
    """The game board. Static data only; ownership lives in the game state."""

    def __init__(self, income_tax: int = 200, super_tax: int = 150):
        self.spaces: List[Space] = self._create_board(income_tax, super_tax)
        self.colour_sets: Dict[int, List[int]] = self._build_colour_sets()
        self.streets: List[int] = self._positions_of(SpaceType.STREET)
        self.railways: List[int] = self._positions_of(SpaceType.RAILWAY)
        self.utilities: List[int] = self._positions_of(SpaceType.UTILITY)
        self.properties: List[int] = [s.position for s in self.spaces if s.is_property]

    def _create_board(self, income_tax: int, super_tax: int) -> List[Space]:
        return [
            # Bottom row (0-10)
            simple_space("Go", 0, SpaceType.GO),
            _street("Old Kent Road", 1, 60, 0, 2, 10, 30, 90, 160, 250),
            simple_space("Community Chest", 2, SpaceType.COMMUNITY_CHEST),
            _street("Whitechapel Road", 3, 60, 0, 4, 20, 60, 180, 320, 450),
            TaxSpace("Income Tax", 4, income_tax),
            RailwaySpace("Kings Cross Station", 5),
            _street("The Angel Islington", 6, 100, 1, 6, 30, 90, 270, 400, 550),
            simple_space("Chance", 7, SpaceType.CHANCE),
            _street("Euston Road", 8, 100, 1, 6, 30, 90, 270, 400, 550),
            _street("Pentonville Road", 9, 120, 1, 8, 40, 100, 300, 450, 600),
            simple_space("Just Visiting", 10, SpaceType.JUST_VISITING),
            # Left side (11-20)
            _street("Pall Mall", 11, 140, 2, 10, 50, 150, 450, 625, 750),
            UtilitySpace("Electric Company", 12),
            _street("Whitehall", 13, 140, 2, 10, 50, 150, 450, 625, 750),
            _street("Northumberland Avenue", 14, 160, 2, 12, 60, 180, 500, 700, 900),
            RailwaySpace("Marylebone Station", 15),
            _street("Bow Street", 16, 180, 3, 14, 70, 200, 550, 750, 950),
            simple_space("Community Chest", 17, SpaceType.COMMUNITY_CHEST),
            _street("Marlborough Street", 18, 180, 3, 14, 70, 200, 550, 750, 950),
            _street("Vine Street", 19, 200, 3, 16, 80, 220, 600, 800, 1000),
            simple_space("Free Parking", 20, SpaceType.FREE_PARKING),
            # Top row (21-30)
            _street("Strand", 21, 220, 4, 18, 90, 250, 700, 875, 1050),
            simple_space("Chance", 22, SpaceType.CHANCE),
            _street("Fleet Street", 23, 220, 4, 18, 90, 250, 700, 875, 1050),
            _street("Trafalgar Square", 24, 240, 4, 20, 100, 300, 750, 925, 1100),
            RailwaySpace("Fenchurch St Station", 25),
            _street("Leicester Square", 26, 260, 5, 22, 110, 330, 800, 975, 1150),
            _street("Coventry Street", 27, 260, 5, 22, 110, 330, 800, 975, 1150),
            UtilitySpace("Water Works", 28),
            _street("Piccadilly", 29, 280, 5, 24, 120, 360, 850, 1025, 1200),
            simple_space("Go To Jail", 30, SpaceType.GO_TO_JAIL),
            # Right side (31-39)
            _street("Regent Street", 31, 300, 6, 26, 130, 390, 900, 1100, 1275),
            _street("Oxford Street", 32, 300, 6, 26, 130, 390, 900, 1100, 1275),
            simple_space("Community Chest", 33, SpaceType.COMMUNITY_CHEST),
            _street("Bond Street", 34, 320, 6, 28, 150, 450, 1000, 1200, 1400),
            RailwaySpace("Liverpool St Station", 35),
            simple_space("Chance", 36, SpaceType.CHANCE),
            _street("Park Lane", 37, 350, 7, 35, 175, 500, 1100, 1300, 1500),
            TaxSpace("Super Tax", 38, super_tax),
            _street("Mayfair", 39, 400, 7, 50, 200, 600, 1400, 1700, 2000),
        ]

    def _build_colour_sets(self) -> Dict[int, List[int]]:
        sets: Dict[int, List[int]] = {}
        for space in self.spaces:
            if isinstance(space, StreetSpace):
                sets.setdefault(space.colour_set, []).append(space.position)
        return sets

    def _positions_of(self, space_type: SpaceType) -> List[int]:
        return [s.position for s in self.spaces if s.space_type == space_type]

    def get_space(self, position: int) -> Space:
        return self.spaces[position]

    def get_property_space(self, position: int) -> Optional[PropertySpace]:
        """Get a property space, or None if the space cannot be owned."""
        space = self.spaces[position]
        return space if isinstance(space, PropertySpace) else None

    def get_colour_set(self, colour_set: int) -> List[int]:
        return self.colour_sets[colour_set]

    def space_name(self, position: int) -> str:
        if position == IN_JAIL_SLOT:
            return "In Jail"
        return self.spaces[position].name

    def next_railway(self, position: int) -> int:
        """First railway strictly ahead of the position, wrapping past Go."""
        return self._next_of(position, self.railways)

    def next_utility(self, position: int) -> int:
        """First utility strictly ahead of the position, wrapping past Go."""
        return self._next_of(position, self.utilities)

    @staticmethod
    def _next_of(position: int, targets: List[int]) -> int:
        for offset in range(1, BOARD_SIZE + 1):
            candidate = (position + offset) % BOARD_SIZE
            if candidate in targets:
                return candidate
        raise ValueError("board has no target spaces")


# Static data is shared by every game.
STANDARD_BOARD = Board()
