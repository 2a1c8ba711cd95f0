"""
Player, property and turn-scoped state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class JailAction(Enum):
    """What a jailed player does at the start of a jail turn."""

    PAY_FINE = "pay_fine"
    USE_CHANCE_CARD = "use_chance_card"
    USE_COMMUNITY_CHEST_CARD = "use_community_chest_card"
    ROLL_DOUBLES = "roll_doubles"


@dataclass
class PlayerState:
    """
    Mutable state of one player.

    Position is signed: 0..39 is a board index, a negative value means the
    player is in jail. Entering jail sets it to -max_jail_turns and each failed
    attempt to roll doubles moves it one step towards zero.
    """

    player_id: int
    cash: int
    position: int = 0
    bankrupt_round: Optional[int] = None
    consecutive_doubles: int = 0
    # Building counts only feed the per-building card fees.
    houses_owned: int = 0
    hotels_owned: int = 0

    @property
    def in_jail(self) -> bool:
        return self.position < 0

    @property
    def is_bankrupt(self) -> bool:
        return self.bankrupt_round is not None

    def turn_in_jail(self, max_jail_turns: int) -> int:
        """Zero-based index of the current jail turn."""
        return self.position + max_jail_turns


@dataclass
class PropertyState:
    """Ownership and development of one property."""

    owner_id: Optional[int] = None
    is_mortgaged: bool = False
    # 0 = undeveloped, 1-4 = houses, 5 = hotel. Railways and utilities stay at 0.
    level: int = 0

    def is_owned(self) -> bool:
        return self.owner_id is not None

    def reset(self) -> None:
        self.owner_id = None
        self.is_mortgaged = False
        self.level = 0


@dataclass
class TurnState:
    """State reset at the start of every single turn."""

    movement_roll: int = 0
    # Set to 2 by "advance to next railway".
    railway_rent_multiplier: int = 1
    # Set by "advance to next utility"; 0 means no override.
    utility_dice_multiplier_override: int = 0
    position_changed: bool = False
    dispatch_depth: int = 0
