"""
Game rules configuration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from monopoly_sim.exceptions import ConfigurationError


class MortgageTransferPolicy(Enum):
    """What happens to mortgaged properties handed to a creditor on bankruptcy."""

    # Property changes hands still mortgaged, nothing is paid.
    KEEP_MORTGAGED = "keep_mortgaged"
    # Receiving player pays the mortgage interest to the bank for each property.
    PAY_INTEREST = "pay_interest"


MIN_PLAYERS = 2
MAX_PLAYERS = 8


@dataclass(frozen=True)
class GameConfig:
    """Rules constants for a simulated game. Never mutated during play."""

    starting_cash: int = 1500
    go_salary: int = 200
    jail_fine: int = 50
    max_jail_turns: int = 3
    doubles_jail_threshold: int = 3

    player_count: int = 4

    income_tax: int = 200
    super_tax: int = 150

    full_set_rent_multiplier: int = 2
    railway_rents: Tuple[int, ...] = (25, 50, 100, 200)
    utility_dice_multipliers: Tuple[int, ...] = (4, 10)
    railway_card_rent_multiplier: int = 2
    utility_card_dice_multiplier: int = 10

    mortgage_interest_rate: float = 0.10
    mortgage_transfer_policy: MortgageTransferPolicy = MortgageTransferPolicy.KEEP_MORTGAGED

    shuffle_player_order: bool = True

    # Cash is an unsigned 32-bit quantity in the accounting rules.
    max_cash: int = 2**32 - 1

    def __post_init__(self) -> None:
        if not MIN_PLAYERS <= self.player_count <= MAX_PLAYERS:
            raise ConfigurationError(
                f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {self.player_count}"
            )
        if self.max_jail_turns < 1:
            raise ConfigurationError("max_jail_turns must be positive")
        if self.doubles_jail_threshold < 1:
            raise ConfigurationError("doubles_jail_threshold must be positive")
        for name in ("starting_cash", "go_salary", "jail_fine", "income_tax", "super_tax"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative")
        if self.starting_cash > self.max_cash:
            raise ConfigurationError("starting_cash exceeds max_cash")
        if len(self.railway_rents) != 4:
            raise ConfigurationError("railway_rents needs one entry per railway")
        if len(self.utility_dice_multipliers) != 2:
            raise ConfigurationError("utility_dice_multipliers needs one entry per utility")
        if not 0 <= self.mortgage_interest_rate < 1:
            raise ConfigurationError("mortgage_interest_rate must be in [0, 1)")

    @property
    def player_ids(self) -> range:
        return range(self.player_count)
