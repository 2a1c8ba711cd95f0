"""Base class for all player strategies."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from monopoly_sim.auction import AuctionState
    from monopoly_sim.dice import RandomStream
    from monopoly_sim.game import GameState
    from monopoly_sim.player import JailAction
    from monopoly_sim.properties import SaleChoice


class Strategy(ABC):
    """
    Decision policy for one seat.

    The engine only asks when the decision is legal: a purchase is offered
    only if the player can pay from cash on hand, and a jail action must be
    one of rules.get_legal_jail_actions.

    Attributes:
        player_id: The seat this strategy plays (0, 1, 2, ...).
        name: Profile name used in reports.
    """

    def __init__(self, player_id: int, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or self.__class__.__name__

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(player_id={self.player_id}, name='{self.name}')"

    @abstractmethod
    def should_buy_unowned_property(self, game: "GameState", rng: "RandomStream", position: int) -> bool:
        """Decide whether to buy the unowned property the player landed on."""

    @abstractmethod
    def bid_on_unowned_property(
        self, game: "GameState", rng: "RandomStream", position: int, auction: "AuctionState"
    ) -> int:
        """
        Bid on a property up for auction.

        Bids that don't beat this player's previous bid, or that exceed their
        cash on hand, are ignored. Return 0 to stay out.
        """

    @abstractmethod
    def decide_jail_action(self, game: "GameState", rng: "RandomStream") -> "JailAction":
        """Choose what to do at the start of a turn in jail."""

    @abstractmethod
    def choose_assets_for_forced_sale(
        self, game: "GameState", rng: "RandomStream", min_amount: int
    ) -> List["SaleChoice"]:
        """
        Pick assets to liquidate, in order, to raise at least min_amount.

        Only currently owned, currently sellable assets may be listed, at most
        MAX_SALE_CHOICES of them. Must not return an empty list while the
        player still has something sellable.
        """
