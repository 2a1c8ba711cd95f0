"""A strategy assembled from one policy per decision."""

from typing import TYPE_CHECKING, List, Optional

from monopoly_sim.player import JailAction
from monopoly_sim.properties import SaleChoice
from monopoly_sim.strategies.base import Strategy

if TYPE_CHECKING:
    from monopoly_sim.auction import AuctionState
    from monopoly_sim.dice import RandomStream
    from monopoly_sim.game import GameState


class FlexibleStrategy(Strategy):
    """
    Delegates each decision to a policy object.

    A buy policy has should_buy(game, rng, player_id, position), a bid
    policy bid(game, rng, player_id, position, auction), a jail policy
    decide(game, rng, player_id) and a forced-sale policy
    choose(game, rng, player_id, min_amount).
    """

    def __init__(self, player_id: int, buy, bid, jail, forced_sale, name: Optional[str] = None):
        super().__init__(player_id, name)
        self.buy_policy = buy
        self.bid_policy = bid
        self.jail_policy = jail
        self.forced_sale_policy = forced_sale

    def should_buy_unowned_property(self, game: "GameState", rng: "RandomStream", position: int) -> bool:
        return self.buy_policy.should_buy(game, rng, self.player_id, position)

    def bid_on_unowned_property(
        self, game: "GameState", rng: "RandomStream", position: int, auction: "AuctionState"
    ) -> int:
        return self.bid_policy.bid(game, rng, self.player_id, position, auction)

    def decide_jail_action(self, game: "GameState", rng: "RandomStream") -> JailAction:
        return self.jail_policy.decide(game, rng, self.player_id)

    def choose_assets_for_forced_sale(
        self, game: "GameState", rng: "RandomStream", min_amount: int
    ) -> List[SaleChoice]:
        return self.forced_sale_policy.choose(game, rng, self.player_id, min_amount)
