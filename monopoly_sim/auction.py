"""
Round-robin auction for properties the lander declined to buy.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from monopoly_sim.events import EventType
from monopoly_sim.properties import buy_unowned_property

if TYPE_CHECKING:
    from monopoly_sim.game import GameState

logger = logging.getLogger(__name__)


class AuctionState:
    """
    Current bid of every bidder. A bid of 0 means no bid, since $0 cannot win.
    """

    def __init__(self, position: int, bidder_ids: List[int]):
        self.position = position
        self.bids: Dict[int, int] = {player_id: 0 for player_id in bidder_ids}

    def __repr__(self) -> str:
        return f"AuctionState(position={self.position}, bids={self.bids})"

    def bid_of(self, player_id: int) -> int:
        return self.bids.get(player_id, 0)

    @property
    def highest_bid(self) -> int:
        return max(self.bids.values(), default=0)

    def place_bid(self, player_id: int, amount: int, cash: int) -> bool:
        """
        Accept a bid only if it beats the player's own previous bid and they
        can pay it from cash on hand.
        """
        if amount <= self.bids[player_id] or amount > cash:
            return False
        self.bids[player_id] = amount
        return True

    def winner(self) -> Optional[int]:
        """The unique highest nonzero bidder, or None on a tie or no bids."""
        top = self.highest_bid
        if top == 0:
            return None
        leaders = [player_id for player_id, bid in self.bids.items() if bid == top]
        if len(leaders) != 1:
            return None
        return leaders[0]


def auction_property(game: "GameState", position: int, first_bidder: int) -> Optional[int]:
    """
    Auction an unowned property among all solvent players.

    Players are asked in seat order starting with first_bidder. Bidding goes
    round until a full round changes no bid. An unsold property stays with the
    bank. Returns the winner's id, or None.
    """
    count = len(game.players)
    order = [(first_bidder + offset) % count for offset in range(count)]
    bidders = [p for p in order if not game.players[p].is_bankrupt]
    auction = AuctionState(position, bidders)
    game.log(EventType.AUCTION_START, first_bidder, position=position, bidders=bidders)

    changed = True
    while changed:
        changed = False
        for player_id in bidders:
            strategy = game.strategies[player_id]
            amount = strategy.bid_on_unowned_property(game, game.rng, position, auction)
            if auction.place_bid(player_id, amount, game.players[player_id].cash):
                changed = True
                game.log(EventType.AUCTION_BID, player_id, position=position, amount=amount)

    winner = auction.winner()
    if winner is None:
        logger.debug("Property %d left unsold at auction (bids %s)", position, auction.bids)
    else:
        buy_unowned_property(game, winner, position, price=auction.bid_of(winner), reason="auction")
    game.log(
        EventType.AUCTION_END,
        winner,
        position=position,
        winning_bid=auction.highest_bid if winner is not None else 0,
        bids=dict(auction.bids),
    )
    return winner
