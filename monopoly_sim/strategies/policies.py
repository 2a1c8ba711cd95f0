"""
Single-decision policies that a FlexibleStrategy is assembled from.

Each policy covers one of the four decisions a strategy makes. They hold
no per-game state, so one instance can serve several seats.
"""

from typing import TYPE_CHECKING, List

from monopoly_sim.cards import DeckType
from monopoly_sim.player import JailAction
from monopoly_sim.properties import (
    MAX_SALE_CHOICES,
    SaleAction,
    SaleChoice,
    is_mortgageable,
    is_property_sellable,
)
from monopoly_sim.rules import get_legal_jail_actions

if TYPE_CHECKING:
    from monopoly_sim.auction import AuctionState
    from monopoly_sim.dice import RandomStream
    from monopoly_sim.game import GameState


# === Buying ===


class AlwaysBuyPolicy:
    def should_buy(self, game: "GameState", rng: "RandomStream", player_id: int, position: int) -> bool:
        return True


class NeverBuyPolicy:
    def should_buy(self, game: "GameState", rng: "RandomStream", player_id: int, position: int) -> bool:
        return False


class RandomBuyPolicy:
    """Buy with a fixed probability."""

    def __init__(self, probability: float):
        self.probability = probability

    def should_buy(self, game: "GameState", rng: "RandomStream", player_id: int, position: int) -> bool:
        return rng.biased_bool(self.probability)


class CashReserveBuyPolicy:
    """Buy only if at least `reserve` cash would be left afterwards."""

    def __init__(self, reserve: int):
        self.reserve = reserve

    def should_buy(self, game: "GameState", rng: "RandomStream", player_id: int, position: int) -> bool:
        price = game.board.get_property_space(position).price
        return game.players[player_id].cash - price >= self.reserve


# === Bidding ===


class NoBidPolicy:
    def bid(
        self, game: "GameState", rng: "RandomStream", player_id: int, position: int, auction: "AuctionState"
    ) -> int:
        return 0


class RandomBidPolicy:
    """
    One sealed bid, uniformly distributed around the listed price.

    mean(bid) = price * (1 + centre)
    bid range = mean -/+ width * price / 2

    Only the first request gets a bid; later rounds return 0, which can never
    beat the bid already placed.
    """

    def __init__(self, centre: float = 0.0, width: float = 0.0):
        self.centre = centre
        self.width = width

    def bid(
        self, game: "GameState", rng: "RandomStream", player_id: int, position: int, auction: "AuctionState"
    ) -> int:
        if auction.bid_of(player_id) != 0:
            return 0
        price = game.board.get_property_space(position).price
        width_abs = price * self.width
        low = price * (1 + self.centre) - width_abs / 2
        return max(0, int(low + rng.unit_float() * width_abs))


# === Jail ===


def _first_owned_card(game: "GameState", player_id: int):
    if game.owns_jail_card(player_id, DeckType.CHANCE):
        return JailAction.USE_CHANCE_CARD
    if game.owns_jail_card(player_id, DeckType.COMMUNITY_CHEST):
        return JailAction.USE_COMMUNITY_CHEST_CARD
    return None


class TurnBasedJailPolicy:
    """
    Roll for doubles, but play a Get Out of Jail Free card (Chance first)
    from the given jail turn onwards. Turn 0 is the first turn in jail; a
    large number means never play the card.
    """

    def __init__(self, use_card_turn: int):
        self.use_card_turn = use_card_turn

    def decide(self, game: "GameState", rng: "RandomStream", player_id: int) -> JailAction:
        turn = game.players[player_id].turn_in_jail(game.config.max_jail_turns)
        card = _first_owned_card(game, player_id)
        if card is not None and turn >= self.use_card_turn:
            return card
        return JailAction.ROLL_DOUBLES


class RandomJailPolicy:
    """Even chance of playing a held card; otherwise roll."""

    def decide(self, game: "GameState", rng: "RandomStream", player_id: int) -> JailAction:
        card = _first_owned_card(game, player_id)
        if card is not None and rng.uniform_bool():
            return card
        return JailAction.ROLL_DOUBLES


class AlwaysPayJailPolicy:
    """Leave jail straight away: card if held, else the fine if affordable."""

    def decide(self, game: "GameState", rng: "RandomStream", player_id: int) -> JailAction:
        card = _first_owned_card(game, player_id)
        if card is not None:
            return card
        if JailAction.PAY_FINE in get_legal_jail_actions(game, player_id):
            return JailAction.PAY_FINE
        return JailAction.ROLL_DOUBLES


# === Forced sale ===


def _liquidation_order(game: "GameState", player_id: int) -> List[int]:
    # Streets come in ascending price order on the board.
    board = game.board
    return [
        position
        for position in board.streets + board.utilities + board.railways
        if game.is_owner(player_id, position)
    ]


class BasicForcedSalePolicy:
    """
    Sell outright: streets cheapest first, then utilities, then railways,
    until the sale value covers the shortfall.
    """

    action = SaleAction.SELL

    def _eligible(self, game: "GameState", position: int) -> bool:
        return is_property_sellable(game, position)

    def choose(self, game: "GameState", rng: "RandomStream", player_id: int, min_amount: int) -> List[SaleChoice]:
        choices: List[SaleChoice] = []
        remaining = min_amount
        for position in _liquidation_order(game, player_id):
            if not self._eligible(game, position):
                continue
            choices.append(SaleChoice(position, self.action))
            remaining -= game.board.get_property_space(position).sell_value
            if remaining <= 0 or len(choices) == MAX_SALE_CHOICES:
                break
        return choices


class MortgageFirstForcedSalePolicy(BasicForcedSalePolicy):
    """Raise cash by mortgaging, keeping the title deeds, in the same order."""

    action = SaleAction.MORTGAGE

    def _eligible(self, game: "GameState", position: int) -> bool:
        return is_mortgageable(game, position)
