"""
Property ownership operations: buy, sell, mortgage, and rent calculation.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.money import bank_pay_player, player_pay_bank_from_hand
from monopoly_sim.spaces import PropertySpace, SpaceType, StreetSpace

if TYPE_CHECKING:
    from monopoly_sim.game import GameState

# Longest list of assets a strategy may hand back for one forced-sale round.
MAX_SALE_CHOICES = 8


class SaleAction(Enum):
    SELL = "sell"
    MORTGAGE = "mortgage"


@dataclass(frozen=True)
class SaleChoice:
    """One asset a player offers up to raise cash."""

    position: int
    action: SaleAction = SaleAction.SELL


def _property_space(game: "GameState", position: int) -> PropertySpace:
    space = game.board.get_property_space(position)
    if space is None:
        raise RuleViolation(f"Space {position} is not a property")
    return space


def _require_owner(game: "GameState", player_id: int, position: int) -> None:
    if not game.is_owner(player_id, position):
        raise RuleViolation(f"Player {player_id} does not own property {position}")


def is_property_sellable(game: "GameState", position: int) -> bool:
    """Unmortgaged, and no buildings on it or anywhere in its colour set."""
    state = game.property_states[position]
    if state.is_mortgaged or state.level > 0:
        return False
    space = game.board.get_space(position)
    if isinstance(space, StreetSpace):
        return not game.colour_set_has_buildings(space.colour_set)
    return True


def is_mortgageable(game: "GameState", position: int) -> bool:
    # Same conditions as a sale: a developed set must sell its buildings first.
    return is_property_sellable(game, position)


def can_sell(game: "GameState", player_id: int, choice: SaleChoice) -> bool:
    if not game.is_owner(player_id, choice.position):
        return False
    if choice.action == SaleAction.MORTGAGE:
        return is_mortgageable(game, choice.position)
    return is_property_sellable(game, choice.position)


def sellable_assets(game: "GameState", player_id: int) -> List[SaleChoice]:
    """Every property the player could sell to the bank right now."""
    return [
        SaleChoice(position)
        for position in game.properties_owned_by(player_id)
        if is_property_sellable(game, position)
    ]


def sell_property_to_bank(game: "GameState", player_id: int, position: int) -> int:
    """Sell a property back to the bank for half its listed price. Returns the cash raised."""
    _require_owner(game, player_id, position)
    if not is_property_sellable(game, position):
        raise RuleViolation(f"Property {position} cannot be sold (mortgaged or developed)")
    space = _property_space(game, position)

    game.property_states[position].reset()
    bank_pay_player(game, player_id, space.sell_value, reason="property_sale")
    game.log(EventType.PROPERTY_SOLD, player_id, position=position, amount=space.sell_value)
    return space.sell_value


def mortgage_property(game: "GameState", player_id: int, position: int) -> int:
    """Mortgage a property to the bank for half its listed price. Returns the cash raised."""
    _require_owner(game, player_id, position)
    if not is_mortgageable(game, position):
        raise RuleViolation(f"Property {position} cannot be mortgaged")
    space = _property_space(game, position)

    game.property_states[position].is_mortgaged = True
    bank_pay_player(game, player_id, space.mortgage_value, reason="mortgage")
    game.log(EventType.MORTGAGE, player_id, position=position, amount=space.mortgage_value)
    return space.mortgage_value


def mortgage_interest(game: "GameState", position: int) -> int:
    """Interest due on a mortgage, rounded up to the next whole pound."""
    space = _property_space(game, position)
    # Round away float noise first: 30 * 0.1 is 3.0000000000000004.
    return math.ceil(round(space.mortgage_value * game.config.mortgage_interest_rate, 9))


def unmortgage_cost(game: "GameState", position: int) -> int:
    return _property_space(game, position).mortgage_value + mortgage_interest(game, position)


def unmortgage_property(game: "GameState", player_id: int, position: int) -> int:
    """Lift a mortgage, paying the mortgage value plus interest from cash on hand."""
    _require_owner(game, player_id, position)
    state = game.property_states[position]
    if not state.is_mortgaged:
        raise RuleViolation(f"Property {position} is not mortgaged")
    cost = unmortgage_cost(game, position)
    if game.players[player_id].cash < cost:
        raise RuleViolation(f"Player {player_id} cannot afford to unmortgage {position}")

    player_pay_bank_from_hand(game, player_id, cost, reason="unmortgage")
    state.is_mortgaged = False
    game.log(EventType.UNMORTGAGE, player_id, position=position, amount=cost)
    return cost


def liquidate(game: "GameState", player_id: int, choice: SaleChoice) -> int:
    if choice.action == SaleAction.MORTGAGE:
        return mortgage_property(game, player_id, choice.position)
    return sell_property_to_bank(game, player_id, choice.position)


def can_buy_unowned_property(game: "GameState", player_id: int, position: int) -> bool:
    """Unowned and affordable from cash on hand."""
    if game.property_states[position].is_owned():
        return False
    return game.players[player_id].cash >= _property_space(game, position).price


def buy_unowned_property(
    game: "GameState", player_id: int, position: int, price: Optional[int] = None, reason: str = "purchase"
) -> None:
    """
    Transfer an unowned property to a player, paying from cash on hand.

    Args:
        price: Amount paid (defaults to the listed price; auctions pass the winning bid)
    """
    state = game.property_states[position]
    if state.is_owned():
        raise RuleViolation(f"Property {position} is already owned by player {state.owner_id}")
    if price is None:
        price = _property_space(game, position).price
    player_pay_bank_from_hand(game, player_id, price, reason=reason)
    state.owner_id = player_id
    game.log(EventType.PURCHASE, player_id, position=position, price=price, via=reason)


def maybe_buy_unowned_property(game: "GameState", player_id: int, position: int) -> bool:
    """Offer the property to the player who landed on it. Returns True if bought."""
    if not can_buy_unowned_property(game, player_id, position):
        return False
    strategy = game.strategies[player_id]
    if not strategy.should_buy_unowned_property(game, game.rng, position):
        return False
    buy_unowned_property(game, player_id, position)
    return True


def calculate_rent(game: "GameState", position: int) -> int:
    """
    Rent owed by a visitor landing on an owned property this turn.

    Utilities reached by card roll a fresh die and apply the card's
    multiplier instead of the move roll.
    """
    state = game.property_states[position]
    if not state.is_owned() or state.is_mortgaged:
        return 0
    space = _property_space(game, position)
    owner_id = state.owner_id
    config = game.config

    if isinstance(space, StreetSpace):
        rent = space.rent_for_level(state.level)
        if state.level == 0 and game.owns_entire_colour_set(owner_id, space.colour_set):
            rent *= config.full_set_rent_multiplier
        return rent

    if space.space_type == SpaceType.RAILWAY:
        count = game.owned_count(owner_id, SpaceType.RAILWAY)
        return config.railway_rents[count - 1] * game.turn.railway_rent_multiplier

    override = game.turn.utility_dice_multiplier_override
    if override:
        return game.rng.single_dice_roll() * override
    count = game.owned_count(owner_id, SpaceType.UTILITY)
    return game.turn.movement_roll * config.utility_dice_multipliers[count - 1]
