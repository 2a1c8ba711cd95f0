"""
Board-space dispatch and card effects.

Landing on a space resolves it completely: rent, purchase or auction, tax,
card draw, or a trip to jail. Card moves land on a new space and resolve
that one too, so dispatch is re-entered. Depth is bounded: the deepest
chain is a Chance card sending the player back onto Community Chest, whose
card then advances them to Go.
"""

from typing import TYPE_CHECKING, List

from monopoly_sim.auction import auction_property
from monopoly_sim.cards import Card, CardType, DeckType
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.money import bank_pay_player, pay_go_salary
from monopoly_sim.movement import (
    advance_to_go,
    advance_to_space,
    go_to_jail,
    retreat_by_spaces,
)
from monopoly_sim.payments import player_pay_bank, player_pay_player
from monopoly_sim.player import JailAction
from monopoly_sim.properties import calculate_rent, maybe_buy_unowned_property
from monopoly_sim.spaces import SpaceType, TaxSpace

if TYPE_CHECKING:
    from monopoly_sim.game import GameState

MAX_DISPATCH_DEPTH = 3


def on_board_space(game: "GameState", player_id: int) -> None:
    """Resolve the space the player is standing on."""
    turn = game.turn
    turn.dispatch_depth += 1
    if turn.dispatch_depth > MAX_DISPATCH_DEPTH:
        raise RuleViolation(f"Board dispatch nested deeper than {MAX_DISPATCH_DEPTH}")
    _resolve_space(game, player_id)
    turn.dispatch_depth -= 1


def _resolve_space(game: "GameState", player_id: int) -> None:
    position = game.players[player_id].position
    space = game.board.get_space(position)
    game.log(EventType.LAND, player_id, position=position, space=space.name)

    space_type = space.space_type
    if space.is_property:
        on_property_space(game, player_id, position)
    elif space_type == SpaceType.TAX:
        on_tax_space(game, player_id, space)
    elif space_type == SpaceType.CHANCE:
        on_card_space(game, player_id, DeckType.CHANCE)
    elif space_type == SpaceType.COMMUNITY_CHEST:
        on_card_space(game, player_id, DeckType.COMMUNITY_CHEST)
    elif space_type == SpaceType.GO_TO_JAIL:
        go_to_jail(game, player_id)
    elif space_type == SpaceType.GO:
        pay_go_salary(game, player_id)
    # Free Parking and Just Visiting do nothing.


def on_property_space(game: "GameState", player_id: int, position: int) -> None:
    owner_id = game.get_owner(position)
    if owner_id is None:
        if not maybe_buy_unowned_property(game, player_id, position):
            auction_property(game, position, player_id)
    elif owner_id != player_id:
        pay_rent(game, player_id, position)


def pay_rent(game: "GameState", player_id: int, position: int) -> int:
    """Pay the owner whatever rent is due. Returns the amount actually paid."""
    owner_id = game.get_owner(position)
    rent = calculate_rent(game, position)
    if rent == 0:
        return 0
    paid = player_pay_player(game, player_id, owner_id, rent, reason="rent")
    game.log(
        EventType.RENT_PAYMENT,
        player_id,
        owner=owner_id,
        position=position,
        rent=rent,
        amount=paid,
    )
    return paid


def on_tax_space(game: "GameState", player_id: int, space: TaxSpace) -> None:
    paid = player_pay_bank(game, player_id, space.amount, reason="tax")
    game.log(EventType.TAX_PAYMENT, player_id, position=space.position, amount=paid)


def draw_card(game: "GameState", player_id: int, deck_type: DeckType) -> Card:
    card = game.deck(deck_type).draw()
    game.log(EventType.CARD_DRAW, player_id, deck=deck_type.value, card=card.description)
    return card


def on_card_space(game: "GameState", player_id: int, deck_type: DeckType) -> None:
    card = draw_card(game, player_id, deck_type)
    apply_card(game, player_id, card, deck_type)


def apply_card(game: "GameState", player_id: int, card: Card, deck_type: DeckType) -> None:
    """Carry out a drawn card."""
    card_type = card.card_type
    position = game.players[player_id].position

    if card_type == CardType.ADVANCE_TO_GO:
        advance_to_go(game, player_id)
        on_board_space(game, player_id)

    elif card_type == CardType.ADVANCE_TO:
        advance_to_space(game, player_id, card.target_position)
        on_board_space(game, player_id)

    elif card_type == CardType.ADVANCE_TO_NEXT_RAILWAY:
        game.turn.railway_rent_multiplier = game.config.railway_card_rent_multiplier
        advance_to_space(game, player_id, game.board.next_railway(position))
        on_board_space(game, player_id)

    elif card_type == CardType.ADVANCE_TO_NEXT_UTILITY:
        game.turn.utility_dice_multiplier_override = game.config.utility_card_dice_multiplier
        advance_to_space(game, player_id, game.board.next_utility(position))
        on_board_space(game, player_id)

    elif card_type == CardType.GO_BACK:
        retreat_by_spaces(game, player_id, card.value)
        on_board_space(game, player_id)

    elif card_type == CardType.GO_TO_JAIL:
        go_to_jail(game, player_id)

    elif card_type == CardType.GET_OUT_OF_JAIL:
        game.deck(deck_type).give_jail_card(player_id)
        game.log(EventType.JAIL_CARD_RECEIVED, player_id, deck=deck_type.value)

    elif card_type == CardType.CASH_AWARD:
        bank_pay_player(game, player_id, card.value, reason="card")
        game.log(EventType.CARD_CASH_AWARD, player_id, amount=card.value)

    elif card_type == CardType.CASH_FEE:
        _card_fee(game, player_id, card.value)

    elif card_type == CardType.PER_BUILDING_FEE:
        player = game.players[player_id]
        amount = card.value * player.houses_owned + card.value2 * player.hotels_owned
        _card_fee(game, player_id, amount)

    elif card_type == CardType.AWARD_FROM_PLAYERS:
        for other in game.players:
            # A surrendered estate can bankrupt the collector under PAY_INTEREST.
            if game.players[player_id].is_bankrupt:
                break
            if other.player_id != player_id and not other.is_bankrupt:
                player_pay_player(game, other.player_id, player_id, card.value, reason="card")

    elif card_type == CardType.FEE_TO_PLAYERS:
        for other in game.players:
            if other.player_id != player_id and not other.is_bankrupt:
                player_pay_player(game, player_id, other.player_id, card.value, reason="card")
                if game.players[player_id].is_bankrupt:
                    break

    else:
        raise RuleViolation(f"Unhandled card {card!r}")


def _card_fee(game: "GameState", player_id: int, amount: int) -> None:
    paid = player_pay_bank(game, player_id, amount, reason="card")
    game.log(EventType.CARD_CASH_FEE, player_id, amount=amount, paid=paid)


def get_legal_jail_actions(game: "GameState", player_id: int) -> List[JailAction]:
    """
    Jail actions available to a player.

    Rolling for doubles is always allowed. Paying up front needs the fine in
    cash on hand, and a card can only be used if the player holds it.
    """
    player = game.players[player_id]
    actions = [JailAction.ROLL_DOUBLES]
    if player.cash >= game.config.jail_fine:
        actions.append(JailAction.PAY_FINE)
    if game.owns_jail_card(player_id, DeckType.CHANCE):
        actions.append(JailAction.USE_CHANCE_CARD)
    if game.owns_jail_card(player_id, DeckType.COMMUNITY_CHEST):
        actions.append(JailAction.USE_COMMUNITY_CHEST_CARD)
    return actions
