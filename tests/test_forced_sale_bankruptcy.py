"""
Tests for forced sales, bankruptcy and asset surrender.
"""

import pytest

from conftest import give_property, make_test_game
from monopoly_sim.cards import CardType, DeckType
from monopoly_sim.config import MortgageTransferPolicy
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.payments import force_sell_assets, player_pay_bank, player_pay_player
from monopoly_sim.properties import SaleAction, SaleChoice


def test_short_payer_hands_over_everything(game):
    """
    A player owing $50 rent with $30 and nothing to sell pays the $30 and is
    bankrupt. The owner receives exactly what was paid.
    """
    game.players[1].cash = 30

    paid = player_pay_player(game, 1, 0, 50, reason="rent")

    assert paid == 30
    assert game.players[0].cash == 1530
    assert game.players[1].cash == 0
    assert game.players[1].is_bankrupt
    assert game.players[1].bankrupt_round == game.round


def test_bankruptcy_event_records_creditor(game):
    game.round = 7
    game.players[1].cash = 30
    player_pay_player(game, 1, 0, 50)

    event = game.events.get_events(EventType.BANKRUPTCY)[0]
    assert event.player_id == 1
    assert event.details == {"round": 7, "creditor": 0, "owed": 50, "paid": 30}
    assert game.players[1].bankrupt_round == 7


def test_forced_sale_stops_once_debt_is_covered(game):
    """
    Rule: 'If you owe more money than you can pay ... you must sell or mortgage your property.'
    Only as much is sold as needed.
    """
    give_property(game, 1, 1, 3)
    game.players[1].cash = 10

    paid = player_pay_bank(game, 1, 40)

    assert paid == 40
    assert not game.players[1].is_bankrupt
    assert game.players[1].cash == 0
    assert game.get_owner(1) is None
    assert game.get_owner(3) == 1


def test_strategy_is_asked_again_for_remaining_shortfall(game):
    strategy = game.strategies[1]
    give_property(game, 1, 1, 3)
    game.players[1].cash = 0
    strategy.sale_lists.append([SaleChoice(1)])

    player_pay_bank(game, 1, 50)

    assert strategy.sale_requests == [50, 20]
    assert game.players[1].cash == 10
    assert game.get_owner(1) is None
    assert game.get_owner(3) is None


def test_mortgage_choice_keeps_the_property(game):
    strategy = game.strategies[1]
    give_property(game, 1, 39)
    game.players[1].cash = 0
    strategy.sale_lists.append([SaleChoice(39, SaleAction.MORTGAGE)])

    player_pay_bank(game, 1, 150)

    assert game.get_owner(39) == 1
    assert game.property_states[39].is_mortgaged
    assert game.players[1].cash == 50


def test_empty_choice_with_assets_left_is_an_error(game):
    give_property(game, 1, 1)
    game.players[1].cash = 0
    game.strategies[1].sale_lists.append([])

    with pytest.raises(RuleViolation):
        force_sell_assets(game, 1, 10)


def test_too_many_choices_is_an_error(game):
    give_property(game, 1, 1)
    game.players[1].cash = 0
    game.strategies[1].sale_lists.append([SaleChoice(1)] * 9)

    with pytest.raises(RuleViolation):
        force_sell_assets(game, 1, 10)


def test_selling_unowned_property_is_an_error(game):
    give_property(game, 1, 1)
    game.players[1].cash = 0
    game.strategies[1].sale_lists.append([SaleChoice(3)])

    with pytest.raises(RuleViolation):
        force_sell_assets(game, 1, 10)


def test_developed_colour_set_cannot_be_sold(game):
    """Rule: 'Unimproved properties ... may be sold' only once no buildings remain in the group."""
    give_property(game, 1, 1, 3)
    game.property_states[3].level = 1
    game.players[1].cash = 0
    game.strategies[1].sale_lists.append([SaleChoice(1)])

    with pytest.raises(RuleViolation):
        force_sell_assets(game, 1, 10)


def test_bankrupt_estate_goes_to_creditor_with_mortgages(game):
    """Rule: 'If you are bankrupt to another player, you must turn over ... all that you have of value.'"""
    give_property(game, 1, 39, mortgaged=True)
    game.players[1].cash = 0

    paid = player_pay_player(game, 1, 0, 100)

    assert paid == 0
    assert game.players[1].is_bankrupt
    assert game.get_owner(39) == 0
    assert game.property_states[39].is_mortgaged
    assert game.players[0].cash == 1500


def test_creditor_pays_interest_under_pay_interest_policy():
    game = make_test_game(2, mortgage_transfer_policy=MortgageTransferPolicy.PAY_INTEREST)
    give_property(game, 1, 39, mortgaged=True)
    game.players[1].cash = 0

    player_pay_player(game, 1, 0, 100)

    # 10% of Mayfair's $200 mortgage
    assert game.players[0].cash == 1480
    assert game.get_owner(39) == 0


def test_interest_that_bankrupts_creditor_sends_estate_to_bank():
    """
    The creditor can only pay $10 of Park Lane's $18 interest, so they go
    bankrupt, no interest is charged on Mayfair, and both titles return to
    the bank unmortgaged.
    """
    game = make_test_game(2, mortgage_transfer_policy=MortgageTransferPolicy.PAY_INTEREST)
    give_property(game, 1, 37, 39, mortgaged=True)
    game.players[0].cash = 10
    game.players[1].cash = 0

    player_pay_player(game, 1, 0, 100)

    assert game.players[0].is_bankrupt
    assert game.players[0].cash == 0
    for position in (37, 39):
        assert game.get_owner(position) is None
        assert not game.property_states[position].is_mortgaged

    interest = [
        e for e in game.events.get_events(EventType.TRANSFER)
        if e.details["reason"] == "mortgage_interest"
    ]
    assert [e.details["amount"] for e in interest] == [10]
    bank_received = sum(
        e.details["amount"] for e in game.events.get_events(EventType.TRANSFER)
        if e.details["destination"] is None
    )
    assert bank_received == 10
    assert sum(p.cash for p in game.players) == 10 - bank_received

    surrenders = game.events.get_events(EventType.ASSET_SURRENDER)
    assert [e.details["creditor"] for e in surrenders] == [0, None]
    assert surrenders[1].player_id == 0


def test_bankrupt_to_bank_returns_properties_unmortgaged(game):
    give_property(game, 1, 39, mortgaged=True)
    game.players[1].cash = 0

    player_pay_bank(game, 1, 100)

    assert game.players[1].is_bankrupt
    assert game.get_owner(39) is None
    assert not game.property_states[39].is_mortgaged


def test_bankrupt_jail_card_goes_to_creditor(game):
    game.community_chest_deck.give_jail_card(1)
    game.players[1].cash = 0

    player_pay_player(game, 1, 0, 100)

    assert game.community_chest_deck.jail_card_owner == 0


def test_bankrupt_jail_card_returns_to_back_of_deck(game):
    deck = game.deck(DeckType.CHANCE)
    deck.give_jail_card(1)
    game.players[1].cash = 0

    player_pay_bank(game, 1, 100)

    assert deck.jail_card_owner is None
    assert deck.upcoming()[-1].card_type == CardType.GET_OUT_OF_JAIL
    assert len(deck) == 16


def test_cannot_debit_bankrupt_player(game):
    game.players[1].cash = 0
    player_pay_bank(game, 1, 10)
    with pytest.raises(RuleViolation):
        player_pay_bank(game, 1, 10)


def test_forced_sale_then_bankruptcy_pays_what_was_raised(game):
    """
    A player with no cash owing $50 rent sells their only street for $30,
    hands over the $30 and is bankrupt.
    """
    give_property(game, 1, 1)
    game.players[1].cash = 0

    paid = player_pay_player(game, 1, 0, 50, reason="rent")

    assert paid == 30
    assert game.players[1].cash == 0
    assert game.players[1].is_bankrupt
    assert game.players[0].cash == 1530
    assert game.get_owner(1) is None
    assert game.properties_owned_by(1) == []
