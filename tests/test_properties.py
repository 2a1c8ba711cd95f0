"""
Tests for mortgaging and lifting mortgages.
"""

import pytest

from conftest import give_property
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.properties import (
    is_property_sellable,
    mortgage_interest,
    mortgage_property,
    unmortgage_cost,
    unmortgage_property,
)


def test_mortgage_credits_half_the_price(game):
    give_property(game, 0, 1)

    raised = mortgage_property(game, 0, 1)

    assert raised == 30
    assert game.players[0].cash == 1530
    assert game.property_states[1].is_mortgaged
    assert not is_property_sellable(game, 1)


def test_unmortgage_cost_adds_interest_rounded_up(game):
    """Old Kent Road: $30 mortgage plus 10% interest."""
    assert mortgage_interest(game, 1) == 3
    assert unmortgage_cost(game, 1) == 33
    # Park Lane: 10% of $175 is $17.50, rounded up.
    assert unmortgage_cost(game, 37) == 175 + 18


def test_unmortgage_pays_from_cash_on_hand(game):
    give_property(game, 0, 1, mortgaged=True)

    paid = unmortgage_property(game, 0, 1)

    assert paid == 33
    assert game.players[0].cash == 1467
    assert not game.property_states[1].is_mortgaged
    assert game.get_owner(1) == 0

    event = game.events.get_events(EventType.UNMORTGAGE)[-1]
    assert event.player_id == 0
    assert event.details == {"position": 1, "amount": 33}
    transfer = game.events.get_events(EventType.TRANSFER)[-1]
    assert transfer.details["destination"] is None
    assert transfer.details["reason"] == "unmortgage"


def test_unmortgage_never_forces_a_sale(game):
    give_property(game, 0, 1, mortgaged=True)
    give_property(game, 0, 39)
    game.players[0].cash = 32

    with pytest.raises(RuleViolation):
        unmortgage_property(game, 0, 1)

    assert game.players[0].cash == 32
    assert game.property_states[1].is_mortgaged
    assert game.get_owner(39) == 0
    assert game.strategies[0].sale_requests == []


def test_unmortgage_requires_a_mortgaged_property_of_your_own(game):
    give_property(game, 0, 1)
    give_property(game, 1, 3, mortgaged=True)

    with pytest.raises(RuleViolation):
        unmortgage_property(game, 0, 1)
    with pytest.raises(RuleViolation):
        unmortgage_property(game, 0, 3)


def test_mortgage_then_unmortgage_costs_the_interest(game):
    give_property(game, 0, 39)

    mortgage_property(game, 0, 39)
    unmortgage_property(game, 0, 39)

    assert game.players[0].cash == 1500 - 20
    assert not game.property_states[39].is_mortgaged
