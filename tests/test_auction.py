"""
Tests for purchases and auctions of unowned property.
"""

from monopoly_sim.auction import AuctionState, auction_property
from monopoly_sim.events import EventType
from monopoly_sim.rules import on_board_space


def test_lander_buys_at_listed_price(game):
    game.strategies[0].buy = True
    game.players[0].position = 39

    on_board_space(game, 0)

    assert game.get_owner(39) == 0
    assert game.players[0].cash == 1100
    purchase = game.events.get_events(EventType.PURCHASE)[0]
    assert purchase.details["price"] == 400
    assert purchase.details["via"] == "purchase"


def test_unaffordable_property_goes_to_auction(game):
    """Rule: 'If you do not wish to buy the property, the Banker sells it through an auction'"""
    game.strategies[0].buy = True
    game.players[0].cash = 100
    game.strategies[1].bids[39] = 250
    game.players[0].position = 39

    on_board_space(game, 0)

    assert game.get_owner(39) == 1
    assert game.players[1].cash == 1250
    assert game.players[0].cash == 100


def test_declined_property_is_auctioned_to_highest_bidder(four_player_game):
    game = four_player_game
    game.strategies[1].bids[39] = 150
    game.strategies[2].bids[39] = 300
    game.strategies[3].bids[39] = 200

    winner = auction_property(game, 39, 0)

    assert winner == 2
    assert game.get_owner(39) == 2
    assert game.players[2].cash == 1200
    end = game.events.get_events(EventType.AUCTION_END)[0]
    assert end.details["winning_bid"] == 300


def test_tied_top_bids_leave_property_unsold(game):
    """Two bids of $100 tie, so nobody wins and the property stays with the bank."""
    game.strategies[0].bids[39] = 100
    game.strategies[1].bids[39] = 100

    winner = auction_property(game, 39, 0)

    assert winner is None
    assert game.get_owner(39) is None
    assert game.players[0].cash == 1500
    assert game.players[1].cash == 1500


def test_no_bids_leaves_property_unsold(game):
    assert auction_property(game, 5, 0) is None
    assert game.get_owner(5) is None


def test_bid_above_cash_is_ignored(game):
    game.players[1].cash = 50
    game.strategies[1].bids[39] = 500
    game.strategies[0].bids[39] = 10

    winner = auction_property(game, 39, 0)

    assert winner == 0
    assert game.players[0].cash == 1490


def test_bankrupt_players_do_not_bid(four_player_game):
    game = four_player_game
    game.players[3].bankrupt_round = 0
    game.players[3].cash = 0

    auction_property(game, 39, 0)

    start = game.events.get_events(EventType.AUCTION_START)[0]
    assert start.details["bidders"] == [0, 1, 2]


def test_bidding_order_starts_with_lander(four_player_game):
    auction_property(four_player_game, 39, 2)

    start = four_player_game.events.get_events(EventType.AUCTION_START)[0]
    assert start.details["bidders"] == [2, 3, 0, 1]


def test_bid_must_beat_own_previous_bid():
    auction = AuctionState(39, [0, 1])
    assert auction.place_bid(0, 100, 1500)
    assert not auction.place_bid(0, 100, 1500)
    assert not auction.place_bid(0, 50, 1500)
    assert auction.place_bid(0, 120, 1500)
    assert auction.bid_of(0) == 120
    assert auction.winner() == 0
