"""
Tests for statistics counters, rankings and the recording event sink.
"""

import pytest

from conftest import give_property, make_test_game
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.statistics import (
    BOARD_SLOTS,
    StatCounters,
    StatisticsRecorder,
    player_net_worths,
    rank_players,
)
from monopoly_sim.turns import do_single_turn


def test_counters_sized_per_player_and_board():
    stats = StatCounters(3)
    assert len(stats.turn_count) == 3
    assert len(stats.board_space_counts) == BOARD_SLOTS
    assert len(stats.property_purchase_count) == 40


def test_counters_add_elementwise():
    a = StatCounters(2)
    a.game_count = 3
    a.win_count = [2, 1]
    a.game_length_histogram[10] = 3
    a.wall_time_seconds = 1.5
    b = StatCounters(2)
    b.game_count = 1
    b.win_count = [0, 1]
    b.game_length_histogram[10] = 1
    b.wall_time_seconds = 2.0

    total = sum([a, b])

    assert total.game_count == 4
    assert total.win_count == [2, 2]
    assert total.game_length_histogram[10] == 4
    assert total.wall_time_seconds == 2.0


def test_cannot_add_counters_for_different_player_counts():
    with pytest.raises(ValueError):
        StatCounters(2) + StatCounters(3)


def test_derived_means_handle_empty_counters():
    stats = StatCounters(2)
    assert stats.game_length_mean() == 0.0
    assert stats.rent_paid_mean_per_payment(0) == 0.0
    assert stats.games_per_second() == 0.0


def test_derived_means():
    stats = StatCounters(2)
    stats.game_count = 4
    stats.round_count = 200
    stats.win_count = [3, 1]
    stats.rent_paid_total = [400, 0]
    stats.rent_paid_count = [8, 0]

    assert stats.game_length_mean() == 50
    assert stats.win_rate(0) == 0.75
    assert stats.rent_paid_mean_per_game(0) == 100
    assert stats.rent_paid_mean_per_payment(0) == 50


def test_net_worth_counts_cash_property_and_mortgages(game):
    give_property(game, 0, 39)
    give_property(game, 1, 37, mortgaged=True)
    game.property_states[39].level = 2

    net_worths = player_net_worths(game)

    # Mayfair $400 plus two $200 houses; Park Lane mortgaged for $175.
    assert net_worths == [1500 + 400 + 400, 1500 + 175]


def test_bankrupt_player_with_assets_is_an_error(game):
    game.players[1].bankrupt_round = 0
    with pytest.raises(RuleViolation):
        player_net_worths(game)


def test_ranking_by_net_worth_with_ties(four_player_game):
    game = four_player_game
    game.players[0].cash = 1000
    game.players[1].cash = 2000
    game.players[2].cash = 2000
    game.players[3].cash = 500

    assert rank_players(game) == [1, 0, 0, 2]


def test_bankrupt_players_rank_below_solvent_ones(four_player_game):
    game = four_player_game
    for player_id, round_number in ((0, 3), (1, 8)):
        game.players[player_id].cash = 0
        game.players[player_id].bankrupt_round = round_number
    game.players[2].cash = 10

    # Later bankruptcy outranks earlier bankruptcy.
    assert rank_players(game) == [3, 2, 1, 0]


def test_recorder_counts_turns_moves_and_rent(rng):
    game = make_test_game(2, rng)
    recorder = StatisticsRecorder(2)
    game.events = recorder
    give_property(game, 1, 9)
    rng.queue_dice((4, 5))

    do_single_turn(game, 0)

    c = recorder.counters
    assert c.turn_count == [1, 0]
    assert c.board_space_counts[9] == 1
    assert c.position_count == 1
    assert c.rent_paid_total == [8, 0]
    assert c.rent_received_total == [0, 8]
    assert recorder.get_events() == []


def test_recorder_keeps_events_on_request():
    recorder = StatisticsRecorder(2, keep_events=True)
    recorder.log(EventType.TURN_START, 0, round=0)
    assert len(recorder.get_events()) == 1
    assert recorder.counters.turn_count == [1, 0]


def test_recorder_folds_game_end():
    recorder = StatisticsRecorder(2)
    recorder.log(EventType.GAME_END, rounds=12, ranks=[1, 0], net_worths=[900, 2100], round=12)

    c = recorder.counters
    assert c.game_count == 1
    assert c.round_count == 12
    assert c.win_count == [0, 1]
    assert c.player_rank_sum == [1, 0]
    assert c.final_net_worth_sum == [900, 2100]
