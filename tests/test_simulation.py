"""
Tests for the batch runners.
"""

from monopoly_sim.config import GameConfig
from monopoly_sim.simulation import run_simulations, run_simulations_parallel


def test_run_simulations_counts_games():
    stats = run_simulations(GameConfig(player_count=2), ["greedy"], 5, max_rounds=40, seed=1)

    assert stats.game_count == 5
    assert sum(stats.game_length_histogram.values()) == 5
    assert 0 < stats.game_length_mean() <= 40
    assert sum(stats.win_count) >= 5
    assert stats.simulation_time_seconds > 0


def test_same_seed_same_results():
    config = GameConfig(player_count=3)
    a = run_simulations(config, ["random"], 4, max_rounds=50, seed=11)
    b = run_simulations(config, ["random"], 4, max_rounds=50, seed=11)

    assert a.board_space_counts == b.board_space_counts
    assert a.player_rank_sum == b.player_rank_sum
    assert a.final_net_worth_sum == b.final_net_worth_sum


def test_parallel_runs_every_game():
    config = GameConfig(player_count=4)
    stats = run_simulations_parallel(config, ["default"], 7, max_rounds=30, seed=3, workers=3)

    assert stats.game_count == 7
    assert stats.player_count == 4
    assert stats.wall_time_seconds > 0


def test_parallel_is_reproducible_for_seed_and_workers():
    config = GameConfig(player_count=2)
    a = run_simulations_parallel(config, ["greedy"], 6, max_rounds=30, seed=5, workers=2)
    b = run_simulations_parallel(config, ["greedy"], 6, max_rounds=30, seed=5, workers=2)

    assert a.board_space_counts == b.board_space_counts
    assert a.round_count == b.round_count


def test_single_worker_matches_sequential_run():
    config = GameConfig(player_count=2)
    a = run_simulations_parallel(config, ["greedy"], 3, max_rounds=20, seed=9, workers=1)
    b = run_simulations(config, ["greedy"], 3, max_rounds=20, seed=9)

    assert a.board_space_counts == b.board_space_counts


def test_zero_games():
    stats = run_simulations_parallel(GameConfig(player_count=2), ["default"], 0, seed=1, workers=4)
    assert stats.game_count == 0
