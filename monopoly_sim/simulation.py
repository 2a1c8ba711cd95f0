"""
Game loop and batch runner.

A batch plays many independent games and folds each one into a shared set
of counters. With several workers every worker owns its random stream,
strategies and recorder; results are only combined once all workers finish.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence

from monopoly_sim.config import GameConfig
from monopoly_sim.dice import RandomStream
from monopoly_sim.events import EventLog, EventType
from monopoly_sim.game import GameState, new_game
from monopoly_sim.statistics import StatCounters, StatisticsRecorder, player_net_worths, rank_players
from monopoly_sim.strategies import build_strategies
from monopoly_sim.turns import do_turn

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 100


def do_round(game: GameState, player_order: Optional[List[int]] = None) -> None:
    """
    Give every solvent player one turn.

    The order is reshuffled each round unless the config turns that off or an
    explicit order is given.
    """
    if player_order is None:
        if game.config.shuffle_player_order:
            player_order = game.rng.permutation(len(game.players))
        else:
            player_order = list(game.config.player_ids)

    game.log(EventType.ROUND_START, order=player_order)
    for player_id in player_order:
        if not game.players[player_id].is_bankrupt:
            do_turn(game, player_id)
    game.round += 1


def is_game_done(game: GameState, max_rounds: int) -> bool:
    """Done once ended, at the round limit, or when at most one player is still solvent."""
    return (
        game.game_over
        or game.round >= max_rounds
        or game.bankrupt_count() + 1 >= len(game.players)
    )


def play_game(game: GameState, max_rounds: int = DEFAULT_MAX_ROUNDS) -> GameState:
    """Play rounds until the game is done, then report the final standings."""
    if game.game_over:
        return game
    while not is_game_done(game, max_rounds):
        do_round(game)

    game.game_over = True
    game.log(
        EventType.GAME_END,
        rounds=game.round,
        ranks=rank_players(game),
        net_worths=player_net_worths(game),
    )
    return game


def run_game(
    config: GameConfig,
    strategy_names: Sequence[str],
    rng: RandomStream,
    events: Optional[EventLog] = None,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> GameState:
    """Build and play one complete game."""
    strategies = build_strategies(strategy_names, config.player_count)
    game = new_game(config, strategies, rng, events)
    return play_game(game, max_rounds)


def run_simulations(
    config: GameConfig,
    strategy_names: Sequence[str],
    game_count: int,
    max_rounds: Optional[int] = None,
    seed: Optional[int] = None,
) -> StatCounters:
    """
    Play game_count games on one random stream and return their statistics.

    Strategies are rebuilt for every game so no decision state leaks between
    games.
    """
    max_rounds = max_rounds if max_rounds is not None else DEFAULT_MAX_ROUNDS
    rng = RandomStream(seed)
    recorder = StatisticsRecorder(config.player_count)

    start = time.perf_counter()
    for _ in range(game_count):
        run_game(config, strategy_names, rng, recorder, max_rounds)
    elapsed = time.perf_counter() - start

    stats = recorder.counters
    stats.simulation_time_seconds = elapsed
    stats.wall_time_seconds = elapsed
    return stats


def _split_games(game_count: int, workers: int) -> List[int]:
    base, remainder = divmod(game_count, workers)
    return [base + (1 if index < remainder else 0) for index in range(workers)]


def run_simulations_parallel(
    config: GameConfig,
    strategy_names: Sequence[str],
    game_count: int,
    max_rounds: Optional[int] = None,
    seed: Optional[int] = None,
    workers: Optional[int] = None,
) -> StatCounters:
    """
    Split the games across a thread pool and sum the per-worker statistics.

    Worker seeds are drawn from a parent stream seeded with `seed`, so a seed
    and worker count reproduce the same totals.
    """
    workers = max(1, min(workers or 1, game_count or 1))
    if workers == 1:
        return run_simulations(config, strategy_names, game_count, max_rounds, seed)

    parent = RandomStream(seed)
    shares = [(share, parent.spawn_seed()) for share in _split_games(game_count, workers)]
    logger.info("Running %d games on %d workers", game_count, workers)

    results: List[StatCounters] = []
    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(run_simulations, config, strategy_names, share, max_rounds, worker_seed): index
            for index, (share, worker_seed) in enumerate(shares)
        }
        for future in as_completed(futures):
            stats = future.result()
            results.append(stats)
            logger.info(
                "Worker %d finished %d games (%d/%d workers done)",
                futures[future],
                stats.game_count,
                len(results),
                workers,
            )

    total = sum(results)
    total.wall_time_seconds = time.perf_counter() - start
    return total
