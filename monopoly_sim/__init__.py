"""
Statistical Monopoly simulator.

Plays large batches of automated games under the standard UK rules and
reports aggregate statistics about them.
"""

from monopoly_sim.board import STANDARD_BOARD, Board
from monopoly_sim.config import GameConfig, MortgageTransferPolicy
from monopoly_sim.dice import RandomStream
from monopoly_sim.events import EventLog, EventType, GameEvent
from monopoly_sim.exceptions import ConfigurationError, MonopolyError, RuleViolation
from monopoly_sim.game import GameState, new_game
from monopoly_sim.player import JailAction
from monopoly_sim.simulation import (
    do_round,
    is_game_done,
    play_game,
    run_game,
    run_simulations,
    run_simulations_parallel,
)
from monopoly_sim.statistics import StatCounters, StatisticsRecorder
from monopoly_sim.strategies import Strategy, build_strategies, create_strategy

__version__ = "0.1.0"

__all__ = [
    "Board",
    "STANDARD_BOARD",
    "GameConfig",
    "MortgageTransferPolicy",
    "RandomStream",
    "EventLog",
    "EventType",
    "GameEvent",
    "MonopolyError",
    "RuleViolation",
    "ConfigurationError",
    "GameState",
    "new_game",
    "JailAction",
    "do_round",
    "is_game_done",
    "play_game",
    "run_game",
    "run_simulations",
    "run_simulations_parallel",
    "StatCounters",
    "StatisticsRecorder",
    "Strategy",
    "build_strategies",
    "create_strategy",
]
