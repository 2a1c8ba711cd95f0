"""
Tabular and text views of batch statistics.
"""

from typing import List, Optional

import pandas as pd

from monopoly_sim.board import STANDARD_BOARD, Board
from monopoly_sim.statistics import BOARD_SLOTS, StatCounters


def summary_frame(stats: StatCounters, strategy_names: Optional[List[str]] = None) -> pd.DataFrame:
    """
    One row per seat with rank, win, net worth, rent, card and jail figures.

    Args:
        stats: Counters from a simulation batch
        strategy_names: Optional profile name per seat for the `strategy` column
    """
    rows = []
    for player_id in range(stats.player_count):
        rows.append(
            {
                "player": player_id,
                "strategy": strategy_names[player_id] if strategy_names else "",
                "mean_rank": stats.player_rank_mean(player_id),
                "win_rate": stats.win_rate(player_id),
                "bankruptcy_rate": stats.bankruptcy_rate(player_id),
                "mean_net_worth": stats.final_net_worth_mean(player_id),
                "rent_paid_per_game": stats.rent_paid_mean_per_game(player_id),
                "rent_paid_per_payment": stats.rent_paid_mean_per_payment(player_id),
                "rent_received_per_game": stats.rent_received_mean_per_game(player_id),
                "rent_received_per_payment": stats.rent_received_mean_per_payment(player_id),
                "cards_per_game": stats.cards_drawn_mean_per_game(player_id),
                "card_awards_per_game": stats.card_cash_award_mean_per_game(player_id),
                "card_fees_per_game": stats.card_cash_fee_mean_per_game(player_id),
                "go_salary_per_game": stats.go_salary_mean_per_game(player_id),
                "jailed_per_game": stats.sent_to_jail_mean_per_game(player_id),
            }
        )
    return pd.DataFrame(rows).set_index("player")


def board_frame(stats: StatCounters, board: Board = STANDARD_BOARD) -> pd.DataFrame:
    """Landing frequency of every board slot, most visited first."""
    df = pd.DataFrame(
        {
            "slot": range(BOARD_SLOTS),
            "space": [board.space_name(slot) for slot in range(BOARD_SLOTS)],
            "count": stats.board_space_counts,
            "frequency": [stats.board_space_relative_freq(slot) for slot in range(BOARD_SLOTS)],
        }
    )
    return df.sort_values("frequency", ascending=False, kind="stable").reset_index(drop=True)


def format_report(stats: StatCounters, strategy_names: Optional[List[str]] = None) -> str:
    """Render the batch statistics as plain text."""
    lines = [
        "=" * 60,
        "MONOPOLY SIMULATION REPORT",
        "=" * 60,
        f"Games played:        {stats.game_count}",
        f"Players per game:    {stats.player_count}",
        f"Mean game length:    {stats.game_length_mean():.2f} rounds",
        f"Total turns:         {stats.total_turns}",
        f"Mean jail duration:  {stats.jail_duration_mean():.2f} turns",
        f"Throughput:          {stats.games_per_second():.1f} games/sec",
        "",
        "PLAYERS",
        "-" * 60,
    ]
    with pd.option_context("display.width", 200, "display.max_columns", None, "display.float_format", "{:.3f}".format):
        lines.append(summary_frame(stats, strategy_names).to_string())
        lines += ["", "BOARD SPACES", "-" * 60]
        lines.append(board_frame(stats).to_string(index=False))

    if stats.game_length_histogram:
        lines += ["", "GAME LENGTHS", "-" * 60]
        lengths = pd.Series(list(stats.game_length_histogram.elements()), name="rounds")
        lines.append(lengths.describe().to_string())

    return "\n".join(lines)
