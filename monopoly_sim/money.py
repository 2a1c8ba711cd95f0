"""
Cash primitives: credits and debits between the bank and players.

Every cash movement emits a TRANSFER event with a source and destination
(None means the bank), so the flow of money in a game can be audited.
Nothing here can trigger a forced sale; see payments for that.
"""

from typing import TYPE_CHECKING, Optional

from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation

if TYPE_CHECKING:
    from monopoly_sim.game import GameState


def raw_credit(game: "GameState", player_id: int, amount: int) -> None:
    player = game.players[player_id]
    if player.is_bankrupt:
        raise RuleViolation(f"Cannot credit bankrupt player {player_id}")
    if amount < 0:
        raise RuleViolation(f"Negative credit {amount}")
    if player.cash + amount > game.config.max_cash:
        raise RuleViolation(f"Cash overflow for player {player_id}")
    player.cash += amount


def raw_debit_from_hand(game: "GameState", player_id: int, amount: int) -> None:
    player = game.players[player_id]
    if player.is_bankrupt:
        raise RuleViolation(f"Cannot debit bankrupt player {player_id}")
    if amount < 0:
        raise RuleViolation(f"Negative debit {amount}")
    if amount > player.cash:
        raise RuleViolation(
            f"Cash underflow for player {player_id}: debit {amount} from {player.cash}"
        )
    player.cash -= amount


def log_transfer(
    game: "GameState",
    source: Optional[int],
    destination: Optional[int],
    amount: int,
    reason: str,
) -> None:
    player_id = source if source is not None else destination
    game.log(
        EventType.TRANSFER,
        player_id,
        source=source,
        destination=destination,
        amount=amount,
        reason=reason,
    )


def bank_pay_player(game: "GameState", player_id: int, amount: int, reason: str = "bank") -> None:
    """Unconditional payment from the bank."""
    raw_credit(game, player_id, amount)
    log_transfer(game, None, player_id, amount, reason)


def player_pay_bank_from_hand(game: "GameState", player_id: int, amount: int, reason: str = "bank") -> None:
    """
    Pay the bank from cash on hand only.

    Callers must already know the player can afford it; there is no forced
    sale on this path.
    """
    raw_debit_from_hand(game, player_id, amount)
    log_transfer(game, player_id, None, amount, reason)


def pay_go_salary(game: "GameState", player_id: int) -> None:
    bank_pay_player(game, player_id, game.config.go_salary, reason="go_salary")
    game.log(EventType.PASS_GO, player_id, amount=game.config.go_salary)
