"""
Player movement primitives.

None of these resolve the space the player ends up on; callers follow a
move with rules.on_board_space. Passing Go pays the salary here. Landing
exactly on Go does not count as passing it: the Go space handler pays
instead, so the salary is credited exactly once either way.
"""

from typing import TYPE_CHECKING

from monopoly_sim.board import BOARD_SIZE, GO, JUST_VISITING
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.money import pay_go_salary

if TYPE_CHECKING:
    from monopoly_sim.game import GameState


def update_position(game: "GameState", player_id: int, position: int) -> None:
    """Set a player's signed position and record the move."""
    player = game.players[player_id]
    if player.position == position:
        raise RuleViolation(f"Player {player_id} is already at position {position}")
    if position >= BOARD_SIZE:
        raise RuleViolation(f"Position {position} is off the board")

    player.position = position
    game.turn.position_changed = True
    game.log(EventType.MOVE, player_id, position=position, slot=game.board_slot(player_id))


def _require_on_board(game: "GameState", player_id: int) -> int:
    position = game.players[player_id].position
    if not 0 <= position < BOARD_SIZE:
        raise RuleViolation(f"Player {player_id} is not on a board space ({position})")
    return position


def advance_position_relative(game: "GameState", player_id: int, offset: int) -> bool:
    """Move forward by offset. Returns True if the move went strictly past Go."""
    if not 0 < offset < BOARD_SIZE:
        raise RuleViolation(f"Cannot advance by {offset} spaces")
    new_position = _require_on_board(game, player_id) + offset
    update_position(game, player_id, new_position % BOARD_SIZE)
    return new_position > BOARD_SIZE


def advance_position_absolute(game: "GameState", player_id: int, target: int) -> bool:
    """Move forward to target. Returns True if the move went past Go."""
    if not 0 <= target < BOARD_SIZE:
        raise RuleViolation(f"Invalid target space {target}")
    previous = _require_on_board(game, player_id)
    update_position(game, player_id, target)
    return target < previous


def advance_by_spaces(game: "GameState", player_id: int, offset: int) -> None:
    if advance_position_relative(game, player_id, offset):
        pay_go_salary(game, player_id)


def advance_by_spaces_no_go(game: "GameState", player_id: int, offset: int) -> None:
    """Move forward a distance that cannot reach Go (leaving jail)."""
    new_position = _require_on_board(game, player_id) + offset
    if new_position >= BOARD_SIZE:
        raise RuleViolation(f"Move of {offset} from {new_position - offset} would reach Go")
    advance_position_relative(game, player_id, offset)


def advance_to_space(game: "GameState", player_id: int, target: int) -> None:
    """Move forward to a space other than Go, paying the salary if passing Go."""
    if target == GO:
        raise RuleViolation("Use advance_to_go to move to Go")
    if advance_position_absolute(game, player_id, target):
        pay_go_salary(game, player_id)


def retreat_by_spaces(game: "GameState", player_id: int, offset: int) -> None:
    """Move backwards. Never wraps back past Go."""
    position = _require_on_board(game, player_id)
    if offset <= 0 or position <= offset:
        raise RuleViolation(f"Cannot retreat {offset} spaces from {position}")
    update_position(game, player_id, position - offset)


def advance_to_go(game: "GameState", player_id: int) -> None:
    # Salary comes from the Go space handler.
    update_position(game, player_id, GO)


def go_to_jail(game: "GameState", player_id: int) -> None:
    """Send the player straight to jail. Never passes Go."""
    player = game.players[player_id]
    player.consecutive_doubles = 0
    update_position(game, player_id, -game.config.max_jail_turns)
    game.log(EventType.GO_TO_JAIL, player_id)


def release_from_jail(game: "GameState", player_id: int) -> None:
    """Put a released player on Just Visiting so the escape roll starts from a real space."""
    player = game.players[player_id]
    if not player.in_jail:
        raise RuleViolation(f"Player {player_id} is not in jail")
    turns = player.turn_in_jail(game.config.max_jail_turns) + 1
    update_position(game, player_id, JUST_VISITING)
    game.log(EventType.JAIL_RELEASE, player_id, turns_in_jail=turns)
