"""
Turn state machine: a normal turn, a jail turn, and repeat turns on doubles.
"""

from typing import TYPE_CHECKING

from monopoly_sim.cards import DeckType
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.money import player_pay_bank_from_hand
from monopoly_sim.movement import (
    advance_by_spaces,
    advance_by_spaces_no_go,
    go_to_jail,
    release_from_jail,
    update_position,
)
from monopoly_sim.payments import player_pay_bank
from monopoly_sim.player import JailAction, TurnState
from monopoly_sim.rules import get_legal_jail_actions, on_board_space

if TYPE_CHECKING:
    from monopoly_sim.game import GameState


def normal_turn(game: "GameState", player_id: int) -> bool:
    """
    Roll, move and resolve the landing space.

    Returns True if the player rolled doubles and gets another turn.
    """
    player = game.players[player_id]
    roll, is_double = game.rng.double_dice_roll()
    game.log(EventType.DICE_ROLL, player_id, roll=roll, is_double=is_double)

    if is_double:
        consecutive_doubles = player.consecutive_doubles + 1
        if consecutive_doubles >= game.config.doubles_jail_threshold:
            # Straight to jail, the roll is not moved.
            go_to_jail(game, player_id)
            return False
        player.consecutive_doubles = consecutive_doubles
    else:
        player.consecutive_doubles = 0

    game.turn.movement_roll = roll
    advance_by_spaces(game, player_id, roll)
    on_board_space(game, player_id)

    return is_double and not player.in_jail and not player.is_bankrupt


def jail_turn(game: "GameState", player_id: int) -> None:
    """
    One turn in jail.

    Paying the fine or playing a card frees the player, who then moves by a
    single die. Rolling doubles frees them and moves them by that roll. A
    failed roll ends the turn in jail, unless it was the last allowed turn:
    then the fine is forced (which may bankrupt them) and the failed roll is
    moved.
    """
    player = game.players[player_id]
    strategy = game.strategies[player_id]
    config = game.config

    action = strategy.decide_jail_action(game, game.rng)
    if action not in get_legal_jail_actions(game, player_id):
        raise RuleViolation(f"Player {player_id} cannot take jail action {action}")

    if action == JailAction.PAY_FINE:
        player_pay_bank_from_hand(game, player_id, config.jail_fine, reason="jail_fine")
        game.log(EventType.JAIL_FINE_PAID, player_id, amount=config.jail_fine, forced=False)
        roll = game.rng.single_dice_roll()

    elif action in (JailAction.USE_CHANCE_CARD, JailAction.USE_COMMUNITY_CHEST_CARD):
        deck_type = DeckType.CHANCE if action == JailAction.USE_CHANCE_CARD else DeckType.COMMUNITY_CHEST
        game.deck(deck_type).return_jail_card()
        game.log(EventType.JAIL_CARD_USED, player_id, deck=deck_type.value)
        roll = game.rng.single_dice_roll()

    else:
        roll, is_double = game.rng.double_dice_roll()
        game.log(EventType.JAIL_ATTEMPT, player_id, roll=roll, is_double=is_double)
        if not is_double:
            new_position = player.position + 1
            if new_position < 0:
                update_position(game, player_id, new_position)
                return

            paid = player_pay_bank(game, player_id, config.jail_fine, reason="jail_fine")
            game.log(EventType.JAIL_FINE_PAID, player_id, amount=paid, forced=True)
            if player.is_bankrupt:
                game.log(EventType.JAIL_RELEASE, player_id, turns_in_jail=config.max_jail_turns, bankrupt=True)
                return

    release_from_jail(game, player_id)
    game.turn.movement_roll = roll
    advance_by_spaces_no_go(game, player_id, roll)
    on_board_space(game, player_id)


def do_single_turn(game: "GameState", player_id: int) -> bool:
    """Play one turn with fresh turn state. Returns True if another turn follows."""
    player = game.players[player_id]
    if player.is_bankrupt:
        raise RuleViolation(f"Bankrupt player {player_id} cannot take a turn")

    game.turn = TurnState()
    game.log(EventType.TURN_START, player_id, in_jail=player.in_jail)

    extra_turn = False
    if player.in_jail:
        jail_turn(game, player_id)
    else:
        extra_turn = normal_turn(game, player_id)

    if not game.turn.position_changed and not player.is_bankrupt:
        raise RuleViolation(f"Player {player_id} finished a turn without moving")
    return extra_turn


def do_turn(game: "GameState", player_id: int) -> None:
    """Play a player's turn, repeating while they keep rolling doubles."""
    while do_single_turn(game, player_id):
        pass
