"""
Payments that may force a sale of assets or end in bankruptcy.

A player who cannot cover a debt from cash on hand is asked by their
strategy for assets to liquidate. If everything they can raise is still
short, they hand over what they have, are marked bankrupt at the current
round, and surrender the rest of their estate to whoever they owed.
"""

import logging
from typing import TYPE_CHECKING, Optional

from monopoly_sim.config import MortgageTransferPolicy
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.money import log_transfer, raw_credit, raw_debit_from_hand
from monopoly_sim.properties import (
    MAX_SALE_CHOICES,
    can_sell,
    liquidate,
    mortgage_interest,
    sellable_assets,
)

if TYPE_CHECKING:
    from monopoly_sim.game import GameState

logger = logging.getLogger(__name__)


def force_sell_assets(game: "GameState", player_id: int, min_amount: int) -> None:
    """
    Liquidate assets until the player has raised at least min_amount more cash,
    or has nothing left to sell.

    The strategy is asked repeatedly, each time for the remaining shortfall.
    Assets in a returned list are liquidated in order, stopping as soon as the
    target is reached.
    """
    if min_amount <= 0:
        raise RuleViolation(f"Forced sale needs a positive amount, got {min_amount}")
    player = game.players[player_id]
    strategy = game.strategies[player_id]
    cash_required = player.cash + min_amount

    while player.cash < cash_required:
        shortfall = cash_required - player.cash
        choices = strategy.choose_assets_for_forced_sale(game, game.rng, shortfall)
        if not choices:
            if sellable_assets(game, player_id):
                raise RuleViolation(
                    f"Strategy for player {player_id} chose nothing to sell while assets remain"
                )
            break
        if len(choices) > MAX_SALE_CHOICES:
            raise RuleViolation(f"Strategy returned {len(choices)} sale choices (max {MAX_SALE_CHOICES})")

        for choice in choices:
            if not can_sell(game, player_id, choice):
                raise RuleViolation(f"Player {player_id} cannot liquidate {choice}")
            liquidate(game, player_id, choice)
            if player.cash >= cash_required:
                break


def _raw_debit(game: "GameState", player_id: int, amount: int, creditor: Optional[int]) -> int:
    """
    Take up to amount from the player, forcing a sale if needed.

    Returns what the player actually paid. Paying less than asked means the
    player is now bankrupt with zero cash.
    """
    player = game.players[player_id]
    if player.is_bankrupt:
        raise RuleViolation(f"Cannot debit bankrupt player {player_id}")

    if player.cash < amount:
        force_sell_assets(game, player_id, amount - player.cash)
    payable = min(player.cash, amount)
    raw_debit_from_hand(game, player_id, payable)

    if payable < amount:
        player.bankrupt_round = game.round
        player.consecutive_doubles = 0
        logger.debug(
            "Player %d bankrupt in round %d owing %d (paid %d)", player_id, game.round, amount, payable
        )
        game.log(EventType.BANKRUPTCY, player_id, creditor=creditor, owed=amount, paid=payable)
    return payable


def player_pay_bank(game: "GameState", player_id: int, amount: int, reason: str = "bank") -> int:
    """
    Player pays the bank, selling assets if needed. Returns the amount paid.

    Check the player's bankruptcy state afterwards.
    """
    paid = _raw_debit(game, player_id, amount, creditor=None)
    log_transfer(game, player_id, None, paid, reason)
    if game.players[player_id].is_bankrupt:
        surrender_assets_to_bank(game, player_id)
    return paid


def player_pay_player(game: "GameState", src_id: int, dst_id: int, amount: int, reason: str = "player") -> int:
    """
    Player pays another player, selling assets if needed.

    Whatever the payer manages to raise goes to the payee. If the payer goes
    bankrupt, their remaining estate passes to the payee.
    """
    paid = _raw_debit(game, src_id, amount, creditor=dst_id)
    raw_credit(game, dst_id, paid)
    log_transfer(game, src_id, dst_id, paid, reason)
    if game.players[src_id].is_bankrupt:
        surrender_assets_to_player(game, src_id, dst_id)
    return paid


def _check_liquidated(game: "GameState", player_id: int) -> None:
    player = game.players[player_id]
    if player.cash != 0:
        raise RuleViolation(f"Bankrupt player {player_id} still holds {player.cash} cash")
    for position in game.properties_owned_by(player_id):
        if not game.property_states[position].is_mortgaged:
            raise RuleViolation(
                f"Bankrupt player {player_id} still owns unmortgaged property {position}"
            )


def surrender_assets_to_bank(game: "GameState", player_id: int) -> None:
    """Return a bankrupt player's mortgaged properties and jail cards to the bank."""
    _check_liquidated(game, player_id)
    positions = game.properties_owned_by(player_id)
    for position in positions:
        game.property_states[position].reset()

    jail_cards = game.jail_cards_owned_by(player_id)
    for deck_type in jail_cards:
        game.deck(deck_type).return_jail_card()

    game.log(
        EventType.ASSET_SURRENDER,
        player_id,
        creditor=None,
        properties=positions,
        jail_cards=[d.value for d in jail_cards],
    )


def surrender_assets_to_player(game: "GameState", src_id: int, dst_id: int) -> None:
    """
    Hand a bankrupt player's mortgaged properties and jail cards to a creditor.

    Properties keep their mortgage. Under the PAY_INTEREST policy the creditor
    then owes the bank the mortgage interest on each one.
    """
    _check_liquidated(game, src_id)
    positions = game.properties_owned_by(src_id)
    for position in positions:
        game.property_states[position].owner_id = dst_id

    jail_cards = game.jail_cards_owned_by(src_id)
    for deck_type in jail_cards:
        game.deck(deck_type).transfer_jail_card(dst_id)

    game.log(
        EventType.ASSET_SURRENDER,
        src_id,
        creditor=dst_id,
        properties=positions,
        jail_cards=[d.value for d in jail_cards],
    )

    if game.config.mortgage_transfer_policy == MortgageTransferPolicy.PAY_INTEREST:
        for position in positions:
            if game.players[dst_id].is_bankrupt:
                break
            player_pay_bank(game, dst_id, mortgage_interest(game, position), reason="mortgage_interest")
