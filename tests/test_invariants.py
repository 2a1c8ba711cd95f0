"""
Accounting and ownership invariants checked after every round of many
seeded random games.
"""

import pytest

from monopoly_sim.config import GameConfig, MortgageTransferPolicy
from monopoly_sim.dice import RandomStream
from monopoly_sim.events import EventLog, EventType
from monopoly_sim.game import new_game
from monopoly_sim.simulation import do_round, is_game_done
from monopoly_sim.strategies import build_strategies

LINEUPS = [
    ["default"],
    ["random"],
    ["greedy", "cautious", "random", "expected_value"],
    ["greedy", "never_buy"],
]


class BankLedger(EventLog):
    """Tracks the net cash the bank has paid out, from TRANSFER events."""

    def __init__(self):
        super().__init__()
        self.bank_net_paid = 0

    def record(self, event):
        if event.event_type != EventType.TRANSFER:
            return
        if event.details["source"] is None:
            self.bank_net_paid += event.details["amount"]
        elif event.details["destination"] is None:
            self.bank_net_paid -= event.details["amount"]


def check_invariants(game, ledger, starting_total):
    players = game.players
    assert sum(p.cash for p in players) == starting_total + ledger.bank_net_paid

    for player in players:
        assert player.cash >= 0
        assert -game.config.max_jail_turns <= player.position < 40
        if player.is_bankrupt:
            assert player.cash == 0
            assert game.properties_owned_by(player.player_id) == []
            assert game.jail_cards_owned_by(player.player_id) == []

    for state in game.property_states.values():
        assert not (state.is_mortgaged and state.level > 0)
        if state.owner_id is None:
            assert not state.is_mortgaged

    for positions in game.board.colour_sets.values():
        levels = [game.property_states[position].level for position in positions]
        assert max(levels) - min(levels) <= 1

    for deck in game.decks:
        assert len(deck) == 16
        if deck.jail_card_owner is not None:
            assert not players[deck.jail_card_owner].is_bankrupt


@pytest.mark.parametrize("lineup", LINEUPS)
@pytest.mark.parametrize("seed", range(5))
def test_invariants_hold_every_round(lineup, seed):
    player_count = len(lineup) if len(lineup) > 1 else 4
    config = GameConfig(player_count=player_count)
    ledger = BankLedger()
    game = new_game(config, build_strategies(lineup, player_count), RandomStream(seed), ledger)
    starting_total = config.starting_cash * player_count

    while not is_game_done(game, 150):
        do_round(game)
        check_invariants(game, ledger, starting_total)


@pytest.mark.parametrize("seed", range(3))
def test_invariants_with_interest_on_transferred_mortgages(seed):
    config = GameConfig(player_count=3, mortgage_transfer_policy=MortgageTransferPolicy.PAY_INTEREST)
    ledger = BankLedger()
    game = new_game(config, build_strategies(["cautious"], 3), RandomStream(seed), ledger)

    while not is_game_done(game, 150):
        do_round(game)
        check_invariants(game, ledger, config.starting_cash * 3)
