"""Shared test fixtures for the simulator tests."""

from collections import deque
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from monopoly_sim.config import GameConfig
from monopoly_sim.dice import RandomStream
from monopoly_sim.events import EventLog
from monopoly_sim.game import GameState
from monopoly_sim.player import JailAction
from monopoly_sim.properties import SaleChoice
from monopoly_sim.strategies.base import Strategy
from monopoly_sim.strategies.policies import BasicForcedSalePolicy


class ScriptedRandom(RandomStream):
    """
    Random stream that hands out queued values first and only falls back to
    the seeded generator once a queue runs dry.
    """

    def __init__(self, seed: int = 0):
        super().__init__(seed)
        self.double_rolls: deque = deque()
        self.single_rolls: deque = deque()
        self.floats: deque = deque()

    def queue_dice(self, *rolls: Tuple[int, int]) -> "ScriptedRandom":
        """Queue two-dice rolls as (die1, die2) pairs."""
        for d1, d2 in rolls:
            self.double_rolls.append((d1 + d2, d1 == d2))
        return self

    def queue_single(self, *rolls: int) -> "ScriptedRandom":
        self.single_rolls.extend(rolls)
        return self

    def queue_floats(self, *values: float) -> "ScriptedRandom":
        self.floats.extend(values)
        return self

    def double_dice_roll(self) -> Tuple[int, bool]:
        if self.double_rolls:
            return self.double_rolls.popleft()
        return super().double_dice_roll()

    def single_dice_roll(self) -> int:
        if self.single_rolls:
            return self.single_rolls.popleft()
        return super().single_dice_roll()

    def unit_float(self) -> float:
        if self.floats:
            return self.floats.popleft()
        return super().unit_float()


class ScriptedStrategy(Strategy):
    """
    Strategy whose decisions are set up by the test.

    Declines purchases and bids nothing unless told otherwise, rolls for
    doubles in jail, and sells assets the way the basic policy does.
    """

    def __init__(self, player_id: int):
        super().__init__(player_id, name="scripted")
        self.buy = False
        self.bids: Dict[int, int] = {}
        self.jail_actions: deque = deque()
        self.sale_lists: deque = deque()
        self.sale_requests: List[int] = []
        self._fallback_sale = BasicForcedSalePolicy()

    def should_buy_unowned_property(self, game, rng, position) -> bool:
        return self.buy

    def bid_on_unowned_property(self, game, rng, position, auction) -> int:
        return self.bids.get(position, 0)

    def decide_jail_action(self, game, rng) -> JailAction:
        if self.jail_actions:
            return self.jail_actions.popleft()
        return JailAction.ROLL_DOUBLES

    def choose_assets_for_forced_sale(self, game, rng, min_amount) -> List[SaleChoice]:
        self.sale_requests.append(min_amount)
        if self.sale_lists:
            return self.sale_lists.popleft()
        return self._fallback_sale.choose(game, rng, self.player_id, min_amount)


def give_property(game: GameState, player_id: int, *positions: int, mortgaged: bool = False) -> None:
    """Hand properties to a player without paying for them."""
    for position in positions:
        state = game.property_states[position]
        state.owner_id = player_id
        state.is_mortgaged = mortgaged


def total_cash(game: GameState) -> int:
    return sum(player.cash for player in game.players)


def event_types(events: EventLog) -> List:
    return [event.event_type for event in events.get_events()]


def make_test_game(
    player_count: int = 2,
    rng: Optional[ScriptedRandom] = None,
    **config_overrides,
) -> GameState:
    """Game with unshuffled decks, fixed seat order and a recording event log."""
    config = GameConfig(player_count=player_count, shuffle_player_order=False, **config_overrides)
    strategies = [ScriptedStrategy(player_id) for player_id in range(player_count)]
    return GameState(config, strategies, rng or ScriptedRandom(), EventLog())


@pytest.fixture
def rng():
    """Scripted random stream with a fixed seed."""
    return ScriptedRandom(seed=42)


@pytest.fixture
def game(rng):
    """Two-player game with scripted strategies."""
    return make_test_game(2, rng)


@pytest.fixture
def four_player_game(rng):
    """Four-player game with scripted strategies."""
    return make_test_game(4, rng)
