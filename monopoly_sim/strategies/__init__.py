"""
Strategy profiles.

A profile name maps to a factory building a strategy for one seat.
"""

from typing import Callable, Dict, List, Sequence

from monopoly_sim.exceptions import ConfigurationError
from monopoly_sim.strategies.base import Strategy
from monopoly_sim.strategies.composite import FlexibleStrategy
from monopoly_sim.strategies.expected_value import ExpectedValueJailPolicy
from monopoly_sim.strategies.policies import (
    AlwaysBuyPolicy,
    AlwaysPayJailPolicy,
    BasicForcedSalePolicy,
    CashReserveBuyPolicy,
    MortgageFirstForcedSalePolicy,
    NeverBuyPolicy,
    NoBidPolicy,
    RandomBidPolicy,
    RandomBuyPolicy,
    RandomJailPolicy,
    TurnBasedJailPolicy,
)

NEVER = 999

# Seat-dependent bid centres for the default lineup.
DEFAULT_BID_CENTRES = (0.0, -0.25, 0.25, -0.5)


def _default(player_id: int) -> Strategy:
    centre = DEFAULT_BID_CENTRES[player_id % len(DEFAULT_BID_CENTRES)]
    return FlexibleStrategy(
        player_id,
        buy=RandomBuyPolicy(0.0),
        bid=RandomBidPolicy(centre, 0.0),
        jail=TurnBasedJailPolicy(NEVER),
        forced_sale=BasicForcedSalePolicy(),
        name="default",
    )


def _random(player_id: int) -> Strategy:
    return FlexibleStrategy(
        player_id,
        buy=RandomBuyPolicy(0.5),
        bid=RandomBidPolicy(0.0, 1.0),
        jail=RandomJailPolicy(),
        forced_sale=BasicForcedSalePolicy(),
        name="random",
    )


def _greedy(player_id: int) -> Strategy:
    return FlexibleStrategy(
        player_id,
        buy=AlwaysBuyPolicy(),
        bid=RandomBidPolicy(0.0, 0.5),
        jail=AlwaysPayJailPolicy(),
        forced_sale=BasicForcedSalePolicy(),
        name="greedy",
    )


def _cautious(player_id: int) -> Strategy:
    return FlexibleStrategy(
        player_id,
        buy=CashReserveBuyPolicy(500),
        bid=RandomBidPolicy(-0.25, 0.5),
        jail=TurnBasedJailPolicy(2),
        forced_sale=MortgageFirstForcedSalePolicy(),
        name="cautious",
    )


def _never_buy(player_id: int) -> Strategy:
    return FlexibleStrategy(
        player_id,
        buy=NeverBuyPolicy(),
        bid=NoBidPolicy(),
        jail=TurnBasedJailPolicy(NEVER),
        forced_sale=BasicForcedSalePolicy(),
        name="never_buy",
    )


def _expected_value(player_id: int) -> Strategy:
    return FlexibleStrategy(
        player_id,
        buy=AlwaysBuyPolicy(),
        bid=RandomBidPolicy(0.0, 0.5),
        jail=ExpectedValueJailPolicy(),
        forced_sale=BasicForcedSalePolicy(),
        name="expected_value",
    )


PROFILES: Dict[str, Callable[[int], Strategy]] = {
    "default": _default,
    "random": _random,
    "greedy": _greedy,
    "cautious": _cautious,
    "never_buy": _never_buy,
    "expected_value": _expected_value,
}


def create_strategy(name: str, player_id: int) -> Strategy:
    try:
        factory = PROFILES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown strategy '{name}'. Available: {', '.join(sorted(PROFILES))}"
        ) from None
    return factory(player_id)


def build_strategies(names: Sequence[str], player_count: int) -> List[Strategy]:
    """
    One strategy per seat. A single name fills every seat; otherwise there
    must be exactly one name per player.
    """
    names = list(names)
    if len(names) == 1:
        names = names * player_count
    if len(names) != player_count:
        raise ConfigurationError(f"Got {len(names)} strategies for {player_count} players")
    return [create_strategy(name, player_id) for player_id, name in enumerate(names)]


__all__ = [
    "Strategy",
    "FlexibleStrategy",
    "ExpectedValueJailPolicy",
    "PROFILES",
    "create_strategy",
    "build_strategies",
]
