"""
Statistics accumulated over many games.

A StatisticsRecorder is an event sink: pass one to each game a worker
plays and it folds engine events into a StatCounters. Counters from
separate workers are merged by adding them together.
"""

from collections import Counter
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Callable, Dict, List

from monopoly_sim.board import BOARD_SIZE
from monopoly_sim.events import EventLog, EventType, GameEvent
from monopoly_sim.exceptions import RuleViolation
from monopoly_sim.spaces import StreetSpace

if TYPE_CHECKING:
    from monopoly_sim.game import GameState

# Board spaces plus the In Jail slot.
BOARD_SLOTS = BOARD_SIZE + 1


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


@dataclass
class StatCounters:
    """Raw counters. Per-player lists are indexed by seat (player id)."""

    player_count: int
    simulation_time_seconds: float = 0.0
    wall_time_seconds: float = 0.0

    game_count: int = 0
    round_count: int = 0
    game_length_histogram: Counter = field(default_factory=Counter)

    # Every turn played while solvent, including jail turns and repeat turns.
    turn_count: List[int] = field(default_factory=list)
    # 0 = first place.
    player_rank_sum: List[int] = field(default_factory=list)
    win_count: List[int] = field(default_factory=list)
    final_net_worth_sum: List[int] = field(default_factory=list)
    bankruptcy_count: List[int] = field(default_factory=list)

    rent_paid_total: List[int] = field(default_factory=list)
    rent_paid_count: List[int] = field(default_factory=list)
    rent_received_total: List[int] = field(default_factory=list)
    rent_received_count: List[int] = field(default_factory=list)

    # Every time any player is put on a space. Last slot is In Jail.
    board_space_counts: List[int] = field(default_factory=list)
    position_count: int = 0

    sent_to_jail_count: List[int] = field(default_factory=list)
    # Getting out on the turn after being sent in counts as 1 turn.
    jail_duration_total: int = 0
    jail_fee_paid_count: List[int] = field(default_factory=list)

    cards_drawn: List[int] = field(default_factory=list)
    card_cash_award_total: List[int] = field(default_factory=list)
    card_cash_award_count: List[int] = field(default_factory=list)
    card_cash_fee_total: List[int] = field(default_factory=list)
    card_cash_fee_count: List[int] = field(default_factory=list)

    go_salary_total: List[int] = field(default_factory=list)

    # Indexed by board position.
    property_purchase_count: List[int] = field(default_factory=list)
    property_purchase_round_sum: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        sizes = {
            "board_space_counts": BOARD_SLOTS,
            "property_purchase_count": BOARD_SIZE,
            "property_purchase_round_sum": BOARD_SIZE,
        }
        for f in fields(self):
            if isinstance(getattr(self, f.name), list) and not getattr(self, f.name):
                setattr(self, f.name, [0] * sizes.get(f.name, self.player_count))

    def __add__(self, other: "StatCounters") -> "StatCounters":
        if not isinstance(other, StatCounters):
            return NotImplemented
        if other.player_count != self.player_count:
            raise ValueError("Cannot merge statistics for different player counts")
        merged = StatCounters(self.player_count)
        for f in fields(self):
            if f.name == "player_count":
                continue
            mine, theirs = getattr(self, f.name), getattr(other, f.name)
            if f.name == "wall_time_seconds":
                value = max(mine, theirs)
            elif isinstance(mine, list):
                value = [a + b for a, b in zip(mine, theirs)]
            else:
                value = mine + theirs
            setattr(merged, f.name, value)
        return merged

    def __radd__(self, other):
        # Lets sum() start from 0.
        if other == 0:
            return self
        return self.__add__(other)

    # === Derived statistics ===

    @property
    def total_turns(self) -> int:
        return sum(self.turn_count)

    def game_length_mean(self) -> float:
        return _ratio(self.round_count, self.game_count)

    def player_rank_mean(self, player_id: int) -> float:
        return _ratio(self.player_rank_sum[player_id], self.game_count)

    def win_rate(self, player_id: int) -> float:
        return _ratio(self.win_count[player_id], self.game_count)

    def final_net_worth_mean(self, player_id: int) -> float:
        return _ratio(self.final_net_worth_sum[player_id], self.game_count)

    def bankruptcy_rate(self, player_id: int) -> float:
        return _ratio(self.bankruptcy_count[player_id], self.game_count)

    def rent_paid_mean_per_game(self, player_id: int) -> float:
        return _ratio(self.rent_paid_total[player_id], self.game_count)

    def rent_paid_mean_per_turn(self, player_id: int) -> float:
        return _ratio(self.rent_paid_total[player_id], self.turn_count[player_id])

    def rent_paid_mean_per_payment(self, player_id: int) -> float:
        return _ratio(self.rent_paid_total[player_id], self.rent_paid_count[player_id])

    def rent_received_mean_per_game(self, player_id: int) -> float:
        return _ratio(self.rent_received_total[player_id], self.game_count)

    def rent_received_mean_per_turn(self, player_id: int) -> float:
        return _ratio(self.rent_received_total[player_id], self.turn_count[player_id])

    def rent_received_mean_per_payment(self, player_id: int) -> float:
        return _ratio(self.rent_received_total[player_id], self.rent_received_count[player_id])

    def board_space_relative_freq(self, slot: int) -> float:
        return _ratio(self.board_space_counts[slot], self.position_count)

    def sent_to_jail_mean_per_game(self, player_id: int) -> float:
        return _ratio(self.sent_to_jail_count[player_id], self.game_count)

    def sent_to_jail_mean_per_turn(self, player_id: int) -> float:
        return _ratio(self.sent_to_jail_count[player_id], self.turn_count[player_id])

    def jail_duration_mean(self) -> float:
        return _ratio(self.jail_duration_total, sum(self.sent_to_jail_count))

    def cards_drawn_mean_per_game(self, player_id: int) -> float:
        return _ratio(self.cards_drawn[player_id], self.game_count)

    def card_cash_award_mean_per_game(self, player_id: int) -> float:
        return _ratio(self.card_cash_award_total[player_id], self.game_count)

    def card_cash_award_mean_per_card(self, player_id: int) -> float:
        return _ratio(self.card_cash_award_total[player_id], self.card_cash_award_count[player_id])

    def card_cash_fee_mean_per_game(self, player_id: int) -> float:
        return _ratio(self.card_cash_fee_total[player_id], self.game_count)

    def card_cash_fee_mean_per_card(self, player_id: int) -> float:
        return _ratio(self.card_cash_fee_total[player_id], self.card_cash_fee_count[player_id])

    def go_salary_mean_per_game(self, player_id: int) -> float:
        return _ratio(self.go_salary_total[player_id], self.game_count)

    def purchase_round_mean(self, position: int) -> float:
        """Mean round in which a property first changed from bank to player."""
        return _ratio(self.property_purchase_round_sum[position], self.property_purchase_count[position])

    def games_per_second(self) -> float:
        elapsed = self.wall_time_seconds or self.simulation_time_seconds
        return _ratio(self.game_count, elapsed)


def player_net_worths(game: "GameState") -> List[int]:
    """
    Net worth of every player: cash, unmortgaged properties at listed value
    plus buildings, mortgaged properties at their mortgage value.
    """
    net_worths = [player.cash for player in game.players]
    for position, state in game.property_states.items():
        if state.owner_id is None:
            continue
        space = game.board.get_property_space(position)
        if state.is_mortgaged:
            value = space.mortgage_value
        else:
            value = space.price
            if isinstance(space, StreetSpace):
                # A hotel counts as five buildings.
                value += space.building_value * state.level
        net_worths[state.owner_id] += value

    for player in game.players:
        if player.is_bankrupt and net_worths[player.player_id] != 0:
            raise RuleViolation(f"Bankrupt player {player.player_id} has net worth {net_worths[player.player_id]}")
    return net_worths


def rank_players(game: "GameState") -> List[int]:
    """
    End-of-game rank of each player (0 = best).

    Solvent players beat bankrupt ones and are ordered by net worth; bankrupt
    players who lasted longer rank higher. Equal players share a rank.
    """
    net_worths = player_net_worths(game)

    def rank_key(player_id: int):
        player = game.players[player_id]
        if player.is_bankrupt:
            return (0, player.bankrupt_round)
        return (1, net_worths[player_id])

    by_rank = sorted(range(len(game.players)), key=rank_key, reverse=True)
    ranks = [0] * len(game.players)
    rank = 0
    previous = None
    for player_id in by_rank:
        key = rank_key(player_id)
        if previous is not None and key != previous:
            rank += 1
        ranks[player_id] = rank
        previous = key
    return ranks


class StatisticsRecorder(EventLog):
    """
    Event sink that updates counters as events arrive.

    Args:
        player_count: Seats per game
        keep_events: Also keep the raw events (memory grows with every game)
    """

    def __init__(self, player_count: int, keep_events: bool = False):
        super().__init__()
        self.counters = StatCounters(player_count)
        self.keep_events = keep_events
        self._handlers: Dict[EventType, Callable[[GameEvent], None]] = {
            EventType.TURN_START: self._on_turn_start,
            EventType.MOVE: self._on_move,
            EventType.RENT_PAYMENT: self._on_rent_payment,
            EventType.GO_TO_JAIL: self._on_go_to_jail,
            EventType.JAIL_RELEASE: self._on_jail_release,
            EventType.JAIL_FINE_PAID: self._on_jail_fine_paid,
            EventType.CARD_DRAW: self._on_card_draw,
            EventType.CARD_CASH_AWARD: self._on_card_cash_award,
            EventType.CARD_CASH_FEE: self._on_card_cash_fee,
            EventType.PASS_GO: self._on_pass_go,
            EventType.BANKRUPTCY: self._on_bankruptcy,
            EventType.PURCHASE: self._on_purchase,
            EventType.GAME_END: self._on_game_end,
        }

    def record(self, event: GameEvent) -> None:
        if self.keep_events:
            self.events.append(event)
        handler = self._handlers.get(event.event_type)
        if handler is not None:
            handler(event)

    def _on_turn_start(self, event: GameEvent) -> None:
        self.counters.turn_count[event.player_id] += 1

    def _on_move(self, event: GameEvent) -> None:
        self.counters.board_space_counts[event.details["slot"]] += 1
        self.counters.position_count += 1

    def _on_rent_payment(self, event: GameEvent) -> None:
        c = self.counters
        amount = event.details["amount"]
        c.rent_paid_total[event.player_id] += amount
        c.rent_paid_count[event.player_id] += 1
        c.rent_received_total[event.details["owner"]] += amount
        c.rent_received_count[event.details["owner"]] += 1

    def _on_go_to_jail(self, event: GameEvent) -> None:
        self.counters.sent_to_jail_count[event.player_id] += 1

    def _on_jail_release(self, event: GameEvent) -> None:
        self.counters.jail_duration_total += event.details["turns_in_jail"]

    def _on_jail_fine_paid(self, event: GameEvent) -> None:
        self.counters.jail_fee_paid_count[event.player_id] += 1

    def _on_card_draw(self, event: GameEvent) -> None:
        self.counters.cards_drawn[event.player_id] += 1

    def _on_card_cash_award(self, event: GameEvent) -> None:
        self.counters.card_cash_award_total[event.player_id] += event.details["amount"]
        self.counters.card_cash_award_count[event.player_id] += 1

    def _on_card_cash_fee(self, event: GameEvent) -> None:
        self.counters.card_cash_fee_total[event.player_id] += event.details["amount"]
        self.counters.card_cash_fee_count[event.player_id] += 1

    def _on_pass_go(self, event: GameEvent) -> None:
        self.counters.go_salary_total[event.player_id] += event.details["amount"]

    def _on_bankruptcy(self, event: GameEvent) -> None:
        self.counters.bankruptcy_count[event.player_id] += 1

    def _on_purchase(self, event: GameEvent) -> None:
        position = event.details["position"]
        self.counters.property_purchase_count[position] += 1
        self.counters.property_purchase_round_sum[position] += event.details["round"]

    def _on_game_end(self, event: GameEvent) -> None:
        c = self.counters
        rounds = event.details["rounds"]
        c.game_count += 1
        c.round_count += rounds
        c.game_length_histogram[rounds] += 1
        for player_id, rank in enumerate(event.details["ranks"]):
            c.player_rank_sum[player_id] += rank
            if rank == 0:
                c.win_count[player_id] += 1
        for player_id, net_worth in enumerate(event.details["net_worths"]):
            c.final_net_worth_sum[player_id] += net_worth
