"""
Game event types and the event sink the engine reports to.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    ROUND_START = "round_start"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    MOVE = "move"
    PASS_GO = "pass_go"
    LAND = "land"

    TRANSFER = "transfer"

    PURCHASE = "purchase"
    PROPERTY_SOLD = "property_sold"
    MORTGAGE = "mortgage"
    UNMORTGAGE = "unmortgage"
    AUCTION_START = "auction_start"
    AUCTION_BID = "auction_bid"
    AUCTION_END = "auction_end"

    RENT_PAYMENT = "rent_payment"
    TAX_PAYMENT = "tax_payment"

    CARD_DRAW = "card_draw"
    CARD_CASH_AWARD = "card_cash_award"
    CARD_CASH_FEE = "card_cash_fee"
    JAIL_CARD_RECEIVED = "jail_card_received"

    GO_TO_JAIL = "go_to_jail"
    JAIL_ATTEMPT = "jail_attempt"
    JAIL_FINE_PAID = "jail_fine_paid"
    JAIL_CARD_USED = "jail_card_used"
    JAIL_RELEASE = "jail_release"

    BANKRUPTCY = "bankruptcy"
    ASSET_SURRENDER = "asset_surrender"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Keeps every event of a game in order."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        """Log a game event."""
        event = GameEvent(event_type, player_id, details)
        self.record(event)

    def record(self, event: GameEvent) -> None:
        self.events.append(event)

    def get_events(self, event_type: Optional[EventType] = None) -> List[GameEvent]:
        """Get logged events, optionally only those of one type."""
        if event_type is None:
            return self.events.copy()
        return [e for e in self.events if e.event_type == event_type]


class NullEventLog(EventLog):
    """Sink that drops every event. Used for bulk simulation without recording."""

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        pass

    def record(self, event: GameEvent) -> None:
        pass
