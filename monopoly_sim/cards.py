"""
Chance and Community Chest decks.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from monopoly_sim.dice import RandomStream
from monopoly_sim.exceptions import RuleViolation


class DeckType(Enum):
    CHANCE = "chance"
    COMMUNITY_CHEST = "community_chest"


class CardType(Enum):
    """Types of card effects."""

    ADVANCE_TO = "advance_to"
    ADVANCE_TO_GO = "advance_to_go"
    ADVANCE_TO_NEXT_RAILWAY = "advance_to_next_railway"
    ADVANCE_TO_NEXT_UTILITY = "advance_to_next_utility"
    GO_BACK = "go_back"
    GO_TO_JAIL = "go_to_jail"
    GET_OUT_OF_JAIL = "get_out_of_jail"
    CASH_AWARD = "cash_award"
    CASH_FEE = "cash_fee"
    PER_BUILDING_FEE = "per_building_fee"
    AWARD_FROM_PLAYERS = "award_from_players"
    FEE_TO_PLAYERS = "fee_to_players"


@dataclass(frozen=True)
class Card:
    """A Chance or Community Chest card."""

    description: str
    card_type: CardType
    value: int = 0
    # PER_BUILDING_FEE: per-hotel amount (value is per house).
    value2: int = 0
    target_position: Optional[int] = None

    def __repr__(self) -> str:
        return f"Card('{self.description}')"


class Deck:
    """
    A deck drawn cyclically: cards are never removed, the top index walks
    round the list.

    The deck also tracks who holds its Get Out of Jail Free card. While the
    card is held it stays in the list and is skipped when it comes up.
    """

    def __init__(self, deck_type: DeckType, cards: List[Card]):
        jail_cards = [c for c in cards if c.card_type == CardType.GET_OUT_OF_JAIL]
        if len(jail_cards) != 1:
            raise ValueError(f"{deck_type.value} deck needs exactly one Get Out of Jail Free card")
        self.deck_type = deck_type
        self.cards = list(cards)
        self.top_index = 0
        self.jail_card_owner: Optional[int] = None

    def __len__(self) -> int:
        return len(self.cards)

    def shuffle(self, rng: RandomStream) -> None:
        rng.shuffle(self.cards)
        self.top_index = 0

    def _next_card(self) -> Card:
        card = self.cards[self.top_index]
        self.top_index = (self.top_index + 1) % len(self.cards)
        return card

    def draw(self) -> Card:
        """Take the next card, skipping the jail card while a player holds it."""
        card = self._next_card()
        if card.card_type == CardType.GET_OUT_OF_JAIL and self.jail_card_owner is not None:
            card = self._next_card()
        return card

    def give_jail_card(self, player_id: int) -> None:
        if self.jail_card_owner is not None:
            raise RuleViolation(
                f"{self.deck_type.value} jail card already held by player {self.jail_card_owner}"
            )
        self.jail_card_owner = player_id

    def transfer_jail_card(self, player_id: int) -> None:
        """Hand a held jail card straight to another player."""
        if self.jail_card_owner is None:
            raise RuleViolation(f"{self.deck_type.value} jail card is not held")
        self.jail_card_owner = player_id

    def return_jail_card(self) -> None:
        """Release the jail card and put it at the back of the draw order."""
        if self.jail_card_owner is None:
            raise RuleViolation(f"{self.deck_type.value} jail card is not held")
        self.jail_card_owner = None
        order = self.cards[self.top_index:] + self.cards[:self.top_index]
        jail_card = next(c for c in order if c.card_type == CardType.GET_OUT_OF_JAIL)
        order.remove(jail_card)
        order.append(jail_card)
        self.cards = order
        self.top_index = 0

    def upcoming(self) -> List[Card]:
        """Cards in the order they would be drawn, ignoring skips."""
        return self.cards[self.top_index:] + self.cards[:self.top_index]


def create_chance_deck() -> Deck:
    """Create the 16-card Chance deck (unshuffled)."""
    cards = [
        Card("Advance to Go", CardType.ADVANCE_TO_GO),
        Card("Take a trip to Kings Cross Station", CardType.ADVANCE_TO, target_position=5),
        Card("Advance to Pall Mall", CardType.ADVANCE_TO, target_position=11),
        Card("Advance to Trafalgar Square", CardType.ADVANCE_TO, target_position=24),
        Card("Advance to Mayfair", CardType.ADVANCE_TO, target_position=39),
        Card("Advance to the next railway, pay double rent", CardType.ADVANCE_TO_NEXT_RAILWAY),
        Card("Advance to the next railway, pay double rent", CardType.ADVANCE_TO_NEXT_RAILWAY),
        Card("Advance to the next utility, pay 10x dice", CardType.ADVANCE_TO_NEXT_UTILITY),
        Card("Go back 3 spaces", CardType.GO_BACK, value=3),
        Card("Go to Jail", CardType.GO_TO_JAIL),
        Card("Get Out of Jail Free", CardType.GET_OUT_OF_JAIL),
        Card("Bank pays you dividend of £50", CardType.CASH_AWARD, value=50),
        Card("Your building loan matures, collect £150", CardType.CASH_AWARD, value=150),
        Card("Speeding fine £15", CardType.CASH_FEE, value=15),
        Card("Elected Chairman of the Board, pay each player £50", CardType.FEE_TO_PLAYERS, value=50),
        Card(
            "General repairs: £25 per house, £100 per hotel",
            CardType.PER_BUILDING_FEE,
            value=25,
            value2=100,
        ),
    ]
    return Deck(DeckType.CHANCE, cards)


def create_community_chest_deck() -> Deck:
    """Create the 16-card Community Chest deck (unshuffled)."""
    cards = [
        Card("Advance to Go", CardType.ADVANCE_TO_GO),
        Card("Go to Jail", CardType.GO_TO_JAIL),
        Card("Get Out of Jail Free", CardType.GET_OUT_OF_JAIL),
        Card("Second prize in a beauty contest, collect £10", CardType.CASH_AWARD, value=10),
        Card("Income tax refund, collect £20", CardType.CASH_AWARD, value=20),
        Card("Receive £25 consultancy fee", CardType.CASH_AWARD, value=25),
        Card("From sale of stock you get £50", CardType.CASH_AWARD, value=50),
        Card("You inherit £100", CardType.CASH_AWARD, value=100),
        Card("Holiday fund matures, receive £100", CardType.CASH_AWARD, value=100),
        Card("Life insurance matures, collect £100", CardType.CASH_AWARD, value=100),
        Card("Bank error in your favour, collect £200", CardType.CASH_AWARD, value=200),
        Card("It is your birthday, collect £10 from every player", CardType.AWARD_FROM_PLAYERS, value=10),
        Card("School fees £50", CardType.CASH_FEE, value=50),
        Card("Doctor's fee £50", CardType.CASH_FEE, value=50),
        Card("Hospital fees £100", CardType.CASH_FEE, value=100),
        Card(
            "Street repairs: £40 per house, £115 per hotel",
            CardType.PER_BUILDING_FEE,
            value=40,
            value2=115,
        ),
    ]
    return Deck(DeckType.COMMUNITY_CHEST, cards)
