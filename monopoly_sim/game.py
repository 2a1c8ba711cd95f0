"""
Game state store and read-only queries over it.

All rule logic that mutates the state lives in the engine modules
(money, payments, properties, auction, movement, rules, turns); this
module only holds the data and answers questions about it.
"""

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from monopoly_sim.board import IN_JAIL_SLOT, STANDARD_BOARD, Board
from monopoly_sim.cards import Deck, DeckType, create_chance_deck, create_community_chest_deck
from monopoly_sim.config import GameConfig
from monopoly_sim.dice import RandomStream
from monopoly_sim.events import EventLog, EventType, NullEventLog
from monopoly_sim.exceptions import ConfigurationError
from monopoly_sim.player import PlayerState, PropertyState, TurnState
from monopoly_sim.spaces import SpaceType

if TYPE_CHECKING:
    from monopoly_sim.strategies.base import Strategy


class GameState:
    """Complete state of one simulated game."""

    def __init__(
        self,
        config: GameConfig,
        strategies: Sequence["Strategy"],
        rng: RandomStream,
        events: Optional[EventLog] = None,
        board: Optional[Board] = None,
    ):
        if len(strategies) != config.player_count:
            raise ConfigurationError(
                f"Expected {config.player_count} strategies, got {len(strategies)}"
            )
        self.config = config
        self.board = board if board is not None else _board_for(config)
        self.rng = rng
        self.events = events if events is not None else NullEventLog()
        self.strategies = list(strategies)

        self.players: List[PlayerState] = [
            PlayerState(player_id, config.starting_cash) for player_id in config.player_ids
        ]
        self.property_states: Dict[int, PropertyState] = {
            position: PropertyState() for position in self.board.properties
        }
        self.chance_deck: Deck = create_chance_deck()
        self.community_chest_deck: Deck = create_community_chest_deck()

        self.round = 0
        self.turn = TurnState()
        self.game_over = False

    def __repr__(self) -> str:
        return (
            f"GameState(round={self.round}, players={len(self.players)}, "
            f"bankrupt={self.bankrupt_count()})"
        )

    # === Decks ===

    def deck(self, deck_type: DeckType) -> Deck:
        if deck_type == DeckType.CHANCE:
            return self.chance_deck
        return self.community_chest_deck

    @property
    def decks(self) -> List[Deck]:
        return [self.chance_deck, self.community_chest_deck]

    def shuffle_decks(self) -> None:
        self.chance_deck.shuffle(self.rng)
        self.community_chest_deck.shuffle(self.rng)

    def owns_jail_card(self, player_id: int, deck_type: DeckType) -> bool:
        return self.deck(deck_type).jail_card_owner == player_id

    def jail_cards_owned_by(self, player_id: int) -> List[DeckType]:
        return [deck.deck_type for deck in self.decks if deck.jail_card_owner == player_id]

    # === Players ===

    def get_active_players(self) -> List[PlayerState]:
        """Players that are not bankrupt."""
        return [p for p in self.players if not p.is_bankrupt]

    def bankrupt_count(self) -> int:
        return sum(1 for p in self.players if p.is_bankrupt)

    def board_slot(self, player_id: int) -> int:
        """Board index of a player, or the In Jail statistics slot."""
        player = self.players[player_id]
        return IN_JAIL_SLOT if player.in_jail else player.position

    # === Properties ===

    def get_owner(self, position: int) -> Optional[int]:
        return self.property_states[position].owner_id

    def is_owner(self, player_id: int, position: int) -> bool:
        return self.property_states[position].owner_id == player_id

    def properties_owned_by(self, player_id: int) -> List[int]:
        return [pos for pos, state in self.property_states.items() if state.owner_id == player_id]

    def owned_count(self, player_id: int, space_type: SpaceType) -> int:
        """Number of railways, utilities or streets a player owns."""
        if space_type == SpaceType.RAILWAY:
            positions = self.board.railways
        elif space_type == SpaceType.UTILITY:
            positions = self.board.utilities
        else:
            positions = self.board.streets
        return sum(1 for pos in positions if self.property_states[pos].owner_id == player_id)

    def owns_entire_colour_set(self, player_id: int, colour_set: int) -> bool:
        return all(
            self.property_states[pos].owner_id == player_id
            for pos in self.board.get_colour_set(colour_set)
        )

    def colour_set_has_buildings(self, colour_set: int) -> bool:
        return any(self.property_states[pos].level > 0 for pos in self.board.get_colour_set(colour_set))

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details) -> None:
        """Emit an event to the game's sink, stamped with the round."""
        self.events.log(event_type, player_id, round=self.round, **details)


def _board_for(config: GameConfig) -> Board:
    if config.income_tax == 200 and config.super_tax == 150:
        return STANDARD_BOARD
    return Board(config.income_tax, config.super_tax)


def new_game(
    config: GameConfig,
    strategies: Sequence["Strategy"],
    rng: RandomStream,
    events: Optional[EventLog] = None,
) -> GameState:
    """
    Create a fresh game with shuffled decks.

    Args:
        config: Game rules
        strategies: One strategy per player, indexed by player id
        rng: Random stream for dice, shuffles and strategy decisions
        events: Event sink (defaults to a sink that drops everything)

    Returns:
        Initialized GameState
    """
    game = GameState(config, strategies, rng, events)
    game.shuffle_decks()
    game.log(EventType.GAME_START, player_count=config.player_count)
    return game
