"""
Expected-value jail decisions.

Each option is valued by the cash the player expects to gain or lose on
the space the resulting move lands on, looking only one landing ahead:

    pay fine   = -fine + E[landing | single die]
    use card   = -card value + E[landing | single die]
    roll       = 1/6 * E[landing | doubles] + 5/6 * E[next jail turn]

On the last jail turn a failed roll forces the fine, so E[next jail turn]
becomes -fine + E[landing | non-double roll]. A held card is worth the fine
times the chance it would otherwise have to be paid.
"""

from typing import TYPE_CHECKING, Dict, List, Tuple

from monopoly_sim.board import BOARD_SIZE, JUST_VISITING
from monopoly_sim.cards import CardType, DeckType
from monopoly_sim.player import JailAction
from monopoly_sim.rules import get_legal_jail_actions
from monopoly_sim.spaces import SpaceType, StreetSpace

if TYPE_CHECKING:
    from monopoly_sim.dice import RandomStream
    from monopoly_sim.game import GameState

# (roll, probability) pairs
Distribution = List[Tuple[int, float]]

SINGLE_DIE: Distribution = [(face, 1 / 6) for face in range(1, 7)]
TWO_DICE: Distribution = [(total, (6 - abs(total - 7)) / 36) for total in range(2, 13)]
DOUBLES_ONLY: Distribution = [(2 * face, 1 / 6) for face in range(1, 7)]
NOT_DOUBLES: Distribution = [
    (total, (6 - abs(total - 7) - (1 if total % 2 == 0 else 0)) / 30) for total in range(3, 12)
]

_DOUBLE_CHANCE = 1 / 6


class ExpectedValueJailPolicy:
    """Pick the jail action with the best one-landing expected cash value."""

    def decide(self, game: "GameState", rng: "RandomStream", player_id: int) -> JailAction:
        turn = game.players[player_id].turn_in_jail(game.config.max_jail_turns)
        legal = get_legal_jail_actions(game, player_id)
        action, _ = self.evaluate(game, player_id, turn, legal)
        return action

    def evaluate(
        self, game: "GameState", player_id: int, turn: int, legal: List[JailAction]
    ) -> Tuple[JailAction, float]:
        """Best legal action for a given jail turn and its expected value."""
        config = game.config
        fine = config.jail_fine
        card_values = self.jail_card_values(game)
        after_release = self.distribution_ev(game, player_id, SINGLE_DIE)

        pay_ev = -fine + after_release
        card_ev = -card_values[turn] + after_release
        if turn + 1 < config.max_jail_turns:
            _, next_ev = self.evaluate(game, player_id, turn + 1, legal)
        else:
            next_ev = -fine + self.distribution_ev(game, player_id, NOT_DOUBLES)
        roll_ev = _DOUBLE_CHANCE * self.distribution_ev(game, player_id, DOUBLES_ONLY) + (1 - _DOUBLE_CHANCE) * next_ev

        if card_ev > roll_ev and card_ev > pay_ev:
            if JailAction.USE_CHANCE_CARD in legal:
                return JailAction.USE_CHANCE_CARD, card_ev
            if JailAction.USE_COMMUNITY_CHEST_CARD in legal:
                return JailAction.USE_COMMUNITY_CHEST_CARD, card_ev
        if roll_ev >= pay_ev or JailAction.PAY_FINE not in legal:
            return JailAction.ROLL_DOUBLES, roll_ev
        return JailAction.PAY_FINE, pay_ev

    @staticmethod
    def fine_chances(game: "GameState") -> List[float]:
        """Chance of ending up paying the fine, by jail turn, if only rolling."""
        max_turns = game.config.max_jail_turns
        return [(1 - _DOUBLE_CHANCE) ** (max_turns - turn) for turn in range(max_turns)]

    def jail_card_values(self, game: "GameState") -> List[float]:
        return [chance * game.config.jail_fine for chance in self.fine_chances(game)]

    def distribution_ev(self, game: "GameState", player_id: int, distribution: Distribution) -> float:
        return sum(probability * self.movement_roll_ev(game, player_id, roll) for roll, probability in distribution)

    def movement_roll_ev(self, game: "GameState", player_id: int, roll: int) -> float:
        """Expected value of moving `roll` spaces, counting the Go salary."""
        position = game.players[player_id].position
        if position < 0:
            position = JUST_VISITING
        new_position = position + roll
        ev = 0.0
        if new_position > BOARD_SIZE:
            ev += game.config.go_salary
        return ev + self.space_ev(game, player_id, new_position % BOARD_SIZE, roll)

    def space_ev(self, game: "GameState", player_id: int, position: int, roll: int) -> float:
        config = game.config
        space = game.board.get_space(position)
        space_type = space.space_type

        if space_type == SpaceType.GO:
            return config.go_salary
        if space_type == SpaceType.TAX:
            return -space.amount
        if space_type == SpaceType.GO_TO_JAIL:
            return self._go_to_jail_ev(game)
        if space_type == SpaceType.CHANCE:
            return self.deck_ev(game, player_id, DeckType.CHANCE)
        if space_type == SpaceType.COMMUNITY_CHEST:
            return self.deck_ev(game, player_id, DeckType.COMMUNITY_CHEST)
        if space.is_property:
            return -self._rent_estimate(game, player_id, position, roll)
        return 0.0

    def _go_to_jail_ev(self, game: "GameState") -> float:
        return -self.fine_chances(game)[0] * game.config.jail_fine

    def _rent_estimate(self, game: "GameState", player_id: int, position: int, roll: int) -> int:
        state = game.property_states[position]
        if not state.is_owned() or state.owner_id == player_id or state.is_mortgaged:
            return 0
        config = game.config
        space = game.board.get_property_space(position)
        owner_id = state.owner_id
        if isinstance(space, StreetSpace):
            rent = space.rent_for_level(state.level)
            if state.level == 0 and game.owns_entire_colour_set(owner_id, space.colour_set):
                rent *= config.full_set_rent_multiplier
            return rent
        if space.space_type == SpaceType.RAILWAY:
            return config.railway_rents[game.owned_count(owner_id, SpaceType.RAILWAY) - 1]
        return roll * config.utility_dice_multipliers[game.owned_count(owner_id, SpaceType.UTILITY) - 1]

    def deck_ev(self, game: "GameState", player_id: int, deck_type: DeckType) -> float:
        """
        Average immediate cash value of a card from the deck.

        Card moves other than Go and jail are valued at 0.
        """
        others = sum(1 for p in game.get_active_players() if p.player_id != player_id)
        values: Dict[CardType, float] = {
            CardType.ADVANCE_TO_GO: game.config.go_salary,
            CardType.GO_TO_JAIL: self._go_to_jail_ev(game),
            CardType.GET_OUT_OF_JAIL: self.jail_card_values(game)[0],
        }
        player = game.players[player_id]
        total = 0.0
        cards = game.deck(deck_type).cards
        for card in cards:
            if card.card_type in values:
                total += values[card.card_type]
            elif card.card_type == CardType.CASH_AWARD:
                total += card.value
            elif card.card_type == CardType.CASH_FEE:
                total -= card.value
            elif card.card_type == CardType.PER_BUILDING_FEE:
                total -= card.value * player.houses_owned + card.value2 * player.hotels_owned
            elif card.card_type == CardType.AWARD_FROM_PLAYERS:
                total += card.value * others
            elif card.card_type == CardType.FEE_TO_PLAYERS:
                total -= card.value * others
        return total / len(cards)
