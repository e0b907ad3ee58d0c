"""AI entry points bound to a GameSession.

The service never commits a move. It picks one, turns the held tile of the
player at turn to the chosen rotation and hands the move back; the caller
then commits it with ``GameSession.place_tile``.
"""

from __future__ import annotations

import logging

from indigo.engine.bot_strategy import BotStrategy, get_strategy
from indigo.engine.models import AIPolicy, GameState, Move
from indigo.engine.session import GameSession
from indigo.game import search
from indigo.game.types import AxialPos, RouteTile

logger = logging.getLogger(__name__)


class AIService:
    def __init__(self, session: GameSession, seed: int | None = None) -> None:
        self.session = session
        self._strategies: dict[AIPolicy, BotStrategy] = {
            AIPolicy.RANDOM: get_strategy(AIPolicy.RANDOM, seed=seed),
            AIPolicy.SMART: get_strategy(AIPolicy.SMART),
        }

    # --- State bridge ---

    def get_current_state(self) -> GameState:
        return self.session.state.clone()

    def set_current_state(self, state: GameState) -> None:
        """Replace board, stack, players and gem pool in one step."""
        self.session.state = state.clone()

    # --- Move generation ---

    def find_all_valid_positions(self) -> list[AxialPos]:
        return search.find_all_valid_positions(self.session.state)

    def get_all_tile_possible_rotations(self, tile: RouteTile) -> list[RouteTile]:
        return search.get_all_tile_possible_rotations(tile)

    def get_all_possible_next_states(self) -> list[GameState]:
        return search.get_all_possible_next_states(self.session.state)

    # --- Move selection ---

    def play_randomly(self) -> Move:
        return self._play(AIPolicy.RANDOM)

    def play_smart(self) -> Move:
        return self._play(AIPolicy.SMART)

    def choose_move(self) -> Move:
        """Pick a move with the policy of the player at turn (random if human)."""
        player = self.session.state.player_at_turn
        policy = player.policy if player and player.policy else AIPolicy.RANDOM
        return self._play(policy)

    def _play(self, policy: AIPolicy) -> Move:
        move = self._strategies[policy].choose_move(self.session.state)
        self.session.set_held_rotation(move.rotation)
        logger.debug(
            "%s policy chose %s rotation %d",
            policy.value, move.position.to_key(), move.rotation,
        )
        return move
