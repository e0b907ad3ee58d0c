"""Bot strategy abstraction: maps AI policies to move-selection objects."""

from __future__ import annotations

import logging
import random as _random
from typing import Callable, Protocol

from indigo.config import settings
from indigo.engine.errors import GameEngineError
from indigo.engine.models import AIPolicy, GameState, Move
from indigo.game.search import enumerate_moves, evaluate, find_all_valid_positions

logger = logging.getLogger(__name__)


class BotStrategy(Protocol):
    """A bot strategy picks a move for the player at turn."""

    def choose_move(self, state: GameState) -> Move:
        """Return the chosen move; *state* is never modified."""
        ...


class NoMoveAvailableError(GameEngineError):
    """The player at turn has no tile or the board is full."""
    pass


class RandomStrategy:
    """Picks a uniformly random position and rotation."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = _random.Random(seed)

    def choose_move(self, state: GameState) -> Move:
        player = state.player_at_turn
        positions = find_all_valid_positions(state)
        if player is None or player.held_tile is None or not positions:
            raise NoMoveAvailableError("No move available for the player at turn")
        return Move(
            position=self._rng.choice(positions),
            rotation=self._rng.randrange(6),
        )


class SmartStrategy:
    """One-ply lookahead: tries every move and keeps the best evaluation.

    Ties go to the first move in enumeration order.
    """

    def __init__(self, proximity_weight: float | None = None) -> None:
        if proximity_weight is None:
            proximity_weight = settings.smart_proximity_weight
        self.proximity_weight = proximity_weight

    def choose_move(self, state: GameState) -> Move:
        player = state.player_at_turn
        if player is None:
            raise NoMoveAvailableError("No player at turn")

        best_move: Move | None = None
        best_value = float("-inf")
        candidates = 0
        for move, next_state in enumerate_moves(state):
            candidates += 1
            value = evaluate(next_state, player.color, self.proximity_weight)
            if value > best_value:
                best_move, best_value = move, value

        if best_move is None:
            raise NoMoveAvailableError("No move available for the player at turn")
        logger.info(
            "Smart move for %s: %s rotation %d (value=%.1f, candidates=%d)",
            player.name, best_move.position.to_key(), best_move.rotation,
            best_value, candidates,
        )
        return best_move


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_STRATEGY_FACTORIES: dict[AIPolicy, Callable[..., BotStrategy]] = {
    AIPolicy.RANDOM: lambda seed=None, **_kwargs: RandomStrategy(seed=seed),
    AIPolicy.SMART: lambda proximity_weight=None, **_kwargs: SmartStrategy(
        proximity_weight=proximity_weight,
    ),
}


def get_strategy(policy: AIPolicy | str, **kwargs: object) -> BotStrategy:
    """Create a BotStrategy instance for the given *policy*."""
    try:
        key = AIPolicy(policy)
    except ValueError:
        raise ValueError(f"Unknown AI policy: {policy!r}") from None
    return _STRATEGY_FACTORIES[key](**kwargs)
