"""GameSession: the mutable handle an orchestrator holds on to.

All game rules live in ``indigo.game``; the session only keeps the current
authoritative ``GameState`` and swaps it for the state an accepted
placement produces.
"""

from __future__ import annotations

import logging
import random

from indigo.config import settings
from indigo.engine.errors import GameNotStartedError, GameSetupError, InvalidPlacementError
from indigo.engine.models import (
    Accepted,
    GameState,
    PlacementResult,
    Player,
    RejectionReason,
)
from indigo.game import board as rules
from indigo.game.hexes import build_perimeter
from indigo.game.scoring import is_game_over, scores
from indigo.game.tiles import build_draw_stack, rotate
from indigo.game.types import AxialPos, Color, RouteTile

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 4


def _take_matching(stack: list[RouteTile], tile: RouteTile) -> None:
    for i, candidate in enumerate(stack):
        if candidate.tile_type == tile.tile_type:
            del stack[i]
            return


def create_initial_state(
    players: list[Player],
    shared_gates: bool = False,
    seed: int | None = None,
) -> GameState:
    """Build the starting state: perimeter tiles, shuffled stack, one tile each.

    A player who already holds a tile keeps it; one tile of the same type is
    taken out of the stack so the tile count stays right.
    """
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        raise GameSetupError(
            f"Indigo needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(players)}"
        )
    colors = [p.color for p in players]
    if len(set(colors)) != len(colors):
        raise GameSetupError("Players must have distinct colors")
    if len(players) == 4 and not shared_gates:
        logger.info("Four-player games always share gates")
        shared_gates = True

    rng = random.Random(seed)
    stack = build_draw_stack(rng)

    seated: list[Player] = []
    for player in players:
        player = player.model_copy(deep=True)
        if player.held_tile is not None:
            _take_matching(stack, player.held_tile)
        seated.append(player)
    for player in seated:
        if player.held_tile is None and stack:
            player.held_tile = stack.pop(0)

    return GameState(
        board=dict(build_perimeter(colors, shared_gates)),
        draw_stack=stack,
        players=seated,
        gem_pool=[],
    )


class GameSession:
    """Holds the authoritative game state between calls."""

    def __init__(self, state: GameState | None = None) -> None:
        self._state = state

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise GameNotStartedError("No game has been started")
        return self._state

    @state.setter
    def state(self, state: GameState) -> None:
        self._state = state

    @property
    def has_game(self) -> bool:
        return self._state is not None

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    def start_game(
        self,
        players: list[Player],
        shared_gates: bool | None = None,
        seed: int | None = None,
    ) -> GameState:
        """Start a new game and return a copy of its initial state."""
        if shared_gates is None:
            shared_gates = settings.shared_gates
        if seed is None:
            seed = settings.random_seed
        self._state = create_initial_state(players, shared_gates, seed)
        logger.info(
            "Game started: players=%s shared_gates=%s",
            [p.name for p in players], shared_gates,
        )
        return self._state.clone()

    # ------------------------------------------------------------------ #
    #  Turn actions
    # ------------------------------------------------------------------ #

    def check_placement(self, pos: AxialPos) -> bool:
        return rules.check_placement(self.state, pos)

    def place_tile(self, pos: AxialPos) -> PlacementResult:
        """Commit the held tile at *pos*; the state is replaced only on success.

        The returned result carries a copy, so changing it leaves the game alone.
        """
        result = rules.place_tile(self.state, pos)
        if isinstance(result, Accepted):
            self._state = result.state
            return result.model_copy(update={"state": result.state.clone()})
        return result

    def rotate_held_tile(self, steps: int = 1) -> RouteTile:
        player = self.state.player_at_turn
        if player is None or player.held_tile is None:
            raise InvalidPlacementError(
                "The player at turn holds no tile", reason=RejectionReason.NO_HELD_TILE,
            )
        player.held_tile = rotate(player.held_tile, steps)
        return player.held_tile

    def set_held_rotation(self, rotation: int) -> None:
        player = self.state.player_at_turn
        if player is None or player.held_tile is None:
            raise InvalidPlacementError(
                "The player at turn holds no tile", reason=RejectionReason.NO_HELD_TILE,
            )
        player.held_tile = player.held_tile.with_rotation(rotation)

    # ------------------------------------------------------------------ #
    #  Queries
    # ------------------------------------------------------------------ #

    def is_game_over(self) -> bool:
        return is_game_over(self.state)

    def scores(self) -> dict[Color, int]:
        return scores(self.state)
