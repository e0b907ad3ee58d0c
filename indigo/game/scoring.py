"""Scoring, game end detection and the gem conservation check."""

from __future__ import annotations

from indigo.engine.errors import InconsistentStateError
from indigo.engine.models import GameState
from indigo.game.hexes import all_open_positions
from indigo.game.types import GEM_VALUES, Color, GatewayTile, Gem, RouteTile, TreasureTile

TOTAL_GEMS = 12


def gem_value(gems: list[Gem]) -> int:
    return sum(GEM_VALUES[g] for g in gems)


def score(state: GameState, color: Color) -> int:
    """Captured gems plus gems sitting on shared gates the player owns."""
    player = state.find_player(color)
    total = gem_value(player.captured) if player else 0
    for tile in state.board.values():
        if isinstance(tile, GatewayTile) and color in tile.owners:
            total += gem_value(tile.gems)
    return total


def gem_count(state: GameState, color: Color) -> int:
    player = state.find_player(color)
    total = len(player.captured) if player else 0
    for tile in state.board.values():
        if isinstance(tile, GatewayTile) and color in tile.owners:
            total += len(tile.gems)
    return total


def scores(state: GameState) -> dict[Color, int]:
    return {p.color: score(state, p.color) for p in state.players}


def winners(state: GameState) -> list[Color]:
    """Highest score wins; ties are broken by the number of gems."""
    if not state.players:
        return []
    ranking = {
        p.color: (score(state, p.color), gem_count(state, p.color))
        for p in state.players
    }
    best = max(ranking.values())
    return [color for color, rank in ranking.items() if rank == best]


def gems_in_play(state: GameState) -> int:
    """Gems still on treasure or route tiles."""
    total = 0
    for tile in state.board.values():
        if isinstance(tile, (RouteTile, TreasureTile)):
            total += len(tile.gems)
    return total


def is_game_over(state: GameState) -> bool:
    player = state.player_at_turn
    if player is None or player.held_tile is None:
        return True
    if gems_in_play(state) == 0:
        return True
    return all(pos in state.board for pos in all_open_positions())


def count_gems(state: GameState) -> int:
    """Every gem the state knows about: board, captures and pool."""
    on_board = sum(len(tile.gems) for tile in state.board.values())
    captured = sum(len(p.captured) for p in state.players)
    return on_board + captured + len(state.gem_pool)


def check_conservation(state: GameState, expected: int = TOTAL_GEMS) -> None:
    found = count_gems(state)
    if found != expected:
        raise InconsistentStateError(
            f"Gem count changed: expected {expected}, found {found}"
        )
