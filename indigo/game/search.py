"""Move generation and one-ply evaluation for the Indigo bots."""

from __future__ import annotations

from typing import Iterator

from indigo.engine.models import GameState, Move
from indigo.game.board import place_tile
from indigo.game.hexes import all_open_positions, neighbor
from indigo.game.scoring import score
from indigo.game.tiles import all_rotations
from indigo.game.types import GEM_VALUES, AxialPos, Color, GatewayTile, RouteTile


def find_all_valid_positions(state: GameState) -> list[AxialPos]:
    """Empty open cells, ordered by q then r."""
    return sorted(
        (pos for pos in all_open_positions() if pos not in state.board),
        key=AxialPos.sort_key,
    )


def get_all_tile_possible_rotations(tile: RouteTile) -> list[RouteTile]:
    return all_rotations(tile)


def enumerate_moves(state: GameState) -> Iterator[tuple[Move, GameState]]:
    """Yield every move of the player at turn with the state it leads to.

    Order: positions as in ``find_all_valid_positions``, then rotations 0-5.
    """
    player = state.player_at_turn
    if player is None or player.held_tile is None:
        return

    rotations = get_all_tile_possible_rotations(player.held_tile)
    for pos in find_all_valid_positions(state):
        for tile in rotations:
            # Shallow probe: place_tile clones before it mutates anything.
            players = list(state.players)
            players[0] = player.model_copy(update={"held_tile": tile})
            probe = state.model_copy(update={"players": players})
            next_state = place_tile(probe, pos).unwrap()
            yield Move(position=pos, rotation=tile.rotation), next_state


def get_all_possible_next_states(state: GameState) -> list[GameState]:
    return [next_state for _move, next_state in enumerate_moves(state)]


def evaluate(state: GameState, color: Color, proximity_weight: float = 0.5) -> float:
    """Heuristic value of *state* for the player with *color*.

    Own score minus the best opponent score, plus a bonus for gems resting
    in front of a cell that touches one of the player's gates (and a malus
    for gems near an opponent's gate).
    """
    own = score(state, color)
    others = [score(state, p.color) for p in state.players if p.color != color]
    value = float(own - max(others, default=0))

    if proximity_weight:
        value += proximity_weight * _gate_proximity(state, color)
    return value


def _gate_proximity(state: GameState, color: Color) -> float:
    total = 0.0
    for pos, tile in state.board.items():
        if not isinstance(tile, RouteTile) or not tile.gems:
            continue
        for edge, gem in tile.gems.items():
            facing = neighbor(pos, edge)
            for direction in range(6):
                gate = state.board.get(neighbor(facing, direction))
                if not isinstance(gate, GatewayTile):
                    continue
                if color in gate.owners:
                    total += GEM_VALUES[gem]
                else:
                    total -= GEM_VALUES[gem]
                break
    return total
