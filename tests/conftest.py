from __future__ import annotations

import pytest

from indigo.engine.models import GameState, Player
from indigo.engine.session import GameSession
from indigo.game.types import AxialPos, Color, RouteTile, TileType


def pos(q: int, r: int) -> AxialPos:
    return AxialPos(q=q, r=r)


def make_players(*tiles: TileType, **flags: bool) -> list[Player]:
    colors = [Color.RED, Color.BLUE, Color.WHITE, Color.PURPLE]
    return [
        Player(
            name=f"P{i + 1}",
            color=colors[i],
            held_tile=RouteTile(tile_type=tile),
            **flags,
        )
        for i, tile in enumerate(tiles)
    ]


@pytest.fixture
def session() -> GameSession:
    """Two-player game: P1 (red) holds TILE0, P2 (blue) holds TILE1."""
    s = GameSession()
    s.start_game(make_players(TileType.TILE0, TileType.TILE1), shared_gates=False, seed=42)
    return s


@pytest.fixture
def row_state() -> GameState:
    """Hand-built board along row r=2 with no perimeter tiles.

    (-1,2) and (1,2) hold straight tiles; (0,2) is empty. An emerald rests on
    (-1,2) at the edge facing (0,2). P1 holds a TILE2 at rotation 0.
    """
    return GameState(
        board={
            pos(-1, 2): RouteTile(tile_type=TileType.TILE2, gems={1: "emerald"}),
            pos(1, 2): RouteTile(tile_type=TileType.TILE2),
        },
        draw_stack=[RouteTile(tile_type=TileType.TILE0)],
        players=[
            Player(name="P1", color=Color.RED, held_tile=RouteTile(tile_type=TileType.TILE2)),
            Player(name="P2", color=Color.BLUE, held_tile=RouteTile(tile_type=TileType.TILE3)),
        ],
        gem_pool=[],
    )
