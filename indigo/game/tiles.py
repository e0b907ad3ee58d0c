"""Route tile catalog for Indigo (5 types, 54 tiles).

Every route tile joins its six edges in three pairs. Edges are numbered
0-5 in the same order as ``HEX_DIRECTIONS``; rotating a tile by one step
adds one to every edge index, modulo 6.
"""

from __future__ import annotations

import random

from indigo.game.types import RouteTile, TileType

EdgePair = frozenset[int]


def _pairs(*pairs: tuple[int, int]) -> frozenset[EdgePair]:
    return frozenset(frozenset(p) for p in pairs)


# Connections at rotation 0.
TILE_CONNECTIVITY: dict[TileType, frozenset[EdgePair]] = {
    # One straight, two tight curves (x14)
    TileType.TILE0: _pairs((0, 3), (1, 2), (4, 5)),
    # One straight, two crossing wide curves (x6)
    TileType.TILE1: _pairs((0, 3), (1, 5), (2, 4)),
    # Three straights crossing in the middle (x14)
    TileType.TILE2: _pairs((0, 3), (1, 4), (2, 5)),
    # Three tight curves (x14)
    TileType.TILE3: _pairs((0, 1), (2, 3), (4, 5)),
    # One tight curve, two crossing wide curves (x6)
    TileType.TILE4: _pairs((0, 1), (2, 4), (3, 5)),
}

TILE_COUNTS: dict[TileType, int] = {
    TileType.TILE0: 14,
    TileType.TILE1: 6,
    TileType.TILE2: 14,
    TileType.TILE3: 14,
    TileType.TILE4: 6,
}


def connectivity(tile_type: TileType, rotation: int = 0) -> frozenset[EdgePair]:
    """Edge pairs linked through a tile of *tile_type* at *rotation*."""
    base = TILE_CONNECTIVITY[tile_type]
    if rotation % 6 == 0:
        return base
    return frozenset(
        frozenset((edge + rotation) % 6 for edge in pair) for pair in base
    )


def tile_connectivity(tile: RouteTile) -> frozenset[EdgePair]:
    return connectivity(tile.tile_type, tile.rotation)


def exit_edge(tile: RouteTile, entry: int) -> int:
    """Edge where a gem entering *tile* at *entry* leaves it."""
    for pair in tile_connectivity(tile):
        if entry in pair:
            (other,) = pair - {entry}
            return other
    raise ValueError(f"Edge {entry} is not connected on {tile.tile_type.value}")


def rotate(tile: RouteTile, steps: int) -> RouteTile:
    """Return a copy of *tile* turned by *steps* 60-degree steps."""
    return tile.with_rotation(tile.rotation + steps)


def all_rotations(tile: RouteTile) -> list[RouteTile]:
    """All six orientations of *tile*, rotation 0 to 5 in order."""
    return [tile.with_rotation(rotation) for rotation in range(6)]


def get_tile_total() -> int:
    return sum(TILE_COUNTS.values())


def build_draw_stack(rng: random.Random | None = None) -> list[RouteTile]:
    """Build the full stack of route tiles, shuffled when *rng* is given."""
    stack = [
        RouteTile(tile_type=tile_type)
        for tile_type, count in TILE_COUNTS.items()
        for _ in range(count)
    ]
    if rng is not None:
        rng.shuffle(stack)
    return stack
