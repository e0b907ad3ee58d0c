"""Hex geometry and the fixed Indigo board layout.

The playing area is a hexagon of radius 4 around ``(0, 0)``. The centre and
the six corners hold treasure tiles; the remaining 54 cells are open for
route tiles. The gateways sit just outside the playing area: the 24
non-corner cells of ring 5, four per side.
"""

from __future__ import annotations

from indigo.game.types import (
    HEX_DIRECTIONS,
    AxialPos,
    Color,
    Gem,
    GatewayTile,
    TreasureTile,
)

BOARD_RADIUS = 4

CENTER = AxialPos(q=0, r=0)

CORNERS: list[AxialPos] = [
    AxialPos(q=dq * BOARD_RADIUS, r=dr * BOARD_RADIUS) for dq, dr in HEX_DIRECTIONS
]

TREASURE_POSITIONS: frozenset[AxialPos] = frozenset([CENTER, *CORNERS])


def neighbor(pos: AxialPos, direction: int) -> AxialPos:
    """Return the cell across edge *direction* of *pos*."""
    dq, dr = HEX_DIRECTIONS[direction % 6]
    return AxialPos(q=pos.q + dq, r=pos.r + dr)


def opposite(direction: int) -> int:
    return (direction + 3) % 6


def distance(pos: AxialPos) -> int:
    """Hex distance from the centre of the board."""
    return max(abs(pos.q), abs(pos.r), abs(pos.q + pos.r))


def is_on_board(pos: AxialPos) -> bool:
    return distance(pos) <= BOARD_RADIUS


def is_open_position(pos: AxialPos) -> bool:
    """True for interior cells that can take a route tile."""
    return is_on_board(pos) and pos not in TREASURE_POSITIONS


def _build_open_positions() -> frozenset[AxialPos]:
    cells = (
        AxialPos(q=q, r=r)
        for q in range(-BOARD_RADIUS, BOARD_RADIUS + 1)
        for r in range(-BOARD_RADIUS, BOARD_RADIUS + 1)
    )
    return frozenset(p for p in cells if is_open_position(p))


_OPEN_POSITIONS = _build_open_positions()


def all_open_positions() -> frozenset[AxialPos]:
    return _OPEN_POSITIONS


# --- Gateways ---

def gate_of(pos: AxialPos) -> int | None:
    """Side number (0-5) of a gateway cell, or None if *pos* is not one.

    Sides are numbered in the same rotational order as the directions:
    side 0 lies between the corners in direction 5 and direction 0.
    """
    ring = BOARD_RADIUS + 1
    s = -pos.q - pos.r
    on_side = [
        pos.r == -ring,
        pos.q == ring,
        s == -ring,
        pos.r == ring,
        pos.q == -ring,
        s == ring,
    ]
    if distance(pos) != ring or on_side.count(True) != 1:
        return None
    return on_side.index(True)


def _build_gateway_positions() -> dict[AxialPos, int]:
    ring = BOARD_RADIUS + 1
    gates: dict[AxialPos, int] = {}
    for q in range(-ring, ring + 1):
        for r in range(-ring, ring + 1):
            pos = AxialPos(q=q, r=r)
            gate = gate_of(pos)
            if gate is not None:
                gates[pos] = gate
    return gates


GATEWAY_POSITIONS: dict[AxialPos, int] = _build_gateway_positions()


def gate_owners(colors: list[Color], shared_gates: bool) -> dict[int, list[Color]]:
    """Assign the six gates to players.

    Two players alternate gates. Three players own two opposite gates
    each, or with *shared_gates* one exclusive gate and two shared ones.
    With four players every gate is shared by two players.
    """
    n = len(colors)
    if n == 2:
        return {g: [colors[g % 2]] for g in range(6)}
    if n == 3 and not shared_gates:
        return {g: [colors[g % 3]] for g in range(6)}
    if n == 3:
        owners: dict[int, list[Color]] = {}
        for g in range(6):
            first = colors[(g // 2) % 3]
            if g % 2 == 0:
                owners[g] = [first]
            else:
                owners[g] = [first, colors[(g // 2 + 1) % 3]]
        return owners
    if n == 4:
        pairs = [(0, 1), (2, 3), (0, 2), (1, 3), (0, 3), (1, 2)]
        return {g: [colors[a], colors[b]] for g, (a, b) in enumerate(pairs)}
    raise ValueError(f"Unsupported player count: {n}")


def _treasure_exits(pos: AxialPos) -> list[int]:
    return [d for d in range(6) if is_open_position(neighbor(pos, d))]


def build_perimeter(
    colors: list[Color], shared_gates: bool = False,
) -> dict[AxialPos, TreasureTile | GatewayTile]:
    """Create the fixed treasure and gateway tiles for a new game."""
    tiles: dict[AxialPos, TreasureTile | GatewayTile] = {}

    tiles[CENTER] = TreasureTile(
        exits=_treasure_exits(CENTER),
        gems=[Gem.SAPPHIRE] + [Gem.EMERALD] * 5,
    )
    for corner in CORNERS:
        tiles[corner] = TreasureTile(exits=_treasure_exits(corner), gems=[Gem.AMBER])

    owners = gate_owners(colors, shared_gates)
    for pos, gate in GATEWAY_POSITIONS.items():
        tiles[pos] = GatewayTile(gate=gate, owners=list(owners[gate]))

    return tiles
