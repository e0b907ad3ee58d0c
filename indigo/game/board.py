"""Board logic: placement validation, tile placement and gem movement.

A placement never mutates the state it is given. ``place_tile`` works on a
clone and returns it inside an ``Accepted`` result, or returns ``Rejected``
without having touched anything.
"""

from __future__ import annotations

import logging

from indigo.engine.errors import EmptyDrawStackError, InconsistentStateError
from indigo.engine.models import (
    Accepted,
    GameState,
    GemEvent,
    GemOutcome,
    Move,
    PlacementResult,
    Rejected,
    RejectionReason,
)
from indigo.game.hexes import is_open_position, neighbor, opposite
from indigo.game.tiles import exit_edge
from indigo.game.types import AxialPos, GatewayTile, Gem, RouteTile, TreasureTile

logger = logging.getLogger(__name__)


def _rejection(state: GameState, pos: AxialPos) -> tuple[RejectionReason, str] | None:
    player = state.player_at_turn
    if player is None:
        return RejectionReason.NO_PLAYERS, "No player is at turn"
    if player.held_tile is None:
        return RejectionReason.NO_HELD_TILE, f"Player {player.name} holds no tile"
    if not is_open_position(pos):
        return RejectionReason.NOT_OPEN, f"Position {pos.to_key()} is not an open cell"
    if pos in state.board:
        return RejectionReason.OCCUPIED, f"Position {pos.to_key()} is already occupied"
    return None


def validate_placement(state: GameState, pos: AxialPos) -> str | None:
    """Validate placing the held tile at *pos*. Return error message or None."""
    rejection = _rejection(state, pos)
    return rejection[1] if rejection else None


def check_placement(state: GameState, pos: AxialPos) -> bool:
    """True iff the player at turn may put their tile on *pos*.

    Any rotation is legal; edges do not have to match their neighbours.
    """
    return _rejection(state, pos) is None


def draw_tile(state: GameState) -> RouteTile:
    """Take the front tile of the draw stack."""
    if not state.draw_stack:
        raise EmptyDrawStackError("Draw stack is empty")
    return state.draw_stack.pop(0)


def place_tile(state: GameState, pos: AxialPos) -> PlacementResult:
    """Place the held tile of the player at turn on *pos*.

    The tile keeps the rotation it currently has. Gems next to the new tile
    are moved, the placing player draws a replacement and the turn passes to
    the next player.
    """
    rejection = _rejection(state, pos)
    if rejection is not None:
        reason, message = rejection
        logger.debug("Placement rejected at %s: %s", pos.to_key(), message)
        return Rejected(reason=reason, message=message)

    new_state = state.clone()
    player = new_state.players[0]
    tile = player.held_tile
    player.held_tile = None
    new_state.board[pos] = tile
    move = Move(position=pos, rotation=tile.rotation)

    events = propagate_gems(new_state, pos)

    try:
        player.held_tile = draw_tile(new_state)
    except EmptyDrawStackError:
        logger.warning("Draw stack empty, %s continues without a tile", player.name)

    new_state.players.append(new_state.players.pop(0))

    logger.debug(
        "%s placed %s rotation %d at %s (%d gem movements)",
        player.name, tile.tile_type.value, tile.rotation, pos.to_key(), len(events),
    )
    return Accepted(state=new_state, move=move, events=events)


# ------------------------------------------------------------------ #
#  Gem propagation
# ------------------------------------------------------------------ #

def _pending_gems(state: GameState, pos: AxialPos) -> list[tuple[AxialPos, int]]:
    """Neighbours of *pos* with a gem waiting at the shared edge.

    Returns ``(neighbour, direction from pos)`` in ascending coordinate order.
    """
    pending: list[tuple[AxialPos, int]] = []
    for direction in range(6):
        other = neighbor(pos, direction)
        tile = state.board.get(other)
        back = opposite(direction)
        if isinstance(tile, RouteTile) and back in tile.gems:
            pending.append((other, direction))
        elif isinstance(tile, TreasureTile) and tile.gems and back in tile.exits:
            pending.append((other, direction))
    pending.sort(key=lambda item: item[0].sort_key())
    return pending


def _take_gem(state: GameState, source: AxialPos, direction: int) -> Gem | None:
    tile = state.board[source]
    back = opposite(direction)
    if isinstance(tile, RouteTile):
        return tile.gems.pop(back, None)
    if isinstance(tile, TreasureTile) and tile.gems:
        return tile.gems.pop()
    return None


def propagate_gems(state: GameState, pos: AxialPos) -> list[GemEvent]:
    """Move every gem waiting next to the tile just placed at *pos*.

    Gems are collected before any of them moves, then resolved one after
    the other. A gem removed by an earlier collision is skipped.
    """
    events: list[GemEvent] = []
    for source, direction in _pending_gems(state, pos):
        gem = _take_gem(state, source, direction)
        if gem is None:
            continue
        events.append(move_gem(state, gem, source, pos, direction))
    return events


def move_gem(
    state: GameState,
    gem: Gem,
    start: AxialPos,
    pos: AxialPos,
    entry: int,
) -> GemEvent:
    """Run *gem* along the path entering *pos* at edge *entry*.

    The gem keeps moving through placed route tiles until it reaches a
    gateway, leaves the board, or stops in front of an empty cell or a
    treasure tile. Meeting another gem on the way, whether that gem is
    waiting at the edge the moving one enters or resting where it would
    stop, takes both gems out of play.
    """
    visited: set[tuple[AxialPos, int]] = set()
    while True:
        tile = state.board.get(pos)
        if not isinstance(tile, RouteTile):
            raise InconsistentStateError(
                f"Gem path entered {pos.to_key()}, which holds no route tile"
            )
        if entry in tile.gems:
            return _collide(state, gem, start, pos, tile, entry)

        exit_ = exit_edge(tile, entry)
        target = neighbor(pos, exit_)
        occupant = state.board.get(target)

        if isinstance(occupant, GatewayTile):
            return _enter_gateway(state, gem, start, target, occupant)

        if isinstance(occupant, RouteTile) and (target, opposite(exit_)) not in visited:
            visited.add((pos, entry))
            pos, entry = target, opposite(exit_)
            continue

        if occupant is None and not is_open_position(target):
            state.gem_pool.append(gem)
            logger.debug("%s lost off the board at %s", gem.value, pos.to_key())
            return GemEvent(gem=gem, outcome=GemOutcome.LOST, start=start, end=pos)

        if exit_ in tile.gems:
            return _collide(state, gem, start, pos, tile, exit_)

        tile.gems[exit_] = gem
        return GemEvent(gem=gem, outcome=GemOutcome.RESTED, start=start, end=pos)


def _collide(
    state: GameState,
    gem: Gem,
    start: AxialPos,
    pos: AxialPos,
    tile: RouteTile,
    edge: int,
) -> GemEvent:
    """Both gems leave play: the moving one first, then the one it hit."""
    resting = tile.gems.pop(edge)
    state.gem_pool.extend([gem, resting])
    logger.debug("%s collided with %s at %s", gem.value, resting.value, pos.to_key())
    return GemEvent(gem=gem, outcome=GemOutcome.COLLIDED, start=start, end=pos)


def _enter_gateway(
    state: GameState,
    gem: Gem,
    start: AxialPos,
    target: AxialPos,
    gateway: GatewayTile,
) -> GemEvent:
    player = None
    if len(gateway.owners) == 1:
        player = state.find_player(gateway.owners[0])

    # Shared gates and gates without a seated owner keep the gem.
    if player is None:
        gateway.gems.append(gem)
        return GemEvent(
            gem=gem, outcome=GemOutcome.SHARED, start=start, end=target,
            owners=list(gateway.owners),
        )
    player.captured.append(gem)
    logger.debug("%s captured %s at gate %d", player.name, gem.value, gateway.gate)
    return GemEvent(
        gem=gem, outcome=GemOutcome.CAPTURED, start=start, end=target,
        color=player.color, owners=[player.color],
    )
