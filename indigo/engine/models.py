from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from indigo.engine.errors import InvalidPlacementError
from indigo.game.types import AxialPos, Color, Gem, RouteTile, Tile

# --- AI policy ---
class AIPolicy(str, Enum):
    RANDOM = "random"
    SMART = "smart"

# --- Player ---
class Player(BaseModel):
    name: str
    color: Color
    held_tile: RouteTile | None = None
    captured: list[Gem] = Field(default_factory=list)
    is_ai: bool = False
    smart_ai: bool = False

    @property
    def policy(self) -> AIPolicy | None:
        if not self.is_ai:
            return None
        return AIPolicy.SMART if self.smart_ai else AIPolicy.RANDOM

# --- Game State ---
class GameState(BaseModel):
    """Full snapshot of a game. ``players[0]`` is the player at turn."""

    board: dict[AxialPos, Tile] = Field(default_factory=dict)
    draw_stack: list[RouteTile] = Field(default_factory=list)
    players: list[Player] = Field(default_factory=list)
    gem_pool: list[Gem] = Field(default_factory=list)  # gems out of play

    @field_validator("board", mode="before")
    @classmethod
    def _parse_board_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                AxialPos.from_key(k) if isinstance(k, str) else k: v
                for k, v in value.items()
            }
        return value

    @field_serializer("board")
    def _serialize_board(self, board: dict[AxialPos, Tile]) -> dict[str, Tile]:
        return {pos.to_key(): tile for pos, tile in board.items()}

    @property
    def player_at_turn(self) -> Player | None:
        return self.players[0] if self.players else None

    def find_player(self, color: Color) -> Player | None:
        for player in self.players:
            if player.color == color:
                return player
        return None

    def clone(self) -> GameState:
        """Deep copy; nothing is shared with the source."""
        return self.model_copy(deep=True)

# --- Moves ---
class Move(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: AxialPos
    rotation: int = Field(ge=0, le=5)

# --- Gem movement ---
class GemOutcome(str, Enum):
    CAPTURED = "captured"      # taken by the single owner of a gate
    SHARED = "shared"          # held on a shared gate
    RESTED = "rested"          # stopped at a dead end
    COLLIDED = "collided"      # met a resting gem, both out of play
    LOST = "lost"              # left the board

class GemEvent(BaseModel):
    gem: Gem
    outcome: GemOutcome
    start: AxialPos
    end: AxialPos
    color: Color | None = None
    owners: list[Color] = Field(default_factory=list)

# --- Placement result ---
class RejectionReason(str, Enum):
    NO_PLAYERS = "no_players"
    NO_HELD_TILE = "no_held_tile"
    NOT_OPEN = "not_open"
    OCCUPIED = "occupied"

class Accepted(BaseModel):
    status: Literal["accepted"] = "accepted"
    state: GameState
    move: Move
    events: list[GemEvent] = Field(default_factory=list)

    def unwrap(self) -> GameState:
        return self.state

class Rejected(BaseModel):
    status: Literal["rejected"] = "rejected"
    reason: RejectionReason
    message: str

    def unwrap(self) -> GameState:
        raise InvalidPlacementError(self.message, reason=self.reason)

PlacementResult = Union[Accepted, Rejected]
