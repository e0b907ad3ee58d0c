"""Domain models for Indigo: coordinates, gems, colours and board tiles."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Gem(str, Enum):
    AMBER = "amber"
    EMERALD = "emerald"
    SAPPHIRE = "sapphire"

    @property
    def value_points(self) -> int:
        return GEM_VALUES[self]


GEM_VALUES: dict[Gem, int] = {Gem.AMBER: 1, Gem.EMERALD: 2, Gem.SAPPHIRE: 3}


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"
    WHITE = "white"
    PURPLE = "purple"


class TileType(str, Enum):
    TILE0 = "TILE0"
    TILE1 = "TILE1"
    TILE2 = "TILE2"
    TILE3 = "TILE3"
    TILE4 = "TILE4"


# Axial unit vectors in rotational order. Edge d of a cell faces the
# neighbour in direction d; the opposite edge is (d + 3) % 6.
HEX_DIRECTIONS: list[tuple[int, int]] = [
    (1, -1), (1, 0), (0, 1), (-1, 1), (-1, 0), (0, -1),
]


class AxialPos(BaseModel):
    model_config = ConfigDict(frozen=True)

    q: int
    r: int

    def to_key(self) -> str:
        return f"{self.q},{self.r}"

    @staticmethod
    def from_key(key: str) -> AxialPos:
        q, r = key.split(",")
        return AxialPos(q=int(q), r=int(r))

    def sort_key(self) -> tuple[int, int]:
        return (self.q, self.r)

    def __repr__(self) -> str:
        return f"AxialPos({self.q}, {self.r})"


class RouteTile(BaseModel):
    """A drawable tile; ``gems`` maps an absolute edge to the gem resting there."""

    kind: Literal["route"] = "route"
    tile_type: TileType
    rotation: int = Field(default=0, ge=0, le=5)
    gems: dict[int, Gem] = Field(default_factory=dict)

    def with_rotation(self, rotation: int) -> RouteTile:
        return self.model_copy(update={"rotation": rotation % 6}, deep=True)

    def same_placement(self, other: RouteTile) -> bool:
        return self.tile_type == other.tile_type and self.rotation == other.rotation


class TreasureTile(BaseModel):
    """Fixed gem source. Gems leave from the end of ``gems`` through ``exits``."""

    kind: Literal["treasure"] = "treasure"
    exits: list[int] = Field(default_factory=list)
    gems: list[Gem] = Field(default_factory=list)


class GatewayTile(BaseModel):
    """Fixed scoring tile on one of the six sides of the board.

    Gems reaching a gate with a single owner go to that player. A shared
    gate keeps its gems in ``gems``; they count for every owner.
    """

    kind: Literal["gateway"] = "gateway"
    gate: int = Field(ge=0, le=5)
    owners: list[Color] = Field(default_factory=list)
    gems: list[Gem] = Field(default_factory=list)

    @property
    def is_shared(self) -> bool:
        return len(self.owners) > 1


Tile = Annotated[
    Union[RouteTile, TreasureTile, GatewayTile],
    Field(discriminator="kind"),
]
