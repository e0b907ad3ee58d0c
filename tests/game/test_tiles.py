"""Unit tests for the route tile catalog and rotations."""

import random

import pytest

from indigo.game.hexes import all_open_positions
from indigo.game.tiles import (
    TILE_CONNECTIVITY,
    TILE_COUNTS,
    all_rotations,
    build_draw_stack,
    connectivity,
    exit_edge,
    get_tile_total,
    rotate,
    tile_connectivity,
)
from indigo.game.types import RouteTile, TileType


class TestTileCatalog:
    """Tests for the tile catalog data."""

    def test_catalog_has_5_tile_types(self):
        assert set(TILE_CONNECTIVITY) == set(TileType)
        assert set(TILE_COUNTS) == set(TileType)

    def test_total_tile_count_fills_the_board(self):
        """There is exactly one route tile per open cell."""
        assert get_tile_total() == 54
        assert get_tile_total() == len(all_open_positions())

    def test_every_edge_connected_exactly_once(self):
        for tile_type, pairs in TILE_CONNECTIVITY.items():
            edges = sorted(e for pair in pairs for e in pair)
            assert edges == list(range(6)), tile_type

    def test_pairs_join_two_distinct_edges(self):
        for pairs in TILE_CONNECTIVITY.values():
            assert len(pairs) == 3
            assert all(len(pair) == 2 for pair in pairs)


class TestRotation:
    def test_rotation_shifts_edges(self):
        rotated = connectivity(TileType.TILE0, 1)
        assert rotated == {frozenset({1, 4}), frozenset({2, 3}), frozenset({5, 0})}

    def test_full_turn_is_identity(self):
        for tile_type in TileType:
            assert connectivity(tile_type, 6) == connectivity(tile_type, 0)

    def test_rotate_returns_new_tile(self):
        tile = RouteTile(tile_type=TileType.TILE3)
        turned = rotate(tile, 2)
        assert turned.rotation == 2
        assert tile.rotation == 0

    def test_rotate_wraps(self):
        tile = RouteTile(tile_type=TileType.TILE1, rotation=5)
        assert rotate(tile, 3).rotation == 2
        assert rotate(tile, -5).rotation == 0

    def test_tile_connectivity_uses_rotation(self):
        tile = RouteTile(tile_type=TileType.TILE4, rotation=3)
        assert tile_connectivity(tile) == connectivity(TileType.TILE4, 3)


class TestAllRotations:
    @pytest.mark.parametrize("tile_type", list(TileType))
    def test_six_rotations_in_order(self, tile_type):
        rotations = all_rotations(RouteTile(tile_type=tile_type, rotation=4))
        assert [t.rotation for t in rotations] == [0, 1, 2, 3, 4, 5]
        assert all(t.tile_type == tile_type for t in rotations)

    def test_symmetric_tile_keeps_duplicates(self):
        """TILE2 looks the same every two steps but all six are listed."""
        rotations = all_rotations(RouteTile(tile_type=TileType.TILE2))
        assert len(rotations) == 6
        assert tile_connectivity(rotations[0]) == tile_connectivity(rotations[1])

    def test_each_rotation_is_shifted_connectivity(self):
        base = TILE_CONNECTIVITY[TileType.TILE1]
        for tile in all_rotations(RouteTile(tile_type=TileType.TILE1)):
            expected = {
                frozenset((e + tile.rotation) % 6 for e in pair) for pair in base
            }
            assert tile_connectivity(tile) == expected


class TestExitEdge:
    def test_straight(self):
        tile = RouteTile(tile_type=TileType.TILE2)
        assert exit_edge(tile, 4) == 1
        assert exit_edge(tile, 0) == 3

    def test_curve_after_rotation(self):
        tile = RouteTile(tile_type=TileType.TILE3, rotation=1)
        assert exit_edge(tile, 1) == 2

    def test_exit_is_symmetric(self):
        for tile_type in TileType:
            for tile in all_rotations(RouteTile(tile_type=tile_type)):
                for edge in range(6):
                    assert exit_edge(tile, exit_edge(tile, edge)) == edge


class TestDrawStack:
    def test_stack_has_all_tiles(self):
        stack = build_draw_stack()
        assert len(stack) == 54
        for tile_type, count in TILE_COUNTS.items():
            assert sum(t.tile_type == tile_type for t in stack) == count

    def test_shuffle_is_seeded(self):
        a = build_draw_stack(random.Random(7))
        b = build_draw_stack(random.Random(7))
        assert a == b
        assert a != build_draw_stack()

    def test_tiles_start_unrotated(self):
        assert all(t.rotation == 0 and not t.gems for t in build_draw_stack())
