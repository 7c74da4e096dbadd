import numpy as np
import pytest

from tileray.constants import TileKind, TraceTag
from tileray.world.tile_grid import Tile, TileGrid


def test_untouched_coordinate_reads_empty_without_storing():
    grid = TileGrid()
    tile = grid.get(-12, 40)
    assert tile.kind is TileKind.EMPTY
    assert (tile.x, tile.y) == (-12, 40)
    assert len(grid) == 0
    assert grid.all() == []


def test_set_empty_on_absent_coordinate_is_noop():
    grid = TileGrid()
    grid.set(3, 3, TileKind.EMPTY)
    assert (3, 3) not in grid
    assert len(grid) == 0


def test_set_overwrites_in_place():
    grid = TileGrid()
    grid.set(1, -1, TileKind.WALL)
    first = grid.get(1, -1)
    grid.set(1, -1, TileKind.EMPTY)
    assert len(grid) == 1
    assert grid.get(1, -1) is first
    assert first.kind is TileKind.EMPTY
    assert not grid.is_wall(1, -1)


def test_kinds_map_to_wall_flag_and_tag():
    grid = TileGrid()
    grid.set(0, 0, TileKind.WALL_COLLIDE)
    grid.set(1, 0, TileKind.CONNECT_LAST)
    wall = grid.get(0, 0)
    empty = grid.get(1, 0)
    assert wall.is_wall and wall.tag is TraceTag.COLLIDE
    assert not empty.is_wall and empty.tag is TraceTag.CONNECT_LAST


def test_every_kind_round_trips_through_storage():
    grid = TileGrid()
    for i, kind in enumerate(TileKind):
        grid.set(i, 0, kind)
    stored = {tile.x: tile.kind for tile in grid.all()}
    # EMPTY on an absent coordinate is never stored
    assert TileKind.EMPTY not in stored.values()
    for i, kind in enumerate(TileKind):
        assert grid.get(i, 0).kind is kind


def test_set_rejects_unknown_kind():
    grid = TileGrid()
    with pytest.raises(ValueError):
        grid.set(0, 0, 99)


def test_initial_walls_and_queries():
    grid = TileGrid(walls=[(0, 0), (-5, 2), (100000, -100000)])
    assert sorted(grid.walls()) == [(-5, 2), (0, 0), (100000, -100000)]
    assert grid.is_wall(100000, -100000)
    assert not grid.is_wall(1, 1)
    assert all(isinstance(tile, Tile) for tile in grid)


def test_all_is_restartable():
    grid = TileGrid(walls=[(0, 0), (1, 1)])
    assert len(grid.all()) == len(grid.all()) == 2


def test_to_array_window():
    grid = TileGrid(walls=[(-1, -1), (1, 0)])
    grid.set(0, 0, TileKind.CONNECT_END)
    grid.set(5, 5, TileKind.WALL)  # outside the window
    kinds = grid.to_array(-1, -1, 3, 2)
    expected = np.array(
        [
            [TileKind.WALL, TileKind.EMPTY, TileKind.EMPTY],
            [TileKind.EMPTY, TileKind.CONNECT_END, TileKind.WALL],
        ],
        dtype=np.uint8,
    )
    assert kinds.dtype == np.uint8
    assert np.array_equal(kinds, expected)


def test_to_array_rejects_empty_window():
    with pytest.raises(ValueError):
        TileGrid().to_array(0, 0, 0, 3)
