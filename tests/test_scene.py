import numpy as np
import pytest

from tileray.config import SceneConfig
from tileray.constants import TILE_COLORS, TileKind
from tileray.scene import Scene
from tileray.world.tracer import Point


def _scene(walls=(), start=(0.5, 0.5), end=(5.5, 0.5), grid_size=10) -> Scene:
    config = SceneConfig(
        tile_size=40.0,
        grid_size=grid_size,
        start=Point(*start),
        end=Point(*end),
        walls=list(walls),
    )
    return Scene(config)


def test_to_grid_divides_by_tile_size():
    scene = _scene()
    assert scene.to_grid(-148.0, 84.0) == Point(-3.7, 2.1)


def test_move_endpoints_uses_pixels():
    scene = _scene()
    scene.move_start(20.0, 20.0)
    scene.move_end(-60.0, 20.0)
    assert scene.start == Point(0.5, 0.5)
    assert scene.end == Point(-1.5, 0.5)
    result = scene.update()
    assert result.path == ((0, 0), (-1, 0), (-2, 0))
    assert scene.last_result is result


def test_stroke_paints_walls_when_pressed_on_empty():
    scene = _scene()
    scene.begin_stroke(10.0, 10.0)
    scene.continue_stroke(50.0, 10.0)
    scene.continue_stroke(90.0, 10.0)
    scene.end_stroke()
    scene.continue_stroke(130.0, 10.0)  # after release: ignored
    assert sorted(scene.grid.walls()) == [(0, 0), (1, 0), (2, 0)]
    assert not scene.stroke_active


def test_stroke_clears_walls_when_pressed_on_wall():
    scene = _scene(walls=[(1, 0), (2, 0), (-1, -1)])
    scene.begin_stroke(50.0, 10.0)
    assert scene.stroke_active
    scene.continue_stroke(90.0, 10.0)
    scene.continue_stroke(130.0, 10.0)  # empty tile stays empty
    scene.end_stroke()
    assert scene.grid.walls() == [(-1, -1)]
    assert not scene.grid.is_wall(3, 0)


def test_stroke_on_collided_wall_clears_it():
    scene = _scene(walls=[(3, 0)])
    scene.update()
    assert scene.grid.get(3, 0).kind is TileKind.WALL_COLLIDE
    scene.begin_stroke(130.0, 10.0)
    scene.end_stroke()
    assert not scene.grid.is_wall(3, 0)
    assert scene.update().connected


def test_view_bounds_centered_on_origin():
    assert _scene(grid_size=10).view_bounds() == (-5, -5, 4, 4)
    assert _scene(grid_size=5).view_bounds() == (-2, -2, 2, 2)


def test_kind_and_color_arrays():
    scene = _scene(walls=[(3, 0)], grid_size=10)
    scene.update()
    kinds = scene.kind_array()
    assert kinds.shape == (10, 10)
    # Tile (x, y) sits at [y + 5, x + 5]
    assert kinds[5, 8] == TileKind.WALL_COLLIDE
    assert kinds[5, 7] == TileKind.EMPTY_LAST_COLLIDE
    assert kinds[0, 0] == TileKind.EMPTY

    colors = scene.color_array()
    assert colors.shape == (10, 10, 3)
    assert colors.dtype == np.uint8
    assert tuple(colors[5, 8]) == TILE_COLORS[TileKind.WALL_COLLIDE]
    assert tuple(colors[0, 0]) == TILE_COLORS[TileKind.EMPTY]


def test_render_text_marks_trace():
    scene = _scene(end=(3.5, 0.5))
    scene.update()
    text = scene.render_text((0, 0, 4, 0))
    lines = text.splitlines()
    assert len(lines) == 2
    assert lines[1] == "  0| S  +  = [E] . "


def test_segment_bounds():
    scene = _scene(start=(-3.7, -0.7), end=(3.5, 2.1))
    assert scene.segment_bounds(margin=1) == (-5, -2, 4, 3)


def test_default_scene_uses_demo_endpoints():
    scene = Scene()
    assert scene.start == Point(-3.7, -0.7)
    assert scene.end == Point(3.5, 2.1)
    assert len(scene.grid) == 0


def test_drag_keeps_grab_offset():
    scene = _scene(start=(0.5, 0.5), end=(5.5, 0.5))
    # Grab the start handle 10px right of and 5px below its centre
    scene.begin_drag("start", 30.0, 25.0)
    scene.drag(70.0, 25.0)
    assert scene.start == Point(1.5, 0.5)
    scene.drag(30.0, -15.0)
    assert scene.start == Point(0.5, -0.5)
    scene.end_drag()
    scene.drag(500.0, 500.0)  # after release: ignored
    assert scene.start == Point(0.5, -0.5)
    assert scene.end == Point(5.5, 0.5)


def test_drag_end_handle_and_reject_unknown():
    scene = _scene(end=(2.0, 2.0))
    scene.begin_drag("end", 80.0, 80.0)
    scene.drag(40.0, 120.0)
    assert scene.end == Point(1.0, 3.0)
    with pytest.raises(ValueError):
        scene.begin_drag("middle", 0.0, 0.0)
