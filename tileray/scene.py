# tileray/scene.py
"""Caller-side state around the tracer: endpoints, wall brush and views.

A :class:`Scene` owns the :class:`TileGrid` and the two endpoints, turns
pointer input (pixels) into grid edits, and runs one trace per frame. It
produces plain data for a renderer (kind/colour arrays, a text view) but
draws nothing itself.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
import structlog

from tileray.config import SceneConfig
from tileray.constants import TILE_COLORS, TILE_GLYPHS, TileKind
from tileray.world.tile_grid import TileGrid
from tileray.world.tracer import GridRayTracer, Point, TraceResult

log = structlog.get_logger()

Bounds = tuple[int, int, int, int]  # x_min, y_min, x_max, y_max (inclusive)

# Lookup table: TileKind code -> RGB
_PALETTE = np.zeros((len(TileKind), 3), dtype=np.uint8)
for _kind, _color in TILE_COLORS.items():
    _PALETTE[_kind] = _color


class Scene:
    def __init__(self, config: Optional[SceneConfig] = None):
        self.config = config if config is not None else SceneConfig()
        self.tile_size = self.config.tile_size
        self.grid_size = self.config.grid_size
        self.grid = TileGrid(self.config.walls)
        self.tracer = GridRayTracer()
        self.start = Point(*self.config.start)
        self.end = Point(*self.config.end)
        self.last_result: Optional[TraceResult] = None
        # None while no stroke is active, else whether the stroke clears walls
        self._stroke_clearing: Optional[bool] = None
        # (handle, handle px, handle py, press px, press py) while dragging
        self._drag: Optional[tuple[str, float, float, float, float]] = None
        log.info(
            "Scene initialized",
            walls=len(self.grid.walls()),
            tile_size=self.tile_size,
            grid_size=self.grid_size,
        )

    # --- Input ---
    def to_grid(self, px: float, py: float) -> Point:
        """Convert pixel coordinates to continuous tile units."""
        return Point(px / self.tile_size, py / self.tile_size)

    def _tile_at(self, px: float, py: float) -> tuple[int, int]:
        point = self.to_grid(px, py)
        return math.floor(point.x), math.floor(point.y)

    def move_start(self, px: float, py: float) -> None:
        self.start = self.to_grid(px, py)

    def move_end(self, px: float, py: float) -> None:
        self.end = self.to_grid(px, py)

    def begin_drag(self, handle: str, px: float, py: float) -> None:
        """Grab the ``"start"`` or ``"end"`` handle at pointer ``(px, py)``.

        The handle keeps its offset from the pointer while dragged, so
        grabbing it off-centre does not make it jump.
        """
        if handle not in ("start", "end"):
            raise ValueError(f"Unknown drag handle: {handle!r}")
        point = getattr(self, handle)
        self._drag = (
            handle,
            point.x * self.tile_size,
            point.y * self.tile_size,
            px,
            py,
        )

    def drag(self, px: float, py: float) -> None:
        if self._drag is None:
            return
        handle, origin_x, origin_y, press_x, press_y = self._drag
        new_point = self.to_grid(origin_x + px - press_x, origin_y + py - press_y)
        setattr(self, handle, new_point)

    def end_drag(self) -> None:
        self._drag = None

    def begin_stroke(self, px: float, py: float) -> None:
        """Press on the grid: clear walls if the pressed tile is one, else paint."""
        x, y = self._tile_at(px, py)
        self._stroke_clearing = self.grid.is_wall(x, y)
        log.debug("Wall stroke started", tile=(x, y), clearing=self._stroke_clearing)
        self.continue_stroke(px, py)

    def continue_stroke(self, px: float, py: float) -> None:
        if self._stroke_clearing is None:
            return
        x, y = self._tile_at(px, py)
        if self._stroke_clearing:
            if self.grid.is_wall(x, y):
                self.grid.set(x, y, TileKind.EMPTY)
        else:
            self.grid.set(x, y, TileKind.WALL)

    def end_stroke(self) -> None:
        self._stroke_clearing = None

    @property
    def stroke_active(self) -> bool:
        return self._stroke_clearing is not None

    # --- Frame ---
    def update(self) -> TraceResult:
        """Run this frame's trace between the current endpoints."""
        self.last_result = self.tracer.trace(self.grid, self.start, self.end)
        return self.last_result

    # --- Views ---
    def view_bounds(self) -> Bounds:
        half = self.grid_size // 2
        return -half, -half, self.grid_size - half - 1, self.grid_size - half - 1

    def kind_array(self, bounds: Optional[Bounds] = None) -> np.ndarray:
        x_min, y_min, x_max, y_max = bounds or self.view_bounds()
        return self.grid.to_array(x_min, y_min, x_max - x_min + 1, y_max - y_min + 1)

    def color_array(self, bounds: Optional[Bounds] = None) -> np.ndarray:
        """RGB image (``[y, x, 3]``, ``uint8``) of the tile kinds."""
        return _PALETTE[self.kind_array(bounds)]

    def render_text(self, bounds: Optional[Bounds] = None) -> str:
        """ASCII view of the grid; ``S`` marks the start tile, ``[]`` the end tile."""
        x_min, y_min, x_max, y_max = bounds or self.view_bounds()
        kinds = self.kind_array((x_min, y_min, x_max, y_max))
        start_tile = (math.floor(self.start.x), math.floor(self.start.y))
        end_tile = (math.floor(self.end.x), math.floor(self.end.y))

        header = "    " + "".join(f"{x:>3}" for x in range(x_min, x_max + 1))
        lines = [header]
        for row, y in enumerate(range(y_min, y_max + 1)):
            row_str = f"{y:>3}|"
            for col, x in enumerate(range(x_min, x_max + 1)):
                char = TILE_GLYPHS[TileKind(int(kinds[row, col]))]
                if (x, y) == start_tile:
                    char = "S"
                if (x, y) == end_tile:
                    row_str += f"[{char}]"
                else:
                    row_str += f" {char} "
            lines.append(row_str)
        return "\n".join(lines)

    def segment_bounds(self, margin: int = 2) -> Bounds:
        """Bounds covering both endpoints plus ``margin`` tiles."""
        xs = (math.floor(self.start.x), math.floor(self.end.x))
        ys = (math.floor(self.start.y), math.floor(self.end.y))
        return (
            min(xs) - margin,
            min(ys) - margin,
            max(xs) + margin,
            max(ys) + margin,
        )


__all__ = ["Scene", "Bounds"]
